"""
ContentService: one CRUD implementation for every portfolio content entity.

Takes already-parsed input (entity name, id, payload dict) and returns
models or raises ValidationError / NotFoundError, so any transport can sit
in front of it.
"""

from dataclasses import dataclass
from pydantic import BaseModel, ValidationError as PayloadValidationError
from models.content import (
    Contact,
    ContactUpdate,
    Experience,
    ExperienceCreate,
    Introduction,
    IntroductionUpdate,
    KnowledgeEntry,
    KnowledgeEntryCreate,
    Project,
    ProjectCreate,
    PromptExample,
    PromptExampleCreate,
    Skill,
    SkillCategory,
    SkillCategoryCreate,
    SkillCreate,
)
from services import database as tables
from services.database import DatabaseService
from utils.errors import NotFoundError, ValidationError
from typing import Any, Dict, List, Optional, Type
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntitySpec:
    table: str
    create_model: Type[BaseModel]
    model: Type[BaseModel]
    order_by: tuple = ()
    has_active_flag: bool = False


ENTITIES: Dict[str, EntitySpec] = {
    "training-data": EntitySpec(
        tables.TRAINING_DATA, KnowledgeEntryCreate, KnowledgeEntry,
        order_by=(("timestamp", True),), has_active_flag=True,
    ),
    "projects": EntitySpec(
        tables.PROJECTS, ProjectCreate, Project,
        order_by=(("timestamp", True),),
    ),
    "experiences": EntitySpec(
        tables.EXPERIENCES, ExperienceCreate, Experience,
        order_by=(("timestamp", True),),
    ),
    "prompt-examples": EntitySpec(
        tables.PROMPT_EXAMPLES, PromptExampleCreate, PromptExample,
        order_by=(("display_order", False), ("timestamp", True)), has_active_flag=True,
    ),
    "skill-categories": EntitySpec(
        tables.SKILL_CATEGORIES, SkillCategoryCreate, SkillCategory,
        order_by=(("display_order", False),),
    ),
    "skills": EntitySpec(
        tables.SKILLS, SkillCreate, Skill,
        order_by=(("category_id", False), ("display_order", False)),
    ),
}


class ContentService:
    def __init__(self, db: DatabaseService):
        self.db = db

    # Registry entities
    def list_all(self, entity: str) -> List[BaseModel]:
        spec = self._spec(entity)
        rows = self.db.list_rows(spec.table, order_by=list(spec.order_by))
        return [spec.model(**row) for row in rows]

    def list_active(self, entity: str) -> List[BaseModel]:
        """Active rows for entities with an is_active flag, all rows otherwise"""
        spec = self._spec(entity)
        rows = self.db.list_rows(
            spec.table,
            order_by=list(spec.order_by),
            active_only=spec.has_active_flag,
        )
        return [spec.model(**row) for row in rows]

    def get_by_id(self, entity: str, record_id: int) -> BaseModel:
        spec = self._spec(entity)
        row = self.db.get_row(spec.table, record_id)
        if row is None:
            raise NotFoundError(f"{entity} record {record_id} not found")
        return spec.model(**row)

    def create(self, entity: str, payload: Dict[str, Any]) -> BaseModel:
        spec = self._spec(entity)
        data = self._validate(spec.create_model, payload, entity)
        row = self.db.insert_row(spec.table, data)
        logger.info(f"Created {entity} record {row.get('id')}")
        return spec.model(**row)

    def update(self, entity: str, record_id: int, payload: Dict[str, Any]) -> BaseModel:
        spec = self._spec(entity)
        data = self._validate(spec.create_model, payload, entity)
        row = self.db.update_row(spec.table, record_id, data)
        if row is None:
            raise NotFoundError(f"{entity} record {record_id} not found")
        logger.info(f"Updated {entity} record {record_id}")
        return spec.model(**row)

    def delete(self, entity: str, record_id: int):
        spec = self._spec(entity)
        if entity == "skill-categories":
            deleted = self.db.delete_skill_category(record_id)
        else:
            deleted = self.db.delete_row(spec.table, record_id)
        if not deleted:
            raise NotFoundError(f"{entity} record {record_id} not found")
        logger.info(f"Deleted {entity} record {record_id}")

    # Singletons
    def get_contact(self) -> Optional[Contact]:
        return self.db.get_contact()

    def update_contact(self, payload: Dict[str, Any]) -> Contact:
        data = self._validate(ContactUpdate, payload, "contact")
        return self.db.upsert_contact(data)

    def get_introduction(self) -> Optional[Introduction]:
        return self.db.get_introduction()

    def update_introduction(self, payload: Dict[str, Any]) -> Introduction:
        data = self._validate(IntroductionUpdate, payload, "introduction")
        return self.db.replace_introduction(data)

    @staticmethod
    def _spec(entity: str) -> EntitySpec:
        spec = ENTITIES.get(entity)
        if spec is None:
            raise NotFoundError(f"Unknown content type: {entity}")
        return spec

    @staticmethod
    def _validate(model: Type[BaseModel], payload: Any, entity: str) -> Dict[str, Any]:
        """Validate a payload and return snake_case columns ready for the store"""
        if not isinstance(payload, dict):
            raise ValidationError(f"Invalid {entity} format", details=["Body must be a JSON object"])
        try:
            return model(**payload).model_dump(mode="json")
        except PayloadValidationError as e:
            raise ValidationError(f"Invalid {entity} format", details=e.errors(include_url=False, include_context=False)) from e
