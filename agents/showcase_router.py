from dataclasses import dataclass
from models.chat import ResponseKind, SHOWCASE_MARKERS
from models.content import Experience, Project, ResponseType, SkillCategory
from services.database import DatabaseService
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# Prompt-example response types that short-circuit the composer
SHOWCASE_KINDS = {
    ResponseType.PROJECTS: ResponseKind.PROJECTS,
    ResponseType.EXPERIENCES: ResponseKind.EXPERIENCES,
    ResponseType.CONTACTS: ResponseKind.CONTACTS,
    ResponseType.SKILLS: ResponseKind.SKILLS,
    ResponseType.INTRODUCTION: ResponseKind.INTRODUCTION,
}

# English lead-in sentence and translation context per kind
LEAD_INS = {
    ResponseKind.PROJECTS: ("Here are my projects:", "projects introduction"),
    ResponseKind.EXPERIENCES: ("Here are my work experiences:", "work experience introduction"),
    ResponseKind.CONTACTS: ("Here's how you can contact me:", "contact information introduction"),
    ResponseKind.SKILLS: ("Here are my technical skills and expertise:", "technical skills introduction"),
}


@dataclass
class ShowcaseResult:
    """Structured answer returned verbatim instead of generated text"""
    kind: ResponseKind
    marker: str
    lead_in: Optional[str] = None
    lead_in_context: Optional[str] = None
    projects: Optional[List[Project]] = None
    experiences: Optional[List[Experience]] = None
    contacts: Optional[Dict[str, Any]] = None
    skills: Optional[Dict[str, List[str]]] = None
    skill_categories: Optional[List[SkillCategory]] = None
    introduction: Optional[str] = None


class ShowcaseRouter:
    """
    Decides whether a question is answered with a structured showcase.

    Routing keys off the prompt example id only. A typed question that
    happens to equal an example's text is still a plain question.
    """

    def __init__(self, db: DatabaseService):
        self.db = db

    def route(self, prompt_example_id: Optional[int]) -> Optional[ShowcaseResult]:
        """Return a showcase for the example, or None to hand off to the composer"""
        if prompt_example_id is None:
            return None

        example = self.db.get_prompt_example_by_id(prompt_example_id)
        if example is None:
            logger.info(f"Prompt example {prompt_example_id} not found - answering with AI")
            return None

        kind = SHOWCASE_KINDS.get(example.response_type)
        if kind is None:
            return None

        logger.info(f"Prompt example {prompt_example_id} routed to {kind.value} showcase")

        if kind == ResponseKind.PROJECTS:
            return self._showcase(kind, projects=self.db.get_all_projects())

        if kind == ResponseKind.EXPERIENCES:
            return self._showcase(kind, experiences=self.db.get_all_experiences())

        if kind == ResponseKind.CONTACTS:
            contact = self.db.get_contact()
            contacts = contact.model_dump(exclude={"id"}, exclude_none=True) if contact else {}
            return self._showcase(kind, contacts=contacts)

        if kind == ResponseKind.SKILLS:
            categories = self.db.get_skill_categories()
            return self._showcase(
                kind,
                skills=self._organize_skills(categories),
                skill_categories=categories,
            )

        introduction = self.db.get_introduction()
        if introduction is None:
            logger.info("No active introduction - answering with AI")
            return None
        return ShowcaseResult(
            kind=kind,
            marker=SHOWCASE_MARKERS[kind],
            introduction=introduction.content,
            lead_in_context="personal introduction",
        )

    def _showcase(self, kind: ResponseKind, **payload) -> ShowcaseResult:
        lead_in, context = LEAD_INS[kind]
        return ShowcaseResult(
            kind=kind,
            marker=SHOWCASE_MARKERS[kind],
            lead_in=lead_in,
            lead_in_context=context,
            **payload,
        )

    def _organize_skills(self, categories: List[SkillCategory]) -> Dict[str, List[str]]:
        """Skill names grouped under lower-cased category names, category order kept"""
        all_skills = self.db.get_skills()
        organized = {}
        for category in categories:
            organized[category.name.lower()] = [
                skill.name for skill in all_skills if skill.category_id == category.id
            ]
        return organized
