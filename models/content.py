"""
Portfolio content records. Administrators edit these; the ask flow only reads them.

Rows come back from the store with snake_case columns, while the HTTP surface
speaks camelCase, so every model accepts both spellings and dumps by alias.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
import logging

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class ResponseType(str, Enum):
    """How a curated prompt example should be answered"""
    AI = "ai"
    PROJECTS = "projects"
    EXPERIENCES = "experiences"
    CONTACTS = "contacts"
    SKILLS = "skills"
    INTRODUCTION = "introduction"

    @classmethod
    def _missing_(cls, value):
        # Older rows used these spellings
        aliases = {"plain": cls.AI, "introduce": cls.INTRODUCTION}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


# Knowledge entries (stored in training_data)
class KnowledgeEntryCreate(CamelModel):
    content: str = Field(..., min_length=1)
    is_active: bool = True


class KnowledgeEntry(KnowledgeEntryCreate):
    id: int
    timestamp: Optional[datetime] = None


# Projects
class ProjectCreate(CamelModel):
    title: str = Field(..., min_length=1)
    period: str = ""
    subtitle: str = ""
    summary: str = ""
    contents: List[str] = []
    tech: str = ""
    img: Optional[str] = None
    img_alt: Optional[str] = None
    more_link: Optional[str] = None
    width: Optional[str] = None
    detailed_content: Optional[str] = None  # Only surfaced on "ask more" follow-ups


class Project(ProjectCreate):
    id: int
    timestamp: Optional[datetime] = None


# Experiences
class ExperienceCreate(CamelModel):
    company: str = Field(..., min_length=1)
    position: str = ""
    period: str = ""
    location: str = ""
    description: Optional[str] = None
    responsibilities: Optional[List[str]] = None
    skills: Optional[str] = None
    website: Optional[str] = None
    detailed_content: Optional[str] = None


class Experience(ExperienceCreate):
    id: int
    timestamp: Optional[datetime] = None


# Introduction (one active row at a time)
class IntroductionUpdate(CamelModel):
    content: str = Field(..., min_length=1)
    img: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    experience: Optional[str] = None
    technologies: Optional[str] = None


class Introduction(IntroductionUpdate):
    id: int
    is_active: bool = True
    timestamp: Optional[datetime] = None


# Prompt examples
class PromptExampleCreate(CamelModel):
    question: str = Field(..., min_length=1)
    response_type: ResponseType = ResponseType.AI
    is_active: bool = True
    display_order: int = 0


class PromptExample(PromptExampleCreate):
    id: int
    timestamp: Optional[datetime] = None

    @field_validator("response_type", mode="before")
    @classmethod
    def unknown_type_is_ai(cls, value):
        """Stored rows with an unrecognised type are answered by the AI"""
        try:
            return ResponseType(value)
        except ValueError:
            logger.warning(f"Unknown prompt example response type {value!r}, treating as ai")
            return ResponseType.AI


# Contact (singleton)
class ContactUpdate(CamelModel):
    email: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None


class Contact(ContactUpdate):
    id: int


# Skills
class SkillCategoryCreate(CamelModel):
    name: str = Field(..., min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int = 0


class SkillCategory(SkillCategoryCreate):
    id: int


class SkillCreate(CamelModel):
    name: str = Field(..., min_length=1)
    category_id: int
    proficiency: Optional[str] = None
    display_order: int = 0


class Skill(SkillCreate):
    id: int


class Translation(CamelModel):
    id: Optional[int] = None
    original_text: str
    translated_text: str
    language: str
    context: Optional[str] = None
