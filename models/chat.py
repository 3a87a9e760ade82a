"""
Chat models for the portfolio ask flow.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from models.content import CamelModel, Experience, Project, SkillCategory
from models.conversation import HistoryTurn

MAX_QUESTION_LENGTH = 1000


class ResponseKind(str, Enum):
    PLAIN = "plain"
    PROJECTS = "projects"
    EXPERIENCES = "experiences"
    CONTACTS = "contacts"
    SKILLS = "skills"
    INTRODUCTION = "introduction"
    FALLBACK = "fallback"  # Provider failed; answer is the friendly apology


class AskRequest(CamelModel):
    """Request to ask the portfolio agent a question."""
    question: str = Field(..., min_length=1, max_length=MAX_QUESTION_LENGTH)
    session_id: Optional[str] = None
    prompt_example_id: Optional[int] = None
    session_history: List[HistoryTurn] = []
    language: Optional[str] = None

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Question must not be empty")
        return value


class RateLimitInfo(CamelModel):
    remaining: int
    reset_time: float  # epoch seconds, 0 when no window is open


class AskResponse(CamelModel):
    """Response from the portfolio agent.

    `kind` is the discriminator. For showcase kinds `answer` carries the
    sentinel marker and `message` the translated lead-in sentence.
    """
    answer: str
    kind: ResponseKind
    session_id: Optional[str] = None
    message: Optional[str] = None
    projects: Optional[List[Project]] = None
    experiences: Optional[List[Experience]] = None
    contacts: Optional[Dict[str, Any]] = None
    skills: Optional[Dict[str, List[str]]] = None
    skill_categories: Optional[List[SkillCategory]] = None
    is_project_response: bool = False
    is_experience_response: bool = False
    is_contact_response: bool = False
    is_skills_response: bool = False
    is_introduction_response: bool = False
    timestamp: Optional[str] = None
    rate_limit: Optional[RateLimitInfo] = None


# Fixed markers stored in the persisted `answer` of showcase turns, so the
# history views can filter them without re-deriving the classification.
SHOWCASE_MARKERS = {
    ResponseKind.PROJECTS: "PROJECT_SHOWCASE",
    ResponseKind.EXPERIENCES: "EXPERIENCE_SHOWCASE",
    ResponseKind.CONTACTS: "CONTACT_SHOWCASE",
    ResponseKind.SKILLS: "SKILLS_SHOWCASE",
    ResponseKind.INTRODUCTION: "INTRODUCTION_SHOWCASE",
}


def is_showcase_answer(answer: Optional[str]) -> bool:
    """True if a persisted answer carries any showcase marker"""
    if not answer:
        return False
    return any(marker in answer for marker in SHOWCASE_MARKERS.values())


class TranslateRequest(CamelModel):
    """Ad-hoc translation request from the client UI"""
    text: str = Field(..., min_length=1)
    target_language: str
    context: Optional[str] = None
