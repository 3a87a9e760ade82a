# Models module - Pydantic models for all database tables and API payloads
from models.content import (
    CamelModel,
    ResponseType,
    KnowledgeEntry,
    KnowledgeEntryCreate,
    Project,
    ProjectCreate,
    Experience,
    ExperienceCreate,
    Introduction,
    IntroductionUpdate,
    PromptExample,
    PromptExampleCreate,
    Contact,
    ContactUpdate,
    SkillCategory,
    SkillCategoryCreate,
    Skill,
    SkillCreate,
    Translation,
)
from models.conversation import ConversationTurn, ConversationTurnCreate, HistoryTurn, SessionGroup
from models.chat import AskRequest, AskResponse, RateLimitInfo, ResponseKind, TranslateRequest

__all__ = [
    "CamelModel",
    "ResponseType",
    "KnowledgeEntry",
    "KnowledgeEntryCreate",
    "Project",
    "ProjectCreate",
    "Experience",
    "ExperienceCreate",
    "Introduction",
    "IntroductionUpdate",
    "PromptExample",
    "PromptExampleCreate",
    "Contact",
    "ContactUpdate",
    "SkillCategory",
    "SkillCategoryCreate",
    "Skill",
    "SkillCreate",
    "Translation",
    "ConversationTurn",
    "ConversationTurnCreate",
    "HistoryTurn",
    "SessionGroup",
    "AskRequest",
    "AskResponse",
    "RateLimitInfo",
    "ResponseKind",
    "TranslateRequest",
]
