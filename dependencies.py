"""
Service wiring for the HTTP layer.

Each provider builds its service once per process. Tests swap them out
through `app.dependency_overrides`.
"""

from functools import lru_cache

from agents.portfolio_agent import PortfolioAgent
from agents.prompt_composer import PromptComposer
from agents.showcase_router import ShowcaseRouter
from config import settings
from services.completion import CompletionService
from services.content_service import ContentService
from services.database import DatabaseService
from services.language_detector import LanguageDetector
from services.rate_limiter import RateLimiter
from services.session_manager import SessionManager
from services.translator import Translator


@lru_cache
def get_database() -> DatabaseService:
    return DatabaseService()


@lru_cache
def get_completion() -> CompletionService:
    return CompletionService()


@lru_cache
def get_rate_limiter() -> RateLimiter:
    return RateLimiter(
        max_requests=settings.ASK_RATE_LIMIT,
        window_seconds=settings.ASK_RATE_WINDOW_SECONDS,
    )


@lru_cache
def get_translator() -> Translator:
    return Translator(get_completion(), get_database())


@lru_cache
def get_language_detector() -> LanguageDetector:
    return LanguageDetector()


@lru_cache
def get_session_manager() -> SessionManager:
    return SessionManager(get_database())


@lru_cache
def get_content_service() -> ContentService:
    return ContentService(get_database())


@lru_cache
def get_portfolio_agent() -> PortfolioAgent:
    db = get_database()
    return PortfolioAgent(
        composer=PromptComposer(db, get_completion()),
        router=ShowcaseRouter(db),
        sessions=get_session_manager(),
        translator=get_translator(),
        rate_limiter=get_rate_limiter(),
    )
