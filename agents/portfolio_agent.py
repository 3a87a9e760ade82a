from datetime import datetime, timezone
from agents.prompt_composer import PromptComposer
from agents.showcase_router import ShowcaseResult, ShowcaseRouter
from models.chat import AskRequest, AskResponse, RateLimitInfo, ResponseKind
from services.rate_limiter import RateLimiter
from services.session_manager import SessionManager
from services.translator import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, Translator
from utils.errors import ConfigurationError, RateLimitError, UpstreamError
from typing import Optional
import logging
import math

logger = logging.getLogger(__name__)

UPSTREAM_FALLBACK_ANSWER = (
    "I'm having trouble connecting right now, but I'd love to chat about my "
    "experience, projects, or anything else you'd like to know!"
)
CONFIGURATION_APOLOGY = "Sorry, I'm not able to answer questions right now. Please try again later!"

ANSWER_TRANSLATION_CONTEXT = "AI assistant response about personal portfolio and professional experience"


class PortfolioAgent:
    """
    The portfolio chat agent: one question in, one answer out.

    Flow per question:
    1. Enforce the per-client rate limit
    2. Resolve the session id (mint one on the first turn)
    3. Short-circuit with a showcase when a showcase prompt example is referenced
    4. Otherwise compose an answer from content + this session's recent turns
    5. Translate the reply if the visitor reads another language
    6. Persist exactly one turn (best effort) and return
    """

    def __init__(
        self,
        composer: PromptComposer,
        router: ShowcaseRouter,
        sessions: SessionManager,
        translator: Translator,
        rate_limiter: RateLimiter,
    ):
        self.composer = composer
        self.router = router
        self.sessions = sessions
        self.translator = translator
        self.rate_limiter = rate_limiter

    def ask(self, request: AskRequest, client_key: str = "unknown") -> AskResponse:
        """
        Answer one question

        Args:
            request: Validated ask request
            client_key: Rate limit key, usually the client IP

        Returns:
            AskResponse with either generated text or a showcase payload

        Raises:
            RateLimitError: Client exhausted its quota for the current window
        """
        self._check_rate_limit(client_key)

        session_id, is_new = self.sessions.resolve_session_id(request.session_id)
        language = self._normalize_language(request.language)

        logger.info(f"Ask request in session {session_id} ({language}): {request.question[:50]}...")

        showcase = self.router.route(request.prompt_example_id)
        if showcase is not None:
            response = self._showcase_response(showcase, language)
            self.sessions.record_turn(request.question, showcase.marker, session_id)
        else:
            history = self.sessions.history_window(
                None if is_new else session_id,
                request.session_history,
            )
            response = self._plain_response(request.question, history, language)
            self.sessions.record_turn(request.question, response.answer, session_id)

        response.session_id = session_id
        response.timestamp = datetime.now(timezone.utc).isoformat()
        response.rate_limit = RateLimitInfo(
            remaining=self.rate_limiter.remaining(client_key),
            reset_time=self.rate_limiter.reset_at(client_key),
        )
        return response

    def _check_rate_limit(self, client_key: str):
        if self.rate_limiter.allow(client_key):
            return

        reset_at = self.rate_limiter.reset_at(client_key)
        now = datetime.now(timezone.utc).timestamp()
        wait_minutes = max(1, math.ceil((reset_at - now) / 60))
        raise RateLimitError(
            f"Too many AI requests. Please wait {wait_minutes} minutes before asking again.",
            remaining=0,
            reset_at=reset_at,
        )

    def _plain_response(self, question: str, history, language: str) -> AskResponse:
        try:
            answer = self.composer.answer(question, history)
        except ConfigurationError as e:
            logger.error(f"Completion provider misconfigured: {e}")
            return AskResponse(answer=CONFIGURATION_APOLOGY, kind=ResponseKind.FALLBACK)
        except UpstreamError as e:
            logger.error(f"Completion provider failed: {e}")
            return AskResponse(answer=UPSTREAM_FALLBACK_ANSWER, kind=ResponseKind.FALLBACK)

        answer = self.translator.translate_text(answer, language, ANSWER_TRANSLATION_CONTEXT)
        return AskResponse(answer=answer, kind=ResponseKind.PLAIN)

    def _showcase_response(self, showcase: ShowcaseResult, language: str) -> AskResponse:
        kind = showcase.kind

        if kind == ResponseKind.INTRODUCTION:
            introduction = self.translator.translate_text(
                showcase.introduction, language, showcase.lead_in_context
            )
            return AskResponse(answer=introduction, kind=kind, is_introduction_response=True)

        message = self.translator.translate_text(showcase.lead_in, language, showcase.lead_in_context)
        response = AskResponse(answer=showcase.marker, kind=kind, message=message)

        if kind == ResponseKind.PROJECTS:
            response.projects, _ = self.translator.translate_records(language, projects=showcase.projects)
            response.is_project_response = True
        elif kind == ResponseKind.EXPERIENCES:
            _, response.experiences = self.translator.translate_records(language, experiences=showcase.experiences)
            response.is_experience_response = True
        elif kind == ResponseKind.CONTACTS:
            response.contacts = showcase.contacts
            response.is_contact_response = True
        elif kind == ResponseKind.SKILLS:
            # Skill names stay untranslated
            response.skills = showcase.skills
            response.skill_categories = showcase.skill_categories
            response.is_skills_response = True

        return response

    @staticmethod
    def _normalize_language(language: Optional[str]) -> str:
        code = (language or DEFAULT_LANGUAGE).strip().lower()[:2]
        return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
