from config import settings
from models.chat import MAX_QUESTION_LENGTH
from models.conversation import HistoryTurn
from prompts.prompt_manager import PromptManager, prompt_manager
from services.completion import CompletionService
from services.database import DatabaseService
from utils.errors import ConfigurationError, ValidationError
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

EMPTY_COMPLETION_ANSWER = (
    "I'd love to tell you more! Could you ask me something specific about "
    "my skills, experience, or projects?"
)


class PromptComposer:
    """
    Answers free-text questions in the portfolio owner's voice.

    Every call re-reads the four content sources (introduction, active
    knowledge, projects, experiences), renders them with the session's
    recent turns into one system prompt, and makes a single completion call.
    Composing never writes to the store.
    """

    def __init__(
        self,
        db: DatabaseService,
        completion: Optional[CompletionService],
        prompts: Optional[PromptManager] = None,
        history_window: Optional[int] = None,
    ):
        self.db = db
        self.completion = completion
        self.prompts = prompts or prompt_manager
        self.history_window = history_window or settings.HISTORY_WINDOW

    def answer(self, question: str, history: Optional[List[HistoryTurn]] = None) -> str:
        """
        Generate an answer to `question`

        Args:
            question: Visitor's question
            history: Prior turns of the same session, oldest first

        Returns:
            Generated answer text

        Raises:
            ValidationError: Empty or oversized question
            ConfigurationError: No completion provider configured
            UpstreamError: Provider call failed or timed out
        """
        question = (question or "").strip()
        if not question:
            raise ValidationError("Question must not be empty")
        if len(question) > MAX_QUESTION_LENGTH:
            raise ValidationError(f"Question must be at most {MAX_QUESTION_LENGTH} characters")

        if self.completion is None:
            raise ConfigurationError("Completion provider is not configured")

        logger.info(f"Composing answer for question: {question[:50]}...")

        history = (history or [])[-self.history_window:]
        system_prompt = self.build_prompt(history)

        response = self.completion.complete(
            system=system_prompt,
            user_message=question,
            max_tokens=settings.COMPLETION_MAX_TOKENS,
            temperature=settings.COMPLETION_TEMPERATURE,
            purpose="portfolio answer",
        )

        return response or EMPTY_COMPLETION_ANSWER

    def build_prompt(self, history: List[HistoryTurn]) -> str:
        """Read the content sources and render the system prompt"""
        context = self._gather_context()

        logger.info(
            f"Context gathered: introduction={'yes' if context['introduction'] else 'no'}, "
            f"{len(context['knowledge'])} knowledge, {len(context['projects'])} projects, "
            f"{len(context['experiences'])} experiences, {len(history)} history turns"
        )

        return self.prompts.build_portfolio_prompt(
            introduction=context["introduction"],
            knowledge=context["knowledge"],
            projects=context["projects"],
            experiences=context["experiences"],
            history=history,
        )

    def _gather_context(self) -> dict:
        return {
            "introduction": self.db.get_introduction(),
            "knowledge": self.db.get_active_training_data(),
            "projects": self.db.get_all_projects(),
            "experiences": self.db.get_all_experiences(),
        }
