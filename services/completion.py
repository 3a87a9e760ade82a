import anthropic
from anthropic import Anthropic
from config import settings
from utils.errors import ConfigurationError, UpstreamError
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class CompletionService:
    """Single-attempt calls to the Anthropic Messages API.

    Used for both answer generation and translation. No retries: a failed or
    timed out call surfaces as UpstreamError, bad credentials as
    ConfigurationError.
    """

    def __init__(self, client: Optional[Anthropic] = None, model: Optional[str] = None):
        if client is None:
            if not settings.ANTHROPIC_API_KEY:
                raise ConfigurationError("ANTHROPIC_API_KEY is not set")
            client = Anthropic(
                api_key=settings.ANTHROPIC_API_KEY,
                timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
                max_retries=0,
            )
        self.client = client
        self.model = model or settings.COMPLETION_MODEL

    def complete(
        self,
        system: str,
        user_message: str,
        max_tokens: int,
        temperature: float,
        purpose: str = "completion",
    ) -> str:
        """Send one system + user message pair, return the generated text

        Args:
            system: System prompt
            user_message: The user turn
            max_tokens: Output length bound
            temperature: Sampling temperature
            purpose: Label used in log lines

        Returns:
            Generated text, stripped ('' if the provider returned nothing)
        """
        try:
            logger.info(f"Calling Claude for {purpose}...")

            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=[{"role": "user", "content": user_message}],
            )

        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            logger.error(f"Completion provider rejected credentials for {purpose}: {e}")
            raise ConfigurationError("Completion provider is misconfigured") from e
        except Exception as e:
            logger.error(f"Error calling Claude for {purpose}: {e}", exc_info=True)
            raise UpstreamError(f"Completion provider failed during {purpose}") from e

        if not response.content:
            return ""

        content = (response.content[0].text or "").strip()
        logger.info(f"Claude response received for {purpose}")
        return content
