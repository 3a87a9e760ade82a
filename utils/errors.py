"""
Error taxonomy shared by the ask flow, the content service and the HTTP layer.
"""

from typing import Optional


class PortfolioError(Exception):
    """Base class for all expected failures"""


class ValidationError(PortfolioError):
    """Malformed or oversized input, rejected before touching a collaborator"""

    def __init__(self, message: str, details: Optional[list] = None):
        super().__init__(message)
        self.details = details or []


class ConfigurationError(PortfolioError):
    """Missing provider credentials or connection settings"""


class UpstreamError(PortfolioError):
    """Completion or translation provider failed or timed out"""


class RateLimitError(PortfolioError):
    """Per-client quota exhausted for the current window"""

    def __init__(self, message: str, remaining: int = 0, reset_at: float = 0):
        super().__init__(message)
        self.remaining = remaining
        self.reset_at = reset_at


class NotFoundError(PortfolioError):
    """Referenced record or entity does not exist"""
