"""Project-wide custom exception types."""
from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when the vote sequence is empty or malformed."""


class InvalidAnalysis(RuntimeError):
    """Raised when an aggregate result handed to the projector is malformed."""


class AIError(RuntimeError):
    """Base class for failures of the generative-model call."""


class AITimeoutError(AIError):
    """The model did not answer within the configured timeout."""


class RateLimitedError(AIError):
    """The model provider rejected the call with a rate limit."""


class AIServiceError(AIError):
    """Any other failure of the model provider (including missing credentials)."""


class RoomNotFound(LookupError):
    """No stored room exists for the requested id."""


class RecommendationsNotFound(LookupError):
    """The room exists but has no stored recommendations."""
