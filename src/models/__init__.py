"""Models Package - Request/Response Models.

This package contains Pydantic models for the inbound chat body, the
upstream chat-completion exchange, and the response envelope.
"""

from src.models.requests import (
    ChatCompletionRequest,
    ChatRequest,
    Message,
    MessageTurn,
    normalize_role,
)
from src.models.responses import (
    ChatCompletionResponse,
    ChatEnvelope,
    Choice,
    ChoiceMessage,
    Usage,
)

__all__ = [
    # Requests
    "ChatRequest",
    "MessageTurn",
    "ChatCompletionRequest",
    "Message",
    "normalize_role",
    # Responses
    "ChatCompletionResponse",
    "ChatEnvelope",
    "Choice",
    "ChoiceMessage",
    "Usage",
]
