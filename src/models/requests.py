"""
Request Models

This module contains Pydantic models for request validation: the inbound
body accepted on POST /chat, and the upstream chat-completion request built
from it.

Malformed inbound bodies fail validation here and are rejected by FastAPI
before the route handler runs.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator


Role = Literal["system", "user", "assistant"]

KNOWN_ROLES: frozenset[str] = frozenset({"system", "user", "assistant"})
DEFAULT_ROLE: Role = "user"


def normalize_role(role: str) -> Role:
    """
    Map an inbound role string onto a supported role.

    Matching is exact; anything other than "user", "assistant" or "system"
    becomes "user".
    """
    if role in KNOWN_ROLES:
        return role  # type: ignore[return-value]
    return DEFAULT_ROLE


# =============================================================================
# Inbound Models - POST /chat
# =============================================================================


class MessageTurn(BaseModel):
    """
    One role-tagged turn of the conversation as sent by the client.

    Attributes:
        role: Message role, normalized to system, user or assistant
        content: Message text
    """

    model_config = {"frozen": True}

    role: Role
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def coerce_unknown_role(cls, v: Any) -> Any:
        """Unrecognized role strings fall back to "user" instead of failing."""
        if isinstance(v, str):
            return normalize_role(v)
        return v


class ChatRequest(BaseModel):
    """
    Inbound chat request body.

    Required Fields:
        max_tokens: Token limit for the completion (unsigned 16-bit)
        contents: Ordered conversation turns

    Optional Fields:
        api_key: Per-request credential; empty means "use the fallback"
    """

    api_key: str = Field(default="", description="Per-request API key")
    max_tokens: int = Field(
        ...,
        ge=0,
        le=65535,
        strict=True,
        description="Maximum tokens to generate",
    )
    contents: list[MessageTurn] = Field(..., description="Conversation turns")


# =============================================================================
# Upstream Models
# =============================================================================


class Message(BaseModel):
    """
    Chat message in upstream (OpenAI) format.

    Attributes:
        role: Message role (system, user, assistant)
        content: Message content
    """

    role: Role
    content: str


class ChatCompletionRequest(BaseModel):
    """
    Upstream chat completion request.

    Built once per inbound call from the resolved settings and the
    translated turns. Construction failures are reported to the client.
    """

    model: str = Field(..., min_length=1, description="Model identifier")
    messages: list[Message] = Field(..., description="Conversation messages")
    max_tokens: Optional[int] = Field(
        default=None, ge=0, description="Maximum tokens to generate"
    )

    @classmethod
    def from_chat_request(cls, model: str, request: ChatRequest) -> "ChatCompletionRequest":
        """Translate an inbound ChatRequest into the upstream request shape."""
        return cls(
            model=model,
            max_tokens=request.max_tokens,
            messages=[
                Message(role=turn.role, content=turn.content)
                for turn in request.contents
            ],
        )
