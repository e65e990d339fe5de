"""
Response Models

This module contains Pydantic models for responses: the upstream
chat-completion response as returned by a provider, and the fixed
two-field envelope that is the gateway's only output contract.
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.core.exceptions import GatewayError


SUCCESS_CODE = 200
FAILURE_CODE = 500


# =============================================================================
# Usage Model
# =============================================================================


class Usage(BaseModel):
    """
    Token usage statistics.

    Attributes:
        prompt_tokens: Number of tokens in the prompt
        completion_tokens: Number of tokens in the completion
        total_tokens: Total tokens used
    """

    prompt_tokens: int = Field(..., description="Tokens in prompt")
    completion_tokens: int = Field(..., description="Tokens in completion")
    total_tokens: int = Field(..., description="Total tokens")


# =============================================================================
# Choice Models
# =============================================================================


class ChoiceMessage(BaseModel):
    """
    Message within a choice response.

    Attributes:
        role: Message role (always 'assistant' for completions)
        content: Response content (can be None, e.g. for refusals or tool calls)
    """

    role: str = Field(default="assistant", description="Message role")
    content: Optional[str] = Field(default=None, description="Response content")


class Choice(BaseModel):
    """
    A single completion choice.

    Attributes:
        index: Index of this choice
        message: The completion message
        finish_reason: Why the completion stopped
    """

    index: int = Field(..., description="Choice index")
    message: ChoiceMessage = Field(..., description="Completion message")
    finish_reason: Optional[str] = Field(
        default=None, description="Completion stop reason"
    )


# =============================================================================
# ChatCompletionResponse
# =============================================================================


class ChatCompletionResponse(BaseModel):
    """
    Upstream chat completion response.

    Attributes:
        id: Unique response identifier
        created: Unix timestamp of creation
        model: Model used for completion
        choices: List of completion choices (may be empty)
        usage: Token usage statistics, when the upstream reports them
    """

    id: str = Field(..., description="Response ID")
    created: int = Field(..., description="Creation timestamp")
    model: str = Field(..., description="Model used")
    choices: list[Choice] = Field(default_factory=list, description="Completion choices")
    usage: Optional[Usage] = Field(default=None, description="Token usage")


# =============================================================================
# ChatEnvelope - the wire contract of POST /chat
# =============================================================================


class ChatEnvelope(BaseModel):
    """
    Fixed response envelope returned for every outcome.

    The transport status is always 200; ``code`` carries the logical
    outcome (200 on success, 500 on any failure).
    """

    message: str = Field(..., description="Completion text or error message")
    code: int = Field(..., description="Logical status: 200 or 500")

    @classmethod
    def success(cls, message: str) -> "ChatEnvelope":
        return cls(message=message, code=SUCCESS_CODE)

    @classmethod
    def failure(cls, message: str) -> "ChatEnvelope":
        return cls(message=message, code=FAILURE_CODE)

    @classmethod
    def from_error(cls, error: GatewayError) -> "ChatEnvelope":
        """Wrap a gateway error's message in a failure envelope."""
        return cls.failure(error.message)
