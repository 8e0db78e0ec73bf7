"""Configuration and log models for the LLM gateway."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODEL = "deepseek/deepseek-chat"


class GatewayConfig(BaseModel):
    """Configuration for :class:`~req2uml.llm.gateway.LLMGateway`."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        description="LiteLLM model identifier (provider/model)",
    )
    temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for both generation stages",
    )
    api_base: Optional[str] = Field(
        default=None,
        description="Override for the provider's base URL",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries on transient provider errors (0 disables)",
    )
    base_retry_delay: float = Field(
        default=1.0,
        gt=0,
        description="Base delay in seconds for exponential backoff",
    )


class LLMLogEntry(BaseModel):
    """Structured log entry for a single generation call."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC timestamp of the request",
    )
    request_id: UUID = Field(default_factory=uuid4)
    model: str
    prompt: str = Field(default="", description="Prompt text (truncated)")
    response: str = Field(default="", description="Response text (truncated)")
    tokens_prompt: int = 0
    tokens_completion: int = 0
    latency_ms: float = 0.0
    attempts: int = 1
