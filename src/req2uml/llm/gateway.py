"""LLM gateway: the ``generate(prompt) -> text`` collaborator, via LiteLLM.

The diagram pipeline treats generation as a black box. This gateway supplies
it for real providers with:

- completion through :func:`litellm.completion`,
- request/response logging with truncated payloads,
- retry with exponential backoff on transient provider errors.

Example::

    gw = LLMGateway(GatewayConfig(model="deepseek/deepseek-chat"))
    text = gw.generate("List the classes in: an Order has OrderItems")
"""

from __future__ import annotations

import logging
import time
from typing import Any

import litellm
from litellm import completion as litellm_completion
from litellm.exceptions import (
    APIConnectionError as LiteLLMAPIConnectionError,
    RateLimitError as LiteLLMRateLimitError,
    Timeout as LiteLLMTimeout,
)

from req2uml.llm.exceptions import ConfigurationError, RetryExhaustedError
from req2uml.llm.models import GatewayConfig, LLMLogEntry

logger = logging.getLogger(__name__)

# Errors that should trigger a retry; everything else propagates at once.
_RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    LiteLLMRateLimitError,
    LiteLLMAPIConnectionError,
    LiteLLMTimeout,
    TimeoutError,
)

_LOG_TRUNCATE_LEN = 1000


def _truncate(text: str, max_len: int = _LOG_TRUNCATE_LEN) -> str:
    """Truncate text to *max_len* characters, appending '…' if clipped."""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "…"


class LLMGateway:
    """Single-prompt text generation with retry and logging."""

    def __init__(self, config: GatewayConfig | None = None) -> None:
        self._config = config or GatewayConfig()
        self._logs: list[LLMLogEntry] = []

        # Suppress litellm's own verbose logging by default
        litellm.suppress_debug_info = True

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def logs(self) -> list[LLMLogEntry]:
        """Access the request/response log."""
        return list(self._logs)

    def generate(self, prompt: str, **kwargs: Any) -> str:
        """Send *prompt* as a single user message and return the reply text.

        Args:
            prompt: Fully rendered prompt.
            **kwargs: Extra keyword arguments for ``litellm.completion()``.

        Returns:
            The assistant's response text (possibly empty).

        Raises:
            ConfigurationError: If no model is configured.
            RetryExhaustedError: If transient errors persist past
                ``max_retries``.
        """
        model = self._config.model.strip()
        if not model:
            raise ConfigurationError("No generation model configured")

        kwargs.setdefault("temperature", self._config.temperature)
        if self._config.api_base:
            kwargs.setdefault("api_base", self._config.api_base)

        messages = [{"role": "user", "content": prompt}]
        start = time.monotonic()
        last_error: Exception | None = None

        for attempt in range(self._config.max_retries + 1):
            try:
                response = litellm_completion(model=model, messages=messages, **kwargs)
            except _RETRYABLE_ERRORS as exc:
                last_error = exc
                logger.warning(
                    "Generation attempt %d/%d failed: %s",
                    attempt + 1,
                    self._config.max_retries + 1,
                    exc,
                )
                if attempt < self._config.max_retries:
                    time.sleep(self._config.base_retry_delay * (2 ** attempt))
                continue

            text = response.choices[0].message.content or ""
            usage = getattr(response, "usage", None)
            entry = LLMLogEntry(
                model=model,
                prompt=_truncate(prompt),
                response=_truncate(text),
                tokens_prompt=usage.prompt_tokens if usage else 0,
                tokens_completion=usage.completion_tokens if usage else 0,
                latency_ms=(time.monotonic() - start) * 1000,
                attempts=attempt + 1,
            )
            self._logs.append(entry)
            logger.debug(
                "Generation by %s: %d chars in %.0f ms",
                model,
                len(text),
                entry.latency_ms,
            )
            return text

        assert last_error is not None
        raise RetryExhaustedError(
            model=model,
            attempts=self._config.max_retries + 1,
            last_error=last_error,
        )
