"""Generation-side exceptions.

Raised by :class:`~req2uml.llm.gateway.LLMGateway` and
:class:`~req2uml.llm.prompts.PromptBuilder`. The pipeline never catches them.
"""

from __future__ import annotations


class LLMGatewayError(Exception):
    """Base class; anything raised while producing generator text."""


class ConfigurationError(LLMGatewayError):
    """No usable model (or provider setting) was configured."""


class RetryExhaustedError(LLMGatewayError):
    """Transient provider errors outlasted the retry budget.

    Attributes:
        model: Model that was being called.
        attempts: Number of calls made.
        last_error: The error of the final call.
    """

    def __init__(self, model: str, attempts: int, last_error: Exception) -> None:
        self.model = model
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{model}: gave up after {attempts} attempt(s); last error: {last_error}"
        )


class TemplateError(LLMGatewayError):
    """A prompt template is missing, malformed or lacks a variable."""
