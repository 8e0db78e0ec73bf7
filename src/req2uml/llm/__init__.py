"""Generation-side collaborators: LiteLLM gateway and Jinja2 prompt builder.

- :class:`LLMGateway` – ``generate(prompt) -> text`` via LiteLLM
- :class:`PromptBuilder` – stage-1 and stage-2 prompt rendering
"""

from req2uml.llm.exceptions import (
    ConfigurationError,
    LLMGatewayError,
    RetryExhaustedError,
    TemplateError,
)
from req2uml.llm.gateway import LLMGateway
from req2uml.llm.models import GatewayConfig, LLMLogEntry
from req2uml.llm.prompts import PromptBuilder

__all__ = [
    "ConfigurationError",
    "GatewayConfig",
    "LLMGateway",
    "LLMGatewayError",
    "LLMLogEntry",
    "PromptBuilder",
    "RetryExhaustedError",
    "TemplateError",
]
