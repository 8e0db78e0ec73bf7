"""req2uml configuration management.

Loads configuration from a TOML file with environment variable overrides
(``REQ2UML_`` prefix). Uses :mod:`tomllib` (Python 3.11+).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from req2uml.cli.errors import ConfigError
from req2uml.llm.models import DEFAULT_MODEL, GatewayConfig
from req2uml.pipeline.orchestrator import PipelineConfig

DEFAULT_CONFIG_DIR = ".req2uml"
DEFAULT_CONFIG_FILE = "config.toml"
ENV_PREFIX = "REQ2UML_"


class Req2UmlConfig(BaseModel):
    """Application configuration with sensible defaults.

    Every field can be overridden through an environment variable with the
    ``REQ2UML_`` prefix, e.g. ``REQ2UML_LLM_MODEL=openai/gpt-4o-mini``.
    """

    model_config = ConfigDict(extra="ignore")

    llm_model: str = DEFAULT_MODEL
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    api_base: Optional[str] = None
    max_retries: int = Field(default=2, ge=0, le=10)
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    halt_on_logic_errors: bool = True
    default_labels: bool = False

    def gateway_config(self) -> GatewayConfig:
        return GatewayConfig(
            model=self.llm_model,
            temperature=self.temperature,
            api_base=self.api_base,
            max_retries=self.max_retries,
        )

    def pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            halt_on_logic_errors=self.halt_on_logic_errors,
            default_labels=self.default_labels,
        )


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply ``REQ2UML_`` environment variable overrides to *data*."""
    field_names = set(Req2UmlConfig.model_fields)
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            field = key[len(ENV_PREFIX):].lower()
            if field in field_names:
                data[field] = value
    return data


def load_config(
    config_path: Path | None = None,
    project_dir: Path | None = None,
) -> Req2UmlConfig:
    """Load configuration from TOML with env-var overrides.

    Parameters
    ----------
    config_path:
        Explicit TOML path. When *None*, ``<project_dir>/.req2uml/config.toml``
        is used if it exists.
    project_dir:
        Project root directory. Defaults to :func:`Path.cwd`.

    Raises
    ------
    ConfigError
        If an explicit file is missing, the TOML is malformed, or a value
        fails validation.
    """
    project = project_dir or Path.cwd()
    path = config_path or (project / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE)

    if config_path is not None and not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    data: dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    # Sections ([llm], [pipeline], ...) are organisational only
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value

    flat = _apply_env_overrides(flat)
    try:
        return Req2UmlConfig(**flat)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def default_config_toml() -> str:
    """Return the default configuration as a TOML string."""
    return f"""\
# req2uml configuration

[llm]
llm_model = "{DEFAULT_MODEL}"
temperature = 0.1
max_retries = 2

[pipeline]
halt_on_logic_errors = true
default_labels = false

[logging]
log_level = "INFO"
"""
