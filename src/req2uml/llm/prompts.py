"""Prompt rendering for the extraction and elaboration stages.

Both prompts are Jinja2 templates shipped in ``templates/``. Rendering uses
``StrictUndefined`` so a template referring to a variable the builder does
not pass fails loudly instead of sending a half-empty prompt.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound
from jinja2.exceptions import TemplateError as JinjaTemplateError

from req2uml.llm.exceptions import TemplateError
from req2uml.models.candidate import CandidateSet

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".jinja2"

STAGE1_TEMPLATE = "stage1_extraction"
STAGE2_TEMPLATE = "stage2_elaboration"


class PromptBuilder:
    """Render both stage prompts from one template directory.

    Example::

        builder = PromptBuilder()
        prompt = builder.build_stage1_prompt("An Order has OrderItems")
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        self.template_dir = template_dir or TEMPLATE_DIR
        if not self.template_dir.is_dir():
            raise TemplateError(f"Template directory does not exist: {self.template_dir}")
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, name: str, **variables: Any) -> str:
        """Render template *name*.

        Raises:
            TemplateError: If the template is missing, malformed or refers to
                a variable not given in *variables*.
        """
        filename = f"{name}{TEMPLATE_SUFFIX}"
        try:
            prompt = self._env.get_template(filename).render(**variables)
        except TemplateNotFound:
            raise TemplateError(
                f"Template '{filename}' not found in {self.template_dir}"
            ) from None
        except JinjaTemplateError as exc:
            raise TemplateError(f"Cannot render template '{filename}': {exc}") from exc
        logger.debug("Rendered %s (%d chars)", name, len(prompt))
        return prompt

    def build_stage1_prompt(self, requirement: str) -> str:
        """Prompt asking for classes, relationships and open questions."""
        return self.render(STAGE1_TEMPLATE, requirement=requirement.strip())

    def build_stage2_prompt(self, candidates: CandidateSet) -> str:
        """Prompt asking for members, multiplicities and layout hints."""
        return self.render(
            STAGE2_TEMPLATE,
            candidates_json=candidates.model_dump_json(by_alias=True, indent=2),
            class_names=candidates.classes,
        )
