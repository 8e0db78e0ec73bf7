"""Two-stage requirement-to-diagram pipeline.

Sequences the generator calls with repair, normalization, consistency
checking and assembly::

    START -> STAGE1_REPAIR -> STAGE1_NORMALIZE -> CONSISTENCY_CHECK
          -> HALT                                  (needs clarification)
          -> STAGE2_REPAIR -> STAGE2_NORMALIZE -> ASSEMBLE -> DONE

Any exception moves the run to FAILED and propagates to the caller; nothing
is retried here. A pipeline object holds only its collaborators, so one
instance can serve many requests.

Usage::

    pipeline = DiagramPipeline(generate=LLMGateway().generate)
    outcome = pipeline.process_requirement("An Order contains OrderItems ...")
    if outcome.status == "needs_clarification":
        print(outcome.question)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Union

from pydantic import BaseModel, ConfigDict, Field

from req2uml.graph_ops.assembler import assemble_model
from req2uml.graph_ops.consistency import check_consistency
from req2uml.llm.gateway import LLMGateway
from req2uml.llm.prompts import PromptBuilder
from req2uml.models.candidate import CandidateSet, ConsistencyReport
from req2uml.models.diagram import DiagramGraph
from req2uml.models.outcome import (
    ClarificationOutcome,
    DiagramRequest,
    SuccessOutcome,
)
from req2uml.normalize.candidates import normalize_candidates
from req2uml.normalize.diagram import normalize_diagram
from req2uml.pipeline.classification import classify_text
from req2uml.pipeline.request import request_text
from req2uml.repair.text_repair import repair_json

logger = logging.getLogger(__name__)

GenerateFn = Callable[[str], str]
PipelineOutcome = Union[ClarificationOutcome, SuccessOutcome]


class PipelineStage(str, Enum):
    """States of a single pipeline run."""

    START = "START"
    STAGE1_REPAIR = "STAGE1_REPAIR"
    STAGE1_NORMALIZE = "STAGE1_NORMALIZE"
    CONSISTENCY_CHECK = "CONSISTENCY_CHECK"
    HALT = "HALT"
    STAGE2_REPAIR = "STAGE2_REPAIR"
    STAGE2_NORMALIZE = "STAGE2_NORMALIZE"
    ASSEMBLE = "ASSEMBLE"
    DONE = "DONE"
    FAILED = "FAILED"


class PipelineConfig(BaseModel):
    """Behavioural switches for :class:`DiagramPipeline`."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    halt_on_logic_errors: bool = Field(
        default=True,
        description="Also ask for clarification when the candidate set has logic errors",
    )
    default_labels: bool = Field(
        default=False,
        description="Fill empty edge labels with a per-kind verb",
    )
    max_requirement_length: int = Field(
        default=50000,
        gt=0,
        description="Maximum requirement length in characters",
    )


class _Run:
    """Stage tracker for one invocation."""

    def __init__(self) -> None:
        self.stage = PipelineStage.START

    def enter(self, stage: PipelineStage) -> None:
        logger.debug("Pipeline %s -> %s", self.stage.value, stage.value)
        self.stage = stage


def clarification_question(
    candidates: CandidateSet,
    report: ConsistencyReport,
) -> str:
    """Question returned to the user when the run halts."""
    if candidates.ambiguities:
        return "\n".join(candidates.ambiguities)
    lines = ["The extracted model is inconsistent. Please clarify:"]
    lines.extend(f"- {issue.message}" for issue in report.logic_errors)
    return "\n".join(lines)


class DiagramPipeline:
    """Turn a requirement into a class diagram through two generator calls.

    Attributes:
        generate: ``prompt -> raw text`` callable; defaults to
            ``LLMGateway().generate``.
        prompts: Builder for both stage prompts.
        config: Pipeline behaviour switches.
    """

    def __init__(
        self,
        generate: GenerateFn | None = None,
        config: PipelineConfig | None = None,
        prompts: PromptBuilder | None = None,
    ) -> None:
        self.generate = generate or LLMGateway().generate
        self.config = config or PipelineConfig()
        self.prompts = prompts or PromptBuilder()

    # ------------------------------------------------------------------
    # Stage helpers over saved generator output
    # ------------------------------------------------------------------

    def run_stage1(self, raw_text: str) -> tuple[CandidateSet, ConsistencyReport]:
        """Repair, normalize and check raw extraction output."""
        candidates = normalize_candidates(repair_json(raw_text, dict))
        return candidates, check_consistency(candidates)

    def run_stage2(self, raw_text: str) -> DiagramGraph:
        """Repair, normalize and assemble raw elaboration output."""
        diagram = normalize_diagram(
            repair_json(raw_text, dict),
            default_labels=self.config.default_labels,
        )
        return assemble_model(diagram)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def process_request(self, request: DiagramRequest) -> PipelineOutcome:
        """Process *request*, folding in any clarification answer."""
        return self.process_requirement(request_text(request))

    def process_requirement(self, text: str) -> PipelineOutcome:
        """Run the full pipeline on a requirement text.

        Args:
            text: Free-text requirement (non-empty).

        Returns:
            A clarification request or a successful diagram.

        Raises:
            ValueError: If the requirement is empty or too long.
            RepairFailure: If generator output cannot be decoded.
            LLMGatewayError: If generation fails (or any error the
                ``generate`` callable raises).
        """
        requirement = text.strip()
        if not requirement:
            raise ValueError("Requirement text is empty")
        if len(requirement) > self.config.max_requirement_length:
            raise ValueError(
                f"Requirement exceeds maximum length of "
                f"{self.config.max_requirement_length} characters"
            )

        logger.info(
            "Processing requirement (%d chars, %s)",
            len(requirement),
            classify_text(requirement).value,
        )

        run = _Run()
        try:
            return self._execute(run, requirement)
        except Exception:
            logger.error("Pipeline failed during %s", run.stage.value)
            run.enter(PipelineStage.FAILED)
            raise

    def _execute(self, run: _Run, requirement: str) -> PipelineOutcome:
        run.enter(PipelineStage.STAGE1_REPAIR)
        raw = self.generate(self.prompts.build_stage1_prompt(requirement))
        decoded = repair_json(raw, dict)

        run.enter(PipelineStage.STAGE1_NORMALIZE)
        candidates = normalize_candidates(decoded)

        run.enter(PipelineStage.CONSISTENCY_CHECK)
        report = check_consistency(candidates)
        for issue in report.issues:
            logger.info("[%s] %s", issue.severity.value, issue.message)

        halt = candidates.has_ambiguities or (
            self.config.halt_on_logic_errors and not report.is_valid
        )
        if halt:
            run.enter(PipelineStage.HALT)
            logger.info(
                "Halting for clarification (%d ambiguities, valid=%s)",
                len(candidates.ambiguities),
                report.is_valid,
            )
            return ClarificationOutcome(
                question=clarification_question(candidates, report),
                original_requirement=requirement,
            )
        if not report.is_valid:
            logger.warning("Continuing with an inconsistent candidate set")

        run.enter(PipelineStage.STAGE2_REPAIR)
        raw = self.generate(self.prompts.build_stage2_prompt(candidates))
        decoded = repair_json(raw, dict)

        run.enter(PipelineStage.STAGE2_NORMALIZE)
        diagram = normalize_diagram(decoded, default_labels=self.config.default_labels)

        run.enter(PipelineStage.ASSEMBLE)
        graph = assemble_model(diagram)

        run.enter(PipelineStage.DONE)
        return SuccessOutcome(data=graph)
