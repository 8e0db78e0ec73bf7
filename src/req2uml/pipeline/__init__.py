"""Requirement-to-diagram pipeline.

- :class:`DiagramPipeline` – two-stage orchestration
- :func:`classify_text` – requirement length class (logging only)
- :func:`compose_requirement` – fold a clarification answer into the text
"""

from req2uml.pipeline.classification import TextClassification, classify_text
from req2uml.pipeline.orchestrator import (
    DiagramPipeline,
    PipelineConfig,
    PipelineStage,
    clarification_question,
)
from req2uml.pipeline.request import compose_requirement, request_text

__all__ = [
    "DiagramPipeline",
    "PipelineConfig",
    "PipelineStage",
    "TextClassification",
    "clarification_question",
    "classify_text",
    "compose_requirement",
    "request_text",
]
