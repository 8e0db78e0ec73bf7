"""Request and outcome models exchanged with the calling layer."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from req2uml.models.diagram import DiagramGraph


class ClarificationContext(BaseModel):
    """The user's answer to a previously returned clarification question."""

    model_config = ConfigDict(str_strip_whitespace=True)

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class DiagramRequest(BaseModel):
    """An inbound requirement, optionally resuming after a clarification."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    requirement: str = Field(..., min_length=1, description="Free-text requirement")
    clarification_context: Optional[ClarificationContext] = Field(
        default=None,
        alias="clarificationContext",
    )


class ClarificationOutcome(BaseModel):
    """The pipeline halted and needs the user to answer a question."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: Literal["needs_clarification"] = "needs_clarification"
    question: str
    original_requirement: str = Field(..., alias="originalRequirement")


class SuccessOutcome(BaseModel):
    """The pipeline produced a renderable diagram."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    data: DiagramGraph


Outcome = Annotated[
    Union[ClarificationOutcome, SuccessOutcome],
    Field(discriminator="status"),
]


def outcome_to_wire(outcome: ClarificationOutcome | SuccessOutcome) -> dict[str, Any]:
    """Serialize an outcome to the JSON contract of the rendering client."""
    return outcome.model_dump(mode="json", by_alias=True, exclude_none=True)
