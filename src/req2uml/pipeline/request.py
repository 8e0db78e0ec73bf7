"""Compose the effective requirement text of an inbound request."""

from __future__ import annotations

from req2uml.models.outcome import ClarificationContext, DiagramRequest


def compose_requirement(
    requirement: str,
    clarification: ClarificationContext | None = None,
) -> str:
    """Append a clarification answer to the original requirement.

    Resuming after a clarification is a fresh pipeline run over this text;
    no intermediate pipeline state is carried over.
    """
    requirement = requirement.strip()
    if clarification is None:
        return requirement
    return (
        f"{requirement}\n"
        f'[Additional information] Regarding the question "{clarification.question}", '
        f'the user answered: "{clarification.answer}"'
    )


def request_text(request: DiagramRequest) -> str:
    """Effective requirement text for *request*."""
    return compose_requirement(request.requirement, request.clarification_context)
