"""Unit tests for req2uml.pipeline.request."""

from __future__ import annotations

from req2uml.models.outcome import ClarificationContext, DiagramRequest
from req2uml.pipeline.request import compose_requirement, request_text


class TestComposeRequirement:
    def test_without_clarification(self) -> None:
        assert compose_requirement("  Orders and items  ") == "Orders and items"

    def test_with_clarification(self) -> None:
        text = compose_requirement(
            "Orders and items",
            ClarificationContext(question="Can an order be empty?", answer="No"),
        )
        assert text == (
            "Orders and items\n"
            '[Additional information] Regarding the question "Can an order be empty?", '
            'the user answered: "No"'
        )


class TestRequestText:
    def test_uses_clarification_context(self) -> None:
        request = DiagramRequest(
            requirement="Orders",
            clarification_context=ClarificationContext(question="Q?", answer="A"),
        )
        assert request_text(request).endswith('the user answered: "A"')

    def test_plain_request(self) -> None:
        assert request_text(DiagramRequest(requirement="Orders")) == "Orders"
