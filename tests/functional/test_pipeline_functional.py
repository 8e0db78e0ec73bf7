"""Functional tests for the requirement-to-diagram pipeline.

A scripted generator stands in for the LLM and returns the kind of noisy
output real models produce (fences, trailing commas, lower-case names,
missing positions). Every other component runs for real.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from req2uml.graph_ops.assembler import assemble_model, named_edges
from req2uml.models.enums import RelationshipKind
from req2uml.models.outcome import outcome_to_wire
from req2uml.pipeline.orchestrator import DiagramPipeline

pytestmark = pytest.mark.functional

REQUIREMENT = (
    "We need a small e-commerce backend. An Order contains several "
    "OrderItems, and every OrderItem refers to one Product."
)

STAGE1_RESPONSE = """```json
{
  "identified_classes": ["Order", "orderItem", "Product",],
  "potential_relationships": [
    {"from": "Order", "to": "OrderItem", "type": "composition", "confidence": 0.95},
    {"from": "OrderItem", "to": "Product", "type": "association", "confidence": "0.9"},
    {"from": "Order", "to": "OrderItem", "type": "composition", "confidence": 0.5},
  ],
  "ambiguities": []
}
```"""

STAGE2_RESPONSE = """Here is the diagram:
```json
{
  "nodeDataArray": [
    {
      "key": 1,
      "name": "Order",
      "properties": [
        {"name": "orderId", "type": "string", "visibility": "private"},
        {"name": "totalAmount", "type": "number", "visibility": "-"}
      ],
      "methods": [
        {"name": "calculateTotal", "parameters": [], "returnType": "number"}
      ],
      "position": "0 0"
    },
    {
      "key": 2,
      "name": "orderItem",
      "properties": [{"name": "quantity", "type": "number"}],
      "methods": [],
      "position": "0 0"
    },
    {
      "key": 3,
      "name": "Product",
      "properties": [{"name": "price", "type": "number"}],
      "methods": [
        {"name": "applyDiscount", "parameters": [{"name": "percent", "type": "number"}]}
      ]
    }
  ],
  "linkDataArray": [
    {"source": "Order", "target": "orderItem", "relationship": "composition"},
    {"source": "OrderItem", "target": "Product", "relationship": "association"},
    {"source": "OrderItem", "target": "Invoice", "relationship": "association"},
  ]
}
```"""


@pytest.fixture
def generate() -> MagicMock:
    return MagicMock(side_effect=[STAGE1_RESPONSE, STAGE2_RESPONSE])


class TestOrderScenario:
    def test_candidate_stage(self) -> None:
        candidates, report = DiagramPipeline(generate=MagicMock()).run_stage1(
            STAGE1_RESPONSE
        )
        assert candidates.classes == ["Order", "OrderItem", "Product"]
        assert len(candidates.relationships) == 2
        assert candidates.ambiguities == []
        assert report.is_valid
        assert report.issues == []

    def test_end_to_end(self, generate: MagicMock) -> None:
        outcome = DiagramPipeline(generate=generate).process_requirement(REQUIREMENT)

        assert outcome.status == "success"
        assert generate.call_count == 2
        graph = outcome.data
        assert [n.name for n in graph.nodes] == ["Order", "OrderItem", "Product"]
        assert graph.node_count == 3
        assert graph.edge_count == 2

        composition, association = graph.edges
        assert composition.relationship == RelationshipKind.COMPOSITION
        assert (composition.from_key, composition.to_key) == (1, 2)
        assert (composition.source_multiplicity, composition.target_multiplicity) == ("1", "1..*")
        assert association.relationship == RelationshipKind.ASSOCIATION
        assert (association.source_multiplicity, association.target_multiplicity) == ("*", "*")

    def test_layout_and_members(self, generate: MagicMock) -> None:
        graph = DiagramPipeline(generate=generate).process_requirement(REQUIREMENT).data
        assert [n.position for n in graph.nodes] == [
            (0.0, 0.0),
            (250.0, 0.0),
            (0.0, 150.0),
        ]
        order = graph.nodes[0]
        assert [p.visibility.value for p in order.properties] == ["private", "private"]
        product = graph.nodes[2]
        assert product.methods[0].return_type == "void"
        assert product.methods[0].parameters[0].name == "percent"

    def test_wire_contract(self, generate: MagicMock) -> None:
        outcome = DiagramPipeline(generate=generate).process_requirement(REQUIREMENT)
        wire = outcome_to_wire(outcome)

        assert wire["status"] == "success"
        data = wire["data"]
        assert data["class"] == "GraphLinksModel"
        assert data["description"] == "Generated by AI Agent"
        assert [n["position"] for n in data["nodes"]] == ["0 0", "250 0", "0 150"]
        assert data["nodes"][0]["methods"][0]["returnType"] == "number"
        assert data["edges"][0] == {
            "from": 1,
            "to": 2,
            "relationship": "composition",
            "sourceMultiplicity": "1",
            "targetMultiplicity": "1..*",
        }

    def test_key_resolution_is_idempotent(self, generate: MagicMock) -> None:
        graph = DiagramPipeline(generate=generate).process_requirement(REQUIREMENT).data
        assert assemble_model(named_edges(graph)) == graph
