"""Unit tests for req2uml.graph_ops.assembler."""

from __future__ import annotations

from req2uml.graph_ops.assembler import assemble_model, named_edges
from req2uml.models.diagram import ClassNode, NamedEdge, NormalizedDiagram
from req2uml.models.enums import RelationshipKind


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _diagram(edges: list[NamedEdge]) -> NormalizedDiagram:
    return NormalizedDiagram(
        nodes=[
            ClassNode(key=1, name="Order", position=(0, 0)),
            ClassNode(key=2, name="OrderItem", position=(250, 0)),
        ],
        edges=edges,
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestAssembleModel:
    def test_names_resolved_to_keys(self) -> None:
        graph = assemble_model(
            _diagram(
                [
                    NamedEdge(
                        source="Order",
                        target="OrderItem",
                        relationship=RelationshipKind.COMPOSITION,
                        source_multiplicity="1",
                        target_multiplicity="1..*",
                    )
                ]
            )
        )
        assert graph.edge_count == 1
        edge = graph.edges[0]
        assert (edge.from_key, edge.to_key) == (1, 2)
        assert edge.relationship == RelationshipKind.COMPOSITION
        assert edge.source_multiplicity == "1"
        assert edge.target_multiplicity == "1..*"
        assert edge.label is None

    def test_unresolved_edge_dropped(self) -> None:
        graph = assemble_model(_diagram([NamedEdge(source="Order", target="Ghost")]))
        assert graph.edges == []
        assert graph.node_count == 2

    def test_fixed_metadata(self) -> None:
        graph = assemble_model(_diagram([]))
        assert graph.model_class == "GraphLinksModel"
        assert graph.description == "Generated by AI Agent"

    def test_nodes_unchanged(self) -> None:
        diagram = _diagram([])
        assert assemble_model(diagram).nodes == diagram.nodes


class TestNamedEdges:
    def test_reassembly_is_idempotent(self) -> None:
        graph = assemble_model(
            _diagram(
                [
                    NamedEdge(source="Order", target="OrderItem", label="holds"),
                    NamedEdge(
                        source="OrderItem",
                        target="Order",
                        relationship=RelationshipKind.DEPENDENCY,
                    ),
                ]
            )
        )
        assert assemble_model(named_edges(graph)) == graph
