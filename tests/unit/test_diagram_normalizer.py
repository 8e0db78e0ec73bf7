"""Unit tests for req2uml.normalize.diagram (stage 2)."""

from __future__ import annotations

import pytest

from req2uml.models.enums import RelationshipKind, Visibility
from req2uml.normalize.diagram import (
    canonical_name,
    normalize_diagram,
    normalize_edges,
    normalize_multiplicity,
    normalize_nodes,
    normalize_relationship,
    unique_name,
)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


class TestCanonicalName:
    def test_strips_and_capitalizes(self) -> None:
        assert canonical_name(" order item ") == "Orderitem"

    def test_removes_punctuation(self) -> None:
        assert canonical_name("Order-Line#2") == "OrderLine2"

    def test_empty_becomes_placeholder(self) -> None:
        assert canonical_name("  ") == "UnknownClass"

    def test_non_string_becomes_placeholder(self) -> None:
        assert canonical_name(None) == "UnknownClass"


class TestUniqueName:
    def test_free_name(self) -> None:
        assert unique_name("Order", set()) == "Order"

    def test_smallest_suffix(self) -> None:
        assert unique_name("Order", {"Order", "Order2"}) == "Order3"


# ---------------------------------------------------------------------------
# Node pass
# ---------------------------------------------------------------------------


class TestNormalizeNodes:
    def test_duplicate_names_made_unique(self) -> None:
        nodes = normalize_nodes([{"name": "order"}, {"name": "order"}])
        assert [n.name for n in nodes] == ["Order", "Order2"]
        assert [n.key for n in nodes] == [1, 2]
        assert [n.position for n in nodes] == [(0.0, 0.0), (250.0, 0.0)]

    def test_generator_keys_and_positions_kept(self) -> None:
        nodes = normalize_nodes(
            [
                {"key": 7, "name": "A", "position": "10 20"},
                {"key": "9", "name": "B", "loc": "30 40"},
            ]
        )
        assert [n.key for n in nodes] == [7, 9]
        assert nodes[0].position == (10.0, 20.0)
        assert nodes[1].position == (30.0, 40.0)

    def test_duplicate_key_reassigned(self) -> None:
        nodes = normalize_nodes([{"key": 3, "name": "A"}, {"key": 3, "name": "B"}])
        assert [n.key for n in nodes] == [3, 4]

    def test_invalid_key_replaced_by_index(self) -> None:
        nodes = normalize_nodes([{"key": -1, "name": "A"}, {"key": "x", "name": "B"}])
        assert [n.key for n in nodes] == [1, 2]

    def test_degenerate_position_replaced(self) -> None:
        nodes = normalize_nodes(
            [
                {"name": "A", "position": "0 0 0 0"},
                {"name": "B", "position": "garbage"},
                {"name": "C"},
                {"name": "D", "position": "0 0"},
            ]
        )
        assert [n.position for n in nodes] == [
            (0.0, 0.0),
            (250.0, 0.0),
            (0.0, 150.0),
            (250.0, 150.0),
        ]

    def test_stereotype_forced(self) -> None:
        nodes = normalize_nodes([{"name": "A", "stereotype": "Interface"}])
        assert nodes[0].stereotype == "Class"

    def test_members_validated(self) -> None:
        nodes = normalize_nodes(
            [
                {
                    "name": "Order",
                    "properties": [
                        {"name": "id", "type": "string", "visibility": "-"},
                        {"name": "", "type": "int"},
                        "notAnObject",
                        {"name": "total", "visibility": "weird"},
                    ],
                    "methods": [
                        {"name": "calculateTotal", "returnType": "number"},
                        {"name": "cancel", "parameters": "none"},
                        {"visibility": "public"},
                    ],
                }
            ]
        )
        node = nodes[0]
        assert [p.name for p in node.properties] == ["id", "total"]
        assert node.properties[0].visibility == Visibility.PRIVATE
        assert node.properties[1].visibility == Visibility.PUBLIC
        assert node.properties[1].type == ""
        assert [m.name for m in node.methods] == ["calculateTotal", "cancel"]
        assert node.methods[0].return_type == "number"
        assert node.methods[1].return_type == "void"
        assert node.methods[1].parameters == []

    def test_member_kept_when_one_field_is_malformed(self) -> None:
        nodes = normalize_nodes(
            [
                {
                    "name": "Order",
                    "properties": [{"name": "id", "type": 5}],
                    "methods": [
                        {
                            "name": "addItem",
                            "parameters": [
                                "item: OrderItem",
                                {"name": "qty", "type": 1},
                                {"type": "x"},
                            ],
                            "returnType": 3,
                        },
                        {"name": "total", "parameters": []},
                    ],
                }
            ]
        )
        node = nodes[0]
        assert [p.name for p in node.properties] == ["id"]
        assert node.properties[0].type == "5"
        assert [m.name for m in node.methods] == ["addItem", "total"]
        add_item = node.methods[0]
        assert [p.name for p in add_item.parameters] == ["qty"]
        assert add_item.parameters[0].type == "1"
        assert add_item.return_type == "3"

    def test_non_object_nodes_dropped(self) -> None:
        nodes = normalize_nodes(["A", {"name": "B"}])
        assert [n.name for n in nodes] == ["B"]
        assert nodes[0].key == 1


# ---------------------------------------------------------------------------
# Relationship and multiplicity tokens
# ---------------------------------------------------------------------------


class TestNormalizeRelationship:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("generalization", RelationshipKind.INHERITANCE),
            ("Extends", RelationshipKind.INHERITANCE),
            ("implements", RelationshipKind.REALIZATION),
            ("uses", RelationshipKind.DEPENDENCY),
            ("composition", RelationshipKind.COMPOSITION),
            ("owns", RelationshipKind.ASSOCIATION),
            (None, RelationshipKind.ASSOCIATION),
        ],
    )
    def test_synonyms(self, raw: object, expected: RelationshipKind) -> None:
        assert normalize_relationship(raw) == expected


class TestNormalizeMultiplicity:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("many", "*"),
            ("N", "*"),
            (" one ", "1"),
            ("zero", "0"),
            ("0..1", "0..1"),
            (1, "1"),
            ("2..5", "2..5"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_tokens(self, raw: object, expected: str) -> None:
        assert normalize_multiplicity(raw) == expected


# ---------------------------------------------------------------------------
# Edge pass
# ---------------------------------------------------------------------------


class TestNormalizeEdges:
    names = frozenset({"Order", "OrderItem", "Product", "Shape"})

    def test_unknown_endpoint_dropped(self) -> None:
        edges = normalize_edges(
            [{"source": "Order", "target": "Customer", "relationship": "association"}],
            self.names,
        )
        assert edges == []

    def test_missing_endpoint_dropped(self) -> None:
        edges = normalize_edges([{"source": "Order"}], self.names)
        assert edges == []

    def test_endpoint_names_canonicalized(self) -> None:
        edges = normalize_edges(
            [{"from": "order", "to": "product", "type": "uses"}], self.names
        )
        assert len(edges) == 1
        assert (edges[0].source, edges[0].target) == ("Order", "Product")
        assert edges[0].relationship == RelationshipKind.DEPENDENCY

    def test_default_multiplicities(self) -> None:
        edges = normalize_edges(
            [
                {"source": "Order", "target": "OrderItem", "relationship": "composition"},
                {"source": "OrderItem", "target": "Product", "relationship": "association"},
                {"source": "Order", "target": "Product", "relationship": "dependency"},
            ],
            self.names,
        )
        assert [(e.source_multiplicity, e.target_multiplicity) for e in edges] == [
            ("1", "1..*"),
            ("*", "*"),
            ("", ""),
        ]

    def test_given_multiplicity_kept(self) -> None:
        edges = normalize_edges(
            [
                {
                    "source": "Order",
                    "target": "OrderItem",
                    "relationship": "composition",
                    "targetText": "many",
                }
            ],
            self.names,
        )
        assert (edges[0].source_multiplicity, edges[0].target_multiplicity) == ("", "*")

    def test_self_loops(self) -> None:
        edges = normalize_edges(
            [
                {"source": "Shape", "target": "Shape", "relationship": "association"},
                {"source": "Shape", "target": "Shape", "relationship": "inheritance"},
            ],
            self.names,
        )
        assert [e.relationship for e in edges] == [RelationshipKind.INHERITANCE]

    def test_label_from_text(self) -> None:
        edges = normalize_edges(
            [{"source": "Order", "target": "Product", "text": " lists "}], self.names
        )
        assert edges[0].label == "lists"

    def test_default_labels(self) -> None:
        raw = [{"source": "Order", "target": "OrderItem", "relationship": "composition"}]
        assert normalize_edges(raw, self.names)[0].label == ""
        assert normalize_edges(raw, self.names, default_labels=True)[0].label == "contains"


# ---------------------------------------------------------------------------
# normalize_diagram
# ---------------------------------------------------------------------------


class TestNormalizeDiagram:
    def test_edge_to_renamed_node_dropped(self) -> None:
        diagram = normalize_diagram(
            {
                "nodeDataArray": [{"name": "order"}, {"name": "order"}],
                "linkDataArray": [
                    {"source": "Order", "target": "Order2", "relationship": "association"},
                    {"source": "Order", "target": "Invoice"},
                ],
            }
        )
        assert [n.name for n in diagram.nodes] == ["Order", "Order2"]
        assert len(diagram.edges) == 1

    def test_alternate_keys(self) -> None:
        diagram = normalize_diagram(
            {"nodes": [{"name": "A"}, {"name": "B"}], "edges": [{"source": "A", "target": "B"}]}
        )
        assert len(diagram.nodes) == 2
        assert len(diagram.edges) == 1

    def test_non_mapping_yields_empty(self) -> None:
        diagram = normalize_diagram([1, 2])
        assert diagram.nodes == []
        assert diagram.edges == []
