"""Assemble the final diagram graph by resolving edge names to node keys."""

from __future__ import annotations

import logging

from req2uml.models.diagram import (
    DiagramEdge,
    DiagramGraph,
    NamedEdge,
    NormalizedDiagram,
)

logger = logging.getLogger(__name__)


def assemble_model(diagram: NormalizedDiagram) -> DiagramGraph:
    """Resolve every edge's class names to node keys and build the graph.

    Edges whose endpoints do not resolve are dropped with a warning; the
    node list is passed through unchanged.

    Args:
        diagram: Stage-2 normalized nodes and name-valid edges.

    Returns:
        The renderable :class:`DiagramGraph`.
    """
    name_to_key = {node.name: node.key for node in diagram.nodes}

    edges: list[DiagramEdge] = []
    for edge in diagram.edges:
        from_key = name_to_key.get(edge.source)
        to_key = name_to_key.get(edge.target)
        if from_key is None or to_key is None:
            logger.warning(
                "Ignoring edge %s -> %s: node not found", edge.source, edge.target
            )
            continue
        edges.append(
            DiagramEdge(
                from_key=from_key,
                to_key=to_key,
                relationship=edge.relationship,
                label=edge.label or None,
                source_multiplicity=edge.source_multiplicity or None,
                target_multiplicity=edge.target_multiplicity or None,
            )
        )

    graph = DiagramGraph(nodes=list(diagram.nodes), edges=edges)
    logger.info(
        "Assembled diagram: %d nodes, %d edges", graph.node_count, graph.edge_count
    )
    return graph


def named_edges(graph: DiagramGraph) -> NormalizedDiagram:
    """Turn a graph's key-based edges back into name-based edges.

    Feeding the result to :func:`assemble_model` reproduces *graph*.
    Edges pointing at unknown keys are dropped.
    """
    key_to_name = {node.key: node.name for node in graph.nodes}
    edges: list[NamedEdge] = []
    for edge in graph.edges:
        source = key_to_name.get(edge.from_key)
        target = key_to_name.get(edge.to_key)
        if source is None or target is None:
            logger.warning(
                "Ignoring edge %d -> %d: key not found", edge.from_key, edge.to_key
            )
            continue
        edges.append(
            NamedEdge(
                source=source,
                target=target,
                relationship=edge.relationship,
                label=edge.label or "",
                source_multiplicity=edge.source_multiplicity or "",
                target_multiplicity=edge.target_multiplicity or "",
            )
        )
    return NormalizedDiagram(nodes=list(graph.nodes), edges=edges)
