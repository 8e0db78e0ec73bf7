"""Normalization of decoded generator output for both pipeline stages."""

from req2uml.normalize.candidates import normalize_candidates, normalize_confidence
from req2uml.normalize.diagram import (
    canonical_name,
    normalize_diagram,
    normalize_edges,
    normalize_multiplicity,
    normalize_nodes,
    normalize_relationship,
)
from req2uml.normalize.layout import grid_position

__all__ = [
    "canonical_name",
    "grid_position",
    "normalize_candidates",
    "normalize_confidence",
    "normalize_diagram",
    "normalize_edges",
    "normalize_multiplicity",
    "normalize_nodes",
    "normalize_relationship",
]
