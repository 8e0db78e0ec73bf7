"""Static lookup tables shared by both normalization stages.

Every table is read-only (``frozenset`` / ``MappingProxyType``) and built once
at import time.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from req2uml.models.enums import RelationshipKind

PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9_]*$")

PLACEHOLDER_CLASS_NAME = "UnknownClass"

CANONICAL_KINDS: frozenset[str] = frozenset(k.value for k in RelationshipKind)

# Kinds for which a class may relate to itself.
SELF_LOOP_KINDS: frozenset[RelationshipKind] = frozenset({
    RelationshipKind.INHERITANCE,
    RelationshipKind.REALIZATION,
})

RELATIONSHIP_SYNONYMS: Mapping[str, RelationshipKind] = MappingProxyType({
    "inheritance": RelationshipKind.INHERITANCE,
    "generalization": RelationshipKind.INHERITANCE,
    "extends": RelationshipKind.INHERITANCE,
    "realization": RelationshipKind.REALIZATION,
    "implements": RelationshipKind.REALIZATION,
    "association": RelationshipKind.ASSOCIATION,
    "aggregation": RelationshipKind.AGGREGATION,
    "composition": RelationshipKind.COMPOSITION,
    "dependency": RelationshipKind.DEPENDENCY,
    "uses": RelationshipKind.DEPENDENCY,
})

MULTIPLICITY_TOKENS: Mapping[str, str] = MappingProxyType({
    "0..*": "0..*",
    "0..1": "0..1",
    "1..*": "1..*",
    "*": "*",
    "0": "0",
    "1": "1",
    "n": "*",
    "many": "*",
    "zero": "0",
    "one": "1",
})

# (source, target) multiplicities applied when the generator gave neither.
DEFAULT_MULTIPLICITIES: Mapping[RelationshipKind, tuple[str, str]] = MappingProxyType({
    RelationshipKind.COMPOSITION: ("1", "1..*"),
    RelationshipKind.AGGREGATION: ("1", "0..*"),
    RelationshipKind.ASSOCIATION: ("*", "*"),
    RelationshipKind.INHERITANCE: ("", ""),
    RelationshipKind.REALIZATION: ("", ""),
    RelationshipKind.DEPENDENCY: ("", ""),
})

# Labels used when label defaulting is switched on.
DEFAULT_LABELS: Mapping[RelationshipKind, str] = MappingProxyType({
    RelationshipKind.INHERITANCE: "extends",
    RelationshipKind.REALIZATION: "implements",
    RelationshipKind.ASSOCIATION: "",
    RelationshipKind.AGGREGATION: "has",
    RelationshipKind.COMPOSITION: "contains",
    RelationshipKind.DEPENDENCY: "uses",
})

# Layout grid spacing in planar units.
GRID_SPACING_X = 250
GRID_SPACING_Y = 150
