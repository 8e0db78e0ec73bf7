"""Stage-2 normalization of the generator's detailed node/edge arrays.

The node pass runs first and fixes names, keys, members and positions; the
edge pass then only keeps edges whose canonical endpoint names exist in the
node pass's output. Endpoints stay as names here: resolution to keys is the
assembler's job.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from req2uml.models.diagram import (
    CLASS_STEREOTYPE,
    ClassMethod,
    ClassNode,
    ClassProperty,
    NamedEdge,
    NormalizedDiagram,
)
from req2uml.models.enums import RelationshipKind
from req2uml.normalize.candidates import first_list
from req2uml.normalize.layout import resolve_position
from req2uml.normalize.tables import (
    DEFAULT_LABELS,
    DEFAULT_MULTIPLICITIES,
    MULTIPLICITY_TOKENS,
    PLACEHOLDER_CLASS_NAME,
    RELATIONSHIP_SYNONYMS,
    SELF_LOOP_KINDS,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")

_NODE_KEYS = ("nodeDataArray", "nodes")
_EDGE_KEYS = ("linkDataArray", "edges")


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first of *keys* present in *raw* with a non-None value."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


# ---------------------------------------------------------------------------
# Names, keys and members
# ---------------------------------------------------------------------------


def canonical_name(raw: Any) -> str:
    """Strip non-identifier characters and capitalize the first letter.

    Empty or non-string input becomes the ``UnknownClass`` placeholder.
    """
    if not isinstance(raw, str):
        return PLACEHOLDER_CLASS_NAME
    clean = _NON_IDENTIFIER.sub("", raw.strip())
    if not clean:
        return PLACEHOLDER_CLASS_NAME
    return clean[0].upper() + clean[1:]


def unique_name(name: str, taken: set[str]) -> str:
    """Return *name*, or *name* plus the smallest free integer suffix >= 2."""
    if name not in taken:
        return name
    counter = 2
    while f"{name}{counter}" in taken:
        counter += 1
    return f"{name}{counter}"


def _coerce_key(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, float) and raw.is_integer():
        return int(raw) if raw > 0 else None
    if isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())
        return value if value > 0 else None
    return None


def _members(raw: Any, model: type[M], owner: str) -> list[M]:
    """Validate a property/method list, dropping entries that do not fit."""
    if not isinstance(raw, list):
        return []
    result: list[M] = []
    for item in raw:
        if not isinstance(item, Mapping):
            logger.debug("Dropping non-object %s on %s", model.__name__, owner)
            continue
        try:
            result.append(model.model_validate(item))
        except ValidationError as exc:
            logger.debug(
                "Dropping invalid %s on %s: %s",
                model.__name__,
                owner,
                exc.errors()[0]["msg"],
            )
    return result


# ---------------------------------------------------------------------------
# Node pass
# ---------------------------------------------------------------------------


def normalize_nodes(raw_nodes: list[Any]) -> list[ClassNode]:
    """Normalize generator nodes, preserving their order.

    Names are made unique, keys are kept when usable (else the 1-based
    position), members are validated and degenerate positions are replaced
    with grid coordinates.
    """
    entries = [n for n in raw_nodes if isinstance(n, Mapping)]
    if len(entries) != len(raw_nodes):
        logger.warning(
            "Dropping %d non-object node entries", len(raw_nodes) - len(entries)
        )

    count = len(entries)
    taken_names: set[str] = set()
    used_keys: set[int] = set()
    nodes: list[ClassNode] = []

    for index, raw in enumerate(entries):
        base = canonical_name(raw.get("name"))
        name = unique_name(base, taken_names)
        if name != base:
            logger.info("Renamed duplicate class %s to %s", base, name)
        taken_names.add(name)

        key = _coerce_key(raw.get("key")) or index + 1
        if key in used_keys:
            replacement = max(used_keys) + 1
            logger.warning(
                "Node %s reuses key %d; assigning %d", name, key, replacement
            )
            key = replacement
        used_keys.add(key)

        raw_position = raw["position"] if "position" in raw else raw.get("loc")
        nodes.append(
            ClassNode(
                key=key,
                name=name,
                stereotype=CLASS_STEREOTYPE,
                properties=_members(raw.get("properties"), ClassProperty, name),
                methods=_members(raw.get("methods"), ClassMethod, name),
                position=resolve_position(raw_position, index, count),
            )
        )

    return nodes


# ---------------------------------------------------------------------------
# Edge pass
# ---------------------------------------------------------------------------


def normalize_relationship(raw: Any) -> RelationshipKind:
    """Map free relationship text to a canonical kind (default association)."""
    text = raw.strip().lower() if isinstance(raw, str) else ""
    kind = RELATIONSHIP_SYNONYMS.get(text)
    if kind is None:
        if text:
            logger.debug("Unknown relationship %r, using association", raw)
        return RelationshipKind.ASSOCIATION
    return kind


def normalize_multiplicity(raw: Any) -> str:
    """Canonicalize a multiplicity token; unknown tokens pass through trimmed."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        raw = str(raw)
    if not isinstance(raw, str):
        return ""
    trimmed = raw.strip()
    if not trimmed:
        return ""
    return MULTIPLICITY_TOKENS.get(trimmed.lower(), trimmed)


def normalize_edges(
    raw_edges: list[Any],
    node_names: frozenset[str] | set[str],
    *,
    default_labels: bool = False,
) -> list[NamedEdge]:
    """Normalize generator edges against the canonical node-name set.

    Args:
        raw_edges: Edge objects from the generator.
        node_names: Names produced by :func:`normalize_nodes`.
        default_labels: Fill empty labels with a per-kind verb
            (``contains``, ``extends`` ...).

    Returns:
        Edges whose endpoints both name existing nodes.
    """
    edges: list[NamedEdge] = []
    for raw in raw_edges:
        if not isinstance(raw, Mapping):
            logger.debug("Dropping non-object edge %r", raw)
            continue

        raw_source = _pick(raw, "source", "from")
        raw_target = _pick(raw, "target", "to")
        if not isinstance(raw_source, str) or not isinstance(raw_target, str):
            logger.warning("Dropping edge without source/target names: %r", raw)
            continue

        source = canonical_name(raw_source)
        target = canonical_name(raw_target)
        if source not in node_names or target not in node_names:
            logger.warning(
                "Dropping edge %s -> %s: unknown class", source, target
            )
            continue

        kind = normalize_relationship(_pick(raw, "relationship", "type", "kind"))
        if source == target and kind not in SELF_LOOP_KINDS:
            logger.warning("Dropping %s self-loop on %s", kind.value, source)
            continue

        source_mult = normalize_multiplicity(
            _pick(raw, "sourceMultiplicity", "sourceText", "source_multiplicity")
        )
        target_mult = normalize_multiplicity(
            _pick(raw, "targetMultiplicity", "targetText", "target_multiplicity")
        )
        if not source_mult and not target_mult:
            source_mult, target_mult = DEFAULT_MULTIPLICITIES[kind]

        label = _pick(raw, "label", "text")
        label = label.strip() if isinstance(label, str) else ""
        if not label and default_labels:
            label = DEFAULT_LABELS[kind]

        edges.append(
            NamedEdge(
                source=source,
                target=target,
                relationship=kind,
                label=label,
                source_multiplicity=source_mult,
                target_multiplicity=target_mult,
            )
        )

    return edges


def normalize_diagram(value: Any, *, default_labels: bool = False) -> NormalizedDiagram:
    """Normalize a decoded stage-2 object into nodes plus name-valid edges."""
    if not isinstance(value, Mapping):
        logger.warning(
            "Stage-2 payload is %s, not an object; returning empty diagram",
            type(value).__name__,
        )
        return NormalizedDiagram()

    nodes = normalize_nodes(first_list(value, _NODE_KEYS))
    names = frozenset(n.name for n in nodes)
    edges = normalize_edges(
        first_list(value, _EDGE_KEYS), names, default_labels=default_labels
    )
    logger.debug("Normalized diagram: %d nodes, %d edges", len(nodes), len(edges))
    return NormalizedDiagram(nodes=nodes, edges=edges)
