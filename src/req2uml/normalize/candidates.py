"""Stage-1 normalization of the generator's class/relationship candidates.

Takes whatever the repair step decoded (fields may be missing, wrongly typed
or malformed) and returns a :class:`CandidateSet` whose three fields are
always present. Malformed items are dropped and logged, never raised.
"""

from __future__ import annotations

import logging
import math
import re
import string
from typing import Any, Mapping

from req2uml.models.candidate import MAX_AMBIGUITIES, CandidateRelationship, CandidateSet
from req2uml.models.enums import RelationshipKind
from req2uml.normalize.tables import CANONICAL_KINDS, PASCAL_CASE

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.7
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 0.95

_ASCII_LOWER = frozenset(string.ascii_lowercase)

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

_CLASS_KEYS = ("identified_classes", "classes")
_RELATIONSHIP_KEYS = ("potential_relationships", "relationships")


def to_class_name(raw: str) -> str:
    """Trim *raw* and upper-case a leading ASCII lower-case letter."""
    name = raw.strip()
    if name[:1] in _ASCII_LOWER:
        return name[0].upper() + name[1:]
    return name


def normalize_confidence(raw: Any) -> float:
    """Clamp a numeric or numeric-string confidence to [0.1, 0.95].

    Anything else (including booleans and NaN) yields the 0.7 default.
    """
    value: float | None = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        match = _LEADING_NUMBER.match(raw)
        if match:
            value = float(match.group(0))

    if value is None or math.isnan(value):
        return DEFAULT_CONFIDENCE
    return round(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value)), 2)


def first_list(value: Mapping[str, Any], keys: tuple[str, ...]) -> list[Any]:
    """Return the first list-valued entry of *value* among *keys*."""
    for key in keys:
        items = value.get(key)
        if isinstance(items, list):
            return items
    return []


def _normalize_classes(raw_classes: list[Any]) -> list[str]:
    result: set[str] = set()
    for raw in raw_classes:
        if not isinstance(raw, str):
            logger.debug("Dropping non-string class entry %r", raw)
            continue
        name = to_class_name(raw)
        if not PASCAL_CASE.match(name):
            logger.debug("Dropping class %r: not PascalCase", raw)
            continue
        result.add(name)
    return sorted(result)


def _normalize_relationship(raw: Any) -> CandidateRelationship | None:
    """Validate a single relationship entry, or return None to drop it."""
    if not isinstance(raw, Mapping):
        logger.debug("Dropping non-object relationship %r", raw)
        return None

    source = raw.get("from")
    target = raw.get("to")
    kind = raw.get("type") or raw.get("kind")
    if not source or not target or not kind:
        logger.debug("Dropping relationship missing from/to/type: %r", raw)
        return None
    if not all(isinstance(v, str) for v in (source, target, kind)):
        logger.debug("Dropping relationship with non-string fields: %r", raw)
        return None

    kind_text = kind.strip().lower()
    if kind_text not in CANONICAL_KINDS:
        logger.debug("Dropping relationship with unknown type %r", kind)
        return None

    from_class = to_class_name(source)
    to_class = to_class_name(target)
    if from_class == to_class:
        logger.debug("Dropping self-referential relationship on %s", from_class)
        return None
    if not (PASCAL_CASE.match(from_class) and PASCAL_CASE.match(to_class)):
        logger.debug(
            "Dropping relationship %s -> %s: endpoint not PascalCase",
            from_class,
            to_class,
        )
        return None

    return CandidateRelationship(
        from_class=from_class,
        to_class=to_class,
        kind=RelationshipKind(kind_text),
        confidence=normalize_confidence(raw.get("confidence")),
    )


def _normalize_ambiguities(raw_ambiguities: list[Any]) -> list[str]:
    result = [
        item.strip()
        for item in raw_ambiguities
        if isinstance(item, str) and item.strip()
    ]
    if len(result) > MAX_AMBIGUITIES:
        logger.info(
            "Keeping %d of %d ambiguities", MAX_AMBIGUITIES, len(result)
        )
    return result[:MAX_AMBIGUITIES]


def normalize_candidates(value: Any) -> CandidateSet:
    """Normalize a decoded stage-1 object into a :class:`CandidateSet`.

    Args:
        value: Anything the repair step produced. Non-mappings yield an
            empty candidate set.

    Returns:
        A candidate set with sorted unique class names, deduplicated
        relationships whose endpoints are all listed as classes, and at
        most five ambiguities.
    """
    if not isinstance(value, Mapping):
        logger.warning(
            "Stage-1 payload is %s, not an object; returning empty candidates",
            type(value).__name__,
        )
        return CandidateSet()

    classes = _normalize_classes(first_list(value, _CLASS_KEYS))

    relationships: list[CandidateRelationship] = []
    seen: set[tuple[str, str, RelationshipKind]] = set()
    for raw in first_list(value, _RELATIONSHIP_KEYS):
        rel = _normalize_relationship(raw)
        if rel is None:
            continue
        if rel.identity in seen:
            logger.debug("Dropping duplicate relationship %s", rel.identity)
            continue
        seen.add(rel.identity)
        relationships.append(rel)

    # Auto-complete endpoints the generator forgot to list as classes.
    known = set(classes)
    for rel in relationships:
        for endpoint in (rel.from_class, rel.to_class):
            if endpoint not in known:
                logger.info("Adding class %s referenced by a relationship", endpoint)
                known.add(endpoint)

    ambiguities = _normalize_ambiguities(first_list(value, ("ambiguities",)))

    candidates = CandidateSet(
        classes=sorted(known),
        relationships=relationships,
        ambiguities=ambiguities,
    )
    logger.debug(
        "Normalized candidates: %d classes, %d relationships, %d ambiguities",
        len(candidates.classes),
        len(candidates.relationships),
        len(candidates.ambiguities),
    )
    return candidates
