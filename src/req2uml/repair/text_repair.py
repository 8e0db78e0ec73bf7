"""Recover structured JSON values from noisy generator output.

Generators routinely wrap JSON in markdown fences, leave trailing commas,
forget to quote keys or use single quotes. Decoding runs in two tiers:

1. **Structural repair**: strip code fences, run ``json_repair`` over the
   text and parse the result strictly with :func:`json.loads`.
2. **Targeted fixes**: take the first greedy ``{...}`` span of the raw text,
   apply a handful of regex rewrites and parse again.

If both tiers fail, :class:`RepairFailure` is raised with the first tier's
parse error chained as its cause. Nothing here calls the generator again.

Usage::

    from req2uml.repair import repair_json

    data = repair_json('```json\\n{"identified_classes": ["Order",]}\\n```')
    assert data == {"identified_classes": ["Order"]}
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from json_repair import repair_json as structural_repair
from pydantic import BaseModel

from req2uml.repair.exceptions import RepairFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PREVIEW_LEN = 200

# Fenced block anywhere in the text, with or without a language tag.
_FENCED_BLOCK = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\n?(.*?)```", re.DOTALL)
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")

_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")

_PARSE_ERRORS: tuple[type[Exception], ...] = (ValueError, TypeError, RecursionError)


class _ShapeMismatch(ValueError):
    """Decoded value is valid JSON but not of the expected shape."""


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence around *text*, if present."""
    stripped = text.strip()
    match = _FENCED_BLOCK.search(stripped)
    if match:
        return match.group(1).strip()
    # Unterminated or dangling fences
    stripped = _LEADING_FENCE.sub("", stripped)
    stripped = _TRAILING_FENCE.sub("", stripped)
    return stripped.strip()


def apply_targeted_fixes(fragment: str) -> str:
    """Rewrite common near-JSON defects in *fragment*.

    Converts single quotes to double quotes, quotes bare object keys and
    drops trailing commas before closing brackets.
    """
    fixed = fragment.replace("'", '"')
    fixed = _BARE_KEY.sub(r'\1"\2"\3', fixed)
    fixed = _TRAILING_COMMA.sub(r"\1", fixed)
    return fixed


def _coerce(data: Any, shape: type[T]) -> T:
    """Check *data* against *shape* (a builtin type or a pydantic model)."""
    if isinstance(shape, type) and issubclass(shape, BaseModel):
        return shape.model_validate(data)  # type: ignore[return-value]
    if not isinstance(data, shape):
        raise _ShapeMismatch(
            f"Expected {shape.__name__}, decoded {type(data).__name__}"
        )
    return data


def _structural_tier(text: str) -> Any:
    cleaned = strip_code_fence(text)
    if not cleaned:
        raise _ShapeMismatch("Response is empty")
    repaired = structural_repair(cleaned)
    if not isinstance(repaired, str):
        repaired = json.dumps(repaired)
    return json.loads(repaired)


def _targeted_tier(text: str) -> Any:
    match = _OBJECT_SPAN.search(text)
    if match is None:
        raise _ShapeMismatch("No JSON object span found")
    return json.loads(apply_targeted_fixes(match.group(0)))


def repair_json(text: str, shape: type[T] = dict) -> T:  # type: ignore[assignment]
    """Decode generator *text* into a value of the expected *shape*.

    Args:
        text: Raw generator output.
        shape: ``dict``/``list`` to require a JSON object/array, or a
            pydantic model class to validate the decoded value against.

    Returns:
        The decoded (and, for models, validated) value.

    Raises:
        RepairFailure: If neither repair tier yields a value of *shape*.
    """
    if not isinstance(text, str):
        raise RepairFailure(f"Expected text, got {type(text).__name__}")

    try:
        return _coerce(_structural_tier(text), shape)
    except _PARSE_ERRORS as exc:
        first_error = exc

    logger.warning(
        "Structural JSON repair failed (%s); trying targeted fixes", first_error
    )

    try:
        value = _coerce(_targeted_tier(text), shape)
    except _PARSE_ERRORS as exc:
        logger.error("Targeted JSON repair failed: %s", exc)
        raise RepairFailure(
            "Invalid JSON format",
            preview=text.strip()[:_PREVIEW_LEN],
        ) from first_error

    logger.debug("Recovered JSON with targeted fixes (%d chars)", len(text))
    return value
