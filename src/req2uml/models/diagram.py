"""Class-diagram node, edge and graph models.

Field names are snake_case in Python; the renderer-facing JSON uses the
camelCase aliases (``returnType``, ``sourceMultiplicity``, ``from``/``to``)
and positions are serialized as ``"x y"`` strings.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from req2uml.models.enums import RelationshipKind, Visibility

CLASS_STEREOTYPE = "Class"
GRAPH_MODEL_CLASS = "GraphLinksModel"
GRAPH_DESCRIPTION = "Generated by AI Agent"

_VISIBILITY_SYMBOLS: dict[str, str] = {
    "+": Visibility.PUBLIC.value,
    "-": Visibility.PRIVATE.value,
    "#": Visibility.PROTECTED.value,
}

_COORD_SPLIT = re.compile(r"[\s,]+")


def position_coordinates(value: Any) -> list[float] | None:
    """Return every numeric coordinate in *value*, or None if unparseable.

    Accepts ``"x y"`` strings (extra numbers such as ``"0 0 0 0"`` are kept),
    sequences of numbers and ``{"x": .., "y": ..}`` mappings.
    """
    if isinstance(value, str):
        parts = [p for p in _COORD_SPLIT.split(value.strip()) if p]
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    elif isinstance(value, dict) and "x" in value and "y" in value:
        parts = [value["x"], value["y"]]
    else:
        return None

    coords: list[float] = []
    for part in parts:
        if isinstance(part, bool):
            return None
        try:
            number = float(part)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        coords.append(number)
    return coords or None


def format_coordinate(value: float) -> str:
    """Render a coordinate without a trailing ``.0`` for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _type_text(value: Any, default: str = "") -> Any:
    """Coerce a type annotation to text; blanks and non-scalars become *default*."""
    if isinstance(value, (bool, int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return default


def _normalize_visibility(value: Any) -> Any:
    if value is None:
        return Visibility.PUBLIC.value
    if isinstance(value, str):
        text = value.strip().lower()
        text = _VISIBILITY_SYMBOLS.get(text, text)
        if text not in {v.value for v in Visibility}:
            return Visibility.PUBLIC.value
        return text
    return value


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class ClassProperty(BaseModel):
    """An attribute of a class."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    type: str = Field(default="")
    visibility: Visibility = Visibility.PUBLIC
    static: bool = False
    final: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def blank_type(cls, v: Any) -> Any:
        return _type_text(v)

    @field_validator("visibility", mode="before")
    @classmethod
    def normalize_visibility(cls, v: Any) -> Any:
        return _normalize_visibility(v)


class MethodParameter(BaseModel):
    """A single named, typed method parameter."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    type: str = Field(default="")

    @field_validator("type", mode="before")
    @classmethod
    def blank_type(cls, v: Any) -> Any:
        return _type_text(v)


class ClassMethod(BaseModel):
    """An operation of a class."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    parameters: list[MethodParameter] = Field(default_factory=list)
    return_type: str = Field(
        default="void",
        validation_alias=AliasChoices("return_type", "returnType", "type"),
        serialization_alias="returnType",
    )
    visibility: Visibility = Visibility.PUBLIC
    static: bool = False
    abstract: bool = False

    @field_validator("visibility", mode="before")
    @classmethod
    def normalize_visibility(cls, v: Any) -> Any:
        return _normalize_visibility(v)

    @field_validator("return_type", mode="before")
    @classmethod
    def default_return_type(cls, v: Any) -> Any:
        return _type_text(v, "void")

    @field_validator("parameters", mode="before")
    @classmethod
    def default_parameters(cls, v: Any) -> Any:
        """Keep the usable entries of a parameter list.

        A missing or non-list block means no parameters; entries that are
        not objects or have no name are dropped without losing the method.
        """
        if not isinstance(v, list):
            return []
        kept: list[Any] = []
        for item in v:
            if isinstance(item, MethodParameter):
                kept.append(item)
            elif isinstance(item, Mapping):
                name = item.get("name")
                if isinstance(name, str) and name.strip():
                    kept.append(item)
        return kept


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


class ClassNode(BaseModel):
    """A class box in the final diagram."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: int = Field(..., gt=0, description="Unique positive node identifier")
    name: str = Field(..., pattern=r"^[A-Za-z0-9_]+$")
    stereotype: str = Field(default=CLASS_STEREOTYPE)
    properties: list[ClassProperty] = Field(default_factory=list)
    methods: list[ClassMethod] = Field(default_factory=list)
    position: tuple[float, float] = Field(
        default=(0.0, 0.0),
        validation_alias=AliasChoices("position", "loc"),
    )

    @field_validator("position", mode="before")
    @classmethod
    def parse_position(cls, v: Any) -> Any:
        coords = position_coordinates(v)
        if coords is None or len(coords) < 2:
            raise ValueError(f"Unparseable position: {v!r}")
        return (coords[0], coords[1])

    @field_serializer("position")
    def serialize_position(self, position: tuple[float, float]) -> str:
        return f"{format_coordinate(position[0])} {format_coordinate(position[1])}"


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------


class NamedEdge(BaseModel):
    """A normalized relationship whose endpoints are still class names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str
    target: str
    relationship: RelationshipKind = RelationshipKind.ASSOCIATION
    label: str = ""
    source_multiplicity: str = Field(default="", alias="sourceMultiplicity")
    target_multiplicity: str = Field(default="", alias="targetMultiplicity")


class DiagramEdge(BaseModel):
    """A relationship whose endpoints have been resolved to node keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_key: int = Field(..., alias="from")
    to_key: int = Field(..., alias="to")
    relationship: RelationshipKind
    label: Optional[str] = None
    source_multiplicity: Optional[str] = Field(default=None, alias="sourceMultiplicity")
    target_multiplicity: Optional[str] = Field(default=None, alias="targetMultiplicity")


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------


class NormalizedDiagram(BaseModel):
    """Stage-2 output: finalized nodes plus name-valid edges."""

    model_config = ConfigDict(frozen=True)

    nodes: list[ClassNode] = Field(default_factory=list)
    edges: list[NamedEdge] = Field(default_factory=list)


class DiagramGraph(BaseModel):
    """The renderable class diagram handed back to the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    model_class: str = Field(default=GRAPH_MODEL_CLASS, alias="class")
    nodes: list[ClassNode] = Field(default_factory=list)
    edges: list[DiagramEdge] = Field(default_factory=list)
    description: str = GRAPH_DESCRIPTION

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the renderer JSON contract."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
