"""Enumerations for the class-diagram data model."""

from enum import Enum


class RelationshipKind(str, Enum):
    """Canonical UML relationship kinds."""

    INHERITANCE = "inheritance"
    REALIZATION = "realization"
    ASSOCIATION = "association"
    AGGREGATION = "aggregation"
    COMPOSITION = "composition"
    DEPENDENCY = "dependency"


class Visibility(str, Enum):
    """Member visibility modifiers."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"


class IssueSeverity(str, Enum):
    """Severity of a consistency issue.

    Only LOGIC_ERROR invalidates a candidate set.
    """

    LOGIC_ERROR = "logic-error"
    INFORMATIONAL = "informational"


class IssueCategory(str, Enum):
    """Which consistency check produced an issue."""

    REFERENTIAL = "referential"
    INHERITANCE_CYCLE = "inheritance-cycle"
    ORPHAN_CLASS = "orphan-class"

