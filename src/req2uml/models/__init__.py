"""Data models for candidate sets, consistency reports and diagram graphs."""

from req2uml.models.candidate import (
    CandidateRelationship,
    CandidateSet,
    ConsistencyIssue,
    ConsistencyReport,
    ConsistencySummary,
)
from req2uml.models.diagram import (
    ClassMethod,
    ClassNode,
    ClassProperty,
    DiagramEdge,
    DiagramGraph,
    MethodParameter,
    NamedEdge,
    NormalizedDiagram,
)
from req2uml.models.enums import (
    IssueCategory,
    IssueSeverity,
    RelationshipKind,
    Visibility,
)
from req2uml.models.outcome import (
    ClarificationContext,
    ClarificationOutcome,
    DiagramRequest,
    Outcome,
    SuccessOutcome,
)

__all__ = [
    "CandidateRelationship",
    "CandidateSet",
    "ClarificationContext",
    "ClarificationOutcome",
    "ClassMethod",
    "ClassNode",
    "ClassProperty",
    "ConsistencyIssue",
    "ConsistencyReport",
    "ConsistencySummary",
    "DiagramEdge",
    "DiagramGraph",
    "DiagramRequest",
    "IssueCategory",
    "IssueSeverity",
    "MethodParameter",
    "NamedEdge",
    "NormalizedDiagram",
    "Outcome",
    "RelationshipKind",
    "SuccessOutcome",
    "Visibility",
]
