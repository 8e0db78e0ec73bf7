"""Stage-1 candidate set and consistency report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from req2uml.models.enums import IssueCategory, IssueSeverity, RelationshipKind

MAX_AMBIGUITIES = 5
MAX_ISSUES = 5


class CandidateRelationship(BaseModel):
    """A preliminary relationship between two candidate classes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_class: str = Field(..., alias="from", description="Source class name")
    to_class: str = Field(..., alias="to", description="Target class name")
    kind: RelationshipKind = Field(..., alias="type", description="Relationship kind")
    confidence: float = Field(
        default=0.7,
        ge=0.1,
        le=0.95,
        description="Generator confidence, clamped to [0.1, 0.95]",
    )

    @property
    def identity(self) -> tuple[str, str, RelationshipKind]:
        """Composite key used for deduplication."""
        return (self.from_class, self.to_class, self.kind)


class CandidateSet(BaseModel):
    """Normalized output of the extraction stage.

    Wire names follow the extraction prompt's schema
    (``identified_classes``, ``potential_relationships``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    classes: list[str] = Field(
        default_factory=list,
        alias="identified_classes",
        description="Sorted, unique PascalCase class names",
    )
    relationships: list[CandidateRelationship] = Field(
        default_factory=list,
        alias="potential_relationships",
        description="Validated relationships between classes",
    )
    ambiguities: list[str] = Field(
        default_factory=list,
        max_length=MAX_AMBIGUITIES,
        description="Open questions raised by the generator",
    )

    @property
    def has_ambiguities(self) -> bool:
        return bool(self.ambiguities)


class ConsistencyIssue(BaseModel):
    """A single finding of the consistency checker."""

    model_config = ConfigDict(frozen=True)

    severity: IssueSeverity
    category: IssueCategory
    message: str
    subjects: list[str] = Field(
        default_factory=list,
        description="Class names the issue refers to",
    )


class ConsistencySummary(BaseModel):
    """Counts computed over the whole candidate set."""

    model_config = ConfigDict(frozen=True)

    class_count: int = 0
    relationship_count: int = 0
    connected_class_count: int = 0


class ConsistencyReport(BaseModel):
    """Result of checking a candidate set."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool = True
    issues: list[ConsistencyIssue] = Field(default_factory=list, max_length=MAX_ISSUES)
    summary: ConsistencySummary = Field(default_factory=ConsistencySummary)

    @property
    def logic_errors(self) -> list[ConsistencyIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.LOGIC_ERROR]
