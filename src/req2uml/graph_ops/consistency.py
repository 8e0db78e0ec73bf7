"""Graph-level consistency checks over a stage-1 candidate set.

Checks run in a fixed order and append to a single issue list:

1. **Referential integrity** – relationship endpoints missing from the class
   list (informational; stage-1 normalization should already prevent it).
2. **Inheritance cycles** – DFS over inheritance edges only (logic error).
3. **Orphans** – classes touching no relationship, when there is more than
   one class (informational).

Only logic errors make a report invalid. The report keeps at most five issues,
but validity is decided over all of them.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from req2uml.models.candidate import (
    MAX_ISSUES,
    CandidateRelationship,
    CandidateSet,
    ConsistencyIssue,
    ConsistencyReport,
    ConsistencySummary,
)
from req2uml.models.enums import IssueCategory, IssueSeverity, RelationshipKind

logger = logging.getLogger(__name__)


def find_inheritance_cycles(
    relationships: list[CandidateRelationship],
) -> list[list[str]]:
    """Find inheritance cycles with a DFS from every unvisited class.

    Traversal from a root stops at the first edge back into the current
    recursion stack, so each root reports at most one cycle and the cycles of
    a strongly connected component are not enumerated.

    Args:
        relationships: Candidate relationships; only inheritance is followed.

    Returns:
        Cycle paths such as ``["A", "B", "C", "A"]``. Empty if acyclic.
    """
    adjacency: dict[str, list[str]] = defaultdict(list)
    for rel in relationships:
        if rel.kind == RelationshipKind.INHERITANCE:
            adjacency[rel.from_class].append(rel.to_class)

    visited: set[str] = set()
    path: list[str] = []
    on_stack: set[str] = set()
    cycles: list[list[str]] = []

    def _dfs(node: str) -> list[str] | None:
        visited.add(node)
        path.append(node)
        on_stack.add(node)
        for neighbor in adjacency.get(node, []):
            if neighbor in on_stack:
                return path[path.index(neighbor):] + [neighbor]
            if neighbor not in visited:
                found = _dfs(neighbor)
                if found:
                    return found
        path.pop()
        on_stack.discard(node)
        return None

    for root in list(adjacency):
        if root in visited:
            continue
        path.clear()
        on_stack.clear()
        cycle = _dfs(root)
        if cycle:
            cycles.append(cycle)

    return cycles


def check_consistency(candidates: CandidateSet) -> ConsistencyReport:
    """Validate the structure of a candidate set.

    Args:
        candidates: Output of stage-1 normalization.

    Returns:
        A report with validity, up to five issues, and summary counts.
    """
    issues: list[ConsistencyIssue] = []
    classes = set(candidates.classes)
    relationships = candidates.relationships

    for rel in relationships:
        if rel.from_class not in classes:
            issues.append(
                ConsistencyIssue(
                    severity=IssueSeverity.INFORMATIONAL,
                    category=IssueCategory.REFERENTIAL,
                    message=f'Relationship source "{rel.from_class}" is not a known class',
                    subjects=[rel.from_class],
                )
            )
        if rel.to_class not in classes:
            issues.append(
                ConsistencyIssue(
                    severity=IssueSeverity.INFORMATIONAL,
                    category=IssueCategory.REFERENTIAL,
                    message=f'Relationship target "{rel.to_class}" is not a known class',
                    subjects=[rel.to_class],
                )
            )

    for cycle in find_inheritance_cycles(relationships):
        issues.append(
            ConsistencyIssue(
                severity=IssueSeverity.LOGIC_ERROR,
                category=IssueCategory.INHERITANCE_CYCLE,
                message=f"Logic error: inheritance cycle {' -> '.join(cycle)}",
                subjects=cycle[:-1],
            )
        )

    connected: set[str] = set()
    for rel in relationships:
        connected.add(rel.from_class)
        connected.add(rel.to_class)

    if len(classes) > 1:
        for cls in sorted(classes - connected):
            issues.append(
                ConsistencyIssue(
                    severity=IssueSeverity.INFORMATIONAL,
                    category=IssueCategory.ORPHAN_CLASS,
                    message=(
                        f'Class "{cls}" takes part in no relationship; '
                        f"check whether one is missing"
                    ),
                    subjects=[cls],
                )
            )

    is_valid = not any(i.severity == IssueSeverity.LOGIC_ERROR for i in issues)
    if len(issues) > MAX_ISSUES:
        logger.info("Reporting %d of %d consistency issues", MAX_ISSUES, len(issues))

    report = ConsistencyReport(
        is_valid=is_valid,
        issues=issues[:MAX_ISSUES],
        summary=ConsistencySummary(
            class_count=len(classes),
            relationship_count=len(relationships),
            connected_class_count=len(connected),
        ),
    )
    logger.debug(
        "Consistency check: valid=%s, %d issues", report.is_valid, len(issues)
    )
    return report
