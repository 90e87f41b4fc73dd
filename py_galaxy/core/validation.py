"""
Read-only integrity checks for generated maps.

Used by tests and by startup diagnostics; never modifies the territories.
"""

from collections import Counter
from enum import Enum
from typing import Dict, List, Optional, Sequence

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .connectivity import count_connected_components
from .territories import Territory

logger = structlog.get_logger()


class IssueType(str, Enum):
    """Kinds of map inconsistencies."""

    DANGLING = "dangling"
    UNIDIRECTIONAL = "unidirectional"
    SELF_LOOP = "self_loop"
    DUPLICATE = "duplicate"
    DUPLICATE_ID = "duplicate_id"


class LaneIssue(BaseModel):
    """One bad neighbor reference, or a territory id used more than once."""

    model_config = ConfigDict(frozen=True)

    type: IssueType
    territory_id: int
    neighbor_id: Optional[int] = None


class ValidationReport(BaseModel):
    """Outcome of ``validate_territories``."""

    model_config = ConfigDict(frozen=True)

    territory_count: int = Field(description="Territories inspected")
    lane_count: int = Field(description="Distinct undirected lanes")
    components: int = Field(description="Connected components over valid references")
    issues: List[LaneIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues and self.components <= 1

    def issues_of(self, issue_type: IssueType) -> List[LaneIssue]:
        return [issue for issue in self.issues if issue.type == issue_type]


def validate_territories(territories: Sequence[Territory]) -> ValidationReport:
    """
    Check lane consistency across a territory list.

    Reports territory ids used more than once, neighbor ids that reference
    no territory, links missing their reverse direction, self-loops and
    repeated neighbor ids, and counts connected components. Territories
    sharing an id are checked as the last one with that id.

    Args:
        territories: Territories to inspect (not modified)

    Returns:
        ValidationReport
    """
    by_id: Dict[int, Territory] = {t.id: t for t in territories}
    index = {territory_id: i for i, territory_id in enumerate(by_id)}
    adjacency: List[List[int]] = [[] for _ in by_id]
    lanes = set()
    issues: List[LaneIssue] = []

    for territory_id, count in Counter(t.id for t in territories).items():
        if count > 1:
            issues.append(LaneIssue(type=IssueType.DUPLICATE_ID, territory_id=territory_id))

    for territory in by_id.values():
        counts = Counter(territory.neighbors)
        for neighbor_id, count in counts.items():
            if count > 1:
                issues.append(LaneIssue(type=IssueType.DUPLICATE,
                                        territory_id=territory.id, neighbor_id=neighbor_id))
            if neighbor_id == territory.id:
                issues.append(LaneIssue(type=IssueType.SELF_LOOP,
                                        territory_id=territory.id, neighbor_id=neighbor_id))
                continue

            neighbor = by_id.get(neighbor_id)
            if neighbor is None:
                issues.append(LaneIssue(type=IssueType.DANGLING,
                                        territory_id=territory.id, neighbor_id=neighbor_id))
                continue
            if territory.id not in neighbor.neighbors:
                issues.append(LaneIssue(type=IssueType.UNIDIRECTIONAL,
                                        territory_id=territory.id, neighbor_id=neighbor_id))

            a, b = index[territory.id], index[neighbor_id]
            adjacency[a].append(b)
            adjacency[b].append(a)
            lanes.add((min(territory.id, neighbor_id), max(territory.id, neighbor_id)))

    report = ValidationReport(
        territory_count=len(territories),
        lane_count=len(lanes),
        components=count_connected_components(adjacency),
        issues=issues,
    )

    if report.is_valid:
        logger.info("Map validation passed", territories=report.territory_count,
                    lanes=report.lane_count)
    else:
        logger.warning("Map validation found issues", issues=len(report.issues),
                       components=report.components)
    return report
