from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from project_health.domain.models import OverallStatus, TrendDirection


@dataclass
class HealthTrendSummary:
    """Trend of one project's health over its most recent snapshots."""
    direction: TrendDirection
    last_status: Optional[OverallStatus]
    prev_status: Optional[OverallStatus]
    total_days: int
    count_good: int
    count_warning: int
    count_critical: int
    timeline: List[OverallStatus] = field(default_factory=list)  # oldest first

    @classmethod
    def empty(cls) -> "HealthTrendSummary":
        return cls(
            direction=TrendDirection.UNKNOWN,
            last_status=None,
            prev_status=None,
            total_days=0,
            count_good=0,
            count_warning=0,
            count_critical=0,
            timeline=[],
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "last_status": self.last_status.value if self.last_status else None,
            "prev_status": self.prev_status.value if self.prev_status else None,
            "total_days": self.total_days,
            "count_good": self.count_good,
            "count_warning": self.count_warning,
            "count_critical": self.count_critical,
            "timeline": [status.value for status in self.timeline],
        }


@dataclass
class PortfolioHistoryEntry:
    """Status counts across all projects for a single day."""
    snapshot_date: str
    good: int = 0
    warning: int = 0
    critical: int = 0
    total: int = 0  # includes snapshots without a recognized status


@dataclass
class PortfolioCounts:
    good: int = 0
    warning: int = 0
    critical: int = 0
    no_data: int = 0
    total: int = 0
