import logging
from datetime import date
from typing import Any, Iterable, Optional, Sequence, Tuple

from project_health.config import settings
from project_health.data.dto import HealthTrendSummary
from project_health.domain.models import OverallStatus, TrendDirection, parse_snapshot_day, snapshot_field

logger = logging.getLogger(__name__)


def _date_key(record: Any) -> Tuple[bool, date]:
    day = parse_snapshot_day(snapshot_field(record, "snapshot_date"))
    if day is None:
        return (False, date.min)
    return (True, day)


def sort_newest_first(history: Sequence[Any]) -> list:
    """
    Returns a copy of history ordered by snapshot_date descending.
    Records without a readable date go last; ties keep their incoming order.
    """
    return sorted(history, key=_date_key, reverse=True)


def _direction(last: Optional[OverallStatus], prev: Optional[OverallStatus]) -> TrendDirection:
    if last is None or prev is None:
        return TrendDirection.UNKNOWN
    if OverallStatus.NO_DATA in (last, prev):
        return TrendDirection.UNKNOWN
    if last.rank > prev.rank:
        return TrendDirection.IMPROVING
    if last.rank < prev.rank:
        return TrendDirection.WORSENING
    return TrendDirection.STABLE


def compute_health_trend(
    history: Optional[Iterable[Any]],
    max_days: int = 30,
    *,
    assume_sorted: bool = True,
) -> HealthTrendSummary:
    """
    Summarizes a project's health history.

    Args:
        history: Snapshot-like records, newest first (as the snapshot service returns them).
            May be empty or None.
        max_days: How many of the most recent snapshots to consider.
        assume_sorted: When False, a copy of history is sorted newest-first by
            snapshot_date before truncation.

    Returns:
        A fresh HealthTrendSummary. Never raises for odd records: unknown or missing
        statuses become NO_DATA and an undecidable trend is UNKNOWN.
    """
    if history is None:
        return HealthTrendSummary.empty()

    records = list(history)
    if not records:
        return HealthTrendSummary.empty()

    if max_days <= 0:
        logger.warning(f"Non-positive max_days={max_days}, returning empty trend")
        return HealthTrendSummary.empty()

    if not assume_sorted:
        records = sort_newest_first(records)
    recent = records[:max_days]
    if len(recent) < len(records):
        logger.debug(f"Trend truncated to {len(recent)} of {len(records)} snapshots")

    timeline = [OverallStatus.parse(snapshot_field(s, "overall_status")) for s in recent]
    timeline.reverse()

    last_status = timeline[-1] if timeline else None
    prev_status = timeline[-2] if len(timeline) >= 2 else None

    count_good = count_warning = count_critical = 0
    for status in timeline:
        if status is OverallStatus.GOOD:
            count_good += 1
        elif status is OverallStatus.WARNING:
            count_warning += 1
        elif status is OverallStatus.CRITICAL:
            count_critical += 1

    return HealthTrendSummary(
        direction=_direction(last_status, prev_status),
        last_status=last_status,
        prev_status=prev_status,
        total_days=len(timeline),
        count_good=count_good,
        count_warning=count_warning,
        count_critical=count_critical,
        timeline=timeline,
    )


class HealthTrendAnalyzer:
    """
    Computes health trends with configured defaults.
    """

    def __init__(self, max_days: Optional[int] = None, assume_sorted: Optional[bool] = None):
        self.max_days = settings.trend.max_days if max_days is None else max_days
        self.assume_sorted = settings.trend.assume_sorted if assume_sorted is None else assume_sorted

    def analyze(self, history: Optional[Iterable[Any]]) -> HealthTrendSummary:
        return compute_health_trend(history, self.max_days, assume_sorted=self.assume_sorted)
