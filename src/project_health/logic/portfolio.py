import logging
import math
import re
from collections import defaultdict
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from project_health.config import settings
from project_health.data.dto import PortfolioCounts, PortfolioHistoryEntry
from project_health.domain.models import OverallStatus, parse_snapshot_day, snapshot_field

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"\s*[+-]?\d+")


def clamp_days(days: Any, *, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """
    Coerces a requested window (often a raw query value) into [minimum, maximum].
    A missing value means the configured default window. Strings are read up to
    their leading integer ("7.5" is 7); text without one counts as 0.
    """
    minimum = settings.portfolio.min_days if minimum is None else minimum
    maximum = settings.portfolio.max_days if maximum is None else maximum
    if days is None:
        value = settings.portfolio.default_days
    elif isinstance(days, int):
        value = days
    elif isinstance(days, float):
        # nan and inf have no integer value
        value = int(days) if math.isfinite(days) else 0
    else:
        match = _LEADING_INT_RE.match(str(days))
        value = int(match.group(0)) if match else 0
    return max(minimum, min(value, maximum))


def aggregate_portfolio_history(
    snapshots: Optional[Iterable[Any]],
    days: Any = None,
    *,
    today: Optional[date] = None,
) -> List[PortfolioHistoryEntry]:
    """
    Per-day status counts across every project's snapshots.

    Only days within the last `days` days (today included) are kept; `days` is clamped
    to the configured window. Days without snapshots are omitted. Entries are ordered
    oldest first.
    """
    if days is None:
        days = settings.portfolio.default_days
    window = clamp_days(days)
    today = today or date.today()
    start = today - timedelta(days=window - 1)

    buckets: Dict[date, PortfolioHistoryEntry] = {}
    for record in snapshots or []:
        day = parse_snapshot_day(snapshot_field(record, "snapshot_date"))
        if day is None:
            logger.debug(f"Skipping snapshot without a usable date: {snapshot_field(record, 'id')}")
            continue
        if day < start or day > today:
            continue

        entry = buckets.get(day)
        if entry is None:
            entry = buckets[day] = PortfolioHistoryEntry(snapshot_date=day.isoformat())

        status = OverallStatus.parse(snapshot_field(record, "overall_status"))
        if status is OverallStatus.GOOD:
            entry.good += 1
        elif status is OverallStatus.WARNING:
            entry.warning += 1
        elif status is OverallStatus.CRITICAL:
            entry.critical += 1
        entry.total += 1

    return [buckets[day] for day in sorted(buckets)]


def _item_status(item: Any) -> OverallStatus:
    # Portfolio rows look like {"project": {...}, "health": {...}}
    health = snapshot_field(item, "health")
    if isinstance(health, Mapping) or (health is not None and hasattr(health, "overall_status")):
        return OverallStatus.parse(snapshot_field(health, "overall_status"))
    return OverallStatus.parse(snapshot_field(item, "overall_status"))


def summarize_portfolio(items: Optional[Iterable[Any]]) -> PortfolioCounts:
    """
    Counts the current overall status of each project in a portfolio listing.
    """
    counts = defaultdict(int)
    for item in items or []:
        counts[_item_status(item)] += 1

    return PortfolioCounts(
        good=counts[OverallStatus.GOOD],
        warning=counts[OverallStatus.WARNING],
        critical=counts[OverallStatus.CRITICAL],
        no_data=counts[OverallStatus.NO_DATA],
        total=sum(counts.values()),
    )
