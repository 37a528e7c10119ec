import re
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OverallStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
    NO_DATA = "no_data"

    @classmethod
    def parse(cls, raw: Any) -> "OverallStatus":
        """
        Total mapping from a raw upstream value to a status.
        Anything other than exactly "good", "warning" or "critical" is NO_DATA.
        """
        if isinstance(raw, str) and raw in _RECOGNIZED:
            return cls(raw)
        return cls.NO_DATA

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def label(self) -> str:
        """Display label."""
        return {
            "good": "Good",
            "warning": "Warning",
            "critical": "Critical",
            "no_data": "No data",
        }[self.value]


_RECOGNIZED = frozenset({"good", "warning", "critical"})

# good > warning > critical; no_data never takes part in a comparison
_RANKS = {
    OverallStatus.GOOD: 3,
    OverallStatus.WARNING: 2,
    OverallStatus.CRITICAL: 1,
    OverallStatus.NO_DATA: 0,
}


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"
    UNKNOWN = "unknown"


class HealthSnapshot(BaseModel):
    """
    A point-in-time health record for one project, as produced by the snapshot service.
    Unknown keys are kept on the model untouched.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Opaque snapshot identifier")
    project_id: Optional[str] = Field(None, description="Owning project, used for portfolio views")
    snapshot_date: Optional[str] = Field(None, description="Day the snapshot represents (YYYY-MM-DD)")
    overall_status: Optional[str] = Field(None, description="Raw status string, parsed later")
    # Carried for the presentation layer only; kept as received
    schedule_status: Optional[Any] = None
    cost_status: Optional[Any] = None
    tasks_completion_rate: Optional[Any] = None
    blocked_tasks_ratio: Optional[Any] = None
    overdue_tasks: Optional[Any] = None
    created_at: Optional[Any] = None

    @field_validator("id", "project_id", "overall_status", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Optional[str]:
        if v is None:
            return v
        return str(v)

    @field_validator("snapshot_date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Optional[str]:
        if isinstance(v, date):
            return v.isoformat()
        if v is None:
            return v
        return str(v).strip()

    @property
    def status(self) -> OverallStatus:
        return OverallStatus.parse(self.overall_status)


def snapshot_field(record: Any, name: str) -> Any:
    """
    Reads a field from a snapshot-like record: a HealthSnapshot, a decoded JSON dict
    or any object with the attribute. Missing fields read as None.
    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


_DAY_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})")


def parse_snapshot_day(value: Any) -> Optional[date]:
    """
    Reads the calendar day of a snapshot_date value: a date, a datetime, or a
    YYYY-MM-DD string (a trailing time part is ignored). Anything else is None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = _DAY_RE.match(value)
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None
