import json
from datetime import date, timedelta

import pytest


def make_snapshot(status, snapshot_date, sid=None, project_id="p1", **extra):
    record = {
        "id": sid or f"{project_id}-{snapshot_date}",
        "project_id": project_id,
        "snapshot_date": snapshot_date,
        "schedule_status": "on_track",
        "cost_status": "on_budget",
        "overdue_tasks": 0,
    }
    if status is not None:
        record["overall_status"] = status
    record.update(extra)
    return record


@pytest.fixture
def snapshot():
    return make_snapshot


@pytest.fixture
def descending_history():
    """
    Builds a newest-first history from statuses listed newest-first.
    """
    def _build(statuses, newest=date(2024, 1, 31)):
        return [
            make_snapshot(status, (newest - timedelta(days=i)).isoformat())
            for i, status in enumerate(statuses)
        ]
    return _build


@pytest.fixture
def snapshot_file(tmp_path):
    def _write(payload, name="snapshots.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write
