from datetime import date, datetime, timedelta

import pytest

from project_health.data.dto import PortfolioCounts, PortfolioHistoryEntry
from project_health.logic.portfolio import aggregate_portfolio_history, clamp_days, summarize_portfolio

TODAY = date(2024, 3, 15)


def day(offset):
    return (TODAY - timedelta(days=offset)).isoformat()


def test_returns_aggregated_daily_counts(snapshot):
    snapshots = [
        snapshot("good", day(2), project_id="p1"),
        snapshot("good", day(2), project_id="p2"),
        snapshot("warning", day(2), project_id="p3"),
        snapshot("good", day(1), project_id="p1"),
        snapshot("critical", day(1), project_id="p2"),
    ]

    history = aggregate_portfolio_history(snapshots, 30, today=TODAY)

    assert history == [
        PortfolioHistoryEntry(snapshot_date=day(2), good=2, warning=1, critical=0, total=3),
        PortfolioHistoryEntry(snapshot_date=day(1), good=1, warning=0, critical=1, total=2),
    ]


def test_dates_sorted_ascending(snapshot):
    snapshots = [snapshot("good", day(offset)) for offset in (3, 0, 5, 1)]

    history = aggregate_portfolio_history(snapshots, 30, today=TODAY)

    assert [entry.snapshot_date for entry in history] == [day(5), day(3), day(1), day(0)]


def test_no_snapshots_returns_empty_list():
    assert aggregate_portfolio_history([], 30, today=TODAY) == []
    assert aggregate_portfolio_history(None, 30, today=TODAY) == []


def test_days_window_respected(snapshot):
    snapshots = [snapshot("good", day(offset)) for offset in range(40)]

    history = aggregate_portfolio_history(snapshots, 10, today=TODAY)

    assert len(history) == 10
    assert history[0].snapshot_date == day(9)
    assert history[-1].snapshot_date == day(0)


def test_days_clamped_to_maximum(snapshot):
    snapshots = [snapshot("good", day(offset)) for offset in range(120)]

    assert len(aggregate_portfolio_history(snapshots, 999, today=TODAY)) == 90


def test_days_clamped_to_minimum(snapshot):
    snapshots = [snapshot("good", day(offset)) for offset in range(5)]

    history = aggregate_portfolio_history(snapshots, 0, today=TODAY)

    assert [entry.snapshot_date for entry in history] == [day(0)]


def test_future_and_undated_snapshots_ignored(snapshot):
    snapshots = [
        snapshot("good", (TODAY + timedelta(days=1)).isoformat()),
        snapshot("warning", None),
        snapshot("critical", "not-a-date"),
        snapshot("good", day(0)),
    ]

    history = aggregate_portfolio_history(snapshots, 30, today=TODAY)

    assert history == [PortfolioHistoryEntry(snapshot_date=day(0), good=1, total=1)]


def test_unrecognized_status_counts_only_in_total(snapshot):
    snapshots = [snapshot("bogus", day(0)), snapshot(None, day(0)), snapshot("critical", day(0))]

    history = aggregate_portfolio_history(snapshots, 30, today=TODAY)

    assert history == [PortfolioHistoryEntry(snapshot_date=day(0), critical=1, total=3)]


def test_accepts_date_and_timestamp_values(snapshot):
    snapshots = [
        snapshot("good", TODAY),
        snapshot("warning", datetime(2024, 3, 15, 8, 30)),
        snapshot("critical", f"{day(0)}T23:59:00"),
    ]

    history = aggregate_portfolio_history(snapshots, 30, today=TODAY)

    assert history == [PortfolioHistoryEntry(snapshot_date=day(0), good=1, warning=1, critical=1, total=3)]


@pytest.mark.parametrize(
    "raw, expected",
    [
        (30, 30), ("10", 10), (0, 1), (-5, 1), (999, 90), (None, 30),
        ("abc", 1), ("", 1), ("7.5", 7), (" 12days", 12), (7.9, 7), (float("nan"), 1),
    ],
)
def test_clamp_days(raw, expected):
    assert clamp_days(raw) == expected


def test_summarize_portfolio_nested_health_rows():
    items = [
        {"project": {"id": "p1"}, "health": {"overall_status": "good"}},
        {"project": {"id": "p2"}, "health": {"overall_status": "warning"}},
        {"project": {"id": "p3"}, "health": {"overall_status": "critical"}},
        {"project": {"id": "p4"}, "health": {"overall_status": "mystery"}},
    ]

    assert summarize_portfolio(items) == PortfolioCounts(good=1, warning=1, critical=1, no_data=1, total=4)


def test_summarize_portfolio_flat_snapshots(snapshot):
    items = [snapshot("good", day(0)), snapshot("good", day(0)), snapshot(None, day(0))]

    assert summarize_portfolio(items) == PortfolioCounts(good=2, no_data=1, total=3)


def test_summarize_portfolio_empty():
    assert summarize_portfolio(None) == PortfolioCounts()
