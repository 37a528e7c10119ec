from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from project_health.config import settings
from project_health.etl.loader import load_snapshots
from project_health.exceptions import DataSourceError
from project_health.logic.portfolio import aggregate_portfolio_history
from project_health.logic.trends import compute_health_trend

cli = typer.Typer(help="Project health analytics over exported snapshot files")


@cli.callback()
def configure() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format=settings.logging.format,
    )


def _load_or_exit(file: Path) -> list:
    try:
        return load_snapshots(file)
    except DataSourceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _echo_json(payload) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@cli.command()
def version() -> None:
    """Print runtime version."""
    typer.echo(f"{settings.app.name} {settings.app.version}")


@cli.command()
def trend(
    file: Path = typer.Argument(..., help="JSON file with snapshots, newest first"),
    max_days: int = typer.Option(settings.trend.max_days, help="Number of recent snapshots to analyze"),
    sort: bool = typer.Option(
        not settings.trend.assume_sorted,
        "--sort/--no-sort",
        help="Sort snapshots by date before analyzing",
    ),
) -> None:
    """Print the health trend of a single project."""
    snapshots = _load_or_exit(file)
    summary = compute_health_trend(snapshots, max_days, assume_sorted=not sort)
    _echo_json(summary.as_dict())


@cli.command("portfolio-history")
def portfolio_history(
    file: Path = typer.Argument(..., help="JSON file with snapshots of all projects"),
    days: int = typer.Option(settings.portfolio.default_days, help="Window size in days"),
    today: Optional[str] = typer.Option(None, help="Last day of the window (YYYY-MM-DD), defaults to today"),
) -> None:
    """Print per-day status counts across projects."""
    end_day = None
    if today:
        try:
            end_day = date.fromisoformat(today)
        except ValueError:
            raise typer.BadParameter(f"Invalid date: {today}", param_hint="--today")

    snapshots = _load_or_exit(file)
    history = aggregate_portfolio_history(snapshots, days, today=end_day)
    _echo_json([asdict(entry) for entry in history])


if __name__ == "__main__":
    cli()
