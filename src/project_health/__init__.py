from project_health.data.dto import HealthTrendSummary, PortfolioCounts, PortfolioHistoryEntry
from project_health.domain.models import HealthSnapshot, OverallStatus, TrendDirection
from project_health.logic.portfolio import aggregate_portfolio_history, summarize_portfolio
from project_health.logic.trends import HealthTrendAnalyzer, compute_health_trend

__all__ = [
    "HealthSnapshot",
    "HealthTrendAnalyzer",
    "HealthTrendSummary",
    "OverallStatus",
    "PortfolioCounts",
    "PortfolioHistoryEntry",
    "TrendDirection",
    "aggregate_portfolio_history",
    "compute_health_trend",
    "summarize_portfolio",
]
