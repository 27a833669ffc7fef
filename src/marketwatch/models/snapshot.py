"""Snapshot data model — one atomic refresh cycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset
from marketwatch.models.dashboard import DashboardSummary
from marketwatch.models.news import NewsArticle
from marketwatch.models.portfolio import Portfolio


@dataclass(frozen=True)
class Snapshot:
    """Fully populated bundle of all six feeds.

    Attributes:
        dashboard: Dashboard summary.
        stocks: Stock assets.
        crypto: Crypto assets.
        portfolio: User portfolio.
        news: News articles in feed order.
        alerts: Alerts in feed order.
        fetched_at: When the cycle that produced this snapshot completed.
    """

    dashboard: DashboardSummary
    stocks: tuple[Asset, ...]
    crypto: tuple[Asset, ...]
    portfolio: Portfolio
    news: tuple[NewsArticle, ...]
    alerts: tuple[Alert, ...]
    fetched_at: datetime

    @property
    def assets(self) -> tuple[Asset, ...]:
        """Stocks followed by crypto."""
        return self.stocks + self.crypto

    def find_asset(self, symbol: str) -> Asset | None:
        for asset in self.assets:
            if asset.symbol == symbol:
                return asset
        return None
