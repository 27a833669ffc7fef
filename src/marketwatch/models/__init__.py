"""Market watch models."""

from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset, AssetClass, KeyMetrics, PricePoint
from marketwatch.models.dashboard import DashboardSummary
from marketwatch.models.news import NewsArticle
from marketwatch.models.portfolio import Holding, Portfolio
from marketwatch.models.snapshot import Snapshot

__all__ = [
    "Alert",
    "Asset",
    "AssetClass",
    "KeyMetrics",
    "PricePoint",
    "DashboardSummary",
    "NewsArticle",
    "Holding",
    "Portfolio",
    "Snapshot",
]
