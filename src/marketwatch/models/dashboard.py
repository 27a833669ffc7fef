"""Dashboard summary data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from marketwatch.models._convert import record_list
from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset, AssetClass
from marketwatch.models.news import NewsArticle


@dataclass(frozen=True)
class DashboardSummary:
    """Pre-aggregated subsets served by the dashboard feed."""

    top_gainers: tuple[Asset, ...] = ()
    top_losers: tuple[Asset, ...] = ()
    recent_news: tuple[NewsArticle, ...] = ()
    active_alerts: tuple[Alert, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DashboardSummary:
        if not isinstance(data, dict):
            raise TypeError(f"Expected a dashboard object, got {type(data).__name__}")
        return cls(
            top_gainers=tuple(_movers(data.get("topGainers"))),
            top_losers=tuple(_movers(data.get("topLosers"))),
            recent_news=tuple(NewsArticle.from_dict(n) for n in record_list(data.get("recentNews"))),
            active_alerts=tuple(Alert.from_dict(a) for a in record_list(data.get("activeAlerts"))),
        )


def _movers(records: Any) -> list[Asset]:
    # movers mix both classes; records carry their own "type" when the backend knows it
    movers = []
    for record in record_list(records):
        kind = record.get("type", AssetClass.STOCK.value)
        try:
            asset_class = AssetClass(kind)
        except ValueError:
            asset_class = AssetClass.STOCK
        movers.append(Asset.from_dict(record, asset_class))
    return movers
