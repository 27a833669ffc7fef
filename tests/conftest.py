"""Shared fixtures for marketwatch tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from marketwatch.config import FeedType
from marketwatch.feeds.mock import MockFeedClient
from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset, AssetClass, PricePoint
from marketwatch.models.news import NewsArticle
from marketwatch.models.portfolio import Holding, Portfolio

T0 = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def make_history(*prices: float, start: datetime = T0) -> tuple[PricePoint, ...]:
    return tuple(
        PricePoint(timestamp=start + timedelta(days=i), price=p)
        for i, p in enumerate(prices)
    )


def make_asset(
    symbol: str,
    name: str | None = None,
    asset_class: AssetClass = AssetClass.STOCK,
    history: tuple[PricePoint, ...] = (),
    **kwargs: Any,
) -> Asset:
    defaults: dict[str, Any] = dict(current_price=100.0, change_percent=1.0, volume=1000)
    defaults.update(kwargs)
    return Asset(
        symbol=symbol,
        name=name or f"{symbol} Inc.",
        asset_class=asset_class,
        price_history=history,
        **defaults,
    )


def make_holding(asset_id: str, quantity: float, price: float = 100.0) -> Holding:
    return Holding(
        asset_id=asset_id,
        quantity=quantity,
        avg_buy_price=price,
        current_price=price,
        value=quantity * price,
    )


def make_portfolio(*holdings: Holding, watchlist: tuple[str, ...] = ()) -> Portfolio:
    total = sum(h.value for h in holdings)
    return Portfolio(
        total_value=total,
        total_change=0.0,
        total_change_percent=0.0,
        holdings=holdings,
        watchlist=watchlist,
    )


def make_alert(id: str, severity: str, minutes: int = 0, **kwargs: Any) -> Alert:
    defaults: dict[str, Any] = dict(type="price", message=f"alert {id}")
    defaults.update(kwargs)
    return Alert(id=id, severity=severity, timestamp=T0 + timedelta(minutes=minutes), **defaults)


def make_article(id: str, title: str, category: str = "market", **kwargs: Any) -> NewsArticle:
    defaults: dict[str, Any] = dict(source="Reuters", impact="medium", sentiment=0.5, timestamp=T0)
    defaults.update(kwargs)
    return NewsArticle(id=id, title=title, category=category, **defaults)


# --- Raw backend records ---

STOCK_RECORDS = [
    {
        "id": "1",
        "symbol": "AAPL",
        "name": "Apple Inc.",
        "currentPrice": 190.5,
        "changePercent": 1.2,
        "volume": 50_000_000,
        "marketCap": 2.9e12,
        "sector": "Technology",
        "keyMetrics": {"peRatio": 29.1, "eps": 6.5, "dividendYield": 0.5, "beta": 1.2},
        "priceHistory": [
            {"timestamp": "2024-01-15T00:00:00Z", "price": 185.0},
            {"timestamp": "2024-01-16T00:00:00Z", "price": 190.5},
        ],
    },
    {
        "id": "2",
        "symbol": "MSFT",
        "name": "Microsoft",
        "currentPrice": 390.0,
        "changePercent": -0.4,
        "volume": 20_000_000,
    },
]

CRYPTO_RECORDS = [
    {
        "id": "3",
        "symbol": "BTC",
        "name": "Bitcoin",
        "currentPrice": 42000.0,
        "changePercent": 3.5,
        "volume": 1_000_000,
        "priceHistory": [
            {"timestamp": "2024-01-15T00:00:00Z", "price": 41000.0},
            {"timestamp": "2024-01-16T00:00:00Z", "price": 42000.0},
        ],
    },
]

PORTFOLIO_RECORD = {
    "totalValue": 84381.0,
    "totalChange": 1200.0,
    "totalChangePercent": 1.44,
    "assets": [
        {"assetId": "BTC", "quantity": 2, "avgBuyPrice": 40000, "currentPrice": 42000,
         "value": 84000, "change": 4000, "changePercent": 5.0},
        {"assetId": "AAPL", "quantity": 2, "avgBuyPrice": 180, "currentPrice": 190.5,
         "value": 381, "change": 21, "changePercent": 5.8},
    ],
    "watchlist": ["MSFT", "DOGE"],
}

NEWS_RECORDS = [
    {"id": "n1", "title": "Bitcoin rallies", "source": "CoinDesk", "category": "crypto",
     "impact": "high", "sentiment": 0.8, "timestamp": "2024-01-16T10:00:00Z",
     "summary": "BTC tops 42k", "affectedAssets": ["BTC"], "tags": ["rally"]},
    {"id": "n2", "title": "Apple earnings beat", "source": "Reuters", "category": "earnings",
     "impact": "medium", "sentiment": 0.65, "timestamp": "2024-01-16T09:00:00Z"},
]

ALERT_RECORDS = [
    {"id": "a1", "type": "price", "severity": "high", "message": "BTC up 5%",
     "timestamp": "2024-01-16T10:05:00Z", "affectedAssets": ["BTC"], "aiCoreAccuracy": 0.92},
    {"id": "a2", "type": "risk", "severity": "critical", "title": "Concentration",
     "message": "BTC is 99% of portfolio", "timestamp": "2024-01-16T10:10:00Z",
     "actionRequired": True},
]

DASHBOARD_RECORD = {
    "topGainers": [CRYPTO_RECORDS[0] | {"type": "crypto"}],
    "topLosers": [STOCK_RECORDS[1]],
    "recentNews": NEWS_RECORDS[:1],
    "activeAlerts": ALERT_RECORDS[:1],
}


def load_all_feeds(client: MockFeedClient) -> MockFeedClient:
    client.set_feed(FeedType.DASHBOARD, DASHBOARD_RECORD)
    client.set_feed(FeedType.STOCKS, STOCK_RECORDS)
    client.set_feed(FeedType.CRYPTO, CRYPTO_RECORDS)
    client.set_feed(FeedType.PORTFOLIO, PORTFOLIO_RECORD)
    client.set_feed(FeedType.NEWS, NEWS_RECORDS)
    client.set_feed(FeedType.ALERTS, ALERT_RECORDS)
    return client


@pytest.fixture
def mock_client() -> MockFeedClient:
    return load_all_feeds(MockFeedClient())
