"""marketwatch — Live market dashboard data core.

Polls six REST feeds (dashboard, stocks, crypto, portfolio, news, alerts)
into atomic snapshots, and derives portfolio analytics and filtered,
sorted and grouped collection views from them.

Quick start::

    import asyncio
    from marketwatch import create_store_from_env

    async def main():
        store = create_store_from_env()
        store.subscribe(lambda state: print(state.last_updated, state.error))
        async with store:
            await asyncio.sleep(90)

    asyncio.run(main())
"""

from __future__ import annotations

import os

from marketwatch.analytics import (
    AllocationSlice,
    HoldingDetail,
    ValuePoint,
    WatchlistEntry,
    build_allocation,
    build_value_history,
    holding_details,
    resolve_watchlist,
    value_history_frame,
)
from marketwatch.classify import (
    Severity,
    alert_type_bucket,
    category_bucket,
    classify_severity,
    sentiment_bucket,
    severity_rank,
)
from marketwatch.config import DEFAULT_BASE_URL, FeedClientType, FeedType, MarketWatchConfig
from marketwatch.errors import CycleError, FeedError, FeedErrorCode, FetchError
from marketwatch.feeds import create_client
from marketwatch.feeds.base import BaseFeedClient
from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset, AssetClass, KeyMetrics, PricePoint
from marketwatch.models.dashboard import DashboardSummary
from marketwatch.models.news import NewsArticle
from marketwatch.models.portfolio import Holding, Portfolio
from marketwatch.models.snapshot import Snapshot
from marketwatch.store import StoreState, SyncStore
from marketwatch.views import (
    AlertGroup,
    AssetFilter,
    SortDirection,
    SortState,
    alert_counts,
    alert_grouped_view,
    alert_list_view,
    asset_counts,
    asset_view,
    news_categories,
    news_counts,
    news_view,
)

__version__ = "0.1.0"

__all__ = [
    # Store
    "SyncStore",
    "StoreState",
    "create_store_from_env",
    # Feeds
    "BaseFeedClient",
    "create_client",
    # Config
    "MarketWatchConfig",
    "FeedClientType",
    "FeedType",
    # Errors
    "FeedError",
    "FetchError",
    "FeedErrorCode",
    "CycleError",
    # Models
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
    # Analytics
    "ValuePoint",
    "AllocationSlice",
    "HoldingDetail",
    "WatchlistEntry",
    "build_value_history",
    "build_allocation",
    "holding_details",
    "resolve_watchlist",
    "value_history_frame",
    # Views
    "AssetFilter",
    "SortDirection",
    "SortState",
    "AlertGroup",
    "asset_view",
    "asset_counts",
    "news_view",
    "news_categories",
    "news_counts",
    "alert_list_view",
    "alert_grouped_view",
    "alert_counts",
    # Classification
    "Severity",
    "classify_severity",
    "severity_rank",
    "category_bucket",
    "alert_type_bucket",
    "sentiment_bucket",
]


def create_store_from_env() -> SyncStore:
    """Zero-config factory — reads client settings from env vars.

    Environment variables:
        MARKETWATCH_CLIENT: Feed client — "http" or "mock" (default: "http").
        MARKETWATCH_BASE_URL: API root (default: "http://localhost:3001/api").
        MARKETWATCH_TIMEOUT: Per-request timeout in seconds (default: 10).
        MARKETWATCH_POLL_INTERVAL: Seconds between refresh cycles (default: 30).
        MARKETWATCH_STALE_AFTER: Snapshot age in seconds that counts as stale
            (default: twice the poll interval).
        MARKETWATCH_VALIDATE: "0" disables snapshot quality checks.
    """
    stale_after = os.getenv("MARKETWATCH_STALE_AFTER")
    config = MarketWatchConfig(
        client=FeedClientType(os.getenv("MARKETWATCH_CLIENT", "http").strip().lower()),
        base_url=os.getenv("MARKETWATCH_BASE_URL", DEFAULT_BASE_URL),
        timeout_seconds=float(os.getenv("MARKETWATCH_TIMEOUT", "10")),
        poll_interval_seconds=float(os.getenv("MARKETWATCH_POLL_INTERVAL", "30")),
        stale_after_seconds=float(stale_after) if stale_after else None,
        validate=os.getenv("MARKETWATCH_VALIDATE", "1").strip().lower() not in ("0", "false", "no"),
    )
    return SyncStore.from_config(config)
