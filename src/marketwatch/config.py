"""Market watch configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_BASE_URL = "http://localhost:3001/api"
DEFAULT_POLL_INTERVAL_SECONDS = 30.0


class FeedClientType(Enum):
    """Supported feed client backends."""

    HTTP = "http"
    MOCK = "mock"


class FeedType(Enum):
    """The six feeds refreshed together in one cycle."""

    DASHBOARD = "dashboard"
    STOCKS = "stocks"
    CRYPTO = "crypto"
    PORTFOLIO = "portfolio"
    NEWS = "news"
    ALERTS = "alerts"

    @property
    def path(self) -> str:
        return FEED_PATHS[self]


FEED_PATHS: dict[FeedType, str] = {
    FeedType.DASHBOARD: "/dashboard",
    FeedType.STOCKS: "/assets/stocks",
    FeedType.CRYPTO: "/assets/crypto",
    FeedType.PORTFOLIO: "/portfolio",
    FeedType.NEWS: "/news",
    FeedType.ALERTS: "/alerts",
}


@dataclass
class MarketWatchConfig:
    """Configuration for a SyncStore and its feed client.

    Attributes:
        client: Feed client backend.
        base_url: API root the feed paths are appended to.
        timeout_seconds: Per-request timeout for the HTTP client.
        poll_interval_seconds: Cadence of automatic refresh cycles.
        stale_after_seconds: Age after which a snapshot counts as stale
            (defaults to twice the poll interval).
        validate: Whether to run quality checks on installed snapshots.
    """

    client: FeedClientType = FeedClientType.HTTP
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    stale_after_seconds: float | None = None
    validate: bool = True
