"""Mock feed client for testing and CI — no backend required."""

from __future__ import annotations

import threading
from typing import Any

from marketwatch.config import FeedType
from marketwatch.errors import FeedError, FeedErrorCode
from marketwatch.feeds.base import BaseFeedClient

_DEFAULT_PAYLOADS: dict[FeedType, Any] = {
    FeedType.DASHBOARD: {"topGainers": [], "topLosers": [], "recentNews": [], "activeAlerts": []},
    FeedType.STOCKS: [],
    FeedType.CRYPTO: [],
    FeedType.PORTFOLIO: {"totalValue": 0, "totalChange": 0, "totalChangePercent": 0, "assets": []},
    FeedType.NEWS: [],
    FeedType.ALERTS: [],
}


class MockFeedClient(BaseFeedClient):
    """In-memory client serving pre-loaded response bodies.

    Use ``set_feed`` to load a payload (wrapped in the standard envelope),
    ``set_body`` to load a raw body, or ``set_failure`` to make a path
    raise. Unloaded feeds serve empty collections. ``calls`` records every
    requested path.
    """

    def __init__(self) -> None:
        self._bodies: dict[str, Any] = {
            feed.path: {"data": {"data": payload}} for feed, payload in _DEFAULT_PAYLOADS.items()
        }
        self._failures: dict[str, FeedError] = {}
        self._lock = threading.Lock()
        self.calls: list[str] = []

    # --- Pre-load helpers ---

    def set_feed(self, feed: FeedType | str, payload: Any) -> None:
        self.set_body(FeedType(feed).path, {"data": {"data": payload}})

    def set_body(self, path: str, body: Any) -> None:
        self._bodies[path] = body
        self._failures.pop(path, None)

    def set_failure(self, feed: FeedType | str, error: FeedError | None = None) -> None:
        path = FeedType(feed).path
        self._failures[path] = error or FeedError(
            f"GET {path} failed",
            code=FeedErrorCode.TRANSPORT,
            feed=FeedType(feed).value,
        )

    def clear_failure(self, feed: FeedType | str) -> None:
        self._failures.pop(FeedType(feed).path, None)

    # --- Client implementation ---

    def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        with self._lock:
            self.calls.append(path)
        if path in self._failures:
            raise self._failures[path]
        if path not in self._bodies:
            raise FeedError(
                f"GET {path} returned 404",
                code=FeedErrorCode.NOT_FOUND,
                feed=path.lstrip("/"),
                retryable=False,
                status_code=404,
            )
        return self._bodies[path]
