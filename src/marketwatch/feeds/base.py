"""Abstract base class for feed clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from marketwatch.config import FeedType
from marketwatch.errors import FeedError, FeedErrorCode
from marketwatch.models._convert import record_list
from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset, AssetClass
from marketwatch.models.dashboard import DashboardSummary
from marketwatch.models.news import NewsArticle
from marketwatch.models.portfolio import Portfolio

# payload parser per feed; list feeds parse record by record
_PARSERS: dict[FeedType, Callable[[Any], Any]] = {
    FeedType.DASHBOARD: DashboardSummary.from_dict,
    FeedType.STOCKS: lambda data: [Asset.from_dict(r, AssetClass.STOCK) for r in record_list(data)],
    FeedType.CRYPTO: lambda data: [Asset.from_dict(r, AssetClass.CRYPTO) for r in record_list(data)],
    FeedType.PORTFOLIO: Portfolio.from_dict,
    FeedType.NEWS: lambda data: [NewsArticle.from_dict(r) for r in record_list(data)],
    FeedType.ALERTS: lambda data: [Alert.from_dict(r) for r in record_list(data)],
}

_ASSET_PATHS: dict[AssetClass, str] = {
    AssetClass.STOCK: "/assets/stocks",
    AssetClass.CRYPTO: "/assets/crypto",
}


def unwrap_envelope(body: Any, feed: str) -> Any:
    """Return ``payload`` from a ``{"data": {"data": payload}}`` body."""
    try:
        payload = body["data"]["data"]
    except (KeyError, TypeError) as exc:
        raise FeedError(
            f"{feed}: response is missing the data envelope",
            code=FeedErrorCode.MALFORMED_PAYLOAD,
            feed=feed,
        ) from exc
    if payload is None:
        raise FeedError(
            f"{feed}: response envelope holds no data",
            code=FeedErrorCode.MALFORMED_PAYLOAD,
            feed=feed,
        )
    return payload


class BaseFeedClient(ABC):
    """Abstract base for feed clients.

    Subclasses implement ``_request`` (one GET returning the decoded JSON
    body, raising ``FeedError`` on transport or status failure). Envelope
    handling and record parsing live here so every client fails the same
    way on malformed payloads. Clients never retry.
    """

    @abstractmethod
    def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue one GET and return the decoded JSON body."""
        ...

    # --- Feeds ---

    def fetch_feed(
        self,
        feed: FeedType | str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Fetch and parse one of the six feeds.

        Returns:
            ``DashboardSummary`` or ``Portfolio`` for the object feeds, a
            list of models for the collection feeds.

        Raises:
            FeedError: on transport, status or payload failure.
        """
        feed = FeedType(feed)
        body = self._request(feed.path, params)
        return self._parse(feed.value, _PARSERS[feed], unwrap_envelope(body, feed.value))

    # --- Single-record lookups ---

    def fetch_asset(self, asset_class: AssetClass | str, symbol: str) -> Asset:
        """Fetch one asset by symbol."""
        asset_class = AssetClass(asset_class)
        name = f"{asset_class.value}:{symbol}"
        body = self._request(f"{_ASSET_PATHS[asset_class]}/{symbol}")
        return self._parse(
            name,
            lambda data: Asset.from_dict(data, asset_class),
            unwrap_envelope(body, name),
        )

    def fetch_news_for_asset(self, symbol: str) -> list[NewsArticle]:
        """Fetch news mentioning one asset."""
        name = f"news:{symbol}"
        body = self._request(f"/news/asset/{symbol}")
        return self._parse(name, _PARSERS[FeedType.NEWS], unwrap_envelope(body, name))

    def close(self) -> None:
        """Release client resources (no-op by default)."""

    @staticmethod
    def _parse(feed: str, parser: Callable[[Any], Any], payload: Any) -> Any:
        try:
            return parser(payload)
        # ArithmeticError: int(inf); OSError: out-of-range epoch timestamps
        except (KeyError, TypeError, ValueError, AttributeError, ArithmeticError, OSError) as exc:
            raise FeedError(
                f"{feed}: malformed record: {exc!r}",
                code=FeedErrorCode.MALFORMED_PAYLOAD,
                feed=feed,
            ) from exc
