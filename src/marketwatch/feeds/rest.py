"""HTTP feed client backed by ``requests``."""

from __future__ import annotations

import logging
from typing import Any

import requests

from marketwatch.config import DEFAULT_BASE_URL
from marketwatch.errors import FeedError, FeedErrorCode
from marketwatch.feeds.base import BaseFeedClient

logger = logging.getLogger(__name__)


class HttpFeedClient(BaseFeedClient):
    """Fetch feeds from the dashboard REST API.

    One GET per call; the session is shared across calls and may be used
    from worker threads.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        feed = path.lstrip("/")
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise FeedError(
                f"GET {path} timed out after {self.timeout}s",
                code=FeedErrorCode.TIMEOUT,
                feed=feed,
            ) from exc
        except requests.RequestException as exc:
            raise FeedError(
                f"GET {path} failed: {exc}",
                code=FeedErrorCode.TRANSPORT,
                feed=feed,
            ) from exc

        if resp.status_code == 404:
            raise FeedError(
                f"GET {path} returned 404",
                code=FeedErrorCode.NOT_FOUND,
                feed=feed,
                retryable=False,
                status_code=404,
            )
        if not resp.ok:
            raise FeedError(
                f"GET {path} returned {resp.status_code}",
                code=FeedErrorCode.HTTP_STATUS,
                feed=feed,
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise FeedError(
                f"GET {path} returned a non-JSON body",
                code=FeedErrorCode.MALFORMED_PAYLOAD,
                feed=feed,
            ) from exc
        logger.debug("GET %s -> %s", path, resp.status_code)
        return body

    def close(self) -> None:
        self.session.close()
