"""Market feed error types."""

from __future__ import annotations

from enum import Enum


class FeedErrorCode(Enum):
    """Error classification codes."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    MALFORMED_PAYLOAD = "malformed_payload"
    NOT_FOUND = "not_found"


class FeedError(Exception):
    """Single-feed fetch failure with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        feed: Name of the feed that failed, when known.
        retryable: Whether the next refresh cycle may succeed.
        status_code: HTTP status for ``HTTP_STATUS`` errors.
    """

    def __init__(
        self,
        message: str,
        code: FeedErrorCode = FeedErrorCode.TRANSPORT,
        feed: str | None = None,
        retryable: bool = True,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.feed = feed
        self.retryable = retryable
        self.status_code = status_code


FetchError = FeedError


class CycleError(Exception):
    """A refresh cycle aborted because one of its feeds failed.

    Attributes:
        cause: The first ``FeedError`` raised during the cycle.
    """

    def __init__(self, message: str, cause: FeedError) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def feed(self) -> str | None:
        return self.cause.feed
