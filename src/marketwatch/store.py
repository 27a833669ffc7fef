"""SyncStore — periodic all-or-nothing refresh of the six feeds."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from marketwatch.config import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    FeedClientType,
    FeedType,
    MarketWatchConfig,
)
from marketwatch.errors import CycleError, FeedError
from marketwatch.feeds import create_client
from marketwatch.feeds.base import BaseFeedClient
from marketwatch.models.snapshot import Snapshot
from marketwatch.quality import validate_snapshot

logger = logging.getLogger(__name__)

CYCLE_ERROR_MESSAGE = "Failed to fetch data. Please try again."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StoreState:
    """What subscribers see after each install or recorded failure.

    Attributes:
        snapshot: Last successfully installed snapshot, if any.
        loading: True before the first completed cycle and during an
            explicit refresh.
        error: User-facing message from the last failed cycle, cleared on
            the next successful one.
        last_updated: ``fetched_at`` of the installed snapshot.
    """

    snapshot: Snapshot | None
    loading: bool
    error: str | None
    last_updated: datetime | None


Subscriber = Callable[[StoreState], None]


class SyncStore:
    """Owns the current snapshot and refreshes it on a timer and on demand.

    A cycle fetches all six feeds concurrently and installs a new
    snapshot only when every fetch succeeded; otherwise the previous
    snapshot stays in place and an error message is recorded.

    Overlap policy: every cycle supersedes the ones still in flight
    (latest wins, superseded results are discarded), and timer ticks are
    skipped while any cycle is in flight. ``stop()`` supersedes in-flight
    cycles too, so nothing is installed after deactivation.

    Usage::

        store = SyncStore(create_client(FeedClientType.HTTP))
        store.subscribe(lambda state: print(state.last_updated))
        async with store:
            await asyncio.sleep(120)
    """

    def __init__(
        self,
        client: BaseFeedClient,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        validate: bool = True,
        stale_after: float | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self.client = client
        self.poll_interval = poll_interval
        self.validate = validate
        self.stale_after = stale_after if stale_after is not None else 2 * poll_interval
        self.last_error: CycleError | None = None

        self._clock = clock
        self._snapshot: Snapshot | None = None
        self._loading = True
        self._error: str | None = None
        self._subscribers: list[Subscriber] = []
        self._timer: asyncio.Task[None] | None = None
        self._generation = 0
        self._in_flight = 0

    @classmethod
    def from_config(
        cls,
        config: MarketWatchConfig,
        client: BaseFeedClient | None = None,
    ) -> SyncStore:
        """Build a store and, unless given one, its feed client from config."""
        if client is None:
            kwargs: dict[str, Any] = {}
            if config.client is FeedClientType.HTTP:
                kwargs["base_url"] = config.base_url
                kwargs["timeout"] = config.timeout_seconds
            client = create_client(config.client, **kwargs)
        return cls(
            client,
            poll_interval=config.poll_interval_seconds,
            validate=config.validate,
            stale_after=config.stale_after_seconds,
        )

    # ---------------------------------------------------------------- state

    @property
    def state(self) -> StoreState:
        return StoreState(
            snapshot=self._snapshot,
            loading=self._loading,
            error=self._error,
            last_updated=self._snapshot.fetched_at if self._snapshot else None,
        )

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def last_updated(self) -> datetime | None:
        return self._snapshot.fetched_at if self._snapshot else None

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    def age(self) -> float | None:
        """Seconds since the installed snapshot was fetched."""
        if self._snapshot is None:
            return None
        return (self._clock() - self._snapshot.fetched_at).total_seconds()

    @property
    def is_stale(self) -> bool:
        age = self.age()
        return age is None or age > self.stale_after

    # ---------------------------------------------------------- subscribers

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        state = self.state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Store subscriber %r failed", callback)

    # ------------------------------------------------------------ lifecycle

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def start(self) -> None:
        """Fetch immediately, then every ``poll_interval`` seconds.

        Must be called from inside a running event loop.
        """
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.create_task(self._poll_loop(), name="marketwatch-poll")
        logger.info("Sync store started (poll interval %.1fs)", self.poll_interval)

    def stop(self) -> None:
        """Cancel the timer and discard any cycle still in flight."""
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            logger.info("Sync store stopped")
        self._generation += 1
        if self._in_flight:
            # discarded cycles never reach the branch that clears it
            self._loading = False

    async def __aenter__(self) -> SyncStore:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.stop()

    async def _poll_loop(self) -> None:
        while True:
            if self.busy:
                logger.debug("Refresh cycle in flight; skipping tick")
            else:
                try:
                    await self._run_cycle()
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("Unexpected error during scheduled refresh")
            await asyncio.sleep(self.poll_interval)

    # -------------------------------------------------------------- refresh

    async def refresh(self) -> bool:
        """Run one cycle now, superseding any cycle in flight.

        Returns:
            True when a new snapshot was installed. Feed failures are
            recorded on the store, never raised.
        """
        self._loading = True
        return await self._run_cycle()

    async def _run_cycle(self) -> bool:
        self._generation += 1
        generation = self._generation
        self._in_flight += 1
        try:
            try:
                feeds = await self._fetch_all()
            except CycleError as exc:
                if generation != self._generation:
                    logger.debug("Discarding failure of superseded cycle %d", generation)
                    return False
                self._loading = False
                self._error = CYCLE_ERROR_MESSAGE
                self.last_error = exc
                logger.warning("Refresh cycle failed: %s", exc)
                self._notify()
                return False

            if generation != self._generation:
                logger.debug("Discarding result of superseded cycle %d", generation)
                return False

            snapshot = Snapshot(
                dashboard=feeds[FeedType.DASHBOARD],
                stocks=tuple(feeds[FeedType.STOCKS]),
                crypto=tuple(feeds[FeedType.CRYPTO]),
                portfolio=feeds[FeedType.PORTFOLIO],
                news=tuple(feeds[FeedType.NEWS]),
                alerts=tuple(feeds[FeedType.ALERTS]),
                fetched_at=self._clock(),
            )
            if self.validate:
                for check in validate_snapshot(snapshot).failed_checks:
                    logger.warning("Snapshot check %s failed: %s", check.name, check.message)

            self._snapshot = snapshot
            self._loading = False
            self._error = None
            self.last_error = None
            logger.debug(
                "Installed snapshot: %d stocks, %d crypto, %d news, %d alerts",
                len(snapshot.stocks), len(snapshot.crypto),
                len(snapshot.news), len(snapshot.alerts),
            )
            self._notify()
            return True
        finally:
            self._in_flight -= 1

    async def _fetch_all(self) -> dict[FeedType, Any]:
        """Fetch every feed concurrently; the first failure aborts the cycle."""
        feeds = list(FeedType)
        try:
            results = await asyncio.gather(
                *(asyncio.to_thread(self.client.fetch_feed, feed) for feed in feeds)
            )
        except FeedError as exc:
            raise CycleError(f"{exc.feed or 'feed'} failed: {exc}", exc) from exc
        return dict(zip(feeds, results))
