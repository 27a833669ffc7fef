"""Feed client registry."""

from __future__ import annotations

from marketwatch.config import FeedClientType
from marketwatch.feeds.base import BaseFeedClient
from marketwatch.feeds.mock import MockFeedClient
from marketwatch.feeds.rest import HttpFeedClient

CLIENT_CLASSES: dict[FeedClientType, type[BaseFeedClient]] = {
    FeedClientType.HTTP: HttpFeedClient,
    FeedClientType.MOCK: MockFeedClient,
}


def create_client(client_type: FeedClientType, **kwargs) -> BaseFeedClient:
    """Instantiate a feed client by type, forwarding kwargs to its constructor."""
    return CLIENT_CLASSES[client_type](**kwargs)


__all__ = ["BaseFeedClient", "HttpFeedClient", "MockFeedClient", "CLIENT_CLASSES", "create_client"]
