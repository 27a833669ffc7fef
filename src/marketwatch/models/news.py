"""News article data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from marketwatch.models._convert import opt_str, parse_timestamp, str_tuple, to_float


@dataclass(frozen=True)
class NewsArticle:
    """News item with impact and sentiment scores.

    Attributes:
        id: Article id.
        title: Headline.
        source: Publisher.
        category: Category tag (earnings, crypto, macro, ...).
        impact: ``critical``, ``high``, ``medium`` or ``low``.
        sentiment: Score in [0, 1], higher is more bullish.
        timestamp: Publication time.
        summary: Optional abstract.
        affected_assets: Symbols mentioned.
        tags: Free-form tags.
    """

    id: str
    title: str
    source: str
    category: str
    impact: str
    sentiment: float
    timestamp: datetime
    summary: str | None = None
    affected_assets: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NewsArticle:
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            source=str(data.get("source", "")),
            category=str(data.get("category", "")),
            impact=str(data.get("impact", "")),
            sentiment=to_float(data.get("sentiment", 0.5)),
            timestamp=parse_timestamp(data["timestamp"]),
            summary=opt_str(data.get("summary")),
            affected_assets=str_tuple(data.get("affectedAssets")),
            tags=str_tuple(data.get("tags")),
        )
