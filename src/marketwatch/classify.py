"""Severity, category and sentiment classification tables.

Feeds are not schema-validated, so every lookup is case-insensitive and
falls back to a default bucket instead of raising.
"""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    """Alert severity / news impact, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int:
        """0 for critical, increasing as severity drops; unknown ranks last."""
        return SEVERITY_ORDER.index(self)


SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.UNKNOWN,
)

# Buckets a grouped alert view renders, in order.
DOCUMENTED_SEVERITIES: tuple[Severity, ...] = SEVERITY_ORDER[:-1]

DEFAULT_CATEGORY = "other"

CATEGORY_BUCKETS: dict[str, str] = {
    "earnings": "earnings",
    "technology": "technology",
    "tech": "technology",
    "crypto": "crypto",
    "market": "market",
    "regulatory": "regulatory",
    "regulation": "regulatory",
    "macro": "macro",
    "ai": "ai",
}

DEFAULT_ALERT_TYPE = "general"

ALERT_TYPE_BUCKETS: dict[str, str] = {
    "price": "price",
    "price_movement": "price",
    "price_alert": "price",
    "volume": "volume",
    "volume_spike": "volume",
    "news": "news",
    "portfolio": "portfolio",
    "risk": "risk",
    "earnings": "earnings",
    "technical": "technical",
}


def _normalize(raw: object) -> str:
    return str(raw).strip().lower() if raw is not None else ""


def classify_severity(raw: object) -> Severity:
    """Map a raw severity/impact tag to ``Severity``."""
    try:
        return Severity(_normalize(raw))
    except ValueError:
        return Severity.UNKNOWN


def severity_rank(raw: object) -> int:
    return classify_severity(raw).rank


def category_bucket(raw: object) -> str:
    """Group key for a news category."""
    return CATEGORY_BUCKETS.get(_normalize(raw), DEFAULT_CATEGORY)


def alert_type_bucket(raw: object) -> str:
    """Group key for an alert type."""
    return ALERT_TYPE_BUCKETS.get(_normalize(raw), DEFAULT_ALERT_TYPE)


def sentiment_bucket(score: float | None) -> str:
    """``bullish`` (>= 0.7), ``neutral`` (>= 0.5) or ``bearish``."""
    if score is None:
        return "neutral"
    if score >= 0.7:
        return "bullish"
    if score >= 0.5:
        return "neutral"
    return "bearish"
