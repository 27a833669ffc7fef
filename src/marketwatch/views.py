"""Collection views — filter, search, sort and group pipelines.

Each view is a pure function of a snapshot collection and the user's view
parameters. Badge counts are always computed from the unfiltered
collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

from marketwatch.classify import DOCUMENTED_SEVERITIES, SEVERITY_ORDER, Severity, classify_severity
from marketwatch.models.alert import Alert
from marketwatch.models.asset import Asset, AssetClass
from marketwatch.models.news import NewsArticle

ALL = "all"


# ---------------------------------------------------------------- sorting

class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


# field name -> whether it compares as a string
ASSET_SORT_FIELDS: dict[str, bool] = {
    "symbol": True,
    "name": True,
    "current_price": False,
    "change_percent": False,
    "volume": False,
    "market_cap": False,
}

_SORT_ALIASES: dict[str, str] = {
    "currentPrice": "current_price",
    "changePercent": "change_percent",
    "marketCap": "market_cap",
}


def normalize_sort_key(key: str) -> str:
    key = _SORT_ALIASES.get(key, key)
    if key not in ASSET_SORT_FIELDS:
        raise ValueError(f"Invalid sort key: {key}. Valid: {list(ASSET_SORT_FIELDS)}")
    return key


@dataclass(frozen=True)
class SortState:
    """Active sort key and direction.

    ``toggle`` flips the direction when the same key is chosen again and
    resets to ascending for a new key.
    """

    key: str = "symbol"
    direction: SortDirection = SortDirection.ASC

    def toggle(self, key: str) -> SortState:
        key = normalize_sort_key(key)
        if key == self.key and self.direction is SortDirection.ASC:
            return SortState(key, SortDirection.DESC)
        return SortState(key, SortDirection.ASC)


class AssetFilter(Enum):
    ALL = "all"
    STOCK = "stock"
    CRYPTO = "crypto"

    @classmethod
    def parse(cls, value: AssetFilter | str | None) -> AssetFilter:
        if value is None:
            return cls.ALL
        if isinstance(value, cls):
            return value
        value = str(value).lower()
        return cls({"stocks": "stock"}.get(value, value))


# ----------------------------------------------------------------- assets

def filter_assets(assets: Iterable[Asset], asset_filter: AssetFilter | str | None = None) -> list[Asset]:
    asset_filter = AssetFilter.parse(asset_filter)
    if asset_filter is AssetFilter.ALL:
        return list(assets)
    wanted = AssetClass(asset_filter.value)
    return [a for a in assets if a.asset_class is wanted]


def search_assets(assets: Iterable[Asset], query: str | None) -> list[Asset]:
    """Case-insensitive substring match on symbol or name."""
    if not query:
        return list(assets)
    q = query.lower()
    return [a for a in assets if q in a.symbol.lower() or q in a.name.lower()]


def sort_assets(assets: Iterable[Asset], sort: SortState | None = None) -> list[Asset]:
    """Sort by ``sort.key``; strings case-insensitively, numbers numerically.

    Ties keep their input order. Records missing the field sort last in
    either direction.
    """
    sort = sort or SortState()
    key = normalize_sort_key(sort.key)
    is_text = ASSET_SORT_FIELDS[key]

    present: list[tuple[Any, Asset]] = []
    missing: list[Asset] = []
    for asset in assets:
        value = getattr(asset, key)
        if value is None:
            missing.append(asset)
        else:
            present.append((str(value).lower() if is_text else value, asset))

    present.sort(key=lambda pair: pair[0], reverse=sort.direction is SortDirection.DESC)
    return [a for _, a in present] + missing


def asset_view(
    assets: Iterable[Asset],
    asset_filter: AssetFilter | str | None = None,
    query: str | None = None,
    sort: SortState | None = None,
) -> list[Asset]:
    """filter -> search -> sort."""
    return sort_assets(search_assets(filter_assets(assets, asset_filter), query), sort)


def asset_counts(assets: Iterable[Asset]) -> dict[str, int]:
    counts = {ALL: 0, AssetClass.STOCK.value: 0, AssetClass.CRYPTO.value: 0}
    for asset in assets:
        counts[ALL] += 1
        counts[asset.asset_class.value] += 1
    return counts


# ------------------------------------------------------------------- news

def filter_news(news: Iterable[NewsArticle], category: str | None = None) -> list[NewsArticle]:
    if not category or category == ALL:
        return list(news)
    return [n for n in news if n.category == category]


def search_news(news: Iterable[NewsArticle], query: str | None) -> list[NewsArticle]:
    """Case-insensitive substring match on title, source or summary."""
    if not query:
        return list(news)
    q = query.lower()
    return [
        n for n in news
        if q in n.title.lower()
        or q in n.source.lower()
        or (n.summary is not None and q in n.summary.lower())
    ]


def news_view(
    news: Iterable[NewsArticle],
    category: str | None = None,
    query: str | None = None,
) -> list[NewsArticle]:
    """filter -> search, keeping feed order."""
    return search_news(filter_news(news, category), query)


def news_categories(news: Iterable[NewsArticle]) -> list[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(n.category for n in news))


def news_counts(news: Sequence[NewsArticle]) -> dict[str, int]:
    counts = {ALL: len(news)}
    for article in news:
        counts[article.category] = counts.get(article.category, 0) + 1
    return counts


# ----------------------------------------------------------------- alerts

@dataclass(frozen=True)
class AlertGroup:
    severity: Severity
    alerts: tuple[Alert, ...]

    def __len__(self) -> int:
        return len(self.alerts)


def filter_alerts(alerts: Iterable[Alert], severity: Severity | str | None = None) -> list[Alert]:
    if severity is None or severity == ALL:
        return list(alerts)
    wanted = severity if isinstance(severity, Severity) else classify_severity(severity)
    return [a for a in alerts if classify_severity(a.severity) is wanted]


def _newest_first(alerts: Iterable[Alert]) -> list[Alert]:
    return sorted(alerts, key=lambda a: a.timestamp, reverse=True)


def alert_list_view(alerts: Iterable[Alert], severity: Severity | str | None = None) -> list[Alert]:
    """Severity filter, newest first."""
    return _newest_first(filter_alerts(alerts, severity))


def alert_grouped_view(
    alerts: Iterable[Alert],
    severity: Severity | str | None = None,
) -> list[AlertGroup]:
    """Partition filtered alerts by severity, critical first.

    Empty groups are omitted. Unrecognized severities form a trailing
    ``unknown`` group so every filtered alert appears exactly once.
    Alerts inside a group are newest first.
    """
    buckets: dict[Severity, list[Alert]] = {s: [] for s in SEVERITY_ORDER}
    for alert in _newest_first(filter_alerts(alerts, severity)):
        buckets[classify_severity(alert.severity)].append(alert)
    return [AlertGroup(s, tuple(buckets[s])) for s in SEVERITY_ORDER if buckets[s]]


def alert_counts(alerts: Sequence[Alert]) -> dict[str, int]:
    """Totals per documented severity plus ``all``, from the unfiltered list."""
    counts = {ALL: len(alerts)}
    counts.update({s.value: 0 for s in DOCUMENTED_SEVERITIES})
    for alert in alerts:
        sev = classify_severity(alert.severity).value
        counts[sev] = counts.get(sev, 0) + 1
    return counts
