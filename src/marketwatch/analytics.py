"""Portfolio analytics — value history, allocation and holding joins.

All functions are pure: they read a portfolio and asset collection and
return fresh structures. Degraded inputs (unmatched holdings, assets
without history, zero total value) contribute nothing instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

import pandas as pd

from marketwatch.models.asset import Asset
from marketwatch.models.portfolio import Holding, Portfolio


@dataclass(frozen=True)
class ValuePoint:
    """Portfolio value at one reference timestamp."""

    timestamp: datetime
    value: float


@dataclass(frozen=True)
class AllocationSlice:
    """Share of total portfolio value held in one asset."""

    holding_id: str
    value: float
    percentage: float


@dataclass(frozen=True)
class HoldingDetail:
    """A holding joined with its asset record (``None`` when unmatched)."""

    holding: Holding
    asset: Asset | None


@dataclass(frozen=True)
class WatchlistEntry:
    symbol: str
    asset: Asset | None


def _index_assets(assets: Iterable[Asset]) -> dict[str, Asset]:
    # first record wins when a symbol appears in both classes
    index: dict[str, Asset] = {}
    for asset in assets:
        index.setdefault(asset.symbol, asset)
    return index


def reference_asset(portfolio: Portfolio, assets: Iterable[Asset]) -> Asset | None:
    """First holding's matched asset that carries a price history."""
    index = _index_assets(assets)
    for holding in portfolio.holdings:
        asset = index.get(holding.asset_id)
        if asset is not None and asset.price_history:
            return asset
    return None


def build_value_history(
    portfolio: Portfolio | None,
    assets: Iterable[Asset],
) -> list[ValuePoint]:
    """Reconstruct portfolio value over the reference asset's timeline.

    Point ``i`` sums ``price_history[i].price * quantity`` over holdings.
    Histories are aligned by index, not by timestamp: a holding whose
    asset is missing or has fewer than ``i + 1`` samples contributes 0 at
    that point. Returns ``[]`` when no held asset has a history.
    """
    if portfolio is None:
        return []
    index = _index_assets(assets)
    reference = reference_asset(portfolio, index.values())
    if reference is None:
        return []

    histories = [
        (holding.quantity, index[holding.asset_id].price_history if holding.asset_id in index else ())
        for holding in portfolio.holdings
    ]
    points: list[ValuePoint] = []
    for i, ref_point in enumerate(reference.price_history):
        total = 0.0
        for quantity, history in histories:
            if i < len(history):
                total += history[i].price * quantity
        points.append(ValuePoint(timestamp=ref_point.timestamp, value=total))
    return points


def build_allocation(portfolio: Portfolio | None) -> list[AllocationSlice]:
    """Per-holding share of ``total_value``, rounded to one decimal.

    Every percentage is 0 when ``total_value`` is 0.
    """
    if portfolio is None:
        return []
    total = portfolio.total_value
    return [
        AllocationSlice(
            holding_id=h.asset_id,
            value=h.value,
            percentage=round(h.value / total * 100, 1) if total else 0.0,
        )
        for h in portfolio.holdings
    ]


def holding_details(portfolio: Portfolio | None, assets: Iterable[Asset]) -> list[HoldingDetail]:
    if portfolio is None:
        return []
    index = _index_assets(assets)
    return [HoldingDetail(holding=h, asset=index.get(h.asset_id)) for h in portfolio.holdings]


def resolve_watchlist(portfolio: Portfolio | None, assets: Iterable[Asset]) -> list[WatchlistEntry]:
    """Pair each watchlist symbol with its asset; unknown symbols map to ``None``."""
    if portfolio is None:
        return []
    index = _index_assets(assets)
    return [WatchlistEntry(symbol=s, asset=index.get(s)) for s in portfolio.watchlist]


def value_history_frame(points: Sequence[ValuePoint]) -> pd.DataFrame:
    """Value history as a DataFrame with a ``value`` column indexed by timestamp."""
    df = pd.DataFrame(
        {"value": [p.value for p in points]},
        index=pd.DatetimeIndex([p.timestamp for p in points], name="timestamp"),
    )
    return df
