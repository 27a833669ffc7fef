"""Asset (stock or crypto) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from marketwatch.models._convert import (
    opt_float,
    opt_str,
    parse_timestamp,
    record_list,
    to_float,
)


class AssetClass(Enum):
    """Asset discriminant, stamped by the feed that delivered the record."""

    STOCK = "stock"
    CRYPTO = "crypto"


@dataclass(frozen=True)
class PricePoint:
    """One sample of an asset's price history."""

    timestamp: datetime
    price: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PricePoint:
        return cls(
            timestamp=parse_timestamp(data["timestamp"]),
            price=to_float(data["price"]),
        )


@dataclass(frozen=True)
class KeyMetrics:
    """Fundamental ratios shown in the asset detail panel."""

    pe_ratio: float | None = None
    eps: float | None = None
    dividend_yield: float | None = None
    beta: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeyMetrics:
        return cls(
            pe_ratio=opt_float(data.get("peRatio")),
            eps=opt_float(data.get("eps")),
            dividend_yield=opt_float(data.get("dividendYield")),
            beta=opt_float(data.get("beta")),
        )


@dataclass(frozen=True)
class Asset:
    """Tradable asset as delivered by the stocks or crypto feed.

    Attributes:
        symbol: Ticker, unique within its asset class.
        name: Display name.
        current_price: Last price (>= 0).
        change_percent: Signed percent change.
        volume: Traded volume.
        asset_class: ``stock`` or ``crypto``.
        id: Backend record id, if any.
        market_cap: Market capitalization.
        sector: Industry sector (stocks).
        description: Free-text description.
        key_metrics: P/E, EPS, dividend yield and beta.
        price_history: Chronological price samples, possibly empty.
    """

    symbol: str
    name: str
    current_price: float
    change_percent: float
    volume: int
    asset_class: AssetClass
    id: str | None = None
    market_cap: float | None = None
    sector: str | None = None
    description: str | None = None
    key_metrics: KeyMetrics | None = None
    price_history: tuple[PricePoint, ...] = ()

    @property
    def has_history(self) -> bool:
        return bool(self.price_history)

    @classmethod
    def from_dict(cls, data: dict[str, Any], asset_class: AssetClass) -> Asset:
        metrics = data.get("keyMetrics")
        return cls(
            symbol=str(data["symbol"]),
            name=str(data["name"]),
            current_price=to_float(data["currentPrice"]),
            change_percent=to_float(data["changePercent"]),
            volume=int(data.get("volume") or 0),
            asset_class=asset_class,
            id=opt_str(data.get("id")),
            market_cap=opt_float(data.get("marketCap")),
            sector=opt_str(data.get("sector")),
            description=opt_str(data.get("description")),
            key_metrics=KeyMetrics.from_dict(metrics) if metrics else None,
            price_history=tuple(
                PricePoint.from_dict(p) for p in record_list(data.get("priceHistory"))
            ),
        )
