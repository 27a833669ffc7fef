"""Portfolio and holding data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from marketwatch.models._convert import record_list, str_tuple, to_float


@dataclass(frozen=True)
class Holding:
    """A portfolio's position in one asset.

    Attributes:
        asset_id: Symbol of the held asset.
        quantity: Units held (> 0).
        avg_buy_price: Average cost basis per unit.
        current_price: Last price per unit.
        value: ``quantity * current_price``.
        change: Dollar gain/loss against cost basis.
        change_percent: Percent gain/loss against cost basis.
    """

    asset_id: str
    quantity: float
    avg_buy_price: float
    current_price: float
    value: float
    change: float = 0.0
    change_percent: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Holding:
        quantity = to_float(data["quantity"])
        current_price = to_float(data["currentPrice"])
        value = data.get("value")
        return cls(
            asset_id=str(data["assetId"]),
            quantity=quantity,
            avg_buy_price=to_float(data.get("avgBuyPrice", 0.0)),
            current_price=current_price,
            value=to_float(value) if value is not None else quantity * current_price,
            change=to_float(data.get("change", 0.0)),
            change_percent=to_float(data.get("changePercent", 0.0)),
        )


@dataclass(frozen=True)
class Portfolio:
    """The user's portfolio snapshot.

    ``watchlist`` holds symbols with no guaranteed asset match.
    """

    total_value: float
    total_change: float
    total_change_percent: float
    holdings: tuple[Holding, ...] = ()
    watchlist: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> Portfolio:
        return cls(total_value=0.0, total_change=0.0, total_change_percent=0.0)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Portfolio:
        if not isinstance(data, dict):
            raise TypeError(f"Expected a portfolio object, got {type(data).__name__}")
        # the backend calls the holdings list "assets"
        return cls(
            total_value=to_float(data["totalValue"]),
            total_change=to_float(data.get("totalChange", 0.0)),
            total_change_percent=to_float(data.get("totalChangePercent", 0.0)),
            holdings=tuple(Holding.from_dict(h) for h in record_list(data.get("assets"))),
            watchlist=str_tuple(data.get("watchlist")),
        )
