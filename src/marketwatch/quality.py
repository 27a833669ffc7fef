"""Data quality checks for installed snapshots.

Checks never fail a refresh cycle; the store logs failed checks and the
derived views degrade gracefully on bad records.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from marketwatch.models.asset import PricePoint
from marketwatch.models.snapshot import Snapshot


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def add(self, name: str, failures: int, message: str) -> None:
        if failures:
            self.checks.append(ValidationCheck(name, False, f"{failures} {message}"))
        else:
            self.checks.append(ValidationCheck(name, True))


def validate_price_history(points: Sequence[PricePoint]) -> ValidationResult:
    """Check one price history.

    Checks:
        1. No NaN/Inf or negative prices
        2. Timestamp ordering (strictly chronological)
    """
    result = ValidationResult()
    bad = sum(1 for p in points if not math.isfinite(p.price) or p.price < 0)
    result.add("history_prices", bad, "invalid prices")
    out_of_order = sum(
        1 for i in range(1, len(points)) if points[i].timestamp <= points[i - 1].timestamp
    )
    result.add("history_order", out_of_order, "out of order")
    return result


def validate_snapshot(snapshot: Snapshot) -> ValidationResult:
    """Run all quality checks on a snapshot.

    Checks:
        1. Asset prices finite and non-negative
        2. Asset volumes non-negative
        3. Price histories chronological
        4. Holding quantities positive
        5. Alert ids unique
        6. News sentiment within [0, 1]
    """
    result = ValidationResult()
    assets = snapshot.assets

    # 1. Prices
    bad_prices = sum(
        1 for a in assets if not math.isfinite(a.current_price) or a.current_price < 0
    )
    result.add("price_sanity", bad_prices, "assets with invalid price")

    # 2. Volumes
    result.add("volume_sanity", sum(1 for a in assets if a.volume < 0), "assets with negative volume")

    # 3. Histories
    unordered = [
        a.symbol for a in assets
        if a.price_history and not validate_price_history(a.price_history).passed
    ]
    result.add("history_sanity", len(unordered), f"bad price histories ({', '.join(unordered)})")

    # 4. Holdings
    result.add(
        "holding_quantity",
        sum(1 for h in snapshot.portfolio.holdings if h.quantity <= 0),
        "holdings with non-positive quantity",
    )

    # 5. Alert ids
    dupes = [i for i, n in Counter(a.id for a in snapshot.alerts).items() if n > 1]
    result.add("alert_ids_unique", len(dupes), "duplicate alert ids")

    # 6. Sentiment
    result.add(
        "sentiment_range",
        sum(1 for n in snapshot.news if not 0.0 <= n.sentiment <= 1.0),
        "articles with sentiment outside [0, 1]",
    )

    return result
