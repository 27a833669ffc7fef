"""Tests for portfolio analytics — value history, allocation, joins."""

from datetime import timedelta

import pandas as pd
import pytest

from conftest import T0, make_asset, make_history, make_holding, make_portfolio
from marketwatch.analytics import (
    build_allocation,
    build_value_history,
    holding_details,
    reference_asset,
    resolve_watchlist,
    value_history_frame,
)
from marketwatch.models.asset import AssetClass
from marketwatch.models.portfolio import Portfolio


class TestValueHistory:
    def test_single_holding(self):
        btc = make_asset("BTC", asset_class=AssetClass.CRYPTO, history=make_history(100.0, 110.0))
        portfolio = make_portfolio(make_holding("BTC", 2))
        points = build_value_history(portfolio, [btc])
        assert [p.value for p in points] == [200.0, 220.0]
        assert [p.timestamp for p in points] == [T0, T0 + timedelta(days=1)]

    def test_sums_holdings_per_index(self):
        a = make_asset("A", history=make_history(10.0, 20.0))
        b = make_asset("B", history=make_history(1.0, 2.0))
        portfolio = make_portfolio(make_holding("A", 1), make_holding("B", 10))
        assert [p.value for p in build_value_history(portfolio, [a, b])] == [20.0, 40.0]

    def test_mismatched_lengths_align_by_index(self):
        # A has 3 points, B has 5; B is the reference because it is held first
        a = make_asset("A", history=make_history(1.0, 2.0, 3.0))
        b = make_asset("B", history=make_history(10.0, 20.0, 30.0, 40.0, 50.0))
        portfolio = make_portfolio(make_holding("B", 1), make_holding("A", 1))
        points = build_value_history(portfolio, [a, b])
        assert len(points) == 5
        assert [p.value for p in points] == [11.0, 22.0, 33.0, 40.0, 50.0]

    def test_shorter_reference_truncates(self):
        a = make_asset("A", history=make_history(1.0, 2.0, 3.0))
        b = make_asset("B", history=make_history(10.0, 20.0, 30.0, 40.0, 50.0))
        portfolio = make_portfolio(make_holding("A", 1), make_holding("B", 1))
        points = build_value_history(portfolio, [a, b])
        assert len(points) == 3
        assert points[-1].value == 33.0

    def test_index_alignment_ignores_timestamps(self):
        # known limitation: offset timelines are still summed index by index
        a = make_asset("A", history=make_history(1.0, 2.0))
        b = make_asset("B", history=make_history(10.0, 20.0, start=T0 + timedelta(days=30)))
        portfolio = make_portfolio(make_holding("A", 1), make_holding("B", 1))
        points = build_value_history(portfolio, [a, b])
        assert [p.value for p in points] == [11.0, 22.0]
        assert points[0].timestamp == T0

    def test_reference_skips_holdings_without_history(self):
        flat = make_asset("FLAT")
        eth = make_asset("ETH", history=make_history(5.0, 6.0))
        portfolio = make_portfolio(make_holding("FLAT", 3), make_holding("ETH", 1), make_holding("GONE", 4))
        assert reference_asset(portfolio, [flat, eth]) is eth
        assert [p.value for p in build_value_history(portfolio, [flat, eth])] == [5.0, 6.0]

    def test_no_history_returns_empty(self):
        portfolio = make_portfolio(make_holding("AAPL", 1))
        assert build_value_history(portfolio, [make_asset("AAPL")]) == []

    def test_unheld_history_is_ignored(self):
        other = make_asset("OTHER", history=make_history(1.0, 2.0))
        portfolio = make_portfolio(make_holding("AAPL", 1))
        assert build_value_history(portfolio, [other, make_asset("AAPL")]) == []

    def test_no_portfolio(self):
        assert build_value_history(None, []) == []

    def test_frame(self):
        btc = make_asset("BTC", history=make_history(100.0, 110.0))
        points = build_value_history(make_portfolio(make_holding("BTC", 2)), [btc])
        df = value_history_frame(points)
        assert isinstance(df, pd.DataFrame)
        assert list(df["value"]) == [200.0, 220.0]
        assert df.index.name == "timestamp"

    def test_frame_empty(self):
        assert value_history_frame([]).empty


class TestAllocation:
    def test_percentages_sum_to_100(self):
        portfolio = make_portfolio(
            make_holding("A", 1, 333.0), make_holding("B", 1, 333.0), make_holding("C", 1, 334.0),
        )
        slices = build_allocation(portfolio)
        assert [s.holding_id for s in slices] == ["A", "B", "C"]
        assert [s.percentage for s in slices] == [33.3, 33.3, 33.4]
        assert sum(s.percentage for s in slices) == pytest.approx(100.0, abs=0.2)

    def test_rounded_to_one_decimal(self):
        portfolio = make_portfolio(make_holding("A", 2, 1.0), make_holding("B", 1, 1.0))
        assert [s.percentage for s in build_allocation(portfolio)] == [66.7, 33.3]

    def test_zero_total(self):
        portfolio = Portfolio(
            total_value=0.0, total_change=0.0, total_change_percent=0.0,
            holdings=(make_holding("A", 1, 0.0),),
        )
        slices = build_allocation(portfolio)
        assert len(slices) == 1
        assert slices[0].percentage == 0.0

    def test_empty(self):
        assert build_allocation(Portfolio.empty()) == []
        assert build_allocation(None) == []


class TestJoins:
    def test_holding_details(self):
        aapl = make_asset("AAPL")
        details = holding_details(make_portfolio(make_holding("AAPL", 1), make_holding("GONE", 1)), [aapl])
        assert details[0].asset is aapl
        assert details[1].asset is None

    def test_resolve_watchlist(self):
        msft = make_asset("MSFT")
        portfolio = make_portfolio(watchlist=("MSFT", "DOGE"))
        entries = resolve_watchlist(portfolio, [msft])
        assert [(e.symbol, e.asset) for e in entries] == [("MSFT", msft), ("DOGE", None)]
