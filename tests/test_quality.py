"""Tests for snapshot quality checks."""

from dataclasses import replace
from datetime import datetime, timezone

from conftest import make_alert, make_article, make_asset, make_history, make_holding, make_portfolio
from marketwatch.models.dashboard import DashboardSummary
from marketwatch.models.snapshot import Snapshot
from marketwatch.quality import validate_price_history, validate_snapshot


def _snapshot(**kwargs) -> Snapshot:
    defaults = dict(
        dashboard=DashboardSummary(),
        stocks=(make_asset("AAPL", history=make_history(1.0, 2.0)),),
        crypto=(),
        portfolio=make_portfolio(make_holding("AAPL", 1)),
        news=(make_article("n1", "headline"),),
        alerts=(make_alert("a1", "low"), make_alert("a2", "high")),
        fetched_at=datetime(2024, 1, 16, tzinfo=timezone.utc),
    )
    defaults.update(kwargs)
    return Snapshot(**defaults)


def _check(result, name):
    return next(c for c in result.checks if c.name == name)


class TestValidateSnapshot:
    def test_valid(self):
        assert validate_snapshot(_snapshot()).passed

    def test_negative_price(self):
        result = validate_snapshot(_snapshot(crypto=(make_asset("X", current_price=-1.0),)))
        assert not _check(result, "price_sanity").passed

    def test_nan_price(self):
        result = validate_snapshot(_snapshot(crypto=(make_asset("X", current_price=float("nan")),)))
        assert not _check(result, "price_sanity").passed

    def test_unordered_history(self):
        history = tuple(reversed(make_history(1.0, 2.0)))
        result = validate_snapshot(_snapshot(stocks=(make_asset("AAPL", history=history),)))
        check = _check(result, "history_sanity")
        assert not check.passed
        assert "AAPL" in check.message

    def test_non_positive_quantity(self):
        result = validate_snapshot(_snapshot(portfolio=make_portfolio(make_holding("AAPL", 0))))
        assert not _check(result, "holding_quantity").passed

    def test_duplicate_alert_ids(self):
        result = validate_snapshot(_snapshot(alerts=(make_alert("a", "low"), make_alert("a", "high"))))
        assert not _check(result, "alert_ids_unique").passed

    def test_sentiment_out_of_range(self):
        result = validate_snapshot(_snapshot(news=(make_article("n", "t", sentiment=1.5),)))
        assert not _check(result, "sentiment_range").passed


class TestValidatePriceHistory:
    def test_empty_passes(self):
        assert validate_price_history(()).passed

    def test_duplicate_timestamp(self):
        point = make_history(1.0)[0]
        result = validate_price_history((point, replace(point, price=2.0)))
        assert not _check(result, "history_order").passed
