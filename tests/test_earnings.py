"""Tests for the earnings summary and ledger."""

from datetime import datetime, timedelta, timezone

import pytest

from garagedesk.engine.earnings import daily_series, summarize
from garagedesk.errors import ValidationError
from garagedesk.schemas.earnings_schema import Earning
from garagedesk.store.earnings import EarningsLedger
from tests.conftest import GARAGE_ID, OTHER_GARAGE_ID

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


def earning(amount: float, when=None, earning_id: str = "ER-1") -> Earning:
    return Earning(id=earning_id, garage_id=GARAGE_ID, amount=amount, transaction_date=when)


class TestSummarize:
    def test_no_earnings(self):
        summary = summarize([], NOW)
        assert summary.total == 0
        assert summary.last_30_days == 0
        assert summary.last_7_days == 0
        assert summary.average_transaction == 0
        assert summary.transaction_count == 0
        assert len(summary.daily) == 30
        assert all(d.amount == 0 for d in summary.daily)

    def test_week_boundary_is_inclusive(self):
        summary = summarize([earning(100.0, NOW - timedelta(days=7))], NOW)
        assert summary.last_7_days == pytest.approx(100.0)
        assert summary.last_30_days == pytest.approx(100.0)

    def test_just_outside_week(self):
        summary = summarize([earning(100.0, NOW - timedelta(days=7, seconds=1))], NOW)
        assert summary.last_7_days == 0
        assert summary.last_30_days == pytest.approx(100.0)

    def test_month_boundary_is_inclusive(self):
        summary = summarize([earning(250.0, NOW - timedelta(days=30))], NOW)
        assert summary.last_30_days == pytest.approx(250.0)

    def test_just_outside_month_counts_in_total_only(self):
        summary = summarize([earning(250.0, NOW - timedelta(days=30, seconds=1))], NOW)
        assert summary.last_30_days == 0
        assert summary.total == pytest.approx(250.0)

    def test_undated_counts_in_total_and_average_only(self):
        summary = summarize([earning(300.0, None), earning(100.0, NOW, "ER-2")], NOW)
        assert summary.total == pytest.approx(400.0)
        assert summary.average_transaction == pytest.approx(200.0)
        assert summary.last_7_days == pytest.approx(100.0)
        assert sum(d.amount for d in summary.daily) == pytest.approx(100.0)

    def test_average_and_count(self):
        items = [earning(a, NOW, f"ER-{i}") for i, a in enumerate((100.0, 200.0, 600.0))]
        summary = summarize(items, NOW)
        assert summary.transaction_count == 3
        assert summary.average_transaction == pytest.approx(300.0)


class TestDailySeries:
    def test_oldest_first_ending_today(self):
        series = daily_series([], NOW.date())
        assert series[0].day == NOW.date() - timedelta(days=29)
        assert series[-1].day == NOW.date()

    def test_same_day_amounts_summed(self):
        morning = NOW.replace(hour=8)
        series = daily_series(
            [earning(100.0, morning), earning(50.0, NOW, "ER-2")], NOW.date()
        )
        assert series[-1].amount == pytest.approx(150.0)

    def test_days_before_window_dropped(self):
        series = daily_series([earning(100.0, NOW - timedelta(days=30))], NOW.date())
        assert sum(d.amount for d in series) == 0


class TestEarningsLedger:
    def setup_method(self):
        self.ledger = EarningsLedger()

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            self.ledger.record_earning(GARAGE_ID, -5.0)

    def test_defaults_to_now(self):
        record = self.ledger.record_earning(GARAGE_ID, 799.0, booking_id="BK-1")
        assert record.id.startswith("ER-")
        assert record.transaction_date is not None
        assert record.status == "completed"

    def test_list_newest_first_and_scoped(self):
        self.ledger.record_earning(GARAGE_ID, 100.0, transaction_date=NOW - timedelta(days=2))
        self.ledger.record_earning(GARAGE_ID, 200.0, transaction_date=NOW)
        self.ledger.record_earning(OTHER_GARAGE_ID, 999.0, transaction_date=NOW)
        listed = self.ledger.list_earnings(GARAGE_ID)
        assert [e.amount for e in listed] == [200.0, 100.0]


class TestEarningsSummaryOnBackend:
    def test_summary_scoped_to_garage(self, backend):
        backend.earnings.record_earning(GARAGE_ID, 500.0, transaction_date=NOW - timedelta(days=3))
        backend.earnings.record_earning(GARAGE_ID, 300.0, transaction_date=NOW - timedelta(days=20))
        backend.earnings.record_earning(OTHER_GARAGE_ID, 999.0, transaction_date=NOW)
        summary = backend.earnings_summary(GARAGE_ID, now=NOW)
        assert summary.total == pytest.approx(800.0)
        assert summary.last_7_days == pytest.approx(500.0)
        assert summary.last_30_days == pytest.approx(800.0)
