"""
Earnings summary for the payouts dashboard.

Totals cover every record regardless of status. The rolling windows are
measured back from ``now`` and include a record dated exactly on the
boundary; records without a transaction date count toward the total and
the average only. ``now`` and the stored transaction dates must both be
timezone-aware (the store writes UTC).

Usage:
    summary = summarize(ledger.list_earnings("garage-1"), datetime.now(timezone.utc))
    summary.last_7_days, summary.daily[-1]
"""

import datetime as dt
from typing import Iterable

from garagedesk.schemas.earnings_schema import DailyEarnings, Earning, EarningsSummary

WEEK = dt.timedelta(days=7)
MONTH = dt.timedelta(days=30)
CHART_DAYS = 30


def window_total(earnings: Iterable[Earning], since: dt.datetime) -> float:
    """Sum of amounts dated at or after ``since``."""
    return sum(
        e.amount for e in earnings
        if e.transaction_date is not None and e.transaction_date >= since
    )


def daily_series(
    earnings: Iterable[Earning], today: dt.date, days: int = CHART_DAYS
) -> tuple[DailyEarnings, ...]:
    """Per-day totals for the ``days`` days ending on ``today``, oldest first."""
    by_day: dict[dt.date, float] = {}
    for earning in earnings:
        if earning.transaction_date is None:
            continue
        day = earning.transaction_date.date()
        by_day[day] = by_day.get(day, 0.0) + earning.amount
    first = today - dt.timedelta(days=days - 1)
    return tuple(
        DailyEarnings(day=day, amount=by_day.get(day, 0.0))
        for day in (first + dt.timedelta(days=i) for i in range(days))
    )


def summarize(earnings: Iterable[Earning], now: dt.datetime) -> EarningsSummary:
    earnings = list(earnings)
    total = sum(e.amount for e in earnings)
    return EarningsSummary(
        total=total,
        last_30_days=window_total(earnings, now - MONTH),
        last_7_days=window_total(earnings, now - WEEK),
        average_transaction=total / len(earnings) if earnings else 0.0,
        transaction_count=len(earnings),
        daily=daily_series(earnings, now.date()),
    )
