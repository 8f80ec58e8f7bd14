"""Benchmark rate observations."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class RatePoint(BaseModel):
    """One published rate observation for a loan type and term."""

    rate_date: dt.date
    loan_type: str
    term_years: int = 30
    rate_value: float
    rate_type: str = "market"
    source: Optional[str] = None


class RateTrend(BaseModel):
    """Rate on a date, with change from the previous observation."""

    date: dt.date
    rate: float
    change: Optional[float] = None


def build_trends(points: list[RatePoint]) -> list[RateTrend]:
    """Order points by date and attach day-over-day change (first point has none)."""
    ordered = sorted(points, key=lambda p: p.rate_date)
    trends: list[RateTrend] = []
    for i, point in enumerate(ordered):
        change = None
        if i > 0:
            change = round(point.rate_value - ordered[i - 1].rate_value, 3)
        trends.append(RateTrend(date=point.rate_date, rate=point.rate_value, change=change))
    return trends
