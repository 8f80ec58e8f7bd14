"""Shared contact-recency utilities for insights and scoring."""

import math
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel

NEVER_CONTACTED_DAYS = 999

_SECONDS_PER_DAY = 86_400


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def resolve_as_of(as_of: Optional[datetime]) -> datetime:
    """Reference time for recency math; now (UTC) when not supplied."""
    return _as_utc(as_of) if as_of is not None else datetime.now(timezone.utc)


def days_since(
    timestamp: Optional[datetime],
    as_of: Optional[datetime] = None,
    *,
    never: int = NEVER_CONTACTED_DAYS,
) -> int:
    """
    Whole days since timestamp, rounded up (a contact 2.1 days ago counts as 3).
    Missing timestamp -> `never`. Naive datetimes are treated as UTC.
    """
    if timestamp is None:
        return never
    elapsed = resolve_as_of(as_of) - _as_utc(timestamp)
    return math.ceil(elapsed.total_seconds() / _SECONDS_PER_DAY)


class RefiEligibility(BaseModel):
    """Whether a mortgage can be refinanced yet."""

    eligible: bool
    days_until: int
    message: str


def refi_eligibility(
    refi_eligible_date: Optional[date | datetime],
    as_of: Optional[datetime] = None,
) -> RefiEligibility:
    """No date on file, or a date already reached, means eligible now."""
    if refi_eligible_date is None:
        return RefiEligibility(eligible=True, days_until=0, message="Eligible now")

    if isinstance(refi_eligible_date, datetime):
        eligible_at = _as_utc(refi_eligible_date)
    else:
        eligible_at = datetime(
            refi_eligible_date.year,
            refi_eligible_date.month,
            refi_eligible_date.day,
            tzinfo=timezone.utc,
        )
    remaining = eligible_at - resolve_as_of(as_of)
    days_until = math.ceil(remaining.total_seconds() / _SECONDS_PER_DAY)
    if days_until <= 0:
        return RefiEligibility(eligible=True, days_until=0, message="Eligible now")
    return RefiEligibility(
        eligible=False,
        days_until=days_until,
        message=f"Eligible in {days_until} days",
    )
