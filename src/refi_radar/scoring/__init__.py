"""Opportunity scoring and ranking."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from refi_radar.models.client import ClientRecord
from refi_radar.models.profile import ScoringConfig
from refi_radar.recency import resolve_as_of

from .opportunity import (
    MissingRateError,
    OpportunityScore,
    ScoreBreakdown,
    UrgencyTier,
    score_client,
    urgency_tier,
)


def score_clients(
    clients: list[ClientRecord],
    current_market_rate: float,
    *,
    limit: Optional[int] = None,
    config: Optional[ScoringConfig] = None,
    as_of: Optional[datetime] = None,
) -> list[OpportunityScore]:
    """
    Score every client against one market rate, highest score first.
    Ties keep input order. limit truncates to the top N.
    """
    config = config or ScoringConfig()
    as_of = resolve_as_of(as_of)
    scored = [score_client(c, current_market_rate, config=config, as_of=as_of) for c in clients]
    scored.sort(key=lambda s: s.score, reverse=True)
    if limit is not None:
        scored = scored[: max(0, limit)]
    return scored


class OpportunityStats(BaseModel):
    """Count of scored opportunities per urgency tier."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0


def opportunity_stats(scores: list[OpportunityScore]) -> OpportunityStats:
    counts = {tier.value: 0 for tier in UrgencyTier}
    for s in scores:
        counts[s.urgency_level.value] += 1
    return OpportunityStats(**counts, total=len(scores))


__all__ = [
    "MissingRateError",
    "OpportunityScore",
    "OpportunityStats",
    "ScoreBreakdown",
    "UrgencyTier",
    "opportunity_stats",
    "score_client",
    "score_clients",
    "urgency_tier",
]
