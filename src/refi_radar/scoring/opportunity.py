"""Opportunity scoring: weighted savings, recency, stage and loan-size heuristic."""

import math
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from refi_radar.models.client import ClientRecord, PipelineStage
from refi_radar.models.profile import ScoringConfig, ThresholdTable
from refi_radar.mortgage_math import monthly_savings, round_half_up
from refi_radar.recency import days_since

from .messages import build_call_recommendation, build_reasoning


class MissingRateError(ValueError):
    """Client has no current_rate and the config forbids assuming one."""


class UrgencyTier(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScoreBreakdown(BaseModel):
    """The four additive sub-scores and the multiplier applied to their sum."""

    financial: float
    urgency: float
    pipeline: float
    target_hit_bonus: float
    loan_multiplier: float

    @property
    def base(self) -> float:
        return self.financial + self.urgency + self.pipeline + self.target_hit_bonus


class OpportunityScore(BaseModel):
    """Ranked call opportunity for one client. Recomputed on every request."""

    client_id: str
    client_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    loan_amount: float
    current_rate: float
    target_rate: float
    savings_monthly: float
    savings_annual: float
    days_since_contact: int
    pipeline_stage: Optional[PipelineStage] = None
    score: int
    urgency_level: UrgencyTier
    reasoning: list[str] = Field(default_factory=list)
    call_recommendation: str
    breakdown: ScoreBreakdown


def step_lookup(table: ThresholdTable, value: float, default: float = 0) -> float:
    """Points for the first (minimum, points) row whose minimum value meets."""
    for minimum, points in table:
        if value >= minimum:
            return points
    return default


def financial_score(savings_monthly: float, config: Optional[ScoringConfig] = None) -> float:
    """0-50 from monthly savings; below the lowest tier, one point per $5 saved."""
    config = config or ScoringConfig()
    fallback = max(0, math.floor(savings_monthly / config.financial_fallback_divisor))
    return step_lookup(config.financial_points, savings_monthly, default=fallback)


def urgency_score(days_since_contact: int, config: Optional[ScoringConfig] = None) -> float:
    """0-25 from days since last contact."""
    config = config or ScoringConfig()
    return step_lookup(config.urgency_points, days_since_contact)


def pipeline_score(stage: Optional[PipelineStage], config: Optional[ScoringConfig] = None) -> float:
    """Fixed points per stage; missing or unlisted stages get unknown_stage_points."""
    config = config or ScoringConfig()
    if stage is None:
        return config.unknown_stage_points
    return config.stage_points.get(stage.value, config.unknown_stage_points)


def target_hit_bonus(
    market_rate: float,
    target_rate: float,
    config: Optional[ScoringConfig] = None,
) -> float:
    config = config or ScoringConfig()
    if market_rate <= target_rate:
        return config.target_hit_points
    if market_rate <= target_rate + config.near_target_margin:
        return config.near_target_points
    return 0


def loan_multiplier(loan_amount: float, config: Optional[ScoringConfig] = None) -> float:
    config = config or ScoringConfig()
    return step_lookup(config.loan_multipliers, loan_amount, default=1.0)


def urgency_tier(score: float, config: Optional[ScoringConfig] = None) -> UrgencyTier:
    """critical >= 80, high >= 60, medium >= 40, else low (default thresholds)."""
    config = config or ScoringConfig()
    for minimum, tier in config.urgency_tiers:
        if score >= minimum:
            return UrgencyTier(tier)
    return UrgencyTier.LOW


def resolve_current_rate(client: ClientRecord, config: Optional[ScoringConfig] = None) -> float:
    """Rate on file, else target + assumed spread (or MissingRateError if required)."""
    config = config or ScoringConfig()
    if client.current_rate is not None:
        return client.current_rate
    if config.require_current_rate:
        raise MissingRateError(f"Client {client.id} has no current_rate on file")
    return client.target_rate + config.assumed_rate_spread_when_missing


def score_client(
    client: ClientRecord,
    current_market_rate: float,
    *,
    config: Optional[ScoringConfig] = None,
    as_of: Optional[datetime] = None,
) -> OpportunityScore:
    """
    Score one client against today's market rate.
    Sum of financial, urgency, pipeline and target-hit points, scaled by loan size.
    Deterministic for a fixed as_of.
    """
    config = config or ScoringConfig()
    current_rate = resolve_current_rate(client, config)
    term_years = client.term_years or config.default_term_years

    savings = monthly_savings(client.loan_amount, current_rate, current_market_rate, term_years)
    days = days_since(client.last_contact, as_of, never=config.never_contacted_days)
    stage = client.current_stage

    breakdown = ScoreBreakdown(
        financial=financial_score(savings, config),
        urgency=urgency_score(days, config),
        pipeline=pipeline_score(stage, config),
        target_hit_bonus=target_hit_bonus(current_market_rate, client.target_rate, config),
        loan_multiplier=loan_multiplier(client.loan_amount, config),
    )
    final = round_half_up(breakdown.base * breakdown.loan_multiplier)
    target_hit = current_market_rate <= client.target_rate

    return OpportunityScore(
        client_id=client.id,
        client_name=client.display_name,
        phone=client.phone,
        email=client.email,
        loan_amount=client.loan_amount,
        current_rate=current_rate,
        target_rate=client.target_rate,
        savings_monthly=savings,
        savings_annual=savings * 12,
        days_since_contact=days,
        pipeline_stage=stage,
        score=final,
        urgency_level=urgency_tier(final, config),
        reasoning=build_reasoning(savings, days, stage, target_hit, client.loan_amount),
        call_recommendation=build_call_recommendation(savings, target_hit, stage),
        breakdown=breakdown,
    )
