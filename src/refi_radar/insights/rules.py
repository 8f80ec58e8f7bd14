"""Insight rules: each returns (matched, explanation)."""

from typing import Optional

from pydantic import BaseModel, Field

from refi_radar.models.client import PipelineStage
from refi_radar.models.mortgage import MortgageRecord


class BucketRule(BaseModel):
    """
    Stage set + day window predicate over one client.
    stages=None matches any stage; min_days/max_days are inclusive bounds.
    """

    name: str
    stages: Optional[frozenset[PipelineStage]] = None
    min_days: Optional[int] = None
    max_days: Optional[int] = None
    description: str = ""

    def evaluate(self, stage: Optional[PipelineStage], days: int) -> tuple[bool, str]:
        if self.stages is not None and stage not in self.stages:
            return False, f"{self.name}: stage {_stage_label(stage)} not in rule stages"
        if self.min_days is not None and days < self.min_days:
            return False, f"{self.name}: {days} days since contact (< {self.min_days})"
        if self.max_days is not None and days > self.max_days:
            return False, f"{self.name}: {days} days since contact (> {self.max_days})"
        return True, f"{self.name}: {_stage_label(stage)} stage, {days} days since contact"


def _stage_label(stage: Optional[PipelineStage]) -> str:
    return stage.value if stage is not None else "no"


STALE_LEADS = BucketRule(
    name="stale_leads",
    stages=frozenset({PipelineStage.NEW, PipelineStage.PROSPECT}),
    min_days=14,
    description="New/prospect with no contact in 14+ days (or never contacted)",
)
READY_TO_ADVANCE = BucketRule(
    name="ready_to_advance",
    stages=frozenset({PipelineStage.QUALIFIED}),
    max_days=7,
    description="Qualified and contacted within the last 7 days",
)
NEED_FOLLOW_UP = BucketRule(
    name="need_follow_up",
    stages=frozenset({PipelineStage.APPLICATION}),
    min_days=7,
    description="Application with no contact in 7+ days",
)
CLOSING_SOON = BucketRule(
    name="closing_soon",
    stages=frozenset({PipelineStage.CLOSING}),
    description="Currently in closing",
)
HOT_LEADS = BucketRule(
    name="hot_leads",
    stages=frozenset({PipelineStage.QUALIFIED, PipelineStage.APPLICATION, PipelineStage.CLOSING}),
    max_days=7,
    description="Recently contacted and in a late stage",
)
COLD_LEADS = BucketRule(
    name="cold_leads",
    min_days=30,
    description="No contact in 30+ days, any stage",
)

PIPELINE_RULES: list[BucketRule] = [
    STALE_LEADS,
    READY_TO_ADVANCE,
    NEED_FOLLOW_UP,
    CLOSING_SOON,
    HOT_LEADS,
    COLD_LEADS,
]


def effective_market_rate(mortgage: MortgageRecord, default_rate: float) -> float:
    """Per-mortgage benchmark if set, else the engine-wide market rate."""
    return mortgage.market_rate if mortgage.market_rate is not None else default_rate


def apply_target_hit_rule(mortgage: MortgageRecord, market_rate: float) -> tuple[bool, str]:
    """Market at or below target."""
    if market_rate <= mortgage.target_rate:
        return True, f"Target hit: market {market_rate:.3f}% <= target {mortgage.target_rate:.3f}%"
    return False, f"Target not hit: market {market_rate:.3f}% > target {mortgage.target_rate:.3f}%"


def apply_close_to_target_rule(
    mortgage: MortgageRecord,
    market_rate: float,
    margin: float = 0.25,
) -> tuple[bool, str]:
    """Above target, but within margin points of it."""
    gap = market_rate - mortgage.target_rate
    if mortgage.target_rate < market_rate <= mortgage.target_rate + margin:
        return True, f"Close to target: {gap:.3f} points away"
    return False, f"Not close to target (gap {gap:.3f}, margin {margin})"


def apply_stale_monitoring_rule(
    days_since_contact: int,
    days_since_ai_call: int,
    threshold: int = 60,
) -> tuple[bool, str]:
    """Stale only when both manual contact and automated calls are old."""
    freshest = min(days_since_contact, days_since_ai_call)
    if freshest >= threshold:
        return True, f"Stale: last touch {freshest} days ago (>= {threshold})"
    return False, f"Monitored: last touch {freshest} days ago"


class MonitorThresholds(BaseModel):
    """Rate-monitor windows, in rate points and days."""

    close_to_target_margin: float = 0.25
    stale_monitoring_days: int = 60
    recent_call_days: int = 7
    default_market_rate: float = Field(default=6.5, description="Used when no market rate is supplied")
