"""Insight engines: partition clients and mortgages into dashboard buckets."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from refi_radar.models.client import ClientRecord
from refi_radar.models.mortgage import MortgageRecord
from refi_radar.mortgage_math import monthly_savings, round_half_up
from refi_radar.recency import days_since, resolve_as_of

from .rules import (
    PIPELINE_RULES,
    BucketRule,
    MonitorThresholds,
    apply_close_to_target_rule,
    apply_stale_monitoring_rule,
    apply_target_hit_rule,
    effective_market_rate,
)


class PipelineInsights(BaseModel):
    """Active clients partitioned by stage and recency. A client may sit in several buckets."""

    stale_leads: list[ClientRecord] = Field(default_factory=list)
    ready_to_advance: list[ClientRecord] = Field(default_factory=list)
    need_follow_up: list[ClientRecord] = Field(default_factory=list)
    closing_soon: list[ClientRecord] = Field(default_factory=list)
    hot_leads: list[ClientRecord] = Field(default_factory=list)
    cold_leads: list[ClientRecord] = Field(default_factory=list)
    custom: dict[str, list[ClientRecord]] = Field(
        default_factory=dict,
        description="rule name -> clients, for rules outside the built-in buckets",
    )
    total_pipeline_value: float = 0.0
    explanations: dict[str, list[str]] = Field(
        default_factory=dict,
        description="client id -> matched rule explanations",
    )


class RateMonitorInsights(BaseModel):
    """Monitored mortgages grouped by distance to target and staleness."""

    target_hits: list[MortgageRecord] = Field(default_factory=list)
    close_to_target: list[MortgageRecord] = Field(default_factory=list)
    stale_monitoring: list[MortgageRecord] = Field(default_factory=list)
    ai_calls_this_week: int = 0
    total_potential_savings: int = 0
    all_monitored: int = 0
    active_opportunities: int = 0


_BUILTIN_BUCKETS = frozenset(
    {"stale_leads", "ready_to_advance", "need_follow_up", "closing_soon", "hot_leads", "cold_leads"}
)


class PipelineInsightEngine:
    """
    Applies bucket rules to active clients.
    Each rule is evaluated independently; results are recomputed on every call.
    """

    def __init__(self, rules: Optional[list[BucketRule]] = None):
        self._rules = list(rules) if rules is not None else list(PIPELINE_RULES)

    def analyze(
        self,
        clients: list[ClientRecord],
        as_of: Optional[datetime] = None,
    ) -> PipelineInsights:
        as_of = resolve_as_of(as_of)
        active = [c for c in clients if c.status == "active"]
        buckets: dict[str, list[ClientRecord]] = {rule.name: [] for rule in self._rules}
        explanations: dict[str, list[str]] = {}

        for client in active:
            days = days_since(client.last_contact, as_of)
            for rule in self._rules:
                matched, explanation = rule.evaluate(client.current_stage, days)
                if matched:
                    buckets[rule.name].append(client)
                    explanations.setdefault(client.id, []).append(explanation)

        builtin = {k: v for k, v in buckets.items() if k in _BUILTIN_BUCKETS}
        custom = {k: v for k, v in buckets.items() if k not in _BUILTIN_BUCKETS}
        return PipelineInsights(
            **builtin,
            custom=custom,
            total_pipeline_value=sum(c.loan_amount or 0 for c in active),
            explanations=explanations,
        )


class RateMonitorEngine:
    """Applies target/staleness rules to monitored mortgages."""

    def __init__(self, thresholds: Optional[MonitorThresholds] = None):
        self.thresholds = thresholds or MonitorThresholds()

    def analyze(
        self,
        mortgages: list[MortgageRecord],
        market_rate: Optional[float] = None,
        as_of: Optional[datetime] = None,
    ) -> RateMonitorInsights:
        t = self.thresholds
        as_of = resolve_as_of(as_of)
        default_rate = market_rate if market_rate is not None else t.default_market_rate

        target_hits: list[MortgageRecord] = []
        close: list[MortgageRecord] = []
        stale: list[MortgageRecord] = []
        recent_calls = 0
        total_savings = 0

        for m in mortgages:
            rate = effective_market_rate(m, default_rate)
            hit, _ = apply_target_hit_rule(m, rate)
            if hit:
                target_hits.append(m)
                total_savings += round_half_up(
                    monthly_savings(m.loan_amount, m.current_rate, rate, m.term_years)
                )
            near, _ = apply_close_to_target_rule(m, rate, t.close_to_target_margin)
            if near:
                close.append(m)

            days_contact = days_since(m.last_contact, as_of)
            days_call = days_since(m.last_ai_call, as_of)
            is_stale, _ = apply_stale_monitoring_rule(days_contact, days_call, t.stale_monitoring_days)
            if is_stale:
                stale.append(m)
            if days_call <= t.recent_call_days:
                recent_calls += 1

        return RateMonitorInsights(
            target_hits=target_hits,
            close_to_target=close,
            stale_monitoring=stale,
            ai_calls_this_week=recent_calls,
            total_potential_savings=total_savings,
            all_monitored=len(mortgages),
            active_opportunities=len(target_hits) + len(close),
        )


def analyze_pipeline(
    clients: list[ClientRecord],
    as_of: Optional[datetime] = None,
) -> PipelineInsights:
    return PipelineInsightEngine().analyze(clients, as_of=as_of)


def analyze_rate_monitoring(
    mortgages: list[MortgageRecord],
    market_rate: Optional[float] = None,
    as_of: Optional[datetime] = None,
) -> RateMonitorInsights:
    return RateMonitorEngine().analyze(mortgages, market_rate=market_rate, as_of=as_of)
