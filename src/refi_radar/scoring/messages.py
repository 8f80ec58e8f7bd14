"""Reasoning and call-script text for scored opportunities."""

from typing import Optional

from refi_radar.formatting import format_compact_currency
from refi_radar.models.client import PipelineStage
from refi_radar.mortgage_math import round_half_up

_HOT_STAGES = (PipelineStage.APPLICATION, PipelineStage.QUALIFIED)


def build_reasoning(
    savings_monthly: float,
    days_since_contact: int,
    stage: Optional[PipelineStage],
    target_hit: bool,
    loan_amount: float,
) -> list[str]:
    """Applicable triggers, in order: target hit, savings, staleness, hot stage, large loan."""
    reasons: list[str] = []
    savings = round_half_up(savings_monthly)

    if target_hit:
        reasons.append("TARGET RATE HIT! Client should be notified immediately")

    if savings_monthly >= 300:
        reasons.append(f"High savings potential: ${savings}/month")
    elif savings_monthly >= 150:
        reasons.append(f"Good savings: ${savings}/month")

    if days_since_contact >= 30:
        reasons.append(f"No contact in {days_since_contact} days - follow up needed")
    elif days_since_contact >= 14:
        reasons.append(f"{days_since_contact} days since last contact")

    if stage in _HOT_STAGES:
        reasons.append(f"Hot lead: {stage.value} stage")

    if loan_amount >= 500_000:
        reasons.append(f"Large loan: {format_compact_currency(loan_amount)}")

    return reasons


def build_call_recommendation(
    savings_monthly: float,
    target_hit: bool,
    stage: Optional[PipelineStage],
) -> str:
    """
    One opening line. First match wins:
    target hit > application stage > qualified stage > savings >= $300 > check-in.
    """
    savings = round_half_up(savings_monthly)

    if target_hit:
        if savings_monthly > 0:
            lead = f"your target, saving you ${savings}/month"
        else:
            lead = "your target rate"
        return (
            "URGENT: Rates hit their target! Call immediately to discuss refinancing. "
            f'Lead with: "Great news! Rates just dropped to {lead}."'
        )

    if stage == PipelineStage.APPLICATION:
        return (
            "Check in on application status. Mention current rate environment "
            "and potential to lock in at a better rate."
        )

    if stage == PipelineStage.QUALIFIED:
        return (
            "Client is pre-qualified. Discuss current market conditions "
            f"and savings of ${savings}/month."
        )

    if savings_monthly >= 300:
        return (
            "Strong financial incentive. Lead with savings: "
            f'"I found an opportunity to save you ${savings} per month. Do you have 5 minutes?"'
        )

    return (
        "Friendly check-in. Ask about their plans and mention potential "
        f"savings of ${savings}/month."
    )
