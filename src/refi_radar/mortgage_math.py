"""Fixed-rate amortization and refinance arithmetic."""

import math


class InvalidMortgageInput(ValueError):
    """Principal, rate or term outside the range the formulas are defined for."""


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (round() would use banker's rounding)."""
    return math.floor(value + 0.5)


def _validate(principal: float, annual_rate_percent: float, term_years: float) -> None:
    if principal < 0:
        raise InvalidMortgageInput(f"principal must be >= 0, got {principal}")
    if term_years <= 0:
        raise InvalidMortgageInput(f"term_years must be > 0, got {term_years}")
    if annual_rate_percent < 0 or annual_rate_percent > 100:
        raise InvalidMortgageInput(
            f"annual_rate_percent must be between 0 and 100, got {annual_rate_percent}"
        )


def monthly_payment(principal: float, annual_rate_percent: float, term_years: float) -> float:
    """
    Fully amortizing monthly payment: P * r(1+r)^n / ((1+r)^n - 1).
    r is the monthly rate, n the number of payments. Zero rate pays down linearly.
    """
    _validate(principal, annual_rate_percent, term_years)
    r = annual_rate_percent / 100 / 12
    n = term_years * 12
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * (r * growth) / (growth - 1)


def monthly_savings(
    loan_amount: float,
    current_rate: float,
    new_rate: float,
    term_years: float = 30,
) -> float:
    """Payment reduction from moving current_rate -> new_rate. 0 unless new_rate is lower."""
    current = monthly_payment(loan_amount, current_rate, term_years)
    new = monthly_payment(loan_amount, new_rate, term_years)
    if new_rate >= current_rate:
        return 0.0
    return max(0.0, current - new)


def lifetime_savings(savings_monthly: float, term_years: float = 30) -> float:
    """Monthly savings over every payment of the term."""
    return savings_monthly * term_years * 12


def total_interest(principal: float, annual_rate_percent: float, term_years: float) -> float:
    """Interest paid over the life of the loan."""
    payment = monthly_payment(principal, annual_rate_percent, term_years)
    return payment * term_years * 12 - principal


def break_even_months(closing_costs: float, savings_monthly: float) -> float:
    """Months until savings cover closing costs; inf when there are no savings."""
    if savings_monthly <= 0:
        return math.inf
    return math.ceil(closing_costs / savings_monthly)


def loan_to_value(loan_amount: float, home_value: float) -> float:
    """LTV as a percentage. 0 when home value is unknown (0)."""
    if home_value == 0:
        return 0.0
    return loan_amount / home_value * 100


def equity(home_value: float, loan_amount: float) -> float:
    return max(0.0, home_value - loan_amount)


# Typical closing costs run 2-5% of the loan
CLOSING_COST_RATIO = 0.03


def estimate_closing_costs(loan_amount: float) -> int:
    return round_half_up(loan_amount * CLOSING_COST_RATIO)


def target_progress(current_rate: float, target_rate: float, market_rate: float) -> float:
    """
    How far the market has moved from the client's current rate toward their
    target, 0-100. 100 once market <= target; 0 when market is at or above current.
    """
    if market_rate <= target_rate:
        return 100.0
    if market_rate >= current_rate:
        return 0.0
    total_drop = current_rate - target_rate
    current_drop = current_rate - market_rate
    return min(100.0, max(0.0, current_drop / total_drop * 100))


_PROGRESS_LABELS: list[tuple[float, str]] = [
    (90, "Almost There"),
    (75, "Getting Close"),
    (50, "Halfway There"),
    (25, "Making Progress"),
]


def target_progress_label(progress: float, target_reached: bool = False) -> str:
    if target_reached or progress >= 100:
        return "Target Reached!"
    for minimum, label in _PROGRESS_LABELS:
        if progress >= minimum:
            return label
    return "Far From Target"
