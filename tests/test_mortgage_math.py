"""Unit tests for amortization and refinance math."""

import math

import pytest

from refi_radar.mortgage_math import (
    InvalidMortgageInput,
    break_even_months,
    equity,
    estimate_closing_costs,
    lifetime_savings,
    loan_to_value,
    monthly_payment,
    monthly_savings,
    round_half_up,
    target_progress,
    target_progress_label,
    total_interest,
)


class TestMonthlyPayment:
    """Tests for monthly_payment."""

    def test_standard_thirty_year(self) -> None:
        """$200K at 6% over 30 years is the textbook $1,199.10."""
        assert monthly_payment(200_000, 6, 30) == pytest.approx(1199.10, abs=0.01)

    @pytest.mark.parametrize("principal,years", [(120_000, 10), (350_000, 30), (1, 1)])
    def test_zero_rate_pays_down_linearly(self, principal: float, years: int) -> None:
        """Zero rate returns principal / number of payments."""
        assert monthly_payment(principal, 0, years) == principal / (years * 12)

    def test_zero_principal(self) -> None:
        """Zero principal has zero payment."""
        assert monthly_payment(0, 6.5, 30) == 0

    def test_negative_principal_rejected(self) -> None:
        """Negative principal raises InvalidMortgageInput."""
        with pytest.raises(InvalidMortgageInput):
            monthly_payment(-1, 6, 30)

    @pytest.mark.parametrize("term", [0, -5])
    def test_non_positive_term_rejected(self, term: int) -> None:
        """Zero or negative term raises."""
        with pytest.raises(InvalidMortgageInput):
            monthly_payment(100_000, 6, term)

    @pytest.mark.parametrize("rate", [-0.5, 100.01])
    def test_rate_out_of_range_rejected(self, rate: float) -> None:
        """Rates below 0 or above 100 raise."""
        with pytest.raises(InvalidMortgageInput):
            monthly_payment(100_000, rate, 30)

    def test_invalid_input_is_value_error(self) -> None:
        """Callers can catch ValueError."""
        assert issubclass(InvalidMortgageInput, ValueError)


class TestMonthlySavings:
    """Tests for monthly_savings."""

    def test_equals_payment_difference(self) -> None:
        """Savings is current payment minus new payment."""
        expected = monthly_payment(400_000, 7, 30) - monthly_payment(400_000, 6, 30)
        assert monthly_savings(400_000, 7.0, 6.0, 30) == pytest.approx(expected)
        assert expected > 0

    def test_clamped_when_new_rate_not_better(self) -> None:
        """Equal or higher new rate yields zero, never negative."""
        assert monthly_savings(400_000, 6.0, 6.0) == 0
        assert monthly_savings(400_000, 6.0, 7.5) == 0

    def test_invalid_input_still_raises_when_not_better(self) -> None:
        """Validation runs even when savings would clamp to zero."""
        with pytest.raises(InvalidMortgageInput):
            monthly_savings(-100, 6.0, 7.0)


class TestRefinanceHelpers:
    """Tests for lifetime, interest, break-even, LTV, equity and closing costs."""

    def test_lifetime_savings(self) -> None:
        assert lifetime_savings(100, 30) == 36_000

    def test_total_interest(self) -> None:
        """Interest is total paid minus principal."""
        payment = monthly_payment(200_000, 6, 30)
        assert total_interest(200_000, 6, 30) == pytest.approx(payment * 360 - 200_000)

    def test_total_interest_zero_rate(self) -> None:
        assert total_interest(120_000, 0, 10) == pytest.approx(0)

    def test_break_even_rounds_up(self) -> None:
        """9000 closing / 250 per month = 36; 9001 needs 37."""
        assert break_even_months(9000, 250) == 36
        assert break_even_months(9001, 250) == 37

    def test_break_even_without_savings_is_infinite(self) -> None:
        assert math.isinf(break_even_months(9000, 0))

    def test_loan_to_value(self) -> None:
        assert loan_to_value(400_000, 500_000) == pytest.approx(80.0)
        assert loan_to_value(400_000, 0) == 0

    def test_equity_floors_at_zero(self) -> None:
        assert equity(500_000, 400_000) == 100_000
        assert equity(300_000, 400_000) == 0

    def test_closing_costs_three_percent(self) -> None:
        assert estimate_closing_costs(300_000) == 9000


class TestTargetProgress:
    """Tests for target_progress and its label."""

    def test_reached_when_market_at_or_below_target(self) -> None:
        assert target_progress(7.0, 6.0, 6.0) == 100
        assert target_progress(7.0, 6.0, 5.5) == 100

    def test_no_progress_when_market_at_or_above_current(self) -> None:
        assert target_progress(7.0, 6.0, 7.0) == 0
        assert target_progress(7.0, 6.0, 7.25) == 0

    def test_halfway(self) -> None:
        assert target_progress(7.0, 6.0, 6.5) == pytest.approx(50)

    @pytest.mark.parametrize(
        "progress,label",
        [
            (95, "Almost There"),
            (80, "Getting Close"),
            (50, "Halfway There"),
            (30, "Making Progress"),
            (10, "Far From Target"),
            (100, "Target Reached!"),
        ],
    )
    def test_labels(self, progress: float, label: str) -> None:
        assert target_progress_label(progress) == label


class TestRoundHalfUp:
    """round_half_up matches the dashboard's rounding, not banker's rounding."""

    def test_half_rounds_up(self) -> None:
        assert round_half_up(110.5) == 111
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self) -> None:
        assert round_half_up(110.4) == 110
