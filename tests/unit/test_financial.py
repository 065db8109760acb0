"""Unit tests for simulimmo.domain.calculator.financial module."""

import math

import pandas as pd
import pytest

from simulimmo.domain.calculator.financial import (
    calculate_insurance,
    calculate_irr,
    calculate_monthly_payment,
    calculate_remaining_balance,
    calculate_total_interest,
    calculate_total_loan_payment,
    generate_amortization_schedule,
    generate_annual_amortization_schedule,
    schedule_to_frame,
)


class TestCalculateMonthlyPayment:
    """Tests for calculate_monthly_payment function."""

    def test_reference_loan(self):
        """200 000 € at 3% over 20 years follows the annuity formula (about 1 109 €/month)."""
        pmt = calculate_monthly_payment(200_000, 3.0, 20)
        r = 0.0025
        expected = 200_000 * r / (1 - (1 + r) ** -240)
        assert pmt == pytest.approx(expected, rel=1e-9)
        assert pmt == pytest.approx(1109.2, abs=0.1)

    def test_zero_rate_is_straight_line(self):
        """Zero interest rate should return principal/months exactly."""
        assert calculate_monthly_payment(120_000, 0.0, 10) == 1000.0

    @pytest.mark.parametrize(
        "principal,rate,years",
        [
            (0, 3.0, 20),
            (-1000, 3.0, 20),
            (100_000, 3.0, 0),
            (100_000, -1.0, 20),
            (float("nan"), 3.0, 20),
            (100_000, float("inf"), 20),
            (100_000, 3.0, 0.05),
            (100_000, 0.0, 0.05),
        ],
    )
    def test_degenerate_inputs_return_zero(self, principal, rate, years):
        """Degenerate loans cost nothing instead of raising."""
        assert calculate_monthly_payment(principal, rate, years) == 0.0

    def test_shorter_term_costs_more(self):
        """A 15-year loan has higher payments than a 25-year one."""
        assert calculate_monthly_payment(200_000, 3.5, 15) > calculate_monthly_payment(200_000, 3.5, 25)


class TestInsurance:
    """Tests for insurance and total payment."""

    def test_standard_insurance(self):
        """0.36% of 200 000 € per year is 60 €/month."""
        assert calculate_insurance(200_000, 0.36) == pytest.approx(60.0)

    def test_zero_principal(self):
        """Zero principal should return zero insurance."""
        assert calculate_insurance(0, 0.36) == 0.0

    def test_non_finite_insurance(self):
        assert calculate_insurance(float("nan"), 0.36) == 0.0
        assert calculate_insurance(200_000, float("nan")) == 0.0

    def test_breakdown_total(self):
        """Total payment is repayment plus insurance."""
        breakdown = calculate_total_loan_payment(200_000, 3.0, 20, 0.36)
        assert breakdown.insurance_payment == pytest.approx(60.0)
        assert breakdown.total_payment == pytest.approx(breakdown.loan_payment + 60.0)


class TestAmortizationSchedule:
    """Tests for the monthly and annual schedules."""

    def test_length(self):
        """One entry per month."""
        schedule = generate_amortization_schedule(100_000, 3.0, 10)
        assert len(schedule) == 120
        assert schedule[0].period == 1
        assert schedule[-1].period == 120

    @pytest.mark.parametrize("principal,rate,years", [(200_000, 3.0, 20), (87_654.32, 4.15, 17), (50_000, 0.5, 7)])
    def test_ends_at_exactly_zero(self, principal, rate, years):
        """Final balance is exactly 0 and the principal is fully repaid."""
        schedule = generate_amortization_schedule(principal, rate, years)
        assert schedule[-1].remaining_principal == 0.0
        repaid = sum(e.principal_portion for e in schedule)
        assert repaid == pytest.approx(principal, rel=1e-6)

    def test_balance_decreases(self):
        """Remaining principal never goes up."""
        schedule = generate_amortization_schedule(150_000, 4.0, 15)
        balances = [e.remaining_principal for e in schedule]
        assert all(b1 >= b2 for b1, b2 in zip(balances, balances[1:]))

    def test_first_month_split(self):
        """First interest is balance × monthly rate."""
        schedule = generate_amortization_schedule(120_000, 3.0, 20)
        first = schedule[0]
        assert first.interest_portion == pytest.approx(300.0)
        assert first.principal_portion == pytest.approx(first.payment - 300.0)

    def test_zero_rate_schedule(self):
        """Without interest, every month repays the same principal."""
        schedule = generate_amortization_schedule(12_000, 0.0, 1)
        assert all(e.interest_portion == 0.0 for e in schedule)
        assert all(e.principal_portion == pytest.approx(1000.0) for e in schedule)
        assert schedule[-1].remaining_principal == 0.0

    def test_degenerate_loan_empty(self):
        """No principal, no schedule."""
        assert generate_amortization_schedule(0, 3.0, 20) == []
        assert generate_annual_amortization_schedule(0, 3.0, 20) == []

    def test_annual_matches_monthly(self):
        """Year N balance equals the balance after month N×12."""
        monthly = generate_amortization_schedule(180_000, 3.7, 22)
        annual = generate_annual_amortization_schedule(180_000, 3.7, 22)
        assert len(annual) == 22
        for year in annual:
            assert year.remaining_principal == monthly[year.period * 12 - 1].remaining_principal

    def test_annual_sums(self):
        """Yearly entries add up the months they group."""
        monthly = generate_amortization_schedule(100_000, 3.0, 5)
        annual = generate_annual_amortization_schedule(100_000, 3.0, 5)
        assert annual[0].interest_portion == pytest.approx(sum(e.interest_portion for e in monthly[:12]))
        assert sum(y.principal_portion for y in annual) == pytest.approx(100_000, rel=1e-9)

    def test_schedule_to_frame(self):
        """DataFrame view has one row per entry."""
        df = schedule_to_frame(generate_amortization_schedule(100_000, 3.0, 2))
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 24
        assert df["Capital Restant Dû"].iloc[-1] == 0.0


class TestTotalInterestAndBalance:
    """Tests for total interest and remaining balance."""

    def test_total_interest(self):
        """Interest = payment × months − principal."""
        pmt = calculate_monthly_payment(200_000, 3.0, 20)
        assert calculate_total_interest(200_000, 3.0, 20) == pytest.approx(pmt * 240 - 200_000)

    def test_total_interest_zero_rate(self):
        """No interest without a rate."""
        assert calculate_total_interest(100_000, 0.0, 10) == pytest.approx(0.0)

    def test_remaining_balance(self):
        """Balance follows the schedule."""
        schedule = generate_amortization_schedule(100_000, 3.0, 10)
        assert calculate_remaining_balance(100_000, 3.0, 10, 0) == 100_000
        assert calculate_remaining_balance(100_000, 3.0, 10, 60) == schedule[59].remaining_principal
        assert calculate_remaining_balance(100_000, 3.0, 10, 120) == 0.0
        assert calculate_remaining_balance(100_000, 3.0, 10, 500) == 0.0


class TestIRR:
    """Tests for calculate_irr."""

    def test_simple_irr(self):
        """Investing 100 and getting 110 a year later is 10%."""
        assert calculate_irr(100.0, [0.0], 110.0) == pytest.approx(10.0)

    def test_no_investment(self):
        """Nothing invested, nothing to compute."""
        assert calculate_irr(0.0, [100.0], 0.0) is None
        assert calculate_irr(100.0, [], 0.0) is None

    def test_result_is_finite(self):
        """Regular flows give a finite rate."""
        irr = calculate_irr(50_000.0, [2_000.0] * 19 + [2_000.0], 150_000.0)
        assert irr is not None
        assert math.isfinite(irr)
        assert irr > 0
