"""Borrowing capacity solver.

Finds the largest principal whose monthly service (annuity + insurance)
fits in the payment budget allowed by the debt ratio and the minimum
amount left to live on.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from simulimmo.core.logging import get_logger
from simulimmo.core.settings import get_settings
from simulimmo.domain.models.loan import CapacityResult

log = get_logger(__name__)


@dataclass
class SolverConfig:
    """Fixed-point solver parameters."""
    initial_guess: float = field(default_factory=lambda: get_settings().solver_initial_guess)
    max_iterations: int = field(default_factory=lambda: get_settings().solver_max_iterations)
    tolerance: float = field(default_factory=lambda: get_settings().solver_tolerance)  # € of monthly payment


def max_monthly_payment(
    monthly_income: float,
    current_debt: float,
    debt_ratio_pct: float,
    min_living_expense: float,
) -> float:
    """Monthly budget available for a new loan.

    Args:
        monthly_income: Total net monthly income in €
        current_debt: Existing monthly debt payments in €
        debt_ratio_pct: Maximum debt ratio %
        min_living_expense: Amount that must remain each month in €

    Returns:
        Payment budget in €, 0.0 when nothing can be borrowed
    """
    if not monthly_income or not math.isfinite(monthly_income) or monthly_income <= 0:
        return 0.0

    debt = current_debt or 0.0
    if not math.isfinite(debt) or not math.isfinite(debt_ratio_pct):
        return 0.0
    budget = monthly_income * (debt_ratio_pct / 100.0) - debt
    if budget <= 0:
        return 0.0

    # Reste à vivre
    if monthly_income - debt - budget < min_living_expense:
        budget = monthly_income - debt - min_living_expense
        if budget <= 0:
            return 0.0

    return budget


def _capacity_from_payment(
    payment_budget: float,
    annual_rate_pct: float,
    years: int,
    insurance_rate_pct: float,
    config: SolverConfig,
) -> CapacityResult:
    monthly_rate = annual_rate_pct / 100.0 / 12.0
    monthly_ins_rate = insurance_rate_pct / 100.0 / 12.0
    months = int(years * 12)

    if monthly_rate <= 0:
        if monthly_ins_rate > 0:
            amount = payment_budget / monthly_ins_rate
        else:
            amount = payment_budget * months
        return CapacityResult(
            amount=math.floor(amount),
            max_monthly_payment=payment_budget,
        )

    annuity_factor = monthly_rate / (1.0 - (1.0 + monthly_rate) ** -months)

    amount = config.initial_guess
    iterations = 0
    converged = False
    while iterations < config.max_iterations:
        total_payment = amount * annuity_factor + amount * monthly_ins_rate
        if abs(payment_budget - total_payment) < config.tolerance:
            converged = True
            break
        amount *= payment_budget / total_payment
        iterations += 1

    if not converged:
        log.warning(
            "capacity_solver_not_converged",
            iterations=iterations,
            payment_budget=round(payment_budget, 2),
            rate=annual_rate_pct,
            years=years,
        )
    else:
        log.debug("capacity_solver_converged", iterations=iterations, amount=round(amount, 2))

    return CapacityResult(
        amount=math.floor(amount),
        max_monthly_payment=payment_budget,
        converged=converged,
        iterations=iterations,
    )


def solve_borrowing_capacity(
    monthly_income: float,
    current_debt: float,
    debt_ratio_pct: float,
    annual_rate_pct: float,
    years: int,
    insurance_rate_pct: float = 0.36,
    min_living_expense: float = 1000.0,
    config: Optional[SolverConfig] = None,
) -> CapacityResult:
    """Solve the borrowing capacity and report how the solver went.

    Args:
        monthly_income: Total net monthly income in €
        current_debt: Existing monthly debt payments in €
        debt_ratio_pct: Maximum debt ratio % (e.g., 35)
        annual_rate_pct: Annual interest rate %
        years: Loan term in years
        insurance_rate_pct: Annual borrower insurance % of principal
        min_living_expense: Monthly reste à vivre floor in €
        config: Solver parameters (defaults from settings)

    Returns:
        CapacityResult with the amount floored to the euro. Non-convergence
        is flagged, never raised.
    """
    inputs = (monthly_income, current_debt or 0.0, debt_ratio_pct, annual_rate_pct, years, insurance_rate_pct)
    if not all(math.isfinite(v) for v in inputs):
        return CapacityResult(amount=0.0, max_monthly_payment=0.0)

    budget = max_monthly_payment(monthly_income, current_debt, debt_ratio_pct, min_living_expense)
    if budget <= 0 or int(years * 12) < 1:
        return CapacityResult(amount=0.0, max_monthly_payment=0.0)

    return _capacity_from_payment(
        budget,
        annual_rate_pct,
        years,
        insurance_rate_pct,
        config or SolverConfig(),
    )


def calculate_borrowing_capacity(
    monthly_income: float,
    current_debt: float,
    debt_ratio_pct: float,
    annual_rate_pct: float,
    years: int,
    insurance_rate_pct: float = 0.36,
    min_living_expense: float = 1000.0,
    config: Optional[SolverConfig] = None,
) -> float:
    """Borrowable principal in € (see solve_borrowing_capacity)."""
    return solve_borrowing_capacity(
        monthly_income,
        current_debt,
        debt_ratio_pct,
        annual_rate_pct,
        years,
        insurance_rate_pct=insurance_rate_pct,
        min_living_expense=min_living_expense,
        config=config,
    ).amount
