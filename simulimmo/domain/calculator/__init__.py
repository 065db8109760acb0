"""Pure calculation functions: loan math, capacity, tax, yields, scoring."""

from .capacity import SolverConfig, calculate_borrowing_capacity, solve_borrowing_capacity
from .financial import (
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
from .scoring import calculate_performance_index, calculate_score_breakdown
from .tax import calculate_tax
from .yields import (
    BudgetBreakdown,
    calculate_future_value,
    calculate_gross_yield,
    calculate_loan_amount,
    calculate_monthly_cashflow,
    calculate_net_yield,
    calculate_notary_fees,
    calculate_price_per_sqm,
    calculate_total_budget,
    estimate_property_tax,
)

__all__ = [
    "BudgetBreakdown",
    "SolverConfig",
    "calculate_borrowing_capacity",
    "calculate_future_value",
    "calculate_gross_yield",
    "calculate_insurance",
    "calculate_irr",
    "calculate_loan_amount",
    "calculate_monthly_cashflow",
    "calculate_monthly_payment",
    "calculate_net_yield",
    "calculate_notary_fees",
    "calculate_performance_index",
    "calculate_price_per_sqm",
    "calculate_remaining_balance",
    "calculate_score_breakdown",
    "calculate_tax",
    "calculate_total_budget",
    "calculate_total_interest",
    "calculate_total_loan_payment",
    "estimate_property_tax",
    "generate_amortization_schedule",
    "generate_annual_amortization_schedule",
    "schedule_to_frame",
    "solve_borrowing_capacity",
]
