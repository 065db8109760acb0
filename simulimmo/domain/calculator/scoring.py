"""Performance index of a rental investment.

Five sub-scores (0-10 each) are weighted into a 0-100 index.
"""

from __future__ import annotations

# Weights of each sub-score (sum to 1.0)
PERFORMANCE_WEIGHTS = {
    "gross_yield": 0.20,
    "net_yield": 0.30,
    "cashflow": 0.25,
    "appreciation": 0.15,
    "leverage": 0.10,
}

# Divisors giving a full 10/10 sub-score
GROSS_YIELD_FULL_SCORE = 0.8     # 8% gross yield
NET_YIELD_FULL_SCORE = 0.6       # 6% net yield
CASHFLOW_FULL_SCORE = 30.0       # 300 €/month
APPRECIATION_MULTIPLIER = 3.0    # ~3.33%/year
DSCR_FULL_SCORE = 0.15           # DSCR of 1.5
UNLEVERAGED_SCORE = 5.0


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


def calculate_score_breakdown(
    gross_yield: float,
    net_yield: float,
    monthly_cashflow: float,
    appreciation_rate_pct: float,
    loan_to_value: float,
    debt_service_coverage: float,
) -> dict[str, float]:
    """Compute each sub-score, clamped to 0-10.

    Args:
        gross_yield: Gross yield %
        net_yield: Net yield %
        monthly_cashflow: Monthly cash-flow in €
        appreciation_rate_pct: Yearly property value growth %
        loan_to_value: Loan / total investment
        debt_service_coverage: Collected rent / loan payment

    Returns:
        Dict keyed like PERFORMANCE_WEIGHTS
    """
    cashflow_score = monthly_cashflow / CASHFLOW_FULL_SCORE if monthly_cashflow > 0 else 0.0
    leverage_score = (
        debt_service_coverage / DSCR_FULL_SCORE if loan_to_value > 0 else UNLEVERAGED_SCORE
    )

    return {
        "gross_yield": _clamp(gross_yield / GROSS_YIELD_FULL_SCORE),
        "net_yield": _clamp(net_yield / NET_YIELD_FULL_SCORE),
        "cashflow": _clamp(cashflow_score),
        "appreciation": _clamp(appreciation_rate_pct * APPRECIATION_MULTIPLIER),
        "leverage": _clamp(leverage_score),
    }


def calculate_performance_index(
    gross_yield: float,
    net_yield: float,
    monthly_cashflow: float,
    appreciation_rate_pct: float,
    loan_to_value: float,
    debt_service_coverage: float,
) -> tuple[float, dict[str, float]]:
    """Calculate the overall performance index.

    Returns:
        Tuple of (index 0-100, sub-score breakdown)
    """
    breakdown = calculate_score_breakdown(
        gross_yield,
        net_yield,
        monthly_cashflow,
        appreciation_rate_pct,
        loan_to_value,
        debt_service_coverage,
    )
    weighted = sum(breakdown[k] * w for k, w in PERFORMANCE_WEIGHTS.items())
    return _clamp(weighted * 10.0, 0.0, 100.0), breakdown
