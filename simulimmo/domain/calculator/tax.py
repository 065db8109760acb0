"""Rental income tax per French regime.

Each regime computes the yearly tax from the yearly rent, the deductible
yearly expenses and the investor's rates. LMNP regimes pay income tax
only; social contributions are not applied to them here.
"""

from __future__ import annotations

import math
from typing import Callable

from simulimmo.domain.models.rental import FiscalRegime

TaxFunction = Callable[[float, float, float, float], float]

# Flat allowances
MICRO_FONCIER_ALLOWANCE = 0.30
MICRO_BIC_ALLOWANCE = 0.50

# Rent threshold of the micro-foncier regime (€/year)
MICRO_FONCIER_CEILING = 15_000.0


def micro_foncier_tax(
    annual_rent: float,
    annual_expenses: float,
    marginal_rate_pct: float,
    social_rate_pct: float,
) -> float:
    """Micro-foncier: 30% flat allowance, expenses ignored.

    Args:
        annual_rent: Rent collected in the year in €
        annual_expenses: Unused, kept for a uniform signature
        marginal_rate_pct: Marginal income tax rate (TMI) %
        social_rate_pct: Social contributions %

    Returns:
        Yearly tax in €
    """
    if not math.isfinite(annual_rent) or annual_rent <= 0:
        return 0.0
    taxable = annual_rent * (1.0 - MICRO_FONCIER_ALLOWANCE)
    return taxable * (marginal_rate_pct + social_rate_pct) / 100.0


def real_regime_tax(
    annual_rent: float,
    annual_expenses: float,
    marginal_rate_pct: float,
    social_rate_pct: float,
) -> float:
    """Régime réel: actual expenses deducted, deficit not carried over."""
    if not math.isfinite(annual_rent) or annual_rent <= 0:
        return 0.0
    taxable = max(0.0, annual_rent - annual_expenses)
    return taxable * (marginal_rate_pct + social_rate_pct) / 100.0


def lmnp_micro_bic_tax(
    annual_rent: float,
    annual_expenses: float,
    marginal_rate_pct: float,
    social_rate_pct: float,
) -> float:
    """LMNP micro-BIC: 50% flat allowance, income tax only."""
    if not math.isfinite(annual_rent) or annual_rent <= 0:
        return 0.0
    taxable = annual_rent * (1.0 - MICRO_BIC_ALLOWANCE)
    return taxable * marginal_rate_pct / 100.0


def lmnp_real_tax(
    annual_rent: float,
    annual_expenses: float,
    marginal_rate_pct: float,
    social_rate_pct: float,
) -> float:
    """LMNP réel: actual expenses deducted, income tax only."""
    if not math.isfinite(annual_rent) or annual_rent <= 0:
        return 0.0
    taxable = max(0.0, annual_rent - annual_expenses)
    return taxable * marginal_rate_pct / 100.0


TAX_FUNCTIONS: dict[FiscalRegime, TaxFunction] = {
    FiscalRegime.MICRO_FONCIER: micro_foncier_tax,
    FiscalRegime.REAL: real_regime_tax,
    FiscalRegime.LMNP_MICRO_BIC: lmnp_micro_bic_tax,
    FiscalRegime.LMNP_REAL: lmnp_real_tax,
}


def calculate_tax(
    regime: FiscalRegime | str,
    annual_rent: float,
    annual_expenses: float,
    marginal_rate_pct: float,
    social_rate_pct: float,
) -> float:
    """Yearly tax for a regime.

    Args:
        regime: FiscalRegime or one of its codes/aliases
        annual_rent: Rent collected in the year in €
        annual_expenses: Deductible expenses in €
        marginal_rate_pct: TMI %
        social_rate_pct: Social contributions %

    Returns:
        Yearly tax in €

    Raises:
        InvalidParameterError: If the regime is unknown
    """
    tax_fn = TAX_FUNCTIONS[FiscalRegime.parse(regime)]
    return tax_fn(annual_rent, annual_expenses, marginal_rate_pct, social_rate_pct)
