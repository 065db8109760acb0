"""Simulation result models.

Results are created fresh per run and frozen once produced. Presentation,
export and storage layers read them and never write back.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd
from pydantic import BaseModel, Field

from .city import CityMarketInfo, PropertyType
from .loan import CapacityResult, LoanPaymentBreakdown
from .rental import FiscalRegime

_FROZEN = {"frozen": True}


class Recommendation(BaseModel):
    """Advisory record produced by a threshold rule."""

    title: str
    description: str
    impact: Optional[str] = None

    model_config = _FROZEN


class OptimizationScenario(BaseModel):
    """What-if change and its estimated effect."""

    name: str
    cashflow_impact: str = Field(..., description="Displayed monthly cash-flow effect")
    yield_impact: str = Field(..., description="Displayed gross yield effect")
    easiness: str
    description: str
    cashflow_delta: Optional[float] = Field(None, description="Monthly cash-flow change in €, None if variable")

    model_config = _FROZEN


class ProjectionYear(BaseModel):
    """State of the investment at the end of a projection year."""

    year: int = Field(..., ge=0)
    property_value: float
    loan_balance: float = Field(..., ge=0)
    yearly_rent: float = 0.0
    yearly_expenses: float = 0.0
    yearly_cashflow: float = 0.0
    cumulative_cashflow: float = 0.0
    net_wealth: float = Field(0.0, description="Value - loan balance + cumulative cash-flow")

    model_config = _FROZEN

    def to_dict(self) -> dict[str, Any]:
        return {
            "Année": self.year,
            "Valeur Bien": self.property_value,
            "Capital Restant Dû": self.loan_balance,
            "Loyers": self.yearly_rent,
            "Charges": self.yearly_expenses,
            "Cash-Flow": self.yearly_cashflow,
            "Cash-Flow Cumulé": self.cumulative_cashflow,
            "Patrimoine Net": self.net_wealth,
        }


class PropertyDetails(BaseModel):
    purchase_price: float
    area: float
    property_type: PropertyType
    renovation_cost: float
    is_furnished: bool
    price_per_sqm: float

    model_config = _FROZEN


class FinancingSummary(BaseModel):
    down_payment: float
    loan_amount: float
    interest_rate_pct: float
    loan_duration_years: int
    monthly_loan_payment: float
    monthly_insurance: float
    monthly_debt_service: float
    total_interest: float
    notary_fees: float
    total_investment: float

    model_config = _FROZEN


class RentalIncomeSummary(BaseModel):
    monthly_rent: float
    adjusted_monthly_rent: float
    annual_rent: float
    vacancy_rate_pct: float
    unpaid_rate_pct: float
    rent_increase_pct: float

    model_config = _FROZEN


class ExpenseSummary(BaseModel):
    monthly_management_fees: float
    monthly_property_tax: float
    monthly_condo_fees: float
    monthly_maintenance_cost: float
    monthly_expenses_without_loan: float
    total_monthly_expenses: float

    model_config = _FROZEN


class FiscalitySummary(BaseModel):
    regime: FiscalRegime
    marginal_tax_rate_pct: float
    social_tax_rate_pct: float
    annual_tax: float
    monthly_tax: float

    model_config = _FROZEN


class PerformanceSummary(BaseModel):
    gross_yield: float
    net_yield: float
    monthly_cashflow: float
    annual_cashflow: float
    performance_index: float = Field(..., ge=0, le=100)
    score_breakdown: dict[str, float] = Field(default_factory=dict)
    irr_pct: Optional[float] = Field(None, description="IRR over the horizon, None if not computable")

    model_config = _FROZEN


class ProjectionSummary(BaseModel):
    years: int
    property_value_growth_rate_pct: float
    financial_projection: list[ProjectionYear]
    final_property_value: float
    final_loan_balance: float
    total_cashflow: float

    model_config = _FROZEN

    def to_frame(self) -> pd.DataFrame:
        """Projection as a DataFrame, one row per year."""
        return pd.DataFrame([y.to_dict() for y in self.financial_projection])


class SimulationResult(BaseModel):
    """Complete result of an investment simulation."""

    city: Optional[CityMarketInfo] = None
    property: PropertyDetails
    financing: FinancingSummary
    rental_income: RentalIncomeSummary
    expenses: ExpenseSummary
    fiscality: FiscalitySummary
    performance: PerformanceSummary
    projection: ProjectionSummary
    recommendations: list[Recommendation] = Field(default_factory=list)
    optimization_scenarios: list[OptimizationScenario] = Field(default_factory=list)

    model_config = _FROZEN


# --- Value evolution ---

class ValueYear(BaseModel):
    """Property value at the end of a year of the value projection."""

    year: int = Field(..., ge=0)
    value: float
    growth_rate_pct: float = 0.0

    model_config = _FROZEN


class InfluenceFactor(BaseModel):
    """Weighted driver of the value evolution, shown to the user."""

    key: str
    name: str
    description: str
    weight: float
    score: float
    impact: float

    model_config = _FROZEN


class ValueEvolutionResult(BaseModel):
    initial_value: float
    final_value: float
    total_growth_pct: float
    annualized_growth_pct: float
    yearly_values: list[ValueYear]
    influence_factors: list[InfluenceFactor]
    city: CityMarketInfo
    city_found: bool = True
    property_type: PropertyType
    property_age: str
    area: float
    rooms: int
    age_factor: float
    theoretical_price_per_sqm: float
    renovation_impact_pct: float

    model_config = _FROZEN

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([v.model_dump() for v in self.yearly_values])


# --- Purchasing power ---

class CityComparison(BaseModel):
    name: str
    price_per_sqm: float
    accessible_surface: float
    attractivity_index: float

    model_config = _FROZEN


class PurchasingPowerResult(BaseModel):
    total_monthly_income: float
    current_debt: float
    personal_contribution: float
    capacity: CapacityResult
    gross_budget: float
    net_budget: float
    notary_fees: float
    application_fees: float
    interest_rate_pct: float
    loan_duration_years: int
    payment: LoanPaymentBreakdown
    debt_ratio_actual: float = Field(..., description="(loan service + debts) / income, as a fraction")
    city: Optional[CityMarketInfo] = None
    property_type: PropertyType
    accessible_surfaces: dict[str, float] = Field(default_factory=dict)
    city_comparison: list[CityComparison] = Field(default_factory=list)
    advice: list[Recommendation] = Field(default_factory=list)

    model_config = _FROZEN

    @property
    def borrowing_capacity(self) -> float:
        """Borrowable principal in €."""
        return self.capacity.amount
