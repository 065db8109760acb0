"""Parsed simulator inputs.

The form layer hands over already-parsed numbers; these models only carry
type-level guards (non-negative amounts, positive areas). Minimum business
values (price >= 10 000 €, area >= 9 m², ...) are checked upstream.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .city import PropertyType
from .loan import LoanTerms
from .rental import ExpenseProfile, FiscalProfile, RentalIncome


class InvestmentInputs(BaseModel):
    """Inputs of the rental investment simulator."""

    city: Optional[str] = Field(None, description="City name looked up in the reference data")

    # Property
    purchase_price: float = Field(..., ge=0, description="Purchase price in €")
    area: float = Field(..., gt=0, description="Surface in m²")
    property_type: PropertyType = Field(default=PropertyType.APARTMENT)
    renovation_cost: float = Field(default=0.0, ge=0, description="Renovation budget in €")
    is_furnished: bool = Field(default=False)
    notary_fee_rate_pct: float = Field(default=8.0, ge=0, description="Notary fees % of price")

    # Financing
    down_payment: float = Field(default=0.0, ge=0, description="Personal contribution in €")
    loan: LoanTerms

    # Operations
    rental: RentalIncome
    expenses: ExpenseProfile = Field(default_factory=ExpenseProfile)
    fiscal: FiscalProfile = Field(default_factory=FiscalProfile)

    model_config = {"frozen": True}


class ValueEvolutionInputs(BaseModel):
    """Inputs of the property value evolution simulator."""

    city: str = Field(..., description="City name")
    property_type: PropertyType = Field(default=PropertyType.APARTMENT)
    area: float = Field(..., gt=0, description="Surface in m²")
    rooms: int = Field(default=1, ge=1)
    property_age: str = Field(default="recent", description="new, recent, old or veryOld")
    current_value: float = Field(..., ge=0, description="Current market value in €")
    projection_years: int = Field(default=10, ge=1, le=50)
    renovation_budget: float = Field(default=0.0, ge=0, description="Planned renovation budget in €")

    model_config = {"frozen": True}


class PurchasingPowerInputs(BaseModel):
    """Inputs of the purchasing power calculator."""

    city: Optional[str] = Field(None)
    monthly_income: float = Field(..., ge=0, description="Net monthly income in €")
    additional_income: float = Field(default=0.0, ge=0, description="Other monthly income in €")
    current_debt: float = Field(default=0.0, ge=0, description="Current monthly debt payments in €")
    personal_contribution: float = Field(default=0.0, ge=0, description="Apport personnel in €")
    interest_rate_pct: float = Field(..., ge=0)
    loan_duration_years: int = Field(default=20, ge=1)
    debt_ratio_pct: float = Field(default=35.0, ge=0, le=100, description="Maximum debt ratio %")
    notary_fee_rate_pct: float = Field(default=8.0, ge=0)
    property_type: PropertyType = Field(default=PropertyType.APARTMENT)

    model_config = {"frozen": True}

    @computed_field
    @property
    def total_monthly_income(self) -> float:
        """Main plus additional income."""
        return self.monthly_income + self.additional_income
