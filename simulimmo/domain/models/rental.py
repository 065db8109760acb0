"""Rental income, expense and fiscal profile models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field, field_validator

from simulimmo.core.exceptions import InvalidParameterError
from simulimmo.core.settings import get_settings


class FiscalRegime(str, Enum):
    """French rental income tax regimes."""

    MICRO_FONCIER = "micro_foncier"
    REAL = "reel"
    LMNP_MICRO_BIC = "lmnp_micro_bic"
    LMNP_REAL = "lmnp_reel"

    @classmethod
    def _missing_(cls, value: Any) -> FiscalRegime | None:
        # Form values of the web simulators
        aliases = {
            "microfoncier": cls.MICRO_FONCIER,
            "micro-foncier": cls.MICRO_FONCIER,
            "real": cls.REAL,
            "lmnp": cls.LMNP_MICRO_BIC,
            "micro-bic": cls.LMNP_MICRO_BIC,
            "microbic": cls.LMNP_MICRO_BIC,
            "bic": cls.LMNP_REAL,
            "reel-bic": cls.LMNP_REAL,
        }
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None

    @classmethod
    def parse(cls, value: str | FiscalRegime) -> FiscalRegime:
        """Parse a regime code, raising InvalidParameterError when unknown."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError("fiscal_regime", value, "unknown tax regime") from None

    @property
    def is_furnished(self) -> bool:
        """LMNP regimes apply to furnished rentals."""
        return self in (FiscalRegime.LMNP_MICRO_BIC, FiscalRegime.LMNP_REAL)


class RentalIncome(BaseModel):
    """Rent collected and the losses applied to it."""

    gross_monthly_rent: float = Field(..., ge=0, description="Rent asked per month in €")
    vacancy_rate_pct: float = Field(default=0.0, ge=0, le=100, description="Vacancy %")
    unpaid_rate_pct: float = Field(default=0.0, ge=0, le=100, description="Unpaid rent risk %")
    management_fee_rate_pct: float = Field(default=0.0, ge=0, description="Agency fee % of collected rent")
    rent_increase_pct: float = Field(default=1.0, description="Yearly rent increase %")

    model_config = {"frozen": True}

    @computed_field
    @property
    def adjusted_monthly_rent(self) -> float:
        """Rent actually collected after vacancy and unpaid rent."""
        return (
            self.gross_monthly_rent
            * (1.0 - self.vacancy_rate_pct / 100.0)
            * (1.0 - self.unpaid_rate_pct / 100.0)
        )


class ExpenseProfile(BaseModel):
    """Owner-side operating expenses."""

    property_tax_annual: float = Field(default=0.0, ge=0, description="Taxe foncière €/year")
    condo_fees_annual: float = Field(default=0.0, ge=0, description="Non-recoverable condo fees €/year")
    maintenance_rate_pct: float = Field(default=0.0, ge=0, description="Maintenance provision % of collected rent")

    model_config = {"frozen": True}


class FiscalProfile(BaseModel):
    """Tax regime and rates of the investor."""

    regime: FiscalRegime = Field(default=FiscalRegime.MICRO_FONCIER)
    marginal_tax_rate_pct: float = Field(default=30.0, ge=0, le=100, description="TMI %")
    social_tax_rate_pct: float = Field(
        default_factory=lambda: get_settings().social_tax_rate_pct,
        ge=0,
        description="Prélèvements sociaux %",
    )

    model_config = {"frozen": True}

    @field_validator("regime", mode="before")
    @classmethod
    def validate_regime(cls, v: Any) -> FiscalRegime:
        """Accept legacy form codes; unknown regimes are rejected, never taxed at 0."""
        return FiscalRegime.parse(v)
