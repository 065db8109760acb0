"""Library settings with environment variable support.

Uses pydantic-settings for typed configuration validation. Every tunable
default used by the calculators and simulations lives here.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class SimulationSettings(BaseSettings):
    """Configuration loaded from environment variables (prefix SIMULIMMO_)."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render logs as JSON")
    log_file: Optional[str] = Field(default=None, description="Optional rotating log file path")

    # Taxation
    social_tax_rate_pct: float = Field(default=17.2, ge=0, description="Prélèvements sociaux %")

    # Projection defaults
    default_projection_years: int = Field(default=20, ge=1, le=50)
    default_price_growth_pct: float = Field(default=1.5, description="Fallback yearly price growth %")
    default_rent_growth_pct: float = Field(default=1.0, description="Fallback yearly rent growth %")

    # Financing
    default_insurance_rate_pct: float = Field(default=0.36, ge=0)
    min_living_expense: float = Field(default=1050.0, ge=0, description="Reste à vivre minimum €/month")
    application_fees: float = Field(default=1000.0, ge=0, description="Bank application fees €")

    # Borrowing capacity solver
    solver_initial_guess: float = Field(default=100_000.0, gt=0)
    solver_max_iterations: int = Field(default=50, ge=1)
    solver_tolerance: float = Field(default=1.0, gt=0, description="Payment gap tolerance in €")

    # Value evolution model
    economic_growth_pct: float = Field(default=1.5)
    inflation_pct: float = Field(default=1.8)
    cycle_amplitude: float = Field(default=0.5, ge=0)
    renovation_impact_factor: float = Field(default=0.7, ge=0, le=1)
    value_random_seed: Optional[int] = Field(default=None, description="Seed for the value simulator noise")

    # Purchasing power
    top_cities_count: int = Field(default=10, ge=1)

    model_config = {
        "env_prefix": "SIMULIMMO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> SimulationSettings:
    """Get cached library settings."""
    return SimulationSettings()
