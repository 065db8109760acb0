"""Data models for simulimmo."""

from .city import CityMarketInfo, PropertyType
from .inputs import InvestmentInputs, PurchasingPowerInputs, ValueEvolutionInputs
from .loan import AmortizationEntry, CapacityResult, LoanPaymentBreakdown, LoanTerms
from .rental import ExpenseProfile, FiscalProfile, FiscalRegime, RentalIncome
from .results import (
    CityComparison,
    InfluenceFactor,
    OptimizationScenario,
    ProjectionYear,
    PurchasingPowerResult,
    Recommendation,
    SimulationResult,
    ValueEvolutionResult,
    ValueYear,
)

__all__ = [
    "AmortizationEntry",
    "CapacityResult",
    "CityComparison",
    "CityMarketInfo",
    "ExpenseProfile",
    "FiscalProfile",
    "FiscalRegime",
    "InfluenceFactor",
    "InvestmentInputs",
    "LoanPaymentBreakdown",
    "LoanTerms",
    "OptimizationScenario",
    "ProjectionYear",
    "PropertyType",
    "PurchasingPowerInputs",
    "PurchasingPowerResult",
    "Recommendation",
    "RentalIncome",
    "SimulationResult",
    "ValueEvolutionInputs",
    "ValueEvolutionResult",
    "ValueYear",
]
