"""Application services: simulations built on the domain calculators."""

from .city_data import CityRepository, load_cities
from .growth import CompositeCycleGrowth, ConstantGrowth, GrowthModel
from .projection import ProjectionEngine, default_horizon
from .purchasing_power import calculate_purchasing_power, compare_cities
from .simulation import simulate_investment
from .valuation import simulate_value_evolution

__all__ = [
    "CityRepository",
    "CompositeCycleGrowth",
    "ConstantGrowth",
    "GrowthModel",
    "ProjectionEngine",
    "calculate_purchasing_power",
    "compare_cities",
    "default_horizon",
    "load_cities",
    "simulate_investment",
    "simulate_value_evolution",
]
