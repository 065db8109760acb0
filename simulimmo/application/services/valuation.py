"""Property value evolution simulation.

Projects a property's value with the composite growth model (city trend,
noise, macro term, cycle) plus a renovation premium phased in over two
years. The noise makes runs differ unless a seed or generator is given.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from simulimmo.core.logging import get_logger
from simulimmo.core.settings import get_settings
from simulimmo.domain.models.city import CityMarketInfo, PropertyType
from simulimmo.domain.models.inputs import ValueEvolutionInputs
from simulimmo.domain.models.results import InfluenceFactor, ValueEvolutionResult

from .city_data import CityRepository
from .growth import CompositeCycleGrowth
from .projection import ProjectionEngine

log = get_logger(__name__)

AGE_FACTORS = {
    "new": 1.1,
    "recent": 1.05,
    "old": 0.95,
    "veryOld": 0.9,
}

# Score adjustments of the property characteristics factor
AGE_SCORE_ADJUSTMENTS = {"new": 2.0, "recent": 1.0, "old": -1.0, "veryOld": -2.0}
TYPE_SCORE_ADJUSTMENTS = {
    PropertyType.APARTMENT: 0.5,
    PropertyType.HOUSE: 1.0,
    PropertyType.STUDIO: -0.5,
    PropertyType.LOFT: 1.5,
}

INFLUENCE_FACTORS = {
    "market": ("Marché immobilier local", "Tendance générale des prix dans la ville et sa région.", 0.40),
    "demographics": ("Démographie", "Évolution de la population et attractivité de la ville.", 0.20),
    "urban_projects": ("Projets urbains", "Développements et infrastructures prévus ou en cours.", 0.15),
    "inflation": ("Inflation", "Impact de l'inflation sur les prix immobiliers.", 0.10),
    "property_characteristics": ("Caractéristiques du bien", "Type, taille et état du bien immobilier.", 0.15),
}

MAX_RENOVATION_IMPACT_PCT = 5.0
# Years over which the renovation premium ramps up
RENOVATION_RAMP_YEARS = 2.0


def get_age_factor(property_age: str) -> float:
    return AGE_FACTORS.get(property_age, 1.0)


def calculate_renovation_impact(renovation_budget: float, property_value: float) -> float:
    """Extra yearly growth % brought by a renovation, capped at 5%.

    Args:
        renovation_budget: Renovation spend in €
        property_value: Current property value in €

    Returns:
        Growth premium %
    """
    if renovation_budget <= 0 or property_value <= 0:
        return 0.0
    efficiency = get_settings().renovation_impact_factor
    return min(MAX_RENOVATION_IMPACT_PCT, renovation_budget / property_value * 100.0 * efficiency)


def calculate_influence_factors(
    city: CityMarketInfo,
    property_age: str,
    property_type: PropertyType,
) -> list[InfluenceFactor]:
    """Weighted drivers of the value evolution, highest impact first."""
    inflation = get_settings().inflation_pct

    property_score = 5.0
    property_score += AGE_SCORE_ADJUSTMENTS.get(property_age, 0.0)
    property_score += TYPE_SCORE_ADJUSTMENTS.get(property_type, 0.0)

    scores = {
        "market": city.annual_price_growth_pct * 1.5,
        "demographics": city.population_growth_pct * 3.0 + city.economic_dynamism * 0.5,
        "urban_projects": city.economic_dynamism * 0.8,
        "inflation": inflation * 2.0,
        "property_characteristics": property_score,
    }

    factors = []
    for key, (name, description, weight) in INFLUENCE_FACTORS.items():
        score = scores[key]
        factors.append(
            InfluenceFactor(
                key=key,
                name=name,
                description=description,
                weight=weight,
                score=score,
                impact=score * weight,
            )
        )

    # Stable sort keeps the declaration order for equal impacts
    return sorted(factors, key=lambda f: f.impact, reverse=True)


def fallback_city(name: str) -> CityMarketInfo:
    """Neutral market used when a city is not in the reference data."""
    return CityMarketInfo(
        name=name,
        price_per_sqm=0.0,
        annual_price_growth_pct=get_settings().default_price_growth_pct,
        economic_dynamism=5.0,
        population_growth_pct=0.0,
    )


def simulate_value_evolution(
    inputs: ValueEvolutionInputs,
    cities: Optional[CityRepository] = None,
    rng: Optional[np.random.Generator] = None,
) -> ValueEvolutionResult:
    """Project a property's value over the requested number of years.

    Args:
        inputs: Parsed simulator inputs
        cities: City reference data (bundled data by default)
        rng: Random generator for the growth noise; seeded from settings
            when omitted

    Returns:
        ValueEvolutionResult with years 0..projection_years
    """
    cities = cities if cities is not None else CityRepository()

    city = cities.find(inputs.city)
    city_found = city is not None
    if city is None:
        log.warning("city_not_found_using_default", city=inputs.city, field="market")
        city = fallback_city(inputs.city)

    log.info(
        "value_simulation_started",
        city=city.name,
        value=inputs.current_value,
        years=inputs.projection_years,
    )

    renovation_impact = calculate_renovation_impact(inputs.renovation_budget, inputs.current_value)

    def renovation_for_year(year: int) -> float:
        return renovation_impact * min(1.0, year / RENOVATION_RAMP_YEARS)

    growth = CompositeCycleGrowth(city.annual_price_growth_pct, rng=rng)
    engine = ProjectionEngine(growth, inputs.projection_years)
    yearly_values = engine.project_values(inputs.current_value, renovation_for_year)

    initial = inputs.current_value
    final = yearly_values[-1].value
    if initial > 0:
        total_growth = (final / initial - 1.0) * 100.0
        annualized = ((final / initial) ** (1.0 / inputs.projection_years) - 1.0) * 100.0
    else:
        total_growth = 0.0
        annualized = 0.0

    result = ValueEvolutionResult(
        initial_value=initial,
        final_value=final,
        total_growth_pct=total_growth,
        annualized_growth_pct=annualized,
        yearly_values=yearly_values,
        influence_factors=calculate_influence_factors(city, inputs.property_age, inputs.property_type),
        city=city,
        city_found=city_found,
        property_type=inputs.property_type,
        property_age=inputs.property_age,
        area=inputs.area,
        rooms=inputs.rooms,
        age_factor=get_age_factor(inputs.property_age),
        theoretical_price_per_sqm=city.price_per_sqm_for(inputs.property_type),
        renovation_impact_pct=renovation_impact,
    )

    log.info(
        "value_simulation_completed",
        final_value=round(final, 2),
        total_growth_pct=round(total_growth, 2),
    )
    return result
