"""City market reference data model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field

# Price per m² above which a city gets no price bonus in the attractivity index
ATTRACTIVITY_PRICE_CEILING = 12_000.0


class PropertyType(str, Enum):
    """Kinds of property handled by the simulators."""

    APARTMENT = "apartment"
    HOUSE = "house"
    STUDIO = "studio"
    LOFT = "loft"
    OTHER = "other"


class CityMarketInfo(BaseModel):
    """Market indicators for one city. Immutable reference data."""

    name: str = Field(..., description="City name, used for exact lookup")
    region: str = Field(default="", description="Administrative region")

    # Prices
    price_per_sqm: float = Field(..., ge=0, description="Average price per m² in €")
    apartment_price_per_sqm: float = Field(default=0.0, ge=0)
    house_price_per_sqm: float = Field(default=0.0, ge=0)
    studio_price_per_sqm: float = Field(default=0.0, ge=0)
    annual_price_growth_pct: float = Field(..., description="Historical yearly price growth %")

    # Rental market
    rent_per_sqm: float = Field(default=0.0, ge=0, description="Monthly rent per m² in €")
    property_tax_rate_pct: float = Field(default=0.0, ge=0, description="Taxe foncière % of price")

    # Qualitative indicators
    economic_dynamism: float = Field(default=5.0, ge=0, le=10)
    transport_quality: float = Field(default=5.0, ge=0, le=10)
    population_growth_pct: float = Field(default=0.0)

    model_config = {"frozen": True}

    @computed_field
    @property
    def attractivity_index(self) -> float:
        """Overall real-estate attractivity, 0-10."""
        index = (
            self.economic_dynamism * 0.4
            + self.transport_quality * 0.2
            + self.population_growth_pct * 2.0
            + (1.0 - self.price_per_sqm / ATTRACTIVITY_PRICE_CEILING) * 3.0
        )
        return max(0.0, min(10.0, index))

    @computed_field
    @property
    def growth_category(self) -> str:
        """Bucket of the yearly price growth: negative, low, medium or high."""
        growth = self.annual_price_growth_pct
        if growth < 0:
            return "negative"
        if growth < 1.0:
            return "low"
        if growth < 2.5:
            return "medium"
        return "high"

    def price_per_sqm_for(self, property_type: PropertyType | str | None) -> float:
        """Average price per m² for a kind of property.

        Types without a dedicated average (loft, other) use the city average.
        """
        by_type = {
            PropertyType.APARTMENT: self.apartment_price_per_sqm,
            PropertyType.HOUSE: self.house_price_per_sqm,
            PropertyType.STUDIO: self.studio_price_per_sqm,
        }
        try:
            key = PropertyType(property_type) if property_type is not None else None
        except ValueError:
            key = None
        return by_type.get(key) or self.price_per_sqm
