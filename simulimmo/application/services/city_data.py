"""City market reference data.

The bundled JSON is read once per process. Lookups are exact on the city
name. Unknown cities fall back to neutral defaults (0 for prices, rents
and rates) and log a warning; only `CityRepository.get` raises.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from simulimmo.core.exceptions import CityNotFoundError, DataLoadError
from simulimmo.core.logging import get_logger
from simulimmo.domain.calculator.yields import estimate_property_tax
from simulimmo.domain.models.city import CityMarketInfo, PropertyType

log = get_logger(__name__)

DEFAULT_CITIES_PATH = Path(__file__).resolve().parents[2] / "data" / "cities.json"


def load_cities_from_disk(data_path: str | Path) -> list[CityMarketInfo]:
    """Load and validate city records from a JSON file.

    Args:
        data_path: Path to a JSON array of city records

    Returns:
        List of CityMarketInfo

    Raises:
        DataLoadError: If the file is missing, not valid JSON or a record
            does not validate
    """
    try:
        with open(data_path, encoding="utf-8") as f:
            raw_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Cannot read city data from {data_path}: {e}") from e

    if not isinstance(raw_data, list):
        raise DataLoadError(f"City data in {data_path} must be a JSON array")

    try:
        cities = [CityMarketInfo(**item) for item in raw_data]
    except (TypeError, ValidationError) as e:
        raise DataLoadError(f"Invalid city record in {data_path}: {e}") from e

    log.info("cities_loaded_from_disk", count=len(cities), path=str(data_path))
    return cities


@lru_cache
def load_cities() -> tuple[CityMarketInfo, ...]:
    """Bundled city data, loaded once per process."""
    return tuple(load_cities_from_disk(DEFAULT_CITIES_PATH))


class CityRepository:
    """Read-only access to city market data."""

    def __init__(self, cities: Optional[Iterable[CityMarketInfo]] = None):
        self._cities = tuple(cities) if cities is not None else load_cities()
        self._by_name = {c.name: c for c in self._cities}

    def __len__(self) -> int:
        return len(self._cities)

    def __iter__(self):
        return iter(self._cities)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def find(self, name: Optional[str]) -> Optional[CityMarketInfo]:
        """Exact-name lookup, None when unknown."""
        if not name:
            return None
        return self._by_name.get(name)

    def get(self, name: str) -> CityMarketInfo:
        """Exact-name lookup.

        Raises:
            CityNotFoundError: If the city is not in the reference data
        """
        city = self.find(name)
        if city is None:
            raise CityNotFoundError(name)
        return city

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def _find_or_warn(self, name: Optional[str], field: str) -> Optional[CityMarketInfo]:
        city = self.find(name)
        if city is None:
            log.warning("city_not_found_using_default", city=name, field=field)
        return city

    def price_per_sqm_for(self, name: str, property_type: PropertyType | str | None) -> float:
        """Average price per m² for a kind of property, 0.0 if the city is unknown."""
        city = self._find_or_warn(name, "price_per_sqm")
        return city.price_per_sqm_for(property_type) if city else 0.0

    def rent_per_sqm(self, name: str) -> float:
        city = self._find_or_warn(name, "rent_per_sqm")
        return city.rent_per_sqm if city else 0.0

    def property_tax_rate(self, name: str) -> float:
        city = self._find_or_warn(name, "property_tax_rate_pct")
        return city.property_tax_rate_pct if city else 0.0

    def suggest_rent(self, name: str, area: float) -> float:
        """Monthly rent suggested from the city average, rounded to the euro."""
        if area <= 0:
            return 0.0
        return float(round(self.rent_per_sqm(name) * area))

    def suggest_property_tax(self, name: str, price: float) -> float:
        """Yearly taxe foncière suggested from the city rate, rounded to the euro."""
        return float(round(estimate_property_tax(price, self.property_tax_rate(name))))
