"""Property value growth models.

The investment simulator compounds a plain yearly rate. The value simulator
adds bounded noise, a macro-economic term and a real-estate cycle on top of
the city rate.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from simulimmo.core.settings import get_settings


class GrowthModel(ABC):
    """Yearly property value growth, in %."""

    @abstractmethod
    def rate_for_year(self, year: int) -> float:
        """Growth % applied to reach the end of `year` (1-based)."""


class ConstantGrowth(GrowthModel):
    """Same rate every year."""

    def __init__(self, rate_pct: Optional[float] = None):
        self.rate_pct = rate_pct if rate_pct is not None else get_settings().default_price_growth_pct

    def rate_for_year(self, year: int) -> float:
        return self.rate_pct

    def __repr__(self) -> str:
        return f"ConstantGrowth(rate_pct={self.rate_pct})"


class CompositeCycleGrowth(GrowthModel):
    """City rate + noise + macro term + cyclical term.

    The noise is uniform in ±max(0.5, 2 − 0.1·year): wide in the first years,
    then narrowing. The cycle is sin(year·π/4)·amplitude, an 8-year period.
    Results are reproducible when a seeded generator (or seed) is given.
    """

    def __init__(
        self,
        base_rate_pct: float,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        economic_growth_pct: Optional[float] = None,
        inflation_pct: Optional[float] = None,
        cycle_amplitude: Optional[float] = None,
    ):
        settings = get_settings()
        self.base_rate_pct = base_rate_pct
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else settings.value_random_seed)
        self.rng = rng
        self.economic_growth_pct = (
            economic_growth_pct if economic_growth_pct is not None else settings.economic_growth_pct
        )
        self.inflation_pct = inflation_pct if inflation_pct is not None else settings.inflation_pct
        self.cycle_amplitude = cycle_amplitude if cycle_amplitude is not None else settings.cycle_amplitude

    @staticmethod
    def noise_bound(year: int) -> float:
        return max(0.5, 2.0 - 0.1 * year)

    @property
    def economic_influence(self) -> float:
        return (self.economic_growth_pct - self.inflation_pct) * 0.2

    def cycle(self, year: int) -> float:
        return math.sin(year * math.pi / 4.0) * self.cycle_amplitude

    def rate_for_year(self, year: int) -> float:
        noise = (self.rng.random() - 0.5) * 2.0 * self.noise_bound(year)
        return self.base_rate_pct + noise + self.economic_influence + self.cycle(year)
