"""Custom exceptions for simulimmo.

Financial functions never raise on degenerate numbers (they return 0 or an
identity value). These exceptions cover broken reference data and invalid
parameters that cannot be defaulted.
"""

from __future__ import annotations

from typing import Any


class SimulImmoError(Exception):
    """Base exception for all simulimmo errors."""
    pass


# --- Data Errors ---

class DataLoadError(SimulImmoError):
    """Failed to load or parse reference data files (e.g., cities JSON)."""
    pass


class CityNotFoundError(SimulImmoError):
    """Strict lookup of a city that is not in the reference data."""

    def __init__(self, city_name: str):
        self.city_name = city_name
        super().__init__(f"City not found: {city_name}")


# --- Calculation Errors ---

class InvalidParameterError(SimulImmoError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


# --- Configuration Errors ---

class ConfigurationError(SimulImmoError):
    """Error in library configuration."""
    pass
