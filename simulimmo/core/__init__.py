"""Core infrastructure: exceptions, logging, settings and formatting."""

from .exceptions import (
    CityNotFoundError,
    ConfigurationError,
    DataLoadError,
    InvalidParameterError,
    SimulImmoError,
)
from .settings import SimulationSettings, get_settings

__all__ = [
    "SimulationSettings",
    "get_settings",
    # Exceptions
    "SimulImmoError",
    "DataLoadError",
    "CityNotFoundError",
    "InvalidParameterError",
    "ConfigurationError",
]
