"""Edge case tests for the core infrastructure.

Covers:
- Settings from the environment
- Logging configuration failures
- French number formatting
"""

import pytest
from pydantic import ValidationError

import simulimmo.core.logging as logging_module
from simulimmo.core.exceptions import ConfigurationError, InvalidParameterError, SimulImmoError
from simulimmo.core.formatting import format_euro, format_pct
from simulimmo.core.settings import SimulationSettings, get_settings


class TestSettings:
    """Tests for SimulationSettings."""

    def test_defaults(self):
        s = SimulationSettings()
        assert s.social_tax_rate_pct == 17.2
        assert s.default_projection_years == 20
        assert s.min_living_expense == 1050
        assert s.application_fees == 1000
        assert s.solver_initial_guess == 100_000
        assert s.value_random_seed is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SIMULIMMO_DEFAULT_PROJECTION_YEARS", "30")
        get_settings.cache_clear()
        assert get_settings().default_projection_years == 30

    def test_invalid_env(self, monkeypatch):
        """Out of range values are refused."""
        monkeypatch.setenv("SIMULIMMO_DEFAULT_PROJECTION_YEARS", "0")
        with pytest.raises(ValidationError):
            SimulationSettings()

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for configure_logging failures."""

    def test_unknown_level(self, monkeypatch):
        monkeypatch.setattr(logging_module, "_configured", False)
        with pytest.raises(ConfigurationError):
            logging_module.configure_logging(level="LOUD")

    def test_file_handler(self, monkeypatch, tmp_path):
        """A log file path creates its directory."""
        monkeypatch.setattr(logging_module, "_configured", False)
        path = tmp_path / "logs" / "simulimmo.log"
        logging_module.configure_logging(level="INFO", log_file=str(path))
        logging_module.get_logger("test").info("file_logging_ready")
        assert path.parent.exists()

    def test_get_logger_binds_name(self):
        logger = logging_module.get_logger("simulimmo.tests")
        assert logger is not None


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_invalid_parameter_message(self):
        err = InvalidParameterError("rate", -1, "must be >= 0")
        assert isinstance(err, SimulImmoError)
        assert "rate" in str(err)
        assert "must be >= 0" in str(err)


class TestFormatting:
    """Tests for French formatting helpers."""

    @pytest.mark.parametrize(
        "value,decimals,expected",
        [
            (1234567, 0, "1 234 567 €"),
            (1108.6, 0, "1 109 €"),
            (-250, 0, "-250 €"),
            (1234.5, 2, "1 234,50 €"),
            (None, 0, "—"),
        ],
    )
    def test_format_euro(self, value, decimals, expected):
        assert format_euro(value, decimals) == expected

    def test_format_pct(self):
        assert format_pct(3.456) == "3,5 %"
        assert format_pct(6, 2) == "6,00 %"
        assert format_pct(None) == "—"
