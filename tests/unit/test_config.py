"""
Unit tests for config.py Pydantic models.

Tests coercion, defaults and immutability of budget file models and
environment handling of AppSettings.
"""

import pytest

from dailybudget.config import AppSettings, BudgetConfig, EntryConfig
from dailybudget.constants import SCHEMA_VERSION


class TestEntryConfig:
    """Tests for EntryConfig coercion."""

    def test_defaults(self):
        config = EntryConfig()
        assert config.kind == "expense"
        assert config.amount == 0.0
        assert config.day is None
        assert config.description == ""

    def test_coercion(self):
        config = EntryConfig.model_validate({
            "kind": "income", "amount": "12,5", "day": "0", "description": None,
        })
        assert config.amount == 12.5
        assert config.day is None
        assert config.description == ""

    def test_bad_amount_is_zero_not_error(self):
        assert EntryConfig(amount="lots").amount == 0.0

    def test_unknown_keys_ignored(self):
        config = EntryConfig.model_validate({"amount": 5, "category": "food"})
        assert config.amount == 5.0

    def test_immutable(self):
        config = EntryConfig(amount=5)
        with pytest.raises(Exception):
            config.amount = 10


class TestBudgetConfig:
    """Tests for BudgetConfig."""

    def test_defaults(self):
        config = BudgetConfig()
        assert config.schema_version == SCHEMA_VERSION
        assert config.monthly_income == 0.0
        assert config.monthly_savings == 0.0
        assert config.entries == []

    def test_money_coercion(self):
        config = BudgetConfig.model_validate({"monthly_income": "abc", "monthly_savings": "250"})
        assert config.monthly_income == 0.0
        assert config.monthly_savings == 250.0

    def test_entries_parsed(self):
        config = BudgetConfig.model_validate({
            "monthly_income": 2000,
            "entries": [{"kind": "expense", "amount": 300, "day": 15}],
        })
        assert config.entries[0] == EntryConfig(kind="expense", amount=300, day=15)

    def test_non_mapping_entries_skipped(self):
        config = BudgetConfig.model_validate({"entries": [{"amount": 1}, "junk", 5, None]})
        assert len(config.entries) == 1

    def test_entries_not_a_list(self):
        assert BudgetConfig.model_validate({"entries": "nope"}).entries == []

    def test_serialization(self):
        config = BudgetConfig(monthly_income=2000, entries=[EntryConfig(amount=3, day=2)])
        restored = BudgetConfig.model_validate(config.model_dump())
        assert restored == config


class TestAppSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for var in ("DAILYBUDGET_LOCALE", "DAILYBUDGET_CURRENCY",
                    "DAILYBUDGET_LOG_LEVEL", "DAILYBUDGET_DEBUG"):
            monkeypatch.delenv(var, raising=False)
        settings = AppSettings()
        assert settings.locale == "de_DE"
        assert settings.currency == "EUR"
        assert settings.log_level == "WARNING"
        assert settings.debug is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DAILYBUDGET_LOCALE", "en_US")
        monkeypatch.setenv("DAILYBUDGET_CURRENCY", "USD")
        settings = AppSettings()
        assert settings.locale == "en_US"
        assert settings.currency == "USD"

    def test_debug_forces_debug_level(self):
        settings = AppSettings(debug=True, log_level="ERROR")
        assert settings.effective_log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            AppSettings(log_level="LOUD")
