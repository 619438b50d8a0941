"""
Configuration management module for dailybudget.

Purpose
-------
Pydantic models for budget files and application settings.

- EntryConfig / BudgetConfig: the content of a budget JSON file
  (income, savings target, entries)
- AppSettings: environment-driven settings (log level, locale, currency)

Design Principles
-----------------
- Immutable: frozen models
- Tolerant: monetary fields and days go through the same zero-fallback
  coercion as interactive input, so a budget file never fails validation on
  a bad number; unknown keys are ignored
- Environment-aware: AppSettings reads ``DAILYBUDGET_*`` variables and
  ``.env`` files

Example
-------
>>> from dailybudget.config import BudgetConfig
>>> cfg = BudgetConfig.model_validate({
...     "monthly_income": "2000",
...     "entries": [{"kind": "expense", "amount": 300, "day": 15}],
... })
>>> cfg.monthly_income
2000.0
>>> cfg.entries[0].day
15
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_CURRENCY, DEFAULT_LOCALE, SCHEMA_VERSION
from .utils import coerce_money, normalize_day

__all__ = [
    "EntryConfig",
    "BudgetConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Budget file
# ---------------------------------------------------------------------------

class EntryConfig(BaseModel):
    """
    One entry as written in a budget file.

    Attributes
    ----------
    kind : str
        "income" or "expense" (German labels accepted too). Unrecognised
        kinds are kept here and dropped when the entry reaches the store.
    amount : float
        Coerced with a 0.0 fallback. Non-positive amounts are kept here and
        dropped by the store.
    day : int, optional
        Normalized day; invalid values become None (unscheduled).
    description : str
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: str = Field(default="expense", description="income or expense")
    amount: float = Field(default=0.0, description="Positive amount")
    day: Optional[int] = Field(default=None, description="Day of month, 1-indexed")
    description: str = Field(default="", max_length=200, description="Free-text label")

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_field(cls, v: Any) -> float:
        return coerce_money(v)

    @field_validator("day", mode="before")
    @classmethod
    def normalize_day_field(cls, v: Any) -> Optional[int]:
        return normalize_day(v)

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()[:200]


class BudgetConfig(BaseModel):
    """
    Content of a budget file.

    Examples
    --------
    >>> BudgetConfig(monthly_income=3000, monthly_savings=500).monthly_savings
    500.0
    >>> BudgetConfig.model_validate({"monthly_income": "abc"}).monthly_income
    0.0
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    schema_version: str = Field(default=SCHEMA_VERSION, description="Budget file schema version")
    monthly_income: float = Field(default=0.0, description="Base monthly income")
    monthly_savings: float = Field(default=0.0, description="Monthly savings target")
    entries: List[EntryConfig] = Field(default_factory=list, description="Ad-hoc entries")

    @field_validator("monthly_income", "monthly_savings", mode="before")
    @classmethod
    def coerce_money_fields(cls, v: Any) -> float:
        return coerce_money(v)

    @field_validator("entries", mode="before")
    @classmethod
    def keep_entry_mappings(cls, v: Any) -> list:
        """Skip list items that are not entry objects instead of failing."""
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, EntryConfig))]


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Environment variables are prefixed with ``DAILYBUDGET_`` (e.g.
    ``DAILYBUDGET_LOG_LEVEL=DEBUG``); a ``.env`` file is read if present.

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging).
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR".
    locale : str
        Currency formatting convention: "de_DE" or "en_US".
    currency : str
        ISO currency code used for display.

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.currency
    'EUR'
    """

    model_config = SettingsConfigDict(
        env_prefix="DAILYBUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    locale: Literal["de_DE", "en_US"] = Field(
        default=DEFAULT_LOCALE,
        description="Currency formatting convention"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=3,
        max_length=3,
        description="ISO currency code for display"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
