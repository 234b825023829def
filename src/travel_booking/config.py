"""Настройки приложения через pydantic-settings."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TravelSettings(BaseSettings):
    """Настройки, читаемые из переменных окружения с префиксом TRAVEL_."""

    model_config = SettingsConfigDict(
        env_prefix="TRAVEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    currency: str = Field(default="INR", max_length=3)
    initial_wallet_balance: Decimal = Field(default=Decimal("20000"), ge=0)
    booking_number: int = Field(default=101, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    seed_catalog: bool = True


@lru_cache
def get_settings() -> TravelSettings:
    """Возвращает закешированные настройки."""
    return TravelSettings()
