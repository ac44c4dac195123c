from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from paye import __version__

CounterBackend = Literal["auto", "redis", "null"]
ZeroIncomeDeductions = Literal["statutory", "none"]
DisplayPeriod = Literal["annual", "monthly"]

DEFAULT_COUNTER_KEY = "oduko:user-count"


def _env_optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_lower(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip().lower()


class Settings(BaseModel):
    redis_url: str | None = Field(default_factory=lambda: _env_optional("REDIS_URL"))
    counter_backend: CounterBackend = Field(default_factory=lambda: _env_lower("COUNTER_BACKEND", "auto"))
    counter_key: str = Field(default_factory=lambda: os.getenv("COUNTER_KEY", DEFAULT_COUNTER_KEY))
    counter_connect_timeout: float = Field(
        default_factory=lambda: float(os.getenv("COUNTER_CONNECT_TIMEOUT", "3.0"))
    )
    counter_command_timeout: float = Field(
        default_factory=lambda: float(os.getenv("COUNTER_COMMAND_TIMEOUT", "2.0"))
    )
    counter_increment_timeout: float = Field(
        default_factory=lambda: float(os.getenv("COUNTER_INCREMENT_TIMEOUT", "1.0"))
    )
    zero_income_deductions: ZeroIncomeDeductions = Field(
        default_factory=lambda: _env_lower("ZERO_INCOME_DEDUCTIONS", "statutory")
    )
    default_period: DisplayPeriod = Field(default_factory=lambda: _env_lower("DEFAULT_PERIOD", "annual"))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", __version__))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))
    log_dir: str | None = Field(default_factory=lambda: os.getenv("LOG_DIR", "logs") or None)

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("counter_backend", "zero_income_deductions", "default_period", mode="before")
    @classmethod
    def _normalize_choice(cls, value: str) -> str:
        return (value or "").strip().lower()

    @field_validator("counter_key")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("COUNTER_KEY must not be empty")
        return value.strip()

    @field_validator("counter_connect_timeout", "counter_command_timeout", "counter_increment_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Counter timeouts must be positive")
        return value

    def resolved_counter_backend(self) -> Literal["redis", "null"]:
        if self.counter_backend == "null":
            return "null"
        return "redis" if self.redis_url else "null"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
