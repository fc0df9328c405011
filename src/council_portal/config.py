"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

from dotenv import find_dotenv, load_dotenv


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_positive_int(key: str, default: int) -> int:
    raw = _env(key)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ValueError(msg) from exc
    if value < 1:
        msg = f"{key} must be at least 1, got {value}"
        raise ValueError(msg)
    return value


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("COSMOS_KEY"))
    database: str = field(default_factory=lambda: _env("COSMOS_DATABASE", "council-portal"))


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class LeaseConfig:
    """Priority lease lifetime and sweep cadence, both in minutes."""

    ttl_minutes: int = field(
        default_factory=lambda: _env_positive_int("PRIORITY_LEASE_TTL_MINUTES", 10)
    )
    sweep_interval_minutes: int = field(
        default_factory=lambda: _env_positive_int("PRIORITY_SWEEP_INTERVAL_MINUTES", 10)
    )

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.ttl_minutes)

    @property
    def sweep_interval_seconds(self) -> float:
        return float(self.sweep_interval_minutes * 60)


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    app: AppConfig = field(default_factory=AppConfig)
    leases: LeaseConfig = field(default_factory=LeaseConfig)


def load_settings() -> Settings:
    """Load ``.env`` from the working directory (if present) and build settings."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings()
