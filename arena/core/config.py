"""Configuration settings for the availability service.

Loads settings from ``ARENA_``-prefixed environment variables (or a ``.env``
file) with defaults matching the marketplace's behaviour.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Availability engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ARENA_",
        env_file=".env",
        extra="ignore",
    )

    # Fallback business hours for resources without an operating window
    default_opening_time: str = "06:00"
    default_closing_time: str = "23:00"

    # Slot grid
    default_duration_minutes: int = 60
    slot_step_minutes: int = 60

    # Pricing
    default_currency: str = "INR"

    # Tenancy (vendor subdomains such as ``3lok.gamehub.com``)
    root_domain_label: str = "gamehub"
    ignored_subdomains: list[str] = ["www", "api", "app", "admin", "test", "staging", "dev"]

    # Timeline fan-out
    timeline_max_workers: int = 8
    timeline_deadline_seconds: float | None = None

    # Logging
    log_level: str = "INFO"

    # Load the demo marketplace into the in-memory repositories at startup
    seed_demo_data: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
