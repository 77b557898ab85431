"""Application configuration loaded from environment variables."""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "chrono-engine"
    debug: bool = False
    log_level: str = "INFO"

    # Caller contract violations raise when strict, clamp + warn otherwise
    strict_contracts: bool = True

    # Board
    board_width: int = 6
    board_height: int = 6

    # Initial resource state (restored on reset)
    initial_energy: float = 50.0
    initial_level: int = 1
    upgrades: int = 0

    # Chrono-Energy model
    base_capacity: float = 100.0
    base_regen_rate: float = 1.0
    low_energy_threshold: float = 0.2

    # Regeneration driver
    regen_tick_seconds: float = 1.0
    regen_min_gain: float = 0.01

    # Fragment generation
    rng_seed: Optional[int] = None

    model_config = {"env_prefix": "CHRONO_"}


settings = Settings()
