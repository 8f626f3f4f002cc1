"""
Scanner settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scanner configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        env_prefix="SCANNER_",
        case_sensitive=False,
        extra="ignore",
    )

    # Session timing
    tick_interval_ms: int = Field(300, gt=0, description="Milliseconds between frame ticks")
    confirmation_threshold: int = Field(
        3, ge=1, description="Consecutive identical decodes required to accept a code"
    )
    duplicate_window_ms: int = Field(
        3000, ge=0, description="Window in which a re-confirmed last code is suppressed"
    )
    cooldown_ms: int = Field(1000, ge=0, description="Post-acceptance quiet period")

    # Frame sampling
    scan_row_fraction: float = Field(0.5, ge=0.0, lt=1.0, description="Scanned row / height")
    frame_downscale: float = Field(0.5, gt=0.0, le=1.0, description="Resize factor per frame")

    # Quality gate
    min_contrast: int = Field(50, ge=0, description="Required max-min luminance spread")
    min_variance: float = Field(100.0, ge=0.0, description="Required luminance variance")

    # Run detection
    min_runs: int = Field(70, ge=1, description="Fewest bar/space runs on the scanline")
    max_runs: int = Field(120, ge=1, description="Most bar/space runs on the scanline")
    min_distinct_widths: int = Field(3, ge=1, description="Distinct run widths required")

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @model_validator(mode="after")
    def check_run_bounds(self) -> "Settings":
        """Reject inverted run-count bounds."""
        if self.min_runs > self.max_runs:
            raise ValueError(
                f"min_runs ({self.min_runs}) must not exceed max_runs ({self.max_runs})"
            )
        return self

    @property
    def tick_interval_seconds(self) -> float:
        """Tick interval in seconds, for sleeping/waiting."""
        return self.tick_interval_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached scanner settings."""
    return Settings()
