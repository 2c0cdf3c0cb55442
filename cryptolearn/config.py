from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Playback
    autoplay_interval_seconds: float = Field(default=1.5, gt=0.0, le=60.0)

    # Trace requests
    default_mode: Literal["forward", "inverse", "both"] = Field(default="forward")

    # Logging
    log_level: str = Field(default="INFO")

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    runs_dir: str = Field(default="runs")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        autoplay_interval_seconds=float(os.getenv("CRYPTOLEARN_AUTOPLAY_INTERVAL", "1.5")),
        default_mode=os.getenv("CRYPTOLEARN_DEFAULT_MODE", "forward").strip().lower(),
        log_level=os.getenv("CRYPTOLEARN_LOG_LEVEL", "INFO"),
        runs_dir=os.getenv("CRYPTOLEARN_RUNS_DIR", "runs"),
    )
