"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    svgflat_env: str = "development"
    svgflat_log_level: str = "info"

    # Engine defaults (see svgflat.engine.config.FlattenConfig)
    svgflat_precision: int | None = None
    svgflat_fail_fast: bool = True
    svgflat_verify_paths: bool = False
    svgflat_verify_tolerance: float = 1e-6
    svgflat_remove_used_sources: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
