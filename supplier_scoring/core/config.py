"""Configuration management"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Rule table location. rules_file wins over the config_dir fallback chain.
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)
    config_dir: Optional[Path] = None
    rules_file: Optional[Path] = None

    # Import guard (rows per import run)
    max_import_rows: int = Field(default=100_000, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def setup_paths(self):
        if self.config_dir is None:
            self.config_dir = self.project_root / "config"
        return self


# Instantiate settings
settings = Settings()
