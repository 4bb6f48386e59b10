"""
sfdx-config runtime settings
Loads tool configuration from SFDX_CONFIG_* environment variables
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Where the config stores live and how chatty the tool is."""

    model_config = SettingsConfigDict(env_prefix="SFDX_CONFIG_", case_sensitive=False)

    # Parent of the global .sfdx folder
    home_dir: Optional[Path] = None
    # Where the project-root search starts
    project_dir: Optional[Path] = None

    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept any case for the level name."""
        if isinstance(v, str):
            return v.strip().upper() or "WARNING"
        return v

    def resolved_home_dir(self) -> Path:
        return Path(self.home_dir) if self.home_dir else Path.home()

    def resolved_project_dir(self) -> Path:
        return Path(self.project_dir) if self.project_dir else Path.cwd()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
