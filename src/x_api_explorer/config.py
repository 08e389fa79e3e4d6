from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from x_api_explorer.request.compiler import DEFAULT_BASE_URL

DEFAULT_HOME = Path.home() / ".x-api-explorer"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="X_API_EXPLORER_", case_sensitive=False, extra="ignore")

    base_url: str = Field(default=DEFAULT_BASE_URL)
    log_level: str = Field(default="WARNING")

    profiles_path: Path = Field(default=DEFAULT_HOME / "profiles.yaml")
    dtab_sets_path: Path = Field(default=DEFAULT_HOME / "dtab_sets.yaml")
    catalog_path: Path | None = Field(default=None)


def get_settings() -> Settings:
    return Settings()
