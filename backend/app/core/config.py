# File: backend/app/core/config.py
# Version: v0.4.0
"""
Process-wide settings, read once from the environment (pydantic-settings).

- APP_NAME / APP_VERSION / API_PREFIX: FastAPI metadata and mount point
- CORS_ORIGINS: '*' or a comma-separated origin list
- DB_URL: SQLAlchemy URL of the project store
- THERMO_SETTINGS_PATH: JSON file holding the editable reaction conditions
- LOG_LEVEL: root logging level for the API process

The primer engine never imports this module; only routers, services and the
CLI do.
"""
from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "BisPrimer"
    APP_VERSION: str = "0.4.0"
    API_PREFIX: str = "/api"

    CORS_ORIGINS: str = "*"

    DB_URL: str = "sqlite:///backend/app/data/bisprimer.db"
    THERMO_SETTINGS_PATH: Path = Path("backend/app/config/thermo_settings.json")

    LOG_LEVEL: str = "info"

    # unknown env vars are ignored; no .env autoload
    model_config = SettingsConfigDict(extra="ignore", env_file=None)

    @property
    def cors_origins_list(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return ["*"] if not origins or "*" in origins else origins


settings = Settings()
