"""Application configuration helpers."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Centralized configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=str(BASE_DIR / ".env"), env_file_encoding="utf-8")

    app_name: str = "Order Dashboard"
    environment: str = "dev"
    log_level: str = "INFO"

    # Orders document (fallback to backend/data/orders.json for dev/testing)
    orders_file: Optional[str] = None

    # API behavior
    allow_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "*"]

    def get_orders_path(self) -> Path:
        if self.orders_file:
            return Path(self.orders_file)
        return BASE_DIR / "data" / "orders.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
