# inventory_engine/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: Literal["HS256", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database
    DATABASE_URL: str = "sqlite:///./inventory_engine.db"
    SQLITE_BUSY_TIMEOUT: float = 15.0

    # Checkout
    CHECKOUT_TIMEOUT_SECONDS: float = 10.0
    RATE_LIMIT_ENABLED: bool = True

    # Stock alerts (scheduled sweep only, checkout always alerts)
    NOTIFY_DEBOUNCE_HOURS: int = 24

    # Count units
    PCS_PER_BOX: int = 1



    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
