from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    api_key: str = "dev-key"
    database_url: str = "sqlite:///momentum.db"

    # IANA zone name ("Asia/Kolkata"); unset means the host's local zone
    timezone: str | None = None

    # key of the single persisted record in the kv_store table
    store_key: str = "momentumData"

    # mark every day from start date through yesterday as done on creation
    backfill_on_create: bool = False

    # "month" (current calendar month) | "rolling" (last N days)
    chain_mode: Literal["month", "rolling"] = "month"
    chain_window_days: int = 30

    # daily best-streak refresh
    enable_scheduler: bool = True
    refresh_hour: int = 0
    refresh_minute: int = 5

    log_level: str = "INFO"

    # load .env, ignore unknown keys so new vars don't break boot
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
