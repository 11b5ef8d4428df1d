# transaction_cost/config/settings.py

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "transaction-cost-lookup"
    environment: Literal["dev", "test", "prod"] = "dev"
    version: str = "0.1.0"

    # --- Database ---
    database_url: str = "postgresql+asyncpg://localhost:5432/transaction_cost"
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # --- Audit trail ---
    audit_actor: str = "SYSTEM"
    audit_origin: str = "PER002"
    audit_service: str = "PER002"
    audit_created_by: str = "PER002-SERVICE"
    audit_max_attempts: int = Field(3, ge=1)
    audit_base_delay_seconds: float = Field(0.1, ge=0.0)
    audit_max_concurrent_writes: int = Field(20, ge=1)

    # --- Response ---
    response_utc_offset_hours: int = Field(-6, ge=-12, le=14)

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
