"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - total_budget is fixed for the life of the process (read once in lifespan)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for local runs
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Ledger
    total_budget: float = 2000.0

    @field_validator("total_budget")
    @classmethod
    def total_budget_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("total_budget must be a positive number")
        return v

    # API
    service_name: str = "personal-budget-api"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
