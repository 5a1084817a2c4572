"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from card_planner.domain.models import Strategy


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "card-planner"
    log_level: str = "INFO"

    # Solver
    solver_timeout_ms: int = 500  # Plan generation budget before HTTP 504
    default_strategy: Strategy = "avalanche"  # Used when a request omits strategy


settings = Settings()
