"""Configuration management using Pydantic Settings"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (postgresql+psycopg2://... in deployed environments)
    database_url: str = "sqlite:///./trustrail.db"

    # External Services
    bank_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "trustrail-gateway"
    log_level: str = "INFO"
    auto_create_tables: bool = True

    # HTTP Client
    http_timeout_seconds: float = 5.0
    bank_max_retries: int = 3
    bank_backoff_base: float = 0.5  # Exponential backoff base in seconds

    # Trust scoring
    scoring_jitter_max: int = 15  # Jitter drawn from [0, scoring_jitter_max); 0 disables it
    scoring_jitter_seed: Optional[int] = None

    # Installment schedule preview
    schedule_interest_method: Literal["per_period", "flat"] = "per_period"


settings = Settings()
