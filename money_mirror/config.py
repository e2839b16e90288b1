"""Configuration management using Pydantic Settings"""

from typing import Dict, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Money Mirror settings, read from MONEY_MIRROR_* environment variables or .env"""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_MIRROR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "money-mirror"
    log_level: str = "INFO"

    # Profile store
    database_url: str = "sqlite:///./money_mirror.db"

    # Account aggregation source
    snapshot_api_base: str = "http://localhost:8001"
    snapshot_amount_convention: Literal["signed", "unsigned"] = "signed"
    http_timeout_seconds: float = 5.0

    # Rule engine
    rule_workers: int = 0  # 0 or 1 = sequential
    budget_overrides: Dict[str, float] = {}  # category -> share of total spending, JSON in env


settings = Settings()
