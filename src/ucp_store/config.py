"""Configuration surface for the UCP store server."""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Main store configuration, read from ``UCP_STORE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="UCP_STORE_",
        env_file=".env",
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "test", "prod"] = "dev"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    public_url: str = ""

    # CORS - any origin by default
    allowed_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Catalog - JSON file; empty means the built-in demo catalog
    catalog_path: Optional[str] = None

    # Checkout
    session_ttl_seconds: int = Field(default=30 * 60, gt=0)
    card_brands: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["visa", "mastercard", "amex"])

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("allowed_origins", "card_brands", mode="before")
    @classmethod
    def parse_csv(cls, v):
        """Parse comma-separated lists from env vars."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def endpoint(self) -> str:
        """Public base URL advertised in the discovery document."""
        return (self.public_url or f"http://localhost:{self.port}").rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.environment == "prod"


@lru_cache
def load_settings() -> StoreSettings:
    return StoreSettings()


__all__ = ["StoreSettings", "load_settings"]
