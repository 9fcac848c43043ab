"""
Configuration settings for Catalog Sync.

Uses Pydantic Settings to load environment variables for the OData service
location, the collection to synchronize, logging, and failure handling.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # OData service
    service_url: str = Field(
        "https://services.odata.org/V2/Northwind/Northwind.svc", alias="ODATA_SERVICE_URL"
    )
    collection: str = Field("Products", alias="ODATA_COLLECTION")
    sort_field: str = Field("ProductID", alias="ODATA_SORT_FIELD")
    timeout_seconds: float = Field(30.0, alias="ODATA_TIMEOUT_SECONDS")
    connect_retries: int = Field(3, alias="ODATA_CONNECT_RETRIES")

    # Sync behaviour
    failure_policy: Literal["tolerant", "strict"] = Field("tolerant", alias="SYNC_FAILURE_POLICY")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
