# app/config.py
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    """Service settings. Built once from the environment, see get_settings()."""

    api_key: str = "12345"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    default_page: int = 1
    default_limit: int = 5

    model_config = ConfigDict(frozen=True)


@lru_cache()
def get_settings() -> Settings:
    """
    Reads overrides from the environment:
    API_STORE_API_KEY, API_STORE_HOST, API_STORE_PORT (or PORT), API_STORE_LOG_LEVEL
    """
    overrides = {}
    if os.getenv("API_STORE_API_KEY"):
        overrides["api_key"] = os.getenv("API_STORE_API_KEY")
    if os.getenv("API_STORE_HOST"):
        overrides["host"] = os.getenv("API_STORE_HOST")
    port = os.getenv("API_STORE_PORT", os.getenv("PORT"))
    if port:
        overrides["port"] = int(port)
    if os.getenv("API_STORE_LOG_LEVEL"):
        overrides["log_level"] = os.getenv("API_STORE_LOG_LEVEL").upper()
    return Settings(**overrides)
