"""
Configuration management using pydantic-settings.

Loads settings from CLAIMLEDGER_* environment variables and .env files.
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from claimledger.store import InMemoryRecordStore, RecordStore, SQLiteRecordStore


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLAIMLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    store_backend: Literal["memory", "sqlite"] = Field(
        default="memory",
        description="Record store implementation",
    )
    sqlite_path: Path = Field(
        default=Path("data") / "ledger.db",
        description="Database file used when store_backend is sqlite",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    policy_version: str = Field(
        default="1.0",
        description="Policy version tag passed to the init hook at startup",
    )

    def build_store(self) -> RecordStore:
        if self.store_backend == "sqlite":
            return SQLiteRecordStore(self.sqlite_path)
        return InMemoryRecordStore()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to avoid re-reading environment on every call.
    """
    return Settings()
