"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "route-resolver"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    # Project layout
    manifest_name: str = "package.json"
    controller_prefix: str = "#controllers/"
    controller_alias: str = "#controllers/*"
    routes_alias: str = "#routes/*"

    # Routing vocabulary
    routing_verbs: frozenset[str] = frozenset(
        {"get", "post", "put", "patch", "delete", "route", "resource", "group"}
    )
    group_verb: str = "group"
    restrict_to_route_files: bool = True

    # Target files
    max_file_size_bytes: int = 1_000_000  # 1MB

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return upper

    @field_validator("controller_prefix")
    @classmethod
    def validate_controller_prefix(cls, v: str) -> str:
        if not v.endswith("/"):
            raise ValueError("controller_prefix must end with '/'")
        return v

    @field_validator("controller_alias", "routes_alias")
    @classmethod
    def validate_wildcard_alias(cls, v: str) -> str:
        if v.count("*") != 1:
            raise ValueError("wildcard aliases must contain exactly one '*'")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
