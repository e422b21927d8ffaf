"""
Configuration management using Pydantic settings.
Handles database and cache URLs, cache TTLs, JWT secrets, and environment variables.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with Docker environment variable support."""

    # Application configuration
    app_name: str = "Property Listing API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Database configuration - Docker-compatible defaults
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/property_listings"

    # Cache configuration
    redis_url: str = "redis://redis:6379/0"
    cache_backend: str = "redis"
    property_cache_ttl: int = 300  # search results and per-lister lists
    cache_ttl: int = 3600  # reference lists

    # JWT configuration
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # API configuration
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    slow_request_threshold: float = 2.0

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        """Ensure an async driver is used."""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v):
        """Validate JWT secret key strength."""
        if not v:
            raise ValueError("JWT_SECRET_KEY is required")
        if len(v) < 32 and v != "your-secret-key-change-in-production":
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters long")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v):
        """Validate cache backend selection."""
        allowed_backends = ["redis", "memory"]
        if v not in allowed_backends:
            raise ValueError(f"Cache backend must be one of: {allowed_backends}")
        return v

    @field_validator("property_cache_ttl", "cache_ttl")
    @classmethod
    def validate_ttl(cls, v):
        """Cache TTLs are expressed in whole seconds and must be positive."""
        if v <= 0:
            raise ValueError("Cache TTL must be a positive number of seconds")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
