"""
Core configuration management for the course catalog
Supports multiple environments and storage backends
"""

import os
from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    MONGODB = "mongodb"


class BaseSettings(PydanticBaseSettings):
    """Base configuration settings"""

    # Application
    app_name: str = "Course Catalog"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Storage
    storage_backend: StorageBackend = StorageBackend.MEMORY
    mongodb_uri: Optional[str] = None
    mongodb_database: str = "course_management"
    mongodb_collection: str = "courses"
    mongodb_timeout_ms: int = 5000

    # Seeding
    seed_on_startup: bool = True
    seed_on_request: bool = True

    # Recommendations
    recommendation_limit: int = Field(3, ge=1)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


class DevelopmentSettings(BaseSettings):
    """Development environment settings"""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True


class TestingSettings(BaseSettings):
    """Testing environment settings"""

    environment: Environment = Environment.TESTING
    debug: bool = True

    # Always in-memory for testing
    storage_backend: StorageBackend = StorageBackend.MEMORY
    seed_on_startup: bool = False


class ProductionSettings(BaseSettings):
    """Production environment settings"""

    environment: Environment = Environment.PRODUCTION
    debug: bool = False

    storage_backend: StorageBackend = StorageBackend.MONGODB


@lru_cache()
def get_settings() -> BaseSettings:
    """
    Get settings based on environment variable
    Cached for performance
    """
    environment = Environment(os.getenv("ENVIRONMENT", "development"))

    if environment == Environment.TESTING:
        return TestingSettings()
    elif environment == Environment.PRODUCTION:
        return ProductionSettings()
    else:
        return DevelopmentSettings()


def validate_configuration(settings: Optional[BaseSettings] = None):
    """Validate that all required configuration is present"""
    settings = settings or get_settings()
    errors = []

    if settings.storage_backend == StorageBackend.MONGODB and not settings.mongodb_uri:
        errors.append("MONGODB_URI is required for the mongodb storage backend")

    if settings.api_prefix and not settings.api_prefix.startswith("/"):
        errors.append("API_PREFIX must start with '/'")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True
