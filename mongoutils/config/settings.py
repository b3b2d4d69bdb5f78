"""
Centralized Configuration Management for mongoutils

This module provides type-safe configuration for the MongoDB connection,
the query parameter defaults and the HTTP application, using Pydantic
BaseSettings with validation.
"""

from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class MongoSettings(BaseSettings):
    """
    Application configuration read from environment variables and ``.env``.

    Values can also be passed explicitly, which is how tests and embedding
    applications build isolated configurations.
    """

    # Database Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017", description="MongoDB connection string", alias="MONGODB_URL")
    database_name: str = Field(default="mongoutils", description="MongoDB database name", alias="DATABASE_NAME")
    server_selection_timeout_ms: int = Field(
        default=5000,
        description="How long to wait for a suitable server before failing",
        alias="SERVER_SELECTION_TIMEOUT_MS"
    )

    # Consistency Configuration
    read_preference: Union[int, str] = Field(
        default="strong",
        description="Read consistency: 0/eventual, 1/monotonic or 2/strong",
        alias="READ_PREFERENCE"
    )
    write_concern_w: Union[int, str] = Field(default=1, description="Write concern w value", alias="WRITE_CONCERN_W")
    write_concern_journal: Optional[bool] = Field(None, description="Wait for the journal on writes", alias="WRITE_CONCERN_JOURNAL")
    write_concern_wtimeout_ms: Optional[int] = Field(None, description="Write concern timeout", alias="WRITE_CONCERN_WTIMEOUT_MS")

    # Query Parameter Defaults
    default_limit: int = Field(default=5, description="Limit used when none is requested", alias="DEFAULT_LIMIT")
    default_sort_field: str = Field(default="_id", description="Field sorted by when none is requested", alias="DEFAULT_SORT_FIELD")

    # Application Configuration
    debug_mode: bool = Field(default=False, description="Enable debug mode", alias="DEBUG")
    log_level: str = Field(default="INFO", description="Logging level", alias="LOG_LEVEL")
    app_name: str = Field(default="mongoutils", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    cors_origins: Union[str, List[str]] = Field(default="*", description="CORS allowed origins (comma-separated)", alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True

    @field_validator('mongodb_url')
    @classmethod
    def validate_mongodb_url(cls, v):
        """Validate MongoDB URL format"""
        if not v.startswith(('mongodb://', 'mongodb+srv://')):
            raise ValueError('MongoDB URL must start with mongodb:// or mongodb+srv://')
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is supported"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('cors_origins')
    @classmethod
    def validate_cors_origins(cls, v):
        """Process CORS origins"""
        if isinstance(v, list):
            return v
        if v == "*":
            return ["*"]
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    @field_validator('read_preference')
    @classmethod
    def normalize_read_preference(cls, v):
        """Accept digit strings such as "1" as their integer mode"""
        if isinstance(v, str):
            v = v.strip().lower()
            if v.isdigit():
                return int(v)
        return v


# Global configuration instance
settings = MongoSettings()


def get_settings() -> MongoSettings:
    """
    Dependency function to get application settings.

    Can be used with FastAPI's dependency injection system.

    Returns:
        MongoSettings: The application configuration instance
    """
    return settings
