"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class AuthConfig(BaseModel):
    """Token signing and password hashing configuration."""

    jwt_secret: str = Field(
        default="change-me-in-production",
        alias="TASKMANAGER_JWT_SECRET",
        description="Secret key used to sign access tokens",
    )
    jwt_algorithm: str = Field(default="HS256", alias="TASKMANAGER_JWT_ALGORITHM", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=0,
        ge=0,
        alias="TASKMANAGER_ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Access token lifetime in minutes (0 means tokens never expire)",
    )
    bcrypt_rounds: int = Field(
        default=8, ge=4, le=31, alias="TASKMANAGER_BCRYPT_ROUNDS", description="bcrypt cost factor for password hashes"
    )

    model_config = {"populate_by_name": True}


class UploadConfig(BaseModel):
    """File upload configuration."""

    upload_dir: str = Field(
        default="uploads", alias="TASKMANAGER_UPLOAD_DIR", description="Directory where uploaded documents are stored"
    )
    max_upload_bytes: int = Field(
        default=1_000_000, ge=1, alias="TASKMANAGER_MAX_UPLOAD_BYTES", description="Maximum accepted upload size"
    )

    model_config = {"populate_by_name": True}


class WeatherConfig(BaseModel):
    """Geocoding and forecast provider configuration."""

    mapbox_access_token: Optional[str] = Field(
        default=None, alias="MAPBOX_ACCESS_TOKEN", description="Mapbox access token for geocoding"
    )
    mapbox_base_url: str = Field(
        default="https://api.mapbox.com", alias="MAPBOX_BASE_URL", description="Mapbox API base URL"
    )
    weatherstack_access_key: Optional[str] = Field(
        default=None, alias="WEATHERSTACK_ACCESS_KEY", description="Weatherstack access key for forecasts"
    )
    weatherstack_base_url: str = Field(
        default="http://api.weatherstack.com", alias="WEATHERSTACK_BASE_URL", description="Weatherstack API base URL"
    )
    timeout: float = Field(default=10.0, gt=0, alias="WEATHER_TIMEOUT", description="Upstream HTTP timeout in seconds")

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Task manager server host address to bind to",
        alias="TASKMANAGER_SERVER_HOST",
    )
    server_port: int = Field(
        default=3000,
        description="Task manager server port number",
        alias="TASKMANAGER_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="TASKMANAGER_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="TASKMANAGER_LOG_FORMAT",
    )
    log_file_dir: str = Field(default="logs", description="Directory for log files", alias="TASKMANAGER_LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False,
        description="Write logs to a file in addition to the console",
        alias="TASKMANAGER_ENABLE_FILE_LOGGING",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./taskmanager.db",
        description="Async database connection URL for the application database",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (disable when migrations are managed by Alembic)",
        alias="TASKMANAGER_AUTO_CREATE_TABLES",
    )

    # =====================================================================
    # Notes CLI and Site Configuration
    # =====================================================================
    notes_file: str = Field(default="notes.json", description="JSON file backing the notes CLI", alias="TASKMANAGER_NOTES_FILE")
    site_author: str = Field(default="Max", description="Author name shown on site pages", alias="TASKMANAGER_SITE_AUTHOR")

    # =====================================================================
    # Flat fields backing the grouped configurations
    # =====================================================================
    jwt_secret: str = Field(default="change-me-in-production", alias="TASKMANAGER_JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="TASKMANAGER_JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=0, alias="TASKMANAGER_ACCESS_TOKEN_EXPIRE_MINUTES")
    bcrypt_rounds: int = Field(default=8, alias="TASKMANAGER_BCRYPT_ROUNDS")

    upload_dir: str = Field(default="uploads", alias="TASKMANAGER_UPLOAD_DIR")
    max_upload_bytes: int = Field(default=1_000_000, alias="TASKMANAGER_MAX_UPLOAD_BYTES")

    mapbox_access_token: Optional[str] = Field(default=None, alias="MAPBOX_ACCESS_TOKEN")
    mapbox_base_url: str = Field(default="https://api.mapbox.com", alias="MAPBOX_BASE_URL")
    weatherstack_access_key: Optional[str] = Field(default=None, alias="WEATHERSTACK_ACCESS_KEY")
    weatherstack_base_url: str = Field(default="http://api.weatherstack.com", alias="WEATHERSTACK_BASE_URL")
    weather_timeout: float = Field(default=10.0, alias="WEATHER_TIMEOUT")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def auth(self) -> AuthConfig:
        """Get token and password hashing configuration."""
        return AuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def uploads(self) -> UploadConfig:
        """Get file upload configuration."""
        return UploadConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def weather(self) -> WeatherConfig:
        """Get weather provider configuration."""
        return WeatherConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
