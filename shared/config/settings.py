"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class MongoSettings(BaseSettings):
    """MongoDB configuration."""

    model_config = SettingsConfigDict(env_prefix="MONGODB_")

    host: str = "localhost"
    port: int = 27017
    user: str = "rmf"
    password: SecretStr = SecretStr("rmf_mongo_password")
    db: str = Field(default="rmf_assessments", alias="MONGODB_DB")

    @property
    def uri(self) -> str:
        """Generate MongoDB connection URI."""
        pwd = self.password.get_secret_value()
        return f"mongodb://{self.user}:{pwd}@{self.host}:{self.port}/{self.db}?authSource=admin"


class JWTSettings(BaseSettings):
    """JWT configuration for decoding caller tokens."""

    model_config = SettingsConfigDict(env_prefix="JWT_")

    secret_key: SecretStr = SecretStr("your-jwt-secret-key-min-32-chars-long")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class ReportSettings(BaseSettings):
    """Dashboard and report tuning."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    trend_months: int = Field(default=6, ge=1, le=36)
    high_risk_threshold: int = Field(default=60, ge=0, le=100)
    recent_limit: int = Field(default=5, ge=1)
    report_type: str = "NIST AI RMF Compliance Report"


class ServicePorts(BaseSettings):
    """Service port configuration."""

    rmf_assessment: int = Field(default=8010, alias="RMF_ASSESSMENT_PORT")


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO

    # Service ports
    ports: ServicePorts = Field(default_factory=ServicePorts)

    # Database
    mongodb: MongoSettings = Field(default_factory=MongoSettings)

    # Authentication
    jwt: JWTSettings = Field(default_factory=JWTSettings)

    # Security
    cors: CORSSettings = Field(default_factory=CORSSettings)

    # Reporting
    reports: ReportSettings = Field(default_factory=ReportSettings)

    # Seed the NIST AI RMF catalog on start-up when the store is empty
    seed_templates: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
