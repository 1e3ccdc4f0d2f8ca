"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, Optional, Dict, Any, List
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_OVERPASS_MIRRORS = [
    "https://overpass-api.de/api/interpreter",
    "https://overpass.openstreetmap.ru/api/interpreter",
    "https://maps.mail.ru/osm/tools/overpass/api/interpreter",
]


class OverpassSettings(BaseSettings):
    """Overpass API mirror configuration"""

    mirrors: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_OVERPASS_MIRRORS))
    per_request_timeout_seconds: float = Field(default=8.0, gt=0.0, le=120.0)
    query_timeout_seconds: int = Field(
        default=20, ge=1, le=180,
        description="Server-side [timeout:N] embedded in the Overpass QL query"
    )
    user_agent: str = Field(default="CityExplorationHackathonApp/1.0")

    @field_validator('mirrors', mode='before')
    @classmethod
    def parse_mirrors(cls, v):
        """Parse mirror URLs from a comma separated environment variable or list"""
        if isinstance(v, str):
            return [url.strip() for url in v.split(",") if url.strip()]
        return v

    @field_validator('mirrors')
    @classmethod
    def require_mirrors(cls, v):
        if not v:
            raise ValueError("at least one Overpass mirror must be configured")
        return v

    model_config = {"env_prefix": "OVERPASS_"}


class SearchSettings(BaseSettings):
    """Radius escalation and result assembly defaults"""

    default_radius_m: float = Field(default=3000.0, gt=0.0)
    default_max_radius_m: float = Field(default=5000.0, gt=0.0)
    default_radius_step_m: float = Field(default=2000.0, gt=0.0)
    default_direction_range: float = Field(default=45.0, ge=0.0, le=180.0)
    max_allowed_radius_m: float = Field(default=50000.0, gt=0.0)
    target_count: int = Field(default=5, ge=1, le=100)
    max_results: int = Field(default=10, ge=1, le=100)
    overall_deadline_seconds: Optional[float] = Field(default=20.0, gt=0.0)

    model_config = {"env_prefix": "SEARCH_"}


class ClientCacheSettings(BaseSettings):
    """Client-side result cache configuration"""

    refetch_threshold_m: float = Field(default=300.0, ge=0.0)
    capacity_max: int = Field(default=150, ge=1, le=10000)
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)

    model_config = {"env_prefix": "CLIENT_CACHE_"}


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="City Explore API")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or plain")

    # Nested Settings
    overpass: OverpassSettings = Field(default_factory=OverpassSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    client_cache: ClientCacheSettings = Field(default_factory=ClientCacheSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
