"""Application settings and configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import ClassVar, List


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    # API settings
    PROJECT_NAME: str = "Team Roster"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"

    # CORS
    CORS_ORIGINS: str = "*"
    CORS_HEADERS: str = "*"
    CORS_METHODS: str = "*"

    # Database
    DATABASE_URI: str = "sqlite+aiosqlite:///./team_roster.db"
    SQL_ECHO: bool = False

    # JWT Settings
    JWT_SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CV handling
    CV_MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB, inclusive
    CV_ALLOWED_MEDIA_TYPE: str = "application/pdf"
    CV_SUBFOLDER: str = "team-cvs"

    # Storage Configuration
    UPLOADS_PATH: str = "static/uploads"
    STATIC_URL_PREFIX: str = "/static/uploads"
    PUBLIC_API_BASE_URL: str = "http://localhost:8000/api/v1"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIRECTORY: str = "logs"
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5
    SERVICE_NAME: str = "team-roster"

    # Configure bleach for HTML sanitization of long descriptions
    ALLOWED_TAGS: ClassVar[list[str]] = [
        "a", "b", "blockquote", "br", "em", "h3", "h4", "i",
        "li", "ol", "p", "span", "strong", "u", "ul",
    ]

    ALLOWED_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {
        "a": ["href", "title", "target", "rel"],
        "span": ["class", "style"],
        "p": ["style", "class"],
        "li": ["style", "class"],
        "ol": ["style", "class", "type"],
        "ul": ["style", "class", "type"],
    }

    ALLOWED_CSS_PROPERTIES: ClassVar[list[str]] = [
        "text-align", "text-decoration", "color",
        "font-size", "font-weight", "font-style",
        "margin-left", "padding-left",
    ]

    @field_validator("API_V1_STR")
    def ensure_api_prefix_has_slash(cls, v: str) -> str:
        """Ensure API prefix starts with a slash."""
        if not v.startswith("/"):
            return f"/{v}"
        return v

    @field_validator("PUBLIC_API_BASE_URL", "STATIC_URL_PREFIX")
    def strip_trailing_slash(cls, v: str) -> str:
        """URL prefixes are joined with '/' so they must not end with one."""
        return v.rstrip("/")

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        """Convert CORS_ORIGINS string to list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def CORS_METHODS_LIST(self) -> List[str]:
        """Convert CORS_METHODS string to list."""
        if self.CORS_METHODS == "*":
            return ["*"]
        return [method.strip() for method in self.CORS_METHODS.split(",")]

    @property
    def CORS_HEADERS_LIST(self) -> List[str]:
        """Convert CORS_HEADERS string to list."""
        if self.CORS_HEADERS == "*":
            return ["*"]
        return [header.strip() for header in self.CORS_HEADERS.split(",")]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create global settings instance
settings = Settings()
