"""
Settings for the attendance tracker, read from the environment and `.env`
"""
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

APP_ENVS = ("local", "staging", "prod")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Production secrets shorter than this are rejected
MIN_PROD_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Auth
    JWT_SECRET_KEY: str = Field(..., description="Secret used to sign access tokens")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT signing algorithm")
    JWT_EXPIRE_MINUTES: int = Field(default=120, ge=1, description="Access token lifetime in minutes")

    # Storage
    DATABASE_URL: str = Field(default="sqlite:///./attendance.db", description="SQLAlchemy database URL")

    # Runtime
    APP_ENV: str = Field(default="local", description="local, staging or prod")
    LOG_LEVEL: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    ALLOWED_ORIGINS: str = Field(default="*", description="Comma-separated CORS origins; '*' outside prod only")
    VERSION: Optional[str] = Field(default=None, description="Build version (git SHA or semver)")

    # Attendance rules. Timestamps are stored in UTC; the day key and the
    # lateness hour are read in OFFICE_TZ.
    OFFICE_TZ: str = Field(default="UTC", description="IANA timezone of the office")
    WORK_START_HOUR: int = Field(default=9, ge=0, le=23, description="Check-ins at or after this hour are late")
    HALF_DAY_HOURS: int = Field(default=4, ge=0, description="Days shorter than this many hours become half-day")
    RECENT_ATTENDANCE_LIMIT: int = Field(default=7, ge=1, description="Records shown on the employee dashboard")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        if v not in APP_ENVS:
            raise ValueError(f"APP_ENV must be one of {list(APP_ENVS)}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}")
        return v

    @field_validator("OFFICE_TZ")
    @classmethod
    def validate_office_tz(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"OFFICE_TZ must be a valid IANA timezone, got {v!r}")
        return v

    @property
    def is_prod(self) -> bool:
        return self.APP_ENV == "prod"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def office_tz(self) -> ZoneInfo:
        return ZoneInfo(self.OFFICE_TZ)

    def validate_production(self) -> None:
        """
        Refuse settings that are unsafe in prod

        Raises:
            ValueError: short JWT_SECRET_KEY or wildcard/empty ALLOWED_ORIGINS
        """
        if not self.is_prod:
            return
        if len(self.JWT_SECRET_KEY) < MIN_PROD_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET_KEY must be at least {MIN_PROD_SECRET_LENGTH} characters in production"
            )
        if not self.get_allowed_origins_list() or self.get_allowed_origins_list() == ["*"]:
            raise ValueError("ALLOWED_ORIGINS must list explicit origins (not '*') in production")

    def get_allowed_origins_list(self) -> List[str]:
        """CORS origins as a list; ['*'] for the wildcard"""
        if self.ALLOWED_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


settings = Settings()
settings.validate_production()
