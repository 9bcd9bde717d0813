"""Application configuration loaded from environment variables."""

import re
from datetime import timedelta
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

# Placeholders are long enough to pass length checks in dev; rejected in prod.
DEV_JWT_SECRET = "dev-only-jwt-secret-change-me-0123456789"
DEV_COOKIE_SECRET = "dev-only-cookie-secret-change-me-012345"

SECRET_MIN_LEN = 32

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: object) -> timedelta:
    """Parse '15m', '12h', '7d', '30s', a bare number of seconds, or a timedelta."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    if isinstance(value, str):
        match = _DURATION_RE.match(value)
        if match:
            amount, unit = match.groups()
            return timedelta(seconds=int(amount) * _DURATION_UNITS[unit.lower()])
    raise ValueError(
        f"invalid duration {value!r}; use e.g. '30s', '15m', '12h', '7d' or seconds"
    )


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "test", "prod"] = "dev"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Postgres when set; otherwise (or with USE_SQLITE=true) the local SQLite file
    DATABASE_URL: str | None = None
    USE_SQLITE: bool = False
    SQLITE_DB_PATH: str = "./data/db.sqlite"
    DB_AUTO_CREATE: bool = True

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr(DEV_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_TTL: timedelta = timedelta(minutes=15)
    REFRESH_TOKEN_TTL: timedelta = timedelta(days=7)
    COOKIE_SECRET: SecretStr = SecretStr(DEV_COOKIE_SECRET)
    # bcrypt cost factor for new password hashes
    BCRYPT_ROUNDS: int = 12

    CORS_ORIGIN: str = "http://localhost:5173"
    LOG_LEVEL: Literal["error", "warning", "info", "debug"] = "info"

    # Feature flags. AUTH_ENABLED=False runs every request as the seeded dev admin.
    AUTH_ENABLED: bool = True
    ENABLE_PERFORMANCE_MONITORING: bool = False

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        return v.strip()

    @field_validator("SQLITE_DB_PATH")
    @classmethod
    def validate_sqlite_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SQLITE_DB_PATH must be set and non-empty")
        return v.strip()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower()
            return "warning" if v == "warn" else v
        return v

    @field_validator("JWT_SECRET", "COOKIE_SECRET")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value().strip()) < SECRET_MIN_LEN:
            raise ValueError(f"secret must be at least {SECRET_MIN_LEN} characters")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("ACCESS_TOKEN_TTL", mode="before")
    @classmethod
    def parse_access_ttl(cls, v: object) -> timedelta:
        ttl = parse_duration(v)
        if ttl < timedelta(seconds=1) or ttl > timedelta(days=1):
            raise ValueError("ACCESS_TOKEN_TTL must be between 1 second and 1 day")
        return ttl

    @field_validator("REFRESH_TOKEN_TTL", mode="before")
    @classmethod
    def parse_refresh_ttl(cls, v: object) -> timedelta:
        ttl = parse_duration(v)
        if ttl < timedelta(minutes=1) or ttl > timedelta(days=90):
            raise ValueError("REFRESH_TOKEN_TTL must be between 1 minute and 90 days")
        return ttl

    @field_validator("CORS_ORIGIN")
    @classmethod
    def validate_cors_origin(cls, v: str) -> str:
        s = v.strip().rstrip("/")
        if not (s.lower().startswith("http://") or s.lower().startswith("https://")):
            raise ValueError(
                "CORS_ORIGIN must use http or https (e.g. http://localhost:5173)"
            )
        return s

    @model_validator(mode="after")
    def reject_dev_secrets_in_prod(self) -> "Settings":
        if self.APP_ENV != "prod":
            return self
        if self.JWT_SECRET.get_secret_value() == DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be changed from the dev placeholder in prod")
        if self.COOKIE_SECRET.get_secret_value() == DEV_COOKIE_SECRET:
            raise ValueError("COOKIE_SECRET must be changed from the dev placeholder in prod")
        return self

    @property
    def database_kind(self) -> Literal["sqlite", "postgresql"]:
        """Backing store selected for this process."""
        if self.USE_SQLITE or not self.DATABASE_URL:
            return "sqlite"
        return "postgresql"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "prod"


def load_settings(**overrides: object) -> Settings:
    """Build a Settings instance once at process start; overrides win over env."""
    return Settings(**overrides)
