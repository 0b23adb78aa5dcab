"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "mysql://",
    "mysql+pymysql://",
    "sqlite://",
)

# Development-only signing secret; rejected when APP_ENV=prod.
INSECURE_DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    API_V1_PREFIX: str = "/api/v1"

    # MySQL in production; sqlite:// is accepted for local runs and tests
    DATABASE_URL: str = "mysql+pymysql://root:@localhost:3306/taskmanager"
    DB_POOL_SIZE: int = 10

    # Session tokens (HS256 JWT in the "session" cookie)
    JWT_SECRET: SecretStr = SecretStr(INSECURE_DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "session"

    BCRYPT_ROUNDS: int = 10

    # Edge gate route classification (prefix match on path segments)
    PROTECTED_ROUTE_PREFIXES: list[str] = ["/dashboard", "/api/v1/tasks"]
    AUTH_ROUTE_PREFIXES: list[str] = ["/login", "/signup"]
    ADMIN_ROUTE_PREFIXES: list[str] = ["/api/v1/admin"]
    LOGIN_PATH: str = "/login"
    DASHBOARD_PATH: str = "/dashboard"

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a MySQL URL (e.g. mysql+pymysql://) or sqlite://"
            )
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_db_pool_size(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("DB_POOL_SIZE must be between 1 and 100")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        if not v.strip().startswith("HS"):
            raise ValueError("JWT_ALGORITHM must be an HMAC algorithm (HS256, HS384, HS512)")
        return v.strip()

    @field_validator("SESSION_EXPIRE_DAYS")
    @classmethod
    def validate_session_expire_days(cls, v: int) -> int:
        if v < 1 or v > 30:
            raise ValueError("SESSION_EXPIRE_DAYS must be between 1 and 30")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator(
        "PROTECTED_ROUTE_PREFIXES", "AUTH_ROUTE_PREFIXES", "ADMIN_ROUTE_PREFIXES"
    )
    @classmethod
    def validate_route_prefixes(cls, v: list[str]) -> list[str]:
        for prefix in v:
            if not prefix.startswith("/"):
                raise ValueError(f"Route prefix must start with '/': {prefix!r}")
        return [p.rstrip("/") or "/" for p in v]

    @model_validator(mode="after")
    def require_real_secret_in_prod(self) -> "Settings":
        if (
            self.APP_ENV == "prod"
            and self.JWT_SECRET.get_secret_value() == INSECURE_DEFAULT_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET must be configured when APP_ENV=prod")
        return self

    @property
    def secure_cookies(self) -> bool:
        return self.APP_ENV == "prod"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
