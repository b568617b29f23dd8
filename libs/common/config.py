from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "development", "production", "test"] = "local"
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "store"

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_ECHO: bool = False

    # SMTP
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 465
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_SSL: bool = True
    SMTP_TIMEOUT: int = 30
    DEFAULT_FROM_EMAIL: str = "no-reply@smartmeter.ro"
    DEFAULT_FROM_NAME: str = "SmartMeter"
    STAFF_NOTIFICATION_EMAILS: Annotated[list[str], NoDecode] = []
    CONTACT_RECIPIENTS: Annotated[list[str], NoDecode] = []
    SEND_CUSTOMER_CONFIRMATION: bool = False

    # Admin auth
    ADMIN_JWT_SECRET: str = "change-me"
    ADMIN_JWT_ALGORITHM: str = "HS256"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    ORDER_RATE_LIMIT: str = "10/minute"
    CONTACT_RATE_LIMIT: str = "5/minute"

    # Store
    ORDER_NUMBER_PREFIX: str = "ORD"
    DEFAULT_CURRENCY: str = "RON"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> str:
        if isinstance(v, str):
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    @field_validator("STAFF_NOTIFICATION_EMAILS", "CONTACT_RECIPIENTS", mode="before")
    @classmethod
    def split_address_list(cls, v):
        # Env values arrive as "a@x.ro, b@y.ro"
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
