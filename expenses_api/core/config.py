# expenses_api/core/config.py

from functools import lru_cache
from pathlib import Path
from typing import List
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Expenses API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str
    AUTO_CREATE_TABLES: bool = True

    # JWT Configuration (JwtSettings:*)
    JWT_SECURITY_KEY: str
    JWT_ISSUER: str
    JWT_AUDIENCE: str
    JWT_EXPIRATION_TIME_IN_MINUTES: int = 60
    JWT_ALGORITHM: str = "HS256"

    # Password hashing cost (bcrypt rounds)
    PASSWORD_HASH_ROUNDS: int = 12

    # CORS Configuration
    ALLOWED_CORS: List[str] = ["https://localhost:4200"]

    @field_validator("JWT_SECURITY_KEY", "JWT_ISSUER", "JWT_AUDIENCE")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("JWT_EXPIRATION_TIME_IN_MINUTES")
    @classmethod
    def positive_lifetime(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive number of minutes")
        return value

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Settings built from the environment; fails fast when JWT settings are missing."""
    return Settings()
