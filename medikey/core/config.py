from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from urllib.parse import quote_plus
from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    # Environment Configuration
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Project Information
    PROJECT_NAME: str = "MediKey"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # Database - PostgreSQL when configured, local SQLite otherwise
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_PORT: Optional[int] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    SQLALCHEMY_DATABASE_URI: Optional[str] = None
    CREATE_TABLES_ON_STARTUP: bool = True

    # Security
    SECRET_KEY: str = "medikey-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    EMERGENCY_ACCESS_EXPIRE_MINUTES: int = 60 * 24

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"
    # None = fall back to canned answers everywhere except production
    AI_FALLBACK_MODE: Optional[bool] = None

    # CORS
    CORS_ORIGINS: List[str] = [
        "https://manasvi0109.github.io",
        "http://localhost:5000",
        "http://localhost:3000",
    ]

    # Medical record uploads
    MAX_UPLOAD_SIZE_MB: int = 10

    # Default account created on an empty database
    SEED_DEFAULT_USER: bool = True
    DEFAULT_USER_USERNAME: str = "demo"
    DEFAULT_USER_PASSWORD: str = "password123"
    DEFAULT_USER_FULL_NAME: str = "Demo User"
    DEFAULT_USER_EMAIL: str = "demo@example.com"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # --- Validators & Derived Settings ---
    @field_validator("API_PREFIX", mode="before")
    @classmethod
    def normalize_api_prefix(cls, v: Optional[str]) -> str:
        if not v:
            return ""
        v = "/" + str(v).strip().strip("/")
        return "" if v == "/" else v

    @model_validator(mode="after")
    def _finalize(self) -> "Settings":
        # Derive SQLALCHEMY_DATABASE_URI if not provided
        if not self.SQLALCHEMY_DATABASE_URI:
            user = self.POSTGRES_USER
            server = self.POSTGRES_SERVER
            port = self.POSTGRES_PORT
            db = self.POSTGRES_DB
            if user and server and port and db:
                safe_user = quote_plus(user)
                if self.POSTGRES_PASSWORD:
                    safe_password = quote_plus(self.POSTGRES_PASSWORD)
                    self.SQLALCHEMY_DATABASE_URI = (
                        f"postgresql://{safe_user}:{safe_password}@{server}:{port}/{db}"
                    )
                else:
                    self.SQLALCHEMY_DATABASE_URI = f"postgresql://{safe_user}@{server}:{port}/{db}"
            else:
                self.SQLALCHEMY_DATABASE_URI = "sqlite:///./medikey.db"

        if self.is_production and self.SECRET_KEY == "medikey-secret":
            raise ValueError("SECRET_KEY must be set in production")
        return self

    # Environment-specific properties
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    @property
    def is_staging(self) -> bool:
        return self.ENVIRONMENT == Environment.STAGING

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def ai_enabled(self) -> bool:
        """Whether requests go to OpenAI instead of the canned fallback answers"""
        if not self.OPENAI_API_KEY or not self.OPENAI_API_KEY.startswith("sk-"):
            return False
        fallback = self.AI_FALLBACK_MODE
        if fallback is None:
            fallback = not self.is_production
        return not fallback

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


settings = Settings()
