from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
import json


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./announcements.db"

    # HTTP
    CORS_ORIGINS: str = "http://localhost:5173"
    RATE_LIMIT: str = "120/minute"
    LOG_LEVEL: str = "INFO"

    # Sync client
    API_URL: str = "http://localhost:8000"
    CATEGORY_CACHE_SECONDS: int = 300

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @property
    def cors_origins(self) -> list[str]:
        """CORS_ORIGINS as a list; accepts a JSON list or a comma-separated string."""
        value = self.CORS_ORIGINS.strip()
        if value.startswith("["):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                raise ValueError(f"Invalid JSON in CORS_ORIGINS: {value}")
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
