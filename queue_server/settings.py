from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List
import os

class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///./arcade_queue.db", alias="DATABASE_URL")
    sqlite_timeout: float = Field(default=5.0, alias="SQLITE_TIMEOUT")  # seconds to wait for the write lock
    cors_origins_raw: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")
    api_prefix: str = Field(default="", alias="API_PREFIX")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = (v or "").upper()
        if v_upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            return "INFO"
        return v_upper

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in (self.cors_origins_raw or "").split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    class Config:
        env_file = os.path.join(os.path.dirname(__file__), "..", ".env")
        extra = "ignore"

settings = Settings()
