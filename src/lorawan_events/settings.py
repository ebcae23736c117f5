from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Scope


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    default_scope: Scope = Field(default=Scope.DEVICE, alias="EVENTS_DEFAULT_SCOPE")
    widget_mode: bool = Field(default=False, alias="EVENTS_WIDGET_MODE")
    max_batch: int = Field(default=500, alias="EVENTS_MAX_BATCH")
    api_allowed_origins: str = Field(default="", alias="API_ALLOWED_ORIGINS")
    api_key: str | None = Field(default=None, alias="EVENTS_API_KEY")

    @property
    def allowed_origins(self) -> List[str]:
        if not self.api_allowed_origins:
            # Console dev servers only; set API_ALLOWED_ORIGINS in production
            return [
                "http://localhost",
                "http://127.0.0.1",
                "http://localhost:8080",
                "http://127.0.0.1:8080",
                "http://localhost:1885",
                "http://127.0.0.1:1885",
            ]
        return [origin.strip() for origin in self.api_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]
