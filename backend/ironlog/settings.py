from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    API_VERSION: str = "dev"
    LOG_LEVEL: str = "INFO"
    ALLOW_ORIGINS: str = "*"

    # Local store; point at postgres etc. if you need a shared one
    DATABASE_URL: str = "sqlite:///./ironlog.db"

    # Training defaults
    DEFAULT_REST_SECONDS: int = 90
    STANDARD_BARBELL_KG: float = 20.0
    # bypass: plan-mode sets skip the rest state; record: zero-length rest is logged
    PLAN_REST_POLICY: Literal["bypass", "record"] = "bypass"

    # Single local user
    USER_ID: str = "user_1"
    USERNAME: str = "IRONUSER"
    USER_BIO: str = "No days off."

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def allow_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    return Settings()
