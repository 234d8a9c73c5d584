from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Link Shortener"

    # Codec configuration, fixed for the lifetime of the process
    LINK_SALT: str
    LINK_MIN_LENGTH: int = Field(5, ge=0)
    LINK_ALPHABET: Optional[str] = None

    IDENTIFIER_STRATEGY: Literal["memory", "database", "redis"] = "memory"

    # Infrastructure Configs
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "shortlink"

    REDIS_HOST: Optional[str] = None
    REDIS_PORT: int = 6379
    CACHE_TTL: int = 86400

    BASE_URL: str = "http://localhost:8080"
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", frozen=True)

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
