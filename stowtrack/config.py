import logging
import re
from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    APP_ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./data/stowtrack.db"
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    SEARCH_TEXT_CONFIG: str = "english"
    SEARCH_DEFAULT_LIMIT: int = 20

    class Config:
        env_file = ".env"

    @field_validator("SEARCH_TEXT_CONFIG")
    @classmethod
    def _bare_identifier(cls, value: str) -> str:
        # Inlined into SQL so the GIN expression index matches the query.
        if not re.fullmatch(r"[a-z_][a-z0-9_]*", value):
            raise ValueError("SEARCH_TEXT_CONFIG must be a bare text search configuration name")
        return value


settings = Settings()

if settings.DATABASE_URL.startswith("sqlite"):
    if settings.APP_ENV == "production":
        logger.warning("SQLite in production: ranked search falls back to substring matching")
