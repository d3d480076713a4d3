from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal, Optional


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./customers.db"
    DATABASE_ECHO: bool = False

    # "sql" persists through DATABASE_URL, "memory" keeps customers in process
    CUSTOMER_STORE: Literal["sql", "memory"] = "sql"

    MESSAGE_LOCALE: str = "en"
    MESSAGES_DIR: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )


Config = Settings()
