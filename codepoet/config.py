from pydantic_settings import BaseSettings

from codepoet.utils.constants import (
    DEFAULT_GENERATION_TIMEOUT_SECONDS,
    FREE_POEMS_PER_DAY,
    GUEST_POEMS_LIFETIME,
    MAX_CODE_LENGTH,
)


class Settings(BaseSettings):
    # Database (embedded SQLite by default, PostgreSQL via asyncpg when set)
    database_url: str = "sqlite+aiosqlite:///./codepoet.db"
    db_echo: bool = False

    # Quotas
    free_daily_limit: int = FREE_POEMS_PER_DAY
    guest_lifetime_limit: int = GUEST_POEMS_LIFETIME
    max_code_length: int = MAX_CODE_LENGTH

    # Generation
    generation_timeout_seconds: float = DEFAULT_GENERATION_TIMEOUT_SECONDS

    # Connectivity probe used before cloud sync
    connectivity_check_url: str = "https://firestore.googleapis.com"
    connectivity_timeout_seconds: float = 3.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
