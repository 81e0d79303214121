"""
Environment configuration for Alembic migrations.
Resolves the database URL for the current environment.
"""

import os

from dotenv import load_dotenv

env = os.getenv("ENV", "local")
dotenv_file = f".env.{env}"

print(f"Alembic: Loading environment variables from {dotenv_file}")
load_dotenv(dotenv_file)


def get_database_url(environment: str = None) -> str:
    """
    Get the async database URL for the specified environment.

    DATABASE_URL wins when set. Otherwise a PostgreSQL URL is built from the
    DB_* variables, falling back to the embedded SQLite file.
    """
    if not environment:
        environment = os.getenv("ENV", "local")

    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    db_host = os.getenv("DB_HOST")
    if not db_host:
        return "sqlite+aiosqlite:///./codepoet.db"

    db_user = os.getenv("DB_USER")
    db_password = os.getenv("DB_PASSWORD")
    db_port = os.getenv("DB_PORT", "5432")
    db_name = os.getenv("DB_NAME", "codepoet")

    return f"postgresql+asyncpg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
