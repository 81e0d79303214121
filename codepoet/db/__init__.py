from codepoet.db.database import (
    get_db,
    create_tables,
    async_engine,
    AsyncSessionLocal,
    Base,
)

__all__ = [
    "get_db",
    "create_tables",
    "async_engine",
    "AsyncSessionLocal",
    "Base",
]
