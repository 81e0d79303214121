from codepoet.db.database import Base
from codepoet.models.kv_entry import KeyValueEntry
from codepoet.models.account import Account, Tier
from codepoet.models.poem import GenerationRecord, PoemInput, Tombstone

__all__ = [
    "Base",
    "KeyValueEntry",
    "Account",
    "Tier",
    "GenerationRecord",
    "PoemInput",
    "Tombstone",
]
