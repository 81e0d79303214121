"""Local persistence module"""

from codepoet.services.storage.kv_store import KeyValueStore, SqlKeyValueStore
from codepoet.services.storage.poem_store import PoemStatistics, PoemStore

__all__ = ["KeyValueStore", "SqlKeyValueStore", "PoemStatistics", "PoemStore"]
