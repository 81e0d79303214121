"""Key-value entry model backing the local store"""

from datetime import datetime

from sqlalchemy import Column, DateTime, LargeBinary, String

from codepoet.db.database import Base


class KeyValueEntry(Base):
    """One opaque value addressed by a string key.

    Keys are namespaced by convention (``account:{id}``,
    ``poem:{account_id}:{poem_id}``, ``tombstone:...``, ``sync:...``).
    """

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self):
        return f"<KeyValueEntry(key='{self.key}', size={len(self.value or b'')})>"
