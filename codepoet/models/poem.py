"""Poem records: generated artifact plus the input it came from"""

import json
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    # Records exported by the mobile app carry naive local timestamps
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class PoemInput:
    """Submitted code plus the requested language and style."""

    code: str
    language: str
    style: str


@dataclass(frozen=True)
class GenerationRecord:
    """A completed poem.

    Only records whose output was produced are ever constructed; the input
    fields, ``output``, ``id`` and ``created_at`` never change afterwards.
    ``favorite`` is toggled through :meth:`with_favorite`, which stamps
    ``favorite_updated_at`` for sync conflict resolution.
    """

    code: str
    language: str
    style: str
    output: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utcnow)
    favorite: bool = False
    favorite_updated_at: datetime | None = None

    @classmethod
    def complete(cls, payload: PoemInput, output: str) -> "GenerationRecord":
        return cls(
            code=payload.code,
            language=payload.language,
            style=payload.style,
            output=output,
        )

    def with_favorite(self, favorite: bool, at: datetime | None = None) -> "GenerationRecord":
        return replace(self, favorite=favorite, favorite_updated_at=at or utcnow())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "language": self.language,
            "style": self.style,
            "output": self.output,
            "createdAt": self.created_at.isoformat(),
            "favorite": self.favorite,
            "favoriteUpdatedAt": (
                self.favorite_updated_at.isoformat() if self.favorite_updated_at else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationRecord":
        """Build a record from the persisted schema.

        Also reads the legacy ``poem``/``isFavorite`` keys used by exports
        from the mobile app.
        """
        output = data.get("output")
        if output is None:
            output = data["poem"]
        favorite = data.get("favorite")
        if favorite is None:
            favorite = data.get("isFavorite", False)
        return cls(
            id=data["id"],
            code=data["code"],
            language=data["language"],
            style=data["style"],
            output=output,
            created_at=_parse_datetime(data["createdAt"]),
            favorite=bool(favorite),
            favorite_updated_at=_parse_datetime(data.get("favoriteUpdatedAt")),
        )

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "GenerationRecord":
        return cls.from_dict(json.loads(raw))

    def __repr__(self):
        return f"<GenerationRecord(id='{self.id}', style='{self.style}', favorite={self.favorite})>"


@dataclass(frozen=True)
class Tombstone:
    """Marker left behind when an owner deletes a poem."""

    id: str
    deleted_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {"id": self.id, "deleted": True, "deletedAt": self.deleted_at.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "Tombstone":
        return cls(id=data["id"], deleted_at=_parse_datetime(data.get("deletedAt")) or utcnow())

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Tombstone":
        return cls.from_dict(json.loads(raw))
