"""Plain records built from generic rows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from api_project.database.values import Row


def _as_datetime(value: object) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    # SQLite hands timestamps back as text.
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class Actor:
    actor_id: int
    first_name: str
    last_name: str
    last_update: datetime | None = None

    @classmethod
    def from_row(cls, row: Row) -> Actor:
        return cls(
            actor_id=int(row["actor_id"]),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            last_update=_as_datetime(row.get("last_update")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "actor_id": self.actor_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "last_update": self.last_update.isoformat() if self.last_update else None,
        }
