"""Data access for the `actor` table."""

from __future__ import annotations

from api_project.dao.base import Dao, DaoError, quote_literal
from api_project.dao.models import Actor
from api_project.database.client import GENERATED_KEY_COLUMN

_COLUMNS = "actor_id, first_name, last_name, last_update"


class ActorDao(Dao):
    def get_all(self) -> list[Actor]:
        rows = self._select(f"SELECT {_COLUMNS} FROM actor ORDER BY actor_id")
        return [Actor.from_row(row) for row in rows]

    def get_by_id(self, actor_id: int) -> Actor | None:
        rows = self._select(f"SELECT {_COLUMNS} FROM actor WHERE actor_id = {int(actor_id)}")
        return Actor.from_row(rows[0]) if rows else None

    def get_by_first_name(self, first_name: str) -> list[Actor]:
        rows = self._select(
            f"SELECT {_COLUMNS} FROM actor "
            f"WHERE first_name = {quote_literal(first_name)} ORDER BY actor_id"
        )
        return [Actor.from_row(row) for row in rows]

    def count(self) -> int:
        rows = self._select("SELECT COUNT(*) AS total FROM actor")
        return int(rows[0]["total"])

    def add(self, first_name: str, last_name: str) -> int:
        """Insert an actor and return its generated id.

        Databases without INSERT ... RETURNING (MySQL) report the id as a generated key row.
        """

        sql = (
            "INSERT INTO actor (first_name, last_name) "
            f"VALUES ({quote_literal(first_name)}, {quote_literal(last_name)})"
        )
        if self._db.supports_insert_returning:
            sql += " RETURNING actor_id"
        rows = self._update(sql, use_transaction=True)

        actor_id = rows[0].get("actor_id", rows[0].get(GENERATED_KEY_COLUMN)) if rows else None
        if actor_id is None:
            raise DaoError("The database did not report a generated actor id.")
        return int(actor_id)
