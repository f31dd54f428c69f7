"""
Sketch repository for database access.

Encapsulates all Supabase queries and data mapping for the ``sketches``
table. Every query is filtered by the owner's username.
"""

from typing import Any, Optional

from shared.exceptions import ConflictError
from shared.repository import BaseRepository

from .exceptions import SketchAlreadyExistsError
from .models import Sketch


SKETCHES_TABLE = "sketches"


class SketchRepository(BaseRepository[Sketch]):
    """Repository for sketch data access."""

    def list_for_user(self, username: str) -> list[Sketch]:
        rows = self._execute(
            self._db.table(SKETCHES_TABLE).select("*").eq("username", username).order("title")
        )
        return [self._map_to_sketch(r) for r in rows]

    def get(self, username: str, sketch_id: str) -> Optional[Sketch]:
        rows = self._execute(
            self._db.table(SKETCHES_TABLE)
            .select("*")
            .eq("username", username)
            .eq("id", sketch_id)
            .limit(1)
        )
        return self._map_to_sketch(rows[0]) if rows else None

    def get_by_title(self, username: str, title: str) -> Optional[Sketch]:
        rows = self._execute(
            self._db.table(SKETCHES_TABLE)
            .select("*")
            .eq("username", username)
            .eq("title", title)
            .limit(1)
        )
        return self._map_to_sketch(rows[0]) if rows else None

    def create(self, username: str, data: dict[str, Any]) -> Sketch:
        """
        Raises:
            SketchAlreadyExistsError: If the user already has a sketch with that title
        """
        try:
            rows = self._execute(
                self._db.table(SKETCHES_TABLE).insert({**data, "username": username})
            )
        except ConflictError as e:
            raise SketchAlreadyExistsError(username, data.get("title", "")) from e
        return self._map_to_sketch(rows[0])

    def update(self, username: str, sketch_id: str, data: dict[str, Any]) -> Optional[Sketch]:
        """Apply a partial update. Returns None if the sketch is missing."""
        try:
            rows = self._execute(
                self._db.table(SKETCHES_TABLE)
                .update(data)
                .eq("username", username)
                .eq("id", sketch_id)
            )
        except ConflictError as e:
            raise SketchAlreadyExistsError(username, data.get("title", "")) from e
        return self._map_to_sketch(rows[0]) if rows else None

    def delete(self, username: str, sketch_id: str) -> bool:
        rows = self._execute(
            self._db.table(SKETCHES_TABLE).delete().eq("username", username).eq("id", sketch_id)
        )
        return len(rows) > 0

    def _map_to_sketch(self, data: dict[str, Any]) -> Sketch:
        """Map database row to Sketch model."""
        return Sketch(
            id=str(data["id"]),
            username=data["username"],
            title=data["title"],
            description=data.get("description"),
            blocks=data.get("blocks"),
            tags=data.get("tags") or [],
        )
