"""
Credential store backed by the Supabase ``users`` table.

Note: This repository does NOT perform authorization checks.
The service layer decides who may read or change a record.
"""

from typing import Any, Optional

from shared.exceptions import ConflictError
from shared.repository import BaseRepository

from .exceptions import EmailAlreadyExistsError, UsernameAlreadyExistsError
from .models import Identity


USERS_TABLE = "users"


class UserRepository(BaseRepository[Identity]):
    """
    Identity persistence.

    Implements ICredentialStore. Each method issues a single PostgREST
    request, which Postgres runs atomically over the affected row.
    """

    def find_by_email(self, email: str) -> Optional[Identity]:
        rows = self._execute(
            self._db.table(USERS_TABLE).select("*").eq("email", email).limit(1)
        )
        return self._map_to_identity(rows[0]) if rows else None

    def find_by_username(self, username: str) -> Optional[Identity]:
        rows = self._execute(
            self._db.table(USERS_TABLE).select("*").eq("username", username).limit(1)
        )
        return self._map_to_identity(rows[0]) if rows else None

    def find_by_username_and_refresh_token(
        self, username: str, refresh_token: str
    ) -> Optional[Identity]:
        rows = self._execute(
            self._db.table(USERS_TABLE)
            .select("*")
            .eq("username", username)
            .eq("refresh_token", refresh_token)
            .limit(1)
        )
        return self._map_to_identity(rows[0]) if rows else None

    def insert(self, identity: Identity) -> Identity:
        """
        Insert a new identity.

        The table's unique constraints on ``email`` and ``username`` back up
        the service-level existence checks when two signups race.
        """
        data = identity.model_dump(mode="json", exclude={"id"})
        try:
            rows = self._execute(self._db.table(USERS_TABLE).insert(data))
        except ConflictError as e:
            if "email" in e.details.get("constraint", ""):
                raise EmailAlreadyExistsError(identity.email) from e
            raise UsernameAlreadyExistsError(identity.username) from e
        return self._map_to_identity(rows[0]) if rows else identity

    def update_fields(self, match: dict[str, Any], fields: dict[str, Any]) -> int:
        query = self._db.table(USERS_TABLE).update(fields)
        for column, value in match.items():
            query = query.eq(column, value)
        return len(self._execute(query))

    def clear_field(self, match: dict[str, Any], field: str) -> int:
        return self.update_fields(match, {field: None})

    def set_if_absent(self, match: dict[str, Any], field: str, value: Any) -> bool:
        """
        Conditionally set a field that is currently NULL.

        The ``IS NULL`` filter is evaluated by Postgres inside the UPDATE,
        so of two concurrent callers only one sees its row returned.
        """
        query = self._db.table(USERS_TABLE).update({field: value})
        for column, match_value in match.items():
            query = query.eq(column, match_value)
        rows = self._execute(query.is_(field, "null"))
        return len(rows) > 0

    def _map_to_identity(self, data: dict[str, Any]) -> Identity:
        """Map database row to Identity model."""
        return Identity(
            id=str(data["id"]) if data.get("id") is not None else None,
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            refresh_token=data.get("refresh_token"),
            validated=data.get("validated", False),
            admin=data.get("admin", False),
            created_at=data["created_at"],
        )
