"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating store failures into the
application's exception hierarchy.
"""

import logging
from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ConflictError, StoreError


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() wrapper mapping store errors to StoreError / ConflictError

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class SketchRepository(BaseRepository[Sketch]):
            def get(self, username: str, sketch_id: str) -> Optional[Sketch]:
                rows = self._execute(
                    self._db.table("sketches").select("*").eq("username", username).eq("id", sketch_id)
                )
                return self._map_to_sketch(rows[0]) if rows else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any) -> list[dict[str, Any]]:
        """
        Execute a query builder and return its rows.

        Raises:
            ConflictError: If the write violated a unique constraint
            StoreError: If the store rejected the query or was unreachable
        """
        try:
            result = query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError(
                    "Record already exists",
                    code="DUPLICATE_RECORD",
                    details={"constraint": e.message or ""},
                ) from e
            logger.error("Store query failed: %s (code=%s)", e.message, e.code)
            raise StoreError(details={"code": e.code}) from e
        except httpx.HTTPError as e:
            logger.error("Store unreachable: %s", e)
            raise StoreError() from e
        return result.data or []
