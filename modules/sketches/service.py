"""
Sketch service implementation.
"""

import logging
import uuid

from .exceptions import SketchAlreadyExistsError, SketchNotFoundError
from .interfaces import ISketchService
from .models import CreateSketchRequest, Sketch, UpdateSketchRequest
from .repository import SketchRepository


logger = logging.getLogger(__name__)


def _is_valid_id(sketch_id: str) -> bool:
    try:
        uuid.UUID(sketch_id)
    except ValueError:
        return False
    return True


class SketchService(ISketchService):
    """Sketch CRUD on top of SketchRepository, scoped by username."""

    def __init__(self, repository: SketchRepository):
        self._repo = repository

    async def list_sketches(self, username: str) -> list[Sketch]:
        return self._repo.list_for_user(username)

    async def get_sketch(self, username: str, sketch_id: str) -> Sketch:
        # Malformed IDs would be rejected by the store as a bad request
        sketch = self._repo.get(username, sketch_id) if _is_valid_id(sketch_id) else None
        if sketch is None:
            raise SketchNotFoundError(sketch_id)
        return sketch

    async def create_sketch(self, username: str, request: CreateSketchRequest) -> Sketch:
        if self._repo.get_by_title(username, request.title) is not None:
            raise SketchAlreadyExistsError(username, request.title)
        sketch = self._repo.create(username, request.model_dump())
        logger.info("Sketch created: %s/%s", username, sketch.id)
        return sketch

    async def update_sketch(
        self,
        username: str,
        sketch_id: str,
        request: UpdateSketchRequest,
    ) -> Sketch:
        current = await self.get_sketch(username, sketch_id)
        changes = request.model_dump(exclude_none=True)
        if not changes:
            return current

        new_title = changes.get("title")
        if new_title and new_title != current.title:
            if self._repo.get_by_title(username, new_title) is not None:
                raise SketchAlreadyExistsError(username, new_title)

        updated = self._repo.update(username, sketch_id, changes)
        if updated is None:
            raise SketchNotFoundError(sketch_id)
        return updated

    async def delete_sketch(self, username: str, sketch_id: str) -> None:
        if not _is_valid_id(sketch_id) or not self._repo.delete(username, sketch_id):
            raise SketchNotFoundError(sketch_id)
        logger.info("Sketch deleted: %s/%s", username, sketch_id)
