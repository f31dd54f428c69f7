"""
Sketches module interface.
"""

from typing import Protocol, runtime_checkable

from .models import CreateSketchRequest, Sketch, UpdateSketchRequest


@runtime_checkable
class ISketchService(Protocol):
    """
    Interface for sketch operations.

    Every method takes the authenticated username as the owner key.
    """

    async def list_sketches(self, username: str) -> list[Sketch]:
        ...

    async def get_sketch(self, username: str, sketch_id: str) -> Sketch:
        """
        Raises:
            SketchNotFoundError: If the user has no such sketch
        """
        ...

    async def create_sketch(self, username: str, request: CreateSketchRequest) -> Sketch:
        """
        Raises:
            SketchAlreadyExistsError: If the title is taken for this user
        """
        ...

    async def update_sketch(self, username: str, sketch_id: str, request: UpdateSketchRequest) -> Sketch:
        ...

    async def delete_sketch(self, username: str, sketch_id: str) -> None:
        ...
