"""
Sketches module.

Handles a user's saved block-code sketches.
"""

from .interfaces import ISketchService
from .models import Sketch, CreateSketchRequest, UpdateSketchRequest
from .exceptions import SketchNotFoundError, SketchAlreadyExistsError

__all__ = [
    "ISketchService",
    "Sketch",
    "CreateSketchRequest",
    "UpdateSketchRequest",
    "SketchNotFoundError",
    "SketchAlreadyExistsError",
]
