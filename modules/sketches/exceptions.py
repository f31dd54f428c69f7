"""
Sketches module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class SketchNotFoundError(NotFoundError):
    """Raised when the caller has no sketch with that ID."""

    def __init__(self, sketch_id: str):
        super().__init__(
            "Sketch not found.",
            code="SKETCH_NOT_FOUND",
            details={"sketch_id": sketch_id},
        )


class SketchAlreadyExistsError(ConflictError):
    """Raised when the caller already has a sketch with that title."""

    def __init__(self, username: str, title: str):
        super().__init__(
            f"Sketch title already exists for that username: {username} - {title}",
            code="SKETCH_EXISTS",
            details={"title": title},
        )
