"""
Sketch data models.

A sketch is a saved block-code program. Titles are unique per user.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Sketch(BaseModel):
    """A saved sketch."""

    id: str
    username: str = Field(..., description="Owner (token username)")
    title: str
    description: Optional[str] = None
    blocks: Optional[str] = Field(None, description="Serialized block workspace")
    tags: list[str] = Field(default_factory=list)


class CreateSketchRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    blocks: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class UpdateSketchRequest(BaseModel):
    """Partial update: only fields that are set are written."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    blocks: Optional[str] = None
    tags: Optional[list[str]] = None
