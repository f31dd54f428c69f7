"""
Sketch API endpoints.

All routes require a bearer token; sketches are always looked up under the
token's username.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_sketch_service
from api.middleware.auth import get_current_user
from shared.models import ApiResponse, AuthenticatedUser

from .interfaces import ISketchService
from .models import CreateSketchRequest, Sketch, UpdateSketchRequest

router = APIRouter()


@router.get("", response_model=list[Sketch])
async def list_sketches(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISketchService = Depends(get_sketch_service),
) -> list[Sketch]:
    return await service.list_sketches(user.username)


@router.post("", response_model=Sketch, status_code=201)
async def create_sketch(
    request: CreateSketchRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISketchService = Depends(get_sketch_service),
) -> Sketch:
    return await service.create_sketch(user.username, request)


@router.get("/{sketch_id}", response_model=Sketch)
async def get_sketch(
    sketch_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISketchService = Depends(get_sketch_service),
) -> Sketch:
    return await service.get_sketch(user.username, sketch_id)


@router.put("/{sketch_id}", response_model=Sketch)
async def update_sketch(
    sketch_id: str,
    request: UpdateSketchRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISketchService = Depends(get_sketch_service),
) -> Sketch:
    """Update only the fields present in the body."""
    return await service.update_sketch(user.username, sketch_id, request)


@router.delete("/{sketch_id}", response_model=ApiResponse)
async def delete_sketch(
    sketch_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISketchService = Depends(get_sketch_service),
) -> ApiResponse:
    await service.delete_sketch(user.username, sketch_id)
    return ApiResponse(message="Sketch deleted", message_code="SKETCH_DELETED")
