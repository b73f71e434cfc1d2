"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter

from layoutcore.models import DoorPlacement, Point2D, WallProjection
from layoutcore.services.layout_service import LayoutService
from layoutcore.api.schemas import (
    MergeRequest, MergeResponse, PositionRequest, ProjectRequest,
    RefreshDoorsRequest, RuleInfo, ShapesRequest, SharedWallsResponse, WallsResponse,
)

router = APIRouter()

# Shared service instance
_service = LayoutService()


@router.post("/walls", response_model=WallsResponse)
async def extract_walls(request: ShapesRequest) -> WallsResponse:
    """Boundary segments of every shape."""
    walls = _service.extract_walls(request.shapes)
    return WallsResponse(walls=walls, shape_count=len(request.shapes))


@router.post("/shared-walls", response_model=SharedWallsResponse)
async def detect_shared_walls(request: ShapesRequest) -> SharedWallsResponse:
    """Walls shared by pairs of shapes."""
    walls = LayoutService(params=request.params).detect_shared_walls(request.shapes)
    return SharedWallsResponse(shared_walls=walls, shape_count=len(request.shapes))


@router.post("/doors/project", response_model=WallProjection)
async def project_point(request: ProjectRequest) -> WallProjection:
    return _service.project_point_onto_wall(request.wall, request.point)


@router.post("/doors/position", response_model=Point2D)
async def position_from_normalized(request: PositionRequest) -> Point2D:
    return _service.position_from_normalized(request.wall, request.normalized_position)


@router.post("/doors/refresh", response_model=list[DoorPlacement])
async def refresh_doors(request: RefreshDoorsRequest) -> list[DoorPlacement]:
    """Re-anchor doors on the walls of the updated shapes."""
    return LayoutService(params=request.params).refresh_doors(request.doors, request.shapes)


@router.post("/merge", response_model=MergeResponse)
async def merge(request: MergeRequest) -> MergeResponse:
    """Outline of a group of axis-aligned rectangles."""
    polygon = _service.merge_rectangles(request.rectangles)
    return MergeResponse(polygon=polygon, vertex_count=len(polygon))


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules() -> list[RuleInfo]:
    """List the connection rules applied by the gateway."""
    return [RuleInfo(**r) for r in _service.list_rules()]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
