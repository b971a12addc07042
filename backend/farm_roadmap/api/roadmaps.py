"""
Farming roadmap API endpoints.

Static paths are declared before ``/{roadmap_id}`` so they are not captured
by the id route.
"""

from typing import NoReturn, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from farm_roadmap.api.deps import CurrentUser, RoadmapSvc
from farm_roadmap.core.exceptions import NotFoundError, RoadmapError, StateError, ValidationError
from farm_roadmap.models.milestone import MilestoneCreate, MilestoneProgressUpdate
from farm_roadmap.models.roadmap import (
    MilestoneDigest,
    MRLRecommendation,
    Roadmap,
    RoadmapGenerationRequest,
    RoadmapResponse,
    RoadmapSettingsUpdate,
    RoadmapStatistics,
)
from farm_roadmap.services.crop_catalog import supported_crops

router = APIRouter()


def _raise_http(exc: RoadmapError) -> NoReturn:
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    if isinstance(exc, StateError):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": exc.message, "current": exc.current, "target": exc.target},
        ) from exc
    if isinstance(exc, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": exc.message, "errors": exc.errors},
        ) from exc
    raise exc


def _respond(roadmap: Roadmap) -> RoadmapResponse:
    return RoadmapResponse.from_roadmap(roadmap)


@router.post("/generate", response_model=RoadmapResponse, status_code=status.HTTP_201_CREATED)
async def generate_roadmap(
    request: RoadmapGenerationRequest,
    user: CurrentUser,
    service: RoadmapSvc,
) -> RoadmapResponse:
    """Generate a roadmap from the crop catalog."""
    return _respond(await service.generate_roadmap(user.id, request))


@router.get("", response_model=list[RoadmapResponse])
async def list_roadmaps(user: CurrentUser, service: RoadmapSvc) -> list[RoadmapResponse]:
    """List the user's active roadmaps, newest first."""
    return [_respond(r) for r in await service.get_user_roadmaps(user.id)]


@router.get("/crops", response_model=list[str])
async def list_crops() -> list[str]:
    """Crops with a generation template."""
    return supported_crops()


@router.get("/statistics", response_model=RoadmapStatistics)
async def get_statistics(user: CurrentUser, service: RoadmapSvc) -> RoadmapStatistics:
    return await service.get_statistics(user.id)


@router.get("/milestones/upcoming", response_model=MilestoneDigest)
async def get_upcoming_milestones(
    user: CurrentUser,
    service: RoadmapSvc,
    days: Optional[int] = Query(None, ge=1, le=365, description="Look-ahead window in days"),
) -> MilestoneDigest:
    """Pending milestones due soon across the user's roadmaps."""
    return await service.get_upcoming_milestones(user.id, days)


@router.get("/milestones/overdue", response_model=MilestoneDigest)
async def get_overdue_milestones(user: CurrentUser, service: RoadmapSvc) -> MilestoneDigest:
    """Pending milestones past their scheduled date."""
    return await service.get_overdue_milestones(user.id)


@router.get("/recommendations/mrl", response_model=list[MRLRecommendation])
async def get_mrl_recommendations(
    service: RoadmapSvc,
    state: str = Query(..., min_length=1, max_length=50),
    district: Optional[str] = Query(None, max_length=50),
    crop_type: Optional[str] = Query(None, max_length=50),
) -> list[MRLRecommendation]:
    """MRL guidance used by recent roadmaps in a location. No auth required."""
    return await service.get_mrl_recommendations(state, district=district, crop_type=crop_type)


@router.get("/{roadmap_id}", response_model=RoadmapResponse)
async def get_roadmap(roadmap_id: UUID, user: CurrentUser, service: RoadmapSvc) -> RoadmapResponse:
    try:
        return _respond(await service.get_roadmap(user.id, roadmap_id))
    except RoadmapError as e:
        _raise_http(e)


@router.put("/{roadmap_id}/milestones/{milestone_id}/progress", response_model=RoadmapResponse)
async def update_milestone_progress(
    roadmap_id: UUID,
    milestone_id: UUID,
    update: MilestoneProgressUpdate,
    user: CurrentUser,
    service: RoadmapSvc,
) -> RoadmapResponse:
    """Report progress on a milestone. Disallowed status changes return 409."""
    try:
        roadmap = await service.update_milestone_progress(user.id, roadmap_id, milestone_id, update)
    except RoadmapError as e:
        _raise_http(e)
    return _respond(roadmap)


@router.post(
    "/{roadmap_id}/milestones",
    response_model=RoadmapResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_milestone(
    roadmap_id: UUID,
    milestone: MilestoneCreate,
    user: CurrentUser,
    service: RoadmapSvc,
) -> RoadmapResponse:
    """Add a custom milestone to a roadmap."""
    try:
        roadmap = await service.add_milestone(user.id, roadmap_id, milestone)
    except RoadmapError as e:
        _raise_http(e)
    return _respond(roadmap)


@router.delete("/{roadmap_id}/milestones/{milestone_id}", response_model=RoadmapResponse)
async def remove_milestone(
    roadmap_id: UUID,
    milestone_id: UUID,
    user: CurrentUser,
    service: RoadmapSvc,
) -> RoadmapResponse:
    try:
        roadmap = await service.remove_milestone(user.id, roadmap_id, milestone_id)
    except RoadmapError as e:
        _raise_http(e)
    return _respond(roadmap)


@router.put("/{roadmap_id}/settings", response_model=RoadmapResponse)
async def update_settings(
    roadmap_id: UUID,
    update: RoadmapSettingsUpdate,
    user: CurrentUser,
    service: RoadmapSvc,
) -> RoadmapResponse:
    """Toggle weather alerts or deactivate a roadmap."""
    try:
        roadmap = await service.update_settings(user.id, roadmap_id, update)
    except RoadmapError as e:
        _raise_http(e)
    return _respond(roadmap)


@router.delete("/{roadmap_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_roadmap(roadmap_id: UUID, user: CurrentUser, service: RoadmapSvc) -> Response:
    """Soft-delete a roadmap."""
    deleted = await service.delete_roadmap(user.id, roadmap_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Roadmap {roadmap_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
