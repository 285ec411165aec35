"""Video catalog routes."""

from dataclasses import replace

from fastapi import APIRouter, Depends, Response

from ...errors import NotFoundError
from ...models.user import Theme
from ...models.video import ExerciseType
from ...security import AuthSession
from ..deps import AppServices, get_admin_session, get_services
from ..schemas import VideoIn, VideoUpdate

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("")
async def list_videos(
    type: ExerciseType | None = None,
    theme: Theme | None = None,
    approved: bool = False,
    services: AppServices = Depends(get_services),
):
    """List catalog videos; all videos unless ``approved=true``."""
    videos = await services.videos.list_all(approved_only=approved, exercise_type=type, theme=theme)
    return [v.to_dict() for v in videos]


@router.get("/{video_id}")
async def get_video(video_id: int, services: AppServices = Depends(get_services)):
    video = await services.videos.get(video_id)
    if video is None:
        raise NotFoundError("Video not found")
    return video.to_dict()


@router.post("", status_code=201)
async def create_video(
    body: VideoIn,
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    video = body.to_video()
    video.id = await services.videos.create(video)
    return (await services.videos.get(video.id)).to_dict()


@router.patch("/{video_id}")
async def update_video(
    video_id: int,
    body: VideoUpdate,
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    """Edit or approve a video."""
    video = await services.videos.get(video_id)
    if video is None:
        raise NotFoundError("Video not found")

    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    video = replace(video, **updates)
    await services.videos.update(video)
    return video.to_dict()


@router.delete("/{video_id}", status_code=204)
async def delete_video(
    video_id: int,
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    if await services.videos.get(video_id) is None:
        raise NotFoundError("Video not found")
    await services.videos.delete(video_id)
    return Response(status_code=204)
