from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from tracking.adapter.input.web.dependencies import (
    get_export_usecase,
    get_impact_query_usecase,
    get_playlist_view_usecase,
)
from tracking.adapter.input.web.serializers import estimate_to_dict, report_to_dict
from tracking.application.usecase.export_usecase import ExportUseCase, InsufficientSnapshotsError
from tracking.application.usecase.impact_query_usecase import ImpactQueryUseCase
from tracking.application.usecase.playlist_view_usecase import PlaylistViewUseCase

impact_router = APIRouter(tags=["impact"])


@impact_router.get("/{video_id}")
async def get_playlist_impact(video_id: str, usecase: ImpactQueryUseCase = Depends(get_impact_query_usecase)):
    """
    Estimated share of the video's view growth per playlist.
    Fewer than 2 snapshots is not an error: status is "insufficient_data" with no impacts.
    """
    report = usecase.get_impact_report(video_id)
    return JSONResponse(jsonable_encoder(report_to_dict(report)))


@impact_router.get("/{video_id}/export")
async def export_playlist_impact(
    video_id: str,
    format: str = Query(default="json", pattern="^(csv|json)$"),
    usecase: ExportUseCase = Depends(get_export_usecase),
):
    try:
        document = usecase.export_impact(video_id, format)
    except InsufficientSnapshotsError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@impact_router.get("/{video_id}/playlist-views")
async def get_playlist_views(video_id: str, usecase: PlaylistViewUseCase = Depends(get_playlist_view_usecase)):
    estimates = usecase.estimate_playlist_views(video_id)
    return JSONResponse(
        jsonable_encoder({"video_id": video_id, "items": [estimate_to_dict(e) for e in estimates]})
    )


@impact_router.post("/{video_id}/playlists/{playlist_id}/views")
async def register_playlist_view(
    video_id: str,
    playlist_id: str,
    usecase: PlaylistViewUseCase = Depends(get_playlist_view_usecase),
):
    views = usecase.register_view(video_id, playlist_id)
    return {"video_id": video_id, "playlist_id": playlist_id, "views": views}
