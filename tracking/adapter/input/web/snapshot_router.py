import asyncio
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from tracking.adapter.input.web.dependencies import get_impact_query_usecase, get_snapshot_usecase
from tracking.adapter.input.web.request.snapshot_requests import TakeSnapshotRequest
from tracking.adapter.input.web.serializers import outcome_to_dict, snapshot_to_dict
from tracking.application.usecase.impact_query_usecase import ImpactQueryUseCase
from tracking.application.usecase.snapshot_usecase import SnapshotUseCase
from tracking.domain.snapshot_outcome import SnapshotStatus
from tracking.infrastructure.client.youtube_client import extract_video_id

snapshot_router = APIRouter(tags=["snapshots"])


@snapshot_router.post("")
async def take_snapshot(request: TakeSnapshotRequest, usecase: SnapshotUseCase = Depends(get_snapshot_usecase)):
    """
    Records today's snapshot of a single video.
    - 404 when the platform does not know the video, 502 when the fetch failed.
    """
    video_id = extract_video_id(request.video)
    if not video_id:
        raise HTTPException(status_code=400, detail="Could not find a video id in the given value")

    outcome = await asyncio.to_thread(usecase.take_snapshot_for_video, video_id, request.account_id)
    if outcome.status == SnapshotStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"Video {video_id} not found")
    if outcome.status == SnapshotStatus.FAILED:
        raise HTTPException(status_code=502, detail=outcome.error or "Snapshot failed")
    return JSONResponse(jsonable_encoder(outcome_to_dict(outcome)))


@snapshot_router.post("/run")
async def run_snapshots(usecase: SnapshotUseCase = Depends(get_snapshot_usecase)):
    """
    Manual trigger of the daily run over every tracked account.
    """
    summary = await asyncio.to_thread(usecase.take_snapshots_for_all_accounts)
    return JSONResponse(jsonable_encoder(summary.to_dict()))


@snapshot_router.get("")
async def list_tracked_videos(usecase: ImpactQueryUseCase = Depends(get_impact_query_usecase)):
    return {"video_ids": usecase.tracked_video_ids()}


@snapshot_router.get("/{video_id}")
async def get_snapshots(
    video_id: str,
    start: date | None = Query(default=None, description="First day to include (YYYY-MM-DD)"),
    end: date | None = Query(default=None, description="Last day to include (YYYY-MM-DD)"),
    usecase: ImpactQueryUseCase = Depends(get_impact_query_usecase),
):
    snapshots = usecase.get_video_snapshots_in_period(video_id, start=start, end=end)
    return JSONResponse(
        jsonable_encoder(
            {
                "video_id": video_id,
                "snapshot_count": len(snapshots),
                "snapshots": [snapshot_to_dict(s) for s in snapshots],
            }
        )
    )


@snapshot_router.delete("/{video_id}")
async def clear_snapshots(video_id: str, usecase: ImpactQueryUseCase = Depends(get_impact_query_usecase)):
    usecase.clear_video(video_id)
    return {"deleted": True}
