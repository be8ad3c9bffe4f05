"""Work timer endpoints"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.dependencies import get_tracker_controller
from app.middleware.auth import get_current_user_id
from app.models.time_entry import TimeEntryCreate
from app.services.time_tracker import (
    CommitFailedError,
    CommitInProgressError,
    DiscardNotConfirmedError,
    TimeTrackerController,
    TrackerSnapshot,
    TrackerValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tracker",
    tags=["tracker"],
    dependencies=[Depends(get_current_user_id)],
)


class DescriptionRequest(BaseModel):
    description: str


class DiscardRequest(BaseModel):
    confirm: bool = False


class CommitResponse(BaseModel):
    entry: TimeEntryCreate
    tracker: TrackerSnapshot


@router.get("", response_model=TrackerSnapshot)
async def get_tracker(controller: TimeTrackerController = Depends(get_tracker_controller)):
    """Current timer state, with elapsed time computed from the wall clock"""
    return controller.snapshot()


@router.post("/start", response_model=TrackerSnapshot)
async def start_tracker(controller: TimeTrackerController = Depends(get_tracker_controller)):
    try:
        return controller.start()
    except CommitInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/pause", response_model=TrackerSnapshot)
async def pause_tracker(controller: TimeTrackerController = Depends(get_tracker_controller)):
    return controller.pause()


@router.put("/description", response_model=TrackerSnapshot)
async def set_description(
    request: DescriptionRequest,
    controller: TimeTrackerController = Depends(get_tracker_controller),
):
    try:
        return controller.set_description(request.description)
    except CommitInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/discard", response_model=TrackerSnapshot)
async def discard_tracker(
    request: DiscardRequest,
    controller: TimeTrackerController = Depends(get_tracker_controller),
):
    """Throw away the tracked time. Requires {"confirm": true}."""
    try:
        return controller.discard(confirm=request.confirm)
    except (DiscardNotConfirmedError, CommitInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/commit", response_model=CommitResponse)
async def commit_tracker(controller: TimeTrackerController = Depends(get_tracker_controller)):
    """
    Log the tracked time as a billable time entry for today.

    Raises:
        400: Blank description or less than one minute tracked
        409: Another commit is still running
        502: The entry could not be stored; the timer keeps its time
    """
    try:
        entry = await controller.commit()
    except TrackerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CommitInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CommitFailedError as e:
        raise HTTPException(status_code=502, detail=f"Failed to save time entry: {str(e)}")

    return {"entry": entry, "tracker": controller.snapshot()}
