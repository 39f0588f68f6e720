# projectflow/api/availability.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from projectflow.api.deps import ActorContext, get_actor_context, get_schedule, http_error
from projectflow.core.errors import ResourceError
from projectflow.schemas.availability import AvailabilityCreate, AvailabilityRead, AvailabilityUpdate
from projectflow.services.availability_schedule import AvailabilitySchedule


router = APIRouter(prefix="/resources/availability", tags=["availability"])


@router.get("", response_model=list[AvailabilityRead])
def list_windows(
    person_id: UUID = Query(...),
    ctx: ActorContext = Depends(get_actor_context),
    schedule: AvailabilitySchedule = Depends(get_schedule),
):
    ctx.require("availability.read")
    try:
        return schedule.list_windows(person_id)
    except ResourceError as e:
        raise http_error(e)


@router.post("", response_model=AvailabilityRead, status_code=status.HTTP_201_CREATED)
def add_window(
    req: AvailabilityCreate,
    ctx: ActorContext = Depends(get_actor_context),
    schedule: AvailabilitySchedule = Depends(get_schedule),
):
    ctx.require("availability.write")
    try:
        return schedule.add_window(
            person_id=req.person_id,
            day_of_week=req.day_of_week,
            start_time=req.start_time,
            end_time=req.end_time,
        )
    except ResourceError as e:
        raise http_error(e)


@router.put("/{window_id}", response_model=AvailabilityRead)
def revise_window(
    window_id: UUID,
    req: AvailabilityUpdate,
    ctx: ActorContext = Depends(get_actor_context),
    schedule: AvailabilitySchedule = Depends(get_schedule),
):
    ctx.require("availability.write")
    try:
        return schedule.revise_window(
            window_id,
            day_of_week=req.day_of_week,
            start_time=req.start_time,
            end_time=req.end_time,
        )
    except ResourceError as e:
        raise http_error(e)


@router.delete("/{window_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_window(
    window_id: UUID,
    ctx: ActorContext = Depends(get_actor_context),
    schedule: AvailabilitySchedule = Depends(get_schedule),
):
    ctx.require("availability.write")
    try:
        schedule.remove_window(window_id)
    except ResourceError as e:
        raise http_error(e)
    return None
