# projectflow/api/calendar.py

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from projectflow.api.deps import ActorContext, get_actor_context, get_calendar, http_error
from projectflow.core.errors import ResourceError
from projectflow.schemas.calendar import PersonCalendarRead
from projectflow.services.resource_calendar import ResourceCalendar


router = APIRouter(prefix="/resources/calendar", tags=["calendar"])


@router.get("", response_model=list[PersonCalendarRead])
def get_calendar_view(
    start: date = Query(...),
    end: date = Query(...),
    person_id: list[UUID] = Query(...),
    ctx: ActorContext = Depends(get_actor_context),
    calendar: ResourceCalendar = Depends(get_calendar),
):
    ctx.require("calendar.read")
    try:
        return calendar.build(start, end, person_id)
    except ResourceError as e:
        raise http_error(e)
