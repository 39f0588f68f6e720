# projectflow/api/time_off.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from projectflow.api.deps import ActorContext, get_actor_context, get_workflow, http_error
from projectflow.core.errors import ResourceError
from projectflow.models.time_off import TimeOffStatus
from projectflow.schemas.time_off import TimeOffCreate, TimeOffDecision, TimeOffRead
from projectflow.services.time_off_workflow import TimeOffWorkflow


router = APIRouter(prefix="/resources/timeoff", tags=["timeoff"])


@router.get("", response_model=list[TimeOffRead])
def list_requests(
    person_id: UUID | None = Query(None),
    status_: TimeOffStatus | None = Query(None, alias="status"),
    ctx: ActorContext = Depends(get_actor_context),
    workflow: TimeOffWorkflow = Depends(get_workflow),
):
    ctx.require("timeoff.read")
    try:
        return workflow.list_requests(person_id=person_id, status=status_)
    except ResourceError as e:
        raise http_error(e)


@router.get("/{request_id}", response_model=TimeOffRead)
def get_request(
    request_id: UUID,
    ctx: ActorContext = Depends(get_actor_context),
    workflow: TimeOffWorkflow = Depends(get_workflow),
):
    ctx.require("timeoff.read")
    try:
        return workflow.get_request(request_id)
    except ResourceError as e:
        raise http_error(e)


@router.post("", response_model=TimeOffRead, status_code=status.HTTP_201_CREATED)
def submit_request(
    req: TimeOffCreate,
    ctx: ActorContext = Depends(get_actor_context),
    workflow: TimeOffWorkflow = Depends(get_workflow),
):
    ctx.require("timeoff.submit")
    try:
        return workflow.submit_request(
            person_id=req.person_id,
            start_date=req.start_date,
            end_date=req.end_date,
            request_type=req.request_type,
            notes=req.notes,
        )
    except ResourceError as e:
        raise http_error(e)


@router.put("/{request_id}", response_model=TimeOffRead)
def decide_request(
    request_id: UUID,
    req: TimeOffDecision,
    ctx: ActorContext = Depends(get_actor_context),
    workflow: TimeOffWorkflow = Depends(get_workflow),
):
    ctx.require("timeoff.decide")
    try:
        return workflow.decide(request_id, req.status, approver_id=ctx.actor_user_id)
    except ResourceError as e:
        raise http_error(e)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_request(
    request_id: UUID,
    ctx: ActorContext = Depends(get_actor_context),
    workflow: TimeOffWorkflow = Depends(get_workflow),
):
    ctx.require("timeoff.delete")
    try:
        workflow.remove_request(request_id)
    except ResourceError as e:
        raise http_error(e)
    return None
