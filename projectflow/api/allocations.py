# projectflow/api/allocations.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from projectflow.api.deps import ActorContext, get_actor_context, get_ledger, http_error
from projectflow.core.errors import ResourceError
from projectflow.schemas.allocation import AllocationCreate, AllocationRead, AllocationUpdate
from projectflow.services.allocation_ledger import AllocationLedger


router = APIRouter(prefix="/resources/allocations", tags=["allocations"])


@router.get("", response_model=list[AllocationRead])
def list_allocations(
    person_id: UUID | None = Query(None),
    project_id: UUID | None = Query(None),
    task_id: UUID | None = Query(None),
    ctx: ActorContext = Depends(get_actor_context),
    ledger: AllocationLedger = Depends(get_ledger),
):
    ctx.require("allocation.read")
    try:
        return ledger.list_allocations(person_id=person_id, project_id=project_id, task_id=task_id)
    except ResourceError as e:
        raise http_error(e)


@router.get("/{allocation_id}", response_model=AllocationRead)
def get_allocation(
    allocation_id: UUID,
    ctx: ActorContext = Depends(get_actor_context),
    ledger: AllocationLedger = Depends(get_ledger),
):
    ctx.require("allocation.read")
    try:
        return ledger.get_allocation(allocation_id)
    except ResourceError as e:
        raise http_error(e)


@router.post("", response_model=AllocationRead, status_code=status.HTTP_201_CREATED)
def propose_allocation(
    req: AllocationCreate,
    ctx: ActorContext = Depends(get_actor_context),
    ledger: AllocationLedger = Depends(get_ledger),
):
    ctx.require("allocation.write")
    try:
        return ledger.propose_allocation(
            person_id=req.person_id,
            project_id=req.project_id,
            task_id=req.task_id,
            percentage=req.percentage,
            start_date=req.start_date,
            end_date=req.end_date,
        )
    except ResourceError as e:
        raise http_error(e)


@router.put("/{allocation_id}", response_model=AllocationRead)
def revise_allocation(
    allocation_id: UUID,
    req: AllocationUpdate,
    ctx: ActorContext = Depends(get_actor_context),
    ledger: AllocationLedger = Depends(get_ledger),
):
    ctx.require("allocation.write")
    try:
        return ledger.revise_allocation(
            allocation_id,
            percentage=req.percentage,
            start_date=req.start_date,
            end_date=req.end_date,
        )
    except ResourceError as e:
        raise http_error(e)


@router.delete("/{allocation_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_allocation(
    allocation_id: UUID,
    ctx: ActorContext = Depends(get_actor_context),
    ledger: AllocationLedger = Depends(get_ledger),
):
    ctx.require("allocation.write")
    try:
        ledger.remove_allocation(allocation_id)
    except ResourceError as e:
        raise http_error(e)
    return None
