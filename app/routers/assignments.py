"""Assignment API routes."""

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from app.cqrs.assignments import (
    CreateAssignmentCommand,
    DeleteAssignmentCommand,
    GetAllAssignmentsQuery,
    GetAssignmentByIdQuery,
    GetAssignmentsByCreatorQuery,
    GetAssignmentsByStatusQuery,
    UpdateAssignmentCommand,
    UpdateAssignmentStatusCommand,
)
from app.cqrs.service import CQRSService
from app.dependencies import get_cqrs
from app.errors import RecordValidationError
from app.models.assignment import (
    Assignment,
    AssignmentStatus,
    AssignmentUpdate,
    NewAssignment,
)

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


class StatusUpdateRequest(BaseModel):
    status: AssignmentStatus


@router.get("", response_model=list[Assignment])
async def list_assignments(
    status: AssignmentStatus | None = None,
    created_by: str | None = None,
    cqrs: CQRSService = Depends(get_cqrs),
):
    """List assignments, optionally narrowed by status and/or creator."""
    if created_by is not None:
        assignments = await cqrs.execute_query(GetAssignmentsByCreatorQuery(created_by))
        if status is not None:
            assignments = [a for a in assignments if a.status == status]
        return assignments
    if status is not None:
        return await cqrs.execute_query(GetAssignmentsByStatusQuery(status))
    return await cqrs.execute_query(GetAllAssignmentsQuery())


@router.get("/{assignment_id}", response_model=Assignment)
async def get_assignment(assignment_id: str, cqrs: CQRSService = Depends(get_cqrs)):
    assignment = await cqrs.execute_query(GetAssignmentByIdQuery(assignment_id))
    if assignment is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return assignment


@router.post("", response_model=Assignment, status_code=201)
async def create_assignment(body: NewAssignment, cqrs: CQRSService = Depends(get_cqrs)):
    try:
        return await cqrs.execute_command(CreateAssignmentCommand(body))
    except RecordValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)


@router.patch("/{assignment_id}", response_model=Assignment)
async def update_assignment(
    assignment_id: str,
    body: AssignmentUpdate,
    cqrs: CQRSService = Depends(get_cqrs),
):
    try:
        assignment = await cqrs.execute_command(UpdateAssignmentCommand(assignment_id, body))
    except RecordValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return assignment


@router.put("/{assignment_id}/status", response_model=Assignment)
async def set_assignment_status(
    assignment_id: str,
    body: StatusUpdateRequest,
    cqrs: CQRSService = Depends(get_cqrs),
):
    assignment = await cqrs.execute_command(
        UpdateAssignmentStatusCommand(assignment_id, body.status)
    )
    if assignment is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return assignment


@router.delete("/{assignment_id}", status_code=204)
async def delete_assignment(assignment_id: str, cqrs: CQRSService = Depends(get_cqrs)):
    deleted = await cqrs.execute_command(DeleteAssignmentCommand(assignment_id))
    if not deleted:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return Response(status_code=204)
