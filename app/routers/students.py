"""Student API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from app.cqrs.service import CQRSService
from app.cqrs.students import (
    AuthenticateStudentQuery,
    CreateStudentCommand,
    DeleteStudentCommand,
    GetAllStudentsQuery,
    GetStudentByIdQuery,
    GetStudentByUsernameQuery,
    UpdateStudentCommand,
)
from app.dependencies import get_cqrs
from app.errors import DuplicateKeyError, RecordValidationError
from app.models.student import NewStudent, Student, StudentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


class StudentOut(Student):
    """Student as returned over HTTP; the PIN is never sent back."""

    pin: str | None = Field(default=None, exclude=True)


class LoginRequest(BaseModel):
    username: str
    pin: str | None = None


@router.get("", response_model=list[StudentOut])
async def list_students(cqrs: CQRSService = Depends(get_cqrs)):
    """Return every student."""
    return await cqrs.execute_query(GetAllStudentsQuery())


@router.get("/by-username/{username}", response_model=StudentOut)
async def get_student_by_username(username: str, cqrs: CQRSService = Depends(get_cqrs)):
    student = await cqrs.execute_query(GetStudentByUsernameQuery(username))
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.get("/{student_id}", response_model=StudentOut)
async def get_student(student_id: str, cqrs: CQRSService = Depends(get_cqrs)):
    student = await cqrs.execute_query(GetStudentByIdQuery(student_id))
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.post("", response_model=StudentOut, status_code=201)
async def create_student(body: NewStudent, cqrs: CQRSService = Depends(get_cqrs)):
    """Register a new student."""
    try:
        return await cqrs.execute_command(CreateStudentCommand(body))
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RecordValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)


@router.patch("/{student_id}", response_model=StudentOut)
async def update_student(
    student_id: str,
    body: StudentUpdate,
    cqrs: CQRSService = Depends(get_cqrs),
):
    """Change some fields of a student."""
    try:
        student = await cqrs.execute_command(UpdateStudentCommand(student_id, body))
    except DuplicateKeyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RecordValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.delete("/{student_id}", status_code=204)
async def delete_student(student_id: str, cqrs: CQRSService = Depends(get_cqrs)):
    deleted = await cqrs.execute_command(DeleteStudentCommand(student_id))
    if not deleted:
        raise HTTPException(status_code=404, detail="Student not found")
    return Response(status_code=204)


@router.post("/login", response_model=StudentOut)
async def login(body: LoginRequest, cqrs: CQRSService = Depends(get_cqrs)):
    """Check a username and PIN."""
    student = await cqrs.execute_query(AuthenticateStudentQuery(body.username, body.pin))
    if student is None:
        logger.info("Failed login for %s", body.username)
        raise HTTPException(status_code=401, detail="Invalid username or PIN")
    return student
