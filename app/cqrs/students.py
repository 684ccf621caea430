"""Student queries, commands and their handlers."""

from dataclasses import dataclass
from typing import ClassVar

from app.cqrs.core import Command, CommandHandler, Query, QueryHandler
from app.models.student import NewStudent, Student, StudentUpdate
from app.repositories.base import StudentRepository

# ─── Queries ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GetStudentByIdQuery(Query[Student | None]):
    query_type: ClassVar[str] = "GetStudentById"

    student_id: str


@dataclass(frozen=True)
class GetStudentByUsernameQuery(Query[Student | None]):
    query_type: ClassVar[str] = "GetStudentByUsername"

    username: str


@dataclass(frozen=True)
class GetAllStudentsQuery(Query[list[Student]]):
    query_type: ClassVar[str] = "GetAllStudents"


@dataclass(frozen=True)
class AuthenticateStudentQuery(Query[Student | None]):
    query_type: ClassVar[str] = "AuthenticateStudent"

    username: str
    pin: str | None = None


# ─── Commands ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateStudentCommand(Command[Student]):
    command_type: ClassVar[str] = "CreateStudent"

    data: NewStudent


@dataclass(frozen=True)
class UpdateStudentCommand(Command[Student | None]):
    command_type: ClassVar[str] = "UpdateStudent"

    student_id: str
    changes: StudentUpdate


@dataclass(frozen=True)
class DeleteStudentCommand(Command[bool]):
    command_type: ClassVar[str] = "DeleteStudent"

    student_id: str


STUDENT_QUERIES = (
    GetStudentByIdQuery,
    GetStudentByUsernameQuery,
    GetAllStudentsQuery,
    AuthenticateStudentQuery,
)
STUDENT_COMMANDS = (CreateStudentCommand, UpdateStudentCommand, DeleteStudentCommand)


# ─── Handlers ─────────────────────────────────────────────────────────


class _StudentHandler:
    def __init__(self, students: StudentRepository) -> None:
        self._students = students


class GetStudentByIdHandler(_StudentHandler, QueryHandler[GetStudentByIdQuery, Student | None]):
    handles = GetStudentByIdQuery

    async def execute(self, query: GetStudentByIdQuery) -> Student | None:
        return await self._students.find_by_id(query.student_id)


class GetStudentByUsernameHandler(
    _StudentHandler, QueryHandler[GetStudentByUsernameQuery, Student | None]
):
    handles = GetStudentByUsernameQuery

    async def execute(self, query: GetStudentByUsernameQuery) -> Student | None:
        return await self._students.find_by_username(query.username)


class GetAllStudentsHandler(_StudentHandler, QueryHandler[GetAllStudentsQuery, list[Student]]):
    handles = GetAllStudentsQuery

    async def execute(self, query: GetAllStudentsQuery) -> list[Student]:
        return await self._students.find_all()


class AuthenticateStudentHandler(
    _StudentHandler, QueryHandler[AuthenticateStudentQuery, Student | None]
):
    handles = AuthenticateStudentQuery

    async def execute(self, query: AuthenticateStudentQuery) -> Student | None:
        return await self._students.authenticate(query.username, query.pin)


class CreateStudentHandler(_StudentHandler, CommandHandler[CreateStudentCommand, Student]):
    handles = CreateStudentCommand

    async def execute(self, command: CreateStudentCommand) -> Student:
        return await self._students.create(command.data)


class UpdateStudentHandler(_StudentHandler, CommandHandler[UpdateStudentCommand, Student | None]):
    handles = UpdateStudentCommand

    async def execute(self, command: UpdateStudentCommand) -> Student | None:
        return await self._students.update(command.student_id, command.changes)


class DeleteStudentHandler(_StudentHandler, CommandHandler[DeleteStudentCommand, bool]):
    handles = DeleteStudentCommand

    async def execute(self, command: DeleteStudentCommand) -> bool:
        return await self._students.delete(command.student_id)


STUDENT_QUERY_HANDLERS = (
    GetStudentByIdHandler,
    GetStudentByUsernameHandler,
    GetAllStudentsHandler,
    AuthenticateStudentHandler,
)
STUDENT_COMMAND_HANDLERS = (CreateStudentHandler, UpdateStudentHandler, DeleteStudentHandler)
