"""Assignment queries, commands and their handlers."""

from dataclasses import dataclass
from typing import ClassVar

from app.cqrs.core import Command, CommandHandler, Query, QueryHandler
from app.models.assignment import (
    Assignment,
    AssignmentStatus,
    AssignmentUpdate,
    NewAssignment,
)
from app.repositories.base import AssignmentRepository


@dataclass(frozen=True)
class GetAssignmentByIdQuery(Query[Assignment | None]):
    query_type: ClassVar[str] = "GetAssignmentById"

    assignment_id: str


@dataclass(frozen=True)
class GetAllAssignmentsQuery(Query[list[Assignment]]):
    query_type: ClassVar[str] = "GetAllAssignments"


@dataclass(frozen=True)
class GetAssignmentsByCreatorQuery(Query[list[Assignment]]):
    query_type: ClassVar[str] = "GetAssignmentsByCreator"

    creator_id: str


@dataclass(frozen=True)
class GetAssignmentsByStatusQuery(Query[list[Assignment]]):
    query_type: ClassVar[str] = "GetAssignmentsByStatus"

    status: AssignmentStatus


@dataclass(frozen=True)
class CreateAssignmentCommand(Command[Assignment]):
    command_type: ClassVar[str] = "CreateAssignment"

    data: NewAssignment


@dataclass(frozen=True)
class UpdateAssignmentCommand(Command[Assignment | None]):
    command_type: ClassVar[str] = "UpdateAssignment"

    assignment_id: str
    changes: AssignmentUpdate


@dataclass(frozen=True)
class UpdateAssignmentStatusCommand(Command[Assignment | None]):
    command_type: ClassVar[str] = "UpdateAssignmentStatus"

    assignment_id: str
    status: AssignmentStatus


@dataclass(frozen=True)
class DeleteAssignmentCommand(Command[bool]):
    command_type: ClassVar[str] = "DeleteAssignment"

    assignment_id: str


ASSIGNMENT_QUERIES = (
    GetAssignmentByIdQuery,
    GetAllAssignmentsQuery,
    GetAssignmentsByCreatorQuery,
    GetAssignmentsByStatusQuery,
)
ASSIGNMENT_COMMANDS = (
    CreateAssignmentCommand,
    UpdateAssignmentCommand,
    UpdateAssignmentStatusCommand,
    DeleteAssignmentCommand,
)


class _AssignmentHandler:
    def __init__(self, assignments: AssignmentRepository) -> None:
        self._assignments = assignments


class GetAssignmentByIdHandler(
    _AssignmentHandler, QueryHandler[GetAssignmentByIdQuery, Assignment | None]
):
    handles = GetAssignmentByIdQuery

    async def execute(self, query: GetAssignmentByIdQuery) -> Assignment | None:
        return await self._assignments.find_by_id(query.assignment_id)


class GetAllAssignmentsHandler(
    _AssignmentHandler, QueryHandler[GetAllAssignmentsQuery, list[Assignment]]
):
    handles = GetAllAssignmentsQuery

    async def execute(self, query: GetAllAssignmentsQuery) -> list[Assignment]:
        return await self._assignments.find_all()


class GetAssignmentsByCreatorHandler(
    _AssignmentHandler, QueryHandler[GetAssignmentsByCreatorQuery, list[Assignment]]
):
    handles = GetAssignmentsByCreatorQuery

    async def execute(self, query: GetAssignmentsByCreatorQuery) -> list[Assignment]:
        return await self._assignments.find_by_creator(query.creator_id)


class GetAssignmentsByStatusHandler(
    _AssignmentHandler, QueryHandler[GetAssignmentsByStatusQuery, list[Assignment]]
):
    handles = GetAssignmentsByStatusQuery

    async def execute(self, query: GetAssignmentsByStatusQuery) -> list[Assignment]:
        return await self._assignments.find_by_status(query.status)


class CreateAssignmentHandler(
    _AssignmentHandler, CommandHandler[CreateAssignmentCommand, Assignment]
):
    handles = CreateAssignmentCommand

    async def execute(self, command: CreateAssignmentCommand) -> Assignment:
        return await self._assignments.create(command.data)


class UpdateAssignmentHandler(
    _AssignmentHandler, CommandHandler[UpdateAssignmentCommand, Assignment | None]
):
    handles = UpdateAssignmentCommand

    async def execute(self, command: UpdateAssignmentCommand) -> Assignment | None:
        return await self._assignments.update(command.assignment_id, command.changes)


class UpdateAssignmentStatusHandler(
    _AssignmentHandler, CommandHandler[UpdateAssignmentStatusCommand, Assignment | None]
):
    handles = UpdateAssignmentStatusCommand

    async def execute(self, command: UpdateAssignmentStatusCommand) -> Assignment | None:
        return await self._assignments.update_status(command.assignment_id, command.status)


class DeleteAssignmentHandler(
    _AssignmentHandler, CommandHandler[DeleteAssignmentCommand, bool]
):
    handles = DeleteAssignmentCommand

    async def execute(self, command: DeleteAssignmentCommand) -> bool:
        return await self._assignments.delete(command.assignment_id)


ASSIGNMENT_QUERY_HANDLERS = (
    GetAssignmentByIdHandler,
    GetAllAssignmentsHandler,
    GetAssignmentsByCreatorHandler,
    GetAssignmentsByStatusHandler,
)
ASSIGNMENT_COMMAND_HANDLERS = (
    CreateAssignmentHandler,
    UpdateAssignmentHandler,
    UpdateAssignmentStatusHandler,
    DeleteAssignmentHandler,
)
