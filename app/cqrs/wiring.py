"""Builds the dispatch service from concrete repositories."""

import logging

from app.cqrs.assignments import (
    ASSIGNMENT_COMMAND_HANDLERS,
    ASSIGNMENT_COMMANDS,
    ASSIGNMENT_QUERIES,
    ASSIGNMENT_QUERY_HANDLERS,
)
from app.cqrs.questions import (
    QUESTION_COMMAND_HANDLERS,
    QUESTION_COMMANDS,
    QUESTION_QUERIES,
    QUESTION_QUERY_HANDLERS,
)
from app.cqrs.registry import HandlerRegistry
from app.cqrs.service import CommandDispatcher, CQRSService, QueryDispatcher
from app.cqrs.students import (
    STUDENT_COMMAND_HANDLERS,
    STUDENT_COMMANDS,
    STUDENT_QUERIES,
    STUDENT_QUERY_HANDLERS,
)
from app.errors import HandlerNotFoundError
from app.repositories.base import AssignmentRepository, QuestionRepository, StudentRepository

logger = logging.getLogger(__name__)

KNOWN_QUERIES = STUDENT_QUERIES + ASSIGNMENT_QUERIES + QUESTION_QUERIES
KNOWN_COMMANDS = STUDENT_COMMANDS + ASSIGNMENT_COMMANDS + QUESTION_COMMANDS


def _require_complete(registry: HandlerRegistry, known: tuple) -> None:
    missing = registry.missing(known)
    if missing:
        raise HandlerNotFoundError(", ".join(missing), registry.kind)


def build_cqrs_service(
    students: StudentRepository,
    assignments: AssignmentRepository,
    questions: QuestionRepository,
) -> CQRSService:
    """Register every handler, check nothing is missing, and freeze the result."""
    queries: HandlerRegistry = HandlerRegistry("query")
    commands: HandlerRegistry = HandlerRegistry("command")

    for handler_cls in STUDENT_QUERY_HANDLERS:
        queries.register(handler_cls.handles, handler_cls(students))
    for handler_cls in ASSIGNMENT_QUERY_HANDLERS:
        queries.register(handler_cls.handles, handler_cls(assignments))
    for handler_cls in QUESTION_QUERY_HANDLERS:
        queries.register(handler_cls.handles, handler_cls(questions))
    for handler_cls in STUDENT_COMMAND_HANDLERS:
        commands.register(handler_cls.handles, handler_cls(students))
    for handler_cls in ASSIGNMENT_COMMAND_HANDLERS:
        commands.register(handler_cls.handles, handler_cls(assignments))
    for handler_cls in QUESTION_COMMAND_HANDLERS:
        commands.register(handler_cls.handles, handler_cls(questions))

    _require_complete(queries, KNOWN_QUERIES)
    _require_complete(commands, KNOWN_COMMANDS)
    logger.info("Registered %d query and %d command handlers", len(queries), len(commands))

    return CQRSService(
        QueryDispatcher(queries.freeze()),
        CommandDispatcher(commands.freeze()),
    )
