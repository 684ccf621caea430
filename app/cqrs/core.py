"""Request and handler contracts for the query/command dispatch layer.

Queries are read requests, commands are writes. Both are frozen
dataclasses whose class carries a string tag (``query_type`` or
``command_type``) used to pick the one handler bound to them.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

ResultT = TypeVar("ResultT")
QueryT = TypeVar("QueryT", bound="Query")
CommandT = TypeVar("CommandT", bound="Command")


class Query(Generic[ResultT]):
    """Base for read requests. Subclasses set ``query_type``."""

    query_type: ClassVar[str]


class Command(Generic[ResultT]):
    """Base for write requests. Subclasses set ``command_type``."""

    command_type: ClassVar[str]


class QueryHandler(ABC, Generic[QueryT, ResultT]):
    """Executes exactly one kind of query."""

    handles: ClassVar[type[Query]]

    @abstractmethod
    async def execute(self, query: QueryT) -> ResultT:
        """Run the query and return its result."""


class CommandHandler(ABC, Generic[CommandT, ResultT]):
    """Executes exactly one kind of command."""

    handles: ClassVar[type[Command]]

    @abstractmethod
    async def execute(self, command: CommandT) -> ResultT:
        """Run the command and return its result."""


def request_tag(request: Query | Command | type) -> str:
    """Return the discriminant tag of a request instance or class."""
    tag = getattr(request, "query_type", None) or getattr(request, "command_type", None)
    if not tag:
        raise TypeError(f"{request!r} has no query_type or command_type")
    return tag
