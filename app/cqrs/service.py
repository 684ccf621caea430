"""Dispatchers and the service callers use to execute queries and commands."""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from app.cqrs.core import Command, CommandHandler, Query, QueryHandler, ResultT, request_tag
from app.errors import HandlerNotFoundError

logger = logging.getLogger(__name__)


class _Dispatcher:
    kind = "request"

    def __init__(self, handlers: Mapping[str, Any]) -> None:
        self._handlers = MappingProxyType(dict(handlers))

    @property
    def tags(self) -> list[str]:
        return list(self._handlers)

    async def _dispatch(self, request: Any) -> Any:
        tag = request_tag(request)
        handler = self._handlers.get(tag)
        if handler is None:
            raise HandlerNotFoundError(tag, self.kind)
        logger.debug("Dispatching %s %s to %s", self.kind, tag, type(handler).__name__)
        return await handler.execute(request)


class QueryDispatcher(_Dispatcher):
    """Routes each query to the handler registered for its ``query_type``."""

    kind = "query"

    def __init__(self, handlers: Mapping[str, QueryHandler]) -> None:
        super().__init__(handlers)

    async def dispatch(self, query: Query[ResultT]) -> ResultT:
        return await self._dispatch(query)


class CommandDispatcher(_Dispatcher):
    """Routes each command to the handler registered for its ``command_type``."""

    kind = "command"

    def __init__(self, handlers: Mapping[str, CommandHandler]) -> None:
        super().__init__(handlers)

    async def dispatch(self, command: Command[ResultT]) -> ResultT:
        return await self._dispatch(command)


class CQRSService:
    """Single entry point for executing queries and commands."""

    def __init__(
        self,
        queries: QueryDispatcher,
        commands: CommandDispatcher | None = None,
    ) -> None:
        self._queries = queries
        self._commands = commands or CommandDispatcher({})

    async def execute_query(self, query: Query[ResultT]) -> ResultT:
        return await self._queries.dispatch(query)

    async def execute_command(self, command: Command[ResultT]) -> ResultT:
        return await self._commands.dispatch(command)
