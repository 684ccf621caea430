"""Query/command dispatch - contracts, registry, dispatchers and wiring."""

from app.cqrs.core import Command, CommandHandler, Query, QueryHandler
from app.cqrs.registry import HandlerRegistry
from app.cqrs.service import CommandDispatcher, CQRSService, QueryDispatcher
from app.cqrs.wiring import build_cqrs_service

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandHandler",
    "CQRSService",
    "HandlerRegistry",
    "Query",
    "QueryDispatcher",
    "QueryHandler",
    "build_cqrs_service",
]
