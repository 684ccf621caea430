"""Handler registry: tag -> handler, populated once at startup then frozen."""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

from app.cqrs.core import request_tag
from app.errors import RegistryFrozenError

logger = logging.getLogger(__name__)

HandlerT = TypeVar("HandlerT")


class HandlerRegistry(Generic[HandlerT]):
    """Collects handlers by request tag.

    Requests may be given as a tag string, a request class or an instance.
    Registering a tag twice replaces the earlier handler. Once frozen the
    registry rejects further registration and ``freeze()`` hands out a
    read-only snapshot for a dispatcher to hold.
    """

    def __init__(self, kind: str = "query") -> None:
        self.kind = kind
        self._handlers: dict[str, HandlerT] = {}
        self._frozen = False

    def register(self, request: str | type | object, handler: HandlerT) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"{self.kind} registry is frozen")
        tag = request if isinstance(request, str) else request_tag(request)
        if tag in self._handlers:
            logger.debug(
                "Replacing %s handler for %s: %s -> %s",
                self.kind,
                tag,
                type(self._handlers[tag]).__name__,
                type(handler).__name__,
            )
        self._handlers[tag] = handler

    def resolve(self, request: str | type | object) -> HandlerT | None:
        tag = request if isinstance(request, str) else request_tag(request)
        return self._handlers.get(tag)

    def missing(self, requests: Iterable[str | type]) -> list[str]:
        """Tags among ``requests`` that have no handler."""
        tags = [r if isinstance(r, str) else request_tag(r) for r in requests]
        return [t for t in tags if t not in self._handlers]

    def freeze(self) -> Mapping[str, HandlerT]:
        self._frozen = True
        return MappingProxyType(dict(self._handlers))

    @property
    def tags(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, tag: str) -> bool:
        return tag in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
