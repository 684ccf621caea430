"""Exception types raised by the repositories and the dispatch layer."""


class RepositoryError(Exception):
    """Base class for storage errors."""


class RecordValidationError(RepositoryError):
    """Caller-supplied data failed schema checks."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        summary = ", ".join(f"{path}: {msg}" for path, msg in errors.items())
        super().__init__(f"Invalid record ({summary})")


class DuplicateKeyError(RepositoryError):
    """A unique field already holds the given value on another record."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} {value!r} is already taken")


class DocumentRemovalError(RepositoryError):
    """The backing document of a record could not be removed."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Could not remove document for record {record_id}")


class DispatchError(Exception):
    """Base class for query/command dispatch errors."""


class HandlerNotFoundError(DispatchError):
    """No handler is registered for a request tag."""

    def __init__(self, tag: str, kind: str = "query") -> None:
        self.tag = tag
        self.kind = kind
        super().__init__(f"No handler registered for {kind} type: {tag}")


class RegistryFrozenError(DispatchError):
    """A handler was registered after the registry was frozen."""
