"""Shared field types and validation helpers for persisted records."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

ModelT = TypeVar("ModelT", bound=BaseModel)


def _check_uuid(value: str) -> str:
    try:
        canonical = str(uuid.UUID(value))
    except ValueError:
        raise ValueError("must be a UUID string") from None
    # uuid.UUID also takes undashed hex, braces and urn: prefixes.
    if canonical != value.lower():
        raise ValueError("must be a UUID string")
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UUIDStr = Annotated[str, AfterValidator(_check_uuid)]
# Timestamps without an offset are read as UTC.
UTCDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class RecordModel(BaseModel):
    """Base for record shapes: camelCase on disk and over HTTP, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def touch(previous: datetime) -> datetime:
    """Return a timestamp strictly later than ``previous``."""
    now = utcnow()
    previous = _as_utc(previous)
    if now > previous:
        return now
    # Clock has not ticked since the last write.
    return previous + timedelta(microseconds=1)


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of validating raw data: a typed record or field errors, never both."""

    record: ModelT | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.record is not None


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic error into ``{"field.path": "message"}``."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or "__root__"
        if path in errors:
            errors[path] = f"{errors[path]}; {err['msg']}"
        else:
            errors[path] = err["msg"]
    return errors


def validate_record(model: type[ModelT] | TypeAdapter, raw: Any) -> ValidationResult[ModelT]:
    """Validate a mapping (or JSON text) against a model class or a ``TypeAdapter``."""
    try:
        if isinstance(model, TypeAdapter):
            if isinstance(raw, (str, bytes)):
                record = model.validate_json(raw)
            else:
                record = model.validate_python(raw)
        elif isinstance(raw, (str, bytes)):
            record = model.model_validate_json(raw)
        else:
            record = model.model_validate(raw)
    except ValidationError as e:
        return ValidationResult(errors=field_errors(e))
    return ValidationResult(record=record)
