"""Student record shapes."""

from typing import Annotated, Any

from pydantic import ConfigDict, EmailStr, StringConstraints, field_validator, model_validator

from app.models.common import (
    RecordModel,
    UTCDatetime,
    UUIDStr,
    ValidationResult,
    validate_record,
)

GRADE_LABELS = (
    "Kindergarten",
    "1st",
    "2nd",
    "3rd",
    "4th",
    "5th",
    "6th",
    "7th",
    "8th",
    "9th",
    "10th",
    "11th",
    "12th",
)

Username = Annotated[str, StringConstraints(min_length=3, pattern=r"^[A-Za-z0-9_]+$")]
NonEmpty = Annotated[str, StringConstraints(min_length=1)]

_OPTIONAL_TEXT = (
    "email",
    "pin",
    "guardian_name",
    "guardian_email",
    "guardian_phone",
    "notes",
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class NewStudent(RecordModel):
    """A student that has not been saved yet (no id or timestamps)."""

    model_config = ConfigDict(extra="forbid")

    first_name: NonEmpty
    last_name: NonEmpty
    name: str = ""
    username: Username
    grade: NonEmpty
    avatar_id: UUIDStr
    email: EmailStr | None = None
    pin: str | None = None
    guardian_name: str | None = None
    guardian_email: EmailStr | None = None
    guardian_phone: str | None = None
    notes: str | None = None
    assignments_completed: int = 0
    average_score: float = 0
    last_active: UTCDatetime | None = None

    @field_validator(*_OPTIONAL_TEXT, mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def _derive_name(self):
        self.name = f"{self.first_name} {self.last_name}"
        return self


class Student(NewStudent):
    """A stored student record."""

    model_config = ConfigDict(extra="ignore")

    id: UUIDStr
    created_at: UTCDatetime
    updated_at: UTCDatetime

    @model_validator(mode="after")
    def _default_last_active(self):
        if self.last_active is None:
            self.last_active = self.created_at
        return self


class StudentUpdate(RecordModel):
    """Fields a caller may change on an existing student."""

    model_config = ConfigDict(extra="forbid")

    first_name: NonEmpty | None = None
    last_name: NonEmpty | None = None
    username: Username | None = None
    grade: NonEmpty | None = None
    avatar_id: UUIDStr | None = None
    email: EmailStr | None = None
    pin: str | None = None
    guardian_name: str | None = None
    guardian_email: EmailStr | None = None
    guardian_phone: str | None = None
    notes: str | None = None
    assignments_completed: int | None = None
    average_score: float | None = None
    last_active: UTCDatetime | None = None

    @field_validator(*_OPTIONAL_TEXT, mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)


def create_student(
    first_name: str,
    last_name: str,
    grade: str,
    username: str,
    avatar_id: str,
    **options: Any,
) -> NewStudent:
    """Build an unsaved student. ``options`` takes the optional fields (email, pin, notes, ...)."""
    return NewStudent(
        first_name=first_name,
        last_name=last_name,
        grade=grade,
        username=username,
        avatar_id=avatar_id,
        **options,
    )


def validate_student(raw: Any) -> ValidationResult[Student]:
    return validate_record(Student, raw)
