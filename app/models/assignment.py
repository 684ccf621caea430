"""Assignment record shapes."""

import enum
from typing import Any

from pydantic import ConfigDict, Field

from app.models.common import (
    RecordModel,
    UTCDatetime,
    UUIDStr,
    ValidationResult,
    validate_record,
)


class AssignmentType(str, enum.Enum):
    HOMEWORK = "homework"
    QUIZ = "quiz"
    TEST = "test"


class AssignmentStatus(str, enum.Enum):
    DRAFT = "draft"
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    GRADED = "graded"


class AssignmentSettings(RecordModel):
    allow_retake: bool = False
    allow_question_retry: bool = False
    # Percentage score that triggers confetti
    confetti_threshold: float = Field(80, ge=0, le=100)
    confetti_on_correct_answer: bool = False
    # Below this score a new adaptive assignment is generated
    adaptive_reassign_threshold: float = Field(80, ge=0, le=100)
    adaptive_learning_enabled: bool = False


class NewAssignment(RecordModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    description: str | None = None
    type: AssignmentType
    question_ids: list[UUIDStr] = Field(default_factory=list)
    created_by: UUIDStr
    status: AssignmentStatus = AssignmentStatus.DRAFT
    settings: AssignmentSettings = Field(default_factory=AssignmentSettings)
    due_date: UTCDatetime | None = None
    completed_count: int | None = None
    assigned_students: int | None = None
    average_score: float | None = None


class Assignment(NewAssignment):
    model_config = ConfigDict(extra="ignore")

    id: UUIDStr
    created_at: UTCDatetime
    updated_at: UTCDatetime


class AssignmentUpdate(RecordModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    type: AssignmentType | None = None
    question_ids: list[UUIDStr] | None = None
    status: AssignmentStatus | None = None
    settings: AssignmentSettings | None = None
    due_date: UTCDatetime | None = None
    completed_count: int | None = None
    assigned_students: int | None = None
    average_score: float | None = None


def create_assignment(
    title: str,
    type: AssignmentType,
    question_ids: list[str],
    created_by: str,
    **options: Any,
) -> NewAssignment:
    return NewAssignment(
        title=title,
        type=type,
        question_ids=question_ids,
        created_by=created_by,
        **options,
    )


def validate_assignment(raw: Any) -> ValidationResult[Assignment]:
    return validate_record(Assignment, raw)
