"""Record models package - exports all record shapes and validators."""

from app.models.assignment import (
    Assignment,
    AssignmentSettings,
    AssignmentStatus,
    AssignmentType,
    AssignmentUpdate,
    NewAssignment,
    create_assignment,
    validate_assignment,
)
from app.models.common import ValidationResult, validate_record
from app.models.question import (
    DifficultyLevel,
    NewQuestion,
    Question,
    QuestionType,
    QuestionUpdate,
    create_multiple_choice_question,
    create_question,
    create_short_answer_question,
    create_true_false_question,
    validate_question,
)
from app.models.student import (
    NewStudent,
    Student,
    StudentUpdate,
    create_student,
    validate_student,
)

__all__ = [
    "Assignment",
    "AssignmentSettings",
    "AssignmentStatus",
    "AssignmentType",
    "AssignmentUpdate",
    "DifficultyLevel",
    "NewAssignment",
    "NewQuestion",
    "NewStudent",
    "Question",
    "QuestionType",
    "QuestionUpdate",
    "Student",
    "StudentUpdate",
    "ValidationResult",
    "create_assignment",
    "create_multiple_choice_question",
    "create_question",
    "create_short_answer_question",
    "create_student",
    "create_true_false_question",
    "validate_assignment",
    "validate_question",
    "validate_record",
    "validate_student",
]
