"""Question record shapes.

A question is one of five kinds, told apart by its ``type`` field. Each kind
is its own model; ``NewQuestion`` and ``Question`` are discriminated unions
over them, validated through ``TypeAdapter``.
"""

import enum
import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, TypeAdapter

from app.models.common import (
    RecordModel,
    UTCDatetime,
    UUIDStr,
    ValidationResult,
    validate_record,
)


class QuestionType(str, enum.Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"
    MATCHING = "matching"


class DifficultyLevel(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ChoiceOption(RecordModel):
    id: UUIDStr
    text: str = Field(min_length=1)
    is_correct: bool = False


class MatchingPair(RecordModel):
    id: UUIDStr
    left: str = Field(min_length=1)
    right: str = Field(min_length=1)


class _QuestionFields(RecordModel):
    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(min_length=1)
    difficulty_level: DifficultyLevel = DifficultyLevel.MEDIUM
    explanation: str | None = None
    # Tag ids, used for spaced repetition and adaptive selection
    tags: list[str] = Field(default_factory=list)
    # Subject or topic
    group: str | None = None
    created_by: UUIDStr


QuestionKind = Literal["multiple_choice", "true_false", "short_answer", "essay", "matching"]


class NewMultipleChoiceQuestion(_QuestionFields):
    type: Literal["multiple_choice"]
    options: list[ChoiceOption] = Field(min_length=2)


class NewTrueFalseQuestion(_QuestionFields):
    type: Literal["true_false"]
    correct_answer: bool


class NewShortAnswerQuestion(_QuestionFields):
    type: Literal["short_answer"]
    correct_answers: list[str] = Field(min_length=1)
    case_sensitive: bool = False


class NewEssayQuestion(_QuestionFields):
    type: Literal["essay"]
    rubric: str | None = None
    word_limit: int | None = Field(None, gt=0)


class NewMatchingQuestion(_QuestionFields):
    type: Literal["matching"]
    pairs: list[MatchingPair] = Field(min_length=2)


class _Stamped(RecordModel):
    id: UUIDStr
    created_at: UTCDatetime
    updated_at: UTCDatetime


class MultipleChoiceQuestion(NewMultipleChoiceQuestion, _Stamped):
    model_config = ConfigDict(extra="ignore")


class TrueFalseQuestion(NewTrueFalseQuestion, _Stamped):
    model_config = ConfigDict(extra="ignore")


class ShortAnswerQuestion(NewShortAnswerQuestion, _Stamped):
    model_config = ConfigDict(extra="ignore")


class EssayQuestion(NewEssayQuestion, _Stamped):
    model_config = ConfigDict(extra="ignore")


class MatchingQuestion(NewMatchingQuestion, _Stamped):
    model_config = ConfigDict(extra="ignore")


NewQuestion = Annotated[
    Union[
        NewMultipleChoiceQuestion,
        NewTrueFalseQuestion,
        NewShortAnswerQuestion,
        NewEssayQuestion,
        NewMatchingQuestion,
    ],
    Field(discriminator="type"),
]

Question = Annotated[
    Union[
        MultipleChoiceQuestion,
        TrueFalseQuestion,
        ShortAnswerQuestion,
        EssayQuestion,
        MatchingQuestion,
    ],
    Field(discriminator="type"),
]

NEW_QUESTION_ADAPTER: TypeAdapter = TypeAdapter(NewQuestion)
QUESTION_ADAPTER: TypeAdapter = TypeAdapter(Question)


class QuestionUpdate(RecordModel):
    """Fields a caller may change on an existing question.

    Kind-specific fields are accepted here and checked against the merged
    record's ``type`` when the update is applied.
    """

    model_config = ConfigDict(extra="forbid")

    prompt: str | None = Field(None, min_length=1)
    type: QuestionKind | None = None
    difficulty_level: DifficultyLevel | None = None
    explanation: str | None = None
    tags: list[str] | None = None
    group: str | None = None
    options: list[ChoiceOption] | None = None
    correct_answer: bool | None = None
    correct_answers: list[str] | None = None
    case_sensitive: bool | None = None
    rubric: str | None = None
    word_limit: int | None = Field(None, gt=0)
    pairs: list[MatchingPair] | None = None


def create_question(type: QuestionType | str, prompt: str, created_by: str, **fields: Any):
    """Build an unsaved question of any kind; ``fields`` holds the kind-specific fields."""
    return NEW_QUESTION_ADAPTER.validate_python(
        {"type": QuestionType(type).value, "prompt": prompt, "created_by": created_by, **fields}
    )


def create_multiple_choice_question(
    prompt: str,
    options: list[tuple[str, bool]],
    created_by: str,
    difficulty_level: DifficultyLevel = DifficultyLevel.MEDIUM,
    explanation: str | None = None,
    tags: list[str] | None = None,
    group: str | None = None,
) -> NewMultipleChoiceQuestion:
    """Options are ``(text, is_correct)`` pairs; each gets a fresh id."""
    return NewMultipleChoiceQuestion(
        type="multiple_choice",
        prompt=prompt,
        options=[
            ChoiceOption(id=str(uuid.uuid4()), text=text, is_correct=is_correct)
            for text, is_correct in options
        ],
        created_by=created_by,
        difficulty_level=difficulty_level,
        explanation=explanation,
        tags=list(tags or []),
        group=group,
    )


def create_true_false_question(
    prompt: str,
    correct_answer: bool,
    created_by: str,
    difficulty_level: DifficultyLevel = DifficultyLevel.MEDIUM,
    explanation: str | None = None,
    tags: list[str] | None = None,
    group: str | None = None,
) -> NewTrueFalseQuestion:
    return NewTrueFalseQuestion(
        type="true_false",
        prompt=prompt,
        correct_answer=correct_answer,
        created_by=created_by,
        difficulty_level=difficulty_level,
        explanation=explanation,
        tags=list(tags or []),
        group=group,
    )


def create_short_answer_question(
    prompt: str,
    correct_answers: list[str],
    created_by: str,
    case_sensitive: bool = False,
    difficulty_level: DifficultyLevel = DifficultyLevel.MEDIUM,
    explanation: str | None = None,
    tags: list[str] | None = None,
    group: str | None = None,
) -> NewShortAnswerQuestion:
    return NewShortAnswerQuestion(
        type="short_answer",
        prompt=prompt,
        correct_answers=correct_answers,
        case_sensitive=case_sensitive,
        created_by=created_by,
        difficulty_level=difficulty_level,
        explanation=explanation,
        tags=list(tags or []),
        group=group,
    )


def validate_question(raw: Any) -> ValidationResult:
    return validate_record(QUESTION_ADAPTER, raw)
