"""Question API routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response

from app.cqrs.questions import (
    CreateQuestionCommand,
    DeleteQuestionCommand,
    GetAllQuestionsQuery,
    GetQuestionByIdQuery,
    GetQuestionsByCreatorQuery,
    GetQuestionsByDifficultyQuery,
    GetQuestionsByTagsQuery,
    GetQuestionsByTypeQuery,
    UpdateQuestionCommand,
)
from app.cqrs.service import CQRSService
from app.dependencies import get_cqrs
from app.errors import RecordValidationError
from app.models.common import validate_record
from app.models.question import (
    NEW_QUESTION_ADAPTER,
    QUESTION_ADAPTER,
    DifficultyLevel,
    QuestionType,
    QuestionUpdate,
)

router = APIRouter(prefix="/api/questions", tags=["questions"])


# Question is a union of models, so bodies and responses go through the adapters.
def _out(question) -> dict:
    return QUESTION_ADAPTER.dump_python(question, mode="json", by_alias=True)


@router.get("")
async def list_questions(
    type: QuestionType | None = None,
    difficulty_level: DifficultyLevel | None = None,
    created_by: str | None = None,
    tag: list[str] | None = Query(None),
    cqrs: CQRSService = Depends(get_cqrs),
):
    """List questions; the first filter given wins (tag, creator, type, difficulty)."""
    if tag:
        questions = await cqrs.execute_query(GetQuestionsByTagsQuery(tuple(tag)))
    elif created_by is not None:
        questions = await cqrs.execute_query(GetQuestionsByCreatorQuery(created_by))
    elif type is not None:
        questions = await cqrs.execute_query(GetQuestionsByTypeQuery(type))
    elif difficulty_level is not None:
        questions = await cqrs.execute_query(GetQuestionsByDifficultyQuery(difficulty_level))
    else:
        questions = await cqrs.execute_query(GetAllQuestionsQuery())
    return [_out(q) for q in questions]


@router.get("/{question_id}")
async def get_question(question_id: str, cqrs: CQRSService = Depends(get_cqrs)):
    question = await cqrs.execute_query(GetQuestionByIdQuery(question_id))
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return _out(question)


@router.post("", status_code=201)
async def create_question(
    body: dict[str, Any] = Body(...), cqrs: CQRSService = Depends(get_cqrs)
):
    result = validate_record(NEW_QUESTION_ADAPTER, body)
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.errors)
    return _out(await cqrs.execute_command(CreateQuestionCommand(result.record)))


@router.patch("/{question_id}")
async def update_question(
    question_id: str,
    body: QuestionUpdate,
    cqrs: CQRSService = Depends(get_cqrs),
):
    try:
        question = await cqrs.execute_command(UpdateQuestionCommand(question_id, body))
    except RecordValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return _out(question)


@router.delete("/{question_id}", status_code=204)
async def delete_question(question_id: str, cqrs: CQRSService = Depends(get_cqrs)):
    deleted = await cqrs.execute_command(DeleteQuestionCommand(question_id))
    if not deleted:
        raise HTTPException(status_code=404, detail="Question not found")
    return Response(status_code=204)
