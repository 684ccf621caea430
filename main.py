"""Student Tracker - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.cqrs.wiring import build_cqrs_service
from app.repositories import (
    FileAssignmentRepository,
    FileQuestionRepository,
    FileStudentRepository,
)
from app.routers import assignments, questions, students

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # Create data directory if needed
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    app.state.cqrs = build_cqrs_service(
        FileStudentRepository(settings.DATA_DIR),
        FileAssignmentRepository(settings.DATA_DIR),
        FileQuestionRepository(settings.DATA_DIR),
    )
    yield


app = FastAPI(title="Student Tracker", version="0.1.0", debug=settings.APP_DEBUG, lifespan=lifespan)


@app.get("/health")
async def health():
    return {"status": "ok"}


# Routers
app.include_router(students.router)
app.include_router(assignments.router)
app.include_router(questions.router)
