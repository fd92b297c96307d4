"""
ADMIN ROUTER - Listings & Quiz Management
==========================================

JSON endpoints for the two admin-managed tables:
- Properties (newest first)
- Quiz questions (display order)

Add to main.py:
    from backend.routers import admin
    app.include_router(admin.router, prefix="/api")

Security: All endpoints require an admin profile. Failures carry the same
reason the dashboard shows, with the status taken from the error kind.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List
import logging

from backend.utils.auth_middleware import User, require_admin
from utils.database.models import PropertyModel, QuizQuestionModel
from utils.database.results import OperationResult
from utils.database.schemas import (
    Property,
    PropertyDraft,
    QuizQuestion,
    QuizQuestionDraft,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _unwrap(result: OperationResult, operation: str):
    """Return result data or raise with the mapped status."""
    if not result.ok:
        logger.warning(f"[ADMIN] {operation} failed ({result.kind.value}): {result.error}")
        raise HTTPException(result.http_status, result.error)
    return result.data


# =============================================================================
# PROPERTIES
# =============================================================================

@router.get("/properties", response_model=List[Property])
async def list_properties(user: User = Depends(require_admin)):
    """All properties, newest first."""
    return _unwrap(PropertyModel.list_all(), "list properties")


@router.post("/properties", status_code=201)
async def create_property(draft: PropertyDraft, user: User = Depends(require_admin)):
    """Insert a property. Returns the stored row when the API echoes it."""
    created = _unwrap(PropertyModel.create(draft), "add property")
    logger.info(f"[ADMIN] {user.email} added property")
    return created.model_dump() if created else {"created": True}


@router.put("/properties/{property_id}", response_model=Property)
async def update_property(property_id: int, body: PropertyDraft, user: User = Depends(require_admin)):
    """Full-record update; every column is overwritten."""
    record = Property(id=property_id, **body.model_dump())
    return _unwrap(PropertyModel.update(record), "update property")


@router.delete("/properties/{property_id}")
async def delete_property(property_id: int, user: User = Depends(require_admin)):
    deleted_id = _unwrap(PropertyModel.delete(property_id), "delete property")
    logger.info(f"[ADMIN] {user.email} deleted property {deleted_id}")
    return {"deleted": deleted_id}


# =============================================================================
# QUIZ QUESTIONS
# =============================================================================

@router.get("/quiz-questions", response_model=List[QuizQuestion])
async def list_quiz_questions(user: User = Depends(require_admin)):
    """All quiz questions by order_index."""
    return _unwrap(QuizQuestionModel.list_all(), "list quiz questions")


@router.post("/quiz-questions", status_code=201)
async def create_quiz_question(draft: QuizQuestionDraft, user: User = Depends(require_admin)):
    created = _unwrap(QuizQuestionModel.create(draft), "add quiz question")
    logger.info(f"[ADMIN] {user.email} added quiz question")
    return created.model_dump() if created else {"created": True}


@router.put("/quiz-questions/{question_id}", response_model=QuizQuestion)
async def update_quiz_question(question_id: str, body: QuizQuestionDraft, user: User = Depends(require_admin)):
    record = QuizQuestion(id=question_id, **body.model_dump())
    return _unwrap(QuizQuestionModel.update(record), "update quiz question")


@router.delete("/quiz-questions/{question_id}")
async def delete_quiz_question(question_id: str, user: User = Depends(require_admin)):
    deleted_id = _unwrap(QuizQuestionModel.delete(question_id), "delete quiz question")
    logger.info(f"[ADMIN] {user.email} deleted quiz question {deleted_id}")
    return {"deleted": deleted_id}
