"""Review session API endpoints: start, continue and end a conversation, and read the archive."""
from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from feynman.api.errors import not_found, raise_for_failure
from feynman.api.serializers import serialize_concept, serialize_conversation, serialize_session
from feynman.application.concept_app_service import ConceptAppService
from feynman.application.review_app_service import ReviewAppService
from feynman.container import get_concept_app_service, get_review_app_service
from feynman.domain.common.result import ErrorCode
from feynman.domain.review.models import CLASSMATE

router = APIRouter(tags=["reviews"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class TurnBody(BaseModel):
    role: str
    content: str


class StartBody(BaseModel):
    audience_level: str = CLASSMATE


class ContinueBody(BaseModel):
    audience_level: str = CLASSMATE
    history: List[TurnBody]
    message: str


class EndBody(BaseModel):
    audience_level: str = CLASSMATE
    history: List[TurnBody]


# ------------------------------------------------------------------
# Conversation endpoints. The client sends the full history every turn
# ------------------------------------------------------------------
@router.post("/concepts/{concept_id}/reviews/start")
def start_review(
    concept_id: str,
    body: StartBody,
    svc: ReviewAppService = Depends(get_review_app_service),
):
    result = svc.start_session(concept_id, body.audience_level)
    if not result.is_success:
        raise_for_failure(result)
    return serialize_conversation(result.value)


@router.post("/concepts/{concept_id}/reviews/continue")
def continue_review(
    concept_id: str,
    body: ContinueBody,
    svc: ReviewAppService = Depends(get_review_app_service),
):
    conversation = svc.resume(concept_id, body.audience_level, [t.model_dump() for t in body.history])
    if not conversation.is_success:
        raise_for_failure(conversation)
    result = svc.continue_session(conversation.value, body.message)
    if not result.is_success:
        raise_for_failure(result)
    return serialize_conversation(result.value)


@router.post("/concepts/{concept_id}/reviews/end")
def end_review(
    concept_id: str,
    body: EndBody,
    svc: ReviewAppService = Depends(get_review_app_service),
    concepts: ConceptAppService = Depends(get_concept_app_service),
):
    """Each call archives one new session; re-sending a transcript archives it again."""
    conversation = svc.resume(concept_id, body.audience_level, [t.model_dump() for t in body.history])
    if not conversation.is_success:
        raise_for_failure(conversation)
    result = svc.end_session(conversation.value)
    if not result.is_success:
        raise_for_failure(result)

    ended, session = result.value
    concept = concepts.get_concept(concept_id)
    return {
        "state": ended.state,
        "session": serialize_session(session),
        "concept": serialize_concept(concept) if concept else None,
    }


# ------------------------------------------------------------------
# Session archive
# ------------------------------------------------------------------
@router.get("/concepts/{concept_id}/reviews")
def list_reviews(concept_id: str, svc: ReviewAppService = Depends(get_review_app_service)):
    result = svc.list_sessions(concept_id)
    if not result.is_success:
        raise_for_failure(result)
    return [serialize_session(s) for s in result.value]


@router.get("/reviews/{session_id}")
def get_review(session_id: str, svc: ReviewAppService = Depends(get_review_app_service)):
    session = svc.get_session(session_id)
    if not session:
        not_found(ErrorCode.SESSION_NOT_FOUND, f"Review session '{session_id}' not found.")
    return serialize_session(session)
