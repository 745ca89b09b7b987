"""Lecture read/delete API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from feynman.api.errors import not_found, raise_for_failure
from feynman.api.serializers import serialize_concept, serialize_lecture
from feynman.application.concept_app_service import ConceptAppService
from feynman.application.lecture_app_service import LectureAppService
from feynman.container import get_concept_app_service, get_lecture_app_service
from feynman.domain.common.result import ErrorCode

router = APIRouter(tags=["lectures"])


@router.get("/lectures/{lecture_id}")
def get_lecture(lecture_id: str, svc: LectureAppService = Depends(get_lecture_app_service)):
    lecture = svc.get_lecture(lecture_id)
    if not lecture:
        not_found(ErrorCode.LECTURE_NOT_FOUND, f"Lecture '{lecture_id}' not found.")
    return serialize_lecture(lecture)


@router.delete("/lectures/{lecture_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lecture(lecture_id: str, svc: LectureAppService = Depends(get_lecture_app_service)):
    result = svc.delete_lecture(lecture_id)
    if not result.is_success:
        raise_for_failure(result)


@router.get("/lectures/{lecture_id}/concepts")
def list_concepts(lecture_id: str, svc: ConceptAppService = Depends(get_concept_app_service)):
    result = svc.list_concepts(lecture_id)
    if not result.is_success:
        raise_for_failure(result)
    return [serialize_concept(c) for c in result.value]
