"""Concept read/delete API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from feynman.api.errors import not_found, raise_for_failure
from feynman.api.serializers import serialize_concept
from feynman.application.concept_app_service import ConceptAppService
from feynman.container import get_concept_app_service
from feynman.domain.common.result import ErrorCode

router = APIRouter(tags=["concepts"])


@router.get("/concepts/{concept_id}")
def get_concept(concept_id: str, svc: ConceptAppService = Depends(get_concept_app_service)):
    concept = svc.get_concept(concept_id)
    if not concept:
        not_found(ErrorCode.CONCEPT_NOT_FOUND, f"Concept '{concept_id}' not found.")
    return serialize_concept(concept)


@router.delete("/concepts/{concept_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_concept(concept_id: str, svc: ConceptAppService = Depends(get_concept_app_service)):
    result = svc.delete_concept(concept_id)
    if not result.is_success:
        raise_for_failure(result)
