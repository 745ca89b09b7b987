"""Concept reads and deletion. Progress is only written by review sessions."""
from __future__ import annotations
from typing import List, Optional

from feynman.domain.common.result import ErrorCode, Result
from feynman.domain.concept.models import Concept
from feynman.persistence.interfaces.concept_repository import ConceptRepository
from feynman.persistence.interfaces.lecture_repository import LectureRepository


class ConceptAppService:
    def __init__(self, repo: ConceptRepository, lectures: LectureRepository):
        self._repo = repo
        self._lectures = lectures

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_concept(self, concept_id: str) -> Optional[Concept]:
        return self._repo.get_by_id(concept_id)

    def list_concepts(self, lecture_id: str) -> Result[List[Concept]]:
        if not self._lectures.get_by_id(lecture_id):
            return Result.fail(f"Lecture '{lecture_id}' not found.", code=ErrorCode.LECTURE_NOT_FOUND)
        return Result.ok(self._repo.list_by_lecture(lecture_id))

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete_concept(self, concept_id: str) -> Result[bool]:
        deleted = self._repo.delete(concept_id)
        if not deleted:
            return Result.fail(f"Concept '{concept_id}' not found.", code=ErrorCode.CONCEPT_NOT_FOUND)
        return Result.ok(True)
