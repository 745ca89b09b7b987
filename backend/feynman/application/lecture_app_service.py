"""Lecture ingestion: persist the lecture, then decompose it into concepts."""
from __future__ import annotations
import logging
from typing import List, Optional

from feynman.ai.interfaces.language_model import LanguageModel, UpstreamUnavailable
from feynman.ai.json_payload import MalformedPayload, extract_json
from feynman.core import config
from feynman.domain.common.result import ErrorCode, Result
from feynman.domain.concept.models import Concept
from feynman.domain.concept.prompts import DECOMPOSITION_SYSTEM, build_decomposition_prompt
from feynman.domain.concept.rules import validate_concept_batch
from feynman.domain.concept.service import ConceptDomainService
from feynman.domain.lecture.models import Lecture
from feynman.domain.lecture.service import LectureDomainService
from feynman.persistence.interfaces.concept_repository import ConceptRepository
from feynman.persistence.interfaces.lecture_repository import CourseRepository, LectureRepository

logger = logging.getLogger(__name__)


class LectureAppService:
    def __init__(
        self,
        courses: CourseRepository,
        lectures: LectureRepository,
        concepts: ConceptRepository,
        model: LanguageModel,
        max_lecture_chars: Optional[int] = None,
        batch_min: Optional[int] = None,
        batch_max: Optional[int] = None,
    ):
        self._courses = courses
        self._lectures = lectures
        self._concepts = concepts
        self._model = model
        self._lecture_domain = LectureDomainService()
        self._concept_domain = ConceptDomainService()
        self._max_lecture_chars = max_lecture_chars or config.MAX_LECTURE_CHARS
        self._batch_min = batch_min or config.CONCEPT_BATCH_MIN
        self._batch_max = batch_max or config.CONCEPT_BATCH_MAX

    # ------------------------------------------------------------------
    # INGEST
    # ------------------------------------------------------------------
    def ingest_lecture(self, course_id: str, name: str, raw_text: str) -> Result[Lecture]:
        """
        Store the lecture (storage errors propagate), then try to decompose it.
        Decomposition failures are logged and leave the lecture with no concepts.
        """
        if not self._courses.get_by_id(course_id):
            return Result.fail(f"Course '{course_id}' not found.", code=ErrorCode.COURSE_NOT_FOUND)

        result = self._lecture_domain.create_lecture(course_id, name, raw_text, self._max_lecture_chars)
        if not result.is_success:
            return Result.propagate(result)
        lecture = result.value
        self._lectures.save(lecture)
        logger.info("Stored lecture %s (%d chars) in course %s", lecture.id, len(raw_text), course_id)

        lecture.concepts = self._decompose(lecture)
        return Result.ok(lecture)

    def ingest_audio_lecture(self, course_id: str, name: str, audio: bytes, filename: str) -> Result[Lecture]:
        """Transcribe a recorded lecture, then ingest the transcript as text."""
        if not self._courses.get_by_id(course_id):
            return Result.fail(f"Course '{course_id}' not found.", code=ErrorCode.COURSE_NOT_FOUND)
        if not audio:
            return Result.fail("Audio file is empty.")

        try:
            transcript = self._model.transcribe(audio, filename)
        except UpstreamUnavailable as e:
            logger.error("Transcription of %s failed: %s", filename, e)
            return Result.fail(str(e), code=ErrorCode.UPSTREAM_UNAVAILABLE)

        if not transcript:
            return Result.fail("No speech could be transcribed from the audio file.")
        return self.ingest_lecture(course_id, name, transcript)

    def _decompose(self, lecture: Lecture) -> List[Concept]:
        prompt = build_decomposition_prompt(lecture.raw_text, self._batch_min, self._batch_max)
        try:
            reply = self._model.complete(
                DECOMPOSITION_SYSTEM,
                [{"role": "user", "content": prompt}],
                temperature=0.3,
                max_tokens=2000,
            )
            payload = extract_json(reply)
        except UpstreamUnavailable as e:
            logger.warning("Decomposition of lecture %s failed: %s", lecture.id, e)
            return []
        except MalformedPayload as e:
            logger.warning("Decomposition of lecture %s returned malformed output: %s", lecture.id, e)
            return []

        validation = validate_concept_batch(payload, self._batch_min, self._batch_max)
        if not validation.is_success:
            logger.warning("Decomposition of lecture %s rejected: %s", lecture.id, validation.error)
            return []

        concepts = self._concept_domain.build_batch(lecture.id, validation.value).value
        self._concepts.save_batch(concepts)
        logger.info("Lecture %s decomposed into %d concepts", lecture.id, len(concepts))
        return concepts

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_lecture(self, lecture_id: str) -> Optional[Lecture]:
        lecture = self._lectures.get_by_id(lecture_id)
        if lecture:
            lecture.concepts = self._concepts.list_by_lecture(lecture_id)
        return lecture

    def list_lectures(self, course_id: str) -> Result[List[Lecture]]:
        if not self._courses.get_by_id(course_id):
            return Result.fail(f"Course '{course_id}' not found.", code=ErrorCode.COURSE_NOT_FOUND)
        return Result.ok(self._lectures.list_by_course(course_id))

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete_lecture(self, lecture_id: str) -> Result[bool]:
        deleted = self._lectures.delete(lecture_id)
        if not deleted:
            return Result.fail(f"Lecture '{lecture_id}' not found.", code=ErrorCode.LECTURE_NOT_FOUND)
        return Result.ok(True)
