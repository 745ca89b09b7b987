"""Dependency injection container — wires implementations to interfaces."""
from __future__ import annotations
from functools import lru_cache

from feynman.ai.openai_language_model import OpenAILanguageModel
from feynman.application.concept_app_service import ConceptAppService
from feynman.application.course_app_service import CourseAppService
from feynman.application.feedback_scorer import FeedbackScorer
from feynman.application.lecture_app_service import LectureAppService
from feynman.application.review_app_service import ReviewAppService
from feynman.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository
from feynman.persistence.repositories.sqlite.sqlite_lecture_repository import (
    SqliteCourseRepository,
    SqliteLectureRepository,
)
from feynman.persistence.repositories.sqlite.sqlite_review_session_repository import (
    SqliteReviewSessionRepository,
)


@lru_cache(maxsize=1)
def get_language_model() -> OpenAILanguageModel:
    return OpenAILanguageModel()


@lru_cache(maxsize=1)
def get_course_repo() -> SqliteCourseRepository:
    return SqliteCourseRepository()


@lru_cache(maxsize=1)
def get_lecture_repo() -> SqliteLectureRepository:
    return SqliteLectureRepository()


@lru_cache(maxsize=1)
def get_concept_repo() -> SqliteConceptRepository:
    return SqliteConceptRepository()


@lru_cache(maxsize=1)
def get_review_session_repo() -> SqliteReviewSessionRepository:
    return SqliteReviewSessionRepository()


@lru_cache(maxsize=1)
def get_course_app_service() -> CourseAppService:
    return CourseAppService(repo=get_course_repo())


@lru_cache(maxsize=1)
def get_lecture_app_service() -> LectureAppService:
    return LectureAppService(
        courses=get_course_repo(),
        lectures=get_lecture_repo(),
        concepts=get_concept_repo(),
        model=get_language_model(),
    )


@lru_cache(maxsize=1)
def get_concept_app_service() -> ConceptAppService:
    return ConceptAppService(repo=get_concept_repo(), lectures=get_lecture_repo())


@lru_cache(maxsize=1)
def get_review_app_service() -> ReviewAppService:
    return ReviewAppService(
        concepts=get_concept_repo(),
        sessions=get_review_session_repo(),
        model=get_language_model(),
        scorer=FeedbackScorer(model=get_language_model()),
    )
