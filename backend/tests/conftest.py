"""Shared fixtures: a throwaway SQLite file per test and a scripted language model."""
import json
from typing import List

import pytest

from feynman.ai.interfaces.language_model import LanguageModel, UpstreamUnavailable
from feynman.application.concept_app_service import ConceptAppService
from feynman.application.course_app_service import CourseAppService
from feynman.application.feedback_scorer import FeedbackScorer
from feynman.application.lecture_app_service import LectureAppService
from feynman.application.review_app_service import ReviewAppService
from feynman.persistence.db import init_db
from feynman.persistence.repositories.sqlite.sqlite_concept_repository import SqliteConceptRepository
from feynman.persistence.repositories.sqlite.sqlite_lecture_repository import (
    SqliteCourseRepository,
    SqliteLectureRepository,
)
from feynman.persistence.repositories.sqlite.sqlite_review_session_repository import (
    SqliteReviewSessionRepository,
)

PHOTOSYNTHESIS_TEXT = (
    "Photosynthesis is the process plants use to turn light into chemical energy. "
    "Chlorophyll in the chloroplasts absorbs mostly red and blue light. "
    "Using carbon dioxide from the air and water from the soil, the plant produces glucose and oxygen. "
    "The light-dependent reactions happen in the thylakoid membranes and make ATP and NADPH. "
    "The Calvin cycle in the stroma uses that ATP and NADPH to fix carbon into sugar."
)

PHOTOSYNTHESIS_CONCEPTS = [
    {
        "name": "Photosynthesis Inputs and Outputs",
        "description": "Plants take in carbon dioxide and water and use light to make glucose. "
        "Oxygen is released as a by-product.",
    },
    {
        "name": "Role of Chlorophyll",
        "description": "Chlorophyll is the green pigment that absorbs light. "
        "It mostly absorbs red and blue wavelengths.",
    },
    {
        "name": "Chloroplast Structure",
        "description": "Chloroplasts contain thylakoids and stroma. "
        "Each part hosts a different stage of photosynthesis.",
    },
    {
        "name": "Light-Dependent Reactions",
        "description": "In the thylakoid membranes light energy is captured. "
        "The reactions produce ATP and NADPH.",
    },
    {
        "name": "The Calvin Cycle",
        "description": "In the stroma, ATP and NADPH are used to fix carbon dioxide. "
        "The result is sugar the plant can use.",
    },
]

GOOD_FEEDBACK = {
    "summary": "You explained the inputs and outputs clearly but skipped where the energy comes from.",
    "clearlyExplained": ["Plants need water and carbon dioxide", "Oxygen is released"],
    "unclearPoints": ["Why light is needed"],
    "jargonUsed": ["glucose"],
    "progressLevel": "Understood",
}


class FakeLanguageModel(LanguageModel):
    """Returns scripted replies in order; an Exception in the script is raised instead."""

    def __init__(self, replies: List = None, transcript: str = ""):
        self.replies = list(replies or [])
        self.transcript = transcript
        self.calls: List[dict] = []
        self.transcribed: List[str] = []

    def queue(self, *replies) -> None:
        self.replies.extend(replies)

    def complete(self, system, messages, *, temperature=0.7, max_tokens=600):
        self.calls.append({"system": system, "messages": [dict(m) for m in messages]})
        if not self.replies:
            raise UpstreamUnavailable("No scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def transcribe(self, audio, filename):
        self.transcribed.append(filename)
        if isinstance(self.transcript, Exception):
            raise self.transcript
        return self.transcript


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "feynman-test.db")
    init_db(path)
    return path


@pytest.fixture
def model():
    return FakeLanguageModel()


@pytest.fixture
def course_repo(db_path):
    return SqliteCourseRepository(db_path)


@pytest.fixture
def lecture_repo(db_path):
    return SqliteLectureRepository(db_path)


@pytest.fixture
def concept_repo(db_path):
    return SqliteConceptRepository(db_path)


@pytest.fixture
def session_repo(db_path):
    return SqliteReviewSessionRepository(db_path)


@pytest.fixture
def course_service(course_repo):
    return CourseAppService(repo=course_repo)


@pytest.fixture
def lecture_service(course_repo, lecture_repo, concept_repo, model):
    return LectureAppService(
        courses=course_repo,
        lectures=lecture_repo,
        concepts=concept_repo,
        model=model,
        max_lecture_chars=100_000,
        batch_min=5,
        batch_max=15,
    )


@pytest.fixture
def concept_service(concept_repo, lecture_repo):
    return ConceptAppService(repo=concept_repo, lectures=lecture_repo)


@pytest.fixture
def review_service(concept_repo, session_repo, model):
    return ReviewAppService(
        concepts=concept_repo,
        sessions=session_repo,
        model=model,
        scorer=FeedbackScorer(model=model),
        max_turns=0,
    )


@pytest.fixture
def course(course_service):
    return course_service.create_course("Biology 101").value


@pytest.fixture
def lecture(lecture_service, course, model):
    model.queue(json.dumps(PHOTOSYNTHESIS_CONCEPTS))
    return lecture_service.ingest_lecture(course.id, "Photosynthesis", PHOTOSYNTHESIS_TEXT).value


@pytest.fixture
def concept(lecture):
    return lecture.concepts[0]
