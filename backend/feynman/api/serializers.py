"""Domain object → JSON-ready dict converters shared by the routers."""
from __future__ import annotations
from dataclasses import asdict
from typing import List

from feynman.domain.concept.models import Concept
from feynman.domain.lecture.models import Course, Lecture
from feynman.domain.review.models import ReviewConversation, ReviewSession, Turn


def serialize_course(c: Course) -> dict:
    return {"id": c.id, "name": c.name, "created_at": c.created_at}


def serialize_concept(c: Concept) -> dict:
    return {
        "id": c.id,
        "lecture_id": c.lecture_id,
        "name": c.name,
        "description": c.description,
        "status": c.status,
        "position": c.position,
        "last_reviewed_at": c.last_reviewed_at,
        "created_at": c.created_at,
    }


def serialize_lecture(lecture: Lecture, detail: bool = True) -> dict:
    data = {
        "id": lecture.id,
        "course_id": lecture.course_id,
        "name": lecture.name,
        "created_at": lecture.created_at,
    }
    # List views skip the (large) text and the concept batch
    if detail:
        data["raw_text"] = lecture.raw_text
        data["concepts"] = [serialize_concept(c) for c in lecture.concepts]
    return data


def _serialize_history(history: List[Turn]) -> list:
    return [{"role": t.role, "content": t.content} for t in history]


def serialize_conversation(conv: ReviewConversation) -> dict:
    return {
        "concept_id": conv.concept_id,
        "audience_level": conv.audience_level,
        "state": conv.state,
        "reply": conv.history[-1].content if conv.history else None,
        "history": _serialize_history(conv.history),
    }


def serialize_session(s: ReviewSession) -> dict:
    return {
        "id": s.id,
        "concept_id": s.concept_id,
        "audience_level": s.audience_level,
        "transcript": _serialize_history(s.transcript),
        "feedback": asdict(s.feedback) if s.feedback else None,
        "created_at": s.created_at,
    }
