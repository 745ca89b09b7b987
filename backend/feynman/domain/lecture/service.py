"""Course and lecture validation and construction, no I/O."""
from __future__ import annotations
import uuid
from datetime import datetime, timezone

from feynman.domain.common.result import Result
from feynman.domain.lecture.models import Course, Lecture


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class LectureDomainService:

    def create_course(self, name: str) -> Result[Course]:
        name = (name or "").strip()
        if not name:
            return Result.fail("Course 'name' is required and cannot be empty.")
        return Result.ok(Course(id=_new_id(), name=name, created_at=_now_iso()))

    def create_lecture(self, course_id: str, name: str, raw_text: str, max_chars: int) -> Result[Lecture]:
        """Build an immutable Lecture from uploaded text."""
        name = (name or "").strip()
        if not name:
            return Result.fail("Lecture 'name' is required and cannot be empty.")
        if not (raw_text or "").strip():
            return Result.fail("Lecture text is required and cannot be empty.")
        if len(raw_text) > max_chars:
            return Result.fail(f"Lecture text is {len(raw_text)} characters; the limit is {max_chars}.")

        return Result.ok(
            Lecture(
                id=_new_id(),
                course_id=course_id,
                name=name,
                raw_text=raw_text,
                created_at=_now_iso(),
            )
        )
