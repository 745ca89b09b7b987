"""SQLite implementations of CourseRepository and LectureRepository."""
from __future__ import annotations
from typing import List, Optional

from feynman.domain.lecture.models import Course, Lecture
from feynman.persistence.interfaces.lecture_repository import CourseRepository, LectureRepository
from feynman.persistence.db import get_connection


def _row_to_course(row) -> Course:
    return Course(id=row["id"], name=row["name"], created_at=row["created_at"])


def _row_to_lecture(row) -> Lecture:
    return Lecture(
        id=row["id"],
        course_id=row["course_id"],
        name=row["name"],
        raw_text=row["raw_text"],
        created_at=row["created_at"],
    )


class SqliteCourseRepository(CourseRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def save(self, course: Course) -> None:
        conn = get_connection(self._db_path)
        try:
            conn.execute(
                """
                INSERT INTO courses (id, name, created_at)
                VALUES (:id, :name, :created_at)
                ON CONFLICT(id) DO UPDATE SET name = excluded.name
                """,
                {"id": course.id, "name": course.name, "created_at": course.created_at},
            )
            conn.commit()
        finally:
            conn.close()

    def get_by_id(self, course_id: str) -> Optional[Course]:
        conn = get_connection(self._db_path)
        row = conn.execute("SELECT * FROM courses WHERE id = ?", (course_id,)).fetchone()
        conn.close()
        return _row_to_course(row) if row else None

    def list_all(self) -> List[Course]:
        conn = get_connection(self._db_path)
        rows = conn.execute("SELECT * FROM courses ORDER BY created_at DESC").fetchall()
        conn.close()
        return [_row_to_course(r) for r in rows]

    def delete(self, course_id: str) -> bool:
        conn = get_connection(self._db_path)
        cur = conn.execute("DELETE FROM courses WHERE id = ?", (course_id,))
        conn.commit()
        conn.close()
        return cur.rowcount > 0


class SqliteLectureRepository(LectureRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def save(self, lecture: Lecture) -> None:
        conn = get_connection(self._db_path)
        try:
            conn.execute(
                """
                INSERT INTO lectures (id, course_id, name, raw_text, created_at)
                VALUES (:id, :course_id, :name, :raw_text, :created_at)
                """,
                {
                    "id": lecture.id,
                    "course_id": lecture.course_id,
                    "name": lecture.name,
                    "raw_text": lecture.raw_text,
                    "created_at": lecture.created_at,
                },
            )
            conn.commit()
        finally:
            conn.close()

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        conn = get_connection(self._db_path)
        row = conn.execute("SELECT * FROM lectures WHERE id = ?", (lecture_id,)).fetchone()
        conn.close()
        return _row_to_lecture(row) if row else None

    def list_by_course(self, course_id: str) -> List[Lecture]:
        conn = get_connection(self._db_path)
        rows = conn.execute(
            "SELECT * FROM lectures WHERE course_id = ? ORDER BY created_at DESC",
            (course_id,),
        ).fetchall()
        conn.close()
        return [_row_to_lecture(r) for r in rows]

    def delete(self, lecture_id: str) -> bool:
        conn = get_connection(self._db_path)
        cur = conn.execute("DELETE FROM lectures WHERE id = ?", (lecture_id,))
        conn.commit()
        conn.close()
        return cur.rowcount > 0
