"""Course CRUD."""
from __future__ import annotations
from typing import List, Optional

from feynman.domain.common.result import ErrorCode, Result
from feynman.domain.lecture.models import Course
from feynman.domain.lecture.service import LectureDomainService
from feynman.persistence.interfaces.lecture_repository import CourseRepository


class CourseAppService:
    def __init__(self, repo: CourseRepository):
        self._repo = repo
        self._domain = LectureDomainService()

    def create_course(self, name: str) -> Result[Course]:
        result = self._domain.create_course(name)
        if not result.is_success:
            return Result.propagate(result)
        self._repo.save(result.value)
        return Result.ok(result.value)

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._repo.get_by_id(course_id)

    def list_courses(self) -> List[Course]:
        return self._repo.list_all()

    def delete_course(self, course_id: str) -> Result[bool]:
        deleted = self._repo.delete(course_id)
        if not deleted:
            return Result.fail(f"Course '{course_id}' not found.", code=ErrorCode.COURSE_NOT_FOUND)
        return Result.ok(True)
