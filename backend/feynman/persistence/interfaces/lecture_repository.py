"""Abstract repository interfaces for courses and lectures."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from feynman.domain.lecture.models import Course, Lecture


class CourseRepository(ABC):

    @abstractmethod
    def save(self, course: Course) -> None:
        ...

    @abstractmethod
    def get_by_id(self, course_id: str) -> Optional[Course]:
        ...

    @abstractmethod
    def list_all(self) -> List[Course]:
        ...

    @abstractmethod
    def delete(self, course_id: str) -> bool:
        """Delete course and cascade to lectures, concepts and sessions."""
        ...


class LectureRepository(ABC):

    @abstractmethod
    def save(self, lecture: Lecture) -> None:
        """Insert a lecture row. Lectures are immutable, so there is no update."""
        ...

    @abstractmethod
    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        """Return the lecture without concepts populated, or None."""
        ...

    @abstractmethod
    def list_by_course(self, course_id: str) -> List[Lecture]:
        ...

    @abstractmethod
    def delete(self, lecture_id: str) -> bool:
        """Delete lecture and cascade to its concepts. Returns True if deleted."""
        ...
