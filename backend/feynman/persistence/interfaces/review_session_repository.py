"""Abstract repository interface for archived review sessions."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from feynman.domain.concept.models import Concept
from feynman.domain.review.models import ReviewSession


class ReviewSessionRepository(ABC):

    @abstractmethod
    def save(self, session: ReviewSession, concept: Concept) -> None:
        """
        Append a new (immutable) session row and record the concept's new status and
        last_reviewed_at in the same transaction. Never call UPDATE on an existing session.
        """
        ...

    @abstractmethod
    def get_by_id(self, session_id: str) -> Optional[ReviewSession]:
        ...

    @abstractmethod
    def list_by_concept(self, concept_id: str) -> List[ReviewSession]:
        """Return a concept's sessions, newest first."""
        ...
