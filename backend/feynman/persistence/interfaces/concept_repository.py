"""Abstract repository interface for the Concept aggregate."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from feynman.domain.concept.models import Concept


class ConceptRepository(ABC):

    @abstractmethod
    def save_batch(self, concepts: List[Concept]) -> None:
        """Insert a whole decomposition batch in one transaction, all rows or none."""
        ...

    @abstractmethod
    def get_by_id(self, concept_id: str) -> Optional[Concept]:
        ...

    @abstractmethod
    def list_by_lecture(self, lecture_id: str) -> List[Concept]:
        """Return a lecture's concepts in batch order."""
        ...

    @abstractmethod
    def delete(self, concept_id: str) -> bool:
        """Delete concept and cascade to its review sessions. Returns True if deleted."""
        ...
