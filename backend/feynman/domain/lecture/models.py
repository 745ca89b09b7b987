"""Course and Lecture domain models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from feynman.domain.concept.models import Concept


@dataclass
class Course:
    id: str
    name: str
    created_at: str


@dataclass
class Lecture:
    id: str
    course_id: str
    name: str
    raw_text: str
    created_at: str
    # Populated by the ingestion pipeline and by detail reads
    concepts: List[Concept] = field(default_factory=list)
