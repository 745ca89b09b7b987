"""Concept domain models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class Concept:
    id: str
    lecture_id: str
    name: str
    description: str
    status: str  # not_started | reviewing | understood | mastered
    position: int
    created_at: str
    last_reviewed_at: Optional[str] = None
