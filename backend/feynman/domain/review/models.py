"""Review session domain models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

# Conversation states (linear: not_started -> active -> ended)
NOT_STARTED = "not_started"
ACTIVE = "active"
ENDED = "ended"

# Audience levels that shape the tutor persona
CLASSMATE = "classmate"
MIDDLE_SCHOOLER = "middle_schooler"
CHILD = "child"
AUDIENCE_LEVELS: tuple[str, ...] = (CLASSMATE, MIDDLE_SCHOOLER, CHILD)

USER = "user"
ASSISTANT = "assistant"


@dataclass
class Turn:
    role: str  # user (the learner explaining) | assistant (the simulated tutor)
    content: str

    def to_message(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class ReviewConversation:
    """The live, caller-held conversation. Passed in and returned on every transition."""
    concept_id: str
    audience_level: str
    history: List[Turn] = field(default_factory=list)
    state: str = NOT_STARTED

    @property
    def learner_turns(self) -> int:
        return sum(1 for t in self.history if t.role == USER)


@dataclass
class Feedback:
    summary: str
    clearly_explained: List[str] = field(default_factory=list)
    unclear_points: List[str] = field(default_factory=list)
    jargon_used: List[str] = field(default_factory=list)
    progress_level: str = "reviewing"
    is_fallback: bool = False


@dataclass
class ReviewSession:
    """Archived transcript of one finished conversation. Never updated once stored."""
    id: str
    concept_id: str
    audience_level: str
    transcript: List[Turn]
    created_at: str
    feedback: Optional[Feedback] = None
