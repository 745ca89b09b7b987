"""Pure business logic for concept creation and progress updates."""
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import List

from feynman.domain.concept.models import Concept
from feynman.domain.concept.rules import NOT_STARTED, VALID_STATUSES
from feynman.domain.common.result import Result


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class ConceptDomainService:
    """
    Pure domain operations with no I/O. All methods return Result[T].
    The application layer calls these and then persists via the repository.
    """

    def build_batch(self, lecture_id: str, items: List[dict]) -> Result[List[Concept]]:
        """Turn validated {name, description} items into NotStarted concepts, keeping their order."""
        now = _now_iso()
        concepts = [
            Concept(
                id=_new_id(),
                lecture_id=lecture_id,
                name=item["name"],
                description=item["description"],
                status=NOT_STARTED,
                position=position,
                created_at=now,
            )
            for position, item in enumerate(items)
        ]
        return Result.ok(concepts)

    def apply_review_outcome(self, concept: Concept, progress_level: str) -> Result[Concept]:
        """
        Record the level produced by feedback scoring. Any level may follow any other:
        a poor session can move a Mastered concept back down to Reviewing.
        """
        if progress_level not in VALID_STATUSES:
            return Result.fail(
                f"'{progress_level}' is not a valid progress level. Must be one of {sorted(VALID_STATUSES)}."
            )
        concept.status = progress_level
        concept.last_reviewed_at = _now_iso()
        return Result.ok(concept)
