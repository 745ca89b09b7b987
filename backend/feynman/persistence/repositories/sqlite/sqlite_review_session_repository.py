"""SQLite implementation of ReviewSessionRepository."""
from __future__ import annotations
import json
from dataclasses import asdict
from typing import List, Optional

from feynman.domain.concept.models import Concept
from feynman.domain.review.models import Feedback, ReviewSession, Turn
from feynman.persistence.interfaces.review_session_repository import ReviewSessionRepository
from feynman.persistence.db import get_connection


def _row_to_session(row) -> ReviewSession:
    feedback_data = json.loads(row["feedback"]) if row["feedback"] else None
    return ReviewSession(
        id=row["id"],
        concept_id=row["concept_id"],
        audience_level=row["audience_level"],
        transcript=[Turn(**t) for t in json.loads(row["transcript"] or "[]")],
        feedback=Feedback(**feedback_data) if feedback_data else None,
        created_at=row["created_at"],
    )


class SqliteReviewSessionRepository(ReviewSessionRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def save(self, session: ReviewSession, concept: Concept) -> None:
        conn = get_connection(self._db_path)
        try:
            conn.execute(
                """
                INSERT INTO review_sessions (
                    id, concept_id, audience_level, transcript, feedback, created_at
                ) VALUES (
                    :id, :concept_id, :audience_level, :transcript, :feedback, :created_at
                )
                """,
                {
                    "id": session.id,
                    "concept_id": session.concept_id,
                    "audience_level": session.audience_level,
                    "transcript": json.dumps([asdict(t) for t in session.transcript]),
                    "feedback": json.dumps(asdict(session.feedback)) if session.feedback else None,
                    "created_at": session.created_at,
                },
            )
            conn.execute(
                """
                UPDATE concepts
                SET status = :status, last_reviewed_at = :last_reviewed_at
                WHERE id = :id
                """,
                {
                    "id": concept.id,
                    "status": concept.status,
                    "last_reviewed_at": concept.last_reviewed_at,
                },
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, session_id: str) -> Optional[ReviewSession]:
        conn = get_connection(self._db_path)
        row = conn.execute(
            "SELECT * FROM review_sessions WHERE id = ?", (session_id,)
        ).fetchone()
        conn.close()
        return _row_to_session(row) if row else None

    def list_by_concept(self, concept_id: str) -> List[ReviewSession]:
        conn = get_connection(self._db_path)
        rows = conn.execute(
            "SELECT * FROM review_sessions WHERE concept_id = ? ORDER BY created_at DESC",
            (concept_id,),
        ).fetchall()
        conn.close()
        return [_row_to_session(r) for r in rows]
