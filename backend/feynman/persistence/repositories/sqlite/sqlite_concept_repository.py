"""SQLite implementation of ConceptRepository."""
from __future__ import annotations
from typing import List, Optional

from feynman.domain.concept.models import Concept
from feynman.persistence.interfaces.concept_repository import ConceptRepository
from feynman.persistence.db import get_connection


def _row_to_concept(row) -> Concept:
    return Concept(
        id=row["id"],
        lecture_id=row["lecture_id"],
        name=row["name"],
        description=row["description"],
        status=row["status"],
        position=row["position"],
        created_at=row["created_at"],
        last_reviewed_at=row["last_reviewed_at"],
    )


def _concept_params(concept: Concept) -> dict:
    return {
        "id": concept.id,
        "lecture_id": concept.lecture_id,
        "name": concept.name,
        "description": concept.description,
        "status": concept.status,
        "position": concept.position,
        "last_reviewed_at": concept.last_reviewed_at,
        "created_at": concept.created_at,
    }


class SqliteConceptRepository(ConceptRepository):

    def __init__(self, db_path: Optional[str] = None):
        self._db_path = db_path

    def save_batch(self, concepts: List[Concept]) -> None:
        conn = get_connection(self._db_path)
        try:
            conn.executemany(
                """
                INSERT INTO concepts (
                    id, lecture_id, name, description,
                    status, position, last_reviewed_at, created_at
                ) VALUES (
                    :id, :lecture_id, :name, :description,
                    :status, :position, :last_reviewed_at, :created_at
                )
                """,
                [_concept_params(c) for c in concepts],
            )
            conn.commit()
        finally:
            conn.close()

    def get_by_id(self, concept_id: str) -> Optional[Concept]:
        conn = get_connection(self._db_path)
        row = conn.execute(
            "SELECT * FROM concepts WHERE id = ?", (concept_id,)
        ).fetchone()
        conn.close()
        return _row_to_concept(row) if row else None

    def list_by_lecture(self, lecture_id: str) -> List[Concept]:
        conn = get_connection(self._db_path)
        rows = conn.execute(
            "SELECT * FROM concepts WHERE lecture_id = ? ORDER BY position ASC",
            (lecture_id,),
        ).fetchall()
        conn.close()
        return [_row_to_concept(r) for r in rows]

    def delete(self, concept_id: str) -> bool:
        conn = get_connection(self._db_path)
        cur = conn.execute("DELETE FROM concepts WHERE id = ?", (concept_id,))
        conn.commit()
        conn.close()
        return cur.rowcount > 0
