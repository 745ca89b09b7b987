"""Prompt template for breaking lecture text into concepts."""
from __future__ import annotations

DECOMPOSITION_SYSTEM = (
    "You are a specialised educational content analyst. You output only structured JSON."
)

DECOMPOSITION_TEMPLATE = """Break the following lecture into between {min_count} and {max_count} discrete,
bite-sized learning concepts that a student could explain in their own words.

RULES:
1. Each concept covers one idea; do not overlap concepts.
2. "name" is a short title of at most 8 words.
3. "description" is 2-3 plain sentences saying what the student should be able to explain.
4. Keep the order in which the ideas appear in the lecture.

OUTPUT FORMAT:
Return ONLY a JSON array, no prose. The structure must match exactly:
[
  {{"name": "Concept Name", "description": "What this concept covers."}}
]

LECTURE TEXT:
\"\"\"{lecture_text}\"\"\""""


def build_decomposition_prompt(lecture_text: str, min_count: int, max_count: int) -> str:
    return DECOMPOSITION_TEMPLATE.format(
        lecture_text=lecture_text,
        min_count=min_count,
        max_count=max_count,
    )
