"""Concept rules: progress levels and decomposition batch validation."""
from __future__ import annotations
import re
from typing import Any, Optional

from feynman.domain.common.result import Result

NOT_STARTED = "not_started"
REVIEWING = "reviewing"
UNDERSTOOD = "understood"
MASTERED = "mastered"

# Ordered from weakest to strongest
PROGRESS_LEVELS: tuple[str, ...] = (NOT_STARTED, REVIEWING, UNDERSTOOD, MASTERED)
VALID_STATUSES = set(PROGRESS_LEVELS)

# Spellings the model may use for each level, compared after stripping case/punctuation
_LEVEL_ALIASES: dict[str, str] = {
    "notstarted": NOT_STARTED,
    "reviewing": REVIEWING,
    "understood": UNDERSTOOD,
    "mastered": MASTERED,
}

# Decomposition responses may use either key style
_NAME_KEYS = ("name", "concept_name", "conceptName")
_DESCRIPTION_KEYS = ("description", "concept_description", "conceptDescription")


def normalize_progress_level(value: Any) -> Optional[str]:
    """Map 'Mastered', 'NOT_STARTED', 'not started' … onto a canonical level, or None."""
    if not isinstance(value, str):
        return None
    key = re.sub(r"[^a-z]", "", value.lower())
    return _LEVEL_ALIASES.get(key)


def _first_text(item: dict, keys: tuple[str, ...]) -> str:
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def validate_concept_batch(payload: Any, min_count: int, max_count: int) -> Result[list[dict]]:
    """
    Accept a decoded decomposition payload only if it is a list of min..max objects,
    each with a non-empty name and description. Any bad element rejects the whole batch.
    Returns Result.ok([{"name", "description"}, ...]) or Result.fail(reason).
    """
    if not isinstance(payload, list):
        return Result.fail(f"Expected a JSON array of concepts, got {type(payload).__name__}.")

    if not min_count <= len(payload) <= max_count:
        return Result.fail(
            f"Expected between {min_count} and {max_count} concepts, got {len(payload)}."
        )

    cleaned: list[dict] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            return Result.fail(f"Concept #{index} is not an object.")
        name = _first_text(item, _NAME_KEYS)
        description = _first_text(item, _DESCRIPTION_KEYS)
        if not name or not description:
            return Result.fail(f"Concept #{index} is missing a name or description.")
        cleaned.append({"name": name, "description": description})

    return Result.ok(cleaned)
