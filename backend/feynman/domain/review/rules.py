"""Business rules for review sessions: the conversation state machine and its inputs."""
from __future__ import annotations
from typing import Any, List

from feynman.domain.common.result import ErrorCode, Result
from feynman.domain.concept.rules import REVIEWING
from feynman.domain.review.models import (
    ACTIVE,
    ASSISTANT,
    AUDIENCE_LEVELS,
    ENDED,
    NOT_STARTED,
    USER,
    Feedback,
    Turn,
)

# The only allowed transitions (no cycles back to not_started)
ALLOWED_TRANSITIONS: dict[str, str] = {
    NOT_STARTED: ACTIVE,
    ACTIVE: ENDED,
}

FALLBACK_SUMMARY = (
    "Sorry, we couldn't generate detailed feedback for this session. "
    "Your conversation has been saved, so try reviewing this concept again."
)


def validate_state_transition(current_state: str, new_state: str) -> Result[str]:
    expected_next = ALLOWED_TRANSITIONS.get(current_state)
    if expected_next is None:
        return Result.fail(
            "Review session has already ended. Start a new session to review again.",
            code=ErrorCode.SESSION_NOT_ACTIVE,
        )
    if new_state != expected_next:
        return Result.fail(
            f"Invalid transition: '{current_state}' → '{new_state}'. "
            f"Only '{current_state}' → '{expected_next}' is allowed.",
            code=ErrorCode.SESSION_NOT_ACTIVE,
        )
    return Result.ok(new_state)


def validate_audience_level(audience_level: str) -> Result[str]:
    if audience_level not in AUDIENCE_LEVELS:
        return Result.fail(
            f"'{audience_level}' is not a valid audience level. Must be one of {list(AUDIENCE_LEVELS)}."
        )
    return Result.ok(audience_level)


def validate_history(raw_history: Any) -> Result[List[Turn]]:
    """
    A caller-supplied history must be user/assistant pairs in order, starting with the
    learner and ending with a tutor reply, with non-empty text in every turn.
    """
    if not isinstance(raw_history, list) or not raw_history:
        return Result.fail("History must be a non-empty list of turns.", code=ErrorCode.INVALID_HISTORY)

    turns: List[Turn] = []
    for index, item in enumerate(raw_history):
        if isinstance(item, Turn):
            role, content = item.role, item.content
        elif isinstance(item, dict):
            role, content = item.get("role"), item.get("content")
        else:
            return Result.fail(f"Turn #{index} is not a role/content pair.", code=ErrorCode.INVALID_HISTORY)

        expected_role = USER if index % 2 == 0 else ASSISTANT
        if role != expected_role:
            return Result.fail(
                f"Turn #{index} must come from '{expected_role}', got '{role}'.",
                code=ErrorCode.INVALID_HISTORY,
            )
        if not isinstance(content, str) or not content.strip():
            return Result.fail(f"Turn #{index} has empty content.", code=ErrorCode.INVALID_HISTORY)
        turns.append(Turn(role=role, content=content))

    if turns[-1].role != ASSISTANT:
        return Result.fail("History must end with a tutor reply.", code=ErrorCode.INVALID_HISTORY)
    return Result.ok(turns)


def fallback_feedback() -> Feedback:
    """Deterministic assessment used whenever scoring fails."""
    return Feedback(
        summary=FALLBACK_SUMMARY,
        clearly_explained=[],
        unclear_points=[],
        jargon_used=[],
        progress_level=REVIEWING,
        is_fallback=True,
    )
