"""Pure state-machine transitions for a review conversation."""
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import List

from feynman.domain.common.result import ErrorCode, Result
from feynman.domain.review.models import (
    ACTIVE,
    ASSISTANT,
    ENDED,
    USER,
    Feedback,
    ReviewConversation,
    ReviewSession,
    Turn,
)
from feynman.domain.review.prompts import OPENING_UTTERANCE
from feynman.domain.review.rules import validate_state_transition


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ReviewDomainService:
    """
    Pure domain operations with no I/O. Every transition returns a new conversation value
    and leaves the one passed in untouched, so a failed model call never corrupts
    the history a caller is holding.
    """

    def activate(self, conversation: ReviewConversation, opening_question: str) -> Result[ReviewConversation]:
        validation = validate_state_transition(conversation.state, ACTIVE)
        if not validation.is_success:
            return Result.propagate(validation)

        return Result.ok(
            ReviewConversation(
                concept_id=conversation.concept_id,
                audience_level=conversation.audience_level,
                history=[
                    Turn(role=USER, content=OPENING_UTTERANCE),
                    Turn(role=ASSISTANT, content=opening_question),
                ],
                state=ACTIVE,
            )
        )

    def require_active(self, conversation: ReviewConversation, max_turns: int = 0) -> Result[ReviewConversation]:
        """Check the conversation can take another learner turn."""
        if conversation.state != ACTIVE:
            return Result.fail(
                f"Review session is '{conversation.state}', not active.",
                code=ErrorCode.SESSION_NOT_ACTIVE,
            )
        # The opening utterance is not a learner turn
        if max_turns and conversation.learner_turns - 1 >= max_turns:
            return Result.fail(
                f"Review session reached the limit of {max_turns} turns. End it to get feedback.",
                code=ErrorCode.TURN_LIMIT_REACHED,
            )
        return Result.ok(conversation)

    def with_user_turn(self, conversation: ReviewConversation, utterance: str) -> List[Turn]:
        """History to send to the model for the next tutor reply."""
        return list(conversation.history) + [Turn(role=USER, content=utterance)]

    def with_exchange(
        self, conversation: ReviewConversation, utterance: str, reply: str
    ) -> ReviewConversation:
        return ReviewConversation(
            concept_id=conversation.concept_id,
            audience_level=conversation.audience_level,
            history=self.with_user_turn(conversation, utterance) + [Turn(role=ASSISTANT, content=reply)],
            state=conversation.state,
        )

    def conclude(
        self, conversation: ReviewConversation, feedback: Feedback
    ) -> Result[tuple[ReviewConversation, ReviewSession]]:
        """Move to ended and produce the archive record for this transcript."""
        validation = validate_state_transition(conversation.state, ENDED)
        if not validation.is_success:
            return Result.propagate(validation)

        transcript = list(conversation.history)
        session = ReviewSession(
            id=str(uuid.uuid4()),
            concept_id=conversation.concept_id,
            audience_level=conversation.audience_level,
            transcript=transcript,
            feedback=feedback,
            created_at=_now_iso(),
        )
        ended = ReviewConversation(
            concept_id=conversation.concept_id,
            audience_level=conversation.audience_level,
            history=transcript,
            state=ENDED,
        )
        return Result.ok((ended, session))
