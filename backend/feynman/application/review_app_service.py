"""Drives one review conversation: start → continue* → end."""
from __future__ import annotations
import logging
from typing import Any, List, Optional

from feynman.ai.interfaces.language_model import LanguageModel, UpstreamUnavailable
from feynman.application.feedback_scorer import FeedbackScorer
from feynman.core import config
from feynman.domain.common.result import ErrorCode, Result
from feynman.domain.concept.models import Concept
from feynman.domain.concept.service import ConceptDomainService
from feynman.domain.review.models import ACTIVE, USER, ReviewConversation, ReviewSession, Turn
from feynman.domain.review.prompts import OPENING_UTTERANCE, build_persona
from feynman.domain.review.rules import validate_audience_level, validate_history
from feynman.domain.review.service import ReviewDomainService
from feynman.persistence.interfaces.concept_repository import ConceptRepository
from feynman.persistence.interfaces.review_session_repository import ReviewSessionRepository

logger = logging.getLogger(__name__)


class ReviewAppService:
    """
    Stateless across calls: the conversation is a value the caller holds and hands back
    on every transition. Nothing about a live conversation is stored until end_session().
    """

    def __init__(
        self,
        concepts: ConceptRepository,
        sessions: ReviewSessionRepository,
        model: LanguageModel,
        scorer: FeedbackScorer,
        max_turns: Optional[int] = None,
    ):
        self._concepts = concepts
        self._sessions = sessions
        self._model = model
        self._scorer = scorer
        self._domain = ReviewDomainService()
        self._concept_domain = ConceptDomainService()
        self._max_turns = config.REVIEW_MAX_TURNS if max_turns is None else max_turns

    def _load_concept(self, concept_id: str) -> Result[Concept]:
        concept = self._concepts.get_by_id(concept_id)
        if not concept:
            return Result.fail(f"Concept '{concept_id}' not found.", code=ErrorCode.CONCEPT_NOT_FOUND)
        return Result.ok(concept)

    def _tutor_reply(self, concept: Concept, audience_level: str, history: List[Turn]) -> str:
        persona = build_persona(concept.name, concept.description, audience_level)
        return self._model.complete(
            persona,
            [t.to_message() for t in history],
            temperature=0.7,
            max_tokens=300,
        )

    # ------------------------------------------------------------------
    # START
    # ------------------------------------------------------------------
    def start_session(self, concept_id: str, audience_level: str) -> Result[ReviewConversation]:
        """Open a conversation with the tutor's first question. No session exists on failure."""
        audience = validate_audience_level(audience_level)
        if not audience.is_success:
            return Result.propagate(audience)
        loaded = self._load_concept(concept_id)
        if not loaded.is_success:
            return Result.propagate(loaded)

        try:
            opening_question = self._tutor_reply(
                loaded.value, audience_level, [Turn(role=USER, content=OPENING_UTTERANCE)]
            )
        except UpstreamUnavailable as e:
            logger.error("Could not start review of concept %s: %s", concept_id, e)
            return Result.fail(str(e), code=ErrorCode.UPSTREAM_UNAVAILABLE)

        logger.info("Started %s review of concept %s", audience_level, concept_id)
        return self._domain.activate(
            ReviewConversation(concept_id=concept_id, audience_level=audience_level),
            opening_question,
        )

    def resume(self, concept_id: str, audience_level: str, history: Any) -> Result[ReviewConversation]:
        """Rebuild an active conversation from the history a caller sends back."""
        audience = validate_audience_level(audience_level)
        if not audience.is_success:
            return Result.propagate(audience)
        turns = validate_history(history)
        if not turns.is_success:
            return Result.propagate(turns)
        return Result.ok(
            ReviewConversation(
                concept_id=concept_id,
                audience_level=audience_level,
                history=turns.value,
                state=ACTIVE,
            )
        )

    # ------------------------------------------------------------------
    # CONTINUE
    # ------------------------------------------------------------------
    def continue_session(self, conversation: ReviewConversation, utterance: str) -> Result[ReviewConversation]:
        """
        Add one learner turn and one tutor reply. On a model failure the caller's
        conversation is unchanged and the same turn can be retried.
        """
        active = self._domain.require_active(conversation, self._max_turns)
        if not active.is_success:
            return Result.propagate(active)
        utterance = (utterance or "").strip()
        if not utterance:
            return Result.fail("Your explanation cannot be empty.")
        loaded = self._load_concept(conversation.concept_id)
        if not loaded.is_success:
            return Result.propagate(loaded)

        try:
            reply = self._tutor_reply(
                loaded.value,
                conversation.audience_level,
                self._domain.with_user_turn(conversation, utterance),
            )
        except UpstreamUnavailable as e:
            logger.warning("Tutor turn failed for concept %s: %s", conversation.concept_id, e)
            return Result.fail(str(e), code=ErrorCode.UPSTREAM_UNAVAILABLE)

        return Result.ok(self._domain.with_exchange(conversation, utterance, reply))

    # ------------------------------------------------------------------
    # END
    # ------------------------------------------------------------------
    def end_session(self, conversation: ReviewConversation) -> Result[tuple[ReviewConversation, ReviewSession]]:
        """
        Score the transcript, archive it, and record the resulting progress level.
        Scoring problems fall back to a default assessment; only storage errors raise.
        """
        active = self._domain.require_active(conversation)
        if not active.is_success:
            return Result.propagate(active)
        loaded = self._load_concept(conversation.concept_id)
        if not loaded.is_success:
            return Result.propagate(loaded)
        concept = loaded.value

        feedback = self._scorer.score(concept, conversation.audience_level, conversation.history)
        concluded = self._domain.conclude(conversation, feedback)
        if not concluded.is_success:
            return Result.propagate(concluded)
        ended, session = concluded.value

        outcome = self._concept_domain.apply_review_outcome(concept, feedback.progress_level)
        if not outcome.is_success:
            return Result.propagate(outcome)
        self._sessions.save(session, outcome.value)

        logger.info(
            "Ended review of concept %s: %s%s",
            concept.id,
            feedback.progress_level,
            " (fallback feedback)" if feedback.is_fallback else "",
        )
        return Result.ok((ended, session))

    # ------------------------------------------------------------------
    # ARCHIVE
    # ------------------------------------------------------------------
    def list_sessions(self, concept_id: str) -> Result[List[ReviewSession]]:
        loaded = self._load_concept(concept_id)
        if not loaded.is_success:
            return Result.propagate(loaded)
        return Result.ok(self._sessions.list_by_concept(concept_id))

    def get_session(self, session_id: str) -> Optional[ReviewSession]:
        return self._sessions.get_by_id(session_id)
