"""Turns a finished transcript into an assessment and a progress level."""
from __future__ import annotations
import logging
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from feynman.ai.interfaces.language_model import LanguageModel, UpstreamUnavailable
from feynman.ai.json_payload import MalformedPayload, extract_json
from feynman.domain.concept.models import Concept
from feynman.domain.concept.rules import normalize_progress_level
from feynman.domain.review.models import Feedback, Turn
from feynman.domain.review.prompts import build_feedback_prompt
from feynman.domain.review.rules import fallback_feedback

logger = logging.getLogger(__name__)

_SCORER_SYSTEM = "You are a strict but fair teaching assessor. You output only structured JSON."


class FeedbackPayload(BaseModel):
    """Schema the model's assessment must satisfy before it is trusted."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str = Field(min_length=1)
    clearly_explained: List[str]
    unclear_points: List[str]
    jargon_used: List[str]
    progress_level: str

    @field_validator("clearly_explained", "unclear_points", "jargon_used")
    @classmethod
    def _as_set(cls, items: List[str]) -> List[str]:
        seen: List[str] = []
        for item in items:
            item = item.strip()
            if item and item not in seen:
                seen.append(item)
        return seen

    @field_validator("progress_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = normalize_progress_level(value)
        if level is None:
            raise ValueError(f"unknown progress level {value!r}")
        return level


class FeedbackScorer:
    def __init__(self, model: LanguageModel):
        self._model = model

    def score(self, concept: Concept, audience_level: str, transcript: List[Turn]) -> Feedback:
        """Never raises for model problems; any failure yields the fallback assessment."""
        prompt = build_feedback_prompt(concept.name, concept.description, audience_level, transcript)
        try:
            reply = self._model.complete(
                _SCORER_SYSTEM,
                [{"role": "user", "content": prompt}],
                temperature=0.2,
                max_tokens=800,
            )
            payload = FeedbackPayload.model_validate(extract_json(reply))
        except UpstreamUnavailable as e:
            logger.warning("Feedback model call failed for concept %s: %s", concept.id, e)
            return fallback_feedback()
        except (MalformedPayload, ValidationError) as e:
            logger.warning("Feedback for concept %s did not match the expected shape: %s", concept.id, e)
            return fallback_feedback()

        return Feedback(
            summary=payload.summary.strip(),
            clearly_explained=payload.clearly_explained,
            unclear_points=payload.unclear_points,
            jargon_used=payload.jargon_used,
            progress_level=payload.progress_level,
        )
