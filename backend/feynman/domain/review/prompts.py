"""Prompt templates for the tutor persona and the post-session assessment."""
from __future__ import annotations
from typing import List

from feynman.domain.review.models import CHILD, CLASSMATE, MIDDLE_SCHOOLER, USER, Turn

OPENING_UTTERANCE = "I'm ready to explain this concept."

AUDIENCE_FRAMINGS: dict[str, str] = {
    CLASSMATE: (
        "a university classmate who attended the same course but missed this lecture. "
        "You know the general field and can handle technical vocabulary, but you want "
        "the reasoning spelled out"
    ),
    MIDDLE_SCHOOLER: (
        "a curious 13-year-old middle school student. You know basic school maths and "
        "science but no specialised vocabulary, so you ask what unfamiliar words mean"
    ),
    CHILD: (
        "a bright 7-year-old child. You only understand everyday words and short "
        "sentences, and you love examples from daily life like toys, food and animals"
    ),
}

PERSONA_TEMPLATE = """You are role-playing as {framing}.

A student is going to teach you the concept "{concept_name}" using the Feynman technique.
What the concept covers: {concept_description}

How to behave:
- Stay in character. You are the learner; never lecture or give the full answer yourself.
- Ask exactly one short, genuine question per reply.
- If the student uses a term your character would not know, ask what it means.
- If an explanation is vague, ask for an example or an analogy.
- If something they say is wrong, ask a question that leads them to notice it.
- Keep replies under 80 words.

Start by greeting the student and asking an opening question about "{concept_name}"."""

FEEDBACK_TEMPLATE = """You are an expert teacher assessing how well a student explained a concept
using the Feynman technique. The student was explaining to {audience}.

Concept: {concept_name}
Description: {concept_description}

Transcript:
{transcript}

Return ONLY a JSON object with exactly these keys:
{{
  "summary": "2-3 sentences on how well the student explained the concept",
  "clearlyExplained": ["points the student explained clearly and correctly"],
  "unclearPoints": ["points that were vague, incomplete or wrong"],
  "jargonUsed": ["technical terms the student used without explaining them"],
  "progressLevel": "NotStarted | Reviewing | Understood | Mastered"
}}

Choose progressLevel with these criteria:
- NotStarted: the student did not attempt an explanation or went off track.
- Reviewing: the student attempted it but there are major gaps or errors.
- Understood: mostly correct, with only minor gaps.
- Mastered: complete and correct, and the student used analogies or examples well."""

_AUDIENCE_NAMES: dict[str, str] = {
    CLASSMATE: "a classmate",
    MIDDLE_SCHOOLER: "a middle school student",
    CHILD: "a young child",
}


def build_persona(concept_name: str, concept_description: str, audience_level: str) -> str:
    return PERSONA_TEMPLATE.format(
        framing=AUDIENCE_FRAMINGS[audience_level],
        concept_name=concept_name,
        concept_description=concept_description,
    )


def flatten_transcript(history: List[Turn]) -> str:
    """Render turns as a 'Student:' / 'Tutor:' dialogue."""
    lines = []
    for turn in history:
        speaker = "Student" if turn.role == USER else "Tutor"
        lines.append(f"{speaker}: {turn.content}")
    return "\n".join(lines)


def build_feedback_prompt(
    concept_name: str,
    concept_description: str,
    audience_level: str,
    history: List[Turn],
) -> str:
    return FEEDBACK_TEMPLATE.format(
        audience=_AUDIENCE_NAMES.get(audience_level, "a learner"),
        concept_name=concept_name,
        concept_description=concept_description,
        transcript=flatten_transcript(history),
    )
