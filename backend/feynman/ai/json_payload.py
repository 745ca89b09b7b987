"""Decoding JSON out of free-form model replies."""
from __future__ import annotations
import json
import re
from typing import Any

# ```json, ```JSON, ``` ... with an optional language tag
_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*(.*?)```", re.DOTALL)


class MalformedPayload(ValueError):
    """The model reply did not contain decodable JSON."""


def extract_json(content: str) -> Any:
    """Decode a model reply, tolerating a surrounding markdown code fence."""
    text = (content or "").strip()

    # Clean possible markdown wrap
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1).strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedPayload(f"Model reply is not valid JSON: {e.msg} at position {e.pos}") from e
