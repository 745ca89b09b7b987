"""OpenAI SDK implementation of LanguageModel (works with OpenRouter and other compatible endpoints)."""
from __future__ import annotations
import logging
from typing import List, Optional

import openai

from feynman.ai.interfaces.language_model import LanguageModel, UpstreamUnavailable
from feynman.core import config

logger = logging.getLogger(__name__)


class OpenAILanguageModel(LanguageModel):
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        transcription_model: Optional[str] = None,
    ):
        api_key = config.OPENAI_API_KEY if api_key is None else api_key
        self.model = model or config.OPENAI_MODEL
        self.transcription_model = transcription_model or config.TRANSCRIPTION_MODEL
        self.client: Optional[openai.OpenAI] = None
        if api_key:
            self.client = openai.OpenAI(
                api_key=api_key,
                base_url=base_url or config.OPENAI_BASE_URL,
                timeout=config.OPENAI_TIMEOUT_SECONDS,
                max_retries=config.OPENAI_MAX_RETRIES,
            )
            logger.info("Language model client ready (model=%s)", self.model)
        else:
            logger.warning("OPENAI_API_KEY is not set; every model call will fail as unavailable")

    def _require_client(self) -> openai.OpenAI:
        if self.client is None:
            raise UpstreamUnavailable("Language model is not configured. Set OPENAI_API_KEY in backend/.env.")
        return self.client

    def complete(
        self,
        system: str,
        messages: List[dict],
        *,
        temperature: float = 0.7,
        max_tokens: int = 600,
    ) -> str:
        client = self._require_client()
        payload = [{"role": "system", "content": system}] + [
            {"role": m["role"], "content": m["content"]} for m in messages
        ]
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.OpenAIError as e:
            raise UpstreamUnavailable(f"Chat completion failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise UpstreamUnavailable("Chat completion returned no content.")
        return response.choices[0].message.content.strip()

    def transcribe(self, audio: bytes, filename: str) -> str:
        client = self._require_client()
        try:
            transcription = client.audio.transcriptions.create(
                model=self.transcription_model,
                file=(filename, audio),
            )
        except openai.OpenAIError as e:
            raise UpstreamUnavailable(f"Transcription failed: {e}") from e
        return (transcription.text or "").strip()
