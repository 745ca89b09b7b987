"""Abstract interface for the external language model and speech-transcription capability."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List


class UpstreamUnavailable(Exception):
    """The model provider could not produce a response (transport, API or configuration error)."""


class LanguageModel(ABC):

    @abstractmethod
    def complete(
        self,
        system: str,
        messages: List[dict],
        *,
        temperature: float = 0.7,
        max_tokens: int = 600,
    ) -> str:
        """Return one assistant reply for the system instruction plus ordered role/content messages."""
        ...

    @abstractmethod
    def transcribe(self, audio: bytes, filename: str) -> str:
        """Return the spoken text of an audio recording."""
        ...
