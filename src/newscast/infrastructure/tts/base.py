from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

ResponseFormat = Literal["mp3", "opus", "aac", "flac", "wav", "pcm"]

# Hard input ceiling of the OpenAI speech endpoint.
OPENAI_CHAR_LIMIT = 4096


class TTSProvider(ABC):
    """Abstract base class for TTS providers."""

    #: Maximum number of input characters accepted by one ``synth`` call.
    char_limit: int = OPENAI_CHAR_LIMIT
    #: Sample rate (Hz) of the MP3 stream returned by ``synth``.
    sample_rate: int = 24000

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the (unique) short-name for this provider (e.g. 'openai')."""

    @abstractmethod
    def synth(
        self,
        *,  # force keyword-only args
        text: str,
        voice: str,  # voice ID
        style: str | None = None,  # style prompt
        format: ResponseFormat = "mp3",
    ) -> bytes:
        """Synthesise *text* with *voice* and optional *style*, returning raw audio bytes.

        Implementations raise ``newscast.errors.TTSError`` on failure.
        """
