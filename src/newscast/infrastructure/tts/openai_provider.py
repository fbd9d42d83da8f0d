from __future__ import annotations

import logging
import os

import openai
from dotenv import load_dotenv
from openai import OpenAI  # Main client

from newscast.errors import MissingCredentialsError, TTSError
from newscast.infrastructure.tts.base import OPENAI_CHAR_LIMIT, ResponseFormat, TTSProvider

load_dotenv()
logger = logging.getLogger(__name__)

# Models that accept a free-form delivery instruction.
_INSTRUCTABLE_MODELS = ("gpt-4o-mini-tts",)


class OpenAIProvider(TTSProvider):
    """TTS provider for OpenAI API (v1.0+).

    Uses tts-1 by default. Style prompts are only forwarded to models that accept
    ``instructions``; for tts-1 and tts-1-hd they are ignored.
    """

    name: str = "openai"
    char_limit: int = OPENAI_CHAR_LIMIT
    sample_rate: int = 24000  # speech endpoint always returns 24 kHz mono

    def __init__(
        self, api_key: str | None = None, model: str = "tts-1", client: OpenAI | None = None
    ) -> None:
        self.model = model
        if client is not None:
            self.client = client
            return
        key = api_key or os.getenv("OPENAI_API_KEY")
        if not key:
            raise MissingCredentialsError("OpenAI", "Set OPENAI_API_KEY or pass api_key.")
        self.client = OpenAI(api_key=key)

    def synth(
        self,
        *,
        text: str,
        voice: str,
        style: str | None = None,
        format: ResponseFormat = "mp3",
    ) -> bytes:
        """Synthesize audio using OpenAI TTS API."""
        api_params = {
            "model": self.model,
            "voice": voice,  # type: ignore[arg-type]
            "input": text,
            "response_format": format,
        }
        if style:
            if self.model in _INSTRUCTABLE_MODELS:
                api_params["instructions"] = style
            else:
                logger.debug("Style prompt ignored for model %s", self.model)

        try:
            response = self.client.audio.speech.create(**api_params)
        except openai.APIStatusError as e:
            raise TTSError(f"OpenAI speech request failed: {e.message}", status=e.status_code) from e
        except openai.APIError as e:
            raise TTSError(f"OpenAI speech request failed: {e}") from e

        return response.content
