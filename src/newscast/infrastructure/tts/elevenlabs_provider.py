from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from elevenlabs import ElevenLabs
from elevenlabs.core import ApiError

from newscast.errors import MissingCredentialsError, TTSError
from newscast.infrastructure.tts.base import ResponseFormat, TTSProvider

load_dotenv()
logger = logging.getLogger(__name__)

_OUTPUT_FORMATS = {
    "mp3": "mp3_44100_128",
    "pcm": "pcm_24000",
    "opus": "opus_48000_128",
}


class ElevenLabsProvider(TTSProvider):
    """TTS provider for ElevenLabs API."""

    name: str = "eleven"
    char_limit: int = 5000  # approximate, depends on model
    sample_rate: int = 44100  # matches _OUTPUT_FORMATS["mp3"]

    def __init__(
        self,
        api_key: str | None = None,
        model_id: str = "eleven_multilingual_v2",
        client: ElevenLabs | None = None,
    ) -> None:
        self.model_id = model_id
        if client is not None:
            self.client = client
            return
        key = api_key or os.getenv("ELEVEN_API_KEY") or os.getenv("ELEVEN_LABS_API_KEY")
        if not key:
            raise MissingCredentialsError("ElevenLabs", "Set ELEVEN_LABS_API_KEY or pass api_key.")
        self.client = ElevenLabs(api_key=key)

    def synth(
        self,
        *,
        text: str,
        voice: str,
        style: str | None = None,
        format: ResponseFormat = "mp3",
    ) -> bytes:
        """Synthesize audio using ElevenLabs API (2.x)."""
        output_format = _OUTPUT_FORMATS.get(format)
        if output_format is None:
            logger.warning("ElevenLabs does not support format '%s', using mp3", format)
            output_format = _OUTPUT_FORMATS["mp3"]

        try:
            audio_stream = self.client.text_to_speech.convert(
                text=text,
                voice_id=voice,
                model_id=self.model_id,
                output_format=output_format,
            )
            return b"".join(chunk for chunk in audio_stream if isinstance(chunk, bytes))
        except ApiError as e:
            raise TTSError(
                f"ElevenLabs speech request failed: {e.body}",
                status=e.status_code,
                service="ElevenLabs",
            ) from e
