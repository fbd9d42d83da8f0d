from __future__ import annotations

import asyncio
import logging
from functools import partial

from newscast.errors import TTSError
from newscast.infrastructure.audio import concat_frames
from newscast.infrastructure.tts import TTSProvider
from newscast.services.chunker import DEFAULT_MAX_CHARS, chunk_text

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "Speak like a warm, upbeat news podcast host with clear, natural pacing."


def _is_retryable(error: TTSError) -> bool:
    """Client errors other than rate limiting will fail the same way again."""
    return error.status is None or error.status == 429 or error.status >= 500


class TTSGenerator:
    """Single-voice speech synthesizer.

    Voice, style and format are fixed per instance so every segment of an
    episode has the same timbre.
    """

    def __init__(
        self,
        provider: TTSProvider,
        voice: str = "onyx",
        style: str | None = DEFAULT_STYLE,
        max_chars: int = DEFAULT_MAX_CHARS,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
    ) -> None:
        self.provider = provider
        self.voice = voice
        self.style = style
        # Never chunk above what the provider accepts in one call
        self.max_chars = min(max_chars, provider.char_limit)
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def synthesize(self, text: str) -> bytes:
        """Return MP3 bytes for *text*, chunking when it exceeds ``max_chars``."""
        if len(text) <= self.max_chars:
            return await self._generate_single_chunk(text)

        logger.info(f"Text too long ({len(text)} chars), chunking for TTS processing")
        return await self._generate_chunked_audio(text)

    async def _generate_chunked_audio(self, text: str) -> bytes:
        """Synthesize each chunk in order and join the raw frames."""
        chunks = chunk_text(text, self.max_chars)
        logger.info(f"Split text into {len(chunks)} chunks for TTS processing")

        audio_parts = []
        for i, chunk in enumerate(chunks):
            logger.debug(f"Processing chunk {i + 1}/{len(chunks)} ({len(chunk)} chars)")
            audio_parts.append(await self._generate_single_chunk(chunk))

        return concat_frames(audio_parts)

    async def _generate_single_chunk(self, text: str) -> bytes:
        """Synthesize one chunk, retrying with exponential backoff."""
        loop = asyncio.get_running_loop()
        call = partial(
            self.provider.synth,
            text=text,
            voice=self.voice,
            style=self.style,
            format="mp3",
        )

        attempt = 0
        while True:
            try:
                return await loop.run_in_executor(None, call)
            except TTSError as e:
                if attempt >= self.max_retries or not _is_retryable(e):
                    logger.error(f"TTS failed for {len(text)} char chunk: {e}")
                    raise
                attempt += 1
                wait_time = self.retry_base_delay * 2 ** (attempt - 1)
                logger.warning(f"TTS attempt {attempt} failed ({e}), retrying after {wait_time}s")
                await asyncio.sleep(wait_time)
