from __future__ import annotations

import re

# OpenAI TTS has a 4096 character limit, leave some buffer
DEFAULT_MAX_CHARS = 4000

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> list[str]:
    """Split *text* after terminal punctuation followed by whitespace."""
    return [s for s in _SENTENCE_BOUNDARY.split(text.strip()) if s]


def chunk_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> list[str]:
    """Split text into chunks of at most *max_chars* on sentence boundaries.

    Sentences are packed greedily. A single sentence longer than *max_chars* is
    never split; it becomes its own oversized chunk and the TTS provider decides
    whether to reject or truncate it.
    """
    if max_chars < 1:
        raise ValueError("max_chars must be at least 1")

    chunks: list[str] = []
    current_chunk = ""

    for sentence in split_sentences(text):
        if not current_chunk:
            current_chunk = sentence
        elif len(current_chunk) + 1 + len(sentence) <= max_chars:
            current_chunk = f"{current_chunk} {sentence}"
        else:
            chunks.append(current_chunk)
            current_chunk = sentence

    if current_chunk:
        chunks.append(current_chunk)

    return chunks
