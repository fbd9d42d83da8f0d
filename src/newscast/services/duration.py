from __future__ import annotations

import math
from collections.abc import Sequence

from newscast.models import Story

WORDS_PER_MINUTE = 150
SEPARATOR_SECONDS = 1.5


def count_words(text: str) -> int:
    return len(text.split())


def estimate_duration(intro: str, stories: Sequence[Story], outro: str) -> float:
    """Approximate episode length in seconds.

    Speech is assumed at 150 words per minute, rounded up to whole seconds, plus
    1.5 s per story and 1.5 s for a non-empty outro. Never compared against the
    decoded audio.
    """
    word_count = (
        count_words(intro) + sum(count_words(s.content) for s in stories) + count_words(outro)
    )
    speech_seconds = math.ceil(word_count / WORDS_PER_MINUTE * 60)

    separator_count = len(stories) + (1 if outro.strip() else 0)
    return float(speech_seconds + separator_count * SEPARATOR_SECONDS)
