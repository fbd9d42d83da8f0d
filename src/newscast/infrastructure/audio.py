"""Audio helpers.

Episode audio is assembled by concatenating raw MP3 byte streams. MP3 is a
sequence of self-contained frames, so appending one encoded buffer to another
yields a playable stream without re-encoding, provided every buffer shares
the same sample rate and channel layout (the separator is resampled to the
TTS provider's rate for this reason). This does NOT hold for formats
with a container header (wav, m4a, ogg); switching ``format`` away from mp3
requires decoding and re-muxing with pydub instead of ``concat_frames``.
"""

from __future__ import annotations

import io
import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from newscast.errors import AssetError

logger = logging.getLogger(__name__)


def gain_to_db(multiplier: float) -> float:
    """Convert a linear amplitude multiplier (e.g. 0.3) to decibels."""
    if multiplier <= 0:
        raise ValueError("gain multiplier must be positive")
    return 20 * math.log10(multiplier)


def concat_frames(buffers: Iterable[bytes]) -> bytes:
    """Join frame-based audio buffers in order."""
    return b"".join(buffers)


class AudioFilter(ABC):
    """External audio filter applied to the separator asset."""

    @abstractmethod
    def apply_gain(self, audio: bytes, multiplier: float) -> bytes:
        """Return *audio* re-encoded with a linear gain *multiplier* applied."""


class PydubGainFilter(AudioFilter):
    """Gain filter backed by pydub (which shells out to ffmpeg).

    The result is resampled to *frame_rate* and *channels* so its MP3 frames
    match the speech stream they are concatenated with.
    """

    def __init__(
        self,
        frame_rate: int = 24000,
        channels: int = 1,
        output_format: str = "mp3",
        bitrate: str = "128k",
    ) -> None:
        self.frame_rate = frame_rate
        self.channels = channels
        self.output_format = output_format
        self.bitrate = bitrate

    def apply_gain(self, audio: bytes, multiplier: float) -> bytes:
        gain_db = gain_to_db(multiplier)
        try:
            segment = AudioSegment.from_file(io.BytesIO(audio))
            segment = segment.set_frame_rate(self.frame_rate).set_channels(self.channels)
            adjusted = segment.apply_gain(gain_db)
            out = io.BytesIO()
            adjusted.export(
                out,
                format=self.output_format,
                bitrate=self.bitrate,
                parameters=["-ar", str(self.frame_rate), "-ac", str(self.channels)],
            )
        except (CouldntDecodeError, OSError) as e:
            raise AssetError(f"Audio filter failed: {e}") from e

        logger.info(
            f"Applied {gain_db:.1f} dB gain to {len(audio)} byte asset "
            f"({self.frame_rate} Hz, {self.channels} ch)"
        )
        return out.getvalue()
