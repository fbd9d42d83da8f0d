"""Process-wide cache for the sting played between segments."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from newscast.errors import AssetError
from newscast.infrastructure.audio import AudioFilter, PydubGainFilter

logger = logging.getLogger(__name__)

DEFAULT_GAIN = 0.3  # about -10.5 dB, sits under the narration


class SeparatorAsset:
    """Lazily loads the sting, applies gain once and caches the bytes.

    The first caller runs the filter while holding the lock; concurrent callers
    wait and then read the cached value. A failed load leaves the cache empty so
    the next call tries again.
    """

    def __init__(
        self,
        path: Path,
        audio_filter: AudioFilter | None = None,
        gain: float = DEFAULT_GAIN,
    ) -> None:
        self.path = Path(path)
        self.audio_filter = audio_filter or PydubGainFilter()
        self.gain = gain
        self._audio: bytes | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._audio is not None

    def get(self) -> bytes:
        """Return the gain-adjusted sting, loading it on first use."""
        audio = self._audio
        if audio is not None:
            return audio

        with self._lock:
            if self._audio is None:
                self._audio = self._load()
            return self._audio

    def _load(self) -> bytes:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise AssetError(f"Could not read separator asset {self.path}: {e}") from e

        try:
            adjusted = self.audio_filter.apply_gain(raw, self.gain)
        except AssetError:
            raise
        except Exception as e:
            raise AssetError(f"Separator gain adjustment failed: {e}") from e

        logger.info(f"Separator asset loaded from {self.path.name} ({len(adjusted)} bytes)")
        return adjusted


_default_asset: SeparatorAsset | None = None
_default_lock = threading.Lock()


def get_separator_asset(settings=None, audio_filter: AudioFilter | None = None) -> SeparatorAsset:
    """Return the process-wide separator asset, creating it on first use.

    *settings* and *audio_filter* only apply to the call that creates it.
    """
    global _default_asset
    if _default_asset is None:
        with _default_lock:
            if _default_asset is None:
                if settings is None:
                    from newscast.api.settings import get_settings

                    settings = get_settings()
                _default_asset = SeparatorAsset(
                    settings.separator_path, audio_filter=audio_filter, gain=settings.separator_gain
                )
    return _default_asset


def set_separator_asset(asset: SeparatorAsset | None) -> None:
    """Replace (or with None, reset) the process-wide separator asset."""
    global _default_asset
    with _default_lock:
        _default_asset = asset
