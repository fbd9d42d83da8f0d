import threading
from pathlib import Path

import pytest

from newscast.errors import TTSError
from newscast.infrastructure.audio import AudioFilter
from newscast.infrastructure.llm import ScriptLLM
from newscast.infrastructure.tts import TTSProvider
from newscast.services.separator import set_separator_asset


class MockTTSProvider(TTSProvider):
    """Returns deterministic fake audio and records every call."""

    def __init__(self, failures: list[TTSError] | None = None, char_limit: int = 4096):
        self.calls: list[str] = []
        self.failures = list(failures or [])
        self.char_limit = char_limit
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "mock"

    def synth(self, *, text: str, voice: str, style: str | None = None, format: str = "mp3") -> bytes:
        with self._lock:
            self.calls.append(text)
            if self.failures:
                raise self.failures.pop(0)
        return audio_for(text)


class MockScriptLLM(ScriptLLM):
    """Replays a canned reply."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def complete(self, *, system: str, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class MockGainFilter(AudioFilter):
    """Counts invocations instead of running ffmpeg."""

    def __init__(self, error: Exception | None = None):
        self.calls = 0
        self.error = error

    def apply_gain(self, audio: bytes, multiplier: float) -> bytes:
        self.calls += 1
        if self.error:
            raise self.error
        return b"GAIN:" + audio


def audio_for(text: str) -> bytes:
    return f"<{text}>".encode()


@pytest.fixture
def sting_file(tmp_path: Path) -> Path:
    path = tmp_path / "sting.wav"
    path.write_bytes(b"STING")
    return path


@pytest.fixture(autouse=True)
def reset_separator_singleton():
    set_separator_asset(None)
    yield
    set_separator_asset(None)
