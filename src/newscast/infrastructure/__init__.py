"""I/O boundary adapters (language model, TTS, audio filtering)."""

from .audio import AudioFilter, PydubGainFilter, concat_frames
from .llm import OpenAIScriptLLM, ScriptLLM
from .tts import (
    ElevenLabsProvider,
    OpenAIProvider,
    ResponseFormat,
    TTSProvider,
)

__all__ = [
    "AudioFilter",
    "ElevenLabsProvider",
    "OpenAIProvider",
    "OpenAIScriptLLM",
    "PydubGainFilter",
    "ResponseFormat",
    "ScriptLLM",
    "TTSProvider",
    "concat_frames",
]
