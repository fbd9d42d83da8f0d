"""TTS provider implementations (OpenAI, ElevenLabs)."""

# Re-export for easier access, e.g. `from newscast.infrastructure.tts import OpenAIProvider`
from .base import ResponseFormat, TTSProvider
from .elevenlabs_provider import ElevenLabsProvider
from .openai_provider import OpenAIProvider

__all__ = [
    "ElevenLabsProvider",
    "OpenAIProvider",
    "ResponseFormat",
    "TTSProvider",
]
