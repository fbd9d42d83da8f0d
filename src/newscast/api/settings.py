import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_SEPARATOR_PATH = Path(__file__).resolve().parent.parent / "assets" / "sting.wav"


class Settings(BaseSettings):
    """Application settings loaded from environment variables or `.env` file."""

    log_level: str = Field(default="INFO", description="Logging level")
    openai_api_key: str | None = None
    eleven_labs_api_key: str | None = None

    # Script generation
    script_model: str = Field(default="gpt-4o", description="Chat model that writes the script")
    script_temperature: float = 0.7
    script_max_tokens: int = 2000

    # Speech synthesis
    tts_provider: Literal["openai", "eleven"] = Field(default="openai", description="openai or eleven")
    tts_model: str = Field(default="tts-1", description="Speech model")
    tts_voice: str = Field(default="onyx", description="Voice used for every segment")
    tts_style: str = Field(
        default="Speak like a warm, upbeat news podcast host with clear, natural pacing.",
        description="Delivery instruction, forwarded to models that support it",
    )
    tts_max_chars: int = Field(
        default=4000, ge=1, description="Chunk size, kept below the provider's 4096 ceiling"
    )
    tts_max_retries: int = Field(default=2, ge=0, description="Retries per chunk after a failure")
    tts_concurrency: int = Field(default=3, ge=1, description="Parallel segment syntheses")

    # Separator sting
    separator_path: Path = Field(default=DEFAULT_SEPARATOR_PATH)
    separator_gain: float = Field(default=0.3, gt=0.0, description="Linear gain for the sting")

    max_topics: int = Field(default=6, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("tts_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Accept 'elevenlabs' as an alias for 'eleven'."""
        v = (v or "openai").lower()
        return "eleven" if v == "elevenlabs" else v


@lru_cache
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached instance of Settings."""
    s = Settings()
    logging.basicConfig(level=s.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("Starting Newscast")
    logger.info("=" * 60)
    logger.info(f"Script model: {s.script_model}")
    logger.info(f"TTS Provider: {s.tts_provider} ({s.tts_model}, voice={s.tts_voice})")
    logger.info(f"Separator asset: {s.separator_path}")
    logger.info("=" * 60)

    if not s.openai_api_key:
        logger.warning("OPENAI_API_KEY not set, episode generation will fail")
    if s.tts_provider == "eleven" and not s.eleven_labs_api_key:
        logger.warning("ELEVEN_LABS_API_KEY not set but TTS_PROVIDER=eleven!")

    return s
