from __future__ import annotations

import logging
from collections.abc import Iterable

from newscast.api.settings import Settings
from newscast.errors import ConfigError, MissingCredentialsError
from newscast.infrastructure.audio import PydubGainFilter
from newscast.infrastructure.llm import OpenAIScriptLLM
from newscast.infrastructure.tts import ElevenLabsProvider, OpenAIProvider, TTSProvider
from newscast.models import PodcastArtifact
from newscast.services.assembler import AudioAssembler
from newscast.services.duration import estimate_duration
from newscast.services.script_structurer import ScriptStructurer
from newscast.services.separator import get_separator_asset
from newscast.services.tts_generator import TTSGenerator

logger = logging.getLogger(__name__)

MAX_TOPICS = 6


class EpisodeGenerator:
    """Runs the whole pipeline: script, speech, assembly and duration."""

    def __init__(
        self,
        structurer: ScriptStructurer,
        assembler: AudioAssembler,
        max_topics: int = MAX_TOPICS,
    ) -> None:
        self.structurer = structurer
        self.assembler = assembler
        self.max_topics = max_topics

    async def generate_episode(self, topic_ids: Iterable[str]) -> PodcastArtifact:
        """Generate one episode for 1..max_topics topic ids."""
        topic_ids = list(dict.fromkeys(topic_ids))
        if not topic_ids:
            raise ConfigError("At least one topic is required")
        if len(topic_ids) > self.max_topics:
            raise ConfigError(f"Maximum {self.max_topics} topics allowed")

        script = await self.structurer.generate_script(topic_ids)
        audio = await self.assembler.assemble(script.intro, script.stories, script.outro)
        duration = estimate_duration(script.intro, script.stories, script.outro)

        logger.info(
            f"Episode '{script.title}' ready: {len(audio)} bytes, ~{duration:.0f}s, "
            f"{len(script.stories)} stories"
        )
        return PodcastArtifact(
            audio_bytes=audio,
            title=script.title,
            duration=duration,
            intro=script.intro,
            stories=tuple(script.stories),
            outro=script.outro,
        )


def build_tts_provider(settings: Settings) -> TTSProvider:
    """Select the TTS provider configured in *settings*."""
    if settings.tts_provider == "eleven":
        return ElevenLabsProvider(api_key=settings.eleven_labs_api_key)
    return OpenAIProvider(api_key=settings.openai_api_key, model=settings.tts_model)


def build_episode_generator(settings: Settings) -> EpisodeGenerator:
    """Wire the production collaborators from *settings*."""
    if not settings.openai_api_key:
        raise MissingCredentialsError("OpenAI")

    llm = OpenAIScriptLLM(
        api_key=settings.openai_api_key,
        model=settings.script_model,
        temperature=settings.script_temperature,
        max_tokens=settings.script_max_tokens,
    )
    provider = build_tts_provider(settings)
    tts = TTSGenerator(
        provider,
        voice=settings.tts_voice,
        style=settings.tts_style,
        max_chars=settings.tts_max_chars,
        max_retries=settings.tts_max_retries,
    )
    # Sting frames must share the speech stream's sample rate
    separator = get_separator_asset(settings, PydubGainFilter(frame_rate=provider.sample_rate))

    return EpisodeGenerator(
        ScriptStructurer(llm),
        AudioAssembler(tts, separator, concurrency=settings.tts_concurrency),
        max_topics=settings.max_topics,
    )
