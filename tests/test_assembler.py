import asyncio
import time

import pytest

from conftest import MockGainFilter, MockTTSProvider, audio_for
from newscast.errors import TTSError
from newscast.models import Story
from newscast.services.assembler import SEPARATOR, AudioAssembler, PlanItem, plan_segments
from newscast.services.separator import SeparatorAsset
from newscast.services.tts_generator import TTSGenerator

STING = b"GAIN:STING"


def _story(content: str, title: str = "Story") -> Story:
    return Story(title=title, content=content, sources=[])


@pytest.fixture
def provider():
    return MockTTSProvider()


@pytest.fixture
def separator(sting_file):
    return SeparatorAsset(sting_file, audio_filter=MockGainFilter())


@pytest.fixture
def assembler(provider, separator):
    return AudioAssembler(TTSGenerator(provider), separator, concurrency=3)


def test_plan_full_episode():
    plan = plan_segments("Intro.", [_story("One."), _story("Two.")], "Outro.")
    assert plan == [
        PlanItem("speech", "Intro."),
        SEPARATOR,
        PlanItem("speech", "One."),
        SEPARATOR,
        PlanItem("speech", "Two."),
        SEPARATOR,
        PlanItem("speech", "Outro."),
    ]


def test_plan_without_stories_or_outro_has_no_separator():
    assert plan_segments("Just an intro.", [], "") == [PlanItem("speech", "Just an intro.")]


def test_plan_never_starts_with_separator_before_outro():
    assert plan_segments("", [], "Bye.") == [PlanItem("speech", "Bye.")]


def test_plan_skips_stories_without_content():
    plan = plan_segments("Hi.", [_story(""), _story("Real news.")], "")
    assert plan == [PlanItem("speech", "Hi."), SEPARATOR, PlanItem("speech", "Real news.")]


def test_plan_empty_script():
    assert plan_segments("", [], "") == []


@pytest.mark.asyncio
async def test_assemble_orders_audio_and_separators(assembler):
    stories = [_story("First story."), _story("Second story.")]

    audio = await assembler.assemble("Welcome.", stories, "Goodbye.")

    assert audio == b"".join(
        [
            audio_for("Welcome."),
            STING,
            audio_for("First story."),
            STING,
            audio_for("Second story."),
            STING,
            audio_for("Goodbye."),
        ]
    )


@pytest.mark.asyncio
async def test_assemble_length_is_speech_plus_separators(assembler, provider):
    stories = [_story("A quick one."), _story("Another one."), _story("A third.")]

    audio = await assembler.assemble("Intro here.", stories, "Outro here.")

    speech_bytes = sum(len(audio_for(text)) for text in provider.calls)
    assert len(audio) == speech_bytes + 4 * len(STING)


@pytest.mark.asyncio
async def test_assemble_without_stories_or_outro_skips_separator(assembler, separator):
    audio = await assembler.assemble("Only the intro.", [], "")

    assert audio == audio_for("Only the intro.")
    assert not separator.loaded


@pytest.mark.asyncio
async def test_assemble_keeps_order_when_synthesis_finishes_out_of_order(separator):
    class ReversedLatencyProvider(MockTTSProvider):
        def synth(self, *, text, voice, style=None, format="mp3"):
            # Earlier segments take longer
            time.sleep({"Intro.": 0.06, "One.": 0.04, "Two.": 0.02}.get(text, 0))
            return super().synth(text=text, voice=voice, style=style, format=format)

    assembler = AudioAssembler(TTSGenerator(ReversedLatencyProvider()), separator, concurrency=4)

    audio = await assembler.assemble("Intro.", [_story("One."), _story("Two.")], "Outro.")

    assert audio == b"".join(
        [audio_for("Intro."), STING, audio_for("One."), STING, audio_for("Two."), STING, audio_for("Outro.")]
    )


@pytest.mark.asyncio
async def test_concurrent_requests_load_separator_once(sting_file, provider):
    audio_filter = MockGainFilter()
    separator = SeparatorAsset(sting_file, audio_filter=audio_filter)
    assembler = AudioAssembler(TTSGenerator(provider), separator)

    results = await asyncio.gather(
        *(assembler.assemble("Hi.", [_story("News.")], "Bye.") for _ in range(5))
    )

    assert audio_filter.calls == 1
    assert len(set(results)) == 1


@pytest.mark.asyncio
async def test_failed_segment_cancels_pending_segments(separator):
    provider = MockTTSProvider(failures=[TTSError("bad input", status=400)])
    assembler = AudioAssembler(TTSGenerator(provider), separator, concurrency=1)

    with pytest.raises(TTSError):
        await assembler.assemble("Intro.", [_story("One."), _story("Two.")], "Outro.")
    await asyncio.sleep(0.05)

    assert provider.calls == ["Intro."]
