from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from newscast.infrastructure.audio import concat_frames
from newscast.models import Story
from newscast.services.separator import SeparatorAsset
from newscast.services.tts_generator import TTSGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanItem:
    """One slot of the episode timeline: spoken text or the sting."""

    kind: str  # "speech" or "separator"
    text: str = ""


SEPARATOR = PlanItem(kind="separator")


def plan_segments(intro: str, stories: Sequence[Story], outro: str) -> list[PlanItem]:
    """Lay out the episode as intro, (sting, story)*, sting, outro.

    Stories without content are skipped. A sting is only placed where a spoken
    segment follows it, and never at the very start of the episode.
    """
    plan: list[PlanItem] = []
    if intro.strip():
        plan.append(PlanItem(kind="speech", text=intro))

    for story in stories:
        if not story.content.strip():
            logger.debug(f"Skipping story without content: {story.title!r}")
            continue
        plan.append(SEPARATOR)
        plan.append(PlanItem(kind="speech", text=story.content))

    if outro.strip():
        if plan:
            plan.append(SEPARATOR)
        plan.append(PlanItem(kind="speech", text=outro))

    return plan


class AudioAssembler:
    """Synthesizes every segment of a script and joins them in playback order."""

    def __init__(
        self, tts: TTSGenerator, separator: SeparatorAsset, concurrency: int = 3
    ) -> None:
        self.tts = tts
        self.separator = separator
        self.concurrency = max(1, concurrency)

    async def assemble(self, intro: str, stories: Sequence[Story], outro: str) -> bytes:
        """Return the episode audio.

        Segments are synthesized concurrently; the result list from
        ``asyncio.gather`` keeps submission order, which is the playback order.
        If any segment fails, the segments still pending are cancelled and the
        error propagates.
        """
        plan = plan_segments(intro, stories, outro)
        if not plan:
            logger.warning("Nothing to synthesize, returning empty audio")
            return b""

        separator = b""
        if SEPARATOR in plan:
            loop = asyncio.get_running_loop()
            separator = await loop.run_in_executor(None, self.separator.get)

        semaphore = asyncio.Semaphore(self.concurrency)

        async def synthesize(text: str) -> bytes:
            async with semaphore:
                return await self.tts.synthesize(text)

        speech_items = [item for item in plan if item.kind == "speech"]
        logger.info(
            f"Synthesizing {len(speech_items)} segments "
            f"(max {self.concurrency} in parallel)"
        )
        tasks = [asyncio.ensure_future(synthesize(item.text)) for item in speech_items]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            # One failed segment fails the episode; stop the rest
            for task in tasks:
                task.cancel()
            raise
        speech_audio = iter(results)

        ordered = [separator if item.kind == "separator" else next(speech_audio) for item in plan]
        audio = concat_frames(ordered)
        logger.info(f"Assembled {len(plan)} parts into {len(audio)} bytes")
        return audio
