"""Script generation service: prompts the language model and parses its JSON."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from newscast.errors import ConfigError, ParseError
from newscast.infrastructure.llm import ScriptLLM
from newscast.models import Source, Story, StructuredScript
from newscast.topics import resolve_topics

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional podcast host creating a daily personalized news podcast. "
    "Your style is engaging, informative, and conversational."
)

_CODE_FENCE = re.compile(r"```(?:json)?[ \t]*\n?")


def format_day(day: date) -> str:
    """Format *day* like 'Monday, October 19, 2026'."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def default_title(day: date) -> str:
    return f"Your Daily Podcast - {format_day(day)}"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a model reply: exactly one of script or error is set."""

    script: StructuredScript | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.script is not None


def parse_script(raw_text: str, day: date | None = None) -> ParseResult:
    """Parse *raw_text* as a StructuredScript.

    The text is parsed strictly first; if that fails, markdown code fences are
    stripped and the parse is retried once.
    """
    day = day or date.today()
    try:
        data = json.loads(raw_text.strip())
    except json.JSONDecodeError:
        unfenced = _CODE_FENCE.sub("", raw_text).strip()
        try:
            data = json.loads(unfenced)
        except json.JSONDecodeError as e:
            return ParseResult(error=ParseError(f"Reply is not valid JSON: {e}", raw_text))

    if not isinstance(data, dict):
        return ParseResult(
            error=ParseError(f"Expected a JSON object, got {type(data).__name__}", raw_text)
        )

    return ParseResult(script=_coerce_script(data, day))


def to_degraded_artifact(raw_text: str, day: date | None = None) -> StructuredScript:
    """Wrap an unparseable reply so the episode can still be voiced."""
    day = day or date.today()
    return StructuredScript(title=default_title(day), intro=raw_text, stories=[], outro="")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _coerce_sources(value: Any) -> list[Source]:
    sources = []
    for item in value if isinstance(value, list) else []:
        if isinstance(item, str) and item.strip():
            sources.append(Source(url=item.strip()))
        elif isinstance(item, dict) and _text(item.get("url")):
            sources.append(Source(title=_text(item.get("title")) or None, url=_text(item["url"])))
    return sources


def _coerce_story(value: Any) -> Story | None:
    if isinstance(value, str):
        return Story(title="Story", content=value.strip(), sources=[])
    if not isinstance(value, dict):
        return None
    return Story(
        title=_text(value.get("title")) or "Story",
        content=_text(value.get("content")),
        sources=_coerce_sources(value.get("sources")),
    )


def _coerce_script(data: dict[str, Any], day: date) -> StructuredScript:
    raw_stories = data.get("stories")
    stories = [
        story
        for story in (_coerce_story(s) for s in (raw_stories if isinstance(raw_stories, list) else []))
        if story is not None
    ]
    return StructuredScript(
        title=_text(data.get("title")) or default_title(day),
        intro=_text(data.get("intro")),
        stories=stories,
        outro=_text(data.get("outro")),
    )


def build_prompt(topic_names: Iterable[str], day: date) -> str:
    """Build the script request for the language model."""
    names = ", ".join(topic_names)
    return f"""Create a news podcast script for {format_day(day)} covering these topics: {names}.

Requirements:
1. "intro": 2-3 sentences welcoming the listener to their personalized daily podcast.
2. "stories": 2-3 stories. Each story has a "title", a "content" field with the spoken
   text, and a "sources" list of objects with "title" and "url".
3. "outro": 1-2 sentences wrapping up the episode.
4. Do NOT write transition phrases between stories (no "Next up", "Moving on");
   a musical sting is inserted between stories.
5. Write for the ear: conversational language and varied sentence lengths.

Respond with JSON only, exactly in this shape:
{{
  "title": "A catchy episode title",
  "intro": "...",
  "stories": [
    {{"title": "...", "content": "...", "sources": [{{"title": "...", "url": "https://..."}}]}}
  ],
  "outro": "..."
}}"""


class ScriptStructurer:
    """Turns topic ids into a StructuredScript using a language model."""

    def __init__(self, llm: ScriptLLM, today: Callable[[], date] = date.today) -> None:
        self.llm = llm
        self.today = today

    async def generate_script(self, topic_ids: Iterable[str]) -> StructuredScript:
        """Generate the episode script.

        Raises ConfigError for empty or unknown topics and UpstreamError when the
        model cannot be reached. Malformed replies never raise; they become a
        degraded script whose intro is the raw reply.
        """
        topic_ids = list(dict.fromkeys(topic_ids))
        if not topic_ids:
            raise ConfigError("At least one topic is required")

        topics = resolve_topics(topic_ids)
        if not topics:
            raise ConfigError(f"Unknown topics: {', '.join(topic_ids)}")

        day = self.today()
        prompt = build_prompt((t.name for t in topics), day)
        logger.info(f"Requesting script for topics: {', '.join(t.id for t in topics)}")

        loop = asyncio.get_running_loop()
        raw_text = await loop.run_in_executor(
            None, lambda: self.llm.complete(system=SYSTEM_PROMPT, prompt=prompt)
        )

        result = parse_script(raw_text, day)
        if not result.ok:
            logger.warning(f"Falling back to degraded script: {result.error}")
            logger.debug(f"Raw response: {raw_text[:500]}...")
            return to_degraded_artifact(raw_text, day)

        script = result.script
        logger.info(f"Parsed script '{script.title}' with {len(script.stories)} stories")
        return script
