from __future__ import annotations

import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Script Models
# =============================================================================


class Source(BaseModel):
    """A citation attached to a story."""

    title: str | None = Field(None, description="Display label for the source")
    url: str = Field(..., description="Source URL")

    @property
    def label(self) -> str:
        """Return the display label, falling back to the URL."""
        return self.title or self.url


class Story(BaseModel):
    """One news story segment of an episode."""

    title: str = Field(..., description="Story headline")
    content: str = Field("", description="Spoken text for the story")
    sources: list[Source] = Field(default_factory=list, description="Story sources in order")


class StructuredScript(BaseModel):
    """Episode script as returned by the language model.

    ``stories`` keeps generation order, which is also the playback order.
    """

    title: str
    intro: str = ""
    stories: list[Story] = Field(default_factory=list)
    outro: str = ""


# =============================================================================
# Topic Catalog Models
# =============================================================================


class Topic(BaseModel):
    """A selectable news topic."""

    id: str
    name: str
    icon: str
    color: str
    category: str


# =============================================================================
# Episode Models
# =============================================================================


class GenerateEpisodeRequest(BaseModel):
    """Request model for generating an episode."""

    topics: list[str] = Field(default_factory=list, description="Selected topic ids")


class PodcastArtifact(BaseModel):
    """Finished episode: assembled audio plus its transcript."""

    model_config = ConfigDict(frozen=True)

    audio_bytes: bytes
    title: str
    duration: float = Field(..., description="Estimated duration in seconds")
    intro: str = ""
    stories: tuple[Story, ...] = ()
    outro: str = ""

    @property
    def audio_base64(self) -> str:
        return base64.b64encode(self.audio_bytes).decode("ascii")

    def to_response(self) -> dict[str, Any]:
        """Return the transport form of the artifact."""
        return {
            "audioBase64": self.audio_base64,
            "title": self.title,
            "duration": self.duration,
            "intro": self.intro,
            "stories": [story.model_dump() for story in self.stories],
            "outro": self.outro,
        }
