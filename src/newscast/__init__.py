"""
Newscast – turns a handful of news topics into a narrated audio episode.

This top-level package exposes the core models of the episode pipeline.
"""

from .models import (
    PodcastArtifact,
    Source,
    Story,
    StructuredScript,
    Topic,
)

__all__ = [
    "PodcastArtifact",
    "Source",
    "Story",
    "StructuredScript",
    "Topic",
]
