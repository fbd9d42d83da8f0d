"""Exception types raised by the episode pipeline."""

from __future__ import annotations


class NewscastError(Exception):
    """Base class for all pipeline errors."""


class ConfigError(NewscastError):
    """Missing credentials or invalid topic input. Never retried."""


class MissingCredentialsError(ConfigError):
    """An API key needed by a collaborator is not configured."""

    def __init__(self, service: str, hint: str = "") -> None:
        message = f"{service} API key not configured"
        super().__init__(f"{message}. {hint}" if hint else message)
        self.service = service


class UpstreamError(NewscastError):
    """The script generation service was unreachable or returned nothing."""

    def __init__(self, message: str = "", *, service: str = "OpenAI") -> None:
        super().__init__(message)
        self.service = service


class AuthenticationError(UpstreamError):
    """The upstream service rejected our credentials."""


class RateLimitError(UpstreamError):
    """The upstream service is rate limiting us."""


class ParseError(NewscastError):
    """The language model output could not be parsed into a script."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class TTSError(NewscastError):
    """A speech synthesis call failed.

    ``status`` is the provider's HTTP status when there was one; 401/403 and 429
    are reported to clients like the matching ``UpstreamError`` subclasses.
    """

    def __init__(self, message: str, *, status: int | None = None, service: str = "OpenAI") -> None:
        super().__init__(message)
        self.status = status
        self.service = service
        self.message = message

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (status {self.status})"


class AssetError(NewscastError):
    """The separator asset could not be loaded or filtered."""
