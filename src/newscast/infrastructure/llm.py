"""Language-generation adapters used to write episode scripts."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

import openai
from dotenv import load_dotenv
from openai import OpenAI

from newscast.errors import (
    AuthenticationError,
    MissingCredentialsError,
    RateLimitError,
    UpstreamError,
)

load_dotenv()
logger = logging.getLogger(__name__)


class ScriptLLM(ABC):
    """Abstract base class for language-generation services."""

    @abstractmethod
    def complete(self, *, system: str, prompt: str) -> str:
        """Return the model's text reply to *prompt*.

        Raises ``UpstreamError`` (or a subclass) when the service is unreachable,
        rejects the request or returns no content.
        """


class OpenAIScriptLLM(ScriptLLM):
    """Chat-completions backed script writer."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        if client is not None:
            self.client = client
            return
        key = api_key or os.getenv("OPENAI_API_KEY")
        if not key:
            raise MissingCredentialsError("OpenAI", "Set OPENAI_API_KEY or pass api_key.")
        self.client = OpenAI(api_key=key)

    def complete(self, *, system: str, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.AuthenticationError as e:
            raise AuthenticationError("Invalid OpenAI API key") from e
        except openai.RateLimitError as e:
            raise RateLimitError("OpenAI rate limit reached") from e
        except openai.APIError as e:
            raise UpstreamError(f"Script generation request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("Failed to generate podcast script")

        logger.debug("Script model returned %d characters", len(content))
        return content
