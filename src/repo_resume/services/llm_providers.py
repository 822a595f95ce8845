"""Text-generation backends used for the resume prose sections."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

# GEMINI_API_KEY / LLM_MODEL may live in a project-local .env
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class LLMError(RuntimeError):
    """A backend is unavailable or a generation request failed."""


@dataclass(slots=True, frozen=True)
class GenerationSettings:
    """Sampling knobs for one request; ``None`` leaves the backend default."""

    temperature: float | None = 0.7
    max_tokens: int | None = None
    seed: int | None = None

    def as_config(self) -> dict[str, Any]:
        values = {"temperature": self.temperature, "max_tokens": self.max_tokens, "seed": self.seed}
        return {key: value for key, value in values.items() if value is not None}


class LLMProvider(ABC):
    """A backend that turns one prompt into one text answer."""

    name = "generic"

    def generate_llm_config(self, settings: GenerationSettings) -> dict[str, Any]:
        """Translate ``settings`` into the request options this backend expects."""
        return settings.as_config()

    @abstractmethod
    def send_prompt(self, prompt: str, config: dict) -> str:
        """Send ``prompt`` with request options ``config`` and return the answer text.

        Raises:
            LLMError: The request could not be completed.
        """


class GeminiProvider(LLMProvider):
    """Google Gemini through the ``google-genai`` client."""

    name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        from google import genai

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise LLMError("Missing GEMINI_API_KEY environment variable")

        self.model = model or os.environ.get("LLM_MODEL") or DEFAULT_GEMINI_MODEL
        self.client = genai.Client(api_key=self.api_key)

    def generate_llm_config(self, settings: GenerationSettings) -> dict[str, Any]:
        config = settings.as_config()
        # Gemini names the length cap max_output_tokens
        if "max_tokens" in config:
            config["max_output_tokens"] = config.pop("max_tokens")
        return config

    def send_prompt(self, prompt: str, config: dict) -> str:
        logger.debug("Gemini request: model=%s, %d prompt chars", self.model, len(prompt))
        try:
            response = self.client.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
        except Exception as exc:
            raise LLMError(f"Gemini API call failed: {exc}") from exc
        return (response.text or "").strip()
