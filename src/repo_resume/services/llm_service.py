"""Prompt assembly, provider selection and JSON extraction for generated text."""

from __future__ import annotations

import json
import os
from typing import Any

from repo_resume.services.llm_providers import (
    GeminiProvider,
    GenerationSettings,
    LLMError,
    LLMProvider,
)

_PROVIDERS: dict[str, type[LLMProvider]] = {"gemini": GeminiProvider}

_CLOSERS = {"{": "}", "[": "]"}


def _balanced_span(text: str, start: int) -> str | None:
    """Return the bracket-balanced substring opening at ``text[start]``.

    String literals are skipped so brackets inside quoted values do not count.
    """
    opener = text[start]
    closer = _CLOSERS[opener]
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


class LLMService:
    """Thin facade over one ``LLMProvider``.

    Without an explicit provider the backend named by ``LLM_PROVIDER``
    (default ``gemini``) is built from the environment.
    """

    def __init__(self, provider: LLMProvider | None = None) -> None:
        if provider is None:
            provider = self.provider_from_name(os.environ.get("LLM_PROVIDER") or "gemini")
        self.provider = provider

    @staticmethod
    def provider_from_name(
        provider_name: str, *, api_key: str | None = None, model: str | None = None
    ) -> LLMProvider:
        provider_cls = _PROVIDERS.get(provider_name.lower())
        if provider_cls is None:
            raise LLMError(f"Unknown LLM provider: {provider_name}.")
        return provider_cls(api_key=api_key, model=model)

    def build_prompt(self, system_instructions: str, user_content: str) -> str:
        return f"System instruction:\n{system_instructions}\n\nUser content:\n{user_content}"

    def generate(self, prompt: str, settings: GenerationSettings | None = None) -> str:
        """Send an already assembled prompt and return the raw answer."""
        config = self.provider.generate_llm_config(settings or GenerationSettings())
        return self.provider.send_prompt(prompt, config)

    @staticmethod
    def extract_json_from_response(response: str, opener: str = "{") -> Any:
        """Extract the first parseable JSON value embedded in free text.

        Scans for ``opener`` (``"{"`` for an object, ``"["`` for an array),
        bracket-matches to its closer and parses the span. Leading and trailing
        prose, including markdown code fences, is ignored.

        Raises:
            LLMError: If no parseable JSON value of the requested kind is found.
        """
        if opener not in _CLOSERS:
            raise ValueError(f"Unsupported JSON opener: {opener!r}")

        start = response.find(opener)
        while start != -1:
            span = _balanced_span(response, start)
            if span is not None:
                try:
                    return json.loads(span)
                except json.JSONDecodeError:
                    pass
            start = response.find(opener, start + 1)
        raise LLMError("No JSON found in LLM response")
