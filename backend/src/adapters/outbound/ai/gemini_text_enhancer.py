"""Adapter wrapping Google Gemini for the TextEnhancementPort.

Rewrites project descriptions with the google-genai SDK. Any failure
returns the original text unchanged.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

MAX_RETRIES = 2
INITIAL_BACKOFF = 1.0


class GeminiTextEnhancer:
    """Implements TextEnhancementPort by calling the Gemini API."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash", client: Any = None) -> None:
        if not api_key and client is None:
            raise ValueError(
                "GEMINI_API_KEY is required for text enhancement. "
                "Get one at https://aistudio.google.com/apikey"
            )
        self._model = model
        if client is None:
            from google import genai

            client = genai.Client(api_key=api_key)
        self._client = client
        logger.info("GeminiTextEnhancer initialised (model=%s)", self._model)

    # ------------------------------------------------------------------
    # TextEnhancementPort interface
    # ------------------------------------------------------------------

    async def enhance(self, text: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._enhance_sync, text)

    # ------------------------------------------------------------------
    # Internal / synchronous helpers
    # ------------------------------------------------------------------

    def _enhance_sync(self, text: str) -> str:
        try:
            response = self._generate_with_retry(self._create_prompt(text))
            rewritten = (response.text or "").strip()
        except Exception as exc:
            logger.error("Failed to enhance description: %s", exc)
            return text
        if not rewritten:
            logger.warning("Gemini returned an empty rewrite; keeping original text")
            return text
        return rewritten

    def _generate_with_retry(self, prompt: str) -> Any:
        last_exc: Exception | None = None
        for attempt in range(MAX_RETRIES):
            try:
                return self._client.models.generate_content(
                    model=self._model,
                    contents=prompt,
                )
            except Exception as exc:
                last_exc = exc
                if attempt + 1 == MAX_RETRIES:
                    break
                backoff = INITIAL_BACKOFF * (2 ** attempt)
                logger.warning(
                    "Gemini request attempt %d/%d failed (%s), retrying in %.1fs",
                    attempt + 1, MAX_RETRIES, exc, backoff,
                )
                time.sleep(backoff)
        raise last_exc  # type: ignore[misc]

    @staticmethod
    def _create_prompt(text: str) -> str:
        return (
            "You are an expert startup copywriter.\n"
            "Rewrite the following project description to be more exciting, clear, "
            "and appealing to Gen-Z talent.\n"
            "Keep it under 280 characters if possible, or short and punchy.\n"
            "Use emojis sparingly but effectively.\n\n"
            f'Original Description: "{text}"\n\n'
            "Return ONLY the rewritten text."
        )
