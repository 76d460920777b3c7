"""Google Gemini adapter for the TextGenerator port."""
from __future__ import annotations

import logging
from typing import Optional

from google import genai

from sitebuilder.config import settings

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper over ``google.genai.Client`` returning plain text."""

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash") -> None:
        self.model = model
        self._client = genai.Client(api_key=api_key)

    def generate(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return response.text or ""


def create_text_generator() -> Optional[GeminiClient]:
    """
    Build the Gemini client from settings.

    Returns None when no real API key is configured so that callers fall
    back to the static templates.
    """
    if not settings.has_valid_ai_key:
        logger.warning("GEMINI_API_KEY not configured or is a placeholder, using mock responses")
        return None

    try:
        client = GeminiClient(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
    except Exception:
        logger.exception("Error initializing Gemini client, using mock responses")
        return None

    logger.info(
        "Gemini client initialized (model=%s, key=%s...)",
        settings.GEMINI_MODEL,
        settings.GEMINI_API_KEY[:5],
    )
    return client
