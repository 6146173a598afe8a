"""Text enhancer used when no Gemini API key is configured."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class PassthroughTextEnhancer:
    """Returns descriptions unchanged."""

    async def enhance(self, text: str) -> str:
        logger.debug("PassthroughTextEnhancer: returning text unchanged")
        return text
