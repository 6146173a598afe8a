"""Port for rewriting post descriptions with a language model."""
from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextEnhancementPort(Protocol):
    async def enhance(self, text: str) -> str: ...
