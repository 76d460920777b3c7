"""Ports the application layer depends on, implemented by the generation package."""
from __future__ import annotations

from typing import Protocol


class TextGenerator(Protocol):
    """A generative model that turns a prompt into text."""

    model: str

    def generate(self, prompt: str) -> str:
        """Return the model's raw text for ``prompt``; may raise on transport errors."""
        ...
