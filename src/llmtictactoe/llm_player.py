from __future__ import annotations
"""LLM-backed player: binds a model and sampling temperature to the text generator."""
from dataclasses import dataclass
from typing import Optional

from .llm_client import generate_text


@dataclass
class LLMPlayer:
    model: str
    temperature: Optional[float] = None
    name: Optional[str] = None

    def __post_init__(self):
        if not self.model or not str(self.model).strip():
            raise ValueError("LLMPlayer requires a non-empty model name.")
        if self.temperature is not None and not (0.0 <= self.temperature <= 2.0):
            raise ValueError(f"temperature must be within 0.0-2.0, got {self.temperature}")

    def label(self) -> str:
        return self.name or self.model

    def generate(self, prompt: str) -> str:
        """Return the raw reply for a prompt. Raises LLMTransportError on failure."""
        return generate_text(prompt, model=self.model, temperature=self.temperature)
