"""Extractor agent: reads problem screenshots with a vision model."""

from __future__ import annotations

from solverelay.agents.base import BaseAgent
from solverelay.contracts import EXTRACT_CONTRACT
from solverelay.models import ExtractRecord
from solverelay.normalize import normalize
from solverelay.prompts import EXTRACT_SYSTEM, OCR_LANGUAGES, extract_user_prompt


def resolve_language(language: str | None) -> str:
    """Supported language code, defaulting to English."""
    return language if language in OCR_LANGUAGES else "eng"


class ExtractorAgent(BaseAgent):
    def extract(self, images: list[str], language: str | None = None) -> ExtractRecord:
        raw = self._call_llm(
            system=EXTRACT_SYSTEM,
            user=extract_user_prompt(resolve_language(language), len(images)),
            model=self.config.extract_model,
            temperature=self.config.extract_temperature,
            max_tokens=self.config.extract_max_tokens,
            images=images,
        )
        return normalize(raw, EXTRACT_CONTRACT)
