"""MCQ agent: picks the correct option of a multiple choice question."""

from __future__ import annotations

import logging

from solverelay.agents.base import BaseAgent
from solverelay.contracts import MCQ_CONTRACT
from solverelay.models import McqAnswerRecord
from solverelay.normalize import normalize
from solverelay.prompts import mcq_user_prompt

log = logging.getLogger(__name__)


class McqAgent(BaseAgent):
    def answer(self, problem_info: str) -> McqAnswerRecord:
        raw = self._call_llm(
            user=mcq_user_prompt(problem_info),
            model=self.config.mcq_model,
            temperature=self.config.mcq_temperature,
            max_tokens=self.config.mcq_max_tokens,
        )
        log.debug("Raw MCQ response: %s", raw)
        return normalize(raw, MCQ_CONTRACT)
