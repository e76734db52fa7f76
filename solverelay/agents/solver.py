"""Solver agent: code solutions and debugging fixes from problem text."""

from __future__ import annotations

from solverelay.agents.base import BaseAgent
from solverelay.contracts import DEBUG_CONTRACT, SOLUTION_CONTRACT
from solverelay.models import SolutionRecord
from solverelay.normalize import normalize
from solverelay.prompts import debug_user_prompt, solve_user_prompt


class SolverAgent(BaseAgent):
    def solve(self, problem_text: str, language: str | None = None) -> SolutionRecord:
        raw = self._call_llm(
            user=solve_user_prompt(problem_text, language or self.config.default_language),
            model=self.config.solve_model,
            temperature=self.config.solve_temperature,
            max_tokens=self.config.solve_max_tokens,
        )
        return normalize(raw, SOLUTION_CONTRACT)

    def debug(self, problem_text: str, language: str | None = None) -> SolutionRecord:
        raw = self._call_llm(
            user=debug_user_prompt(problem_text, language or self.config.default_language),
            model=self.config.debug_model,
            temperature=self.config.debug_temperature,
            max_tokens=self.config.debug_max_tokens,
        )
        return normalize(raw, DEBUG_CONTRACT)
