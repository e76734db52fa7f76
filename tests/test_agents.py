"""Tests for the LLM-calling agents (mocked client, no network)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from solverelay.agents.base import BaseAgent, build_vision_content, to_data_url
from solverelay.agents.extractor import ExtractorAgent, resolve_language
from solverelay.agents.mcq import McqAgent
from solverelay.agents.solver import SolverAgent
from solverelay.config import Config
from solverelay.errors import UpstreamCallFailure
from solverelay.models import ExtractRecord, McqAnswerRecord, SolutionRecord


def _make_config(**overrides) -> Config:
    defaults = {"api_key": "test-key", "solve_model": "solve-m", "mcq_model": "mcq-m"}
    defaults.update(overrides)
    return Config(**defaults)


def _make_client(content: str | None) -> MagicMock:
    client = MagicMock()
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    client.chat.completions.create.return_value = MagicMock(choices=[choice])
    return client


def _request() -> httpx.Request:
    return httpx.Request("POST", "https://api.example.test/v1/chat/completions")


def _status_error(cls, status: int):
    return cls("boom", response=httpx.Response(status, request=_request()), body=None)


class TestSolverAgent:
    def test_solve_normalizes_response(self):
        client = _make_client(json.dumps({
            "code": "int main(){}",
            "thoughts": ["t1"],
            "time_complexity": "O(1)",
            "space_complexity": "O(1)",
        }))
        agent = SolverAgent(_make_config(), client)
        record = agent.solve("Print nothing", "cpp")
        assert record == SolutionRecord(
            code="int main(){}", thoughts=["t1"], time_complexity="O(1)", space_complexity="O(1)"
        )

    def test_solve_request_parameters(self):
        client = _make_client("{}")
        agent = SolverAgent(_make_config(solve_temperature=0.6, solve_max_tokens=4096, top_p=0.95), client)
        agent.solve("Two sum", "python")
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "solve-m"
        assert kwargs["temperature"] == 0.6
        assert kwargs["max_tokens"] == 4096
        assert kwargs["top_p"] == 0.95
        assert kwargs["messages"] == [{"role": "user", "content": kwargs["messages"][0]["content"]}]
        assert "Solve the following problem in python:\nTwo sum" in kwargs["messages"][0]["content"]

    def test_solve_uses_default_language(self):
        client = _make_client("{}")
        SolverAgent(_make_config(default_language="java"), client).solve("Two sum")
        prompt = client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert "in java:" in prompt

    def test_debug_uses_debug_contract(self):
        client = _make_client('{"code": "fixed()"}')
        record = SolverAgent(_make_config(), client).debug("broken()", "cpp")
        assert record.code == "fixed()"
        assert record.thoughts == ["No specific debug observations provided"]
        prompt = client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert prompt.startswith("Debug the following problem in cpp:")

    def test_empty_completion_is_all_defaults(self):
        client = _make_client(None)
        record = SolverAgent(_make_config(), client).solve("x")
        assert record.code == ""
        assert record.time_complexity == "Not specified"


class TestMcqAgent:
    def test_answer_recovers_broken_json(self):
        client = _make_client(
            '```json\n{"correctOption": "A", "thoughts": ["x", "Final correct answer: A"], '
            '"explanation": "A is "right"."}\n```'
        )
        record = McqAgent(_make_config(), client).answer("Q? A) 1 B) 2")
        assert record == McqAnswerRecord(
            correct_option="A", thoughts=["x", "Final correct answer: A"], explanation='A is "right".'
        )
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "mcq-m"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 2048


class TestExtractorAgent:
    def test_extract_sends_images(self):
        client = _make_client('{"problem_statement": "Sum", "test_cases": []}')
        record = ExtractorAgent(_make_config(), client).extract(["aGVsbG8=", "data:image/jpeg;base64,d29ybGQ="], "fra")
        assert record == ExtractRecord(problem_statement="Sum", test_cases=[])
        messages = client.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0]["role"] == "system"
        content = messages[1]["content"]
        assert content[0]["type"] == "text"
        assert "French" in content[0]["text"]
        assert content[1]["image_url"]["url"] == "data:image/png;base64,aGVsbG8="
        assert content[2]["image_url"]["url"] == "data:image/jpeg;base64,d29ybGQ="

    def test_resolve_language(self):
        assert resolve_language("jpn") == "jpn"
        assert resolve_language("klingon") == "eng"
        assert resolve_language(None) == "eng"


class TestVisionContent:
    def test_to_data_url(self):
        assert to_data_url("abc") == "data:image/png;base64,abc"
        assert to_data_url("data:image/webp;base64,abc") == "data:image/webp;base64,abc"
        assert to_data_url("image/png;base64,abc") == "data:image/png;base64,abc"

    def test_skips_empty_images(self):
        parts = build_vision_content("hi", ["", "abc"])
        assert len(parts) == 2


class TestUpstreamFailures:
    @pytest.mark.parametrize(
        "error, kind",
        [
            (_status_error(openai.AuthenticationError, 401), UpstreamCallFailure.AUTH),
            (_status_error(openai.RateLimitError, 429), UpstreamCallFailure.RATE_LIMIT),
            (openai.APIConnectionError(request=_request()), UpstreamCallFailure.UPSTREAM),
        ],
    )
    def test_errors_are_translated(self, error, kind):
        client = MagicMock()
        client.chat.completions.create.side_effect = error
        agent = SolverAgent(_make_config(), client)
        with pytest.raises(UpstreamCallFailure) as exc_info:
            agent.solve("x")
        assert exc_info.value.kind == kind

    def test_no_choices(self):
        client = MagicMock()
        client.chat.completions.create.return_value = MagicMock(choices=[])
        with pytest.raises(UpstreamCallFailure):
            BaseAgent(_make_config(), client).ping()

    def test_ping(self):
        client = _make_client("LLM API is working")
        assert BaseAgent(_make_config(), client).ping() == "LLM API is working"
        assert client.chat.completions.create.call_args.kwargs["max_tokens"] == 10
