"""Tests for the Flask relay routes (agents mocked)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from solverelay.config import Config
from solverelay.errors import UpstreamCallFailure
from solverelay.models import ExtractRecord, McqAnswerRecord, SolutionRecord
from solverelay.web.app import Agents, create_app

SOLUTION = SolutionRecord(code="x", thoughts=["a"], time_complexity="O(1)", space_complexity="O(1)")


@pytest.fixture
def agents():
    return Agents(solver=MagicMock(), mcq=MagicMock(), extractor=MagicMock())


@pytest.fixture
def client(agents):
    app = create_app(Config(api_key="test-key"), agents=agents)
    app.config["TESTING"] = True
    return app.test_client()


class TestGenerate:
    def test_returns_solution_record(self, client, agents):
        agents.solver.solve.return_value = SOLUTION
        resp = client.post("/api/generate", json={"problemText": "Two sum", "language": "python"})
        assert resp.status_code == 200
        assert resp.get_json() == {
            "code": "x",
            "thoughts": ["a"],
            "time_complexity": "O(1)",
            "space_complexity": "O(1)",
        }
        agents.solver.solve.assert_called_once_with("Two sum", "python")

    def test_missing_problem_text(self, client, agents):
        resp = client.post("/api/generate", json={"language": "cpp"})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "No problem text provided"}
        agents.solver.solve.assert_not_called()

    def test_non_json_body(self, client):
        resp = client.post("/api/generate", data="not json", content_type="text/plain")
        assert resp.status_code == 400


class TestDebug:
    def test_returns_solution_record(self, client, agents):
        agents.solver.debug.return_value = SOLUTION
        resp = client.post("/api/debug", json={"problemText": "fix me"})
        assert resp.status_code == 200
        assert resp.get_json()["code"] == "x"
        agents.solver.debug.assert_called_once_with("fix me", None)


class TestAnswerMcq:
    def test_uses_wire_names(self, client, agents):
        agents.mcq.answer.return_value = McqAnswerRecord(
            correct_option="B", thoughts=["Final correct answer: B"], explanation="because"
        )
        resp = client.post("/api/answer-mcq", json={"problemInfo": "Q?"})
        assert resp.get_json() == {
            "correctOption": "B",
            "thoughts": ["Final correct answer: B"],
            "explanation": "because",
        }

    def test_missing_problem_info(self, client):
        resp = client.post("/api/answer-mcq", json={})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "No question text provided"}


class TestExtract:
    def test_returns_extract_record(self, client, agents):
        agents.extractor.extract.return_value = ExtractRecord(
            problem_statement="Sum", test_cases=[{"input": "1 2", "output": "3"}]
        )
        resp = client.post("/api/extract", json={"imageDataList": ["abc"], "language": "eng"})
        assert resp.status_code == 200
        assert resp.get_json() == {"problem_statement": "Sum", "test_cases": [{"input": "1 2", "output": "3"}]}
        agents.extractor.extract.assert_called_once_with(["abc"], "eng")

    @pytest.mark.parametrize("payload", [{}, {"imageDataList": "abc"}, {"imageDataList": []}, {"imageDataList": [1]}])
    def test_invalid_image_list(self, client, payload):
        resp = client.post("/api/extract", json=payload)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Invalid imageDataList"}


class TestUpstreamErrors:
    @pytest.mark.parametrize(
        "kind, status",
        [
            (UpstreamCallFailure.AUTH, 502),
            (UpstreamCallFailure.RATE_LIMIT, 429),
            (UpstreamCallFailure.UPSTREAM, 502),
        ],
    )
    def test_status_per_kind(self, client, agents, kind, status):
        agents.solver.solve.side_effect = UpstreamCallFailure(kind, "provider said no")
        resp = client.post("/api/generate", json={"problemText": "x"})
        assert resp.status_code == status
        body = resp.get_json()
        assert body["details"] == "provider said no"
        assert body["error"]

    def test_auth_and_rate_limit_messages_differ(self, client, agents):
        agents.solver.solve.side_effect = UpstreamCallFailure(UpstreamCallFailure.AUTH, "k")
        auth = client.post("/api/generate", json={"problemText": "x"}).get_json()
        agents.solver.solve.side_effect = UpstreamCallFailure(UpstreamCallFailure.RATE_LIMIT, "k")
        limited = client.post("/api/generate", json={"problemText": "x"}).get_json()
        assert auth["error"] != limited["error"]


class TestMisc:
    def test_llm_probe_success(self, client, agents):
        agents.solver.ping.return_value = "LLM API is working"
        resp = client.get("/api/test-llm")
        assert resp.get_json() == {"status": "success", "message": "LLM API is working"}

    def test_llm_probe_failure(self, client, agents):
        agents.solver.ping.side_effect = UpstreamCallFailure(UpstreamCallFailure.UPSTREAM, "down")
        resp = client.get("/api/test-llm")
        assert resp.status_code == 500
        assert resp.get_json() == {"status": "error", "error": "down"}

    def test_cron(self, client):
        resp = client.get("/cron")
        assert resp.data == b"happy"

    @patch("solverelay.web.app.Agents.from_config")
    def test_agents_built_from_config(self, mock_from_config):
        config = Config(api_key="test-key")
        create_app(config)
        mock_from_config.assert_called_once_with(config)
