"""Flask web application for SolveRelay."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app, jsonify, request

from solverelay.agents.extractor import ExtractorAgent
from solverelay.agents.mcq import McqAgent
from solverelay.agents.solver import SolverAgent
from solverelay.config import Config
from solverelay.errors import UpstreamCallFailure

log = logging.getLogger(__name__)

_UPSTREAM_STATUS = {
    UpstreamCallFailure.AUTH: (502, "Upstream authentication failed"),
    UpstreamCallFailure.RATE_LIMIT: (429, "Upstream rate limit exceeded"),
    UpstreamCallFailure.UPSTREAM: (502, "Upstream model call failed"),
}


@dataclass
class Agents:
    solver: SolverAgent
    mcq: McqAgent
    extractor: ExtractorAgent

    @classmethod
    def from_config(cls, config: Config) -> Agents:
        client = config.create_openai_client()
        return cls(
            solver=SolverAgent(config, client),
            mcq=McqAgent(config, client),
            extractor=ExtractorAgent(config, client),
        )


def create_app(config: Config | None = None, agents: Agents | None = None) -> Flask:
    config = config or Config.from_env()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_length
    app.extensions["solverelay"] = agents or Agents.from_config(config)

    app.before_request(_log_request)
    app.register_error_handler(UpstreamCallFailure, _upstream_failure)

    app.add_url_rule("/api/extract", view_func=extract, methods=["POST"])
    app.add_url_rule("/api/generate", view_func=generate, methods=["POST"])
    app.add_url_rule("/api/debug", view_func=debug, methods=["POST"])
    app.add_url_rule("/api/answer-mcq", view_func=answer_mcq, methods=["POST"])
    app.add_url_rule("/api/test-llm", view_func=test_llm, methods=["GET"])
    app.add_url_rule("/cron", view_func=cron, methods=["GET"])
    return app


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _agents() -> Agents:
    return current_app.extensions["solverelay"]


def _body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _preview(text: str, limit: int = 100) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _log_request():
    log.info("%s %s", request.method, request.path)


def _upstream_failure(exc: UpstreamCallFailure):
    status, message = _UPSTREAM_STATUS.get(exc.kind, _UPSTREAM_STATUS[UpstreamCallFailure.UPSTREAM])
    log.error("%s on %s: %s", message, request.path, exc)
    return jsonify({"error": message, "details": str(exc)}), status


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

def extract():
    body = _body()
    images = body.get("imageDataList")
    if not images or not isinstance(images, list) or not all(isinstance(i, str) for i in images):
        return jsonify({"error": "Invalid imageDataList"}), 400
    record = _agents().extractor.extract(images, body.get("language"))
    log.info("Extraction successful: %s", _preview(record.problem_statement))
    return jsonify(record.to_dict())


def generate():
    body = _body()
    problem_text = body.get("problemText")
    if not problem_text or not isinstance(problem_text, str):
        return jsonify({"error": "No problem text provided"}), 400
    log.info("Generating solution in %s for %s", body.get("language") or "default language",
             _preview(problem_text))
    record = _agents().solver.solve(problem_text, body.get("language"))
    return jsonify(record.to_dict())


def debug():
    body = _body()
    problem_text = body.get("problemText")
    if not problem_text or not isinstance(problem_text, str):
        return jsonify({"error": "No problem text provided"}), 400
    log.info("Debugging in %s for %s", body.get("language") or "default language",
             _preview(problem_text))
    record = _agents().solver.debug(problem_text, body.get("language"))
    return jsonify(record.to_dict())


def answer_mcq():
    body = _body()
    problem_info = body.get("problemInfo")
    if not problem_info or not isinstance(problem_info, str):
        return jsonify({"error": "No question text provided"}), 400
    record = _agents().mcq.answer(problem_info)
    return jsonify(record.to_dict())


def test_llm():
    try:
        message = _agents().solver.ping()
    except UpstreamCallFailure as e:
        log.error("LLM connectivity test failed: %s", e)
        return jsonify({"status": "error", "error": str(e)}), 500
    return jsonify({"status": "success", "message": message})


def cron():
    log.info("Cron endpoint called")
    return "happy"
