"""CLI interface for SolveRelay."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from solverelay.config import Config
from solverelay.contracts import CONTRACTS, get_contract
from solverelay.normalize import normalize_with_report


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="solverelay",
        description="SolveRelay: normalize LLM answers to coding and MCQ problems",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP relay")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.add_argument("--model", type=str, default=None, help="Model for every flow")

    norm_parser = subparsers.add_parser("normalize", help="Normalize raw model output")
    norm_parser.add_argument("input", help="Path to a file with the raw model text, or - for stdin")
    norm_parser.add_argument("--contract", choices=sorted(CONTRACTS), default="solution")
    norm_parser.add_argument(
        "--report", action="store_true", default=False, help="Include stage and per-field sources"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "normalize":
        result = normalize_with_report(_read_text(args.input), get_contract(args.contract))
        output = result.record.to_dict()
        if args.report:
            output = {
                "record": output,
                "stage": result.stage.value,
                "sources": {name: o.source.value for name, o in result.outcomes.items()},
            }
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    if args.command != "serve":
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    overrides = {}
    if args.model is not None:
        overrides["model"] = args.model
    try:
        config = Config.from_env(**overrides)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    from solverelay.web.app import create_app

    app = create_app(config)
    app.run(host=args.host, port=args.port or config.port)
