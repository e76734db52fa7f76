"""Locate and strictly parse a JSON object embedded in model output."""

from __future__ import annotations

import json
import re
from typing import Any

_WHOLE_FENCE = re.compile(r"^\s*```(?:json|JSON)?[ \t]*\n?(.*?)\n?[ \t]*```\s*$", re.DOTALL)
_FENCE_MARKER = re.compile(r"```(?:json|JSON)?")
_BRACE_SPAN = re.compile(r"\{[\s\S]*\}")
_CODE_BLOCK = re.compile(r"```[\w+-]*\n([\s\S]*?)```")


def strip_fences(text: str) -> str:
    """Remove markdown code fences, keeping the inner content of a fully fenced payload."""
    match = _WHOLE_FENCE.match(text)
    if match and "```" not in match.group(1):
        return match.group(1).strip()
    return _FENCE_MARKER.sub("", text).strip()


def extract_code_blocks(text: str) -> str:
    """Replace each fenced block with its body, falling back to the full text."""
    return _CODE_BLOCK.sub(r"\1", text).strip() or text


def extract_json(raw: str) -> dict[str, Any] | None:
    """Return the JSON object in *raw*, or None when nothing parses strictly.

    The raw text is tried before fence stripping so that fences inside string
    values survive. The span runs greedily from the first ``{`` to the last
    ``}``, so stray braces in prose ahead of the payload can spoil it; the
    caller falls back to field recovery in that case.
    """
    parsed = _loads_span(raw)
    if parsed is not None:
        return parsed
    cleaned = strip_fences(raw)
    return _loads(cleaned) or _loads_span(cleaned)


def _loads_span(text: str) -> dict[str, Any] | None:
    match = _BRACE_SPAN.search(text)
    return _loads(match.group(0)) if match else None


def _loads(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None
