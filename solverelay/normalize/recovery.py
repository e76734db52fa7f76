"""Field-by-field recovery from near-JSON text that failed strict parsing.

Each recoverer looks for a single key on its own, so broken quoting in one
field does not stop the others from being found. A recoverer returns the value
it found, or None; ``recover_fields`` turns misses into sentinel values so the
result always covers the whole contract.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from solverelay.models import FieldContract, FieldOutcome, FieldSpec, RecoverKind, Source
from solverelay.normalize.extractor import extract_code_blocks

log = logging.getLogger(__name__)

_ITEM_SPLIT = re.compile(r',(?=\s*")')
_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
# an unescaped quote whose next non-space character closes the object
_FREE_TEXT_END = re.compile(r'(?<!\\)"(?=\s*\})')


def _key(name: str) -> str:
    return '"' + re.escape(name) + r'"\s*:\s*'


def unescape(text: str) -> str:
    return text.replace("\\n", "\n").replace('\\"', '"')


def recover_scalar(text: str, name: str) -> str | None:
    """Short string value with no embedded quotes, e.g. ``"correctOption": "B"``."""
    match = re.search(_key(name) + r'"([^"]+)"', text)
    return match.group(1) if match else None


def recover_escaped_string(text: str, name: str) -> str | None:
    """String value whose own quotes are escaped correctly; decodes JSON escapes."""
    match = re.search(_key(name) + r'"((?:[^"\\]|\\.)*)"', text, re.DOTALL)
    if not match:
        return None
    body = match.group(1)
    try:
        return json.loads('"' + body + '"', strict=False)
    except ValueError:
        return unescape(body)


def recover_sequence(text: str, name: str) -> list[str] | None:
    """String array, split only on commas that start a new quoted item."""
    match = re.search(_key(name) + r"\[([\s\S]*?)\]", text)
    if not match:
        return None
    items = []
    for chunk in _ITEM_SPLIT.split(match.group(1)):
        item = _item_text(chunk.strip())
        if item:
            items.append(item)
    return items or None


def _item_text(chunk: str) -> str:
    # the split leaves one item per chunk, so its outer quotes bound the value
    # even when the model left inner quotes unescaped
    if len(chunk) >= 2 and chunk[0] == chunk[-1] == '"':
        return unescape(chunk[1:-1])
    quoted = _QUOTED.search(chunk)
    return unescape(quoted.group(1)) if quoted else chunk


def recover_free_text(text: str, name: str) -> str | None:
    """Long string value that may contain unescaped quotes.

    The value runs from the first quote after the key's colon up to the first
    unescaped quote that is followed, after optional whitespace, by ``}``.
    """
    key_at = text.find(f'"{name}"')
    if key_at == -1:
        return None
    colon_at = text.find(":", key_at + len(name) + 2)
    if colon_at == -1:
        return None
    open_at = text.find('"', colon_at + 1)
    if open_at == -1:
        return None
    end = _FREE_TEXT_END.search(text, open_at + 1)
    if not end:
        return None
    return unescape(text[open_at + 1:end.start()])


def recover_structured(text: str, name: str) -> list[Any] | None:
    """Array of arbitrary JSON values, decoded in place from the opening bracket."""
    match = re.search(_key(name) + r"\[", text)
    if not match:
        return None
    try:
        value, _ = json.JSONDecoder().raw_decode(text, match.end() - 1)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, list) else None


RECOVERERS = {
    RecoverKind.SCALAR: recover_scalar,
    RecoverKind.ESCAPED_STRING: recover_escaped_string,
    RecoverKind.SEQUENCE: recover_sequence,
    RecoverKind.FREE_TEXT: recover_free_text,
    RecoverKind.STRUCTURED: recover_structured,
}


def recover_field(text: str, spec: FieldSpec) -> FieldOutcome:
    value = RECOVERERS[spec.recover](text, spec.name)
    if value is not None and (value != "" or spec.allow_empty):
        return FieldOutcome(value, Source.RECOVERED)
    if spec.raw_fallback:
        fallback = extract_code_blocks(text).strip()
        if fallback:
            return FieldOutcome(fallback, Source.RECOVERED)
    return FieldOutcome(spec.sentinel_value(), Source.DEFAULTED)


def recover_fields(raw: str, contract: FieldContract) -> dict[str, FieldOutcome]:
    """Best-effort outcome for every field of *contract*; never raises.

    Keys are searched in the raw text, so fences inside values are kept.
    """
    outcomes = {spec.name: recover_field(raw, spec) for spec in contract.fields}
    missed = [name for name, o in outcomes.items() if o.source is Source.DEFAULTED]
    if missed:
        log.debug("%s: defaulted fields %s", contract.name, ", ".join(missed))
    return outcomes
