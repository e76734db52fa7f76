"""Field contracts for each response flow."""

from __future__ import annotations

import re

from solverelay.models import (
    ExtractRecord,
    FieldContract,
    FieldKind,
    FieldOutcome,
    FieldSpec,
    McqAnswerRecord,
    RecoverKind,
    SolutionRecord,
    Source,
)

NOT_SPECIFIED = "Not specified"

_FINAL_OPTION = re.compile(
    r"(?i:(?:final|correct)\s+(?:correct\s+)?(?:answer|option)\s*(?:is|:|-)?\s*(?:option\s+)?)\(?([A-Z])\b"
)
_BARE_OPTION = re.compile(r"^\s*(?i:option\s+)?\(?([A-Z])\)?\s*[.:)]?\s*$")


def _solution_fields(thoughts_default: str) -> tuple[FieldSpec, ...]:
    return (
        FieldSpec("code", FieldKind.STRING, RecoverKind.ESCAPED_STRING,
                  default="", allow_empty=True, raw_fallback=True),
        FieldSpec("thoughts", FieldKind.STRING_LIST, RecoverKind.SEQUENCE,
                  default=(thoughts_default,)),
        FieldSpec("time_complexity", FieldKind.STRING, RecoverKind.SCALAR, default=NOT_SPECIFIED),
        FieldSpec("space_complexity", FieldKind.STRING, RecoverKind.SCALAR, default=NOT_SPECIFIED),
    )


def final_answer_option(thoughts: list[str]) -> str | None:
    """Option letter stated by the last thought, e.g. "Final correct answer: B"."""
    if not thoughts:
        return None
    last = thoughts[-1]
    match = _FINAL_OPTION.search(last) or _BARE_OPTION.match(last)
    return match.group(1).upper() if match else None


def reconcile_mcq(outcomes: dict[str, FieldOutcome]) -> dict[str, FieldOutcome]:
    """Fill a missing correctOption from the final thought, which states the answer."""
    option = outcomes["correctOption"]
    thoughts = outcomes["thoughts"]
    if option.source is not Source.DEFAULTED or thoughts.source is Source.DEFAULTED:
        return outcomes
    letter = final_answer_option(thoughts.value)
    if letter is None:
        return outcomes
    return {**outcomes, "correctOption": FieldOutcome(letter, Source.RECOVERED)}


SOLUTION_CONTRACT = FieldContract(
    name="solution",
    record_type=SolutionRecord,
    fields=_solution_fields("No specific thoughts provided"),
)

DEBUG_CONTRACT = FieldContract(
    name="debug",
    record_type=SolutionRecord,
    fields=_solution_fields("No specific debug observations provided"),
)

MCQ_CONTRACT = FieldContract(
    name="mcq",
    record_type=McqAnswerRecord,
    fields=(
        FieldSpec("correctOption", FieldKind.STRING, RecoverKind.SCALAR,
                  default=NOT_SPECIFIED, attr="correct_option"),
        FieldSpec("thoughts", FieldKind.STRING_LIST, RecoverKind.SEQUENCE,
                  default=("No specific reasoning provided",)),
        FieldSpec("explanation", FieldKind.STRING, RecoverKind.FREE_TEXT,
                  default="No explanation provided"),
    ),
    reconcile=reconcile_mcq,
)

EXTRACT_CONTRACT = FieldContract(
    name="extract",
    record_type=ExtractRecord,
    fields=(
        FieldSpec("problem_statement", FieldKind.STRING, RecoverKind.ESCAPED_STRING,
                  sentinel="", raw_fallback=True),
        FieldSpec("test_cases", FieldKind.ANY_LIST, RecoverKind.STRUCTURED,
                  required=False, default=(), allow_empty=True),
    ),
)

CONTRACTS = {c.name: c for c in (SOLUTION_CONTRACT, DEBUG_CONTRACT, MCQ_CONTRACT, EXTRACT_CONTRACT)}


def get_contract(name: str) -> FieldContract:
    try:
        return CONTRACTS[name]
    except KeyError:
        raise KeyError(f"unknown contract {name!r}; expected one of {sorted(CONTRACTS)}") from None
