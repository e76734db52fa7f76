"""Data models for SolveRelay: response records and the field contracts behind them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar


class FieldKind(enum.Enum):
    STRING = "string"
    STRING_LIST = "string-sequence"
    ANY_LIST = "arbitrary-sequence"


class RecoverKind(enum.Enum):
    SCALAR = "scalar"
    ESCAPED_STRING = "escaped-string"
    SEQUENCE = "sequence"
    FREE_TEXT = "free-text"
    STRUCTURED = "structured"


class Source(enum.Enum):
    PARSED = "parsed"
    RECOVERED = "recovered"
    DEFAULTED = "defaulted"


class Stage(enum.Enum):
    VALIDATED = "VALIDATED"
    RECOVERED = "RECOVERY_ATTEMPTED"


MISSING: Any = object()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class _Record:
    """Response record, built once per request and never mutated afterwards.

    Sequence fields are plain lists for JSON serialization; default lists are
    fresh copies, never shared between records.
    """

    # attribute name -> wire name, where they differ
    wire_names: ClassVar[dict[str, str]] = {}

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            out[self.wire_names.get(f.name, f.name)] = list(value) if isinstance(value, list) else value
        return out


@dataclass(frozen=True)
class SolutionRecord(_Record):
    code: str
    thoughts: list[str]
    time_complexity: str
    space_complexity: str


@dataclass(frozen=True)
class McqAnswerRecord(_Record):
    wire_names: ClassVar[dict[str, str]] = {"correct_option": "correctOption"}

    correct_option: str
    thoughts: list[str]
    explanation: str


@dataclass(frozen=True)
class ExtractRecord(_Record):
    problem_statement: str
    test_cases: list[Any] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    recover: RecoverKind
    required: bool = True
    default: Any = MISSING
    sentinel: Any = MISSING  # value used when recovery finds nothing; falls back to default
    allow_empty: bool = False
    raw_fallback: bool = False  # use the raw text, fence bodies unwrapped, when the key is absent
    attr: str = ""

    def __post_init__(self) -> None:
        if not self.attr:
            object.__setattr__(self, "attr", self.name)
        if not self.required and self.default is MISSING:
            raise ValueError(f"optional field {self.name!r} needs a default")

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def default_value(self) -> Any:
        return _fresh(self.default)

    def sentinel_value(self) -> Any:
        if self.sentinel is not MISSING:
            return _fresh(self.sentinel)
        if self.default is not MISSING:
            return _fresh(self.default)
        return [] if self.kind is not FieldKind.STRING else ""


@dataclass(frozen=True)
class FieldOutcome:
    value: Any
    source: Source


@dataclass(frozen=True)
class FieldContract:
    name: str
    record_type: type
    fields: tuple[FieldSpec, ...]
    # Called with the validated or recovered outcomes; returns the (possibly amended) outcomes.
    reconcile: Callable[[dict[str, FieldOutcome]], dict[str, FieldOutcome]] | None = None

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.fields]

    def build(self, values: dict[str, Any]):
        """Construct the record from values keyed by wire name."""
        return self.record_type(**{spec.attr: values[spec.name] for spec in self.fields})


@dataclass(frozen=True)
class Normalization:
    record: Any
    stage: Stage
    outcomes: dict[str, FieldOutcome]

    @property
    def defaulted_fields(self) -> list[str]:
        return [name for name, o in self.outcomes.items() if o.source is Source.DEFAULTED]


def _fresh(value: Any) -> Any:
    """Return a private copy of sequence defaults so records never share lists."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return value
