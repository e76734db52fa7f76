"""Schema validation of parsed model output against a field contract."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from solverelay.errors import ValidationError
from solverelay.models import FieldContract, FieldKind, FieldOutcome, FieldSpec, Source


def validate(candidate: Any, contract: FieldContract):
    """Validate *candidate* and return the contract's record, or raise ValidationError."""
    outcomes = validate_fields(candidate, contract)
    return contract.build({name: o.value for name, o in outcomes.items()})


def validate_fields(candidate: Any, contract: FieldContract) -> dict[str, FieldOutcome]:
    if dataclasses.is_dataclass(candidate) and not isinstance(candidate, type):
        candidate = candidate.to_dict()
    if not isinstance(candidate, Mapping):
        raise ValidationError("<root>", "object", f"expected a JSON object, got {type(candidate).__name__}")

    outcomes: dict[str, FieldOutcome] = {}
    for spec in contract.fields:
        value = candidate.get(spec.name)
        if value is None or (_is_empty(value) and not spec.allow_empty and spec.has_default):
            if not spec.has_default:
                raise ValidationError(spec.name, spec.kind.value, f"missing required field {spec.name!r}")
            outcomes[spec.name] = FieldOutcome(spec.default_value(), Source.DEFAULTED)
            continue
        _check_kind(spec, value)
        outcomes[spec.name] = FieldOutcome(list(value) if isinstance(value, list) else value, Source.PARSED)
    return outcomes


def _check_kind(spec: FieldSpec, value: Any) -> None:
    if spec.kind is FieldKind.STRING:
        ok = isinstance(value, str)
    elif spec.kind is FieldKind.STRING_LIST:
        ok = isinstance(value, list) and all(isinstance(item, str) for item in value)
    else:
        ok = isinstance(value, list)
    if not ok:
        raise ValidationError(spec.name, spec.kind.value)


def _is_empty(value: Any) -> bool:
    return value == "" or value == []
