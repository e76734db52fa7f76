"""Turn raw model text into a contract-shaped record, whatever the text looks like."""

from __future__ import annotations

import logging
from typing import Any

from solverelay.errors import ValidationError
from solverelay.models import FieldContract, FieldOutcome, Normalization, Stage
from solverelay.normalize.extractor import extract_json
from solverelay.normalize.recovery import recover_fields
from solverelay.normalize.validator import validate_fields

log = logging.getLogger(__name__)


def normalize(raw_text: Any, contract: FieldContract):
    """Return the record for *contract* recovered from *raw_text*. Never raises."""
    return normalize_with_report(raw_text, contract).record


def normalize_with_report(raw_text: Any, contract: FieldContract) -> Normalization:
    text = raw_text if isinstance(raw_text, str) else ""

    parsed = extract_json(text)
    if parsed is not None:
        try:
            outcomes = _reconcile(validate_fields(parsed, contract), contract)
        except ValidationError as exc:
            log.warning("%s: parsed JSON failed validation (%s); recovering fields", contract.name, exc)
        else:
            log.debug("%s: structured parse validated", contract.name)
            return Normalization(
                record=contract.build({name: o.value for name, o in outcomes.items()}),
                stage=Stage.VALIDATED,
                outcomes=outcomes,
            )
    else:
        log.warning("%s: no parseable JSON in model output; recovering fields from %r",
                    contract.name, _preview(text))

    outcomes = _reconcile(recover_fields(text, contract), contract)
    return Normalization(
        record=contract.build({name: o.value for name, o in outcomes.items()}),
        stage=Stage.RECOVERED,
        outcomes=outcomes,
    )


def _reconcile(outcomes: dict[str, FieldOutcome], contract: FieldContract) -> dict[str, FieldOutcome]:
    return contract.reconcile(outcomes) if contract.reconcile is not None else outcomes


def _preview(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit] + "..."
