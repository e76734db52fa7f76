"""Response normalization: strict parse, validation, then field recovery."""

from solverelay.normalize.normalizer import normalize, normalize_with_report

__all__ = ["normalize", "normalize_with_report"]
