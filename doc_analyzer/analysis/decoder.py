"""Parses the model's raw reply into JSON, tolerating markdown fences."""

import json
import re

from doc_analyzer.analysis.exceptions import NonJsonResponseError
from doc_analyzer.analysis.models import AnalysisResult

DETAILS_LIMIT = 500

_LEADING_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_fences(raw: str) -> str:
    """Remove a leading ``` (with or without a language tag) and a trailing ```."""
    cleaned = raw.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _reject_constant(name: str) -> float:
    # NaN and Infinity are Python extensions, not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_response(raw: str) -> AnalysisResult:
    """Parse the reply as JSON without checking it against any schema.

    Raises:
        NonJsonResponseError: carrying the first DETAILS_LIMIT chars of ``raw``.
    """
    try:
        return json.loads(strip_fences(raw), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise NonJsonResponseError(
            "Model returned non-JSON output",
            details=raw[:DETAILS_LIMIT],
        ) from exc
