# Path: core/analysis/json_extract.py
# Purpose: Recover a JSON object from free-form model output.
# Layer: core/analysis.
# Details: Two phases (fence-stripped strict parse, then brace-span fallback); never raises.

from __future__ import annotations

import json
import re
from typing import Any, Dict

_FENCES = re.compile(r"```(?:json)?")
_BRACE_SPAN = re.compile(r"\{[\s\S]*\}")


def _as_object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def lenient_json_loads(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object contained in ``text``.

    Markdown code fences are removed and the remainder parsed strictly. When that fails, the
    span from the first ``{`` to the last ``}`` of the original text is tried. Anything that
    does not yield a JSON object results in an empty dict.
    """

    if not isinstance(text, str):
        return {}

    try:
        return _as_object(json.loads(_FENCES.sub("", text).strip()))
    except (ValueError, RecursionError):
        pass

    match = _BRACE_SPAN.search(text)
    if match is None:
        return {}
    try:
        return _as_object(json.loads(match.group(0)))
    except (ValueError, RecursionError):
        return {}
