# sanitizer.py
"""
Clamp whatever the completion service returns into the bounded shapes
the API promises. Nothing in here raises: a malformed or hostile
completion must still produce a valid ScoreResult / explanation.
"""

import math
from collections.abc import Mapping
from typing import Any, List

from schemas import (
    EXPLANATION_MAX_CHARS,
    MAX_TIPS,
    MESSAGE_MAX_CHARS,
    ScoreResult,
)
from scoring import round_half_up

DEFAULT_MESSAGE = "Here's your honest snapshot"
DEFAULT_TIPS = ("Prioritize sleep", "Stay hydrated", "Move daily")

# Substituted when the completion body is not JSON at all.
ANALYSIS_FALLBACK = {
    "score": 50,
    "message": "Partial analysis available",
    "tips": ["Keep consistent sleep", "Hydrate through the day", "Add short walks"],
}


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:
        return ""


def _json_text(value: Any) -> str:
    """String form of a JSON value as the browser client would print it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return _to_text(value)


def _to_number(value: Any) -> float:
    """
    Lenient numeric coercion of a JSON value:
    booleans are 1/0, a one-item list is its item, anything else
    that does not parse is NaN.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (list, tuple)):
        if not value:
            return 0.0
        if len(value) == 1 and not isinstance(value[0], bool):
            return _to_number(value[0])
        return math.nan
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def clamp_score(value: Any) -> int:
    number = _to_number(value)
    if not math.isfinite(number):
        return 0
    return round_half_up(max(0.0, min(100.0, number)))


def clamp_message(value: Any) -> str:
    text = _to_text(value) if value else ""
    if not text:
        text = DEFAULT_MESSAGE
    return text[:MESSAGE_MAX_CHARS]


def clamp_tips(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return list(DEFAULT_TIPS)
    # coerce first, then drop empties: null is kept as "null"
    tips = [_json_text(item) for item in value]
    return [tip for tip in tips if tip][:MAX_TIPS]


def sanitize_analysis(raw: Any) -> ScoreResult:
    data = raw if isinstance(raw, Mapping) else {}
    return ScoreResult(
        score=clamp_score(data.get("score")),
        message=clamp_message(data.get("message")),
        tips=clamp_tips(data.get("tips")),
    )


def sanitize_explanation(raw: Any) -> str:
    """Trimmed text, at most EXPLANATION_MAX_CHARS. Empty is allowed."""
    return _to_text(raw).strip()[:EXPLANATION_MAX_CHARS]
