# api_client.py
import os
from typing import Iterable, Optional, Tuple

import requests

from schemas import ScoreResult
from scoring import score_selection

API_BASE = os.getenv("LIFESTYLE_API_BASE", "http://localhost:8000")

# Explanations and analyses are single-shot; don't leave the UI hanging.
REQUEST_TIMEOUT_SECONDS = 30


def call_api(path: str, payload: dict, base_url: Optional[str] = None) -> dict:
    """
    Helper to call the Lifestyle Score FastAPI.

    - path: e.g. "/api/analyze"
    - payload: dict that will be sent as JSON

    Raises RuntimeError with details if the API responds with 4xx/5xx.
    """
    url = f"{base_url or API_BASE}{path}"
    try:
        resp = requests.post(url, json=payload, timeout=REQUEST_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        raise RuntimeError(f"API {path} request failed: {e}") from e

    if resp.status_code >= 400:
        try:
            data = resp.json()
        except ValueError:
            data = resp.text
        raise RuntimeError(f"API {path} failed: {resp.status_code} – {data}")

    return resp.json()


def analyze_with_fallback(
    selected: Iterable[str],
    goal: Optional[str] = None,
    user_input: Optional[str] = None,
    base_url: Optional[str] = None,
) -> Tuple[ScoreResult, bool]:
    """
    Ask /api/analyze for the AI-refined result.

    Returns (result, is_ai). Any API failure falls back to the local
    score, so the caller always has something to show.
    """
    selected = sorted(set(selected))
    payload = {"selected": selected}
    if goal:
        payload["goal"] = goal
    if user_input and user_input.strip():
        payload["input"] = user_input.strip()

    try:
        data = call_api("/api/analyze", payload, base_url=base_url)
        return ScoreResult.model_validate(data), True
    except (RuntimeError, ValueError):
        return score_selection(selected), False


def explain_tip(
    tip: str,
    selected: Iterable[str],
    goal: Optional[str] = None,
    base_url: Optional[str] = None,
) -> str:
    payload = {"tip": tip, "selected": sorted(set(selected))}
    if goal:
        payload["goal"] = goal
    data = call_api("/api/explain", payload, base_url=base_url)
    return data.get("explanation", "")
