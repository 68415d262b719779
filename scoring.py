# scoring.py
import math
from collections.abc import Mapping
from typing import FrozenSet, Iterable, Sequence, Union

from habits import HABITS
from schemas import HabitDefinition, ScoreResult

Selection = Union[Mapping, Iterable[str]]

GREAT_MESSAGE = "Great job!"
ON_TRACK_MESSAGE = "You're on the right track"
NEEDS_WORK_MESSAGE = "Needs Improvement"

LOCAL_TIP_LIMIT = 3


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def normalize_selection(selection: Selection) -> FrozenSet[str]:
    """
    Accept either {habit_id: checked} or an iterable of habit ids.
    Only truthy mapping entries count; duplicates collapse.
    """
    if selection is None:
        return frozenset()
    if isinstance(selection, Mapping):
        return frozenset(str(k) for k, checked in selection.items() if checked)
    if isinstance(selection, str):
        return frozenset([selection])
    return frozenset(str(item) for item in selection)


def message_for_score(score: int) -> str:
    # 70 and 50 both land on the middle message
    if score > 70:
        return GREAT_MESSAGE
    if score < 50:
        return NEEDS_WORK_MESSAGE
    return ON_TRACK_MESSAGE


def score_selection(
    selection: Selection,
    catalog: Sequence[HabitDefinition] = HABITS,
) -> ScoreResult:
    """
    Deterministic local score used for instant feedback and as the
    client-side fallback when the AI analysis is unavailable.

    Unknown ids are ignored. Tips come from unchecked habits, in catalog
    order, capped at LOCAL_TIP_LIMIT.
    """
    selected = normalize_selection(selection)
    total = len(catalog)
    good = sum(1 for habit in catalog if habit.id in selected)

    score = round_half_up(100 * good / total) if total else 0
    tips = [habit.tip for habit in catalog if habit.id not in selected]

    return ScoreResult(
        score=score,
        message=message_for_score(score),
        tips=tips[:LOCAL_TIP_LIMIT],
    )


def share_text(result: ScoreResult) -> str:
    return f"My Lifestyle Score is {result.score}%. {result.message}"
