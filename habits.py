# habits.py
from typing import Optional, Tuple

from schemas import HabitDefinition

HABITS: Tuple[HabitDefinition, ...] = (
    HabitDefinition(
        id="sleep",
        label="I sleep 7–9 hours nightly",
        tip="Aim for 7–9 hours of consistent, quality sleep by keeping a regular schedule.",
    ),
    HabitDefinition(
        id="water",
        label="I drink 8+ cups of water daily",
        tip="Keep a refillable bottle nearby and sip regularly throughout the day.",
    ),
    HabitDefinition(
        id="exercise",
        label="I exercise 30+ minutes most days",
        tip="Schedule short workouts or walks—consistency beats intensity.",
    ),
    HabitDefinition(
        id="food",
        label="I eat balanced, whole-food meals",
        tip="Build plates around veggies, lean proteins, whole grains, and healthy fats.",
    ),
    HabitDefinition(
        id="fruitveg",
        label="I get 5+ servings of fruits/vegetables",
        tip="Add a serving to each meal and snack; frozen options count too.",
    ),
    HabitDefinition(
        id="screen",
        label="I limit non‑work screen time to ≤ 2 hours",
        tip="Set app limits and add screen‑free blocks (meals, last hour before bed).",
    ),
    HabitDefinition(
        id="breaks",
        label="I take short movement breaks hourly",
        tip="Stand, stretch, or take 2‑minute walks every hour to reset energy.",
    ),
    HabitDefinition(
        id="stress",
        label="I practice stress management (breathing/meditation)",
        tip="Try 5 minutes of guided breathing or journaling to unwind daily.",
    ),
    HabitDefinition(
        id="sugar",
        label="I limit sugary drinks and snacks",
        tip="Swap soda for sparkling water; keep nutritious snacks within reach.",
    ),
    HabitDefinition(
        id="smoke",
        label="I don't smoke or vape",
        tip="If you do, talk to a professional—small steps and support help most.",
    ),
)

HABIT_IDS: Tuple[str, ...] = tuple(h.id for h in HABITS)

_BY_ID = {h.id: h for h in HABITS}


def get_habit(habit_id: str) -> Optional[HabitDefinition]:
    return _BY_ID.get(habit_id)
