"""
Lift Coach — Template glue

Accepting a suggestion means patching the exercise's defaults in the template
it was last trained from. Template mappings are never mutated in place; a
helper that patches something returns a new mapping, one that patches nothing
returns its input.
"""
import copy
import json
import os
import re
from typing import Optional

from src.config import DEFAULT_TEMPLATES
from src.models import Insight, PatternType
from src.workout_log import workouts_to_dataframe


def template_key(name: str) -> str:
    """'Upper Body A' → 'upper_body_a'."""
    return re.sub(r"\s+", "_", (name or "").strip().lower())


def load_templates(path: str) -> dict:
    """Template mapping from JSON, the built-in starter set if the file is missing."""
    if not os.path.exists(path):
        return copy.deepcopy(DEFAULT_TEMPLATES)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"templates file must hold an object keyed by template, got {type(data).__name__}")
    return data


def save_templates(path: str, templates: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(templates, f, indent=2)


def find_template_for_exercise(exercise_name: str, workouts) -> Optional[str]:
    """Template key of the most recent workout that included this exercise."""
    df = workouts_to_dataframe(workouts)
    if df.empty:
        return None
    hits = df[df["exercise_key"] == (exercise_name or "").lower()]
    if hits.empty:
        return None
    latest = hits.sort_values("date", kind="stable", na_position="first").iloc[-1]
    return latest["type"] or None


def apply_suggestion(templates: dict, key: str, insight: Insight) -> dict:
    """
    New template mapping with the insight's weight/reps written into every
    matching exercise of template `key`. Raises KeyError for an unknown key.
    When the template has no such exercise the input mapping itself comes
    back, so callers can tell "nothing patched" by identity.
    """
    if key not in templates:
        raise KeyError(key)
    if insight is None or insight.type == PatternType.NONE:
        return templates

    target = insight.exercise_name.lower()
    updated = copy.deepcopy(templates)
    matched = 0
    for ex in updated[key].get("exercises", []):
        if str(ex.get("name", "")).lower() == target:
            ex["weight"] = insight.suggested_weight
            ex["reps"] = insight.suggested_reps
            matched += 1
    return updated if matched else templates


def accept_suggestion(templates: dict, workouts, insight: Insight) -> dict:
    """Locate the template for the insight's exercise and patch it."""
    if insight is None:
        return templates
    key = find_template_for_exercise(insight.exercise_name, workouts)
    if key is None or key not in templates:
        return templates
    return apply_suggestion(templates, key, insight)
