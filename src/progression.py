"""
Lift Coach — Progression / stagnation analysis engine

Per exercise: pull the last few samples out of the workout log, run five
independent pattern detectors over them, and surface the single most severe
finding. The batch analyzer repeats that for every exercise trained recently.

Pure functions over an immutable log snapshot. Suggested weights/reps are
always in stored units (lbs); `convert_weight` only affects the text.
"""
import math
from dataclasses import replace
from typing import Callable, Optional

import numpy as np

from src.config import (
    ANALYSIS_WINDOW,
    MIN_SAMPLES,
    RECENT_WORKOUTS,
    MAX_INSIGHTS,
    LBS_PER_KG,
    NO_ISSUES_MESSAGE,
    NO_ISSUES_SUGGESTION,
)
from src.models import ExerciseSample, Insight, PatternType, ProgressReport, Severity
from src.units import format_weight, make_converter, weight_unit
from src.workout_log import workouts_to_dataframe


def _round(value: float) -> float:
    """Round half up (2.5 → 3), the way the coaching copy has always rounded."""
    return float(math.floor(value + 0.5))


def _labeler(use_kg: bool, convert_weight: Optional[Callable]) -> Callable[[float], str]:
    convert = convert_weight or make_converter(use_kg)
    return lambda weight: format_weight(weight, use_kg, convert)


# ═══════════════════════════════════════════════════════════════════════
# 1. HISTORY EXTRACTION
# ═══════════════════════════════════════════════════════════════════════

def extract_history(exercise_name: str, workouts) -> list:
    """
    Chronological samples for one exercise (name matched case-insensitively),
    oldest first, capped to the last ANALYSIS_WINDOW.
    Same-day entries keep log order.
    """
    return history_from_frame(workouts_to_dataframe(workouts), exercise_name)


def history_from_frame(df, exercise_name: str) -> list:
    """extract_history over an already flattened log (see workouts_to_dataframe)."""
    if df.empty:
        return []

    ex_df = df[df["exercise_key"] == (exercise_name or "").lower()]
    if ex_df.empty:
        return []
    ex_df = ex_df.sort_values("date", kind="stable", na_position="first").tail(ANALYSIS_WINDOW)

    return [
        ExerciseSample(
            name=row.exercise,
            date=row.date_str,
            sets=int(row.sets),
            reps=int(row.reps),
            weight=float(row.weight),
            volume=float(row.volume),
            max_weight=float(row.weight),
            total_reps=int(row.total_reps),
        )
        for row in ex_df.itertuples(index=False)
    ]


# ═══════════════════════════════════════════════════════════════════════
# 2. DETECTORS — each returns an Insight or None
# ═══════════════════════════════════════════════════════════════════════

def detect_weight_stagnation(samples: list, use_kg: bool = False,
                             convert_weight: Callable = None) -> Optional[Insight]:
    """
    Two checks, first match wins:
    a) last 6 weights alternate between exactly two values (≥3 changes);
    b) the latest weight appears in ≥4 of the last 5 sessions.
    """
    if not samples:
        return None
    fmt = _labeler(use_kg, convert_weight)
    name = samples[-1].name
    weights = [s.weight for s in samples]

    last_six = weights[-6:]
    distinct = list(dict.fromkeys(last_six))
    if len(distinct) == 2:
        weight1, weight2 = distinct
        oscillations = sum(1 for i in range(1, len(last_six)) if last_six[i] != last_six[i - 1])
        if oscillations >= 3:
            avg_weight = _round((weight1 + weight2) / 2)
            next_weight = max(weight1, weight2) + 5
            return Insight(
                type=PatternType.WEIGHT_STAGNATION,
                exercise_name=name,
                pattern=f"Oscillating between {fmt(weight1)} and {fmt(weight2)}",
                message=f"You've mastered the {fmt(avg_weight)} range! Your form and consistency are solid.",
                confidence="Oscillating weights shows you're right at your progression threshold "
                           "- perfect timing to push forward.",
                suggestion=f"Try {fmt(next_weight)} for 3-4 reps, then work back up to your target rep range",
                reasoning="Small weight jumps with lower reps help break through plateaus "
                          "while maintaining good form",
                suggested_weight=next_weight,
                suggested_reps=max(4, min(s.reps for s in samples[-3:]) - 2),
                severity=Severity.HIGH,
            )

    last_weight = weights[-1]
    same_weight_count = weights[-5:].count(last_weight)
    if same_weight_count >= 4:
        avg_reps = sum(s.reps for s in samples[-4:]) / 4
        next_weight = last_weight + (5 if last_weight < 100 else 10)
        target_reps = max(5, math.floor(avg_reps * 0.8))
        return Insight(
            type=PatternType.WEIGHT_STAGNATION,
            exercise_name=name,
            pattern=f"{fmt(last_weight)} for {same_weight_count} consecutive workouts",
            message=f"You've built incredible strength endurance at {fmt(last_weight)}! "
                    f"Time to challenge yourself.",
            confidence="Consistent performance at this weight proves you're ready for the next level.",
            suggestion=f"Ready for {fmt(next_weight)} with {target_reps} reps",
            reasoning="Your body has adapted to this load. A controlled weight increase "
                      "will stimulate new growth.",
            suggested_weight=next_weight,
            suggested_reps=target_reps,
            severity=Severity.HIGH,
        )

    return None


def detect_performance_decline(samples: list, use_kg: bool = False,
                               convert_weight: Callable = None) -> Optional[Insight]:
    """Reps falling (never rising, down ≥2 overall) at the current weight."""
    recent = samples[-5:]
    if len(recent) < 4:
        return None

    current_weight = recent[-1].weight
    same_weight = [s for s in recent if s.weight == current_weight]
    if len(same_weight) < 3:
        return None

    rep_trend = [s.reps for s in same_weight]
    is_decline = all(rep_trend[i] <= rep_trend[i - 1] for i in range(1, len(rep_trend)))
    total_decline = rep_trend[0] - rep_trend[-1]
    if not (is_decline and total_decline >= 2):
        return None

    fmt = _labeler(use_kg, convert_weight)
    deload_weight = _round(max(current_weight * 0.85, current_weight - 15))
    return Insight(
        type=PatternType.PERFORMANCE_DECLINE,
        exercise_name=recent[-1].name,
        pattern=f"Reps declining: {'→'.join(str(r) for r in rep_trend)} at {fmt(current_weight)}",
        message="Your body is telling you something important - you've been pushing hard "
                "and need strategic recovery.",
        confidence="This isn't weakness, it's smart training. Even elite athletes use deload "
                   "periods to come back stronger.",
        suggestion=f"Deload to {fmt(deload_weight)} for 8-10 reps, focus on perfect form",
        reasoning="A strategic deload will refresh your nervous system and let you return "
                  "to heavy weights with renewed strength.",
        suggested_weight=deload_weight,
        suggested_reps=min(10, max(rep_trend) + 2),
        severity=Severity.MEDIUM,
    )


def detect_failed_progression(samples: list, use_kg: bool = False,
                              convert_weight: Callable = None) -> Optional[Insight]:
    """
    Repeated jumps in weight that cost reps. Two or more such attempts in the
    last 6 sessions → suggest a stepping-stone weight halfway between.
    """
    recent = samples[-6:]
    if len(recent) < 4:
        return None

    attempts = []
    for prev, curr in zip(recent, recent[1:]):
        if curr.weight > prev.weight and curr.reps < prev.reps:
            attempts.append(
                {"weight": curr.weight, "reps": curr.reps,
                 "prev_weight": prev.weight, "prev_reps": prev.reps}
            )
    if len(attempts) < 2:
        return None

    fmt = _labeler(use_kg, convert_weight)
    last_attempt = attempts[-1]
    intermediate = _round((last_attempt["prev_weight"] + last_attempt["weight"]) / 2)
    return Insight(
        type=PatternType.FAILED_PROGRESSION,
        exercise_name=recent[-1].name,
        pattern=f"Multiple attempts at {fmt(last_attempt['weight'])} with reduced reps",
        message="You're pushing your limits - that's exactly how champions are made! "
                "Your ambition is admirable.",
        confidence="Each attempt at heavier weight is building neural pathways. "
                   "You're closer to success than you think.",
        suggestion=f"Try {fmt(intermediate)} as a stepping stone for {last_attempt['prev_reps']} reps",
        reasoning="Smaller jumps reduce the neurological stress of big weight increases "
                  "while building confidence.",
        suggested_weight=intermediate,
        suggested_reps=last_attempt["prev_reps"],
        severity=Severity.MEDIUM,
    )


def volume_trend(volumes: list) -> tuple:
    """
    Least-squares slope of volume against session number (1..n) and the mean.
    Returns (slope, avg_volume); fewer than 2 points → slope 0.
    """
    if not volumes:
        return 0.0, 0.0
    y = np.asarray(volumes, dtype=float)
    avg = float(y.mean())
    if len(y) < 2:
        return 0.0, avg
    x = np.arange(1, len(y) + 1, dtype=float)
    slope = float(np.polyfit(x, y, 1)[0])
    return slope, avg


def detect_volume_plateau(samples: list, use_kg: bool = False,
                          convert_weight: Callable = None) -> Optional[Insight]:
    """
    Volume flat (|slope| under 1% of the mean per session) over the last 5.
    An all-zero window never counts as a plateau.
    """
    if len(samples) < 5:
        return None

    slope, avg_volume = volume_trend([s.volume for s in samples][-5:])
    if not abs(slope) < avg_volume * 0.01:
        return None

    fmt = _labeler(use_kg, convert_weight)
    last = samples[-1]
    display_volume = _round(avg_volume / LBS_PER_KG) if use_kg else avg_volume

    # Strategy depends on where the reps currently sit
    if last.reps >= 12:
        suggested_weight = last.weight + 5
        suggested_reps = max(8, last.reps - 2)
        suggestion = f"Increase weight to {fmt(suggested_weight)} and reduce reps to {suggested_reps}"
    elif last.reps <= 6:
        suggested_weight = last.weight
        suggested_reps = last.reps + 2
        suggestion = f"Keep {fmt(suggested_weight)} but increase reps to {suggested_reps}"
    else:
        suggested_weight = last.weight + 5
        suggested_reps = last.reps
        suggestion = f"Progress to {fmt(suggested_weight)} for {suggested_reps} reps, or add an extra set"

    return Insight(
        type=PatternType.VOLUME_PLATEAU,
        exercise_name=last.name,
        pattern=f"Volume plateaued around {int(_round(display_volume)):,} total {weight_unit(use_kg)}",
        message="You've reached a comfortable training zone. Your consistency is building "
                "a strong foundation!",
        confidence="Stable volume shows excellent work capacity. Now it's time to challenge "
                   "that capacity.",
        suggestion=suggestion,
        reasoning="Progressive overload through volume increases will break this plateau "
                  "and stimulate new growth.",
        suggested_weight=suggested_weight,
        suggested_reps=suggested_reps,
        severity=Severity.LOW,
    )


def detect_perfect_stagnation(samples: list, use_kg: bool = False,
                              convert_weight: Callable = None) -> Optional[Insight]:
    """Same weight × reps × sets as today in ≥3 of the last 4 sessions."""
    recent = samples[-4:]
    if len(recent) < 3:
        return None

    last = recent[-1]
    identical = sum(
        1 for s in recent
        if s.weight == last.weight and s.reps == last.reps and s.sets == last.sets
    )
    if identical < 3:
        return None

    fmt = _labeler(use_kg, convert_weight)
    next_weight = last.weight + (2.5 if last.weight < 50 else 5)
    target_reps = max(last.reps - 1, 5)
    return Insight(
        type=PatternType.PERFECT_STAGNATION,
        exercise_name=last.name,
        pattern=f"Identical {last.sets}×{last.reps} @ {fmt(last.weight)} for {identical} sessions",
        message="You've mastered this exact combination! Your consistency and form are "
                "dialed in perfectly.",
        confidence="Perfect repetition means your body has fully adapted and is ready "
                   "for the next challenge.",
        suggestion=f"Time to progress: {fmt(next_weight)} for {target_reps} reps",
        reasoning="Your body craves progressive overload. This small increase will "
                  "reignite muscle growth.",
        suggested_weight=next_weight,
        suggested_reps=target_reps,
        severity=Severity.HIGH,
    )


# Evaluation order doubles as the tie-break among equal severities.
DETECTORS = (
    detect_weight_stagnation,
    detect_performance_decline,
    detect_failed_progression,
    detect_perfect_stagnation,
    detect_volume_plateau,
)


# ═══════════════════════════════════════════════════════════════════════
# 3. RESOLUTION
# ═══════════════════════════════════════════════════════════════════════

def rank_insights(insights) -> list:
    """Most severe first. Stable: equal severities keep their incoming order."""
    return sorted(insights, key=Severity.sort_key, reverse=True)


def resolve(insights) -> Optional[Insight]:
    ranked = rank_insights(insights)
    return ranked[0] if ranked else None


def run_detectors(samples: list, use_kg: bool = False, convert_weight: Callable = None) -> list:
    """Every detector that fires, in evaluation order."""
    results = [detect(samples, use_kg, convert_weight) for detect in DETECTORS]
    return [r for r in results if r is not None]


def analyze_exercise(exercise_name: str, workouts, use_kg: bool = False,
                     convert_weight: Callable = None) -> Optional[Insight]:
    """
    The single most important insight for one exercise, or None when there
    are fewer than MIN_SAMPLES sessions or nothing looks stuck.
    """
    return _best_insight(exercise_name, extract_history(exercise_name, workouts),
                         use_kg, convert_weight)


def _best_insight(exercise_name: str, samples: list, use_kg: bool,
                  convert_weight: Optional[Callable]) -> Optional[Insight]:
    if len(samples) < MIN_SAMPLES:
        return None
    insight = resolve(run_detectors(samples, use_kg, convert_weight))
    if insight is None:
        return None
    return replace(insight, exercise_name=exercise_name)


# ═══════════════════════════════════════════════════════════════════════
# 4. BATCH ANALYSIS
# ═══════════════════════════════════════════════════════════════════════

def recent_exercise_names(workouts, normalize_names: bool = False) -> list:
    """
    Distinct exercise names in the last RECENT_WORKOUTS workouts of the log,
    first-seen order. Verbatim (case-sensitive) unless `normalize_names`,
    which folds case and keeps the first spelling seen.
    """
    names = {}
    for w in tuple(workouts or ())[-RECENT_WORKOUTS:]:
        for ex in w.exercises:
            key = ex.name.lower() if normalize_names else ex.name
            names.setdefault(key, ex.name)
    return list(names.values())


def analyze_all_exercises(workouts, use_kg: bool = False, convert_weight: Callable = None,
                          normalize_names: bool = False) -> ProgressReport:
    """Ranked insights (top MAX_INSIGHTS) across every recently trained exercise."""
    workouts = tuple(workouts or ())
    names = recent_exercise_names(workouts, normalize_names)
    # Flattened once; every name is looked up in the same frame
    df = workouts_to_dataframe(workouts)

    issues = []
    for name in names:
        insight = _best_insight(name, history_from_frame(df, name), use_kg, convert_weight)
        if insight is not None:
            issues.append(insight)
    ranked = rank_insights(issues)[:MAX_INSIGHTS]

    if not ranked:
        return ProgressReport(
            has_issues=False,
            total_exercises_analyzed=len(names),
            message=NO_ISSUES_MESSAGE,
            suggestion=NO_ISSUES_SUGGESTION,
        )

    noun = "opportunity" if len(ranked) == 1 else "opportunities"
    return ProgressReport(
        has_issues=True,
        total_exercises_analyzed=len(names),
        primary_issue=ranked[0],
        all_issues=tuple(ranked),
        summary=f"{len(ranked)} optimization {noun} detected",
    )


def get_progress_insights(workouts, use_kg: bool = False, convert_weight: Callable = None) -> dict:
    """analyze_all_exercises as the plain dict the UI layer renders."""
    return analyze_all_exercises(workouts, use_kg, convert_weight).to_dict()
