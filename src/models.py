"""
Lift Coach — Record types

Workout log records are read-only snapshots; samples and insights are derived
fresh on every analysis call and never persisted.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Optional


def _as_float(value) -> float:
    """Coerce a raw numeric field, treating missing/garbage as 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_int(value) -> int:
    return int(_as_float(value))


def _as_str(value) -> str:
    return value if isinstance(value, str) else ""


@total_ordering
class Severity(Enum):
    """Insight importance. Ordered LOW < MEDIUM < HIGH."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    @staticmethod
    def sort_key(insight: "Insight") -> int:
        """Key for descending-severity sorts (use with reverse=True)."""
        return insight.severity.rank


_SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


class PatternType(str, Enum):
    WEIGHT_STAGNATION = "weight_stagnation"
    PERFORMANCE_DECLINE = "performance_decline"
    FAILED_PROGRESSION = "failed_progression"
    VOLUME_PLATEAU = "volume_plateau"
    PERFECT_STAGNATION = "perfect_stagnation"
    NONE = "none"


@dataclass(frozen=True)
class ExerciseEntry:
    name: str
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    body_part: str = ""

    @property
    def volume(self) -> float:
        return self.sets * self.reps * self.weight

    @classmethod
    def from_dict(cls, raw: dict) -> "ExerciseEntry":
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            name=_as_str(raw.get("name")),
            sets=_as_int(raw.get("sets")),
            reps=_as_int(raw.get("reps")),
            weight=_as_float(raw.get("weight")),
            body_part=_as_str(raw.get("bodyPart")),
        )

    def to_dict(self) -> dict:
        out = {"name": self.name, "sets": self.sets, "reps": self.reps, "weight": self.weight}
        if self.body_part:
            out["bodyPart"] = self.body_part
        return out


@dataclass(frozen=True)
class Workout:
    """One finished logging session. Immutable once stored."""
    type: str
    template_name: str
    date: str
    exercises: tuple = ()
    volume: float = 0.0
    completed_at: str = ""

    @classmethod
    def from_dict(cls, raw: dict) -> "Workout":
        """
        Build from the stored record shape (camelCase keys).
        Missing numbers become 0, missing strings "", missing volume is
        recomputed from the entries.
        """
        raw = raw if isinstance(raw, dict) else {}
        entries = raw.get("exercises") or []
        if not isinstance(entries, (list, tuple)):
            entries = []
        exercises = tuple(ExerciseEntry.from_dict(e) for e in entries)
        if raw.get("volume") is None:
            volume = sum(e.volume for e in exercises)
        else:
            volume = _as_float(raw.get("volume"))
        return cls(
            type=_as_str(raw.get("type")),
            template_name=_as_str(raw.get("templateName")),
            date=_as_str(raw.get("date")),
            exercises=exercises,
            volume=volume,
            completed_at=_as_str(raw.get("completedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "templateName": self.template_name,
            "date": self.date,
            "exercises": [e.to_dict() for e in self.exercises],
            "volume": self.volume,
            "completedAt": self.completed_at,
        }


@dataclass(frozen=True)
class ExerciseSample:
    """One exercise's performance in one workout, as seen by the detectors."""
    name: str
    date: str
    sets: int
    reps: int
    weight: float
    volume: float
    max_weight: float
    total_reps: int


@dataclass(frozen=True)
class Insight:
    """A coaching suggestion for one exercise. Suggested numbers are in lbs."""
    type: PatternType
    exercise_name: str
    pattern: str
    message: str
    confidence: str
    suggestion: str
    reasoning: str
    suggested_weight: float
    suggested_reps: int
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "exerciseName": self.exercise_name,
            "pattern": self.pattern,
            "message": self.message,
            "confidence": self.confidence,
            "suggestion": self.suggestion,
            "reasoning": self.reasoning,
            "suggestedWeight": self.suggested_weight,
            "suggestedReps": self.suggested_reps,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ProgressReport:
    """Batch analysis result across every recently trained exercise."""
    has_issues: bool
    total_exercises_analyzed: int
    primary_issue: Optional[Insight] = None
    all_issues: tuple = field(default_factory=tuple)
    summary: Optional[str] = None
    message: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "hasIssues": self.has_issues,
            "totalExercisesAnalyzed": self.total_exercises_analyzed,
        }
        if self.primary_issue is not None:
            out["primaryIssue"] = self.primary_issue.to_dict()
        if self.all_issues:
            out["allIssues"] = [i.to_dict() for i in self.all_issues]
        if self.summary is not None:
            out["summary"] = self.summary
        if self.message is not None:
            out["message"] = self.message
        if self.suggestion is not None:
            out["suggestion"] = self.suggestion
        return out
