"""
Lift Coach — Configuration

Engine windows, display-unit defaults, file locations and the built-in
exercise catalogue / starter templates.
Weights are always stored in pounds; kg only exists at display time.
"""
import os

# ── Environment ──────────────────────────────────────────────────────
USE_KG = os.environ.get("LIFTCOACH_USE_KG", "").strip().lower() in ("1", "true", "yes")
WORKOUT_LOG_PATH = os.environ.get("LIFTCOACH_WORKOUT_LOG", "workouts.json")
TEMPLATES_PATH = os.environ.get("LIFTCOACH_TEMPLATES", "templates.json")

# ── Analysis windows ─────────────────────────────────────────────────
ANALYSIS_WINDOW = 8      # most recent samples per exercise
MIN_SAMPLES = 3          # below this an exercise yields no insight
RECENT_WORKOUTS = 10     # workouts scanned for exercise-name discovery
MAX_INSIGHTS = 5         # cap on the batch report

# ── Units ────────────────────────────────────────────────────────────
LBS_PER_KG = 2.205

# ── Copy ─────────────────────────────────────────────────────────────
NO_ISSUES_MESSAGE = "You're making great progress! Keep up the excellent momentum. 🚀"
NO_ISSUES_SUGGESTION = (
    "Continue your current routine and consider tracking your lifts "
    "to identify future optimization opportunities."
)

# ═════════════════════════════════════════════════════════════════════
# EXERCISE DATABASE — keyed by lowercase exercise name
#
# Names in the workout log are free text; lookups lowercase them first.
# default_weight is in lbs.
# ═════════════════════════════════════════════════════════════════════

EXERCISE_DB = {
    # ── Chest ───────────────────────────────────────────────────────
    "bench press": {"muscle": "chest", "equipment": "barbell", "default_weight": 135},
    "incline bench press": {"muscle": "chest", "equipment": "barbell", "default_weight": 115},
    "dumbbell bench press": {"muscle": "chest", "equipment": "dumbbell", "default_weight": 70},
    "incline dumbbell press": {"muscle": "chest", "equipment": "dumbbell", "default_weight": 70},
    "push-ups": {"muscle": "chest", "equipment": "bodyweight", "default_weight": 180},
    "chest flyes": {"muscle": "chest", "equipment": "dumbbell", "default_weight": 35},
    # ── Back ────────────────────────────────────────────────────────
    "pull-ups": {"muscle": "back", "equipment": "bodyweight", "default_weight": 180},
    "barbell rows": {"muscle": "back", "equipment": "barbell", "default_weight": 115},
    "dumbbell rows": {"muscle": "back", "equipment": "dumbbell", "default_weight": 60},
    "lat pulldowns": {"muscle": "back", "equipment": "cable", "default_weight": 120},
    "face pulls": {"muscle": "back", "equipment": "cable", "default_weight": 40},
    "deadlifts": {"muscle": "back", "equipment": "barbell", "default_weight": 225},
    # ── Shoulders ───────────────────────────────────────────────────
    "shoulder press": {"muscle": "shoulders", "equipment": "dumbbell", "default_weight": 50},
    "military press": {"muscle": "shoulders", "equipment": "barbell", "default_weight": 85},
    "lateral raises": {"muscle": "shoulders", "equipment": "dumbbell", "default_weight": 20},
    "front raises": {"muscle": "shoulders", "equipment": "dumbbell", "default_weight": 25},
    # ── Arms ────────────────────────────────────────────────────────
    "bicep curls": {"muscle": "biceps", "equipment": "dumbbell", "default_weight": 30},
    "barbell curls": {"muscle": "biceps", "equipment": "barbell", "default_weight": 65},
    "hammer curls": {"muscle": "biceps", "equipment": "dumbbell", "default_weight": 30},
    "tricep dips": {"muscle": "triceps", "equipment": "bodyweight", "default_weight": 180},
    "tricep extensions": {"muscle": "triceps", "equipment": "dumbbell", "default_weight": 35},
    "overhead tricep extension": {"muscle": "triceps", "equipment": "dumbbell", "default_weight": 35},
    # ── Legs ────────────────────────────────────────────────────────
    "squats": {"muscle": "quads", "equipment": "barbell", "default_weight": 185},
    "leg press": {"muscle": "quads", "equipment": "machine", "default_weight": 200},
    "romanian deadlifts": {"muscle": "hamstrings", "equipment": "barbell", "default_weight": 155},
    "lunges": {"muscle": "quads", "equipment": "bodyweight", "default_weight": 180},
    "walking lunges": {"muscle": "quads", "equipment": "dumbbell", "default_weight": 40},
    "hip thrusts": {"muscle": "glutes", "equipment": "barbell", "default_weight": 135},
    "calf raises": {"muscle": "calves", "equipment": "bodyweight", "default_weight": 225},
}


# ── Starter templates (template key → definition) ───────────────────
DEFAULT_TEMPLATES = {
    "push": {
        "name": "Push Day",
        "exercises": [
            {"name": "Bench Press", "sets": 1, "reps": 8, "weight": 135, "bodyPart": "chest"},
            {"name": "Shoulder Press", "sets": 1, "reps": 10, "weight": 65, "bodyPart": "shoulders"},
            {"name": "Incline Dumbbell Press", "sets": 1, "reps": 10, "weight": 70, "bodyPart": "chest"},
            {"name": "Lateral Raises", "sets": 1, "reps": 12, "weight": 20, "bodyPart": "shoulders"},
            {"name": "Tricep Dips", "sets": 1, "reps": 10, "weight": 180, "bodyPart": "triceps"},
            {"name": "Overhead Tricep Extension", "sets": 1, "reps": 12, "weight": 35, "bodyPart": "triceps"},
        ],
    },
    "pull": {
        "name": "Pull Day",
        "exercises": [
            {"name": "Pull-ups", "sets": 1, "reps": 8, "weight": 180, "bodyPart": "back"},
            {"name": "Barbell Rows", "sets": 1, "reps": 8, "weight": 115, "bodyPart": "back"},
            {"name": "Lat Pulldowns", "sets": 1, "reps": 10, "weight": 120, "bodyPart": "back"},
            {"name": "Barbell Curls", "sets": 1, "reps": 10, "weight": 65, "bodyPart": "biceps"},
            {"name": "Hammer Curls", "sets": 1, "reps": 12, "weight": 30, "bodyPart": "biceps"},
            {"name": "Face Pulls", "sets": 1, "reps": 15, "weight": 40, "bodyPart": "back"},
        ],
    },
    "legs": {
        "name": "Leg Day",
        "exercises": [
            {"name": "Squats", "sets": 1, "reps": 8, "weight": 185, "bodyPart": "quads"},
            {"name": "Romanian Deadlifts", "sets": 1, "reps": 10, "weight": 155, "bodyPart": "hamstrings"},
            {"name": "Leg Press", "sets": 1, "reps": 12, "weight": 200, "bodyPart": "quads"},
            {"name": "Walking Lunges", "sets": 1, "reps": 20, "weight": 40, "bodyPart": "quads"},
            {"name": "Calf Raises", "sets": 1, "reps": 15, "weight": 225, "bodyPart": "calves"},
            {"name": "Hip Thrusts", "sets": 1, "reps": 12, "weight": 135, "bodyPart": "glutes"},
        ],
    },
}


def get_muscle_group(exercise_name: str) -> str:
    """Muscle group for a free-text exercise name, 'other' if unknown."""
    return EXERCISE_DB.get((exercise_name or "").lower(), {}).get("muscle", "other")
