"""
Lift Coach — Progress report
Run manually: python -m src.coach [workouts.json] [--kg] [--exercise NAME] [--apply templates.json]
"""
import argparse
import sys

from src.config import USE_KG, WORKOUT_LOG_PATH, TEMPLATES_PATH
from src.models import Severity
from src.progression import analyze_all_exercises, analyze_exercise
from src.templates import accept_suggestion, load_templates, save_templates
from src.units import make_converter
from src.workout_log import load_workouts

SEVERITY_ICONS = {Severity.HIGH: "🔴", Severity.MEDIUM: "🟡", Severity.LOW: "🟢"}


def _print_insight(insight, rank: int = None) -> None:
    icon = SEVERITY_ICONS.get(insight.severity, "⚪")
    prefix = f"{rank}. " if rank is not None else ""
    print(f"   {icon} {prefix}{insight.exercise_name} — {insight.pattern}")
    print(f"      {insight.message}")
    print(f"      👉 {insight.suggestion}")
    print(f"      💡 {insight.reasoning}")


def run_report(log_path: str, use_kg: bool = False, exercise: str = None,
               templates_path: str = None, normalize_names: bool = False) -> dict:
    """
    Analysis pipeline:
    1. Load the workout log
    2. Analyze one exercise or all recent ones
    3. Print the ranked insights
    4. Optionally write the top suggestion into the templates file
    """
    print("🔍 Lift Coach — Analyzing progression...")

    workouts = load_workouts(log_path)
    print(f"   {len(workouts)} workouts in {log_path}")
    convert = make_converter(use_kg)

    if exercise:
        insight = analyze_exercise(exercise, workouts, use_kg, convert)
        if insight is None:
            print(f"\n✅ {exercise}: no stagnation detected (or fewer than 3 sessions logged).")
            issues = []
        else:
            print(f"\n📊 {exercise}:")
            _print_insight(insight)
            issues = [insight]
        analyzed = 1
    else:
        report = analyze_all_exercises(workouts, use_kg, convert, normalize_names=normalize_names)
        analyzed = report.total_exercises_analyzed
        print(f"   {analyzed} exercises in the last sessions")
        if not report.has_issues:
            print(f"\n✅ {report.message}")
            print(f"   {report.suggestion}")
            issues = []
        else:
            print(f"\n📊 {report.summary}:")
            for i, insight in enumerate(report.all_issues, 1):
                _print_insight(insight, rank=i)
            issues = list(report.all_issues)

    applied = False
    if templates_path and issues:
        primary = issues[0]
        templates = load_templates(templates_path)
        updated = accept_suggestion(templates, workouts, primary)
        if updated is templates:
            print(f"\n⏭️  No template exercise matches {primary.exercise_name}, nothing applied")
        else:
            save_templates(templates_path, updated)
            applied = True
            print(f"\n📤 Applied to {templates_path}: {primary.exercise_name} → "
                  f"{primary.suggested_weight:g} lbs × {primary.suggested_reps}")

    return {"analyzed": analyzed, "issues": len(issues), "applied": applied}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Progression coaching report for a workout log")
    parser.add_argument("log_path", nargs="?", default=WORKOUT_LOG_PATH)
    parser.add_argument("--kg", action="store_true", default=USE_KG, help="display weights in kg")
    parser.add_argument("--exercise", help="analyze a single exercise")
    parser.add_argument("--apply", nargs="?", const=TEMPLATES_PATH, default=None,
                        metavar="TEMPLATES_PATH", help="write the top suggestion into the templates file")
    parser.add_argument("--normalize-names", action="store_true",
                        help="treat exercise names that differ only in case as one exercise")
    args = parser.parse_args(argv)

    try:
        run_report(args.log_path, use_kg=args.kg, exercise=args.exercise,
                   templates_path=args.apply, normalize_names=args.normalize_names)
    except Exception as e:
        print(f"\n❌ Report FAILED: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
