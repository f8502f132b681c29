"""Progress-against-target helpers for the dashboard and advice context."""

from macro_tracker.models import DailyTotals, MacroTargets, RemainingMacros


def calculate_percentage(current: float, target: float) -> float:
    """Share of target reached, capped at 100. Zero for a missing target."""
    if target <= 0:
        return 0.0
    return min(100.0, current / target * 100)


def progress_color(percentage: float) -> str:
    """Colour band for a progress bar."""
    if percentage < 50:
        return "red"
    if percentage < 80:
        return "yellow"
    if percentage <= 100:
        return "green"
    return "orange"  # over target


def calculate_remaining(
    targets: MacroTargets,
    totals: DailyTotals,
    workout_offset: int = 0,
) -> RemainingMacros:
    """What is left to eat today. The workout credit only widens calories."""
    return RemainingMacros(
        calories=targets.calories + workout_offset - totals.calories,
        protein_g=targets.protein_g - totals.protein_g,
        carbs_g=targets.carbs_g - totals.carbs_g,
        fat_g=targets.fat_g - totals.fat_g,
        fiber_g=targets.fiber_g - totals.fiber_g,
    )
