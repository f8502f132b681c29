"""Workout calorie credit.

Burned calories widen the day's calorie budget by a user-chosen share
(the give-back percentage). Macro targets are never changed by workouts.
"""

from typing import Optional

from macro_tracker.config import (
    DEFAULT_WORKOUT_CALORIE_PERCENTAGE,
    UNSET_GOAL_WORKOUT_PERCENTAGE,
    WEIGHT_LOSS_WORKOUT_PERCENTAGES,
    WORKOUT_PRESETS,
)
from macro_tracker.macro_calculator import round_half_up
from macro_tracker.models import MacroTargets, UserProfile


def calculate_workout_offset(calories_burned: float, percentage: Optional[int] = None) -> int:
    """Calories credited back to the eating budget.

    offset = round(calories_burned × percentage / 100), percentage
    defaulting to 100 when not chosen.
    """
    if percentage is None:
        percentage = DEFAULT_WORKOUT_CALORIE_PERCENTAGE
    percentage = min(max(percentage, 0), 100)
    return round_half_up(max(calories_burned, 0) * percentage / 100)


def profile_workout_offset(profile: UserProfile, calories_burned: float) -> int:
    return calculate_workout_offset(calories_burned, profile.workout_calorie_percentage)


def calculate_calorie_budget(
    targets: MacroTargets,
    calories_burned: float,
    percentage: Optional[int] = None,
) -> int:
    """Target calories plus the workout credit."""
    return targets.calories + calculate_workout_offset(calories_burned, percentage)


def suggest_workout_percentage(goal: Optional[str], calorie_adjustment: Optional[int]) -> int:
    """Suggest a give-back percentage for a goal.

    Maintenance and muscle gain get the full burn back. Weight loss gets
    less the steeper the deficit, so workouts don't erase it. Without a
    goal (or a weight-loss goal with no known deficit) suggest 50%.

    Only a default for users who haven't picked a percentage themselves.
    """
    if goal in ("maintenance", "muscle_gain"):
        return 100
    if goal != "weight_loss" or calorie_adjustment is None:
        return UNSET_GOAL_WORKOUT_PERCENTAGE

    deficit = abs(calorie_adjustment)
    return next(
        percentage
        for threshold, percentage in WEIGHT_LOSS_WORKOUT_PERCENTAGES
        if deficit >= threshold
    )


def estimate_calories_burned(workout_type: str, duration_minutes: float) -> int:
    """Estimate burned calories from a workout preset and duration."""
    per_hour = WORKOUT_PRESETS.get(workout_type.lower(), WORKOUT_PRESETS["other"])
    return round_half_up(per_hour * max(duration_minutes, 0) / 60)
