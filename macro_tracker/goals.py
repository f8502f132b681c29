"""Goal selection and time-to-goal estimates."""

import dataclasses
from typing import Optional

from macro_tracker.config import (
    GOAL_CALORIE_ADJUSTMENTS,
    KCAL_PER_KG_FAT,
    MAX_WEEKS_DISPLAY,
    WEEKS_PER_MONTH,
    WEIGHT_GAIN_RATES,
    WEIGHT_LOSS_RATES,
)
from macro_tracker.macro_calculator import round_half_up
from macro_tracker.models import UserProfile
from macro_tracker.workouts import suggest_workout_percentage


def calculate_weeks_to_goal(
    current_weight_kg: Optional[float],
    target_weight_kg: Optional[float],
    calorie_adjustment: Optional[int],
) -> Optional[int]:
    """Weeks until the target weight at the current daily deficit.

    Uses 7700 kcal per kg of body fat:
        days  = (current − target) × 7700 / |adjustment|
        weeks = round(days / 7)

    Only the weight-loss direction is estimated. Returns None when a value
    is missing, the target is already reached, or the adjustment is zero.
    """
    if not (current_weight_kg and target_weight_kg and calorie_adjustment):
        return None

    weight_diff = current_weight_kg - target_weight_kg
    if weight_diff <= 0:
        return None

    days_to_goal = weight_diff * KCAL_PER_KG_FAT / abs(calorie_adjustment)
    return round_half_up(days_to_goal / 7)


def profile_weeks_to_goal(profile: UserProfile) -> Optional[int]:
    return calculate_weeks_to_goal(
        profile.weight_kg, profile.target_weight_kg, profile.calorie_adjustment
    )


def format_time_to_goal(weeks: int) -> str:
    """Weeks below a year, whole months (4 weeks each) beyond that."""
    if weeks < MAX_WEEKS_DISPLAY:
        return f"~{weeks} weeks"
    return f"~{round_half_up(weeks / WEEKS_PER_MONTH)} months"


def default_calorie_adjustment(goal: Optional[str], current: Optional[int]) -> Optional[int]:
    """Adjustment to use after switching to a goal.

    Keeps the current adjustment when it already points the right way.
    """
    if goal == "maintenance":
        return 0
    if goal == "weight_loss" and (not current or current > 0):
        return GOAL_CALORIE_ADJUSTMENTS["weight_loss"]
    if goal == "muscle_gain" and (not current or current < 0):
        return GOAL_CALORIE_ADJUSTMENTS["muscle_gain"]
    return current


def select_goal(
    profile: UserProfile,
    goal: str,
    calorie_adjustment: Optional[int] = None,
) -> UserProfile:
    """Return a copy of the profile with the goal toggled.

    Picking the current goal again clears it. Passing a calorie_adjustment
    (a preset rate) selects the goal with that adjustment instead of
    toggling. A workout give-back percentage is suggested from the final
    adjustment, and only when the user never chose one.
    """
    if calorie_adjustment is None:
        new_goal = None if profile.goal == goal else goal
        adjustment = default_calorie_adjustment(goal, profile.calorie_adjustment)
    else:
        new_goal = goal
        adjustment = calorie_adjustment

    percentage = profile.workout_calorie_percentage
    if percentage is None:
        percentage = suggest_workout_percentage(new_goal, adjustment)

    return dataclasses.replace(
        profile,
        goal=new_goal,
        calorie_adjustment=adjustment,
        workout_calorie_percentage=percentage,
    )


def find_rate(calorie_adjustment: Optional[int]) -> Optional[dict]:
    """Look up the preset rate matching an adjustment, if any."""
    for rate in WEIGHT_LOSS_RATES + WEIGHT_GAIN_RATES:
        if rate["adjustment"] == calorie_adjustment:
            return rate
    return None
