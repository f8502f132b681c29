"""Macro calculation engine using evidence-based formulas.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity multipliers for Total Daily Energy Expenditure (TDEE)
- A fixed deficit/surplus per goal, or the user's own adjustment
- Bodyweight-based protein, a fixed fat share, carbs as the remainder

Every function returns None when the profile lacks the data it needs,
so callers can prompt for a complete profile instead of showing made-up
numbers.

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
- ISSN Position Stand: Protein and Exercise (2017).
"""

import math
from typing import Optional

from macro_tracker.config import (
    ACTIVITY_MULTIPLIERS,
    CALORIES_PER_GRAM,
    DEFAULT_PROTEIN_PER_KG,
    FALLBACK_PROTEIN_FRACTION,
    FAT_CALORIE_FRACTION,
    FIBER_G_PER_1000_KCAL,
    GOAL_CALORIE_ADJUSTMENTS,
    HIGH_PROTEIN_GOALS,
    HIGH_PROTEIN_PER_KG,
    MENSTRUATION_TDEE_MULTIPLIER,
)
from macro_tracker.models import MacroTargets, UserProfile


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2).

    Built-in round() rounds halves to even.
    """
    return math.floor(value + 0.5)


def calculate_bmr(profile: UserProfile) -> Optional[float]:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161

    Returns None if weight, height, age or sex is missing. Not rounded.
    """
    if not (profile.weight_kg and profile.height_cm and profile.age and profile.sex):
        return None

    base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    if profile.sex == "male":
        return base + 5
    if profile.sex == "female":
        return base - 161
    return None


def calculate_tdee(profile: UserProfile) -> Optional[int]:
    """Calculate Total Daily Energy Expenditure.

    TDEE = BMR × activity multiplier, rounded to whole kcal.
    """
    bmr = calculate_bmr(profile)
    multiplier = ACTIVITY_MULTIPLIERS.get(profile.activity_level)
    if bmr is None or multiplier is None:
        return None
    return round_half_up(bmr * multiplier)


def get_effective_tdee(profile: UserProfile) -> Optional[int]:
    """Return the TDEE the targets are based on.

    A manual TDEE wins when it is enabled and set. Otherwise the stored
    snapshot is used, falling back to a fresh calculation.
    """
    if profile.use_custom_tdee and profile.custom_tdee:
        return profile.custom_tdee
    return profile.tdee or calculate_tdee(profile)


def _target_calories(tdee: int, profile: UserProfile) -> int:
    # An explicit adjustment (including 0) always beats the goal default
    if profile.calorie_adjustment is not None:
        return tdee + profile.calorie_adjustment
    return tdee + GOAL_CALORIE_ADJUSTMENTS.get(profile.goal, 0)


def calculate_macro_targets(
    profile: UserProfile,
    is_menstruation: bool = False,
) -> Optional[MacroTargets]:
    """Calculate personalized daily macro targets for a user.

    Steps:
    1. Resolve the effective TDEE (manual, stored or calculated)
    2. Add 7% during menstruation (female profiles only)
    3. Apply the user's calorie adjustment, or the goal default
    4. Protein from bodyweight (2.0 g/kg when cutting or bulking, else 1.6)
    5. Fat at 27.5% of calories, carbs fill the remainder
    6. Fiber at 14 g per 1000 kcal

    Returns None if the TDEE cannot be determined.
    """
    tdee = get_effective_tdee(profile)
    if not tdee:
        return None

    if is_menstruation and profile.sex == "female":
        tdee = round_half_up(tdee * MENSTRUATION_TDEE_MULTIPLIER)

    target_calories = _target_calories(tdee, profile)

    if profile.goal in HIGH_PROTEIN_GOALS:
        protein_per_kg = HIGH_PROTEIN_PER_KG
    else:
        protein_per_kg = DEFAULT_PROTEIN_PER_KG

    if profile.weight_kg:
        protein = round_half_up(profile.weight_kg * protein_per_kg)
    else:
        protein = round_half_up(
            target_calories * FALLBACK_PROTEIN_FRACTION / CALORIES_PER_GRAM["protein"]
        )

    # Fat calories stay unrounded for the carb remainder
    fat_calories = target_calories * FAT_CALORIE_FRACTION
    fat = round_half_up(fat_calories / CALORIES_PER_GRAM["fat"])

    carb_calories = target_calories - protein * CALORIES_PER_GRAM["protein"] - fat_calories
    carbs = max(0, round_half_up(carb_calories / CALORIES_PER_GRAM["carbs"]))

    fiber = round_half_up(target_calories / 1000 * FIBER_G_PER_1000_KCAL)

    return MacroTargets(
        calories=round_half_up(target_calories),
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        fiber_g=fiber,
    )


def format_targets(targets: MacroTargets, tdee: Optional[int] = None) -> str:
    """Format macro targets for display."""
    lines = []
    if tdee is not None:
        lines.append(f"TDEE:     {tdee} kcal")
    lines += [
        f"Target:   {targets.calories} kcal/day",
        f"Protein:  {targets.protein_g}g ({targets.protein_g * 4} kcal)",
        f"Carbs:    {targets.carbs_g}g ({targets.carbs_g * 4} kcal)",
        f"Fat:      {targets.fat_g}g ({targets.fat_g * 9} kcal)",
        f"Fiber:    {targets.fiber_g}g",
    ]
    return "\n".join(lines)
