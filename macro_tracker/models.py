"""Data models for the macro tracking application."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from macro_tracker.config import ACTIVITY_MULTIPLIERS, GOALS, SEXES


@dataclass
class Nutrition:
    """Nutritional information for a logged meal."""
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0

    def scaled(self, factor: float) -> "Nutrition":
        """Return nutrition scaled by a portion factor."""
        return Nutrition(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
            fiber_g=self.fiber_g * factor,
        )

    def __add__(self, other: "Nutrition") -> "Nutrition":
        return Nutrition(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            fiber_g=self.fiber_g + other.fiber_g,
        )

    @staticmethod
    def zero() -> "Nutrition":
        return Nutrition(0, 0, 0, 0, 0)

    def macro_percentages(self) -> dict:
        """Return macro percentages based on caloric contribution."""
        if self.calories == 0:
            return {"protein": 0, "carbs": 0, "fat": 0}
        return {
            "protein": (self.protein_g * 4 / self.calories) * 100,
            "carbs": (self.carbs_g * 4 / self.calories) * 100,
            "fat": (self.fat_g * 9 / self.calories) * 100,
        }


@dataclass(frozen=True)
class UserProfile:
    """User profile with body measurements, goal and energy settings.

    Every measurement is optional. Calculations that need a missing field
    return None instead of guessing.
    """
    id: Optional[int] = None
    name: str = ""
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age: Optional[int] = None
    sex: Optional[str] = None  # "male" or "female"
    activity_level: Optional[str] = None  # sedentary, light, moderate, active, very_active
    goal: Optional[str] = None  # weight_loss, muscle_gain, maintenance
    calorie_adjustment: Optional[int] = None  # kcal/day, negative = deficit
    custom_tdee: Optional[int] = None  # e.g. a wearable's reported average
    use_custom_tdee: bool = False
    tdee: Optional[int] = None  # stored snapshot of the calculated TDEE
    target_weight_kg: Optional[float] = None
    workout_calorie_percentage: Optional[int] = None  # None = not chosen yet
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def missing_fields(self) -> list:
        """Names of the body fields needed for a calculated TDEE that are unset."""
        required = {
            "weight_kg": self.weight_kg,
            "height_cm": self.height_cm,
            "age": self.age,
            "sex": self.sex,
            "activity_level": self.activity_level,
        }
        return [name for name, value in required.items() if not value]

    def validate(self) -> list:
        """Return a list of problems with the profile (empty when valid)."""
        errors = []
        if self.sex is not None and self.sex not in SEXES:
            errors.append(f"Unknown sex '{self.sex}'. Choose from: {', '.join(SEXES)}")
        if self.activity_level is not None and self.activity_level not in ACTIVITY_MULTIPLIERS:
            errors.append(
                f"Unknown activity level '{self.activity_level}'. "
                f"Choose from: {', '.join(ACTIVITY_MULTIPLIERS)}"
            )
        if self.goal is not None and self.goal not in GOALS:
            errors.append(f"Unknown goal '{self.goal}'. Choose from: {', '.join(GOALS)}")
        for name in ("weight_kg", "height_cm", "age", "target_weight_kg", "custom_tdee"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                errors.append(f"{name} must be positive")
        pct = self.workout_calorie_percentage
        if pct is not None and not 0 <= pct <= 100:
            errors.append("workout_calorie_percentage must be between 0 and 100")
        return errors


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets calculated for a user."""
    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int
    fiber_g: int


@dataclass
class Meal:
    """A logged meal."""
    id: Optional[int]
    user_id: int
    eaten_at: datetime
    description: str
    nutrition: Nutrition
    meal_type: Optional[str] = None  # breakfast, lunch, dinner, snack


@dataclass
class FavoriteMeal:
    """A saved meal that can be logged again in one step."""
    id: Optional[int]
    user_id: int
    name: str
    nutrition: Nutrition
    description: str = ""
    default_meal_type: Optional[str] = None
    use_count: int = 0


@dataclass
class SavedIngredient:
    """A single food with the nutrition of one serving."""
    id: Optional[int]
    user_id: int
    name: str
    nutrition: Nutrition
    serving_size: Optional[str] = None  # e.g. "100 g", "1 slice"
    use_count: int = 0


@dataclass
class Workout:
    """A logged workout."""
    id: Optional[int]
    user_id: int
    performed_on: date
    workout_type: str
    duration_minutes: int
    calories_burned: int
    notes: str = ""


@dataclass
class DailyLog:
    """Per-day flags such as menstruation."""
    user_id: int
    day: date
    is_menstruation: bool = False
    notes: str = ""


@dataclass(frozen=True)
class DailyTotals:
    """What was eaten and burned on a single day."""
    calories: float = 0
    protein_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0
    fiber_g: float = 0
    calories_burned: int = 0

    @classmethod
    def from_logs(cls, meals: list, workouts: list) -> "DailyTotals":
        consumed = Nutrition.zero()
        for meal in meals:
            consumed = consumed + meal.nutrition
        return cls(
            calories=consumed.calories,
            protein_g=consumed.protein_g,
            carbs_g=consumed.carbs_g,
            fat_g=consumed.fat_g,
            fiber_g=consumed.fiber_g,
            calories_burned=sum(w.calories_burned for w in workouts),
        )


@dataclass(frozen=True)
class RemainingMacros:
    """Target minus consumed. Negative values mean over target."""
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


@dataclass
class DailySummary:
    """Everything the dashboard shows for one day."""
    day: date
    totals: DailyTotals
    meals: list = field(default_factory=list)  # List[Meal]
    workouts: list = field(default_factory=list)  # List[Workout]
    is_menstruation: bool = False
    targets: Optional[MacroTargets] = None
    workout_offset: int = 0
    calorie_budget: Optional[int] = None  # target calories + workout offset
    remaining: Optional[RemainingMacros] = None
