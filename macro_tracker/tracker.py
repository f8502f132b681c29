"""Meal, workout and cycle tracking with daily summaries.

Logs are stored per user. Summaries combine a day's logs with the
profile's targets: what was eaten, what was burned, how much of the
burn is credited back, and what is left.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from macro_tracker.config import MEAL_TYPES
from macro_tracker.db import get_connection, DB_PATH
from macro_tracker.macro_calculator import calculate_macro_targets
from macro_tracker.models import (
    DailyLog,
    DailySummary,
    DailyTotals,
    Meal,
    Nutrition,
    UserProfile,
    Workout,
)
from macro_tracker.progress import calculate_remaining
from macro_tracker.workouts import estimate_calories_burned, profile_workout_offset


# --- Meals ---

def _check_meal_type(meal_type: Optional[str]) -> None:
    if meal_type is not None and meal_type not in MEAL_TYPES:
        raise ValueError(f"Unknown meal type '{meal_type}'. Choose from: {', '.join(MEAL_TYPES)}")


def _row_to_meal(row) -> Meal:
    return Meal(
        id=row["id"],
        user_id=row["user_id"],
        eaten_at=datetime.fromisoformat(row["eaten_at"]),
        description=row["description"],
        nutrition=Nutrition(
            calories=row["calories"],
            protein_g=row["protein_g"],
            carbs_g=row["carbs_g"],
            fat_g=row["fat_g"],
            fiber_g=row["fiber_g"],
        ),
        meal_type=row["meal_type"],
    )


def insert_meal(conn, user_id: int, description: str, nutrition: Nutrition,
                eaten_at: datetime, meal_type: Optional[str]) -> int:
    """Insert a meal row on an open connection. Returns the meal ID."""
    _check_meal_type(meal_type)
    cursor = conn.execute(
        """INSERT INTO meals (user_id, eaten_at, meal_type, description, calories,
           protein_g, carbs_g, fat_g, fiber_g)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (user_id, eaten_at.isoformat(), meal_type, description, nutrition.calories,
         nutrition.protein_g, nutrition.carbs_g, nutrition.fat_g, nutrition.fiber_g),
    )
    return cursor.lastrowid


def log_meal(
    user_id: int,
    description: str,
    nutrition: Nutrition,
    eaten_at: Optional[datetime] = None,
    meal_type: Optional[str] = None,
    db_path: str = DB_PATH,
) -> int:
    """Log an eaten meal. Returns the meal ID."""
    if eaten_at is None:
        eaten_at = datetime.now()

    with get_connection(db_path) as conn:
        return insert_meal(conn, user_id, description, nutrition, eaten_at, meal_type)


def get_meal(meal_id: int, db_path: str = DB_PATH) -> Optional[Meal]:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM meals WHERE id = ?", (meal_id,)).fetchone()
        return _row_to_meal(row) if row else None


def update_meal(
    meal_id: int,
    description: str,
    nutrition: Nutrition,
    meal_type: Optional[str] = None,
    eaten_at: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> bool:
    """Correct a logged meal. The time is kept unless a new one is given."""
    _check_meal_type(meal_type)
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """UPDATE meals SET description = ?, meal_type = ?, calories = ?,
               protein_g = ?, carbs_g = ?, fat_g = ?, fiber_g = ?,
               eaten_at = COALESCE(?, eaten_at)
               WHERE id = ?""",
            (description, meal_type, nutrition.calories, nutrition.protein_g,
             nutrition.carbs_g, nutrition.fat_g, nutrition.fiber_g,
             eaten_at.isoformat() if eaten_at else None, meal_id),
        )
        return cursor.rowcount > 0


def delete_meal(meal_id: int, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM meals WHERE id = ?", (meal_id,))
        return cursor.rowcount > 0


def get_meals(
    user_id: int,
    start_date: date,
    end_date: date,
    db_path: str = DB_PATH,
) -> list:
    """Get all meals within a date range (inclusive)."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM meals
               WHERE user_id = ? AND date(eaten_at) >= ? AND date(eaten_at) <= ?
               ORDER BY eaten_at""",
            (user_id, start_date.isoformat(), end_date.isoformat()),
        ).fetchall()
        return [_row_to_meal(row) for row in rows]


# --- Workouts ---

def log_workout(
    user_id: int,
    workout_type: str,
    duration_minutes: int,
    calories_burned: Optional[int] = None,
    performed_on: Optional[date] = None,
    notes: str = "",
    db_path: str = DB_PATH,
) -> int:
    """Log a workout. Burned calories are estimated from the type if not given."""
    if performed_on is None:
        performed_on = date.today()
    if calories_burned is None:
        calories_burned = estimate_calories_burned(workout_type, duration_minutes)
    if calories_burned < 0:
        raise ValueError("calories_burned cannot be negative")

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO workouts (user_id, performed_on, workout_type,
               duration_minutes, calories_burned, notes)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (user_id, performed_on.isoformat(), workout_type, duration_minutes,
             calories_burned, notes),
        )
        return cursor.lastrowid


def delete_workout(workout_id: int, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM workouts WHERE id = ?", (workout_id,))
        return cursor.rowcount > 0


def get_workouts(
    user_id: int,
    start_date: date,
    end_date: date,
    db_path: str = DB_PATH,
) -> list:
    """Get all workouts within a date range (inclusive)."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM workouts
               WHERE user_id = ? AND performed_on >= ? AND performed_on <= ?
               ORDER BY performed_on, id""",
            (user_id, start_date.isoformat(), end_date.isoformat()),
        ).fetchall()

        return [
            Workout(
                id=row["id"],
                user_id=row["user_id"],
                performed_on=date.fromisoformat(row["performed_on"]),
                workout_type=row["workout_type"],
                duration_minutes=row["duration_minutes"],
                calories_burned=row["calories_burned"],
                notes=row["notes"] or "",
            )
            for row in rows
        ]


# --- Cycle ---

def set_menstruation(
    user_id: int,
    day: date,
    is_menstruation: bool,
    notes: str = "",
    db_path: str = DB_PATH,
) -> None:
    """Record whether the user is menstruating on a given day."""
    with get_connection(db_path) as conn:
        conn.execute(
            """INSERT INTO daily_logs (user_id, day, is_menstruation, notes)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(user_id, day) DO UPDATE SET
               is_menstruation=excluded.is_menstruation,
               notes=excluded.notes,
               updated_at=CURRENT_TIMESTAMP""",
            (user_id, day.isoformat(), int(is_menstruation), notes),
        )


def get_daily_log(user_id: int, day: date, db_path: str = DB_PATH) -> Optional[DailyLog]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM daily_logs WHERE user_id = ? AND day = ?",
            (user_id, day.isoformat()),
        ).fetchone()
        if not row:
            return None
        return DailyLog(
            user_id=row["user_id"],
            day=date.fromisoformat(row["day"]),
            is_menstruation=bool(row["is_menstruation"]),
            notes=row["notes"] or "",
        )


def is_menstruation_day(user_id: int, day: date, db_path: str = DB_PATH) -> bool:
    log = get_daily_log(user_id, day, db_path)
    return bool(log and log.is_menstruation)


def _menstruation_days(user_id: int, start_date: date, end_date: date, db_path: str) -> set:
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT day FROM daily_logs
               WHERE user_id = ? AND day >= ? AND day <= ? AND is_menstruation = 1""",
            (user_id, start_date.isoformat(), end_date.isoformat()),
        ).fetchall()
        return {date.fromisoformat(row["day"]) for row in rows}


# --- Summaries ---

def daily_totals(user_id: int, day: date, db_path: str = DB_PATH) -> DailyTotals:
    """Sum of everything eaten and burned on a day."""
    return DailyTotals.from_logs(
        get_meals(user_id, day, day, db_path),
        get_workouts(user_id, day, day, db_path),
    )


def build_daily_summary(
    day: date,
    meals: list,
    workouts: list,
    profile: Optional[UserProfile] = None,
    is_menstruation: bool = False,
) -> DailySummary:
    """Combine a day's logs with the profile's targets.

    Targets, budget and remaining stay None when the profile is missing
    or incomplete.
    """
    totals = DailyTotals.from_logs(meals, workouts)
    summary = DailySummary(
        day=day,
        totals=totals,
        meals=meals,
        workouts=workouts,
        is_menstruation=is_menstruation,
    )
    if profile is None:
        return summary

    targets = calculate_macro_targets(profile, is_menstruation)
    summary.workout_offset = profile_workout_offset(profile, totals.calories_burned)
    if targets is not None:
        summary.targets = targets
        summary.calorie_budget = targets.calories + summary.workout_offset
        summary.remaining = calculate_remaining(targets, totals, summary.workout_offset)
    return summary


def daily_summary(
    user_id: int,
    day: date,
    profile: Optional[UserProfile] = None,
    db_path: str = DB_PATH,
) -> DailySummary:
    """Get the summary for a single day."""
    return build_daily_summary(
        day,
        get_meals(user_id, day, day, db_path),
        get_workouts(user_id, day, day, db_path),
        profile,
        is_menstruation_day(user_id, day, db_path),
    )


def history(
    user_id: int,
    start_date: date,
    end_date: date,
    profile: Optional[UserProfile] = None,
    db_path: str = DB_PATH,
) -> list:
    """One summary per day in the range, oldest first, including empty days."""
    meals = get_meals(user_id, start_date, end_date, db_path)
    workouts = get_workouts(user_id, start_date, end_date, db_path)
    cycle_days = _menstruation_days(user_id, start_date, end_date, db_path)

    summaries = []
    day = start_date
    while day <= end_date:
        summaries.append(build_daily_summary(
            day,
            [m for m in meals if m.eaten_at.date() == day],
            [w for w in workouts if w.performed_on == day],
            profile,
            day in cycle_days,
        ))
        day += timedelta(days=1)
    return summaries


def meal_types_logged(meals: list) -> list:
    """Distinct meal types among the meals, in breakfast-to-snack order."""
    logged = {meal.meal_type for meal in meals}
    return [meal_type for meal_type in MEAL_TYPES if meal_type in logged]


def format_summary(summary: DailySummary) -> str:
    """Format a daily summary for display."""
    totals = summary.totals
    lines = [
        f"Daily Summary: {summary.day.isoformat()}",
        "=" * 45,
        f"Meals logged: {len(summary.meals)} | Workouts: {len(summary.workouts)}",
    ]
    covered = meal_types_logged(summary.meals)
    if covered:
        lines.append(f"Covered: {', '.join(covered)}")
    if summary.is_menstruation:
        lines.append("Menstruation: yes (TDEE +7%)")

    lines.append("\nEaten:")
    lines.append(f"  Calories: {totals.calories:.0f} kcal")
    lines.append(f"  Protein:  {totals.protein_g:.0f}g")
    lines.append(f"  Carbs:    {totals.carbs_g:.0f}g")
    lines.append(f"  Fat:      {totals.fat_g:.0f}g")
    lines.append(f"  Fiber:    {totals.fiber_g:.0f}g")

    if totals.calories_burned:
        lines.append(
            f"\nBurned: {totals.calories_burned} kcal "
            f"(+{summary.workout_offset} kcal credited)"
        )

    if summary.targets is None:
        lines.append("\nNo targets: complete your profile to see progress.")
        return "\n".join(lines)

    targets = summary.targets
    remaining = summary.remaining
    lines.append("\nTarget / Remaining:")
    lines.append(f"  Calories: {summary.calorie_budget} kcal / {remaining.calories:.0f} kcal")
    lines.append(f"  Protein:  {targets.protein_g}g / {remaining.protein_g:.0f}g")
    lines.append(f"  Carbs:    {targets.carbs_g}g / {remaining.carbs_g:.0f}g")
    lines.append(f"  Fat:      {targets.fat_g}g / {remaining.fat_g:.0f}g")
    lines.append(f"  Fiber:    {targets.fiber_g}g / {remaining.fiber_g:.0f}g")
    return "\n".join(lines)
