"""Profile persistence: load and upsert user profiles."""

from typing import Optional

from macro_tracker.db import get_connection, DB_PATH
from macro_tracker.macro_calculator import calculate_tdee
from macro_tracker.models import UserProfile

_PROFILE_COLUMNS = (
    "name", "weight_kg", "height_cm", "age", "sex", "activity_level", "goal",
    "calorie_adjustment", "custom_tdee", "use_custom_tdee", "tdee",
    "target_weight_kg", "workout_calorie_percentage",
)


def _row_to_profile(row) -> UserProfile:
    """Convert a database row to a UserProfile object."""
    return UserProfile(
        id=row["id"],
        name=row["name"],
        weight_kg=row["weight_kg"],
        height_cm=row["height_cm"],
        age=row["age"],
        sex=row["sex"],
        activity_level=row["activity_level"],
        goal=row["goal"],
        calorie_adjustment=row["calorie_adjustment"],
        custom_tdee=row["custom_tdee"],
        use_custom_tdee=bool(row["use_custom_tdee"]),
        tdee=row["tdee"],
        target_weight_kg=row["target_weight_kg"],
        workout_calorie_percentage=row["workout_calorie_percentage"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def save_profile(profile: UserProfile, db_path: str = DB_PATH) -> int:
    """Insert or update a profile in one statement. Returns the profile ID.

    The calculated TDEE is stored alongside, even when a custom TDEE is
    in use, so it is available as a fallback.
    """
    errors = profile.validate()
    if errors:
        raise ValueError("; ".join(errors))

    values = {name: getattr(profile, name) for name in _PROFILE_COLUMNS}
    values["use_custom_tdee"] = int(profile.use_custom_tdee)
    values["tdee"] = calculate_tdee(profile)

    columns = ", ".join(("id",) + _PROFILE_COLUMNS)
    placeholders = ", ".join("?" for _ in range(len(_PROFILE_COLUMNS) + 1))
    updates = ", ".join(f"{name}=excluded.{name}" for name in _PROFILE_COLUMNS)

    with get_connection(db_path) as conn:
        cursor = conn.execute(
            f"""INSERT INTO profiles ({columns}) VALUES ({placeholders})
                ON CONFLICT(id) DO UPDATE SET {updates},
                updated_at=CURRENT_TIMESTAMP""",
            (profile.id,) + tuple(values[name] for name in _PROFILE_COLUMNS),
        )
        return profile.id if profile.id is not None else cursor.lastrowid


def load_profile(user_id: int = 1, db_path: str = DB_PATH) -> Optional[UserProfile]:
    """Load a profile by ID. Returns None if it doesn't exist."""
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE id = ?", (user_id,)).fetchone()
        if not row:
            return None
        return _row_to_profile(row)


def delete_profile(user_id: int, db_path: str = DB_PATH) -> bool:
    """Delete a profile and its logs. Returns True if a row was removed."""
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM profiles WHERE id = ?", (user_id,))
        return cursor.rowcount > 0
