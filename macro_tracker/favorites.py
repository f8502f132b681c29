"""Favorite meals and saved ingredients.

Both can be logged as a meal in one step. Every use bumps a counter so
the most used entries are listed first.
"""

from datetime import datetime
from typing import Optional

from macro_tracker.db import get_connection, DB_PATH
from macro_tracker.models import FavoriteMeal, Nutrition, SavedIngredient
from macro_tracker.tracker import get_meal, insert_meal


def _row_to_nutrition(row) -> Nutrition:
    return Nutrition(
        calories=row["calories"],
        protein_g=row["protein_g"],
        carbs_g=row["carbs_g"],
        fat_g=row["fat_g"],
        fiber_g=row["fiber_g"],
    )


def _row_to_favorite(row) -> FavoriteMeal:
    return FavoriteMeal(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        nutrition=_row_to_nutrition(row),
        description=row["description"] or "",
        default_meal_type=row["default_meal_type"],
        use_count=row["use_count"],
    )


def _row_to_ingredient(row) -> SavedIngredient:
    return SavedIngredient(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        nutrition=_row_to_nutrition(row),
        serving_size=row["serving_size"],
        use_count=row["use_count"],
    )


def _require_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError("A name is required")
    return name


# --- Favorite meals ---

def save_favorite(favorite: FavoriteMeal, db_path: str = DB_PATH) -> int:
    """Insert a new favorite, or update one that has an ID. Returns the ID.

    Updating never touches the use count.
    """
    name = _require_name(favorite.name)
    n = favorite.nutrition
    with get_connection(db_path) as conn:
        if favorite.id is None:
            cursor = conn.execute(
                """INSERT INTO favorite_meals (user_id, name, description, default_meal_type,
                   calories, protein_g, carbs_g, fat_g, fiber_g)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (favorite.user_id, name, favorite.description, favorite.default_meal_type,
                 n.calories, n.protein_g, n.carbs_g, n.fat_g, n.fiber_g),
            )
            return cursor.lastrowid

        conn.execute(
            """UPDATE favorite_meals SET name = ?, description = ?, default_meal_type = ?,
               calories = ?, protein_g = ?, carbs_g = ?, fat_g = ?, fiber_g = ?
               WHERE id = ?""",
            (name, favorite.description, favorite.default_meal_type,
             n.calories, n.protein_g, n.carbs_g, n.fat_g, n.fiber_g, favorite.id),
        )
        return favorite.id


def favorite_from_meal(meal_id: int, name: Optional[str] = None, db_path: str = DB_PATH) -> int:
    """Save a logged meal as a favorite. Returns the favorite ID."""
    meal = get_meal(meal_id, db_path)
    if meal is None:
        raise ValueError(f"Meal {meal_id} not found")
    return save_favorite(FavoriteMeal(
        id=None,
        user_id=meal.user_id,
        name=name or meal.description,
        nutrition=meal.nutrition,
        description=meal.description,
        default_meal_type=meal.meal_type,
    ), db_path)


def get_favorite(favorite_id: int, db_path: str = DB_PATH) -> Optional[FavoriteMeal]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM favorite_meals WHERE id = ?", (favorite_id,)
        ).fetchone()
        return _row_to_favorite(row) if row else None


def get_favorites(user_id: int, db_path: str = DB_PATH) -> list:
    """All favorites of a user, most used first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM favorite_meals WHERE user_id = ?
               ORDER BY use_count DESC, name""",
            (user_id,),
        ).fetchall()
        return [_row_to_favorite(row) for row in rows]


def delete_favorite(favorite_id: int, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM favorite_meals WHERE id = ?", (favorite_id,))
        return cursor.rowcount > 0


def log_favorite(
    favorite_id: int,
    eaten_at: Optional[datetime] = None,
    meal_type: Optional[str] = None,
    db_path: str = DB_PATH,
) -> int:
    """Log a favorite as a meal and count the use. Returns the meal ID.

    The favorite's default meal type is used when none is given.
    """
    if eaten_at is None:
        eaten_at = datetime.now()

    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM favorite_meals WHERE id = ?", (favorite_id,)
        ).fetchone()
        if not row:
            raise ValueError(f"Favorite {favorite_id} not found")
        favorite = _row_to_favorite(row)

        meal_id = insert_meal(
            conn, favorite.user_id, favorite.description or favorite.name,
            favorite.nutrition, eaten_at, meal_type or favorite.default_meal_type,
        )
        conn.execute(
            "UPDATE favorite_meals SET use_count = use_count + 1 WHERE id = ?",
            (favorite_id,),
        )
        return meal_id


# --- Saved ingredients ---

def save_ingredient(ingredient: SavedIngredient, db_path: str = DB_PATH) -> int:
    """Insert a new ingredient, or update one that has an ID. Returns the ID."""
    name = _require_name(ingredient.name)
    serving_size = (ingredient.serving_size or "").strip() or None
    n = ingredient.nutrition
    with get_connection(db_path) as conn:
        if ingredient.id is None:
            cursor = conn.execute(
                """INSERT INTO saved_ingredients (user_id, name, serving_size,
                   calories, protein_g, carbs_g, fat_g, fiber_g)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (ingredient.user_id, name, serving_size,
                 n.calories, n.protein_g, n.carbs_g, n.fat_g, n.fiber_g),
            )
            return cursor.lastrowid

        conn.execute(
            """UPDATE saved_ingredients SET name = ?, serving_size = ?,
               calories = ?, protein_g = ?, carbs_g = ?, fat_g = ?, fiber_g = ?
               WHERE id = ?""",
            (name, serving_size, n.calories, n.protein_g, n.carbs_g, n.fat_g,
             n.fiber_g, ingredient.id),
        )
        return ingredient.id


def get_ingredient(ingredient_id: int, db_path: str = DB_PATH) -> Optional[SavedIngredient]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM saved_ingredients WHERE id = ?", (ingredient_id,)
        ).fetchone()
        return _row_to_ingredient(row) if row else None


def get_ingredients(user_id: int, db_path: str = DB_PATH) -> list:
    """All saved ingredients of a user, most used first."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """SELECT * FROM saved_ingredients WHERE user_id = ?
               ORDER BY use_count DESC, name""",
            (user_id,),
        ).fetchall()
        return [_row_to_ingredient(row) for row in rows]


def delete_ingredient(ingredient_id: int, db_path: str = DB_PATH) -> bool:
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM saved_ingredients WHERE id = ?", (ingredient_id,))
        return cursor.rowcount > 0


def log_ingredient(
    ingredient_id: int,
    servings: float = 1.0,
    eaten_at: Optional[datetime] = None,
    meal_type: Optional[str] = None,
    db_path: str = DB_PATH,
) -> int:
    """Log a number of servings of an ingredient as a meal. Returns the meal ID."""
    if servings <= 0:
        raise ValueError("servings must be positive")
    if eaten_at is None:
        eaten_at = datetime.now()

    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM saved_ingredients WHERE id = ?", (ingredient_id,)
        ).fetchone()
        if not row:
            raise ValueError(f"Ingredient {ingredient_id} not found")
        ingredient = _row_to_ingredient(row)

        portion = f"{servings:g} × {ingredient.serving_size}" if ingredient.serving_size else f"{servings:g}×"
        meal_id = insert_meal(
            conn, ingredient.user_id, f"{ingredient.name} ({portion})",
            ingredient.nutrition.scaled(servings), eaten_at, meal_type,
        )
        conn.execute(
            "UPDATE saved_ingredients SET use_count = use_count + 1 WHERE id = ?",
            (ingredient_id,),
        )
        return meal_id
