"""Tests for favorite meals and saved ingredients."""

import os
import tempfile
import unittest
from datetime import date, datetime

from macro_tracker.db import init_db
from macro_tracker.favorites import (
    delete_favorite,
    delete_ingredient,
    favorite_from_meal,
    get_favorite,
    get_favorites,
    get_ingredient,
    get_ingredients,
    log_favorite,
    log_ingredient,
    save_favorite,
    save_ingredient,
)
from macro_tracker.models import FavoriteMeal, Nutrition, SavedIngredient, UserProfile
from macro_tracker.profile_store import save_profile
from macro_tracker.tracker import get_meals, log_meal

DAY = date(2026, 2, 5)


class TestFavorites(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)
        self.user_id = save_profile(UserProfile(name="Test User"), self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def _favorite(self, name="Oats", **kwargs) -> int:
        return save_favorite(FavoriteMeal(
            id=None, user_id=self.user_id, name=name,
            nutrition=Nutrition(350, 12, 60, 6, 8), **kwargs,
        ), self.db_path)

    def test_save_and_get(self):
        favorite_id = self._favorite(description="Oats with milk", default_meal_type="breakfast")
        favorite = get_favorite(favorite_id, self.db_path)
        self.assertEqual(favorite.name, "Oats")
        self.assertEqual(favorite.description, "Oats with milk")
        self.assertEqual(favorite.default_meal_type, "breakfast")
        self.assertEqual(favorite.nutrition.fiber_g, 8)
        self.assertEqual(favorite.use_count, 0)

    def test_name_required(self):
        with self.assertRaises(ValueError):
            self._favorite(name="  ")

    def test_update_keeps_use_count(self):
        favorite_id = self._favorite()
        log_favorite(favorite_id, datetime(2026, 2, 5, 8, 0), db_path=self.db_path)

        favorite = get_favorite(favorite_id, self.db_path)
        favorite.name = "Overnight oats"
        favorite.nutrition = Nutrition(400, 15, 65, 8, 8)
        self.assertEqual(save_favorite(favorite, self.db_path), favorite_id)

        updated = get_favorite(favorite_id, self.db_path)
        self.assertEqual(updated.name, "Overnight oats")
        self.assertEqual(updated.nutrition.calories, 400)
        self.assertEqual(updated.use_count, 1)

    def test_log_favorite(self):
        favorite_id = self._favorite(default_meal_type="breakfast")
        log_favorite(favorite_id, datetime(2026, 2, 5, 8, 0), db_path=self.db_path)
        log_favorite(favorite_id, datetime(2026, 2, 5, 21, 0), "snack", self.db_path)

        meals = get_meals(self.user_id, DAY, DAY, self.db_path)
        self.assertEqual([m.meal_type for m in meals], ["breakfast", "snack"])
        self.assertEqual(meals[0].description, "Oats")
        self.assertEqual(meals[0].nutrition.calories, 350)
        self.assertEqual(get_favorite(favorite_id, self.db_path).use_count, 2)

    def test_log_missing_favorite(self):
        with self.assertRaises(ValueError):
            log_favorite(42, db_path=self.db_path)

    def test_ordered_by_use(self):
        oats = self._favorite("Oats")
        salad = self._favorite("Salad")
        self._favorite("Bagel")
        log_favorite(salad, datetime(2026, 2, 5, 12, 0), db_path=self.db_path)
        log_favorite(salad, datetime(2026, 2, 6, 12, 0), db_path=self.db_path)
        log_favorite(oats, datetime(2026, 2, 5, 8, 0), db_path=self.db_path)

        names = [f.name for f in get_favorites(self.user_id, self.db_path)]
        self.assertEqual(names, ["Salad", "Oats", "Bagel"])

    def test_favorite_from_meal(self):
        meal_id = log_meal(self.user_id, "Chicken salad", Nutrition(500, 35, 50, 20, 7),
                           datetime(2026, 2, 5, 12, 30), "lunch", self.db_path)
        favorite = get_favorite(favorite_from_meal(meal_id, db_path=self.db_path), self.db_path)
        self.assertEqual(favorite.name, "Chicken salad")
        self.assertEqual(favorite.default_meal_type, "lunch")
        self.assertEqual(favorite.nutrition.protein_g, 35)

        with self.assertRaises(ValueError):
            favorite_from_meal(999, db_path=self.db_path)

    def test_delete_favorite(self):
        favorite_id = self._favorite()
        self.assertTrue(delete_favorite(favorite_id, self.db_path))
        self.assertIsNone(get_favorite(favorite_id, self.db_path))
        self.assertFalse(delete_favorite(favorite_id, self.db_path))


class TestIngredients(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)
        self.user_id = save_profile(UserProfile(name="Test User"), self.db_path)
        self.bread = save_ingredient(SavedIngredient(
            id=None, user_id=self.user_id, name="Bread",
            nutrition=Nutrition(80, 3, 15, 1, 2), serving_size="1 slice",
        ), self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def test_save_and_get(self):
        ingredient = get_ingredient(self.bread, self.db_path)
        self.assertEqual(ingredient.name, "Bread")
        self.assertEqual(ingredient.serving_size, "1 slice")
        self.assertEqual(ingredient.nutrition.calories, 80)

    def test_blank_serving_size_stored_as_none(self):
        ingredient_id = save_ingredient(SavedIngredient(
            id=None, user_id=self.user_id, name="Egg",
            nutrition=Nutrition(70, 6, 0, 5), serving_size=" ",
        ), self.db_path)
        self.assertIsNone(get_ingredient(ingredient_id, self.db_path).serving_size)

    def test_log_servings_scales_nutrition(self):
        log_ingredient(self.bread, 2.5, datetime(2026, 2, 5, 12, 0), "lunch", self.db_path)

        meal = get_meals(self.user_id, DAY, DAY, self.db_path)[0]
        self.assertEqual(meal.description, "Bread (2.5 × 1 slice)")
        self.assertEqual(meal.meal_type, "lunch")
        self.assertAlmostEqual(meal.nutrition.calories, 200)
        self.assertAlmostEqual(meal.nutrition.carbs_g, 37.5)
        self.assertAlmostEqual(meal.nutrition.fiber_g, 5)
        self.assertEqual(get_ingredient(self.bread, self.db_path).use_count, 1)

    def test_non_positive_servings_rejected(self):
        with self.assertRaises(ValueError):
            log_ingredient(self.bread, 0, db_path=self.db_path)
        self.assertEqual(get_ingredient(self.bread, self.db_path).use_count, 0)

    def test_ordered_by_use(self):
        egg = save_ingredient(SavedIngredient(
            id=None, user_id=self.user_id, name="Egg", nutrition=Nutrition(70, 6, 0, 5),
        ), self.db_path)
        log_ingredient(egg, db_path=self.db_path)
        names = [i.name for i in get_ingredients(self.user_id, self.db_path)]
        self.assertEqual(names, ["Egg", "Bread"])

    def test_delete_ingredient(self):
        self.assertTrue(delete_ingredient(self.bread, self.db_path))
        self.assertEqual(get_ingredients(self.user_id, self.db_path), [])


if __name__ == "__main__":
    unittest.main()
