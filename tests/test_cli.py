"""Tests for the command-line interface."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import date

from macro_tracker.cli import main
from macro_tracker.favorites import get_favorites, get_ingredients
from macro_tracker.profile_store import load_profile
from macro_tracker.tracker import get_meal, get_meals

DAY = date(2026, 2, 5)


class TestCli(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        self.run_cli("profile", "set", "--weight", "75", "--height", "180", "--age", "30",
                     "--sex", "male", "--activity", "moderate")

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def run_cli(self, *args) -> str:
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--db", self.db_path, *args])
        return out.getvalue()

    def test_profile_set(self):
        profile = load_profile(db_path=self.db_path)
        self.assertEqual(profile.weight_kg, 75)
        self.assertEqual(profile.tdee, 2682)
        self.assertIsNone(profile.workout_calorie_percentage)

    def test_goal_set_suggests_from_default_deficit(self):
        self.run_cli("goal", "set", "weight_loss")
        profile = load_profile(db_path=self.db_path)
        self.assertEqual(profile.calorie_adjustment, -500)
        self.assertEqual(profile.workout_calorie_percentage, 50)

    def test_goal_set_with_rate_suggests_from_chosen_deficit(self):
        output = self.run_cli("goal", "set", "weight_loss", "--rate", "aggressive")
        profile = load_profile(db_path=self.db_path)
        self.assertEqual(profile.goal, "weight_loss")
        self.assertEqual(profile.calorie_adjustment, -1000)
        self.assertEqual(profile.workout_calorie_percentage, 0)
        self.assertIn("0% of workouts credited", output)

    def test_goal_set_with_rate_keeps_chosen_percentage(self):
        self.run_cli("profile", "set", "--workout-percentage", "80")
        self.run_cli("goal", "set", "weight_loss", "--rate", "fast")
        profile = load_profile(db_path=self.db_path)
        self.assertEqual(profile.calorie_adjustment, -750)
        self.assertEqual(profile.workout_calorie_percentage, 80)

    def test_rate_for_wrong_goal_rejected(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("goal", "set", "weight_loss", "--rate", "lean")
        self.assertEqual(ctx.exception.code, 1)
        self.assertIsNone(load_profile(db_path=self.db_path).goal)

    def test_log_and_edit_meal(self):
        self.run_cli("log", "meal", "--description", "Pasta", "--calories", "600",
                     "--protein", "20", "--type", "dinner", "--date", "2026-02-05T19:00")
        meal = get_meals(1, DAY, DAY, self.db_path)[0]
        self.assertEqual(meal.meal_type, "dinner")

        self.run_cli("meal", "edit", str(meal.id), "--calories", "700", "--type", "lunch")
        edited = get_meal(meal.id, self.db_path)
        self.assertEqual(edited.nutrition.calories, 700)
        self.assertEqual(edited.nutrition.protein_g, 20)
        self.assertEqual(edited.description, "Pasta")
        self.assertEqual(edited.meal_type, "lunch")

    def test_favorite_round_trip(self):
        self.run_cli("favorite", "add", "--name", "Oats", "--calories", "350",
                     "--protein", "12", "--type", "breakfast")
        favorite = get_favorites(1, self.db_path)[0]

        self.run_cli("log", "favorite", str(favorite.id), "--date", "2026-02-05T08:00")
        meals = get_meals(1, DAY, DAY, self.db_path)
        self.assertEqual(len(meals), 1)
        self.assertEqual(meals[0].meal_type, "breakfast")
        self.assertEqual(get_favorites(1, self.db_path)[0].use_count, 1)

        output = self.run_cli("favorite", "list")
        self.assertIn("Oats [breakfast]: 350 kcal", output)
        self.assertIn("used 1x", output)

    def test_log_ingredient_servings(self):
        self.run_cli("ingredient", "add", "--name", "Bread", "--serving-size", "1 slice",
                     "--calories", "80", "--carbs", "15")
        ingredient = get_ingredients(1, self.db_path)[0]

        output = self.run_cli("log", "ingredient", str(ingredient.id), "--servings", "2",
                              "--date", "2026-02-05T12:00")
        self.assertIn("Bread (2 × 1 slice) (160 kcal)", output)
        self.assertEqual(get_meals(1, DAY, DAY, self.db_path)[0].nutrition.carbs_g, 30)

    def test_log_missing_favorite_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("log", "favorite", "99")
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
