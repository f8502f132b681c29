"""Tests for data models."""

import dataclasses
import unittest
from datetime import date, datetime

from macro_tracker.models import DailyTotals, Meal, Nutrition, UserProfile, Workout


class TestNutrition(unittest.TestCase):
    def test_scaled(self):
        n = Nutrition(400, 30, 50, 15, 6)
        s = n.scaled(2.0)
        self.assertEqual(s.calories, 800)
        self.assertEqual(s.protein_g, 60)
        self.assertEqual(s.carbs_g, 100)
        self.assertEqual(s.fat_g, 30)
        self.assertEqual(s.fiber_g, 12)

    def test_add(self):
        a = Nutrition(300, 20, 40, 10, 4)
        b = Nutrition(500, 35, 60, 20, 6)
        result = a + b
        self.assertEqual(result.calories, 800)
        self.assertEqual(result.protein_g, 55)
        self.assertEqual(result.carbs_g, 100)
        self.assertEqual(result.fat_g, 30)
        self.assertEqual(result.fiber_g, 10)

    def test_zero(self):
        z = Nutrition.zero()
        self.assertEqual(z.calories, 0)
        self.assertEqual(z.fiber_g, 0)

    def test_macro_percentages(self):
        # 30g protein * 4 = 120 cal, 50g carbs * 4 = 200 cal, 15g fat * 9 = 135 cal
        n = Nutrition(455, 30, 50, 15)
        pcts = n.macro_percentages()
        self.assertAlmostEqual(pcts["protein"], 120 / 455 * 100, places=1)
        self.assertAlmostEqual(pcts["carbs"], 200 / 455 * 100, places=1)
        self.assertAlmostEqual(pcts["fat"], 135 / 455 * 100, places=1)

    def test_macro_percentages_zero_calories(self):
        pcts = Nutrition(0, 0, 0, 0).macro_percentages()
        self.assertEqual(pcts["protein"], 0)


class TestUserProfile(unittest.TestCase):
    def test_frozen(self):
        profile = UserProfile(weight_kg=70)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            profile.weight_kg = 80

    def test_empty_profile_is_valid(self):
        self.assertEqual(UserProfile().validate(), [])

    def test_validate(self):
        profile = UserProfile(
            sex="x", activity_level="couch", goal="bulk",
            weight_kg=-1, workout_calorie_percentage=120,
        )
        errors = profile.validate()
        self.assertEqual(len(errors), 5)
        self.assertTrue(any("sex" in e for e in errors))
        self.assertTrue(any("activity level" in e for e in errors))
        self.assertTrue(any("goal" in e for e in errors))
        self.assertTrue(any("weight_kg" in e for e in errors))
        self.assertTrue(any("workout_calorie_percentage" in e for e in errors))

    def test_missing_fields(self):
        profile = UserProfile(weight_kg=70, sex="female")
        self.assertEqual(profile.missing_fields(), ["height_cm", "age", "activity_level"])


class TestDailyTotals(unittest.TestCase):
    def test_from_logs(self):
        meals = [
            Meal(1, 1, datetime(2026, 2, 5, 8, 0), "Oats", Nutrition(300, 20, 40, 8, 5)),
            Meal(2, 1, datetime(2026, 2, 5, 12, 0), "Salad", Nutrition(500, 35, 50, 20, 7)),
        ]
        workouts = [
            Workout(1, 1, date(2026, 2, 5), "running", 30, 300),
            Workout(2, 1, date(2026, 2, 5), "yoga", 30, 100),
        ]
        totals = DailyTotals.from_logs(meals, workouts)
        self.assertEqual(totals.calories, 800)
        self.assertEqual(totals.protein_g, 55)
        self.assertEqual(totals.fiber_g, 12)
        self.assertEqual(totals.calories_burned, 400)

    def test_empty(self):
        totals = DailyTotals.from_logs([], [])
        self.assertEqual(totals, DailyTotals())


if __name__ == "__main__":
    unittest.main()
