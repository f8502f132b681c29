"""Tests for profile persistence."""

import dataclasses
import os
import tempfile
import unittest

from macro_tracker.db import get_connection, init_db
from macro_tracker.models import UserProfile
from macro_tracker.profile_store import delete_profile, load_profile, save_profile


class TestProfileStore(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)
        self.profile = UserProfile(
            id=None, name="Test User", age=30, weight_kg=75, height_cm=180,
            sex="male", activity_level="moderate", goal="weight_loss",
            calorie_adjustment=-500, target_weight_kg=70,
        )

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def test_save_and_load(self):
        user_id = save_profile(self.profile, self.db_path)
        self.assertGreater(user_id, 0)

        loaded = load_profile(user_id, self.db_path)
        self.assertEqual(loaded.id, user_id)
        self.assertEqual(loaded.name, "Test User")
        self.assertEqual(loaded.goal, "weight_loss")
        self.assertEqual(loaded.calorie_adjustment, -500)
        self.assertFalse(loaded.use_custom_tdee)
        self.assertIsNone(loaded.workout_calorie_percentage)
        self.assertIsNotNone(loaded.updated_at)

    def test_tdee_snapshot_stored(self):
        user_id = save_profile(self.profile, self.db_path)
        self.assertEqual(load_profile(user_id, self.db_path).tdee, 2682)

    def test_snapshot_stored_alongside_custom_tdee(self):
        profile = dataclasses.replace(self.profile, use_custom_tdee=True, custom_tdee=2200)
        loaded = load_profile(save_profile(profile, self.db_path), self.db_path)
        self.assertTrue(loaded.use_custom_tdee)
        self.assertEqual(loaded.custom_tdee, 2200)
        self.assertEqual(loaded.tdee, 2682)

    def test_incomplete_profile_saved_without_snapshot(self):
        user_id = save_profile(UserProfile(name="New"), self.db_path)
        self.assertIsNone(load_profile(user_id, self.db_path).tdee)

    def test_upsert_updates_in_place(self):
        user_id = save_profile(self.profile, self.db_path)
        updated = dataclasses.replace(self.profile, id=user_id, weight_kg=80)
        self.assertEqual(save_profile(updated, self.db_path), user_id)

        loaded = load_profile(user_id, self.db_path)
        self.assertEqual(loaded.weight_kg, 80)
        # 10*80 + 1125 - 150 + 5 = 1780, * 1.55 = 2759
        self.assertEqual(loaded.tdee, 2759)
        with get_connection(self.db_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM profiles").fetchone()[0]
        self.assertEqual(count, 1)

    def test_insert_with_explicit_id(self):
        profile = dataclasses.replace(self.profile, id=1)
        self.assertEqual(save_profile(profile, self.db_path), 1)
        self.assertIsNotNone(load_profile(1, self.db_path))

    def test_invalid_profile_rejected(self):
        with self.assertRaises(ValueError):
            save_profile(dataclasses.replace(self.profile, workout_calorie_percentage=150), self.db_path)

    def test_load_missing(self):
        self.assertIsNone(load_profile(42, self.db_path))

    def test_delete(self):
        user_id = save_profile(self.profile, self.db_path)
        self.assertTrue(delete_profile(user_id, self.db_path))
        self.assertIsNone(load_profile(user_id, self.db_path))
        self.assertFalse(delete_profile(user_id, self.db_path))


if __name__ == "__main__":
    unittest.main()
