"""Tests for the profile page's goal and workout-credit controls."""

import os
import unittest

from streamlit.testing.v1 import AppTest

from macro_tracker.models import UserProfile

PAGE = os.path.join(os.path.dirname(__file__), "..", "pages", "1_Profile.py")


class TestProfilePage(unittest.TestCase):
    def _run(self, draft: UserProfile) -> AppTest:
        at = AppTest.from_file(PAGE, default_timeout=30)
        at.session_state["profile_draft"] = draft
        at.run()
        self.assertFalse(at.exception)
        return at

    def _draft(self, at: AppTest) -> UserProfile:
        return at.session_state["profile_draft"]

    def test_untouched_percentage_stays_unset(self):
        at = self._run(UserProfile(id=1))
        self.assertIsNone(self._draft(at).workout_calorie_percentage)

    def test_goal_click_applies_suggestion(self):
        at = self._run(UserProfile(id=1))
        at.button(key="goal_weight_loss").click().run()

        draft = self._draft(at)
        self.assertEqual(draft.goal, "weight_loss")
        self.assertEqual(draft.calorie_adjustment, -500)
        self.assertEqual(draft.workout_calorie_percentage, 50)
        self.assertEqual(at.slider[0].value, 50)

    def test_rate_click_resuggests_from_new_deficit(self):
        at = self._run(UserProfile(id=1))
        at.button(key="goal_weight_loss").click().run()
        at.button(key="rate_weight_loss_aggressive").click().run()

        draft = self._draft(at)
        self.assertEqual(draft.calorie_adjustment, -1000)
        self.assertEqual(draft.workout_calorie_percentage, 0)

    def test_moved_slider_is_kept(self):
        at = self._run(UserProfile(id=1))
        at.slider[0].set_value(30).run()
        self.assertEqual(self._draft(at).workout_calorie_percentage, 30)

        at.button(key="goal_weight_loss").click().run()
        self.assertEqual(self._draft(at).goal, "weight_loss")
        self.assertEqual(self._draft(at).workout_calorie_percentage, 30)

    def test_stored_percentage_is_kept(self):
        at = self._run(UserProfile(id=1, workout_calorie_percentage=80))
        at.button(key="goal_weight_loss").click().run()
        self.assertEqual(self._draft(at).workout_calorie_percentage, 80)


if __name__ == "__main__":
    unittest.main()
