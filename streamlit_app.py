"""Streamlit frontend for the Macro Tracker.

Main entry point for the multi-page Streamlit application. The home page
is today's dashboard: targets, what was eaten and burned, what is left.
"""

import streamlit as st
from datetime import date

from macro_tracker.config import MEAL_TYPE_LABELS
from macro_tracker.db import init_db
from macro_tracker.profile_store import load_profile
from macro_tracker.tracker import daily_summary
from pages.components.nutrition_display import render_daily_progress, render_remaining

st.set_page_config(
    page_title="Macro Tracker",
    page_icon="🥗",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize DB once per session
if 'db_initialized' not in st.session_state:
    init_db()
    st.session_state.db_initialized = True

# Profile is reloaded on every run so edits on other pages show up
profile = load_profile()
st.session_state.user_profile = profile

# Sidebar: Show current user info
with st.sidebar:
    st.markdown("## 🥗 Macro Tracker")
    st.markdown("---")

    if profile:
        st.success(f"👤 **{profile.name or 'You'}**")
        if profile.goal:
            st.caption(f"Goal: {profile.goal.replace('_', ' ').title()}")
    else:
        st.warning("⚠️ No profile found")
        st.caption("Create one in the Profile page")

    st.markdown("---")
    st.markdown("### Navigation")
    st.markdown("- 📋 **Profile** - Body data, goal, TDEE")
    st.markdown("- 📝 **Log** - Meals, workouts, cycle")
    st.markdown("- 📈 **History** - Past days and trends")

st.title("🥗 Today")

if not profile:
    st.info("No profile found. Go to the Profile page to create one!")
    st.stop()

today = date.today()
summary = daily_summary(profile.id, today, profile)

if summary.targets is None:
    missing = ", ".join(profile.missing_fields())
    st.warning(f"⚠️ Incomplete profile, targets can't be calculated. Missing: {missing}")
    st.stop()

if summary.is_menstruation:
    st.caption("🩸 Menstruation day: TDEE raised by 7%")

render_daily_progress(summary)

st.divider()
render_remaining(summary)

if summary.meals:
    st.markdown("### Meals")
    for meal in summary.meals:
        n = meal.nutrition
        meal_type = f"{MEAL_TYPE_LABELS[meal.meal_type]} " if meal.meal_type else ""
        st.write(
            f"**{meal.eaten_at.strftime('%H:%M')}** {meal_type}{meal.description} - "
            f"{n.calories:.0f} kcal | P {n.protein_g:.0f}g | C {n.carbs_g:.0f}g | "
            f"F {n.fat_g:.0f}g"
        )

if summary.workouts:
    st.markdown("### Workouts")
    for workout in summary.workouts:
        st.write(
            f"**{workout.workout_type.title()}** {workout.duration_minutes} min - "
            f"+{workout.calories_burned} kcal"
        )

st.markdown("---")
st.caption(f"All data is stored locally in a SQLite database. Day: {today.isoformat()}")
