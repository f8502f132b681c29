"""Profile Management Page.

Body data, goal and energy settings, with a live preview of the targets.
"""

import dataclasses

import streamlit as st
from macro_tracker.config import (
    ACTIVITY_DESCRIPTIONS,
    ACTIVITY_MULTIPLIERS,
    DEFAULT_WORKOUT_CALORIE_PERCENTAGE,
    GOALS,
    WEIGHT_GAIN_RATES,
    WEIGHT_LOSS_RATES,
)
from macro_tracker.goals import format_time_to_goal, profile_weeks_to_goal, select_goal
from macro_tracker.macro_calculator import (
    calculate_macro_targets,
    calculate_tdee,
    get_effective_tdee,
)
from macro_tracker.models import UserProfile
from macro_tracker.profile_store import load_profile, save_profile
from pages.components.charts import create_macro_pie_chart
from pages.components.nutrition_display import render_targets

st.set_page_config(page_title="Profile | Macro Tracker", page_icon="📋", layout="wide")
st.title("📋 Profile")

GOAL_LABELS = {
    "weight_loss": "Lose weight",
    "muscle_gain": "Build muscle",
    "maintenance": "Maintain weight",
}

# Edits live in session state until saved
if 'profile_draft' not in st.session_state:
    st.session_state.profile_draft = load_profile() or UserProfile(id=1)
# A stored percentage counts as chosen; until then goal and rate clicks suggest one
if 'workout_pct_chosen' not in st.session_state:
    st.session_state.workout_pct_chosen = (
        st.session_state.profile_draft.workout_calorie_percentage is not None
    )
draft = st.session_state.profile_draft


def _update_draft(**changes):
    # Body changes make the stored TDEE snapshot stale
    st.session_state.profile_draft = dataclasses.replace(
        st.session_state.profile_draft, tdee=None, **changes
    )


def _apply_goal(goal, calorie_adjustment=None):
    base = st.session_state.profile_draft
    if not st.session_state.workout_pct_chosen:
        base = dataclasses.replace(base, workout_calorie_percentage=None)
    st.session_state.profile_draft = select_goal(base, goal, calorie_adjustment)


# --- Personal info ---
st.markdown("### Personal Info")
col1, col2, col3 = st.columns(3)
with col1:
    name = st.text_input("Name", value=draft.name)
    age = st.number_input("Age", min_value=0, max_value=120, value=draft.age or 0,
                          help="0 = not set")
with col2:
    weight = st.number_input("Weight (kg)", min_value=0.0, max_value=400.0,
                             value=float(draft.weight_kg or 0.0), step=0.1)
    height = st.number_input("Height (cm)", min_value=0.0, max_value=250.0,
                             value=float(draft.height_cm or 0.0), step=0.5)
with col3:
    sex_options = ["", "male", "female"]
    sex = st.selectbox("Sex", sex_options, index=sex_options.index(draft.sex or ""))
    target_weight = st.number_input("Target weight (kg)", min_value=0.0, max_value=400.0,
                                    value=float(draft.target_weight_kg or 0.0), step=0.1)

activity_options = [""] + list(ACTIVITY_MULTIPLIERS.keys())
activity = st.selectbox(
    "Activity level",
    activity_options,
    index=activity_options.index(draft.activity_level or ""),
    format_func=lambda a: ACTIVITY_DESCRIPTIONS.get(a, "Not set"),
)

_update_draft(
    name=name.strip(),
    age=age or None,
    weight_kg=weight or None,
    height_cm=height or None,
    sex=sex or None,
    target_weight_kg=target_weight or None,
    activity_level=activity or None,
)
draft = st.session_state.profile_draft

# --- Goal ---
st.markdown("### Goal")
goal_cols = st.columns(len(GOALS))
for col, goal in zip(goal_cols, GOALS):
    selected = draft.goal == goal
    if col.button(("✅ " if selected else "") + GOAL_LABELS[goal], key=f"goal_{goal}",
                  use_container_width=True):
        _apply_goal(goal)
        st.rerun()

if draft.goal in ("weight_loss", "muscle_gain"):
    rates = WEIGHT_LOSS_RATES if draft.goal == "weight_loss" else WEIGHT_GAIN_RATES
    rate_cols = st.columns(len(rates))
    for col, rate in zip(rate_cols, rates):
        selected = draft.calorie_adjustment == rate["adjustment"]
        label = f"{'✅ ' if selected else ''}{rate['label']} ({rate['adjustment']:+d} kcal)"
        if col.button(label, key=f"rate_{draft.goal}_{rate['id']}", use_container_width=True):
            _apply_goal(draft.goal, rate["adjustment"])
            st.rerun()
        col.caption(rate["weekly_change"])

weeks = profile_weeks_to_goal(draft)
if draft.goal == "weight_loss" and weeks is not None:
    st.info(f"🎯 Estimated time to {draft.target_weight_kg} kg: **{format_time_to_goal(weeks)}**")

# --- Energy settings ---
st.markdown("### Energy")
col1, col2 = st.columns(2)
with col1:
    use_custom = st.toggle("Use manual TDEE (e.g. from a watch)", value=draft.use_custom_tdee)
    custom_tdee = st.number_input("Manual TDEE (kcal)", min_value=0, max_value=10000,
                                  value=draft.custom_tdee or 0, step=10,
                                  disabled=not use_custom)
with col2:
    shown_pct = draft.workout_calorie_percentage
    if shown_pct is None:
        shown_pct = DEFAULT_WORKOUT_CALORIE_PERCENTAGE
    workout_pct = st.slider(
        "Workout calories credited (%)",
        min_value=0, max_value=100,
        value=shown_pct,
        step=5,
        help="Share of burned calories added to your daily budget",
    )
    if not st.session_state.workout_pct_chosen:
        st.caption("Suggested for your goal. Move the slider to choose your own.")

_update_draft(use_custom_tdee=use_custom, custom_tdee=custom_tdee or None)
if workout_pct != shown_pct:
    st.session_state.workout_pct_chosen = True
    _update_draft(workout_calorie_percentage=workout_pct)
draft = st.session_state.profile_draft

# --- Preview ---
st.divider()
st.markdown("### Daily Targets")
targets = calculate_macro_targets(draft)
if targets is None:
    st.warning(f"⚠️ Fill in: {', '.join(draft.missing_fields())} (or set a manual TDEE)")
else:
    calculated = calculate_tdee(draft)
    if draft.use_custom_tdee and calculated is not None:
        st.caption(f"Calculated TDEE: {calculated} kcal (manual value in use)")
    render_targets(targets, get_effective_tdee(draft))
    fig = create_macro_pie_chart(targets)
    st.plotly_chart(fig, use_container_width=True)

errors = draft.validate()
for error in errors:
    st.error(f"⚠️ {error}")

if st.button("💾 Save Profile", use_container_width=True, disabled=bool(errors)):
    try:
        user_id = save_profile(draft)
        st.session_state.profile_draft = load_profile(user_id)
        st.session_state.user_profile = st.session_state.profile_draft
        st.success("✅ Profile saved!")
    except Exception as e:
        st.error(f"❌ Error saving profile: {e}")

st.markdown("---")
st.caption("💡 **Tip:** Targets use the Mifflin-St Jeor equation. A manual TDEE always wins when enabled.")
