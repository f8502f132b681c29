"""Nutrition display components for Streamlit pages."""

import streamlit as st
from macro_tracker.models import DailySummary, MacroTargets
from macro_tracker.progress import calculate_percentage, progress_color


def render_targets(targets: MacroTargets, tdee: int = None):
    """Render daily targets as a row of metrics."""
    cols = st.columns(6 if tdee is not None else 5)
    if tdee is not None:
        cols[0].metric("TDEE", f"{tdee} kcal")
        cols = cols[1:]
    cols[0].metric("Target", f"{targets.calories} kcal")
    cols[1].metric("Protein", f"{targets.protein_g}g")
    cols[2].metric("Carbs", f"{targets.carbs_g}g")
    cols[3].metric("Fat", f"{targets.fat_g}g")
    cols[4].metric("Fiber", f"{targets.fiber_g}g")


def render_macro_progress(label: str, current: float, target: float, unit: str = "g"):
    """Render one progress bar with current / target.

    Color coding (of the uncapped share):
        - Red: <50%
        - Yellow: 50-80%
        - Green: 80-100%
        - Orange: over target
    """
    pct = calculate_percentage(current, target)
    raw_pct = current / target * 100 if target > 0 else 0
    color = progress_color(raw_pct)

    col1, col2 = st.columns([4, 1])
    with col1:
        st.progress(pct / 100, text=f"{label}: {current:.0f} / {target:.0f}{unit}")
    with col2:
        if color == "green":
            st.success(f"{raw_pct:.0f}%")
        elif color in ("yellow", "orange"):
            st.warning(f"{raw_pct:.0f}%")
        else:
            st.error(f"{raw_pct:.0f}%")


def render_daily_progress(summary: DailySummary):
    """Render calorie and macro progress for a day."""
    totals = summary.totals
    targets = summary.targets

    st.markdown("### Progress")
    render_macro_progress("Calories", totals.calories, summary.calorie_budget, " kcal")
    if totals.calories_burned:
        st.caption(
            f"+{summary.workout_offset} kcal from workouts "
            f"({totals.calories_burned} kcal burned)"
        )
    render_macro_progress("Protein", totals.protein_g, targets.protein_g)
    render_macro_progress("Carbs", totals.carbs_g, targets.carbs_g)
    render_macro_progress("Fat", totals.fat_g, targets.fat_g)
    render_macro_progress("Fiber", totals.fiber_g, targets.fiber_g)


def render_remaining(summary: DailySummary):
    """Render what is left to eat today."""
    remaining = summary.remaining
    st.markdown("### Remaining Today")
    cols = st.columns(5)
    cols[0].metric("Calories", f"{remaining.calories:.0f} kcal")
    cols[1].metric("Protein", f"{remaining.protein_g:.0f}g")
    cols[2].metric("Carbs", f"{remaining.carbs_g:.0f}g")
    cols[3].metric("Fat", f"{remaining.fat_g:.0f}g")
    cols[4].metric("Fiber", f"{remaining.fiber_g:.0f}g")
