"""History Page.

Past days against their targets, with trend charts.
"""

import streamlit as st
from datetime import date, timedelta
from macro_tracker.macro_calculator import calculate_macro_targets
from macro_tracker.profile_store import load_profile
from macro_tracker.tracker import history
from pages.components.charts import (
    create_calorie_trend, create_macro_stacked_bar, summaries_to_frame
)

st.set_page_config(page_title="History | Macro Tracker", page_icon="📈", layout="wide")
st.title("📈 History")

profile = load_profile()
if not profile:
    st.warning("⚠️ No profile found. Please create a profile first in the Profile page.")
    st.stop()

col1, col2 = st.columns(2)
with col1:
    end_day = st.date_input("Up to", value=date.today())
with col2:
    num_days = st.selectbox("Period", [7, 14, 30, 90], format_func=lambda d: f"{d} days")

start_day = end_day - timedelta(days=num_days - 1)
summaries = history(profile.id, start_day, end_day, profile)
logged = [s for s in summaries if s.meals or s.workouts]

if not logged:
    st.info(f"No logs between {start_day.isoformat()} and {end_day.isoformat()}")
    st.stop()

col1, col2, col3 = st.columns(3)
col1.metric("Days logged", len(logged))
col2.metric("Avg eaten", f"{sum(s.totals.calories for s in logged) / len(logged):.0f} kcal")
col3.metric("Total burned", f"{sum(s.totals.calories_burned for s in logged)} kcal")

col_a, col_b = st.columns(2)
with col_a:
    st.plotly_chart(create_calorie_trend(summaries), use_container_width=True)
with col_b:
    targets = calculate_macro_targets(profile)
    st.plotly_chart(create_macro_stacked_bar(summaries, targets), use_container_width=True)

st.markdown("### Days")
df = summaries_to_frame(logged)
st.dataframe(df.sort_values('Date', ascending=False), use_container_width=True, hide_index=True)
