"""Logging Page.

Log meals (directly, from favorites or from saved ingredients) and
workouts, correct logged meals, and mark menstruation days.
"""

import streamlit as st
from datetime import date, datetime
from macro_tracker.config import MEAL_TYPE_LABELS, MEAL_TYPES, WORKOUT_PRESETS
from macro_tracker.favorites import (
    delete_favorite, delete_ingredient, favorite_from_meal, get_favorites,
    get_ingredients, log_favorite, log_ingredient, save_ingredient
)
from macro_tracker.models import Nutrition, SavedIngredient
from macro_tracker.profile_store import load_profile
from macro_tracker.tracker import (
    delete_meal, delete_workout, get_meals, get_workouts,
    is_menstruation_day, log_meal, log_workout, set_menstruation, update_meal
)
from macro_tracker.workouts import calculate_workout_offset, estimate_calories_burned

st.set_page_config(page_title="Log | Macro Tracker", page_icon="📝", layout="wide")
st.title("📝 Log")

profile = load_profile()
if not profile:
    st.warning("⚠️ No profile found. Please create a profile first in the Profile page.")
    st.stop()

log_day = st.date_input("Day", value=date.today())

MEAL_TYPE_OPTIONS = [None] + list(MEAL_TYPES)


def _meal_type_label(meal_type):
    return MEAL_TYPE_LABELS.get(meal_type, "No type")


def _macro_split(nutrition: Nutrition) -> str:
    pcts = nutrition.macro_percentages()
    return f"P {pcts['protein']:.0f}% · C {pcts['carbs']:.0f}% · F {pcts['fat']:.0f}%"


def _nutrition_inputs(prefix: str, nutrition: Nutrition = None) -> Nutrition:
    nutrition = nutrition or Nutrition.zero()
    col1, col2, col3, col4, col5 = st.columns(5)
    return Nutrition(
        col1.number_input("Calories", min_value=0.0, step=10.0,
                          value=float(nutrition.calories), key=f"{prefix}_cal"),
        col2.number_input("Protein (g)", min_value=0.0, step=1.0,
                          value=float(nutrition.protein_g), key=f"{prefix}_p"),
        col3.number_input("Carbs (g)", min_value=0.0, step=1.0,
                          value=float(nutrition.carbs_g), key=f"{prefix}_c"),
        col4.number_input("Fat (g)", min_value=0.0, step=1.0,
                          value=float(nutrition.fat_g), key=f"{prefix}_f"),
        col5.number_input("Fiber (g)", min_value=0.0, step=1.0,
                          value=float(nutrition.fiber_g), key=f"{prefix}_fib"),
    )


meal_tab, favorites_tab, ingredients_tab, workout_tab, cycle_tab = st.tabs(
    ["🍽️ Meal", "⭐ Favorites", "🥕 Ingredients", "🏃 Workout", "🩸 Cycle"]
)

# Meal Tab
with meal_tab:
    with st.form("log_meal_form"):
        description = st.text_input("Description", help="What did you eat?")
        meal_type = st.selectbox("Meal type", MEAL_TYPE_OPTIONS, format_func=_meal_type_label)
        nutrition = _nutrition_inputs("new")
        eaten_time = st.time_input("Time", value=datetime.now().time())

        submitted = st.form_submit_button("📝 Log Meal", use_container_width=True)

        if submitted:
            if not description.strip():
                st.error("⚠️ Description is required")
            else:
                try:
                    log_meal(
                        user_id=profile.id,
                        description=description.strip(),
                        nutrition=nutrition,
                        eaten_at=datetime.combine(log_day, eaten_time),
                        meal_type=meal_type,
                    )
                    st.success(f"✅ Logged: {description} ({nutrition.calories:.0f} kcal)")
                except Exception as e:
                    st.error(f"❌ Failed to log meal: {e}")

    for meal in get_meals(profile.id, log_day, log_day):
        label = (f"{meal.eaten_at.strftime('%H:%M')} {_meal_type_label(meal.meal_type)}: "
                 f"{meal.description} ({meal.nutrition.calories:.0f} kcal)")
        with st.expander(label):
            with st.form(f"edit_meal_{meal.id}"):
                new_description = st.text_input("Description", value=meal.description)
                new_type = st.selectbox(
                    "Meal type", MEAL_TYPE_OPTIONS,
                    index=MEAL_TYPE_OPTIONS.index(meal.meal_type),
                    format_func=_meal_type_label,
                )
                new_nutrition = _nutrition_inputs(f"edit_{meal.id}", meal.nutrition)
                if st.form_submit_button("💾 Save changes"):
                    update_meal(meal.id, new_description.strip() or meal.description,
                                new_nutrition, new_type)
                    st.rerun()

            col1, col2 = st.columns(2)
            if col1.button("⭐ Save as favorite", key=f"fav_meal_{meal.id}"):
                favorite_from_meal(meal.id)
                st.success("✅ Added to favorites")
            if col2.button("🗑️ Delete", key=f"meal_{meal.id}"):
                delete_meal(meal.id)
                st.rerun()

# Favorites Tab
with favorites_tab:
    favorites = get_favorites(profile.id)
    if not favorites:
        st.info("No favorites yet. Save a logged meal as favorite from the Meal tab.")
    for fav in favorites:
        col1, col2, col3 = st.columns([4, 1, 1])
        col1.write(f"**{fav.name}** {_meal_type_label(fav.default_meal_type)}: "
                   f"{fav.nutrition.calories:.0f} kcal")
        col1.caption(f"{_macro_split(fav.nutrition)} · used {fav.use_count}x")
        if col2.button("➕ Log", key=f"log_fav_{fav.id}"):
            log_favorite(fav.id, datetime.combine(log_day, datetime.now().time()))
            st.rerun()
        if col3.button("🗑️", key=f"del_fav_{fav.id}"):
            delete_favorite(fav.id)
            st.rerun()

# Ingredients Tab
with ingredients_tab:
    with st.form("new_ingredient_form"):
        st.markdown("**New ingredient** (nutrition per serving)")
        name = st.text_input("Name")
        serving_size = st.text_input("Serving size", placeholder="e.g. 100 g, 1 slice")
        ingredient_nutrition = _nutrition_inputs("ingredient")
        if st.form_submit_button("💾 Save ingredient"):
            try:
                save_ingredient(SavedIngredient(
                    id=None, user_id=profile.id, name=name,
                    nutrition=ingredient_nutrition, serving_size=serving_size,
                ))
                st.success(f"✅ Saved: {name}")
            except ValueError as e:
                st.error(f"⚠️ {e}")

    ingredient_type = st.selectbox("Log as", MEAL_TYPE_OPTIONS, format_func=_meal_type_label,
                                   key="ingredient_meal_type")
    for ing in get_ingredients(profile.id):
        col1, col2, col3, col4 = st.columns([4, 1, 1, 1])
        serving = f" per {ing.serving_size}" if ing.serving_size else ""
        col1.write(f"**{ing.name}**: {ing.nutrition.calories:.0f} kcal{serving}")
        col1.caption(f"{_macro_split(ing.nutrition)} · used {ing.use_count}x")
        servings = col2.number_input("Servings", min_value=0.25, value=1.0, step=0.25,
                                     key=f"servings_{ing.id}", label_visibility="collapsed")
        if col3.button("➕ Log", key=f"log_ing_{ing.id}"):
            log_ingredient(ing.id, servings, datetime.combine(log_day, datetime.now().time()),
                           ingredient_type)
            st.rerun()
        if col4.button("🗑️", key=f"del_ing_{ing.id}"):
            delete_ingredient(ing.id)
            st.rerun()

# Workout Tab
with workout_tab:
    workout_type = st.selectbox("Type", list(WORKOUT_PRESETS.keys()),
                                format_func=lambda t: t.upper() if t == "hiit" else t.title())
    minutes = st.number_input("Duration (min)", min_value=0, max_value=600, value=30, step=5)
    estimate = estimate_calories_burned(workout_type, minutes)
    burned = st.number_input("Calories burned", min_value=0, value=estimate, step=10,
                             help=f"Estimate for {workout_type}: {estimate} kcal")

    if burned:
        credited = calculate_workout_offset(burned, profile.workout_calorie_percentage)
        if credited < burned:
            st.info(f"You may eat {credited} kcal extra "
                    f"({profile.workout_calorie_percentage}% of {burned} kcal, set in your profile)")
        else:
            st.info(f"You may eat {burned} kcal extra")

    if st.button("🏃 Log Workout", use_container_width=True, disabled=not burned):
        try:
            log_workout(profile.id, workout_type, minutes, burned, log_day)
            st.success(f"✅ Logged: {workout_type} ({burned} kcal)")
        except ValueError as e:
            st.error(f"❌ Failed to log workout: {e}")

    for workout in get_workouts(profile.id, log_day, log_day):
        col1, col2 = st.columns([5, 1])
        col1.write(f"{workout.workout_type.title()} {workout.duration_minutes} min "
                   f"(+{workout.calories_burned} kcal)")
        if col2.button("🗑️", key=f"workout_{workout.id}"):
            delete_workout(workout.id)
            st.rerun()

# Cycle Tab
with cycle_tab:
    if profile.sex != "female":
        st.caption("The cycle adjustment only applies to female profiles.")
    current = is_menstruation_day(profile.id, log_day)
    flag = st.toggle("Menstruating on this day", value=current)
    if flag != current:
        set_menstruation(profile.id, log_day, flag)
        st.success("✅ Saved. Your TDEE is raised by 7% on menstruation days." if flag else "✅ Saved.")
