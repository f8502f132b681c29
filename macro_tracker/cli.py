"""Command-line interface for the macro tracking application."""

import argparse
import dataclasses
import sys
from datetime import date, datetime, timedelta

from macro_tracker.config import (
    ACTIVITY_MULTIPLIERS,
    GOALS,
    MEAL_TYPES,
    SEXES,
    WEIGHT_GAIN_RATES,
    WEIGHT_LOSS_RATES,
    WORKOUT_PRESETS,
)
from macro_tracker.db import DB_PATH, init_db
from macro_tracker.favorites import (
    delete_favorite,
    delete_ingredient,
    favorite_from_meal,
    get_favorites,
    get_ingredients,
    log_favorite,
    log_ingredient,
    save_favorite,
    save_ingredient,
)
from macro_tracker.goals import find_rate, format_time_to_goal, profile_weeks_to_goal, select_goal
from macro_tracker.macro_calculator import (
    calculate_bmr,
    calculate_macro_targets,
    calculate_tdee,
    format_targets,
    get_effective_tdee,
)
from macro_tracker.models import FavoriteMeal, Nutrition, SavedIngredient, UserProfile
from macro_tracker.profile_store import load_profile, save_profile
from macro_tracker.tracker import (
    daily_summary,
    format_summary,
    get_meal,
    history,
    is_menstruation_day,
    log_meal,
    log_workout,
    set_menstruation,
    update_meal,
)


# --- Profile helpers ---

def _get_active_profile(db_path: str) -> UserProfile:
    profile = load_profile(db_path=db_path)
    if not profile:
        print("No profile found. Create one first:")
        print("  python -m macro_tracker profile set --weight 75 --height 180 --age 30 "
              "--sex male --activity moderate")
        sys.exit(1)
    return profile


def _save_or_exit(profile: UserProfile, db_path: str) -> UserProfile:
    try:
        user_id = save_profile(profile, db_path)
    except ValueError as e:
        print(f"Invalid profile: {e}")
        sys.exit(1)
    return load_profile(user_id, db_path)


def _print_targets(profile: UserProfile, is_menstruation: bool = False) -> None:
    targets = calculate_macro_targets(profile, is_menstruation)
    if targets is None:
        missing = ", ".join(profile.missing_fields())
        print("Incomplete profile: targets cannot be calculated.")
        print(f"  Missing: {missing}")
        print("  (or set a manual TDEE with --custom-tdee and --use-custom-tdee)")
        return
    print(format_targets(targets, get_effective_tdee(profile)))


def _parse_day(value: str) -> date:
    return date.fromisoformat(value) if value else date.today()


def _parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value) if value else datetime.now()


def _nutrition_from_args(args) -> Nutrition:
    return Nutrition(
        calories=args.calories,
        protein_g=args.protein,
        carbs_g=args.carbs,
        fat_g=args.fat,
        fiber_g=args.fiber,
    )


def _macro_split(nutrition: Nutrition) -> str:
    pcts = nutrition.macro_percentages()
    return f"P {pcts['protein']:.0f}% / C {pcts['carbs']:.0f}% / F {pcts['fat']:.0f}%"


# --- Command handlers ---

def cmd_profile_set(args):
    profile = load_profile(db_path=args.db) or UserProfile(id=1)

    changes = {}
    for attr, arg in (
        ("name", args.name),
        ("weight_kg", args.weight),
        ("height_cm", args.height),
        ("age", args.age),
        ("sex", args.sex),
        ("activity_level", args.activity),
        ("calorie_adjustment", args.adjustment),
        ("custom_tdee", args.custom_tdee),
        ("use_custom_tdee", args.use_custom_tdee),
        ("target_weight_kg", args.target_weight),
        ("workout_calorie_percentage", args.workout_percentage),
    ):
        if arg is not None:
            changes[attr] = arg

    profile = _save_or_exit(dataclasses.replace(profile, **changes), args.db)
    print(f"Profile saved (ID: {profile.id})")
    print("\nYour daily targets:")
    _print_targets(profile)


def cmd_profile_show(args):
    profile = _get_active_profile(args.db)

    def show(value, unit=""):
        return f"{value}{unit}" if value is not None else "-"

    print(f"Name:     {profile.name or '-'}")
    print(f"Age:      {show(profile.age)}")
    print(f"Weight:   {show(profile.weight_kg, ' kg')}")
    print(f"Height:   {show(profile.height_cm, ' cm')}")
    print(f"Sex:      {show(profile.sex)}")
    print(f"Activity: {show(profile.activity_level)}")
    print(f"Goal:     {show(profile.goal)}")
    print(f"Target:   {show(profile.target_weight_kg, ' kg')}")

    adjustment = profile.calorie_adjustment
    rate = find_rate(adjustment)
    rate_label = f" ({rate['label']}, {rate['weekly_change']})" if rate else ""
    print(f"Adjust:   {show(adjustment, ' kcal/day')}{rate_label}")
    print(f"Workouts: {show(profile.workout_calorie_percentage, '%')} of burned calories credited")

    bmr = calculate_bmr(profile)
    if bmr is not None:
        print(f"\nBMR:      {bmr:.0f} kcal")
        print(f"TDEE:     {calculate_tdee(profile)} kcal (calculated)")
    if profile.use_custom_tdee and profile.custom_tdee:
        print(f"Manual:   {profile.custom_tdee} kcal (in use)")

    print("\nDaily Targets:")
    _print_targets(profile)


def cmd_goal_set(args):
    profile = _get_active_profile(args.db)
    if args.rate:
        rates = {"weight_loss": WEIGHT_LOSS_RATES, "muscle_gain": WEIGHT_GAIN_RATES}.get(args.goal, [])
        rate = next((r for r in rates if r["id"] == args.rate), None)
        if rate is None:
            choices = ", ".join(r["id"] for r in rates) or "none"
            print(f"Rate '{args.rate}' does not apply to goal {args.goal}. Choose from: {choices}")
            sys.exit(1)
        profile = select_goal(profile, args.goal, rate["adjustment"])
    else:
        profile = select_goal(profile, args.goal)

    profile = _save_or_exit(profile, args.db)
    print(f"Goal: {profile.goal or 'none'} "
          f"(adjustment {profile.calorie_adjustment} kcal/day, "
          f"{profile.workout_calorie_percentage}% of workouts credited)")
    print("\nUpdated daily targets:")
    _print_targets(profile)


def cmd_goal_eta(args):
    profile = _get_active_profile(args.db)
    weeks = profile_weeks_to_goal(profile)
    if weeks is None:
        print("Cannot estimate: needs weight above target weight and a non-zero "
              "calorie adjustment.")
        return
    print(f"Estimated time to {profile.target_weight_kg} kg: {format_time_to_goal(weeks)}")


def cmd_macros(args):
    profile = _get_active_profile(args.db)
    day = _parse_day(args.date)
    is_menstruation = args.menstruation or is_menstruation_day(profile.id, day, args.db)
    _print_targets(profile, is_menstruation)


def cmd_log_meal(args):
    profile = _get_active_profile(args.db)
    meal_id = log_meal(profile.id, args.description, _nutrition_from_args(args),
                       _parse_time(args.date), args.type, args.db)
    print(f"Logged: {args.description} ({args.calories:.0f} kcal) [#{meal_id}]")


def cmd_log_favorite(args):
    _get_active_profile(args.db)
    try:
        meal_id = log_favorite(args.favorite_id, _parse_time(args.date), args.type, args.db)
    except ValueError as e:
        print(f"Cannot log favorite: {e}")
        sys.exit(1)
    print(f"Logged favorite #{args.favorite_id} [#{meal_id}]")


def cmd_log_ingredient(args):
    _get_active_profile(args.db)
    try:
        meal_id = log_ingredient(args.ingredient_id, args.servings, _parse_time(args.date),
                                 args.type, args.db)
    except ValueError as e:
        print(f"Cannot log ingredient: {e}")
        sys.exit(1)
    meal = get_meal(meal_id, args.db)
    print(f"Logged: {meal.description} ({meal.nutrition.calories:.0f} kcal) [#{meal_id}]")


def cmd_log_workout(args):
    profile = _get_active_profile(args.db)
    try:
        workout_id = log_workout(
            profile.id, args.type, args.minutes, args.calories,
            _parse_day(args.date), args.notes or "", args.db,
        )
    except ValueError as e:
        print(f"Invalid workout: {e}")
        sys.exit(1)
    print(f"Logged: {args.type} for {args.minutes} min [#{workout_id}]")


def cmd_log_cycle(args):
    profile = _get_active_profile(args.db)
    day = _parse_day(args.date)
    set_menstruation(profile.id, day, not args.off, db_path=args.db)
    state = "no menstruation" if args.off else "menstruation"
    print(f"Marked {day.isoformat()}: {state}")
    if profile.sex != "female":
        print("Note: the cycle adjustment only applies to female profiles.")


def cmd_meal_edit(args):
    meal = get_meal(args.meal_id, args.db)
    if meal is None:
        print(f"Meal #{args.meal_id} not found")
        sys.exit(1)

    nutrition = dataclasses.replace(meal.nutrition, **{
        field: value for field, value in (
            ("calories", args.calories),
            ("protein_g", args.protein),
            ("carbs_g", args.carbs),
            ("fat_g", args.fat),
            ("fiber_g", args.fiber),
        ) if value is not None
    })
    update_meal(
        meal.id,
        args.description if args.description is not None else meal.description,
        nutrition,
        args.type if args.type is not None else meal.meal_type,
        datetime.fromisoformat(args.date) if args.date else None,
        args.db,
    )
    print(f"Updated meal #{meal.id}")


def cmd_favorite_list(args):
    profile = _get_active_profile(args.db)
    favorites = get_favorites(profile.id, args.db)
    if not favorites:
        print("No favorites yet. Add one with: favorite add --name ... --calories ...")
        return
    for fav in favorites:
        meal_type = f" [{fav.default_meal_type}]" if fav.default_meal_type else ""
        print(f"#{fav.id:<4} {fav.name}{meal_type}: {fav.nutrition.calories:.0f} kcal "
              f"({_macro_split(fav.nutrition)}), used {fav.use_count}x")


def cmd_favorite_add(args):
    profile = _get_active_profile(args.db)
    try:
        favorite_id = save_favorite(FavoriteMeal(
            id=None,
            user_id=profile.id,
            name=args.name,
            nutrition=_nutrition_from_args(args),
            description=args.description or "",
            default_meal_type=args.type,
        ), args.db)
    except ValueError as e:
        print(f"Invalid favorite: {e}")
        sys.exit(1)
    print(f"Saved favorite #{favorite_id}: {args.name}")


def cmd_favorite_from_meal(args):
    try:
        favorite_id = favorite_from_meal(args.meal_id, args.name, args.db)
    except ValueError as e:
        print(f"Cannot save favorite: {e}")
        sys.exit(1)
    print(f"Saved meal #{args.meal_id} as favorite #{favorite_id}")


def cmd_favorite_delete(args):
    if delete_favorite(args.favorite_id, args.db):
        print(f"Deleted favorite #{args.favorite_id}")
    else:
        print(f"Favorite #{args.favorite_id} not found")


def cmd_ingredient_list(args):
    profile = _get_active_profile(args.db)
    ingredients = get_ingredients(profile.id, args.db)
    if not ingredients:
        print("No saved ingredients yet. Add one with: ingredient add --name ... --calories ...")
        return
    for ing in ingredients:
        serving = f" per {ing.serving_size}" if ing.serving_size else ""
        print(f"#{ing.id:<4} {ing.name}: {ing.nutrition.calories:.0f} kcal{serving} "
              f"({_macro_split(ing.nutrition)}), used {ing.use_count}x")


def cmd_ingredient_add(args):
    profile = _get_active_profile(args.db)
    try:
        ingredient_id = save_ingredient(SavedIngredient(
            id=None,
            user_id=profile.id,
            name=args.name,
            nutrition=_nutrition_from_args(args),
            serving_size=args.serving_size,
        ), args.db)
    except ValueError as e:
        print(f"Invalid ingredient: {e}")
        sys.exit(1)
    print(f"Saved ingredient #{ingredient_id}: {args.name}")


def cmd_ingredient_delete(args):
    if delete_ingredient(args.ingredient_id, args.db):
        print(f"Deleted ingredient #{args.ingredient_id}")
    else:
        print(f"Ingredient #{args.ingredient_id} not found")


def cmd_track(args):
    profile = _get_active_profile(args.db)
    summary = daily_summary(profile.id, _parse_day(args.date), profile, args.db)
    print(format_summary(summary))


def cmd_history(args):
    profile = _get_active_profile(args.db)
    end = _parse_day(args.date)
    start = end - timedelta(days=args.days - 1)

    print(f"{'Date':<12}  {'Eaten':>6}  {'Budget':>6}  {'Burned':>6}  {'P(g)':>5}  {'C(g)':>5}  {'F(g)':>5}")
    print("-" * 60)
    for summary in history(profile.id, start, end, profile, args.db):
        t = summary.totals
        budget = f"{summary.calorie_budget}" if summary.calorie_budget is not None else "N/A"
        flag = " *" if summary.is_menstruation else ""
        print(f"{summary.day.isoformat():<12}  {t.calories:>6.0f}  {budget:>6}  "
              f"{t.calories_burned:>6}  {t.protein_g:>5.0f}  {t.carbs_g:>5.0f}  {t.fat_g:>5.0f}{flag}")


# --- Argument parser ---

def _add_nutrition_args(parser, required: bool = True) -> None:
    # Edits leave unset values alone
    default = 0.0 if required else None
    parser.add_argument("--calories", type=float, required=required, default=None)
    parser.add_argument("--protein", type=float, default=default)
    parser.add_argument("--carbs", type=float, default=default)
    parser.add_argument("--fat", type=float, default=default)
    parser.add_argument("--fiber", type=float, default=default)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="macro_tracker",
        description="Macro Tracker - Daily calorie and macro targets",
    )
    parser.add_argument("--db", default=DB_PATH, help=f"Database file (default: {DB_PATH})")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- profile ---
    profile_parser = subparsers.add_parser("profile", help="Manage your profile")
    profile_sub = profile_parser.add_subparsers(dest="subcommand")

    set_p = profile_sub.add_parser("set", help="Create or update your profile")
    set_p.add_argument("--name")
    set_p.add_argument("--weight", type=float, help="Weight in kg")
    set_p.add_argument("--height", type=float, help="Height in cm")
    set_p.add_argument("--age", type=int)
    set_p.add_argument("--sex", choices=list(SEXES))
    set_p.add_argument("--activity", choices=list(ACTIVITY_MULTIPLIERS.keys()),
                       help="Activity level")
    set_p.add_argument("--adjustment", type=int,
                       help="Calorie adjustment in kcal/day (negative = deficit)")
    set_p.add_argument("--custom-tdee", type=int, help="Manual TDEE, e.g. from a wearable")
    set_p.add_argument("--use-custom-tdee", action=argparse.BooleanOptionalAction, default=None,
                       help="Use the manual TDEE instead of the calculated one")
    set_p.add_argument("--target-weight", type=float, help="Goal weight in kg")
    set_p.add_argument("--workout-percentage", type=int,
                       help="Share of workout calories added to your budget (0-100)")
    set_p.set_defaults(func=cmd_profile_set)

    show_p = profile_sub.add_parser("show", help="Show current profile")
    show_p.set_defaults(func=cmd_profile_show)

    # --- goal ---
    goal_parser = subparsers.add_parser("goal", help="Goal and time-to-goal")
    goal_sub = goal_parser.add_subparsers(dest="subcommand")

    goal_set_p = goal_sub.add_parser(
        "set", help="Select a goal (selecting it again without --rate clears it)")
    goal_set_p.add_argument("goal", choices=list(GOALS))
    goal_set_p.add_argument("--rate", help="Preset rate id (e.g. slow, normal, fast, aggressive, lean)")
    goal_set_p.set_defaults(func=cmd_goal_set)

    eta_p = goal_sub.add_parser("eta", help="Estimate time to reach your target weight")
    eta_p.set_defaults(func=cmd_goal_eta)

    # --- macros ---
    macros_p = subparsers.add_parser("macros", help="Show daily macro targets")
    macros_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    macros_p.add_argument("--menstruation", action="store_true",
                          help="Apply the cycle adjustment")
    macros_p.set_defaults(func=cmd_macros)

    # --- log ---
    log_parser = subparsers.add_parser("log", help="Log meals, workouts and cycle days")
    log_sub = log_parser.add_subparsers(dest="subcommand")

    meal_p = log_sub.add_parser("meal", help="Log a meal")
    meal_p.add_argument("--description", required=True)
    _add_nutrition_args(meal_p)
    meal_p.add_argument("--type", choices=list(MEAL_TYPES), help="Meal type")
    meal_p.add_argument("--date", help="Date/time (YYYY-MM-DD or ISO format)")
    meal_p.set_defaults(func=cmd_log_meal)

    fav_log_p = log_sub.add_parser("favorite", help="Log a favorite meal")
    fav_log_p.add_argument("favorite_id", type=int)
    fav_log_p.add_argument("--type", choices=list(MEAL_TYPES),
                           help="Meal type (default: the favorite's own)")
    fav_log_p.add_argument("--date", help="Date/time (YYYY-MM-DD or ISO format)")
    fav_log_p.set_defaults(func=cmd_log_favorite)

    ing_log_p = log_sub.add_parser("ingredient", help="Log servings of a saved ingredient")
    ing_log_p.add_argument("ingredient_id", type=int)
    ing_log_p.add_argument("--servings", type=float, default=1.0)
    ing_log_p.add_argument("--type", choices=list(MEAL_TYPES), help="Meal type")
    ing_log_p.add_argument("--date", help="Date/time (YYYY-MM-DD or ISO format)")
    ing_log_p.set_defaults(func=cmd_log_ingredient)

    workout_p = log_sub.add_parser("workout", help="Log a workout")
    workout_p.add_argument("--type", required=True,
                           help=f"Workout type, e.g. {', '.join(WORKOUT_PRESETS)}")
    workout_p.add_argument("--minutes", type=int, required=True)
    workout_p.add_argument("--calories", type=int,
                           help="Calories burned (estimated from the type if omitted)")
    workout_p.add_argument("--date", help="Date (YYYY-MM-DD)")
    workout_p.add_argument("--notes")
    workout_p.set_defaults(func=cmd_log_workout)

    cycle_p = log_sub.add_parser("cycle", help="Mark a menstruation day")
    cycle_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    cycle_p.add_argument("--off", action="store_true", help="Unmark the day")
    cycle_p.set_defaults(func=cmd_log_cycle)

    # --- meal ---
    meal_parser = subparsers.add_parser("meal", help="Correct logged meals")
    meal_sub = meal_parser.add_subparsers(dest="subcommand")

    edit_p = meal_sub.add_parser("edit", help="Edit a logged meal (only given fields change)")
    edit_p.add_argument("meal_id", type=int)
    edit_p.add_argument("--description")
    _add_nutrition_args(edit_p, required=False)
    edit_p.add_argument("--type", choices=list(MEAL_TYPES), help="Meal type")
    edit_p.add_argument("--date", help="New date/time (ISO format)")
    edit_p.set_defaults(func=cmd_meal_edit)

    # --- favorite ---
    fav_parser = subparsers.add_parser("favorite", help="Manage favorite meals")
    fav_sub = fav_parser.add_subparsers(dest="subcommand")

    fav_list_p = fav_sub.add_parser("list", help="List favorites, most used first")
    fav_list_p.set_defaults(func=cmd_favorite_list)

    fav_add_p = fav_sub.add_parser("add", help="Save a new favorite")
    fav_add_p.add_argument("--name", required=True)
    fav_add_p.add_argument("--description")
    _add_nutrition_args(fav_add_p)
    fav_add_p.add_argument("--type", choices=list(MEAL_TYPES), help="Default meal type")
    fav_add_p.set_defaults(func=cmd_favorite_add)

    fav_meal_p = fav_sub.add_parser("from-meal", help="Save a logged meal as a favorite")
    fav_meal_p.add_argument("meal_id", type=int)
    fav_meal_p.add_argument("--name")
    fav_meal_p.set_defaults(func=cmd_favorite_from_meal)

    fav_del_p = fav_sub.add_parser("delete", help="Delete a favorite")
    fav_del_p.add_argument("favorite_id", type=int)
    fav_del_p.set_defaults(func=cmd_favorite_delete)

    # --- ingredient ---
    ing_parser = subparsers.add_parser("ingredient", help="Manage saved ingredients")
    ing_sub = ing_parser.add_subparsers(dest="subcommand")

    ing_list_p = ing_sub.add_parser("list", help="List saved ingredients, most used first")
    ing_list_p.set_defaults(func=cmd_ingredient_list)

    ing_add_p = ing_sub.add_parser("add", help="Save an ingredient (nutrition per serving)")
    ing_add_p.add_argument("--name", required=True)
    ing_add_p.add_argument("--serving-size", help='e.g. "100 g" or "1 slice"')
    _add_nutrition_args(ing_add_p)
    ing_add_p.set_defaults(func=cmd_ingredient_add)

    ing_del_p = ing_sub.add_parser("delete", help="Delete a saved ingredient")
    ing_del_p.add_argument("ingredient_id", type=int)
    ing_del_p.set_defaults(func=cmd_ingredient_delete)

    # --- track ---
    track_p = subparsers.add_parser("track", help="Show a day's progress")
    track_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    track_p.set_defaults(func=cmd_track)

    # --- history ---
    history_p = subparsers.add_parser("history", help="Show recent days")
    history_p.add_argument("--days", type=int, default=7)
    history_p.add_argument("--date", help="Last day (YYYY-MM-DD), default: today")
    history_p.set_defaults(func=cmd_history)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    init_db(args.db)

    if not args.command:
        parser.print_help()
        return

    if hasattr(args, "func"):
        args.func(args)
    elif args.command in ("profile", "goal", "log", "meal", "favorite", "ingredient"):
        # Subcommand not specified
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
    else:
        parser.print_help()
