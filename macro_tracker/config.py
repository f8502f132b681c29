"""Application configuration and constants."""

import os

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".macro_tracker")
DB_PATH = os.environ.get("MACRO_TRACKER_DB", os.path.join(DB_DIR, "macro_tracker.db"))

SEXES = ("male", "female")

# Activity level multipliers for TDEE calculation
ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,      # Little to no exercise
    "light": 1.375,        # Light exercise 1-3 days/week
    "moderate": 1.55,      # Moderate exercise 3-5 days/week
    "active": 1.725,       # Hard exercise 6-7 days/week
    "very_active": 1.9,    # Very hard exercise, physical job
}

ACTIVITY_DESCRIPTIONS = {
    "sedentary": "Little or no exercise",
    "light": "Light exercise 1-3 days/week",
    "moderate": "Moderate exercise 3-5 days/week",
    "active": "Hard exercise 6-7 days/week",
    "very_active": "Intensive sport or physical job",
}

GOALS = ("weight_loss", "muscle_gain", "maintenance")

# Default calorie adjustment (kcal/day) when no explicit adjustment is set
GOAL_CALORIE_ADJUSTMENTS = {
    "weight_loss": -500,   # ~0.5 kg/week
    "muscle_gain": 300,    # lean gains
    "maintenance": 0,
}

# Protein (g per kg bodyweight)
HIGH_PROTEIN_PER_KG = 2.0
DEFAULT_PROTEIN_PER_KG = 1.6
HIGH_PROTEIN_GOALS = ("weight_loss", "muscle_gain")
# Share of calories from protein when bodyweight is unknown
FALLBACK_PROTEIN_FRACTION = 0.25

FAT_CALORIE_FRACTION = 0.275
FIBER_G_PER_1000_KCAL = 14

# Macro calorie multipliers (calories per gram)
CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

# Luteal-phase metabolic increase (5-10%), applied to TDEE
MENSTRUATION_TDEE_MULTIPLIER = 1.07

# Energy density of body fat
KCAL_PER_KG_FAT = 7700
WEEKS_PER_MONTH = 4
MAX_WEEKS_DISPLAY = 52

# Share of workout calories credited back to the eating budget
DEFAULT_WORKOUT_CALORIE_PERCENTAGE = 100
UNSET_GOAL_WORKOUT_PERCENTAGE = 50
# (minimum |deficit|, suggested percentage), checked in order; the last row must match any deficit
WEIGHT_LOSS_WORKOUT_PERCENTAGES = [
    (1000, 0),
    (750, 25),
    (500, 50),
    (0, 75),
]

# Workout presets: calories burned per hour
WORKOUT_PRESETS = {
    "strength": 400,
    "running": 600,
    "cycling": 500,
    "swimming": 550,
    "walking": 250,
    "yoga": 200,
    "hiit": 700,
    "other": 300,
}

# Rate presets (kcal/day adjustment)
WEIGHT_LOSS_RATES = [
    {"id": "slow", "label": "Slow", "adjustment": -250, "weekly_change": "~0.25 kg/week"},
    {"id": "normal", "label": "Normal", "adjustment": -500, "weekly_change": "~0.5 kg/week"},
    {"id": "fast", "label": "Fast", "adjustment": -750, "weekly_change": "~0.75 kg/week"},
    {"id": "aggressive", "label": "Aggressive", "adjustment": -1000, "weekly_change": "~1 kg/week"},
]

WEIGHT_GAIN_RATES = [
    {"id": "lean", "label": "Lean bulk", "adjustment": 250, "weekly_change": "+0.25 kg/week"},
    {"id": "normal", "label": "Normal", "adjustment": 400, "weekly_change": "+0.4 kg/week"},
]


# Meal types, in the order they're shown
MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
MEAL_TYPE_LABELS = {
    "breakfast": "🌅 Breakfast",
    "lunch": "☀️ Lunch",
    "dinner": "🌙 Dinner",
    "snack": "🍎 Snack",
}
