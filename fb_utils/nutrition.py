# fb_utils/nutrition.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from fb_core.models import UserPreferences

ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

# Share of calories from protein / carbs / fats
MACRO_RATIOS: Dict[str, Dict[str, float]] = {
    "balanced": {"protein": 0.3, "carbs": 0.4, "fats": 0.3},
    "protein_rich": {"protein": 0.4, "carbs": 0.35, "fats": 0.25},
    "bulking": {"protein": 0.25, "carbs": 0.5, "fats": 0.25},
    "keto": {"protein": 0.3, "carbs": 0.05, "fats": 0.65},
    "low_carb": {"protein": 0.35, "carbs": 0.2, "fats": 0.45},
    "vegetarian": {"protein": 0.25, "carbs": 0.45, "fats": 0.3},
}

GOAL_ADJUSTMENT = {"lose": -500, "gain": 500}
GOALS = ("lose", "maintain", "gain")

# Upper bounds (exclusive) for each BMI label
BMI_CATEGORIES = ((18.5, "Underweight"), (25.0, "Normal"), (30.0, "Overweight"))


@dataclass
class NutritionPlan:
    bmi: float
    bmi_category: str
    bmr: float
    tdee: float
    target_calories: int
    diet_type: str
    macros: Dict[str, int]


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    if height_cm <= 0:
        raise ValueError("height must be positive")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def get_bmi_category(bmi: float) -> str:
    for upper, label in BMI_CATEGORIES:
        if bmi < upper:
            return label
    return "Obese"


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Mifflin-St Jeor."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == "male" else base - 161


def get_activity_multiplier(level: str) -> float:
    return ACTIVITY_MULTIPLIERS.get(level, 1.2)


def calculate_tdee(bmr: float, activity_level: str) -> float:
    return bmr * get_activity_multiplier(activity_level)


def _round_half_up(x: float) -> int:
    # Halves go toward +inf, negatives included (-2.5 -> -2)
    return int(math.floor(x + 0.5))


def calculate_macros(
    calories: float, diet_type: str, weight: Optional[float] = None
) -> Dict[str, int]:
    """Grams of protein/carbs/fats (4, 4 and 9 kcal per gram)."""
    ratios = MACRO_RATIOS.get(diet_type, MACRO_RATIOS["balanced"])
    protein = calories * ratios["protein"] / 4
    carbs = calories * ratios["carbs"] / 4
    fats = calories * ratios["fats"] / 9

    # 1 g per kg body weight minimum
    if diet_type == "protein_rich" and weight:
        protein = max(protein, weight)

    return {
        "protein": _round_half_up(protein),
        "carbs": _round_half_up(carbs),
        "fats": _round_half_up(fats),
    }


def adjust_calories_for_goal(tdee: float, goal: str) -> int:
    return _round_half_up(tdee + GOAL_ADJUSTMENT.get(goal, 0))


def check_profile(prefs: UserPreferences) -> None:
    """Weight, height and age must all be positive before anything is computed."""
    missing = [
        name
        for name in ("weight", "height", "age")
        if not getattr(prefs, name) or getattr(prefs, name) <= 0
    ]
    if missing:
        raise ValueError(f"Profile needs positive {', '.join(missing)}")


def build_nutrition_plan(
    prefs: UserPreferences, diet_type: Optional[str] = None
) -> NutritionPlan:
    """
    Daily targets for a stored profile:
    BMI -> BMR -> TDEE (activity) -> goal calories -> macros for the diet.
    `diet_type` defaults to the profile's preferred diet.
    """
    check_profile(prefs)
    diet = diet_type or prefs.preferred_diet
    bmi = calculate_bmi(prefs.weight, prefs.height)
    bmr = calculate_bmr(prefs.weight, prefs.height, prefs.age, prefs.gender)
    tdee = calculate_tdee(bmr, prefs.activity_level)
    target = adjust_calories_for_goal(tdee, prefs.goal)
    return NutritionPlan(
        bmi=bmi,
        bmi_category=get_bmi_category(bmi),
        bmr=bmr,
        tdee=tdee,
        target_calories=target,
        diet_type=diet,
        macros=calculate_macros(target, diet, prefs.weight),
    )
