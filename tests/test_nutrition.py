import pytest

from fb_core.models import UserPreferences
from fb_utils.nutrition import (
    adjust_calories_for_goal,
    build_nutrition_plan,
    calculate_bmi,
    calculate_bmr,
    calculate_macros,
    calculate_tdee,
    get_activity_multiplier,
    get_bmi_category,
)


def test_bmi():
    assert calculate_bmi(70, 175) == pytest.approx(22.857, abs=1e-3)
    with pytest.raises(ValueError):
        calculate_bmi(70, 0)


def test_bmr_mifflin_st_jeor():
    assert calculate_bmr(70, 175, 30, "male") == pytest.approx(1648.75)
    assert calculate_bmr(70, 175, 30, "female") == pytest.approx(1482.75)


def test_activity_and_tdee():
    assert get_activity_multiplier("moderate") == 1.55
    assert get_activity_multiplier("couch") == 1.2
    assert calculate_tdee(1648.75, "moderate") == pytest.approx(2555.5625)


def test_macros():
    assert calculate_macros(2000, "balanced") == {"protein": 150, "carbs": 200, "fats": 67}
    assert calculate_macros(2000, "keto") == {"protein": 150, "carbs": 25, "fats": 144}
    assert calculate_macros(2000, "paleo") == calculate_macros(2000, "balanced")


def test_protein_rich_minimum():
    assert calculate_macros(1000, "protein_rich", weight=120)["protein"] == 120
    assert calculate_macros(1000, "protein_rich")["protein"] == 100


def test_goal_adjustment():
    assert adjust_calories_for_goal(2555.5625, "lose") == 2056
    assert adjust_calories_for_goal(2555.5625, "gain") == 3056
    assert adjust_calories_for_goal(2555.5625, "maintain") == 2556


def test_goal_rounding_negative_halves_go_up():
    assert adjust_calories_for_goal(497.5, "lose") == -2
    assert adjust_calories_for_goal(496.5, "lose") == -3


@pytest.mark.parametrize(
    "bmi, label",
    [(17.0, "Underweight"), (18.5, "Normal"), (24.9, "Normal"), (25.0, "Overweight"), (30.0, "Obese")],
)
def test_bmi_category(bmi, label):
    assert get_bmi_category(bmi) == label


class TestNutritionPlan:
    def make_prefs(self, **overrides):
        base = dict(weight=70, height=175, age=30, gender="male",
                    activity_level="moderate", goal="maintain", preferred_diet="balanced")
        base.update(overrides)
        return UserPreferences(**base)

    def test_plan_from_profile(self):
        plan = build_nutrition_plan(self.make_prefs())
        assert plan.bmi == pytest.approx(22.857, abs=1e-3)
        assert plan.bmi_category == "Normal"
        assert plan.bmr == pytest.approx(1648.75)
        assert plan.tdee == pytest.approx(2555.5625)
        assert plan.target_calories == 2556
        assert plan.diet_type == "balanced"
        assert plan.macros == {"protein": 192, "carbs": 256, "fats": 85}

    def test_diet_argument_overrides_profile(self):
        plan = build_nutrition_plan(self.make_prefs(goal="lose"), "keto")
        assert plan.target_calories == 2056
        assert plan.diet_type == "keto"
        assert plan.macros["carbs"] == 26

    def test_incomplete_profile_rejected(self):
        with pytest.raises(ValueError, match="age"):
            build_nutrition_plan(self.make_prefs(age=0))
