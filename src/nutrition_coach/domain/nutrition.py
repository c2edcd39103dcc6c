"""Daily nutrition targets (KBJU) derived from body weight and goal."""

import math
from dataclasses import dataclass
from enum import StrEnum


class Goal(StrEnum):
    """Dietary objective chosen by a course participant."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"


def parse_goal(value: object) -> Goal | None:
    """Return the goal for a stored value, or None when it is missing or unknown."""
    try:
        return Goal(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class NutritionTarget:
    """Daily calorie and macronutrient targets."""

    calories: int
    protein_g: int
    fat_g: int
    carbs_g: int


_LOSS_KCAL_PER_KG = 29
_GAIN_KCAL_PER_KG = 36
_GAIN_SURPLUS_KCAL = 500
_PROTEIN_G_PER_KG = 2
_GAIN_FAT_G_PER_KG = 1
_LOSS_FAT_G = 50
_LOSS_RESERVED_KCAL = 450


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going toward positive infinity."""
    return math.floor(value + 0.5)


def calculate_kbju(
    weight: float | None, goal: Goal | str | None
) -> NutritionTarget | None:
    """Return daily targets for a weight in kg, or None when they can't be computed.

    Carbohydrates are always the residual after protein and fat and are
    clamped at zero. An unrecognised goal counts as missing.
    """
    resolved = parse_goal(goal)
    if weight is None or weight <= 0 or resolved is None:
        return None

    match resolved:
        case Goal.WEIGHT_LOSS:
            calories = round_half_up(weight * _LOSS_KCAL_PER_KG)
            protein = round_half_up(weight * _PROTEIN_G_PER_KG)
            fat = _LOSS_FAT_G
            carbs = round_half_up((calories - protein * 4 - _LOSS_RESERVED_KCAL) / 4)
        case Goal.MUSCLE_GAIN:
            base = round_half_up(weight * _GAIN_KCAL_PER_KG)
            calories = base + _GAIN_SURPLUS_KCAL
            protein = round_half_up(weight * _PROTEIN_G_PER_KG)
            fat = round_half_up(weight * _GAIN_FAT_G_PER_KG)
            carbs = round_half_up((calories - protein * 4 - fat * 9) / 4)

    return NutritionTarget(
        calories=calories,
        protein_g=protein,
        fat_g=fat,
        carbs_g=max(0, carbs),
    )
