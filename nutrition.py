# nutrition.py
"""
Hypermetabolic burn nutrition.
Formula choice is an explicit age switch: Curreri (adult), Curreri
(pediatric) or Galveston (infant, BSA based).
"""
import logging

from constants import NUTRITION_CONSTANTS as NC
from models import FeedingRoute, Micronutrients, NutritionPlan
from validation import ensure_valid_result, validate_age, validate_tbsa, validate_weight

logger = logging.getLogger("burnflow.nutrition")

RECOMMENDATIONS = (
    "Start enteral nutrition within 6 hours if possible",
    "Use high-protein, high-calorie formula",
    "Glutamine supplementation beneficial",
    "Monitor glucose closely - hyperglycemia common",
    "Weekly indirect calorimetry if available",
    "Vitamin C promotes wound healing",
    "Zinc deficiency impairs healing - supplement",
)

class NutritionCalculator:

    @staticmethod
    def estimate_infant_bsa(weight_kg: float) -> float:
        """Weight-only BSA approximation (m²) for the Galveston formula."""
        return NC.INFANT_BSA_COEFFICIENT * (weight_kg ** NC.INFANT_BSA_EXPONENT)

    @staticmethod
    def _calories(weight_kg: float, tbsa_percent: float, age_years: float):
        if age_years >= NC.ADULT_AGE_YEARS:
            calories = NC.ADULT_KCAL_PER_KG * weight_kg + NC.ADULT_KCAL_PER_PCT * tbsa_percent
            return calories, "Curreri Formula (Adult)"
        if age_years >= NC.PEDIATRIC_AGE_YEARS:
            calories = NC.PEDIATRIC_KCAL_PER_KG * weight_kg + NC.PEDIATRIC_KCAL_PER_PCT * tbsa_percent
            return calories, "Curreri Formula (Pediatric)"

        bsa = NutritionCalculator.estimate_infant_bsa(weight_kg)
        calories = NC.INFANT_KCAL_PER_M2 * bsa + NC.INFANT_KCAL_PER_M2_BURNED * bsa * (tbsa_percent / 100.0)
        return calories, "Galveston Formula (Infant)"

    @staticmethod
    def feeding_route(tbsa_percent: float) -> FeedingRoute:
        if tbsa_percent > NC.PARENTERAL_TBSA_CUTOFF:
            return FeedingRoute.PARENTERAL
        if tbsa_percent > NC.ENTERAL_TBSA_CUTOFF:
            return FeedingRoute.ENTERAL
        return FeedingRoute.ORAL

    @staticmethod
    def calculate(weight_kg: float, tbsa_percent: float, age_years: float) -> NutritionPlan:
        weight_kg = validate_weight(weight_kg)
        tbsa_percent = validate_tbsa(tbsa_percent)
        age_years = validate_age(age_years)

        calories, formula = NutritionCalculator._calories(weight_kg, tbsa_percent, age_years)

        # 1.5-2 g/kg; the upper end once the burn passes 20%
        if tbsa_percent > NC.PROTEIN_TBSA_CUTOFF:
            protein = weight_kg * NC.PROTEIN_HIGH_G_KG
        else:
            protein = weight_kg * NC.PROTEIN_STANDARD_G_KG

        # Non-protein calories split between carbohydrate and fat
        non_protein = max(calories - protein * NC.KCAL_PER_G_PROTEIN, 0.0)
        carbohydrate = non_protein * NC.CARB_FRACTION / NC.KCAL_PER_G_CARB
        fat = non_protein * NC.FAT_FRACTION / NC.KCAL_PER_G_FAT

        for name, value in (("calories", calories), ("protein", protein),
                            ("carbohydrate", carbohydrate), ("fat", fat)):
            ensure_valid_result(name, value)

        route = NutritionCalculator.feeding_route(tbsa_percent)
        logger.debug("%s: %.0f kcal, %.0f g protein, route=%s", formula, calories, protein, route.value)

        return NutritionPlan(
            calories_per_day=int(round(calories)),
            protein_g_per_day=int(round(protein)),
            carbohydrate_g_per_day=int(round(carbohydrate)),
            fat_g_per_day=int(round(fat)),
            formula=formula,
            micronutrients=Micronutrients(
                vitamin_c_mg=NC.VITAMIN_C_MG,
                vitamin_a_iu=NC.VITAMIN_A_IU,
                zinc_mg=NC.ZINC_MG,
                selenium_mcg=NC.SELENIUM_MCG,
            ),
            feeding_route=route,
            recommendations=RECOMMENDATIONS,
        )
