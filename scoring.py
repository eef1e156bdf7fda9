"""
BurnFlow: Prognostic Scoring
============================
ABSI (Abbreviated Burn Severity Index) and the Baux family of scores.
Each ABSI factor is one independent rule; the composite is a plain sum.
"""

import logging
from typing import Callable, Tuple

from constants import ABSI_CONSTANTS, BAUX_CONSTANTS
from models import (
    AbsiComponents,
    BauxScore,
    Gender,
    InvalidInputError,
    RiskCategory,
    SeverityScore,
)
from validation import validate_age, validate_tbsa

logger = logging.getLogger("burnflow.scoring")

def _age_points(age_years: float) -> int:
    for upper, points in ABSI_CONSTANTS.AGE_BANDS:
        if age_years <= upper:
            return points
    return ABSI_CONSTANTS.AGE_POINTS_ABOVE

def _tbsa_points(tbsa_percent: float) -> int:
    # 0-10% -> 1, 10.1-20% -> 2, ... >90% -> 10
    for points in range(1, ABSI_CONSTANTS.TBSA_MAX_POINTS):
        if tbsa_percent <= points * ABSI_CONSTANTS.TBSA_BAND_WIDTH:
            return points
    return ABSI_CONSTANTS.TBSA_MAX_POINTS

def outcome_for(score: int) -> Tuple[str, RiskCategory]:
    """Composite -> (survival probability, risk category). Defined for every integer."""
    for max_score, survival, category in ABSI_CONSTANTS.OUTCOME_BREAKPOINTS:
        if score <= max_score:
            return survival, RiskCategory(category)
    survival, category = ABSI_CONSTANTS.OUTCOME_ABOVE
    return survival, RiskCategory(category)

def _baux_band(score: float) -> str:
    for upper, band in BAUX_CONSTANTS.MORTALITY_BANDS:
        if score < upper:
            return band
    return BAUX_CONSTANTS.MORTALITY_ABOVE

class SeverityScorer:

    # (component name, rule). Order matches AbsiComponents.
    ABSI_RULES: Tuple[Tuple[str, Callable], ...] = (
        ("age", lambda age, tbsa, inhalation, full_thickness, gender: _age_points(age)),
        ("tbsa", lambda age, tbsa, inhalation, full_thickness, gender: _tbsa_points(tbsa)),
        ("inhalation", lambda age, tbsa, inhalation, full_thickness, gender: 1 if inhalation else 0),
        ("full_thickness", lambda age, tbsa, inhalation, full_thickness, gender: 1 if full_thickness else 0),
        # Historical epidemiological weighting carried by the published index
        ("gender", lambda age, tbsa, inhalation, full_thickness, gender: 1 if gender == Gender.FEMALE else 0),
    )

    @staticmethod
    def calculate_absi(age_years: float, tbsa_percent: float, inhalation_injury: bool,
                       has_full_thickness: bool, gender: Gender) -> SeverityScore:
        age_years = validate_age(age_years)
        tbsa_percent = validate_tbsa(tbsa_percent)
        try:
            gender = Gender(gender)
        except ValueError:
            raise InvalidInputError(f"Gender must be 'male' or 'female', got {gender!r}") from None

        points = {
            name: rule(age_years, tbsa_percent, bool(inhalation_injury), bool(has_full_thickness), gender)
            for name, rule in SeverityScorer.ABSI_RULES
        }
        components = AbsiComponents(**points)
        score = components.total
        survival, category = outcome_for(score)

        logger.debug("ABSI %d (%s) -> %s", score, points, category.value)
        return SeverityScore(
            score=score,
            survival_probability=survival,
            risk_category=category,
            components=components,
        )

    @staticmethod
    def calculate_baux(age_years: float, tbsa_percent: float) -> BauxScore:
        """Classic Baux: age + %TBSA."""
        age_years = validate_age(age_years)
        tbsa_percent = validate_tbsa(tbsa_percent)
        score = age_years + tbsa_percent
        return BauxScore(age=age_years, tbsa=tbsa_percent, score=score, mortality_risk=_baux_band(score))

    @staticmethod
    def calculate_revised_baux(age_years: float, tbsa_percent: float, inhalation_injury: bool) -> BauxScore:
        """Revised Baux: age + %TBSA + 17 for inhalation injury."""
        age_years = validate_age(age_years)
        tbsa_percent = validate_tbsa(tbsa_percent)
        inhalation_injury = bool(inhalation_injury)
        score = age_years + tbsa_percent + (BAUX_CONSTANTS.INHALATION_POINTS if inhalation_injury else 0)
        return BauxScore(
            age=age_years,
            tbsa=tbsa_percent,
            score=score,
            mortality_risk=_baux_band(score),
            inhalation_injury=inhalation_injury,
        )
