# --- METADATA & COMPLIANCE ---
__version__ = "1.0.0"
__model_date__ = "2026-10-19"
__validation_status__ = "Clinical validation pending"
__aba_referral_criteria = "ABA Burn Center Referral Criteria"

MEDICAL_DISCLAIMER = """
⚠️ DECISION SUPPORT TOOL - NOT A PRESCRIPTION
• Final responsibility: Treating physician
• Not a substitute for clinical judgment
• Volumes are starting points; titrate to urine output
"""

"""
BurnFlow: Assessment Report
===========================
Runs every calculator over one validated burn assessment. Each calculator
stays independently callable; this module only wires them together and
holds no state between calls.
"""

import logging
from typing import List

from pydantic import ValidationError

from constants import VERSION, BurnDepth
from models import BodyRegionEntry, BurnCalculationError, BurnReport, InvalidInputError
from nutrition import NutritionCalculator
from protocols import WoundCareProtocolGenerator
from resuscitation import FluidResuscitationCalculator
from schemas import BurnAssessmentRequest
from scoring import SeverityScorer
from surface_area import TBSAEstimator
from triage import ReferralTriageEngine

logger = logging.getLogger("burnflow.app")

def deepest_depth(entries: List[BodyRegionEntry]) -> BurnDepth:
    """Deepest depth among burnt regions; the wound plan is driven by the worst tissue."""
    order = list(BurnDepth)
    burnt = [entry.depth for entry in entries if entry.percent > 0] or [entry.depth for entry in entries]
    return max(burnt, key=order.index)

def _default_locations(entries: List[BodyRegionEntry]) -> List[str]:
    return [entry.region_key.replace("_", " ") for entry in entries if entry.percent > 0]

def generate_burn_report(data: dict) -> BurnReport:
    try:
        request = BurnAssessmentRequest.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Burn assessment rejected: {e.error_count()} invalid field(s)")
        raise InvalidInputError(f"Invalid burn assessment: {e}") from e

    logger.info(f"Processing burn assessment for Age: {request.age_years}y, Wt: {request.weight_kg}kg")

    try:
        entries = [BodyRegionEntry(r.region, r.percent, r.depth) for r in request.regions]

        # 1. Extent
        tbsa = TBSAEstimator.estimate(
            request.tbsa_method, entries,
            age_years=request.age_years,
            is_child=request.is_child,
            is_infant=request.is_infant,
        )
        depth = deepest_depth(entries)
        locations = request.locations or _default_locations(entries)

        # 2. Resuscitation
        fluid_plan = FluidResuscitationCalculator.calculate(
            request.fluid_formula, request.weight_kg, tbsa.total_percent, request.hours_since_burn
        )

        # 3. Prognosis
        absi = SeverityScorer.calculate_absi(
            request.age_years, tbsa.total_percent, request.inhalation_injury,
            tbsa.has_full_thickness, request.gender,
        )
        revised_baux = SeverityScorer.calculate_revised_baux(
            request.age_years, tbsa.total_percent, request.inhalation_injury
        )

        # 4. Nutrition & wound care
        nutrition = NutritionCalculator.calculate(request.weight_kg, tbsa.total_percent, request.age_years)
        wound_care = WoundCareProtocolGenerator.generate(
            depth, tbsa.total_percent, ", ".join(locations), request.days_since_injury
        )
        healing = WoundCareProtocolGenerator.estimate_healing_time(depth)

        # 5. Triage
        referral = ReferralTriageEngine.assess(
            tbsa.total_percent, depth, locations, request.age_years,
            inhalation_injury=request.inhalation_injury,
            electrical_burn=request.electrical_burn,
            chemical_burn=request.chemical_burn,
            has_comorbidities=request.has_comorbidities,
            circumferential_burn=request.circumferential_burn,
            deep_tbsa_percent=tbsa.deep_tbsa_percent,
            full_thickness_percent=tbsa.full_thickness_percent,
        )
        severity = ReferralTriageEngine.classify_severity(
            tbsa.total_percent, tbsa.has_full_thickness, request.inhalation_injury, request.age_years,
            full_thickness_percent=tbsa.full_thickness_percent,
        )
        disposition = ReferralTriageEngine.recommend_disposition(severity, referral.required)

    except BurnCalculationError as e:
        logger.warning(f"Clinical Validation Error: {str(e)}")
        raise

    logger.info(
        f"TBSA {tbsa.total_percent}% -> {fluid_plan.formula.value} {fluid_plan.total_volume_24h_ml} mL/24h, "
        f"ABSI {absi.score}, disposition {disposition.value}"
    )

    return BurnReport(
        tbsa=tbsa,
        fluid_plan=fluid_plan,
        absi=absi,
        revised_baux=revised_baux,
        nutrition=nutrition,
        wound_care=wound_care,
        healing=healing,
        referral=referral,
        severity=severity,
        disposition=disposition,
        model_version=VERSION,
    )
