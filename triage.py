# triage.py
"""
Burn-centre referral triage (ABA/ISBI style criteria), severity grading
and disposition.

Every referral rule is independent and always evaluated; a single
triggered rule is enough to refer.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from constants import TRIAGE_CONSTANTS as TC
from constants import BurnDepth
from models import BurnSeverity, Disposition, InvalidInputError, ReferralDecision
from validation import validate_age, validate_tbsa

logger = logging.getLogger("burnflow.triage")

@dataclass(frozen=True)
class ReferralFactors:
    tbsa_percent: float
    depth: BurnDepth
    locations: Tuple[str, ...]
    age_years: float
    deep_tbsa_percent: float
    full_thickness_percent: float
    inhalation_injury: bool = False
    electrical_burn: bool = False
    chemical_burn: bool = False
    has_comorbidities: bool = False
    circumferential_burn: bool = False

def _tbsa_with_deep_burns(f: ReferralFactors) -> List[str]:
    if f.deep_tbsa_percent > TC.REFERRAL_TBSA and f.depth != BurnDepth.SUPERFICIAL:
        return [f">10% TBSA with partial/full thickness burns ({f.deep_tbsa_percent:g}%)"]
    return []

def _pediatric(f: ReferralFactors) -> List[str]:
    if f.age_years < TC.PEDIATRIC_AGE and f.tbsa_percent > TC.REFERRAL_TBSA:
        return ["Pediatric patient with >10% TBSA"]
    return []

def _elderly(f: ReferralFactors) -> List[str]:
    if f.age_years > TC.ELDERLY_AGE and f.tbsa_percent > TC.REFERRAL_TBSA:
        return ["Patient >50 years with >10% TBSA"]
    return []

def _full_thickness(f: ReferralFactors) -> List[str]:
    if f.depth == BurnDepth.FULL_THICKNESS and f.full_thickness_percent > TC.FULL_THICKNESS_TBSA:
        return ["Full thickness burns >5% TBSA"]
    return []

def _critical_locations(f: ReferralFactors) -> List[str]:
    # One reason per affected location
    return [
        f"Burns to {location} - functional/cosmetic area"
        for location in f.locations
        if any(keyword in location.lower() for keyword in TC.CRITICAL_LOCATIONS)
    ]

def _sub_area(name: str, value: Optional[float], tbsa_percent: float) -> float:
    if value is None:
        return tbsa_percent
    value = validate_tbsa(value)
    # Summed depth buckets carry float noise
    if value > tbsa_percent + 1e-6:
        raise InvalidInputError(f"{name} ({value:g}%) exceeds the total burn ({tbsa_percent:g}%)")
    return value

def _flag(attribute: str, reason: str) -> Callable[[ReferralFactors], List[str]]:
    def rule(f: ReferralFactors) -> List[str]:
        return [reason] if getattr(f, attribute) else []
    rule.__name__ = f"_{attribute}"
    return rule

REFERRAL_RULES: Sequence[Callable[[ReferralFactors], List[str]]] = (
    _tbsa_with_deep_burns,
    _pediatric,
    _elderly,
    _full_thickness,
    _critical_locations,
    _flag("inhalation_injury", "Inhalation injury suspected"),
    _flag("electrical_burn", "Electrical burn - cardiac monitoring and fasciotomy may be needed"),
    _flag("chemical_burn", "Chemical burn - specialized decontamination needed"),
    _flag("circumferential_burn", "Circumferential burn (limb/chest) - escharotomy may be needed"),
    _flag("has_comorbidities", "Significant comorbidities that could affect healing"),
)

class ReferralTriageEngine:

    @staticmethod
    def assess(tbsa_percent: float, depth: BurnDepth, locations: Sequence[str], age_years: float,
               inhalation_injury: bool = False, electrical_burn: bool = False,
               chemical_burn: bool = False, has_comorbidities: bool = False,
               circumferential_burn: bool = False,
               deep_tbsa_percent: Optional[float] = None,
               full_thickness_percent: Optional[float] = None) -> ReferralDecision:
        """
        tbsa_percent is the whole burn. deep_tbsa_percent (partial + full
        thickness) and full_thickness_percent narrow the depth rules when a
        depth breakdown is known; without one, the whole area is taken to be
        of the given depth.
        """
        try:
            depth = BurnDepth(depth)
        except ValueError:
            raise InvalidInputError(f"Unknown burn depth: {depth!r}") from None
        if isinstance(locations, str):
            locations = [locations]
        if any(not isinstance(location, str) for location in locations or ()):
            raise InvalidInputError("Locations must be text")

        tbsa_percent = validate_tbsa(tbsa_percent)
        factors = ReferralFactors(
            tbsa_percent=tbsa_percent,
            depth=depth,
            locations=tuple(locations or ()),
            age_years=validate_age(age_years),
            deep_tbsa_percent=_sub_area("deep_tbsa_percent", deep_tbsa_percent, tbsa_percent),
            full_thickness_percent=_sub_area("full_thickness_percent", full_thickness_percent, tbsa_percent),
            inhalation_injury=bool(inhalation_injury),
            electrical_burn=bool(electrical_burn),
            chemical_burn=bool(chemical_burn),
            has_comorbidities=bool(has_comorbidities),
            circumferential_burn=bool(circumferential_burn),
        )

        reasons: List[str] = []
        for rule in REFERRAL_RULES:
            reasons.extend(rule(factors))

        decision = ReferralDecision(reasons=tuple(reasons))
        logger.debug("Referral required=%s (%d reasons)", decision.required, len(reasons))
        return decision

    @staticmethod
    def classify_severity(tbsa_percent: float, has_full_thickness: bool,
                          inhalation_injury: bool, age_years: float,
                          full_thickness_percent: Optional[float] = None) -> BurnSeverity:
        """Full thickness thresholds apply to full_thickness_percent when given, else to the whole area."""
        tbsa_percent = validate_tbsa(tbsa_percent)
        age_years = validate_age(age_years)
        full_thickness = _sub_area("full_thickness_percent", full_thickness_percent, tbsa_percent)

        if tbsa_percent > 40 or (inhalation_injury and tbsa_percent > 20):
            return BurnSeverity.CRITICAL
        if (tbsa_percent > 20
                or (has_full_thickness and full_thickness > 10)
                or inhalation_injury
                or age_years < TC.PEDIATRIC_AGE
                or age_years > TC.ELDERLY_AGE):
            return BurnSeverity.MAJOR
        if tbsa_percent > 10 or (has_full_thickness and full_thickness > 2):
            return BurnSeverity.MODERATE
        return BurnSeverity.MINOR

    @staticmethod
    def recommend_disposition(severity: BurnSeverity, referral_required: bool) -> Disposition:
        if referral_required:
            return Disposition.BURN_CENTER
        return {
            BurnSeverity.CRITICAL: Disposition.ICU,
            BurnSeverity.MAJOR: Disposition.HDU,
            BurnSeverity.MODERATE: Disposition.WARD,
            BurnSeverity.MINOR: Disposition.OUTPATIENT,
        }[BurnSeverity(severity)]
