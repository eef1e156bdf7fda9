# protocols.py
import logging
from typing import Dict, List, Optional

from constants import WOUND_CONSTANTS, BurnDepth
from models import (
    GraftingPlan,
    HealingEstimate,
    InvalidInputError,
    WoundCareProtocol,
)
from validation import validate_non_negative, validate_tbsa

logger = logging.getLogger("burnflow.protocols")

def _superficial(tbsa_percent: float) -> dict:
    return dict(
        dressing_type="Paraffin gauze or hydrogel",
        frequency="Every 3-5 days",
        topical_agent="Aloe vera or moisturizer",
        pain_management=["Paracetamol", "Topical anaesthetic spray"],
        special_instructions=[],
    )

def _superficial_partial(tbsa_percent: float) -> dict:
    return dict(
        dressing_type="Silver foam dressing (Mepilex Ag) or Biobrane",
        frequency="Every 2-3 days",
        topical_agent="Silver sulfadiazine 1% or Acticoat",
        pain_management=["Paracetamol", "NSAIDs", "Tramadol PRN"],
        special_instructions=[
            "Debride loose blisters",
            "Leave intact blisters if <2cm",
            "Monitor for infection daily",
        ],
    )

def _deep_partial(tbsa_percent: float) -> dict:
    return dict(
        dressing_type="Silver-impregnated dressing (Acticoat, Aquacel Ag)",
        frequency="Every 1-3 days depending on exudate",
        topical_agent="Mafenide acetate for eschar penetration",
        pain_management=["Morphine", "Ketamine for dressing changes", "Gabapentin"],
        debridement_method="Enzymatic (Collagenase) or surgical",
        grafting=GraftingPlan(
            indicated=True,
            timing="After demarcation (7-14 days)",
            graft_type="Split-thickness skin graft",
        ),
        special_instructions=[
            "Serial examination to assess conversion to full thickness",
            "Consider early excision if conversion suspected",
            "Prepare for grafting",
        ],
    )

def _full_thickness(tbsa_percent: float) -> dict:
    # Large burns outrun donor sites
    if tbsa_percent > WOUND_CONSTANTS.LARGE_BURN_GRAFT_TBSA:
        graft_type = "Consider cultured skin, Integra, or allograft"
    else:
        graft_type = "Split-thickness autograft"
    return dict(
        dressing_type="Antimicrobial dressing with absorptive layer",
        frequency="Daily initially, then based on wound status",
        topical_agent="Mafenide acetate (penetrates eschar) or nystatin for fungal prevention",
        pain_management=["Opioids", "Ketamine", "Regional anesthesia for dressing changes"],
        debridement_method="Early surgical excision recommended",
        grafting=GraftingPlan(
            indicated=True,
            timing="Early excision within 3-5 days",
            graft_type=graft_type,
        ),
        special_instructions=[
            "Early surgical excision and grafting improves outcomes",
            "Watch for eschar constriction in circumferential burns",
            "Escharotomy may be needed",
        ],
    )

BASE_PROTOCOLS = {
    BurnDepth.SUPERFICIAL: _superficial,
    BurnDepth.SUPERFICIAL_PARTIAL: _superficial_partial,
    BurnDepth.DEEP_PARTIAL: _deep_partial,
    BurnDepth.FULL_THICKNESS: _full_thickness,
}

# (keywords, instructions). Any keyword match appends the block once.
LOCATION_ADDENDA = (
    (("face",), (
        "Ophthalmology consult for periorbital burns",
        "Use open technique or specialized facial dressings",
        "Frequent lubrication of eyes",
    )),
    (("hand",), (
        "Early hand therapy referral",
        "Splint in position of safety (intrinsic plus)",
        "Aggressive early mobilization when possible",
    )),
    (("perineum", "genital"), (
        "Foley catheter for major burns",
        "Careful positioning",
        "Frequent cleansing",
    )),
)

HEALING_TIMES: Dict[BurnDepth, HealingEstimate] = {
    BurnDepth.SUPERFICIAL: HealingEstimate(5, 10, "Should heal without scarring"),
    BurnDepth.SUPERFICIAL_PARTIAL: HealingEstimate(10, 21, "Usually heals without grafting; minimal scarring"),
    BurnDepth.DEEP_PARTIAL: HealingEstimate(21, 35, "May require grafting; significant scarring likely"),
    BurnDepth.FULL_THICKNESS: HealingEstimate(
        28, 90, "Requires surgical excision and grafting; scarring and contracture expected"
    ),
}

# A new depth without a protocol must fail at import, not on a patient
_missing = set(BurnDepth) - set(BASE_PROTOCOLS) | set(BurnDepth) - set(HEALING_TIMES)
if _missing:
    raise RuntimeError(f"Wound protocols missing for depths: {sorted(d.value for d in _missing)}")

def _coerce_depth(depth) -> BurnDepth:
    try:
        return BurnDepth(depth)
    except ValueError:
        raise InvalidInputError(f"Unknown burn depth: {depth!r}") from None

class WoundCareProtocolGenerator:
    """
    Stage 1: base protocol by depth.
    Stage 2: location addenda (face / hand / perineum).
    Stage 3: elapsed-time addendum for delayed grafting.
    """

    @staticmethod
    def location_instructions(location: str) -> List[str]:
        location_lower = location.lower()
        instructions: List[str] = []
        for keywords, block in LOCATION_ADDENDA:
            if any(keyword in location_lower for keyword in keywords):
                instructions.extend(block)
        return instructions

    @staticmethod
    def generate(depth: BurnDepth, tbsa_percent: float, location: Optional[str],
                 days_since_injury: float) -> WoundCareProtocol:
        depth = _coerce_depth(depth)
        tbsa_percent = validate_tbsa(tbsa_percent)
        days = validate_non_negative("days_since_injury", days_since_injury)
        if location is None:
            location = ""
        if not isinstance(location, str):
            raise InvalidInputError(f"Location must be text, got {type(location)}")

        base = BASE_PROTOCOLS[depth](tbsa_percent)
        instructions = list(base.pop("special_instructions"))
        pain = tuple(base.pop("pain_management"))

        instructions.extend(WoundCareProtocolGenerator.location_instructions(location))

        grafting = base.get("grafting")
        if grafting is not None and grafting.indicated and days > WOUND_CONSTANTS.DELAYED_GRAFTING_DAYS:
            instructions.append("Wound bed preparation for delayed grafting")

        logger.debug("Wound protocol: %s, %d instructions", depth.value, len(instructions))
        return WoundCareProtocol(
            cleansing_solution=WOUND_CONSTANTS.CLEANSING_SOLUTION,
            special_instructions=tuple(instructions),
            pain_management=pain,
            **base,
        )

    @staticmethod
    def estimate_healing_time(depth: BurnDepth) -> HealingEstimate:
        return HEALING_TIMES[_coerce_depth(depth)]
