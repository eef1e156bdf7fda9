from enum import Enum
from types import MappingProxyType
VERSION = "1.0.0"

class BurnDepth(Enum):
    SUPERFICIAL = "superficial"                   # Epidermis only
    SUPERFICIAL_PARTIAL = "superficial_partial"   # Papillary dermis, blisters
    DEEP_PARTIAL = "deep_partial"                 # Reticular dermis
    FULL_THICKNESS = "full_thickness"             # Through dermis, eschar

class AgeBracket(Enum):
    """Lund-Browder chart columns."""
    INFANT = "0"
    AGE_1 = "1"
    AGE_5 = "5"
    AGE_10 = "10"
    AGE_15 = "15"
    ADULT = "adult"

class AgeClass(Enum):
    """Rule of Nines columns."""
    ADULT = "adult"
    CHILD = "child"
    INFANT = "infant"

class BodyRegion(Enum):
    HEAD = "head"
    NECK = "neck"
    ANTERIOR_TRUNK = "anterior_trunk"
    POSTERIOR_TRUNK = "posterior_trunk"
    RIGHT_BUTTOCK = "right_buttock"
    LEFT_BUTTOCK = "left_buttock"
    GENITALIA = "genitalia"
    RIGHT_UPPER_ARM = "right_upper_arm"
    LEFT_UPPER_ARM = "left_upper_arm"
    RIGHT_LOWER_ARM = "right_lower_arm"
    LEFT_LOWER_ARM = "left_lower_arm"
    RIGHT_HAND = "right_hand"
    LEFT_HAND = "left_hand"
    RIGHT_THIGH = "right_thigh"
    LEFT_THIGH = "left_thigh"
    RIGHT_LEG = "right_leg"
    LEFT_LEG = "left_leg"
    RIGHT_FOOT = "right_foot"
    LEFT_FOOT = "left_foot"

class NinesRegion(Enum):
    HEAD = "head"                        # Head & Neck
    ANTERIOR_TRUNK = "anterior_trunk"
    POSTERIOR_TRUNK = "posterior_trunk"
    RIGHT_ARM = "right_arm"
    LEFT_ARM = "left_arm"
    RIGHT_LEG = "right_leg"
    LEFT_LEG = "left_leg"
    GENITALIA = "genitalia"              # Genitalia/Perineum

def _freeze(table: dict) -> MappingProxyType:
    return MappingProxyType({key: MappingProxyType(dict(row)) for key, row in table.items()})

def _bracket_row(infant, age_1, age_5, age_10, age_15, adult) -> dict:
    return {
        AgeBracket.INFANT: infant,
        AgeBracket.AGE_1: age_1,
        AgeBracket.AGE_5: age_5,
        AgeBracket.AGE_10: age_10,
        AgeBracket.AGE_15: age_15,
        AgeBracket.ADULT: adult,
    }

class AGE_CONSTANTS:
    # Upper bound (exclusive, years) -> Lund-Browder column
    BRACKET_CUTOFFS = (
        (1.0, AgeBracket.INFANT),
        (5.0, AgeBracket.AGE_1),
        (10.0, AgeBracket.AGE_5),
        (15.0, AgeBracket.AGE_10),
        (18.0, AgeBracket.AGE_15),
    )
    MIN_AGE_YEARS = 0.0
    MAX_AGE_YEARS = 120.0

    @staticmethod
    def bracket_for(age_years: float) -> AgeBracket:
        for upper, bracket in AGE_CONSTANTS.BRACKET_CUTOFFS:
            if age_years < upper:
                return bracket
        return AgeBracket.ADULT

class LUND_BROWDER:
    """
    Percentage of total body surface per region, by age column.
    Head shrinks and thighs/legs grow with age; every column sums to 100.
    """
    TABLE = _freeze({
        BodyRegion.HEAD:            _bracket_row(19, 17, 13, 11, 9, 7),
        BodyRegion.NECK:            _bracket_row(2, 2, 2, 2, 2, 2),
        BodyRegion.ANTERIOR_TRUNK:  _bracket_row(13, 13, 13, 13, 13, 13),
        BodyRegion.POSTERIOR_TRUNK: _bracket_row(13, 13, 13, 13, 13, 13),
        BodyRegion.RIGHT_BUTTOCK:   _bracket_row(2.5, 2.5, 2.5, 2.5, 2.5, 2.5),
        BodyRegion.LEFT_BUTTOCK:    _bracket_row(2.5, 2.5, 2.5, 2.5, 2.5, 2.5),
        BodyRegion.GENITALIA:       _bracket_row(1, 1, 1, 1, 1, 1),
        BodyRegion.RIGHT_UPPER_ARM: _bracket_row(4, 4, 4, 4, 4, 4),
        BodyRegion.LEFT_UPPER_ARM:  _bracket_row(4, 4, 4, 4, 4, 4),
        BodyRegion.RIGHT_LOWER_ARM: _bracket_row(3, 3, 3, 3, 3, 3),
        BodyRegion.LEFT_LOWER_ARM:  _bracket_row(3, 3, 3, 3, 3, 3),
        BodyRegion.RIGHT_HAND:      _bracket_row(2.5, 2.5, 2.5, 2.5, 2.5, 2.5),
        BodyRegion.LEFT_HAND:       _bracket_row(2.5, 2.5, 2.5, 2.5, 2.5, 2.5),
        BodyRegion.RIGHT_THIGH:     _bracket_row(5.5, 6.5, 8, 8.5, 9, 9.5),
        BodyRegion.LEFT_THIGH:      _bracket_row(5.5, 6.5, 8, 8.5, 9, 9.5),
        BodyRegion.RIGHT_LEG:       _bracket_row(5, 5, 5.5, 6, 6.5, 7),
        BodyRegion.LEFT_LEG:        _bracket_row(5, 5, 5.5, 6, 6.5, 7),
        BodyRegion.RIGHT_FOOT:      _bracket_row(3.5, 3.5, 3.5, 3.5, 3.5, 3.5),
        BodyRegion.LEFT_FOOT:       _bracket_row(3.5, 3.5, 3.5, 3.5, 3.5, 3.5),
    })

    @staticmethod
    def get(region: BodyRegion, bracket: AgeBracket) -> float:
        return LUND_BROWDER.TABLE[region][bracket]

class RULE_OF_NINES:
    """
    Quick estimation table. Pediatric legs are 13.5% each so that the
    child and infant columns close at 100 alongside the 1% perineum.
    """
    TABLE = _freeze({
        NinesRegion.HEAD:            {AgeClass.ADULT: 9,  AgeClass.CHILD: 18,   AgeClass.INFANT: 18},
        NinesRegion.ANTERIOR_TRUNK:  {AgeClass.ADULT: 18, AgeClass.CHILD: 18,   AgeClass.INFANT: 18},
        NinesRegion.POSTERIOR_TRUNK: {AgeClass.ADULT: 18, AgeClass.CHILD: 18,   AgeClass.INFANT: 18},
        NinesRegion.RIGHT_ARM:       {AgeClass.ADULT: 9,  AgeClass.CHILD: 9,    AgeClass.INFANT: 9},
        NinesRegion.LEFT_ARM:        {AgeClass.ADULT: 9,  AgeClass.CHILD: 9,    AgeClass.INFANT: 9},
        NinesRegion.RIGHT_LEG:       {AgeClass.ADULT: 18, AgeClass.CHILD: 13.5, AgeClass.INFANT: 13.5},
        NinesRegion.LEFT_LEG:        {AgeClass.ADULT: 18, AgeClass.CHILD: 13.5, AgeClass.INFANT: 13.5},
        NinesRegion.GENITALIA:       {AgeClass.ADULT: 1,  AgeClass.CHILD: 1,    AgeClass.INFANT: 1},
    })

    PALM_PERCENT = 1.0  # Patient's palm incl. fingers ~1% TBSA

    @staticmethod
    def get(region: NinesRegion, age_class: AgeClass) -> float:
        return RULE_OF_NINES.TABLE[region][age_class]

class FLUID_CONSTANTS:
    PARKLAND_ML_KG_PCT = 4.0
    BROOKE_ML_KG_PCT = 2.0
    FIRST_WINDOW_HOURS = 8.0
    SECOND_WINDOW_HOURS = 16.0
    RESUSCITATION_HOURS = 24.0
    # Less than this left of the first window makes the compressed rate impractical
    SHORT_WINDOW_HOURS = 1.0

    # Muir-Barclay colloid periods (hours) over 36h
    MUIR_BARCLAY_PERIODS = (4, 4, 4, 6, 6, 12)
    MUIR_BARCLAY_REPORTED_PERIODS = 4

    # Urine output targets (mL/kg/hr)
    ADULT_WEIGHT_CUTOFF_KG = 30.0
    URINE_TARGET_ADULT = 0.5
    URINE_TARGET_CHILD = 1.0

    # Titration
    UPTITRATE_FACTOR = 1.25
    DOWNTITRATE_FACTOR = 0.9
    OVERSHOOT_MULTIPLIER = 1.5

    MIN_WEIGHT_KG = 0.0
    MAX_WEIGHT_KG = 500.0

class ABSI_CONSTANTS:
    # (upper bound inclusive, points)
    AGE_BANDS = ((20, 1), (40, 2), (60, 3), (80, 4))
    AGE_POINTS_ABOVE = 5
    TBSA_BAND_WIDTH = 10
    TBSA_MAX_POINTS = 10

    # (max composite inclusive, survival, category value)
    OUTCOME_BREAKPOINTS = (
        (2, ">99%", "very_low"),
        (3, "98%", "very_low"),
        (4, "90%", "low"),
        (5, "80%", "moderate"),
        (6, "60%", "moderate"),
        (7, "40%", "high"),
        (8, "20%", "high"),
        (9, "10%", "very_high"),
    )
    OUTCOME_ABOVE = ("<5%", "severe")

class BAUX_CONSTANTS:
    INHALATION_POINTS = 17
    # (exclusive upper bound, mortality band)
    MORTALITY_BANDS = (
        (50, "Low (<10%)"),
        (75, "Moderate (10-30%)"),
        (100, "High (30-60%)"),
        (125, "Very High (60-90%)"),
    )
    MORTALITY_ABOVE = "Extremely High (>90%)"

class NUTRITION_CONSTANTS:
    ADULT_AGE_YEARS = 18.0
    PEDIATRIC_AGE_YEARS = 4.0

    ADULT_KCAL_PER_KG = 25
    ADULT_KCAL_PER_PCT = 40
    PEDIATRIC_KCAL_PER_KG = 60
    PEDIATRIC_KCAL_PER_PCT = 35
    INFANT_KCAL_PER_M2 = 2100
    INFANT_KCAL_PER_M2_BURNED = 1000
    INFANT_BSA_COEFFICIENT = 0.1
    INFANT_BSA_EXPONENT = 0.67

    PROTEIN_TBSA_CUTOFF = 20
    PROTEIN_HIGH_G_KG = 2.0
    PROTEIN_STANDARD_G_KG = 1.5
    KCAL_PER_G_PROTEIN = 4
    KCAL_PER_G_CARB = 4
    KCAL_PER_G_FAT = 9
    CARB_FRACTION = 0.55
    FAT_FRACTION = 0.45

    ENTERAL_TBSA_CUTOFF = 40
    PARENTERAL_TBSA_CUTOFF = 70

    # Daily supplementation
    VITAMIN_C_MG = 1000
    VITAMIN_A_IU = 10000
    ZINC_MG = 220
    SELENIUM_MCG = 100

class WOUND_CONSTANTS:
    CLEANSING_SOLUTION = "Sterile saline or chlorhexidine 0.05%"
    DELAYED_GRAFTING_DAYS = 14
    LARGE_BURN_GRAFT_TBSA = 40

class TRIAGE_CONSTANTS:
    REFERRAL_TBSA = 10
    FULL_THICKNESS_TBSA = 5
    PEDIATRIC_AGE = 10
    ELDERLY_AGE = 50
    CRITICAL_LOCATIONS = ("face", "hand", "feet", "foot", "genital", "perineum", "joint")
