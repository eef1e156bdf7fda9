"""
BurnFlow: Data Dictionary
=========================
Inputs (the burn map the clinician enters) and Outputs (the plans the
calculators return).

NO LOGIC is implemented here beyond input self-validation. Every result
object is frozen: sequences are tuples and maps are read-only proxies,
so a result cannot change after a calculator hands it back.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from constants import BurnDepth, BodyRegion, NinesRegion

# --- 1. ERRORS ---

class BurnCalculationError(ValueError):
    """Base for every error the engine raises. Always recoverable by the caller."""
    pass

class InvalidInputError(BurnCalculationError):
    """Raised when a value is out of range or refers to an unknown region."""
    pass

class DataTypeError(InvalidInputError, TypeError):
    """Raised when inputs are wrong python types (str instead of float)."""
    pass

class IncoherentSelectionError(BurnCalculationError):
    """Raised when the requested method/formula does not fit the supplied inputs."""
    pass

class DegenerateResultError(BurnCalculationError):
    """Raised when a computation produces a value that cannot be clinically real."""
    pass

# --- 2. ENUMS (Caller Selections & Result Categories) ---

class TBSAMethod(Enum):
    LUND_BROWDER = "lund_browder"   # Age-stratified
    RULE_OF_NINES = "rule_of_nines" # Quick

class FluidFormula(Enum):
    PARKLAND = "parkland"
    MODIFIED_BROOKE = "modified_brooke"
    MUIR_BARCLAY = "muir_barclay"

class Gender(Enum):
    MALE = "male"
    FEMALE = "female"

class RiskCategory(Enum):
    """Ordered from best to worst prognosis."""
    VERY_LOW = "very_low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return list(RiskCategory).index(self)

class FeedingRoute(Enum):
    ORAL = "oral"
    ENTERAL = "enteral"
    PARENTERAL = "parenteral"

class BurnSeverity(Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    CRITICAL = "critical"

class Disposition(Enum):
    OUTPATIENT = "outpatient"
    WARD = "ward"
    HDU = "hdu"
    ICU = "icu"
    BURN_CENTER = "burn_center"

# --- 3. INPUT LAYER ---

@dataclass(frozen=True)
class BodyRegionEntry:
    """
    One region of the burn map.
    `percent` is the burnt share of that region (0-100). The region is kept
    as supplied; each TBSA method resolves it against its own table.
    """
    region: Union[BodyRegion, NinesRegion, str]
    percent: float
    depth: BurnDepth

    def __post_init__(self):
        if isinstance(self.percent, bool) or not isinstance(self.percent, (int, float)):
            raise DataTypeError(f"Field 'percent' must be numeric, got {type(self.percent)}")
        if not (0.0 <= self.percent <= 100.0):
            raise InvalidInputError(f"Invalid region percentage: {self.percent}")

        if not isinstance(self.depth, BurnDepth):
            try:
                object.__setattr__(self, "depth", BurnDepth(self.depth))
            except ValueError:
                raise InvalidInputError(f"Unknown burn depth: {self.depth!r}") from None

        if not isinstance(self.region, (BodyRegion, NinesRegion, str)):
            raise DataTypeError(f"Field 'region' must be a region name, got {type(self.region)}")

    @property
    def region_key(self) -> str:
        return self.region.value if isinstance(self.region, Enum) else self.region

# --- 4. OUTPUT LAYER ---

@dataclass(frozen=True)
class TBSAResult:
    """
    by_depth is reported to 0.1% and always sums to total_percent.
    has_full_thickness is decided on the unrounded area, so a full
    thickness patch too small to show at 0.1% is still counted.
    """
    total_percent: float
    by_depth: Mapping[BurnDepth, float]
    method: TBSAMethod
    has_full_thickness: Optional[bool] = None

    def __post_init__(self):
        if not isinstance(self.by_depth, MappingProxyType):
            object.__setattr__(self, "by_depth", MappingProxyType(dict(self.by_depth)))
        if self.has_full_thickness is None:
            object.__setattr__(self, "has_full_thickness", self.full_thickness_percent > 0)

    @property
    def full_thickness_percent(self) -> float:
        return self.by_depth[BurnDepth.FULL_THICKNESS]

    @property
    def deep_tbsa_percent(self) -> float:
        """Partial plus full thickness area; superficial (first degree) burns excluded."""
        return sum(value for depth, value in self.by_depth.items() if depth != BurnDepth.SUPERFICIAL)

@dataclass(frozen=True)
class InfusionPeriod:
    start_hour: float
    end_hour: float
    volume_ml: float
    rate_ml_hr: float

@dataclass(frozen=True)
class FluidPlan:
    """
    The 24-hour resuscitation prescription.
    hourly_rate_first_8h is None once the first window has fully elapsed.
    """
    formula: FluidFormula
    total_volume_24h_ml: float
    first_8h_ml: float
    next_16h_ml: float
    hourly_rate_first_8h: Optional[float]
    hourly_rate_next_16h: float
    current_infusion_rate_ml_hr: float
    crystalloid_volume_ml: float
    urine_output_target_ml_kg_hr: float
    recommendations: Tuple[str, ...]
    colloid_volume_ml: Optional[float] = None
    hours_since_burn: float = 0.0
    first_window_elapsed: bool = False
    infusion_periods: Tuple[InfusionPeriod, ...] = ()

@dataclass(frozen=True)
class FluidAdjustment:
    new_rate_ml_hr: float
    adjustment: str   # e.g. "+25%"
    reason: str

@dataclass(frozen=True)
class AbsiComponents:
    age: int
    tbsa: int
    inhalation: int
    full_thickness: int
    gender: int

    @property
    def total(self) -> int:
        return self.age + self.tbsa + self.inhalation + self.full_thickness + self.gender

@dataclass(frozen=True)
class SeverityScore:
    score: int
    survival_probability: str
    risk_category: RiskCategory
    components: AbsiComponents

@dataclass(frozen=True)
class BauxScore:
    age: float
    tbsa: float
    score: float
    mortality_risk: str
    inhalation_injury: Optional[bool] = None  # None for the classic (unrevised) score

@dataclass(frozen=True)
class Micronutrients:
    vitamin_c_mg: int
    vitamin_a_iu: int
    zinc_mg: int
    selenium_mcg: int

@dataclass(frozen=True)
class NutritionPlan:
    calories_per_day: int
    protein_g_per_day: int
    carbohydrate_g_per_day: int
    fat_g_per_day: int
    formula: str
    micronutrients: Micronutrients
    feeding_route: FeedingRoute
    recommendations: Tuple[str, ...]

@dataclass(frozen=True)
class GraftingPlan:
    indicated: bool
    timing: str
    graft_type: str

@dataclass(frozen=True)
class WoundCareProtocol:
    dressing_type: str
    frequency: str
    cleansing_solution: str
    topical_agent: str
    special_instructions: Tuple[str, ...]
    pain_management: Tuple[str, ...]
    debridement_method: Optional[str] = None
    grafting: Optional[GraftingPlan] = None

@dataclass(frozen=True)
class HealingEstimate:
    min_days: int
    max_days: int
    notes: str

@dataclass(frozen=True)
class ReferralDecision:
    """required is derived from reasons, never set independently."""
    reasons: Tuple[str, ...] = ()
    required: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "reasons", tuple(self.reasons))
        object.__setattr__(self, "required", len(self.reasons) > 0)

@dataclass(frozen=True)
class BurnReport:
    """Everything the engine can say about one assessment."""
    tbsa: TBSAResult
    fluid_plan: FluidPlan
    absi: SeverityScore
    revised_baux: BauxScore
    nutrition: NutritionPlan
    wound_care: WoundCareProtocol
    healing: HealingEstimate
    referral: ReferralDecision
    severity: BurnSeverity
    disposition: Disposition
    model_version: str
