# schemas.py
"""
Strict request schemas for callers that hand the engine raw dicts
(form payloads, record-layer JSON). Enum fields accept their string
values, e.g. "full_thickness" -> BurnDepth.FULL_THICKNESS.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from constants import BurnDepth
from models import FluidFormula, Gender, TBSAMethod

class BodyRegionRequest(BaseModel):
    region: str = Field(..., min_length=1, description="Region id, e.g. 'anterior_trunk'")
    percent: float = Field(..., ge=0.0, le=100.0, description="Burnt share of that region")
    depth: BurnDepth

class BurnAssessmentRequest(BaseModel):
    # Demographics
    age_years: float = Field(..., ge=0.0, le=120.0)
    weight_kg: float = Field(..., gt=0.0, le=500.0)
    gender: Gender

    # Burn map
    regions: List[BodyRegionRequest] = Field(..., min_length=1)
    tbsa_method: TBSAMethod
    is_child: Optional[bool] = Field(None, description="Required for the Rule of Nines")
    is_infant: bool = False
    locations: List[str] = Field(default_factory=list, description="Free-text sites, e.g. 'face'")

    # Timeline
    fluid_formula: FluidFormula
    hours_since_burn: float = Field(0.0, ge=0.0)
    days_since_injury: float = Field(0.0, ge=0.0)

    # Mechanism & history
    inhalation_injury: bool = False
    electrical_burn: bool = False
    chemical_burn: bool = False
    circumferential_burn: bool = False
    has_comorbidities: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "age_years": 25, "weight_kg": 70.0, "gender": "male",
                "regions": [
                    {"region": "anterior_trunk", "percent": 13, "depth": "full_thickness"},
                    {"region": "right_upper_arm", "percent": 4, "depth": "deep_partial"},
                ],
                "tbsa_method": "lund_browder", "fluid_formula": "parkland",
                "hours_since_burn": 2, "locations": ["chest"], "inhalation_injury": True,
            }
        }
    )
