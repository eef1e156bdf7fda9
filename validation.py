# validation.py
"""
Boundary checks shared by every calculator.
Inputs are rejected before any arithmetic runs; results are checked
before they leave the engine.
"""
import math

from constants import AGE_CONSTANTS, FLUID_CONSTANTS
from models import DataTypeError, DegenerateResultError, InvalidInputError

def require_number(name: str, value) -> float:
    # bool is an int subclass; a checkbox value is never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataTypeError(f"Field '{name}' must be numeric, got {type(value)}")
    if not math.isfinite(value):
        raise InvalidInputError(f"Field '{name}' must be finite, got {value}")
    return float(value)

def validate_weight(weight_kg) -> float:
    weight_kg = require_number("weight_kg", weight_kg)
    if not (FLUID_CONSTANTS.MIN_WEIGHT_KG < weight_kg <= FLUID_CONSTANTS.MAX_WEIGHT_KG):
        raise InvalidInputError(f"Invalid weight: {weight_kg}")
    return weight_kg

def validate_tbsa(tbsa_percent) -> float:
    tbsa_percent = require_number("tbsa_percent", tbsa_percent)
    if not (0.0 <= tbsa_percent <= 100.0):
        raise InvalidInputError(f"Invalid TBSA: {tbsa_percent}")
    return tbsa_percent

def validate_age(age_years) -> float:
    age_years = require_number("age_years", age_years)
    if not (AGE_CONSTANTS.MIN_AGE_YEARS <= age_years <= AGE_CONSTANTS.MAX_AGE_YEARS):
        raise InvalidInputError(f"Invalid age: {age_years}")
    return age_years

def validate_non_negative(name: str, value) -> float:
    value = require_number(name, value)
    if value < 0:
        raise InvalidInputError(f"Field '{name}' cannot be negative, got {value}")
    return value

def ensure_valid_result(name: str, value: float) -> float:
    """Guards outputs: NaN, infinity or a negative amount never reach the caller."""
    if value is None or not math.isfinite(value) or value < 0:
        raise DegenerateResultError(f"Computed {name} is not a valid quantity: {value}")
    return value
