"""
BurnFlow: TBSA Estimator
========================
Turns a per-region burn map into a total-body-surface-area percentage
with a breakdown by depth. Two methods, always chosen by the caller:
Lund-Browder (age-stratified) and the Rule of Nines (quick).
"""

import logging
import math
from typing import Dict, Iterable, Optional, Set

from constants import (
    AGE_CONSTANTS,
    LUND_BROWDER,
    RULE_OF_NINES,
    AgeClass,
    BodyRegion,
    BurnDepth,
    NinesRegion,
)
from models import (
    BodyRegionEntry,
    DegenerateResultError,
    IncoherentSelectionError,
    InvalidInputError,
    TBSAMethod,
    TBSAResult,
)
from validation import ensure_valid_result, require_number, validate_age

logger = logging.getLogger("burnflow.surface_area")

class TBSAEstimator:
    """
    Region Map -> Contribution per Region -> Depth Buckets -> Total.
    """

    @staticmethod
    def _resolve(entries: Iterable[BodyRegionEntry], region_enum) -> list:
        """
        Maps every entry onto the method's own region set.
        An unknown region would silently understate TBSA, so it is an error.
        """
        resolved = []
        seen: Set = set()
        for entry in entries:
            if not isinstance(entry, BodyRegionEntry):
                raise InvalidInputError(f"Expected BodyRegionEntry, got {type(entry)}")
            try:
                region = region_enum(entry.region_key)
            except ValueError:
                raise InvalidInputError(
                    f"Region '{entry.region_key}' is not in the {region_enum.__name__} table"
                ) from None
            if region in seen:
                raise InvalidInputError(f"Region '{region.value}' supplied more than once")
            seen.add(region)
            resolved.append((region, entry))
        return resolved

    @staticmethod
    def _apportion(by_depth: Dict[BurnDepth, float], total: float) -> Dict[BurnDepth, float]:
        """
        Largest-remainder rounding to 0.1%: the buckets add up to the
        rounded total of the raw areas, so no small component is lost.
        """
        tenths = {depth: round(value * 10, 6) for depth, value in by_depth.items()}
        floors = {depth: math.floor(value) for depth, value in tenths.items()}
        spare = int(round(total * 10)) - sum(floors.values())

        order = list(BurnDepth)
        by_remainder = sorted(
            tenths, key=lambda depth: (-(tenths[depth] - floors[depth]), order.index(depth))
        )
        for depth in by_remainder[:max(spare, 0)]:
            floors[depth] += 1
        return {depth: units / 10.0 for depth, units in floors.items()}

    @staticmethod
    def _build_result(by_depth: Dict[BurnDepth, float], method: TBSAMethod) -> TBSAResult:
        total = round(sum(by_depth.values()), 1)

        ensure_valid_result("TBSA", total)
        if total > 100.0:
            raise DegenerateResultError(f"TBSA total exceeds 100%: {total}")

        logger.debug("TBSA (%s): %.1f%%", method.value, total)
        return TBSAResult(
            total_percent=total,
            by_depth=TBSAEstimator._apportion(by_depth, total),
            method=method,
            has_full_thickness=by_depth[BurnDepth.FULL_THICKNESS] > 0,
        )

    @staticmethod
    def _empty_buckets() -> Dict[BurnDepth, float]:
        return {depth: 0.0 for depth in BurnDepth}

    @staticmethod
    def estimate_lund_browder(entries: Iterable[BodyRegionEntry], age_years: float) -> TBSAResult:
        """
        Age-stratified estimate.
        Each entry is clamped to its region's share for the patient's age column.
        """
        age_years = validate_age(age_years)
        bracket = AGE_CONSTANTS.bracket_for(age_years)
        resolved = TBSAEstimator._resolve(entries, BodyRegion)

        by_depth = TBSAEstimator._empty_buckets()
        for region, entry in resolved:
            if entry.percent <= 0:
                continue
            max_percent = LUND_BROWDER.get(region, bracket)
            by_depth[entry.depth] += min(entry.percent, max_percent)

        return TBSAEstimator._build_result(by_depth, TBSAMethod.LUND_BROWDER)

    @staticmethod
    def estimate_rule_of_nines(entries: Iterable[BodyRegionEntry],
                               is_child: Optional[bool] = None,
                               is_infant: bool = False) -> TBSAResult:
        """
        Quick estimate: burnt fraction of the region x region share for the age class.
        """
        if is_child is None:
            raise IncoherentSelectionError("Rule of Nines requires an explicit child/adult selection")
        if is_infant and not is_child:
            raise IncoherentSelectionError("An infant cannot be assessed on the adult column")

        if is_infant:
            age_class = AgeClass.INFANT
        elif is_child:
            age_class = AgeClass.CHILD
        else:
            age_class = AgeClass.ADULT

        resolved = TBSAEstimator._resolve(entries, NinesRegion)

        by_depth = TBSAEstimator._empty_buckets()
        for region, entry in resolved:
            if entry.percent <= 0:
                continue
            by_depth[entry.depth] += (entry.percent / 100.0) * RULE_OF_NINES.get(region, age_class)

        return TBSAEstimator._build_result(by_depth, TBSAMethod.RULE_OF_NINES)

    @staticmethod
    def estimate(method: TBSAMethod, entries: Iterable[BodyRegionEntry],
                 age_years: Optional[float] = None,
                 is_child: Optional[bool] = None,
                 is_infant: bool = False) -> TBSAResult:
        """Explicit dispatch. The engine never picks a method on the caller's behalf."""
        try:
            method = TBSAMethod(method)
        except ValueError:
            raise IncoherentSelectionError(f"Unknown TBSA method: {method!r}") from None

        if method == TBSAMethod.LUND_BROWDER:
            if age_years is None:
                raise IncoherentSelectionError("Lund-Browder requires the patient's age")
            return TBSAEstimator.estimate_lund_browder(entries, age_years)
        return TBSAEstimator.estimate_rule_of_nines(entries, is_child=is_child, is_infant=is_infant)

    @staticmethod
    def estimate_palm_method(number_of_palms: float) -> float:
        """Scattered/patchy burns: each patient palm counts as 1% TBSA."""
        palms = require_number("number_of_palms", number_of_palms)
        if palms < 0:
            raise InvalidInputError(f"Palm count cannot be negative: {palms}")
        total = palms * RULE_OF_NINES.PALM_PERCENT
        if total > 100.0:
            raise InvalidInputError(f"Palm count implies more than 100% TBSA: {palms}")
        return round(total, 1)
