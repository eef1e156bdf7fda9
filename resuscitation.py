"""
BurnFlow: Fluid Resuscitation Calculator
========================================
Weight + TBSA -> 24-hour resuscitation volume and infusion schedule.
Parkland, Modified Brooke and Muir-Barclay are independent pure functions;
none of them reads or changes another's output.
"""

import logging
from typing import List

from constants import FLUID_CONSTANTS
from models import (
    FluidAdjustment,
    FluidFormula,
    FluidPlan,
    IncoherentSelectionError,
    InfusionPeriod,
    InvalidInputError,
)
from validation import (
    ensure_valid_result,
    validate_non_negative,
    validate_tbsa,
    validate_weight,
)

logger = logging.getLogger("burnflow.resuscitation")

class FluidResuscitationCalculator:

    @staticmethod
    def _urine_output_target(weight_kg: float) -> float:
        """mL/kg/hr. Children need double the adult output."""
        if weight_kg > FLUID_CONSTANTS.ADULT_WEIGHT_CUTOFF_KG:
            return FLUID_CONSTANTS.URINE_TARGET_ADULT
        return FLUID_CONSTANTS.URINE_TARGET_CHILD

    @staticmethod
    def _urine_target_text(weight_kg: float) -> str:
        if weight_kg > FLUID_CONSTANTS.ADULT_WEIGHT_CUTOFF_KG:
            return "Target urine output: 0.5-1 mL/kg/hr"
        return "Target urine output: 1-2 mL/kg/hr"

    @staticmethod
    def _split_halves(total_ml: float):
        """Returns (total, first 8h, next 16h); the halves always add back to the total."""
        first_8h = total_ml / 2.0
        next_16h = total_ml - first_8h
        return total_ml, first_8h, next_16h

    @staticmethod
    def _checked(**volumes) -> None:
        for name, value in volumes.items():
            if value is not None:
                ensure_valid_result(name, value)

    @staticmethod
    def parkland(weight_kg: float, tbsa_percent: float, hours_since_burn: float = 0.0) -> FluidPlan:
        """
        4 mL x kg x %TBSA; half in the first 8 hours FROM TIME OF BURN.
        Time already lost is taken out of the first window, not added to it.
        """
        weight_kg = validate_weight(weight_kg)
        tbsa_percent = validate_tbsa(tbsa_percent)
        hours = validate_non_negative("hours_since_burn", hours_since_burn)

        if hours >= FLUID_CONSTANTS.RESUSCITATION_HOURS:
            raise IncoherentSelectionError(
                f"Parkland covers the first 24h only; {hours:.1f}h have elapsed since the burn"
            )

        total, first_8h, next_16h = FluidResuscitationCalculator._split_halves(
            FLUID_CONSTANTS.PARKLAND_ML_KG_PCT * weight_kg * tbsa_percent
        )

        recommendations: List[str] = [
            "Use Lactated Ringer's solution",
            FluidResuscitationCalculator._urine_target_text(weight_kg),
            "Monitor and adjust based on clinical response",
            "Watch for compartment syndrome if edema significant",
            "Consider colloids after 24 hours if needed",
        ]

        first_window_left = FLUID_CONSTANTS.FIRST_WINDOW_HOURS - hours
        first_window_elapsed = first_window_left <= 0

        if not first_window_elapsed:
            rate_first = first_8h / first_window_left
            rate_next = next_16h / FLUID_CONSTANTS.SECOND_WINDOW_HOURS
            current_rate = rate_first
            if hours > 0:
                recommendations.append(
                    f"Presented {hours:g}h after burn: first-half volume compressed into the remaining {first_window_left:g}h"
                )
            if first_window_left < FLUID_CONSTANTS.SHORT_WINDOW_HOURS:
                logger.warning(
                    "Parkland: %.2fh left in the first window, compressed rate %.0f mL/hr",
                    first_window_left, rate_first,
                )
                recommendations.append(
                    f"Only {first_window_left:.2g}h remain in the first 8h window: the compressed rate "
                    f"({rate_first:.0f} mL/hr) cannot be delivered safely; start at a clinically safe rate "
                    "and carry the first-half deficit into the second window"
                )
        else:
            # The 8h window is gone. Report the second-window rate, never a 0 mL/hr first rate.
            rate_first = None
            hours_left = FLUID_CONSTANTS.RESUSCITATION_HOURS - hours
            rate_next = next_16h / hours_left
            current_rate = rate_next
            recommendations.append(
                "First 8-hour window has elapsed: infuse the second-half volume over the "
                f"remaining {hours_left:g}h and reassess the undelivered first-half deficit clinically"
            )

        FluidResuscitationCalculator._checked(
            total=total, first_8h=first_8h, next_16h=next_16h,
            rate_first=rate_first, rate_next=rate_next,
        )
        logger.debug("Parkland: %.1f mL/24h (%.1f kg, %.1f%%, +%.1fh)", total, weight_kg, tbsa_percent, hours)

        return FluidPlan(
            formula=FluidFormula.PARKLAND,
            total_volume_24h_ml=total,
            first_8h_ml=first_8h,
            next_16h_ml=next_16h,
            hourly_rate_first_8h=rate_first,
            hourly_rate_next_16h=rate_next,
            current_infusion_rate_ml_hr=current_rate,
            crystalloid_volume_ml=total,
            urine_output_target_ml_kg_hr=FluidResuscitationCalculator._urine_output_target(weight_kg),
            recommendations=tuple(recommendations),
            hours_since_burn=hours,
            first_window_elapsed=first_window_elapsed,
        )

    @staticmethod
    def modified_brooke(weight_kg: float, tbsa_percent: float) -> FluidPlan:
        """2 mL x kg x %TBSA; straight 8h/16h split."""
        weight_kg = validate_weight(weight_kg)
        tbsa_percent = validate_tbsa(tbsa_percent)

        total, first_8h, next_16h = FluidResuscitationCalculator._split_halves(
            FLUID_CONSTANTS.BROOKE_ML_KG_PCT * weight_kg * tbsa_percent
        )
        rate_first = first_8h / FLUID_CONSTANTS.FIRST_WINDOW_HOURS
        rate_next = next_16h / FLUID_CONSTANTS.SECOND_WINDOW_HOURS

        FluidResuscitationCalculator._checked(
            total=total, first_8h=first_8h, next_16h=next_16h,
            rate_first=rate_first, rate_next=rate_next,
        )
        logger.debug("Modified Brooke: %.1f mL/24h", total)

        return FluidPlan(
            formula=FluidFormula.MODIFIED_BROOKE,
            total_volume_24h_ml=total,
            first_8h_ml=first_8h,
            next_16h_ml=next_16h,
            hourly_rate_first_8h=rate_first,
            hourly_rate_next_16h=rate_next,
            current_infusion_rate_ml_hr=rate_first,
            crystalloid_volume_ml=total,
            urine_output_target_ml_kg_hr=FluidResuscitationCalculator._urine_output_target(weight_kg),
            recommendations=(
                "Use Lactated Ringer's solution",
                "More conservative than Parkland formula",
                "Appropriate for smaller burns or elderly patients",
                "Monitor urine output closely",
            ),
        )

    @staticmethod
    def muir_barclay(weight_kg: float, tbsa_percent: float) -> FluidPlan:
        """
        UK colloid regimen: (%TBSA x kg) / 2 per period, six periods over 36h.
        Only the first four periods are reported as the 'total'; the rest
        is carried by the period schedule and colloid volume. The 8h/16h
        rates are averages over those windows; the schedule holds the rate
        actually running in each period.
        """
        weight_kg = validate_weight(weight_kg)
        tbsa_percent = validate_tbsa(tbsa_percent)

        per_period = (tbsa_percent * weight_kg) / 2.0

        periods = []
        start = 0.0
        for length in FLUID_CONSTANTS.MUIR_BARCLAY_PERIODS:
            periods.append(InfusionPeriod(
                start_hour=start,
                end_hour=start + length,
                volume_ml=per_period,
                rate_ml_hr=per_period / length,
            ))
            start += length

        reported = FLUID_CONSTANTS.MUIR_BARCLAY_REPORTED_PERIODS
        total, first_8h, next_16h = FluidResuscitationCalculator._split_halves(per_period * reported)
        colloid = per_period * len(FLUID_CONSTANTS.MUIR_BARCLAY_PERIODS)
        # Window averages over the reported periods; the schedule carries the per-period rates
        rate_first = first_8h / FLUID_CONSTANTS.FIRST_WINDOW_HOURS
        rate_next = next_16h / FLUID_CONSTANTS.SECOND_WINDOW_HOURS

        FluidResuscitationCalculator._checked(
            total=total, first_8h=first_8h, next_16h=next_16h,
            rate_first=rate_first, rate_next=rate_next, colloid=colloid,
        )
        logger.debug("Muir-Barclay: %.1f mL per period, %.1f mL colloid course", per_period, colloid)

        return FluidPlan(
            formula=FluidFormula.MUIR_BARCLAY,
            total_volume_24h_ml=total,
            first_8h_ml=first_8h,
            next_16h_ml=next_16h,
            hourly_rate_first_8h=rate_first,
            hourly_rate_next_16h=rate_next,
            current_infusion_rate_ml_hr=periods[0].rate_ml_hr,
            crystalloid_volume_ml=0.0,
            colloid_volume_ml=colloid,
            urine_output_target_ml_kg_hr=FluidResuscitationCalculator._urine_output_target(weight_kg),
            recommendations=(
                "Use Human Albumin Solution (4.5%)",
                "Give in 6 periods: 4hr, 4hr, 4hr, 6hr, 6hr, 12hr",
                f"8h/16h rates are window averages; infuse by period ({per_period:.0f} mL each, "
                "rate stepping down as periods lengthen)",
                "Common in UK practice",
                "Add maintenance crystalloid as needed",
            ),
            infusion_periods=tuple(periods),
        )

    @staticmethod
    def calculate(formula: FluidFormula, weight_kg: float, tbsa_percent: float,
                  hours_since_burn: float = 0.0) -> FluidPlan:
        try:
            formula = FluidFormula(formula)
        except ValueError:
            raise IncoherentSelectionError(f"Unknown fluid formula: {formula!r}") from None

        if formula == FluidFormula.PARKLAND:
            return FluidResuscitationCalculator.parkland(weight_kg, tbsa_percent, hours_since_burn)

        # Only Parkland is anchored to the time of burn
        hours = validate_non_negative("hours_since_burn", hours_since_burn)
        if hours > 0:
            raise IncoherentSelectionError(
                f"{formula.value} does not adjust for elapsed time; use Parkland or pass hours_since_burn=0"
            )
        if formula == FluidFormula.MODIFIED_BROOKE:
            return FluidResuscitationCalculator.modified_brooke(weight_kg, tbsa_percent)
        return FluidResuscitationCalculator.muir_barclay(weight_kg, tbsa_percent)

    @staticmethod
    def adjust_infusion_rate(current_rate_ml_hr: float, urine_output_ml_kg_hr: float,
                             target_min: float = FLUID_CONSTANTS.URINE_TARGET_ADULT,
                             target_max: float = 1.0) -> FluidAdjustment:
        """
        Hourly titration against urine output.
        Below target: +25%. Well above target (>1.5x max): -10%.
        """
        current_rate_ml_hr = validate_non_negative("current_rate_ml_hr", current_rate_ml_hr)
        urine_output = validate_non_negative("urine_output_ml_kg_hr", urine_output_ml_kg_hr)
        target_min = validate_non_negative("target_min", target_min)
        target_max = validate_non_negative("target_max", target_max)
        if target_max < target_min:
            raise InvalidInputError(f"Urine target range is inverted: {target_min}-{target_max}")

        if urine_output < target_min:
            new_rate = current_rate_ml_hr * FLUID_CONSTANTS.UPTITRATE_FACTOR
            return FluidAdjustment(
                new_rate_ml_hr=new_rate,
                adjustment="+25%",
                reason=f"UO {urine_output:.2f} mL/kg/hr below target ({target_min:g} mL/kg/hr)",
            )
        if urine_output > target_max * FLUID_CONSTANTS.OVERSHOOT_MULTIPLIER:
            new_rate = current_rate_ml_hr * FLUID_CONSTANTS.DOWNTITRATE_FACTOR
            return FluidAdjustment(
                new_rate_ml_hr=new_rate,
                adjustment="-10%",
                reason=f"UO {urine_output:.2f} mL/kg/hr above target, consider reducing",
            )
        return FluidAdjustment(
            new_rate_ml_hr=current_rate_ml_hr,
            adjustment="No change",
            reason="UO within target range",
        )
