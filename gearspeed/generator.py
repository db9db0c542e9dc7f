"""Generation of every gear combination for the available motors and gears."""

import math

from .models import (GEAR_SIZES, INPUT_RPMS, SPEED_THRESHOLDS, Combination,
                     InvalidGear, SpeedCategory)
from .utils import logger


def calculate_gear_ratio(driving_gear, driven_gear):
    """Gear ratio of a driving/driven pair (driven teeth per driving tooth)"""
    if driving_gear <= 0:
        raise InvalidGear(driving_gear, "driving gear")
    if driven_gear <= 0:
        raise InvalidGear(driven_gear, "driven gear")
    try:
        gear_ratio = driven_gear / driving_gear
    except OverflowError:
        raise InvalidGear(driven_gear, "driven gear", "ratio too large")
    # Reciprocal must stay finite too (speed factor)
    if not 0 < gear_ratio < math.inf or not math.isfinite(1 / gear_ratio):
        raise InvalidGear(driving_gear, "driving gear", "ratio out of range")
    return gear_ratio


def calculate_output_rpm(input_rpm, driving_gear, driven_gear):
    """Output RPM after the driving gear turns the driven gear"""
    gear_ratio = calculate_gear_ratio(driving_gear, driven_gear)
    output_rpm = input_rpm / gear_ratio
    if not math.isfinite(output_rpm):
        raise InvalidGear(driving_gear, "driving gear", "output speed out of range")
    return output_rpm


def get_speed_category(output_rpm, thresholds=SPEED_THRESHOLDS):
    """Speed band for an output RPM; boundary values fall to the lower band"""
    high, medium = thresholds
    if output_rpm > high:
        return SpeedCategory.HIGH
    if output_rpm > medium:
        return SpeedCategory.MEDIUM
    return SpeedCategory.LOW


def build_combination(input_rpm, driving_gear, driven_gear,
                      thresholds=SPEED_THRESHOLDS):
    """Create a single combination with all derived fields filled in"""
    gear_ratio = calculate_gear_ratio(driving_gear, driven_gear)
    output_rpm = input_rpm / gear_ratio
    return Combination(
        input_rpm=input_rpm,
        driving_gear=driving_gear,
        driven_gear=driven_gear,
        gear_ratio=gear_ratio,
        output_rpm=output_rpm,
        category=get_speed_category(output_rpm, thresholds),
    )


def generate_all_combinations(input_rpms=INPUT_RPMS, gear_sizes=GEAR_SIZES,
                              driven_sizes=None, thresholds=SPEED_THRESHOLDS):
    """Generate the full input RPM x driving gear x driven gear product.

    Records come back in generation order: input RPM outermost, then
    driving gear, then driven gear. Nothing is filtered or deduplicated,
    so the result always holds len(input_rpms) * len(gear_sizes) *
    len(driven_sizes) combinations.

    Args:
        input_rpms: motor speeds to combine
        gear_sizes: driving gear tooth counts
        driven_sizes: driven gear tooth counts (defaults to gear_sizes)
        thresholds: (high, medium) output RPM category thresholds

    Returns:
        tuple of Combination

    Raises:
        InvalidGear: if any gear size is not positive
    """
    if driven_sizes is None:
        driven_sizes = gear_sizes

    combinations = []
    for rpm in input_rpms:
        for driving in gear_sizes:
            for driven in driven_sizes:
                combinations.append(
                    build_combination(rpm, driving, driven, thresholds)
                )

    logger.debug(
        f"Generated {len(combinations)} gear combinations "
        f"({len(input_rpms)} motors x {len(gear_sizes)} x {len(driven_sizes)} gears)"
    )
    return tuple(combinations)
