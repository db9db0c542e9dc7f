import math

from .generator import calculate_gear_ratio, calculate_output_rpm
from .utils import format_factor, format_ratio, format_rpm, logger


def parse_number(value, default, cast=float):
    """Parse a user-entered number, returning `default` instead of failing.

    None, blank text, text that `cast` cannot parse, NaN, infinities and
    zero all give the default, as does a number `cast` would change (24.5
    for an int field). Anything else is returned as parsed, including
    negatives.
    """
    if value is None:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return default
        try:
            number = cast(text)
        except (TypeError, ValueError):
            logger.debug(f"Could not parse '{value}', using default {default}")
            return default

    try:
        parsed = cast(number)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Could not parse '{value}', using default {default}")
        return default
    if isinstance(parsed, float) and not math.isfinite(parsed):
        logger.debug(f"Non-finite value '{value}', using default {default}")
        return default
    if (isinstance(number, float) and parsed != number) or parsed == 0:
        logger.debug(f"Unusable value '{value}', using default {default}")
        return default
    return parsed


class GearSetupCalculator:
    def __init__(self):
        self.default_input_rpm = 200.0
        self.default_driving_gear = 24
        self.default_driven_gear = 48

    def parse_inputs(self, input_rpm=None, driving_gear=None, driven_gear=None):
        """Resolve raw field values to numbers, substituting defaults"""
        return (
            parse_number(input_rpm, self.default_input_rpm, float),
            parse_number(driving_gear, self.default_driving_gear, int),
            parse_number(driven_gear, self.default_driven_gear, int),
        )

    def calculate(self, input_rpm=None, driving_gear=None, driven_gear=None):
        """Calculate ratio, output speed and speed/torque factors for one setup"""
        rpm, driving, driven = self.parse_inputs(input_rpm, driving_gear, driven_gear)

        # Raises InvalidGear for negative or out-of-range sizes
        gear_ratio = calculate_gear_ratio(driving, driven)
        output_rpm = calculate_output_rpm(rpm, driving, driven)
        speed_factor = 1 / gear_ratio
        torque_factor = gear_ratio

        return {
            'input_rpm': rpm,
            'driving_gear': driving,
            'driven_gear': driven,
            'gear_ratio': gear_ratio,
            'output_rpm': output_rpm,
            'speed_factor': speed_factor,
            'torque_factor': torque_factor,
            'ratio_display': format_ratio(gear_ratio),
            'output_display': format_rpm(output_rpm),
            'speed_factor_display': format_factor(speed_factor),
            'torque_factor_display': format_factor(torque_factor),
        }


calculator = GearSetupCalculator()
