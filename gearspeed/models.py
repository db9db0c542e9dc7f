"""Domain models for the GearSpeed application."""

from dataclasses import dataclass
from enum import Enum

from .utils import format_gears, format_ratio, format_rpm

# Available components
INPUT_RPMS = (100, 200, 600)
GEAR_SIZES = (12, 24, 36, 48, 60, 72, 80)

# Output RPM above the first value is high speed, above the second medium
SPEED_THRESHOLDS = (500, 100)

TARGET_RPM = 300
PERFECT_RATIO_TOLERANCE = 0.001
PAGE_SIZE = 10
PERFECT_RATIO_PREVIEW = 10


class InvalidGear(ValueError):
    """Raised when a gear size is zero or negative, or a pair is unusable."""

    def __init__(self, size, role="gear", reason="must be > 0"):
        self.size = size
        self.role = role
        super().__init__(f"Invalid {role} size: {size} ({reason})")


class SpeedCategory(Enum):
    """Output speed band of a gear combination."""

    HIGH = "High Speed"
    MEDIUM = "Medium Speed"
    LOW = "Low Speed"

    @property
    def label(self):
        return self.value

    @property
    def css_class(self):
        return self.value.lower().replace(" ", "-")


class SortKey(str, Enum):
    """Table orderings offered by the combinations view."""

    OUTPUT = "output"
    RATIO = "ratio"
    INPUT = "input"


@dataclass(frozen=True)
class Combination:
    """One (input RPM, driving gear, driven gear) setup and its derived values."""

    input_rpm: float
    driving_gear: int
    driven_gear: int
    gear_ratio: float
    output_rpm: float
    category: SpeedCategory

    @property
    def gears(self):
        return format_gears(self.driving_gear, self.driven_gear)

    def to_dict(self):
        """Convert combination to dictionary representation."""
        return {
            "input_rpm": self.input_rpm,
            "driving_gear": self.driving_gear,
            "driven_gear": self.driven_gear,
            "gear_ratio": self.gear_ratio,
            "output_rpm": self.output_rpm,
            "category": self.category.label,
        }

    def to_row(self):
        """Display values for one table row."""
        return {
            **self.to_dict(),
            "input_display": f"{self.input_rpm} RPM",
            "driving_display": f"{self.driving_gear}T",
            "driven_display": f"{self.driven_gear}T",
            "gears_display": self.gears,
            "ratio_display": format_ratio(self.gear_ratio),
            "output_display": format_rpm(self.output_rpm),
            "category_class": self.category.css_class,
        }
