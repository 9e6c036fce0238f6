"""Weight unit definitions."""

from enum import Enum


class WeightUnit(str, Enum):
    """Weight units a user can display and enter weights in."""

    POUNDS = "lbs"
    KILOGRAMS = "kg"

    @property
    def abbreviation(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        if self is WeightUnit.POUNDS:
            return "Pounds (lbs)"
        return "Kilograms (kg)"


# All weights are persisted in this unit
STORAGE_UNIT = WeightUnit.POUNDS
