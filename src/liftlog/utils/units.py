"""Weight unit conversion and display formatting.

All weights are persisted in pounds. These helpers sit between the stored
value and every place a weight is shown to, or entered by, the user.
"""

from ..models.units import STORAGE_UNIT, WeightUnit

# Both ratios are hard-coded independently, so a round trip is accurate
# to about four decimal places rather than exact.
POUNDS_TO_KG = 0.45359237
KG_TO_POUNDS = 2.20462262


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg * KG_TO_POUNDS


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs * POUNDS_TO_KG


def convert(value: float, from_unit: WeightUnit, to_unit: WeightUnit) -> float:
    """Convert a weight from one unit to another.

    Any pair other than pounds <-> kilograms returns the value unchanged.
    """
    if from_unit == to_unit:
        return value

    if from_unit == WeightUnit.POUNDS and to_unit == WeightUnit.KILOGRAMS:
        return lbs_to_kg(value)
    if from_unit == WeightUnit.KILOGRAMS and to_unit == WeightUnit.POUNDS:
        return kg_to_lbs(value)
    return value


def to_display(stored_pounds: float, unit: WeightUnit) -> float:
    """Convert a stored (pounds) weight to the user's display unit."""
    return convert(stored_pounds, STORAGE_UNIT, unit)


def to_storage(entered: float, unit: WeightUnit) -> float:
    """Convert a weight entered in the display unit to pounds for storage."""
    return convert(entered, unit, STORAGE_UNIT)


def display_weight(value: float, unit: WeightUnit, decimals: int = 1) -> str:
    """Format a stored weight with its unit label, e.g. "60.0 kg"."""
    return f"{to_display(value, unit):.{decimals}f} {unit.abbreviation}"


def display_value(value: float, unit: WeightUnit, decimals: int = 1) -> str:
    """Format a stored weight without a unit label."""
    return f"{to_display(value, unit):.{decimals}f}"


def detailed_display(value: float, unit: WeightUnit) -> str:
    """Format a stored weight with two decimals and the full unit name."""
    return f"{to_display(value, unit):.2f} {unit.display_name}"
