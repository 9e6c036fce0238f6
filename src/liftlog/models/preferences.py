"""User preferences model."""

from dataclasses import dataclass

from .units import WeightUnit

PREFERENCES_ID = "singleton"

MIN_REST_DURATION = 30
MAX_REST_DURATION = 300
REST_DURATION_STEP = 15


@dataclass
class UserPreferences:
    """The single persistent preferences record.

    There is exactly one row, identified by PREFERENCES_ID; uniqueness is
    enforced by the storage layer rather than by a shared instance.
    """

    preferred_weight_unit: WeightUnit = WeightUnit.POUNDS
    enable_rest_timer: bool = True
    default_rest_duration: int = 90  # seconds
    health_sync_enabled: bool = False
    id: str = PREFERENCES_ID

    def set_rest_duration(self, seconds: int) -> int:
        """Clamp to the allowed range and snap to the nearest step."""
        clamped = max(MIN_REST_DURATION, min(MAX_REST_DURATION, seconds))
        steps = round((clamped - MIN_REST_DURATION) / REST_DURATION_STEP)
        self.default_rest_duration = MIN_REST_DURATION + steps * REST_DURATION_STEP
        return self.default_rest_duration

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "preferred_weight_unit": self.preferred_weight_unit.value,
            "enable_rest_timer": self.enable_rest_timer,
            "default_rest_duration": self.default_rest_duration,
            "health_sync_enabled": self.health_sync_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPreferences":
        """Create from dictionary."""
        return cls(
            preferred_weight_unit=WeightUnit(data.get("preferred_weight_unit", "lbs")),
            enable_rest_timer=bool(data.get("enable_rest_timer", True)),
            default_rest_duration=int(data.get("default_rest_duration", 90)),
            health_sync_enabled=bool(data.get("health_sync_enabled", False)),
        )
