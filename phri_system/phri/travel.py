"""
Travel module for the PHRI System.

This module defines the TravelPlan dataclass which describes a single trip
or outdoor activity: how the user travels, for how long, and which mask they
wear. Only the exposure model reads it.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

from .personal_factors import parse_enum
from .validation import clamp_field


class TravelMode(str, Enum):
    WALKING = "walking"
    CYCLING = "cycling"
    MOTORCYCLE = "motorcycle"
    CAR = "car"
    BUS = "bus"
    BTS_MRT = "bts_mrt"
    INDOOR = "indoor"


class MaskType(str, Enum):
    N95 = "n95"
    SURGICAL = "surgical"
    CLOTH = "cloth"
    NONE = "none"


@dataclass(frozen=True)
class TravelPlan:
    """
    Represents one trip for exposure scoring.

    Attributes:
        mode: How the user travels
        duration_minutes: Time spent travelling (domain 0-1440)
        mask_type: Mask worn on the way; only counts when the user's
                   wearing_mask flag is set
    """

    mode: TravelMode = TravelMode.WALKING
    duration_minutes: float = 30
    mask_type: MaskType = MaskType.NONE

    DURATION_RANGE = (0.0, 1440.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", parse_enum(TravelMode, "mode", self.mode))
        object.__setattr__(
            self, "mask_type", parse_enum(MaskType, "mask_type", self.mask_type)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TravelPlan":
        """Builds a plan from a trip payload (mode, durationMinutes, maskType)."""
        return cls(
            mode=data.get("mode", TravelMode.WALKING),
            duration_minutes=data.get("durationMinutes", data.get("duration_minutes", 30)),
            mask_type=data.get("maskType", data.get("mask_type")) or MaskType.NONE,
        )

    def normalized(self) -> tuple["TravelPlan", tuple[str, ...]]:
        """
        Returns a copy with the duration clamped into its domain.

        Raises:
            TypeError: If duration_minutes is not numeric
            ValidationError: If duration_minutes is NaN or infinite
        """
        clamped: list[str] = []
        plan = replace(
            self,
            duration_minutes=clamp_field(
                "duration_minutes", self.duration_minutes, *self.DURATION_RANGE, clamped
            ),
        )
        return plan, tuple(clamped)
