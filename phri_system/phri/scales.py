"""
Scale configuration module for the PHRI System.

Every PHRI model is described by one read-only table mapping a scale name to
its range, rounding, category cutoffs and model weights. The risk engine and
the category classifier read from this table, so thresholds live in exactly
one place.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .exceptions import InvalidEnumError

POINT = "point"
WEIGHTED = "weighted"
EXPOSURE = "exposure"


@dataclass(frozen=True)
class Band:
    """
    One segment of a piecewise-linear scoring curve.

    A value x above `start` contributes offset + (min(x, cap) - start) * slope
    when it falls in this band.
    """

    start: float
    offset: float
    slope: float
    cap: float = float("inf")


@dataclass(frozen=True)
class ScaleConfig:
    """
    Declarative description of one PHRI scale.

    Attributes:
        name: Scale identifier ("point", "weighted" or "exposure")
        minimum: Lowest reportable value
        maximum: Highest reportable value
        decimals: Decimal places kept in the final value
        cutoffs: Ascending category boundaries
        categories: Category names, one more than cutoffs
        closed: "low" for bands [a, b) with the top band closed at the
            maximum, "high" for bands [minimum, a], (a, b], ...
        weights: Model constants for this scale
    """

    name: str
    minimum: float
    maximum: float
    decimals: int
    cutoffs: tuple
    categories: tuple
    closed: str
    weights: Mapping[str, object]

    def classify(self, value: float) -> str:
        """
        Maps a value on this scale to exactly one category.

        The cutoffs partition the whole range, so every value lands in one
        band. Values outside [minimum, maximum] are classified as if clamped.
        """
        value = max(self.minimum, min(self.maximum, value))
        if self.closed == "low":
            index = bisect_right(self.cutoffs, value)
        else:
            index = bisect_left(self.cutoffs, value)
        return self.categories[index]


POINT_SCALE = ScaleConfig(
    name=POINT,
    minimum=0.0,
    maximum=10.0,
    decimals=1,
    cutoffs=(3.0, 6.0, 9.0),
    categories=("safe", "warning", "urgent", "emergency"),
    closed="low",
    weights=MappingProxyType({
        # (threshold, points), checked from the top; first match wins
        "pm25_steps": ((75, 3.0), (50, 2.0), (25, 1.0)),
        "aqi_bonus_threshold": 150,
        "aqi_bonus": 1.0,
        "age_bounds": (5, 65),
        "age_points": 1.0,
        "condition_points": 1.0,
        "high_sensitivity_points": 0.5,
        "outdoor_hour_steps": ((4, 2.0), (2, 1.0)),
        "active_points": 0.5,
        "symptom_points": 2.0,
        "mask_reduction": 1.0,
        "purifier_reduction": 0.5,
    }),
)

WEIGHTED_SCALE = ScaleConfig(
    name=WEIGHTED,
    minimum=0.0,
    maximum=100.0,
    decimals=0,
    cutoffs=(25.0, 50.0, 75.0),
    categories=("low", "moderate", "high", "very_high"),
    closed="high",
    weights=MappingProxyType({
        "aqi_bands": (
            Band(start=150, offset=60, slope=0.4, cap=250),
            Band(start=100, offset=30, slope=0.6),
            Band(start=50, offset=10, slope=0.4),
            Band(start=0, offset=0, slope=0.2),
        ),
        "pm25_bands": (
            Band(start=35, offset=20, slope=0.5, cap=85),
            Band(start=12, offset=6, slope=0.6),
            Band(start=0, offset=0, slope=0.5),
        ),
        # (lower, upper, points): applies when age < lower or age > upper
        "age_steps": ((18, 65, 10.0), (25, 55, 5.0)),
        "outdoor_hour_steps": ((4, 15.0), (2, 10.0), (1, 5.0)),
        "health_condition_multiplier": 1.3,
        "environmental_weight": 0.6,
        "symptom_weight": 0.4,
    }),
)

EXPOSURE_SCALE = ScaleConfig(
    name=EXPOSURE,
    minimum=0.0,
    maximum=100.0,
    decimals=1,
    cutoffs=(25.0, 50.0, 75.0),
    categories=("low", "moderate", "high", "severe"),
    closed="high",
    weights=MappingProxyType({
        # pollutant / ceiling * 100 * weight
        "pollutant_ceiling": 500,
        "pm25_weight": 0.6,
        "aqi_weight": 0.3,
        # (temperature above, humidity below, factor) and (temperature below, humidity above, factor)
        "hot_dry_weather": (35, 40, 1.1),
        "cool_humid_weather": (20, 80, 0.95),
        # (age at most, modifier), first match wins
        "age_bands": ((12, 1.3), (18, 1.1), (64, 1.0), (float("inf"), 1.4)),
        "condition_modifiers": MappingProxyType({
            "asthma": 1.5,
            "copd": 1.6,
            "heart_disease": 1.4,
            "diabetes": 1.2,
            "hypertension": 1.2,
            "allergy": 1.3,
            "sinusitis": 1.2,
            "pregnant": 1.4,
            "immunocompromised": 1.5,
        }),
        # share of each further condition's excess that still counts
        "secondary_condition_share": 0.3,
        "sensitivity_modifiers": MappingProxyType({"low": 1.0, "moderate": 1.2, "high": 1.4}),
        "mask_modifiers": MappingProxyType({"n95": 0.05, "surgical": 0.5, "cloth": 0.7, "none": 1.0}),
        "travel_modifiers": MappingProxyType({
            "walking": 1.5,
            "cycling": 1.6,
            "motorcycle": 1.4,
            "car": 1.0,
            "bus": 1.1,
            "bts_mrt": 0.9,
            "indoor": 0.3,
        }),
        # (minutes at most, modifier), first match wins
        "duration_steps": ((15, 0.7), (60, 1.0), (180, 1.3), (float("inf"), 1.6)),
    }),
)

SCALES: Mapping[str, ScaleConfig] = MappingProxyType({
    POINT: POINT_SCALE,
    WEIGHTED: WEIGHTED_SCALE,
    EXPOSURE: EXPOSURE_SCALE,
})


def get_scale(name) -> ScaleConfig:
    """
    Looks up a scale by name.

    Raises:
        InvalidEnumError: If name is not a known scale
    """
    if isinstance(name, ScaleConfig):
        return name
    try:
        return SCALES[name]
    except (KeyError, TypeError):
        raise InvalidEnumError("scale", name, SCALES.keys()) from None


def classify(value: float, scale=POINT) -> str:
    """Maps a value to its category on the given scale."""
    return get_scale(scale).classify(value)


def interpolate(value: float, bands: tuple) -> float:
    """
    Evaluates a piecewise-linear curve described by bands.

    Bands are ordered from the highest start down; the first band whose start
    the value exceeds is used. The lowest band starts at 0 and also covers 0.
    """
    for band in bands:
        if value > band.start or band.start == 0:
            return band.offset + (min(value, band.cap) - band.start) * band.slope
    return 0.0
