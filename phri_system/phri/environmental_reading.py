"""
Environmental reading module for the PHRI System.

This module defines the EnvironmentalReading dataclass which represents one
air-quality observation supplied by the upstream provider: fine particulate
concentration (PM2.5), the Air Quality Index, and optional weather context.
The engine treats these values as untrusted input and clamps them into range
before scoring.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from .validation import clamp_field, clamp_optional_field


@dataclass(frozen=True)
class EnvironmentalReading:
    """
    Represents an air-quality reading from the environment.

    Attributes:
        pm25: PM2.5 concentration in µg/m³ (domain 0-1000)
        aqi: Air Quality Index (domain 0-500)
        temperature: Optional air temperature in Celsius (domain -60 to 60)
        humidity: Optional relative humidity in percent (domain 0-100)
        timestamp: Optional time the reading was taken
    """

    pm25: float
    aqi: float
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    timestamp: Optional[datetime] = None

    PM25_RANGE = (0.0, 1000.0)
    AQI_RANGE = (0.0, 500.0)
    TEMPERATURE_RANGE = (-60.0, 60.0)
    HUMIDITY_RANGE = (0.0, 100.0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EnvironmentalReading":
        """
        Builds a reading from a provider payload.

        Accepts the keys used by the air-quality function: pm25, aqi and the
        optional temperature and humidity.
        """
        return cls(
            pm25=data["pm25"],
            aqi=data["aqi"],
            temperature=data.get("temperature"),
            humidity=data.get("humidity"),
        )

    def normalized(self) -> tuple["EnvironmentalReading", tuple[str, ...]]:
        """
        Returns a copy with every numeric field clamped into its domain.

        Returns:
            A tuple containing:
            - EnvironmentalReading: The clamped reading
            - tuple[str, ...]: Names of the fields that had to be clamped

        Raises:
            TypeError: If a field is not numeric
            ValidationError: If a field is NaN or infinite
        """
        clamped: list[str] = []
        reading = replace(
            self,
            pm25=clamp_field("pm25", self.pm25, *self.PM25_RANGE, clamped),
            aqi=clamp_field("aqi", self.aqi, *self.AQI_RANGE, clamped),
            temperature=clamp_optional_field(
                "temperature", self.temperature, *self.TEMPERATURE_RANGE, clamped
            ),
            humidity=clamp_optional_field(
                "humidity", self.humidity, *self.HUMIDITY_RANGE, clamped
            ),
        )
        return reading, tuple(clamped)

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Strictly validates all fields without clamping or raising.

        Intended for callers that want to reject bad provider data upstream
        instead of relying on the engine's clamping.

        Returns:
            A tuple containing:
            - bool: True if all validations pass, False otherwise
            - Optional[str]: None if valid, or a descriptive error message if invalid
        """
        fields = (
            ("pm25", self.pm25, self.PM25_RANGE),
            ("aqi", self.aqi, self.AQI_RANGE),
            ("temperature", self.temperature, self.TEMPERATURE_RANGE),
            ("humidity", self.humidity, self.HUMIDITY_RANGE),
        )
        for name, value, (lower, upper) in fields:
            if value is None and name in ("temperature", "humidity"):
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return (False, f"{name} must be a number")
            if not math.isfinite(value):
                return (False, f"{name} must be finite")
            if value < lower or value > upper:
                return (False, f"{name} must be between {lower:g} and {upper:g}")

        return (True, None)
