"""
Personal factors module for the PHRI System.

This module defines the PersonalFactors dataclass and the categorical
enumerations that describe a user's vulnerability and behaviour: age,
chronic conditions, dust sensitivity, time spent outdoors, physical activity,
and protective measures such as masks and air purifiers.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Type, TypeVar

from .exceptions import InvalidEnumError
from .validation import clamp_field


class ChronicCondition(str, Enum):
    ASTHMA = "asthma"
    COPD = "copd"
    HEART_DISEASE = "heart_disease"
    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    ALLERGY = "allergy"
    SINUSITIS = "sinusitis"
    PREGNANT = "pregnant"
    IMMUNOCOMPROMISED = "immunocompromised"


class DustSensitivity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class PhysicalActivity(str, Enum):
    SEDENTARY = "sedentary"
    ACTIVE = "active"


# Conditions that raise the personal sub-score of the point model
HIGH_RISK_CONDITIONS = frozenset({
    ChronicCondition.ASTHMA,
    ChronicCondition.COPD,
    ChronicCondition.HEART_DISEASE,
    ChronicCondition.PREGNANT,
})

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], field_name: str, value: object) -> E:
    """
    Converts a raw value into a member of enum_cls.

    Raises:
        InvalidEnumError: If value is not one of the enum's values. No default
            is substituted, since a guessed vulnerability level would
            misrepresent health risk.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidEnumError(field_name, value, [m.value for m in enum_cls]) from None


def parse_conditions(values: Iterable[object]) -> frozenset:
    """Parses a collection of chronic condition names into a frozenset."""
    if isinstance(values, (str, bytes)):
        raise TypeError("chronic_conditions must be a collection of names, not a string")
    return frozenset(
        parse_enum(ChronicCondition, "chronic_conditions", value) for value in values
    )


# Keys emitted by the profile store (camelCase) mapped to field names
_CAMEL_CASE_KEYS = {
    "chronicConditions": "chronic_conditions",
    "dustSensitivity": "dust_sensitivity",
    "outdoorTimeMinutes": "outdoor_time_minutes",
    "physicalActivity": "physical_activity",
    "wearingMask": "wearing_mask",
    "hasAirPurifier": "has_air_purifier",
    "hasSymptoms": "has_symptoms",
}


@dataclass(frozen=True)
class PersonalFactors:
    """
    Represents the personal and behavioural inputs to the risk score.

    Attributes:
        age: Age in years (domain 0-150)
        chronic_conditions: Set of diagnosed chronic conditions
        dust_sensitivity: Self-reported sensitivity to dust
        outdoor_time_minutes: Expected or actual minutes outdoors today (domain 0-1440)
        physical_activity: Activity level while outdoors
        wearing_mask: Whether the user wears a mask outdoors
        has_air_purifier: Whether the user runs an air purifier indoors
        has_symptoms: Whether the user reported any symptoms today
    """

    age: int
    chronic_conditions: frozenset = field(default_factory=frozenset)
    dust_sensitivity: DustSensitivity = DustSensitivity.LOW
    outdoor_time_minutes: float = 0
    physical_activity: PhysicalActivity = PhysicalActivity.SEDENTARY
    wearing_mask: bool = False
    has_air_purifier: bool = False
    has_symptoms: bool = False

    AGE_RANGE = (0.0, 150.0)
    OUTDOOR_TIME_RANGE = (0.0, 1440.0)

    def __post_init__(self) -> None:
        # Categorical fields are parsed eagerly so bad input fails at construction
        object.__setattr__(
            self, "chronic_conditions", parse_conditions(self.chronic_conditions)
        )
        object.__setattr__(
            self,
            "dust_sensitivity",
            parse_enum(DustSensitivity, "dust_sensitivity", self.dust_sensitivity),
        )
        object.__setattr__(
            self,
            "physical_activity",
            parse_enum(PhysicalActivity, "physical_activity", self.physical_activity),
        )
        for flag in ("wearing_mask", "has_air_purifier", "has_symptoms"):
            if not isinstance(getattr(self, flag), bool):
                raise TypeError(f"{flag} must be a bool")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonalFactors":
        """
        Builds personal factors from a profile/settings payload.

        Accepts both snake_case field names and the camelCase keys used by the
        profile store. Unknown keys are ignored.
        """
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def has_high_risk_condition(self) -> bool:
        """True if any condition from the high-risk group is present."""
        return bool(self.chronic_conditions & HIGH_RISK_CONDITIONS)

    @property
    def has_health_conditions(self) -> bool:
        return bool(self.chronic_conditions)

    @property
    def outdoor_hours(self) -> float:
        return self.outdoor_time_minutes / 60

    def normalized(self) -> tuple["PersonalFactors", tuple[str, ...]]:
        """
        Returns a copy with age and outdoor time clamped into their domains.

        Returns:
            A tuple containing:
            - PersonalFactors: The clamped factors
            - tuple[str, ...]: Names of the fields that had to be clamped

        Raises:
            TypeError: If a numeric field is not numeric
            ValidationError: If a numeric field is NaN or infinite
        """
        clamped: list[str] = []
        factors = replace(
            self,
            age=clamp_field("age", self.age, *self.AGE_RANGE, clamped),
            outdoor_time_minutes=clamp_field(
                "outdoor_time_minutes",
                self.outdoor_time_minutes,
                *self.OUTDOOR_TIME_RANGE,
                clamped,
            ),
        )
        return factors, tuple(clamped)
