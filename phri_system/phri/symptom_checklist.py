"""
Symptom checklist module for the PHRI System.

This module defines the SymptomChecklist dataclass which mirrors the daily
symptom log: seven air-pollution related symptoms, each with a presence flag
and a 0-10 severity. The checklist reduces to a 0-100 symptom score that
feeds the weighted PHRI model.
"""

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .validation import clamp, clamp_field, require_number, round_half_up

# (base weight, severity multiplier) per symptom
SYMPTOM_WEIGHTS: Mapping[str, tuple[float, float]] = {
    "cough": (15, 0.5),
    "sneeze": (10, 0.3),
    "wheezing": (20, 0.7),
    "chest_tightness": (20, 0.7),
    "eye_irritation": (10, 0.3),
    "fatigue": (15, 0.5),
    "shortness_of_breath": (25, 0.8),
}

MAX_SEVERITY = 10
MAX_SYMPTOM_SCORE = 100


@dataclass(frozen=True)
class SymptomChecklist:
    """
    Today's symptom checklist for one user.

    Severity only counts when the matching symptom is flagged present.
    """

    cough: bool = False
    cough_severity: float = 0
    sneeze: bool = False
    sneeze_severity: float = 0
    wheezing: bool = False
    wheezing_severity: float = 0
    chest_tightness: bool = False
    chest_tightness_severity: float = 0
    eye_irritation: bool = False
    eye_irritation_severity: float = 0
    fatigue: bool = False
    fatigue_severity: float = 0
    shortness_of_breath: bool = False
    shortness_of_breath_severity: float = 0
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SymptomChecklist":
        """
        Builds a checklist from a symptom-log row.

        Missing severities (stored as NULL) are read as 0.
        """
        kwargs: dict[str, Any] = {"notes": data.get("notes")}
        for name in SYMPTOM_WEIGHTS:
            kwargs[name] = bool(data.get(name, False))
            severity = data.get(f"{name}_severity")
            kwargs[f"{name}_severity"] = 0 if severity is None else severity
        return cls(**kwargs)

    def severity(self, name: str) -> float:
        """Returns the severity of a symptom clamped to 0-10."""
        value = require_number(f"{name}_severity", getattr(self, f"{name}_severity"))
        return clamp(value, 0, MAX_SEVERITY)

    def normalized(self) -> tuple["SymptomChecklist", tuple[str, ...]]:
        """
        Returns a copy with every severity clamped to 0-10.

        Returns:
            A tuple containing:
            - SymptomChecklist: The clamped checklist
            - tuple[str, ...]: Names of the severity fields that had to be clamped

        Raises:
            TypeError: If a severity is not numeric
            ValidationError: If a severity is NaN or infinite
        """
        clamped: list[str] = []
        severities = {
            f"{name}_severity": clamp_field(
                f"{name}_severity", getattr(self, f"{name}_severity"), 0, MAX_SEVERITY, clamped
            )
            for name in SYMPTOM_WEIGHTS
        }
        return replace(self, **severities), tuple(clamped)

    def present_symptoms(self) -> list[str]:
        return [name for name in SYMPTOM_WEIGHTS if getattr(self, name)]

    @property
    def any_present(self) -> bool:
        return bool(self.present_symptoms())

    def score(self) -> int:
        """
        Computes the 0-100 symptom score.

        Each present symptom contributes its base weight plus
        severity * multiplier. The sum is rounded half-up and capped at 100.
        """
        total = 0.0
        for name in self.present_symptoms():
            base, multiplier = SYMPTOM_WEIGHTS[name]
            total += base + self.severity(name) * multiplier
        return int(min(round_half_up(total), MAX_SYMPTOM_SCORE))
