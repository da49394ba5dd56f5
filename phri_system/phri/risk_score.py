"""
Risk score module for the PHRI System.

This module defines the RiskScore dataclass, the immutable result of one risk
computation. Besides the final clamped value and category it carries the
named contributions that make up the score so callers can render a stacked
explanation, and the list of inputs that had to be clamped.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _freeze(mapping: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RiskScore:
    """
    Result of a PHRI computation.

    Attributes:
        value: Final score, clamped to the scale's range and rounded
        category: Category name from the scale's threshold table
        scale: Name of the scale the score is expressed on
        raw_score: Score before clamping
        breakdown: Named contributions; for the point scale
            environmental + personal + behavioral + symptoms - protective
            equals raw_score
        components: Sub-terms of the weighted model's environmental score
            (empty for the point scale)
        clamped_fields: Input fields that were clamped into range
    """

    value: float
    category: str
    scale: str
    raw_score: float
    breakdown: Mapping[str, float] = field(default_factory=dict)
    components: Mapping[str, float] = field(default_factory=dict)
    clamped_fields: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "breakdown", _freeze(self.breakdown))
        object.__setattr__(self, "components", _freeze(self.components))
        object.__setattr__(self, "clamped_fields", tuple(self.clamped_fields))

    def to_dict(self) -> dict[str, object]:
        """
        Converts the score to a serializable dictionary.

        Returns:
            A dictionary with plain dict copies of the breakdown mappings
        """
        return {
            "value": self.value,
            "category": self.category,
            "scale": self.scale,
            "raw_score": self.raw_score,
            "breakdown": dict(self.breakdown),
            "components": dict(self.components),
            "clamped_fields": list(self.clamped_fields),
        }
