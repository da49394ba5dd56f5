"""
Tests for TravelPlan component.

Tests cover:
- Equivalence classes: enum parsing from strings and members
- Error scenarios: unknown travel modes and mask types
- Full decision path coverage: payload parsing, duration clamping
"""

import pytest

from phri.exceptions import InvalidEnumError
from phri.travel import MaskType, TravelMode, TravelPlan


class TestTravelPlan:
    """Test suite for TravelPlan."""

    def test_defaults(self):
        plan = TravelPlan()
        assert plan.mode is TravelMode.WALKING
        assert plan.duration_minutes == 30
        assert plan.mask_type is MaskType.NONE

    def test_string_values_parsed(self):
        """Equivalence class: String values → enum members."""
        plan = TravelPlan("bts_mrt", 45, "surgical")
        assert plan.mode is TravelMode.BTS_MRT
        assert plan.mask_type is MaskType.SURGICAL

    def test_unknown_mode_rejected(self):
        """Error scenario: 'train' is not a declared travel mode."""
        with pytest.raises(InvalidEnumError) as exc_info:
            TravelPlan("train", 45)
        assert "bts_mrt" in exc_info.value.allowed

    def test_from_dict_camel_case(self):
        """Decision path: Trip payload with camelCase keys."""
        plan = TravelPlan.from_dict({"mode": "motorcycle", "durationMinutes": 25, "maskType": "cloth"})
        assert plan.mode is TravelMode.MOTORCYCLE
        assert plan.duration_minutes == 25
        assert plan.mask_type is MaskType.CLOTH

    def test_from_dict_missing_mask_is_none(self):
        plan = TravelPlan.from_dict({"mode": "car", "duration_minutes": 10, "maskType": None})
        assert plan.mask_type is MaskType.NONE

    def test_negative_duration_clamped(self):
        """Boundary: Negative duration → 0 and reported."""
        normalized, clamped = TravelPlan("bus", -10).normalized()
        assert normalized.duration_minutes == 0
        assert clamped == ("duration_minutes",)

    def test_string_duration_rejected(self):
        with pytest.raises(TypeError):
            TravelPlan("bus", "20").normalized()
