"""
Tests for PersonalFactors component.

Tests cover:
- Equivalence classes: enum parsing from strings and members
- Error scenarios: out-of-set categorical values, wrong types
- Full decision path coverage: clamping, payload parsing, derived properties
"""

import math

import pytest

from phri.exceptions import InvalidEnumError, ValidationError
from phri.personal_factors import (
    ChronicCondition,
    DustSensitivity,
    PersonalFactors,
    PhysicalActivity,
)


class TestPersonalFactorsParsing:
    """Test suite for categorical parsing."""

    def test_string_values_parsed_to_enums(self):
        """Equivalence class: String values → enum members."""
        factors = PersonalFactors(
            age=40,
            chronic_conditions=["asthma", "diabetes"],
            dust_sensitivity="high",
            physical_activity="active",
        )
        assert factors.chronic_conditions == frozenset(
            {ChronicCondition.ASTHMA, ChronicCondition.DIABETES}
        )
        assert factors.dust_sensitivity is DustSensitivity.HIGH
        assert factors.physical_activity is PhysicalActivity.ACTIVE

    def test_unknown_condition_rejected(self):
        """Error scenario: Condition outside the set → InvalidEnumError."""
        with pytest.raises(InvalidEnumError) as exc_info:
            PersonalFactors(age=40, chronic_conditions=["asthma", "gout"])
        assert exc_info.value.field == "chronic_conditions"
        assert exc_info.value.value == "gout"
        assert "asthma" in exc_info.value.allowed

    def test_unknown_dust_sensitivity_rejected(self):
        """Error scenario: 'medium' is not a declared sensitivity level."""
        with pytest.raises(InvalidEnumError):
            PersonalFactors(age=40, dust_sensitivity="medium")

    def test_unknown_activity_rejected(self):
        """Error scenario: Unknown activity level → InvalidEnumError."""
        with pytest.raises(InvalidEnumError):
            PersonalFactors(age=40, physical_activity="extreme")

    def test_conditions_as_plain_string_rejected(self):
        """Error scenario: A bare string is not a collection of conditions."""
        with pytest.raises(TypeError):
            PersonalFactors(age=40, chronic_conditions="asthma")

    def test_non_bool_flag_rejected(self):
        """Error scenario: Flags must be real booleans."""
        with pytest.raises(TypeError):
            PersonalFactors(age=40, wearing_mask="yes")

    def test_from_dict_accepts_camel_case(self):
        """Decision path: Profile store payload with camelCase keys."""
        factors = PersonalFactors.from_dict({
            "age": 70,
            "chronicConditions": ["copd"],
            "dustSensitivity": "moderate",
            "outdoorTimeMinutes": 120,
            "physicalActivity": "sedentary",
            "wearingMask": True,
            "hasAirPurifier": False,
            "hasSymptoms": True,
            "gender": "female",
        })
        assert factors.age == 70
        assert factors.chronic_conditions == frozenset({ChronicCondition.COPD})
        assert factors.dust_sensitivity is DustSensitivity.MODERATE
        assert factors.outdoor_time_minutes == 120
        assert factors.wearing_mask is True
        assert factors.has_symptoms is True


class TestPersonalFactorsProperties:
    """Test suite for derived properties."""

    @pytest.mark.parametrize("condition", ["asthma", "copd", "heart_disease", "pregnant"])
    def test_high_risk_conditions(self, condition):
        """Equivalence class: High-risk group members."""
        factors = PersonalFactors(age=40, chronic_conditions=[condition])
        assert factors.has_high_risk_condition is True
        assert factors.has_health_conditions is True

    @pytest.mark.parametrize("condition", ["diabetes", "hypertension", "allergy", "sinusitis", "immunocompromised"])
    def test_other_conditions_not_high_risk(self, condition):
        """Equivalence class: Conditions outside the high-risk group."""
        factors = PersonalFactors(age=40, chronic_conditions=[condition])
        assert factors.has_high_risk_condition is False
        assert factors.has_health_conditions is True

    def test_no_conditions(self, baseline_factors):
        """Equivalence class: No conditions at all."""
        assert baseline_factors.has_high_risk_condition is False
        assert baseline_factors.has_health_conditions is False

    def test_outdoor_hours(self):
        """Decision path: Minutes converted to hours."""
        assert PersonalFactors(age=40, outdoor_time_minutes=150).outdoor_hours == 2.5


class TestPersonalFactorsNormalization:
    """Test suite for numeric clamping."""

    def test_in_range_unchanged(self, baseline_factors):
        """Equivalence class: In-range values → nothing clamped."""
        normalized, clamped = baseline_factors.normalized()
        assert clamped == ()
        assert normalized.age == 30

    def test_negative_age_clamped(self):
        """Boundary: Negative age → 0."""
        normalized, clamped = PersonalFactors(age=-3).normalized()
        assert normalized.age == 0
        assert clamped == ("age",)

    def test_outdoor_time_above_day_clamped(self):
        """Boundary: More than 1440 minutes → 1440."""
        normalized, clamped = PersonalFactors(age=30, outdoor_time_minutes=2000).normalized()
        assert normalized.outdoor_time_minutes == 1440
        assert clamped == ("outdoor_time_minutes",)

    def test_nan_outdoor_time_rejected(self):
        """Error scenario: NaN outdoor time → ValidationError."""
        with pytest.raises(ValidationError):
            PersonalFactors(age=30, outdoor_time_minutes=math.nan).normalized()

    def test_normalization_keeps_categorical_fields(self):
        """Decision path: Clamping does not alter enums or flags."""
        factors = PersonalFactors(
            age=200, chronic_conditions=["asthma"], dust_sensitivity="high", wearing_mask=True
        )
        normalized, _ = factors.normalized()
        assert normalized.chronic_conditions == factors.chronic_conditions
        assert normalized.dust_sensitivity is DustSensitivity.HIGH
        assert normalized.wearing_mask is True
