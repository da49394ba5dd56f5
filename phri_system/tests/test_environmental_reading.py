"""
Tests for EnvironmentalReading component.

Tests cover:
- Equivalence classes: in-range readings, out-of-range readings
- Boundary value analysis: domain bounds for pm25 and aqi
- Error scenarios: non-finite and non-numeric values
- Full decision path coverage: clamping and strict validation branches
"""

import math

import pytest

from phri.environmental_reading import EnvironmentalReading
from phri.exceptions import ValidationError


class TestEnvironmentalReadingNormalization:
    """Test suite for EnvironmentalReading clamping."""

    # ==================== Equivalence Classes ====================

    def test_in_range_reading_unchanged(self):
        """Equivalence class: All values in range → nothing clamped."""
        reading = EnvironmentalReading(pm25=35.5, aqi=101, temperature=31, humidity=70)
        normalized, clamped = reading.normalized()
        assert normalized == reading
        assert clamped == ()

    def test_negative_pm25_clamped_to_zero(self):
        """Equivalence class: Negative pm25 → clamped to 0 and reported."""
        normalized, clamped = EnvironmentalReading(pm25=-5, aqi=40).normalized()
        assert normalized.pm25 == 0
        assert clamped == ("pm25",)

    def test_huge_aqi_clamped_to_maximum(self):
        """Equivalence class: AQI above 500 → clamped to 500."""
        normalized, clamped = EnvironmentalReading(pm25=40, aqi=900).normalized()
        assert normalized.aqi == 500
        assert clamped == ("aqi",)

    def test_optional_fields_stay_none(self):
        """Equivalence class: Missing weather fields → left as None."""
        normalized, clamped = EnvironmentalReading(pm25=12, aqi=50).normalized()
        assert normalized.temperature is None
        assert normalized.humidity is None
        assert clamped == ()

    def test_multiple_fields_reported_in_order(self):
        """Equivalence class: Several out-of-range fields → all reported."""
        reading = EnvironmentalReading(pm25=2000, aqi=-1, temperature=80, humidity=120)
        normalized, clamped = reading.normalized()
        assert clamped == ("pm25", "aqi", "temperature", "humidity")
        assert normalized.humidity == 100

    # ==================== Boundary Value Analysis ====================

    def test_pm25_at_upper_bound_not_clamped(self):
        """Boundary: pm25 exactly 1000 stays in range."""
        _, clamped = EnvironmentalReading(pm25=1000, aqi=0).normalized()
        assert clamped == ()

    def test_pm25_just_above_upper_bound_clamped(self):
        """Boundary: pm25 1000.1 is clamped."""
        normalized, clamped = EnvironmentalReading(pm25=1000.1, aqi=0).normalized()
        assert normalized.pm25 == 1000
        assert clamped == ("pm25",)

    # ==================== Error Scenarios ====================

    def test_nan_pm25_rejected(self):
        """Error scenario: NaN cannot be clamped → ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            EnvironmentalReading(pm25=math.nan, aqi=50).normalized()
        assert exc_info.value.field == "pm25"

    def test_infinite_aqi_rejected(self):
        """Error scenario: Infinity cannot be clamped → ValidationError."""
        with pytest.raises(ValidationError):
            EnvironmentalReading(pm25=20, aqi=math.inf).normalized()

    def test_string_pm25_rejected(self):
        """Error scenario: Wrong type → TypeError."""
        with pytest.raises(TypeError):
            EnvironmentalReading(pm25="80", aqi=50).normalized()

    def test_bool_aqi_rejected(self):
        """Error scenario: Booleans are not accepted as measurements."""
        with pytest.raises(TypeError):
            EnvironmentalReading(pm25=20, aqi=True).normalized()


class TestEnvironmentalReadingValidation:
    """Test suite for strict, non-raising validation."""

    def test_valid_reading(self):
        """Equivalence class: All valid values → validation passes."""
        valid, reason = EnvironmentalReading(pm25=20, aqi=70, humidity=50).validate()
        assert valid is True
        assert reason is None

    def test_negative_pm25_invalid(self):
        """Error scenario: Negative pm25 → validation fails."""
        valid, reason = EnvironmentalReading(pm25=-1, aqi=70).validate()
        assert valid is False
        assert "pm25" in reason

    def test_nan_humidity_invalid(self):
        """Error scenario: NaN humidity → validation fails without raising."""
        valid, reason = EnvironmentalReading(pm25=1, aqi=1, humidity=math.nan).validate()
        assert valid is False
        assert "humidity" in reason

    def test_from_dict_reads_provider_payload(self):
        """Decision path: Provider payload keys map onto fields."""
        reading = EnvironmentalReading.from_dict(
            {"pm25": 42.0, "aqi": 117, "temperature": 33.5, "location": "Bangkok"}
        )
        assert reading.pm25 == 42.0
        assert reading.aqi == 117
        assert reading.temperature == 33.5
        assert reading.humidity is None
