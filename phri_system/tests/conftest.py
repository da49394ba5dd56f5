"""
Pytest configuration for PHRI System tests.

Registers custom markers and provides shared fixtures.
"""

import pytest

from phri.environmental_reading import EnvironmentalReading
from phri.personal_factors import PersonalFactors


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def clean_reading():
    """Fixture providing a reading with good air quality."""
    return EnvironmentalReading(pm25=10, aqi=30)


@pytest.fixture
def baseline_factors():
    """Fixture providing a healthy adult with no risk modifiers."""
    return PersonalFactors(
        age=30,
        chronic_conditions=[],
        dust_sensitivity="low",
        outdoor_time_minutes=30,
        physical_activity="sedentary",
        wearing_mask=False,
        has_air_purifier=False,
        has_symptoms=False,
    )
