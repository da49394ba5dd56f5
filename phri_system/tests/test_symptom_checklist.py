"""
Tests for SymptomChecklist component.

Tests cover:
- Equivalence classes: no symptoms, single symptom, many symptoms
- Boundary value analysis: severity bounds, the 100-point cap
- Full decision path coverage: severity ignored for absent symptoms, payload parsing
"""

import math

import pytest

from phri.exceptions import ValidationError
from phri.symptom_checklist import SYMPTOM_WEIGHTS, SymptomChecklist


class TestSymptomChecklistScore:
    """Test suite for the 0-100 symptom score."""

    # ==================== Equivalence Classes ====================

    def test_no_symptoms_scores_zero(self):
        """Equivalence class: Nothing reported → 0."""
        checklist = SymptomChecklist()
        assert checklist.score() == 0
        assert checklist.any_present is False

    def test_single_symptom_without_severity(self):
        """Equivalence class: One symptom, severity 0 → base weight only."""
        assert SymptomChecklist(cough=True).score() == 15

    def test_single_symptom_with_severity(self):
        """Equivalence class: Wheezing at severity 10 → 20 + 10 * 0.7 = 27."""
        assert SymptomChecklist(wheezing=True, wheezing_severity=10).score() == 27

    def test_severity_scales_multiplier_in_full(self):
        """Equivalence class: Severity multiplies directly, cough at 10 → 15 + 10 * 0.5 = 20, not 15 + 0.5."""
        assert SymptomChecklist(cough=True, cough_severity=10).score() == 20

    def test_two_symptoms_added(self):
        """Equivalence class: Cough (15 + 4*0.5) + fatigue (15 + 6*0.5) = 35."""
        checklist = SymptomChecklist(
            cough=True, cough_severity=4, fatigue=True, fatigue_severity=6
        )
        assert checklist.score() == 35
        assert checklist.present_symptoms() == ["cough", "fatigue"]

    def test_half_point_rounds_up(self):
        """Boundary: Sneeze 10 + 5*0.3 = 11.5 → 12."""
        assert SymptomChecklist(sneeze=True, sneeze_severity=5).score() == 12

    # ==================== Boundary Value Analysis ====================

    def test_all_symptoms_capped_at_100(self):
        """Boundary: Every symptom at maximum severity → capped at 100."""
        kwargs = {}
        for name in SYMPTOM_WEIGHTS:
            kwargs[name] = True
            kwargs[f"{name}_severity"] = 10
        assert SymptomChecklist(**kwargs).score() == 100

    def test_severity_above_ten_clamped(self):
        """Boundary: Severity 25 counts as 10."""
        assert SymptomChecklist(shortness_of_breath=True, shortness_of_breath_severity=25).score() == 33

    def test_negative_severity_clamped(self):
        """Boundary: Negative severity counts as 0."""
        assert SymptomChecklist(cough=True, cough_severity=-4).score() == 15

    # ==================== Decision Path Coverage ====================

    def test_severity_ignored_when_absent(self):
        """Decision path: Severity without the symptom flag adds nothing."""
        assert SymptomChecklist(cough=False, cough_severity=9).score() == 0

    def test_from_dict_handles_null_severity(self):
        """Decision path: Stored NULL severity reads as 0."""
        checklist = SymptomChecklist.from_dict({
            "cough": True,
            "cough_severity": None,
            "eye_irritation": True,
            "eye_irritation_severity": 10,
            "notes": "after commute",
        })
        assert checklist.score() == 15 + 10 + 3
        assert checklist.notes == "after commute"

    def test_non_numeric_severity_rejected(self):
        """Error scenario: Non-numeric severity for a present symptom → TypeError."""
        with pytest.raises(TypeError):
            SymptomChecklist(cough=True, cough_severity="bad").score()


class TestSymptomChecklistNormalization:
    """Test suite for severity clamping diagnostics."""

    def test_in_range_unchanged(self):
        checklist = SymptomChecklist(cough=True, cough_severity=4)
        normalized, clamped = checklist.normalized()
        assert normalized == checklist
        assert clamped == ()

    def test_out_of_range_severities_reported_in_order(self):
        """Boundary: Severities outside 0-10 are clamped and listed in symptom order."""
        checklist = SymptomChecklist(
            wheezing=True, wheezing_severity=12, cough=True, cough_severity=-1
        )
        normalized, clamped = checklist.normalized()

        assert clamped == ("cough_severity", "wheezing_severity")
        assert normalized.cough_severity == 0
        assert normalized.wheezing_severity == 10
        assert normalized.wheezing is True

    def test_absent_symptom_severity_still_clamped(self):
        _, clamped = SymptomChecklist(fatigue_severity=11).normalized()
        assert clamped == ("fatigue_severity",)

    def test_nan_severity_rejected(self):
        with pytest.raises(ValidationError):
            SymptomChecklist(sneeze=True, sneeze_severity=math.nan).normalized()
