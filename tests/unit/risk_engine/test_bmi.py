"""
Tests for the BMI calculator and the profile guard in `services/bmi.py`.

Covers:
- Formula against known values
- Monotonicity properties (hypothesis)
- Rejection of non-positive and non-finite inputs
"""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from risk_engine.domain.models import Gender, Profile
from risk_engine.errors import InvalidProfileError
from risk_engine.services.bmi import compute_bmi, validated_bmi

weights = st.floats(min_value=1.0, max_value=400.0, allow_nan=False)
heights = st.floats(min_value=50.0, max_value=250.0, allow_nan=False)


def _profile(weight: float, height: float) -> Profile:
    return Profile(age=40, gender=Gender.OTHER, weight=weight, height=height)


def test_compute_bmi_known_value() -> None:
    assert compute_bmi(70, 175) == pytest.approx(22.857, abs=1e-3)
    assert compute_bmi(100, 200) == pytest.approx(25.0)


@given(weight=weights, height=heights)
def test_compute_bmi_is_deterministic_and_positive(weight: float, height: float) -> None:
    bmi = compute_bmi(weight, height)
    assert bmi == compute_bmi(weight, height)
    assert bmi > 0
    assert math.isfinite(bmi)


@given(w1=weights, w2=weights, height=heights)
def test_bmi_increases_with_weight(w1: float, w2: float, height: float) -> None:
    low, high = sorted((w1, w2))
    assert compute_bmi(low, height) <= compute_bmi(high, height)


@given(weight=weights, h1=heights, h2=heights)
def test_bmi_decreases_with_height(weight: float, h1: float, h2: float) -> None:
    short, tall = sorted((h1, h2))
    assert compute_bmi(weight, short) >= compute_bmi(weight, tall)


def test_validated_bmi_matches_formula() -> None:
    assert validated_bmi(_profile(70, 175)) == compute_bmi(70, 175)


@pytest.mark.parametrize(
    "weight,height",
    [(0, 175), (70, 0), (-70, 175), (70, -175), (float("nan"), 175), (70, float("nan"))],
)
def test_validated_bmi_rejects_unusable_measurements(weight: float, height: float) -> None:
    with pytest.raises(InvalidProfileError, match="Invalid profile data"):
        validated_bmi(_profile(weight, height))


def test_validated_bmi_rejects_non_finite_result() -> None:
    with pytest.raises(InvalidProfileError, match="Invalid BMI calculation result"):
        validated_bmi(_profile(float("inf"), 175))


def test_invalid_profile_error_carries_measurements() -> None:
    with pytest.raises(InvalidProfileError) as exc_info:
        validated_bmi(_profile(0, 180))
    assert exc_info.value.weight == 0
    assert exc_info.value.height == 180
