"""Shared fixtures: the reference healthy adult used across scorer tests."""

from __future__ import annotations

import pytest

from risk_engine.domain.models import AlcoholConsumption, Gender, HealthAssessment, Profile


def make_assessment(**overrides: object) -> HealthAssessment:
    """Baseline assessment that fires no diabetes rule except family history."""
    fields: dict[str, object] = {
        "glucose_level": 95,
        "blood_pressure_systolic": 120,
        "blood_pressure_diastolic": 80,
        "cholesterol": 180,
        "heart_rate": 72,
        "exercise_hours": 3,
        "smoking": False,
        "alcohol_consumption": AlcoholConsumption.MODERATE,
        "family_history": True,
        "stress_level": 6,
        "sleep_hours": 7,
    }
    fields.update(overrides)
    return HealthAssessment(**fields)


def make_profile(**overrides: object) -> Profile:
    fields: dict[str, object] = {"age": 30, "gender": Gender.MALE, "weight": 70, "height": 175}
    fields.update(overrides)
    return Profile(**fields)


@pytest.fixture
def assessment() -> HealthAssessment:
    return make_assessment()


@pytest.fixture
def profile() -> Profile:
    return make_profile()


@pytest.fixture
def quiet_assessment() -> HealthAssessment:
    """Assessment that fires no rule for any disease."""
    return HealthAssessment(
        exercise_hours=5,
        smoking=False,
        alcohol_consumption=AlcoholConsumption.NONE,
        family_history=False,
        stress_level=3,
    )


@pytest.fixture
def assessment_factory():
    return make_assessment


@pytest.fixture
def profile_factory():
    return make_profile
