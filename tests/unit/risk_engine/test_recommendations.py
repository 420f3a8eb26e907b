"""
Tests for the recommendation generators and the plan assembler.

Covers:
- Tier selection for fitness and diet
- Diet menu fallback for unknown disease types
- Fixed sleep, stress and weekly templates
- Assembler completeness and idempotence
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from risk_engine.domain.models import DiseaseType, RiskLevel
from risk_engine.errors import UnknownRiskLevelError
from risk_engine.services.recommendations import (
    LIFESTYLE_MODIFICATIONS,
    MENUS,
    assemble_recommendation,
    generate_diet_plan,
    generate_fitness_plan,
    generate_sleep_recommendations,
    generate_stress_management,
    generate_weekly_schedule,
)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class TestFitnessPlan:
    @pytest.mark.parametrize(
        "level,count,weeks,intensity",
        [
            (RiskLevel.LOW, 3, 8, "Moderate to vigorous"),
            (RiskLevel.MEDIUM, 4, 12, "Moderate intensity"),
            (RiskLevel.HIGH, 5, 16, "Gentle progression - Start slow"),
        ],
    )
    def test_tiers(self, level: RiskLevel, count: int, weeks: int, intensity: str) -> None:
        plan = generate_fitness_plan(DiseaseType.OBESITY, level)

        assert len(plan.exercises) == count
        assert plan.duration_weeks == weeks
        assert plan.intensity == intensity

    def test_disease_type_does_not_change_exercises(self) -> None:
        plans = [generate_fitness_plan(d, RiskLevel.MEDIUM) for d in DiseaseType]
        assert all(plan == plans[0] for plan in plans)

    def test_high_tier_names(self) -> None:
        plan = generate_fitness_plan(DiseaseType.HEART_DISEASE, RiskLevel.HIGH)
        assert [e.name for e in plan.exercises] == [
            "Walking Program",
            "Aqua Aerobics",
            "Stationary Bike",
            "Chair Exercises",
            "Balance Training",
        ]


class TestDietPlan:
    @pytest.mark.parametrize(
        "level,calories",
        [(RiskLevel.LOW, 2000), (RiskLevel.MEDIUM, 1800), (RiskLevel.HIGH, 1600)],
    )
    def test_calorie_targets(self, level: RiskLevel, calories: int) -> None:
        assert generate_diet_plan(DiseaseType.DIABETES, level).calories_target == calories

    @pytest.mark.parametrize("disease", list(DiseaseType))
    def test_menu_per_disease(self, disease: DiseaseType) -> None:
        plan = generate_diet_plan(disease, RiskLevel.LOW)

        assert plan.meals == list(MENUS[disease])
        assert [m.type for m in plan.meals] == ["Breakfast", "Lunch", "Dinner", "Snacks"]
        assert len(plan.guidelines) == 8

    def test_unknown_disease_falls_back_to_diabetes_menu(self) -> None:
        plan = generate_diet_plan("kidney_disease", RiskLevel.HIGH)

        assert plan.meals == list(MENUS[DiseaseType.DIABETES])
        assert plan.calories_target == 1600

    def test_menus_differ_between_diseases(self) -> None:
        breakfasts = {MENUS[d][0].notes for d in DiseaseType}
        assert len(breakfasts) == len(DiseaseType)


class TestFixedTemplates:
    @pytest.mark.parametrize("level", list(RiskLevel))
    def test_sleep_is_independent_of_risk(self, level: RiskLevel) -> None:
        plan = generate_sleep_recommendations(level)
        assert plan.target_hours == 7.5
        assert plan.tips == generate_sleep_recommendations(RiskLevel.LOW).tips
        assert len(plan.tips) == 8

    def test_stress_management_lists(self) -> None:
        plan = generate_stress_management(RiskLevel.HIGH)
        assert plan.techniques[0] == "Deep breathing exercises (4-7-8 technique)"
        assert len(plan.techniques) == 8
        assert len(plan.daily_practices) == 8
        assert plan == generate_stress_management(RiskLevel.LOW)

    def test_weekly_schedule_covers_the_week_in_order(self) -> None:
        schedule = generate_weekly_schedule(DiseaseType.HYPERTENSION, RiskLevel.MEDIUM)

        assert list(schedule) == WEEKDAYS
        for day in schedule.values():
            assert len(day.morning) == len(day.afternoon) == len(day.evening) == 3
        assert schedule["Monday"].morning == ["30 min walk", "Healthy breakfast", "Hydrate"]
        assert schedule["Sunday"].evening == ["Light dinner", "Prepare for week", "Early rest"]


class TestAssembler:
    def test_heart_disease_high_plan(self) -> None:
        plan = assemble_recommendation(DiseaseType.HEART_DISEASE, RiskLevel.HIGH)

        assert len(plan.fitness_plan.exercises) == 5
        assert plan.fitness_plan.duration_weeks == 16
        assert plan.diet_plan.meals == list(MENUS[DiseaseType.HEART_DISEASE])
        assert plan.diet_plan.calories_target == 1600
        assert plan.lifestyle_modifications == list(LIFESTYLE_MODIFICATIONS)
        assert len(plan.lifestyle_modifications) == 8

    def test_string_inputs_match_enum_inputs(self) -> None:
        assert assemble_recommendation("obesity", "medium") == assemble_recommendation(
            DiseaseType.OBESITY, RiskLevel.MEDIUM
        )

    def test_unknown_disease_still_resolves(self) -> None:
        plan = assemble_recommendation("asthma", RiskLevel.LOW)
        assert plan.diet_plan.meals == list(MENUS[DiseaseType.DIABETES])
        assert plan.fitness_plan.duration_weeks == 8

    def test_unknown_risk_level_is_rejected(self) -> None:
        with pytest.raises(UnknownRiskLevelError, match="severe"):
            assemble_recommendation(DiseaseType.DIABETES, "severe")

    @given(disease=st.sampled_from(DiseaseType), level=st.sampled_from(RiskLevel))
    def test_assembly_is_idempotent(self, disease: DiseaseType, level: RiskLevel) -> None:
        first = assemble_recommendation(disease, level)
        second = assemble_recommendation(disease, level)

        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_returned_plans_do_not_share_mutable_lists(self) -> None:
        first = assemble_recommendation(DiseaseType.DIABETES, RiskLevel.LOW)
        first.lifestyle_modifications.append("Changed by caller")

        second = assemble_recommendation(DiseaseType.DIABETES, RiskLevel.LOW)
        assert "Changed by caller" not in second.lifestyle_modifications
