"""
Core services for the risk engine.

This package contains the BMI calculator, the disease risk scorers, the
recommendation generators and the assessment pipeline that ties them together.
"""

from .assessment import AssessmentService, Submission, SubmissionRecord, evaluate_assessment
from .bmi import compute_bmi, validated_bmi
from .recommendations import (
    assemble_recommendation,
    generate_diet_plan,
    generate_fitness_plan,
    generate_sleep_recommendations,
    generate_stress_management,
    generate_weekly_schedule,
)
from .result import Result
from .risk_scoring import (
    score_all,
    score_diabetes,
    score_heart_disease,
    score_hypertension,
    score_obesity,
)

__all__ = [
    "AssessmentService",
    "Submission",
    "SubmissionRecord",
    "evaluate_assessment",
    "compute_bmi",
    "validated_bmi",
    "assemble_recommendation",
    "generate_diet_plan",
    "generate_fitness_plan",
    "generate_sleep_recommendations",
    "generate_stress_management",
    "generate_weekly_schedule",
    "Result",
    "score_all",
    "score_diabetes",
    "score_heart_disease",
    "score_hypertension",
    "score_obesity",
]
