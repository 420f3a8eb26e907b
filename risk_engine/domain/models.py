"""
Domain models for health assessments, risk scores and recommendation plans.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation and are frozen: every value is created once
and handed to the caller, the engine never keeps a reference.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AlcoholConsumption(str, Enum):
    """Self-reported drinking habit."""

    NONE = "none"
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class DiseaseType(str, Enum):
    """Diseases the engine scores, in evaluation order."""

    DIABETES = "diabetes"
    HEART_DISEASE = "heart_disease"
    HYPERTENSION = "hypertension"
    OBESITY = "obesity"


class RiskLevel(str, Enum):
    """Ordinal risk classification: low < medium < high."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]

    # str would otherwise order the values alphabetically
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class HealthAssessment(BaseModel):
    """
    One submitted health assessment.

    Field bounds mirror the checks the intake form applies before a
    submission is accepted; scorers rely on them and never re-validate.
    """

    model_config = ConfigDict(frozen=True)

    glucose_level: float | None = Field(None, ge=0, le=1000, description="Fasting glucose, mg/dL")
    blood_pressure_systolic: int | None = Field(None, ge=60, le=300, description="mmHg")
    blood_pressure_diastolic: int | None = Field(None, ge=40, le=200, description="mmHg")
    cholesterol: float | None = Field(None, ge=0, le=1000, description="Total cholesterol, mg/dL")
    heart_rate: int | None = Field(None, ge=40, le=200, description="Resting heart rate, bpm")
    sleep_hours: float | None = Field(None, ge=0, le=24, description="Average nightly sleep")

    exercise_hours: float = Field(ge=0, le=24, description="Weekly exercise hours")
    smoking: bool
    alcohol_consumption: AlcoholConsumption
    family_history: bool
    stress_level: int = Field(default=5, ge=1, le=10)


class Profile(BaseModel):
    """Biometric profile owned by the account layer."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(ge=0, le=130)
    gender: Gender
    # Not range checked here: the BMI calculator rejects non-positive values
    height: float = Field(description="Height in centimetres")
    weight: float = Field(description="Weight in kilograms")


class RiskScore(BaseModel):
    """Risk classification for one disease."""

    model_config = ConfigDict(frozen=True)

    disease_type: DiseaseType
    risk_level: RiskLevel
    confidence_score: float = Field(ge=0.0, le=100.0)
    risk_factors: list[str] = Field(default_factory=list)


class Exercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    duration: str
    frequency: str
    description: str


class FitnessPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercises: list[Exercise]
    duration_weeks: int = Field(gt=0)
    intensity: str


class Meal(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    suggestions: list[str]
    notes: str


class DietPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    meals: list[Meal]
    calories_target: int = Field(gt=0)
    guidelines: list[str]


class SleepRecommendations(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_hours: float = Field(gt=0.0, le=24.0)
    tips: list[str]


class StressManagement(BaseModel):
    model_config = ConfigDict(frozen=True)

    techniques: list[str]
    daily_practices: list[str]


class DaySchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    morning: list[str]
    afternoon: list[str]
    evening: list[str]


class RecommendationPlan(BaseModel):
    """Template-driven lifestyle guidance for one (disease, risk level) pair."""

    model_config = ConfigDict(frozen=True)

    fitness_plan: FitnessPlan
    diet_plan: DietPlan
    lifestyle_modifications: list[str]
    sleep_recommendations: SleepRecommendations
    stress_management: StressManagement
    weekly_schedule: dict[str, DaySchedule]


class AssessmentOutcome(BaseModel):
    """Everything the engine produces for a single submission."""

    model_config = ConfigDict(frozen=True)

    bmi: float = Field(gt=0.0)
    risk_scores: list[RiskScore]
    recommendations: list[RecommendationPlan]

    def score_for(self, disease_type: DiseaseType) -> RiskScore:
        for score in self.risk_scores:
            if score.disease_type == disease_type:
                return score
        raise KeyError(disease_type)

    def plan_for(self, disease_type: DiseaseType) -> RecommendationPlan:
        for score, plan in zip(self.risk_scores, self.recommendations, strict=True):
            if score.disease_type == disease_type:
                return plan
        raise KeyError(disease_type)

    def highest_risk(self) -> RiskScore:
        """Highest risk level, ties broken by confidence then evaluation order."""
        return max(
            self.risk_scores,
            key=lambda s: (s.risk_level.rank, s.confidence_score),
        )
