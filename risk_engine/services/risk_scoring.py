"""
Additive point-scoring rules for the four disease risk scorers.

Each disease is described by data, not branching code:

- a rule table: ordered `RiskRule` groups, one per metric. A group holds
  ordered `RiskBand`s; the first band whose predicate fires contributes its
  points and factor label, the remaining bands of that group are skipped.
  Groups are independent and their points add up.
- a `ScoringPolicy`: the medium/high cutoffs and the confidence formula
  `min(cap, base + score / divisor)`.

Optional measurements that were not recorded never fire. A zero lab or blood
pressure reading is treated the same way, since the intake form stores
unanswered fields as empty rather than as a clinical zero. Sleep is the
exception: zero hours is a real answer and counts as insufficient sleep.

Scorers are pure and never raise; input ranges are enforced upstream by
`HealthAssessment`.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import structlog

from risk_engine.domain.models import (
    AlcoholConsumption,
    DiseaseType,
    Gender,
    HealthAssessment,
    Profile,
    RiskLevel,
    RiskScore,
)

logger = structlog.get_logger(__name__)

CONFIDENCE_CAP = 95.0


@dataclass(frozen=True)
class ScoringInputs:
    """Everything a rule predicate may look at."""

    assessment: HealthAssessment
    profile: Profile
    bmi: float

    @property
    def age(self) -> int:
        return self.profile.age

    @property
    def glucose(self) -> float | None:
        return _recorded(self.assessment.glucose_level)

    @property
    def systolic(self) -> int | None:
        return _recorded(self.assessment.blood_pressure_systolic)

    @property
    def diastolic(self) -> int | None:
        return _recorded(self.assessment.blood_pressure_diastolic)

    @property
    def cholesterol(self) -> float | None:
        return _recorded(self.assessment.cholesterol)

    @property
    def sleep_hours(self) -> float | None:
        return self.assessment.sleep_hours

    @property
    def has_full_blood_pressure(self) -> bool:
        return self.systolic is not None and self.diastolic is not None


def _recorded(value):
    """Return the measurement, or None when it was left blank."""
    if value is None or value == 0:
        return None
    return value


Predicate = Callable[[ScoringInputs], bool]


@dataclass(frozen=True)
class RiskBand:
    points: int
    factor: str
    applies: Predicate


@dataclass(frozen=True)
class RiskRule:
    """Mutually exclusive bands for one metric, most severe first."""

    metric: str
    bands: tuple[RiskBand, ...]

    def evaluate(self, inputs: ScoringInputs) -> RiskBand | None:
        for band in self.bands:
            if band.applies(inputs):
                return band
        return None


@dataclass(frozen=True)
class ScoringPolicy:
    medium_cutoff: int
    high_cutoff: int
    confidence_base: float
    confidence_divisor: float
    confidence_cap: float = CONFIDENCE_CAP

    def level_for(self, score: int) -> RiskLevel:
        if score >= self.high_cutoff:
            return RiskLevel.HIGH
        if score >= self.medium_cutoff:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def confidence_for(self, score: int) -> float:
        return min(self.confidence_cap, self.confidence_base + score / self.confidence_divisor)


def _band(points: int, factor: str, applies: Predicate) -> RiskBand:
    return RiskBand(points=points, factor=factor, applies=applies)


def _rule(metric: str, *bands: RiskBand) -> RiskRule:
    return RiskRule(metric=metric, bands=bands)


# Shared predicates
def _bp_stage_2(i: ScoringInputs) -> bool:
    return i.has_full_blood_pressure and (i.systolic >= 140 or i.diastolic >= 90)


def _bp_stage_1(i: ScoringInputs) -> bool:
    return i.has_full_blood_pressure and (i.systolic >= 130 or i.diastolic >= 80)


def _bp_elevated(i: ScoringInputs) -> bool:
    return i.has_full_blood_pressure and i.systolic >= 120


def _family_history(i: ScoringInputs) -> bool:
    return i.assessment.family_history


def _smoker(i: ScoringInputs) -> bool:
    return i.assessment.smoking


def _high_stress(i: ScoringInputs) -> bool:
    return i.assessment.stress_level >= 7


def _exercise_below(hours: float) -> Predicate:
    return lambda i: i.assessment.exercise_hours < hours


def _bmi_at_least(threshold: float) -> Predicate:
    return lambda i: i.bmi >= threshold


def _age_at_least(years: int) -> Predicate:
    return lambda i: i.age >= years


DIABETES_RULES: tuple[RiskRule, ...] = (
    _rule(
        "glucose",
        _band(
            40, "High fasting glucose level", lambda i: i.glucose is not None and i.glucose >= 126
        ),
        _band(
            25,
            "Elevated fasting glucose (prediabetic range)",
            lambda i: i.glucose is not None and i.glucose >= 100,
        ),
    ),
    _rule(
        "bmi",
        _band(20, "Obesity (BMI ≥ 30)", _bmi_at_least(30)),
        _band(10, "Overweight (BMI 25-29.9)", _bmi_at_least(25)),
    ),
    _rule("age", _band(15, "Age over 45 years", _age_at_least(45))),
    _rule("family_history", _band(15, "Family history of diabetes", _family_history)),
    _rule("exercise", _band(10, "Insufficient physical activity", _exercise_below(2))),
    _rule(
        "blood_pressure",
        _band(10, "High blood pressure", lambda i: i.systolic is not None and i.systolic >= 140),
    ),
)

HEART_DISEASE_RULES: tuple[RiskRule, ...] = (
    _rule(
        "blood_pressure",
        _band(25, "Hypertension (Stage 2)", _bp_stage_2),
        _band(15, "Elevated blood pressure (Stage 1)", _bp_stage_1),
    ),
    _rule(
        "cholesterol",
        _band(
            30,
            "High cholesterol (≥ 240 mg/dL)",
            lambda i: i.cholesterol is not None and i.cholesterol >= 240,
        ),
        _band(
            15,
            "Borderline high cholesterol",
            lambda i: i.cholesterol is not None and i.cholesterol >= 200,
        ),
    ),
    _rule(
        "age_and_gender",
        _band(20, "Age 65 or older", _age_at_least(65)),
        _band(15, "Male over 45 years", lambda i: i.age >= 45 and i.profile.gender == Gender.MALE),
        _band(
            15, "Female over 55 years", lambda i: i.age >= 55 and i.profile.gender == Gender.FEMALE
        ),
    ),
    _rule("smoking", _band(25, "Current smoker", _smoker)),
    _rule("family_history", _band(15, "Family history of heart disease", _family_history)),
    _rule("bmi", _band(15, "Obesity", _bmi_at_least(30))),
    _rule("exercise", _band(10, "Sedentary lifestyle", _exercise_below(2.5))),
    _rule("stress", _band(10, "High stress levels", _high_stress)),
)

HYPERTENSION_RULES: tuple[RiskRule, ...] = (
    _rule(
        "blood_pressure",
        _band(50, "Current hypertension (Stage 2)", _bp_stage_2),
        _band(35, "Stage 1 hypertension", _bp_stage_1),
        _band(20, "Elevated blood pressure", _bp_elevated),
    ),
    _rule(
        "age",
        _band(20, "Age 65 or older", _age_at_least(65)),
        _band(10, "Age over 45", _age_at_least(45)),
    ),
    _rule(
        "bmi",
        _band(20, "Obesity", _bmi_at_least(30)),
        _band(10, "Overweight", _bmi_at_least(25)),
    ),
    _rule("family_history", _band(15, "Family history of hypertension", _family_history)),
    _rule("smoking", _band(15, "Smoking", _smoker)),
    _rule(
        "alcohol",
        _band(
            15,
            "Heavy alcohol consumption",
            lambda i: i.assessment.alcohol_consumption == AlcoholConsumption.HEAVY,
        ),
        _band(
            5,
            "Moderate alcohol consumption",
            lambda i: i.assessment.alcohol_consumption == AlcoholConsumption.MODERATE,
        ),
    ),
    _rule("exercise", _band(10, "Insufficient physical activity", _exercise_below(2))),
    _rule("stress", _band(10, "Chronic stress", _high_stress)),
)

OBESITY_RULES: tuple[RiskRule, ...] = (
    _rule(
        "bmi",
        _band(60, "Class III Obesity (BMI ≥ 40)", _bmi_at_least(40)),
        _band(50, "Class II Obesity (BMI 35-39.9)", _bmi_at_least(35)),
        _band(40, "Class I Obesity (BMI 30-34.9)", _bmi_at_least(30)),
        _band(25, "Overweight (BMI 25-29.9)", _bmi_at_least(25)),
    ),
    _rule(
        "exercise",
        _band(20, "Very low physical activity", _exercise_below(1)),
        _band(10, "Insufficient physical activity", _exercise_below(2.5)),
    ),
    _rule("family_history", _band(15, "Family history of obesity", _family_history)),
    _rule(
        "sleep",
        _band(
            10,
            "Insufficient sleep (< 6 hours)",
            lambda i: i.sleep_hours is not None and i.sleep_hours < 6,
        ),
        _band(
            5,
            "Excessive sleep (> 9 hours)",
            lambda i: i.sleep_hours is not None and i.sleep_hours > 9,
        ),
    ),
    _rule("stress", _band(10, "High stress levels", _high_stress)),
    _rule("age", _band(5, "Age-related metabolism changes", _age_at_least(40))),
)

RULE_TABLES: Mapping[DiseaseType, tuple[RiskRule, ...]] = MappingProxyType(
    {
        DiseaseType.DIABETES: DIABETES_RULES,
        DiseaseType.HEART_DISEASE: HEART_DISEASE_RULES,
        DiseaseType.HYPERTENSION: HYPERTENSION_RULES,
        DiseaseType.OBESITY: OBESITY_RULES,
    }
)

SCORING_POLICIES: Mapping[DiseaseType, ScoringPolicy] = MappingProxyType(
    {
        DiseaseType.DIABETES: ScoringPolicy(
            medium_cutoff=30, high_cutoff=60, confidence_base=65, confidence_divisor=3
        ),
        DiseaseType.HEART_DISEASE: ScoringPolicy(
            medium_cutoff=35, high_cutoff=70, confidence_base=70, confidence_divisor=4
        ),
        DiseaseType.HYPERTENSION: ScoringPolicy(
            medium_cutoff=35, high_cutoff=65, confidence_base=75, confidence_divisor=5
        ),
        DiseaseType.OBESITY: ScoringPolicy(
            medium_cutoff=30, high_cutoff=60, confidence_base=80, confidence_divisor=6
        ),
    }
)


@dataclass(frozen=True)
class RuleEvaluation:
    """Raw result of running a rule table, before classification."""

    points: int
    factors: list[str]


def evaluate_rules(rules: tuple[RiskRule, ...], inputs: ScoringInputs) -> RuleEvaluation:
    points = 0
    factors: list[str] = []
    for rule in rules:
        band = rule.evaluate(inputs)
        if band is None:
            continue
        points += band.points
        factors.append(band.factor)
    return RuleEvaluation(points=points, factors=factors)


def score_disease(
    disease_type: DiseaseType, assessment: HealthAssessment, profile: Profile, bmi: float
) -> RiskScore:
    """Run one disease's rule table and classify the resulting point total."""
    inputs = ScoringInputs(assessment=assessment, profile=profile, bmi=bmi)
    evaluation = evaluate_rules(RULE_TABLES[disease_type], inputs)
    policy = SCORING_POLICIES[disease_type]

    risk_score = RiskScore(
        disease_type=disease_type,
        risk_level=policy.level_for(evaluation.points),
        confidence_score=policy.confidence_for(evaluation.points),
        risk_factors=evaluation.factors,
    )

    logger.debug(
        "disease_scored",
        disease_type=disease_type.value,
        points=evaluation.points,
        risk_level=risk_score.risk_level.value,
        factor_count=len(evaluation.factors),
    )
    return risk_score


def score_diabetes(assessment: HealthAssessment, profile: Profile, bmi: float) -> RiskScore:
    return score_disease(DiseaseType.DIABETES, assessment, profile, bmi)


def score_heart_disease(assessment: HealthAssessment, profile: Profile, bmi: float) -> RiskScore:
    return score_disease(DiseaseType.HEART_DISEASE, assessment, profile, bmi)


def score_hypertension(assessment: HealthAssessment, profile: Profile, bmi: float) -> RiskScore:
    return score_disease(DiseaseType.HYPERTENSION, assessment, profile, bmi)


def score_obesity(assessment: HealthAssessment, profile: Profile, bmi: float) -> RiskScore:
    return score_disease(DiseaseType.OBESITY, assessment, profile, bmi)


Scorer = Callable[[HealthAssessment, Profile, float], RiskScore]

SCORERS: Mapping[DiseaseType, Scorer] = MappingProxyType(
    {
        DiseaseType.DIABETES: score_diabetes,
        DiseaseType.HEART_DISEASE: score_heart_disease,
        DiseaseType.HYPERTENSION: score_hypertension,
        DiseaseType.OBESITY: score_obesity,
    }
)


def score_all(assessment: HealthAssessment, profile: Profile, bmi: float) -> list[RiskScore]:
    """Score every disease, in `DiseaseType` declaration order."""
    return [SCORERS[disease](assessment, profile, bmi) for disease in DiseaseType]
