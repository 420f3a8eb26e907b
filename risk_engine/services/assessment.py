"""
End-to-end assessment pipeline.

One submission flows through:
1. BMI from the profile (invalid profiles abort the submission)
2. The four disease scorers, independently over the same inputs
3. One recommendation plan per risk score
4. Persistence, strictly after everything above has been computed

Scoring and recommendation are pure, so independent submissions can be
evaluated concurrently without coordination; `evaluate_batch` does that
with structured concurrency.
"""

import asyncio
import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from risk_engine.config import EngineConfig
from risk_engine.domain.models import AssessmentOutcome, HealthAssessment, Profile
from risk_engine.errors import RiskEngineError
from risk_engine.services.bmi import validated_bmi
from risk_engine.services.recommendations import assemble_recommendation
from risk_engine.services.result import Result
from risk_engine.services.risk_scoring import score_all
from risk_engine.store import ASSESSMENTS, PREDICTIONS, RECOMMENDATIONS, RecordStore

logger = structlog.get_logger(__name__)


def evaluate_assessment(assessment: HealthAssessment, profile: Profile) -> AssessmentOutcome:
    """
    Score every disease and build the matching plans for one submission.

    Raises:
        InvalidProfileError: the profile cannot produce a valid BMI.
    """
    bmi = validated_bmi(profile)
    risk_scores = score_all(assessment, profile, bmi)
    recommendations = [
        assemble_recommendation(score.disease_type, score.risk_level) for score in risk_scores
    ]
    return AssessmentOutcome(bmi=bmi, risk_scores=risk_scores, recommendations=recommendations)


@dataclass(frozen=True)
class Submission:
    """A single user's assessment together with their profile."""

    user_id: str
    assessment: HealthAssessment
    profile: Profile


@dataclass(frozen=True)
class SubmissionRecord:
    """Identifiers of everything stored for one submission."""

    assessment_id: str
    outcome: AssessmentOutcome
    prediction_ids: tuple[str, ...] = ()
    recommendation_ids: tuple[str, ...] = ()


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.now(UTC).isoformat()


class AssessmentService:
    """
    Runs submissions through the engine and hands the results to a store.

    Design principles:
    - Fail fast on invalid profiles (no substituted BMI)
    - Persist only complete results
    - Observable (structured logging per submission)
    """

    def __init__(
        self, store: RecordStore | None = None, config: EngineConfig | None = None
    ) -> None:
        self.store = store
        self.config = config or EngineConfig()
        self.logger = logger.bind(component="assessment_service")

    def evaluate(self, assessment: HealthAssessment, profile: Profile) -> AssessmentOutcome:
        outcome = evaluate_assessment(assessment, profile)
        self.logger.info(
            "assessment_evaluated",
            bmi=round(outcome.bmi, 1),
            risk_levels={s.disease_type.value: s.risk_level.value for s in outcome.risk_scores},
        )
        return outcome

    def submit(self, submission: Submission) -> Result[SubmissionRecord, RiskEngineError]:
        """
        Evaluate a submission and persist it as one logical unit.

        Expected failures (invalid profile, storage errors) come back as
        `Result.err`; the store may hold a partial set if it fails midway.
        """
        log = self.logger.bind(user_id=submission.user_id)

        try:
            outcome = self.evaluate(submission.assessment, submission.profile)
        except RiskEngineError as e:
            log.warning("assessment_rejected", error=str(e))
            return Result.err(e)

        assessment_id = _new_id()

        if self.store is None or not self.config.persist_results:
            return Result.ok(SubmissionRecord(assessment_id=assessment_id, outcome=outcome))

        try:
            record = self._persist(self.store, submission, assessment_id, outcome)
        except RiskEngineError as e:
            log.error("assessment_persist_failed", assessment_id=assessment_id, error=str(e))
            return Result.err(e)

        log.info(
            "assessment_stored",
            assessment_id=assessment_id,
            predictions=len(record.prediction_ids),
        )
        return Result.ok(record)

    def _persist(
        self,
        store: RecordStore,
        submission: Submission,
        assessment_id: str,
        outcome: AssessmentOutcome,
    ) -> SubmissionRecord:
        prediction_ids: list[str] = []
        recommendation_ids: list[str] = []

        store.append(
            ASSESSMENTS,
            {
                "id": assessment_id,
                "user_id": submission.user_id,
                "assessment_type": "comprehensive",
                "bmi": outcome.bmi,
                **submission.assessment.model_dump(mode="json"),
                "created_at": _now(),
            },
        )

        for score, plan in zip(outcome.risk_scores, outcome.recommendations, strict=True):
            prediction_id = _new_id()
            store.append(
                PREDICTIONS,
                {
                    "id": prediction_id,
                    "assessment_id": assessment_id,
                    "user_id": submission.user_id,
                    **score.model_dump(mode="json"),
                    "created_at": _now(),
                },
            )
            prediction_ids.append(prediction_id)

            recommendation_id = _new_id()
            store.append(
                RECOMMENDATIONS,
                {
                    "id": recommendation_id,
                    "prediction_id": prediction_id,
                    "user_id": submission.user_id,
                    **plan.model_dump(mode="json"),
                    "created_at": _now(),
                },
            )
            recommendation_ids.append(recommendation_id)

        return SubmissionRecord(
            assessment_id=assessment_id,
            outcome=outcome,
            prediction_ids=tuple(prediction_ids),
            recommendation_ids=tuple(recommendation_ids),
        )

    async def evaluate_batch(
        self, submissions: Sequence[Submission]
    ) -> list[Result[AssessmentOutcome, RiskEngineError]]:
        """
        Evaluate independent submissions concurrently, results in input order.

        Key pattern: TaskGroup for structured concurrency, a semaphore for
        backpressure. Each evaluation runs in a worker thread so large batches
        do not block the event loop.
        """
        start_time = time.perf_counter()
        semaphore = asyncio.Semaphore(self.config.max_concurrent_evaluations)

        async def _evaluate_one(
            submission: Submission,
        ) -> Result[AssessmentOutcome, RiskEngineError]:
            async with semaphore:
                try:
                    outcome = await asyncio.to_thread(
                        self.evaluate, submission.assessment, submission.profile
                    )
                except RiskEngineError as e:
                    self.logger.warning(
                        "batch_submission_rejected", user_id=submission.user_id, error=str(e)
                    )
                    return Result.err(e)
                return Result.ok(outcome)

        async with asyncio.TaskGroup() as task_group:
            tasks = [task_group.create_task(_evaluate_one(s)) for s in submissions]

        results = [task.result() for task in tasks]

        self.logger.info(
            "batch_evaluation_completed",
            total=len(results),
            successful=sum(1 for r in results if r.is_ok()),
            duration_seconds=round(time.perf_counter() - start_time, 3),
        )
        return results
