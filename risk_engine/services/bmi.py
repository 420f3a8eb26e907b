"""
Body-mass index calculation.

`compute_bmi` is the bare formula. `validated_bmi` is the guard every
submission goes through before scoring: a profile that cannot produce a
finite, positive BMI aborts the submission instead of being scored with a
substituted value.
"""

import math

import structlog

from risk_engine.domain.models import Profile
from risk_engine.errors import InvalidProfileError

logger = structlog.get_logger(__name__)


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Return weight / height² with height converted from centimetres to metres."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def validated_bmi(profile: Profile) -> float:
    """
    Compute BMI for a profile, rejecting unusable inputs.

    Raises:
        InvalidProfileError: height or weight is not strictly positive, or the
            result is not a finite number.
    """
    weight, height = profile.weight, profile.height

    if not (weight > 0 and height > 0):
        logger.warning("invalid_profile_measurements", weight=weight, height=height)
        raise InvalidProfileError(
            f"Invalid profile data: weight={weight}, height={height}",
            weight=weight,
            height=height,
        )

    bmi = compute_bmi(weight, height)
    if not math.isfinite(bmi):
        logger.warning("non_finite_bmi", weight=weight, height=height)
        raise InvalidProfileError(
            "Invalid BMI calculation result", weight=weight, height=height
        )

    return bmi
