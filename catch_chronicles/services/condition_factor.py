"""Fulton's condition factor for individual catches.

K = (weight_g / length_cm ** 3) * 100, graded into five half-open bands. The
grading is only shown for trout, where the bands were calibrated.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from catch_chronicles.config import settings


class UndefinedConditionFactorError(ValueError):
    """Raised when K cannot be computed (length of zero or less)."""


# (upper bound, label); a factor belongs to the first band whose bound it is below.
CONDITION_BANDS: Sequence[tuple[float, str]] = (
    (0.91, "Underweight"),
    (0.96, "Average"),
    (1.06, "Healthy"),
    (1.16, "Very Healthy"),
)
TOP_CONDITION = "Overweight"


@dataclass(frozen=True)
class ConditionAssessment:
    factor: float
    condition: str


def fulton_condition_factor(length_cm: float, weight_g: float) -> float:
    if length_cm is None or weight_g is None:
        raise UndefinedConditionFactorError("length and weight are both required")
    if length_cm <= 0:
        raise UndefinedConditionFactorError(f"length must be positive, got {length_cm!r}")
    return (weight_g / length_cm**3) * 100


def classify_condition(factor: float) -> str:
    for upper, label in CONDITION_BANDS:
        if factor < upper:
            return label
    return TOP_CONDITION


def is_condition_species(fish_type: str | None, keywords: Iterable[str] | None = None) -> bool:
    text = (fish_type or "").lower()
    if not text:
        return False
    words = settings.condition_species_keywords if keywords is None else keywords
    return any(word.lower() in text for word in words if word)


def assess_catch(
    fish_type: str | None,
    length_cm: float | None,
    weight_g: float | None,
    *,
    keywords: Iterable[str] | None = None,
) -> ConditionAssessment | None:
    """Grade a catch for display, or return None when grading does not apply."""

    if not is_condition_species(fish_type, keywords):
        return None
    try:
        factor = fulton_condition_factor(length_cm, weight_g)
    except UndefinedConditionFactorError:
        return None
    return ConditionAssessment(factor=factor, condition=classify_condition(factor))
