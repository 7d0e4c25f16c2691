from __future__ import annotations

import math

import pytest

from catch_chronicles.services.condition_factor import (
    UndefinedConditionFactorError,
    assess_catch,
    classify_condition,
    fulton_condition_factor,
    is_condition_species,
)


def test_fulton_factor_for_thirty_centimetre_trout() -> None:
    k = fulton_condition_factor(30, 300)
    assert k == pytest.approx(300 / 27000 * 100)
    assert k == pytest.approx(1.111, abs=1e-3)
    assert classify_condition(k) == "Very Healthy"


def test_zero_length_is_an_error_not_infinity() -> None:
    with pytest.raises(UndefinedConditionFactorError):
        fulton_condition_factor(0, 300)


def test_undefined_factor_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        fulton_condition_factor(-5, 300)


@pytest.mark.parametrize(
    ("factor", "label"),
    [
        (0.5, "Underweight"),
        (0.9099, "Underweight"),
        (0.91, "Average"),
        (0.9599, "Average"),
        (0.96, "Healthy"),
        (1.0599, "Healthy"),
        (1.06, "Very Healthy"),
        (1.1599, "Very Healthy"),
        (1.16, "Overweight"),
        (2.0, "Overweight"),
    ],
)
def test_band_boundaries_are_half_open(factor: float, label: str) -> None:
    assert classify_condition(factor) == label


@pytest.mark.parametrize(
    ("fish_type", "expected"),
    [
        ("Brown Trout", True),
        ("rainbow trout", True),
        ("Sjøørret", True),
        ("ØRRET", True),
        ("Grayling", False),
        ("", False),
        (None, False),
    ],
)
def test_condition_species_match(fish_type, expected: bool) -> None:
    assert is_condition_species(fish_type) is expected


def test_assess_catch_only_grades_trout() -> None:
    assert assess_catch("Grayling", 30, 300) is None
    graded = assess_catch("Brown Trout", 30, 300)
    assert graded is not None
    assert graded.condition == "Very Healthy"
    assert math.isfinite(graded.factor)


def test_assess_catch_without_usable_measurements() -> None:
    assert assess_catch("Brown Trout", 0, 300) is None
    assert assess_catch("Brown Trout", 30, None) is None
    assert assess_catch("Brown Trout", None, 300) is None


def test_assess_catch_with_custom_keywords() -> None:
    assert assess_catch("Arctic Char", 40, 700, keywords=["char"]) is not None
    assert assess_catch("Brown Trout", 30, 300, keywords=["char"]) is None
