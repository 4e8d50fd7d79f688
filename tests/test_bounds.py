"""Tests for bound classification"""

import math

import numpy as np
import pytest

from optiglpk import BoundType, classify_bounds
from optiglpk.bounds import bounds_from_type


@pytest.mark.parametrize("lower, upper, expected", [
    (-np.inf, np.inf, BoundType.FREE),
    (0.0, np.inf, BoundType.LOWER),
    (-3.5, np.inf, BoundType.LOWER),
    (-np.inf, 10.0, BoundType.UPPER),
    (-np.inf, -2.0, BoundType.UPPER),
    (5.0, 5.0, BoundType.FIXED),
    (0, 0, BoundType.FIXED),
    (0.0, 1.0, BoundType.RANGE),
    (-4.0, 4.0, BoundType.RANGE),
])
def test_classification(lower, upper, expected):
    assert classify_bounds(lower, upper) == expected


def test_inverted_finite_bounds_are_a_range():
    """Only infinities and equality are special; ordering is not checked"""
    assert classify_bounds(3.0, 1.0) == BoundType.RANGE


def test_values_are_glpk_codes():
    import swiglpk as glpk
    assert BoundType.FREE == glpk.GLP_FR
    assert BoundType.LOWER == glpk.GLP_LO
    assert BoundType.UPPER == glpk.GLP_UP
    assert BoundType.RANGE == glpk.GLP_DB
    assert BoundType.FIXED == glpk.GLP_FX


@pytest.mark.parametrize("lower, upper", [
    (math.nan, 1.0),
    (0.0, math.nan),
    (np.inf, np.inf),
    (-np.inf, -np.inf),
])
def test_invalid_bounds(lower, upper):
    with pytest.raises(ValueError):
        classify_bounds(lower, upper)


def test_has_lower_and_upper():
    assert not BoundType.FREE.has_lower and not BoundType.FREE.has_upper
    assert BoundType.LOWER.has_lower and not BoundType.LOWER.has_upper
    assert BoundType.UPPER.has_upper and not BoundType.UPPER.has_lower
    assert BoundType.RANGE.has_lower and BoundType.RANGE.has_upper
    assert BoundType.FIXED.has_lower and BoundType.FIXED.has_upper


def test_bounds_from_type_fills_missing_sides():
    assert bounds_from_type(BoundType.FREE, 0.0, 0.0) == (-np.inf, np.inf)
    assert bounds_from_type(BoundType.LOWER, 2.0, 0.0) == (2.0, np.inf)
    assert bounds_from_type(BoundType.UPPER, 0.0, 7.0) == (-np.inf, 7.0)
    assert bounds_from_type(BoundType.RANGE, 1.0, 3.0) == (1.0, 3.0)
