"""
Classification of (lower, upper) bound pairs into GLPK bound types
"""
import math
from enum import IntEnum

import numpy as np

from ._native import glpk


class BoundType(IntEnum):
    """
    Shape of a column's or row's feasible interval.

    Values are GLPK's own type codes so they can be handed to
    ``glp_set_col_bnds`` / ``glp_set_row_bnds`` unchanged.
    """
    FREE = glpk.GLP_FR    # -inf < x < +inf
    LOWER = glpk.GLP_LO   # lb <= x < +inf
    UPPER = glpk.GLP_UP   # -inf < x <= ub
    RANGE = glpk.GLP_DB   # lb <= x <= ub
    FIXED = glpk.GLP_FX   # lb == x == ub

    @property
    def has_lower(self) -> bool:
        return self in (BoundType.LOWER, BoundType.RANGE, BoundType.FIXED)

    @property
    def has_upper(self) -> bool:
        return self in (BoundType.UPPER, BoundType.RANGE, BoundType.FIXED)


def classify_bounds(lower: float, upper: float) -> BoundType:
    """
    Map a bound pair to its BoundType.

    Rules are checked in order and the first match wins:

    1. lower = -inf and upper = +inf  -> FREE
    2. lower finite, upper = +inf     -> LOWER
    3. lower = -inf, upper finite     -> UPPER
    4. lower = upper                  -> FIXED
    5. otherwise                      -> RANGE

    Parameters
    ----------
    lower : float
        Lower bound, may be -inf
    upper : float
        Upper bound, may be +inf

    Returns
    -------
    BoundType

    Raises
    ------
    ValueError
        If a bound is NaN, lower is +inf or upper is -inf

    Examples
    --------
    >>> classify_bounds(0, np.inf)
    <BoundType.LOWER: 2>
    >>> classify_bounds(5, 5)
    <BoundType.FIXED: 5>
    """
    lower = float(lower)
    upper = float(upper)

    if math.isnan(lower) or math.isnan(upper):
        raise ValueError(f"Bounds must not be NaN (got [{lower}, {upper}])")
    if np.isposinf(lower):
        raise ValueError("Lower bound must not be +inf")
    if np.isneginf(upper):
        raise ValueError("Upper bound must not be -inf")

    lower_free = np.isneginf(lower)
    upper_free = np.isposinf(upper)

    if lower_free and upper_free:
        return BoundType.FREE
    if upper_free:
        return BoundType.LOWER
    if lower_free:
        return BoundType.UPPER
    if lower == upper:
        return BoundType.FIXED
    return BoundType.RANGE


def bounds_from_type(bound_type: BoundType, lower: float, upper: float):
    """
    Inverse view used when reading bounds back from GLPK.

    GLPK reports placeholder values for bounds a type does not carry;
    those are replaced with -inf / +inf.

    Returns
    -------
    tuple of float
        (lower, upper)
    """
    bound_type = BoundType(bound_type)
    lb = float(lower) if bound_type.has_lower else -np.inf
    ub = float(upper) if bound_type.has_upper else np.inf
    return lb, ub
