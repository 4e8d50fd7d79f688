"""
Translation of a Model into a GLPK problem
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ._native import glpk
from .bounds import classify_bounds
from .matrix import SparseMatrixBuilder
from .model import Problem
from .modeling import Constraint, Model, Sense, Variable, VariableType

logger = logging.getLogger(__name__)


class IndexMap:
    """
    Bidirectional map between model objects and GLPK indices.

    Columns and rows are numbered from 1 in the order they are added.
    Lookups are by object identity.
    """

    def __init__(self):
        self._columns: Dict[Variable, int] = {}
        self._variables: List[Variable] = []
        self._rows: Dict[Constraint, int] = {}
        self._constraints: List[Constraint] = []

    def add_variable(self, variable: Variable) -> int:
        if variable in self._columns:
            raise ValueError(f"Variable {variable.name!r} is already mapped")
        self._variables.append(variable)
        self._columns[variable] = len(self._variables)
        return len(self._variables)

    def add_constraint(self, constraint: Constraint) -> int:
        if constraint in self._rows:
            raise ValueError(f"Constraint {constraint.name!r} is already mapped")
        self._constraints.append(constraint)
        self._rows[constraint] = len(self._constraints)
        return len(self._constraints)

    def column_of(self, variable: Variable) -> int:
        try:
            return self._columns[variable]
        except KeyError:
            raise ValueError(
                f"Variable {variable.name!r} is referenced by an expression "
                f"but is not part of the model"
            ) from None

    def variable_at(self, j: int) -> Variable:
        if j < 1:
            raise IndexError(f"Column indices start at 1 (got {j})")
        return self._variables[j - 1]

    def row_of(self, constraint: Constraint) -> int:
        return self._rows[constraint]

    def constraint_at(self, i: int) -> Constraint:
        if i < 1:
            raise IndexError(f"Row indices start at 1 (got {i})")
        return self._constraints[i - 1]

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables)

    @property
    def columns_count(self) -> int:
        return len(self._variables)

    @property
    def rows_count(self) -> int:
        return len(self._constraints)


@dataclass
class Translation:
    """Result of translating a model into a problem"""
    index_map: IndexMap
    matrix: SparseMatrixBuilder
    is_mixed_integer: bool


def check_model(model: Model):
    """
    Reject models GLPK cannot represent.

    Raises
    ------
    ValueError
        If the model has more than one objective, or if the objective or a
        constraint contains a non-linear term
    """
    if model.objectives_count > 1:
        raise ValueError("Only one objective supported")

    for objective in model.objectives:
        for term in objective.expression.terms:
            if not term.is_linear:
                raise ValueError(f"Only linear terms in objective allowed: {term}")

    for constraint in model.constraints:
        for term in constraint.expression.terms:
            if not term.is_linear:
                raise ValueError(
                    f"Only linear terms in constraints allowed: {term} in {constraint.name!r}"
                )


def normalize_row_bounds(lower: float, upper: float, constant: float) -> Tuple[float, float]:
    """
    Fold an expression constant into row bounds.

    A negative constant is subtracted from the upper bound and a positive
    one added to the lower bound. Fixed rows move both bounds so they stay
    fixed.
    """
    if constant == 0:
        return lower, upper
    if lower == upper:
        shift = -constant if constant < 0 else constant
        return lower + shift, upper + shift
    if constant < 0:
        return lower, upper - constant
    return lower + constant, upper


def column_kind(variable: Variable) -> int:
    """GLPK column kind for a variable given its current bounds"""
    if variable.type == VariableType.CONTINUOUS:
        return glpk.GLP_CV
    if variable.type == VariableType.INTEGER:
        if variable.lower_bound == 0 and variable.upper_bound == 1:
            return glpk.GLP_BV
        return glpk.GLP_IV
    raise NotImplementedError(f"Variable type not supported: {variable.type}")


@contextmanager
def fixed_variables(model: Model, variable_values: Optional[Mapping[str, float]]):
    """
    Temporarily fix variables to the given values.

    Bounds of every variable named in ``variable_values`` are set to
    [value, value] inside the block and restored on exit.
    """
    saved = []
    try:
        for var in model.variables:
            if variable_values and var.name in variable_values:
                value = float(variable_values[var.name])
                saved.append((var, var.lower_bound, var.upper_bound))
                var.lower_bound = value
                var.upper_bound = value

        if variable_values:
            names = {var.name for var in model.variables}
            unknown = sorted(set(variable_values) - names)
            if unknown:
                logger.warning("Ignoring values for unknown variables: %s", ", ".join(unknown))

        yield
    finally:
        for var, lower, upper in saved:
            var.lower_bound = lower
            var.upper_bound = upper


def translate(model: Model, problem: Problem,
              variable_values: Optional[Mapping[str, float]] = None) -> Translation:
    """
    Populate an empty problem from a model.

    Parameters
    ----------
    model : Model
        Source model; call :func:`check_model` first
    problem : Problem
        Empty GLPK problem
    variable_values : dict, optional
        Variables to fix for this translation, by name

    Returns
    -------
    Translation
        Index map, matrix entries and problem class
    """
    index_map = IndexMap()
    matrix = SparseMatrixBuilder()

    with fixed_variables(model, variable_values):
        # Columns
        logger.debug("Creating %d GLPK columns", model.variables_count)
        col = problem.add_columns(model.variables_count)
        for var in model.variables:
            bound_type = classify_bounds(var.lower_bound, var.upper_bound)
            problem.set_column(col, var.name, bound_type, var.lower_bound,
                               var.upper_bound, column_kind(var))
            index_map.add_variable(var)
            col += 1

    # Objective
    if model.objectives_count:
        objective = model.objectives[0]
        coefficients: Dict[int, float] = {}
        for term in objective.expression.terms:
            j = index_map.column_of(term.variable)
            coefficients[j] = coefficients.get(j, 0.0) + term.factor
        for j, coefficient in coefficients.items():
            problem.set_objective_coefficient(j, coefficient)
        problem.set_objective_coefficient(0, objective.expression.constant)
        problem.set_objective(objective.name, objective.sense == Sense.MAXIMIZE)

    # Rows
    logger.debug("Creating %d GLPK rows", model.constraints_count)
    row = problem.add_rows(model.constraints_count)
    for constraint in model.constraints:
        lower, upper = normalize_row_bounds(constraint.lower_bound, constraint.upper_bound,
                                            constraint.expression.constant)
        bound_type = classify_bounds(lower, upper)
        problem.set_row(row, constraint.name or f"r{row}", bound_type, lower, upper)
        index_map.add_constraint(constraint)

        for term in constraint.expression.terms:
            matrix.add_entry(row, index_map.column_of(term.variable), term.factor)
        row += 1

    return Translation(index_map, matrix, model.is_mixed_integer)
