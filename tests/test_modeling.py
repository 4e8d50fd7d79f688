"""Tests for the modeling interface"""

import numpy as np
import pytest

from optiglpk import (
    Constraint, Expression, Model, Objective, Sense, Variable, VariableType, between
)


def test_variable_defaults():
    x = Variable('x')
    assert x.name == 'x'
    assert x.lower_bound == 0.0
    assert x.upper_bound == np.inf
    assert x.type == VariableType.CONTINUOUS


def test_variable_validation():
    with pytest.raises(ValueError):
        Variable('')
    with pytest.raises(ValueError):
        Variable('x', lower_bound=5, upper_bound=1)


def test_variable_name_and_type_are_read_only():
    x = Variable('x', type=VariableType.INTEGER)
    with pytest.raises(AttributeError):
        x.name = 'y'
    with pytest.raises(AttributeError):
        x.type = VariableType.CONTINUOUS

    x.lower_bound = -1.0
    x.upper_bound = 1.0
    assert (x.lower_bound, x.upper_bound) == (-1.0, 1.0)


def test_variables_hash_by_identity():
    x = Variable('x')
    other = Variable('x')
    values = {x: 1, other: 2}
    assert values[x] == 1
    assert values[other] == 2


def test_linear_arithmetic():
    x = Variable('x')
    y = Variable('y')
    expr = 3*x + 2*y - 5

    assert expr.get_coefficient(x) == 3.0
    assert expr.get_coefficient(y) == 2.0
    assert expr.constant == -5.0
    assert expr.is_linear
    assert [(t.variable, t.factor) for t in expr.terms] == [(x, 3.0), (y, 2.0)]


def test_cancelling_terms_are_dropped():
    x = Variable('x')
    y = Variable('y')
    expr = x + y - x
    assert len(expr) == 1
    assert expr.get_coefficient(x) == 0.0


def test_subtraction_and_division():
    x = Variable('x')
    expr = (10 - x) / 2
    assert expr.get_coefficient(x) == -0.5
    assert expr.constant == 5.0


def test_products_of_variables_are_rejected():
    x = Variable('x')
    y = Variable('y')
    with pytest.raises(TypeError):
        (x + 1) * (y + 1)


def test_power_creates_non_linear_term():
    x = Variable('x')
    expr = x**2 + x
    assert not expr.is_linear
    exponents = sorted(term.exponent for term in expr.terms)
    assert exponents == [1, 2]


def test_from_terms_merges_repeats():
    x = Variable('x')
    y = Variable('y')
    expr = Expression.from_terms([(x, 1.0), (y, 2.0), (x, 3.0)], constant=4.0)
    assert expr.get_coefficient(x) == 4.0
    assert expr.get_coefficient(y) == 2.0
    assert expr.constant == 4.0


@pytest.mark.parametrize("build, lower, upper", [
    (lambda x: 2*x + 1 <= 9, -np.inf, 8.0),
    (lambda x: 2*x + 1 >= 9, 8.0, np.inf),
    (lambda x: 2*x + 1 == 9, 8.0, 8.0),
    (lambda x: 4 >= x - 1, -np.inf, 5.0),
])
def test_comparison_moves_constant_into_bounds(build, lower, upper):
    x = Variable('x')
    constraint = build(x)
    assert isinstance(constraint, Constraint)
    assert constraint.expression.constant == 0.0
    assert (constraint.lower_bound, constraint.upper_bound) == (lower, upper)


def test_between():
    x = Variable('x')
    constraint = between(5, 2*x + 1, 10)
    assert constraint.lower_bound == 4.0
    assert constraint.upper_bound == 9.0
    assert constraint.expression.constant == 0.0

    with pytest.raises(ValueError):
        between(10, x, 5)


def test_constraint_keeps_explicit_constant():
    x = Variable('x')
    constraint = Constraint(x - 2, upper_bound=5)
    assert constraint.expression.constant == -2.0
    assert constraint.lower_bound == -np.inf


def test_objective_defaults():
    x = Variable('x')
    objective = Objective(x)
    assert objective.name == 'obj'
    assert objective.sense == Sense.MINIMIZE
    assert Objective(x, sense='MAXIMIZE').sense == Sense.MAXIMIZE


def test_model_bookkeeping():
    model = Model('m')
    x = model.add_variable('x', upper_bound=4)
    y = model.add_variable(Variable('y', type=VariableType.INTEGER))

    first = model.add_constraint(x + y <= 4)
    second = model.add_constraint(x - y >= 0, name='balance')
    model.add_objective(x + y, name='total', sense=Sense.MAXIMIZE)

    assert model.variables == [x, y]
    assert model.variables_count == 2
    assert model.constraints_count == 2
    assert model.objectives_count == 1
    assert first.name == 'c0'
    assert second.name == 'balance'
    assert model.get_variable('y') is y
    assert model.is_mixed_integer


def test_model_rejects_duplicate_variable_names():
    model = Model()
    model.add_variable('x')
    with pytest.raises(ValueError):
        model.add_variable('x')


def test_model_requires_constraint_objects():
    model = Model()
    x = model.add_variable('x')
    with pytest.raises(TypeError):
        model.add_constraint(x + 1)


def test_continuous_model_is_not_mixed_integer():
    model = Model()
    model.add_variable('x')
    assert not model.is_mixed_integer
