"""Tests for translating a Model into a GLPK problem"""

import numpy as np
import pytest
import swiglpk as glpk

from optiglpk import BoundType, Constraint, Model, Problem, Sense, Variable, VariableType
from optiglpk.translator import (
    IndexMap, check_model, column_kind, fixed_variables, normalize_row_bounds, translate
)


def build_model():
    model = Model('translate')
    x = model.add_variable('x', lower_bound=0, upper_bound=10)
    y = model.add_variable('y', lower_bound=-np.inf, upper_bound=np.inf)
    z = model.add_variable('z', lower_bound=0, upper_bound=1, type=VariableType.INTEGER)
    w = model.add_variable('w', lower_bound=0, upper_bound=5, type=VariableType.INTEGER)
    model.add_objective(2*x - y + 3*z + 7, name='cost', sense=Sense.MAXIMIZE)
    model.add_constraint(x + y <= 4, name='upper')
    model.add_constraint(y + 2*w >= 1, name='lower')
    model.add_constraint(x - z == 3, name='fixed')
    return model


@pytest.mark.parametrize("lower, upper, constant, expected", [
    (-np.inf, 5.0, 0.0, (-np.inf, 5.0)),
    (-np.inf, 5.0, -2.0, (-np.inf, 7.0)),
    (1.0, np.inf, 3.0, (4.0, np.inf)),
    (1.0, 5.0, -2.0, (1.0, 7.0)),
    (1.0, 5.0, 2.0, (3.0, 5.0)),
    (4.0, 4.0, 2.0, (6.0, 6.0)),
    (4.0, 4.0, -2.0, (6.0, 6.0)),
])
def test_normalize_row_bounds(lower, upper, constant, expected):
    assert normalize_row_bounds(lower, upper, constant) == expected


def test_columns():
    model = build_model()
    with Problem.create(model.name) as problem:
        translation = translate(model, problem)

        assert problem.num_cols == 4
        assert [problem.column_name(j) for j in range(1, 5)] == ['x', 'y', 'z', 'w']
        assert problem.column_bounds(1) == (BoundType.RANGE, 0.0, 10.0)
        assert problem.column_bounds(2) == (BoundType.FREE, -np.inf, np.inf)
        assert problem.column_kind(1) == glpk.GLP_CV
        assert problem.column_kind(3) == glpk.GLP_BV
        assert problem.column_kind(4) == glpk.GLP_IV
        assert translation.is_mixed_integer


def test_objective():
    model = build_model()
    with Problem.create(model.name) as problem:
        translate(model, problem)

        assert problem.objective_name == 'cost'
        assert problem.maximize
        assert problem.objective_coefficient(0) == 7.0
        assert [problem.objective_coefficient(j) for j in range(1, 5)] == [2.0, -1.0, 3.0, 0.0]


def test_rows_and_matrix():
    model = build_model()
    with Problem.create(model.name) as problem:
        translation = translate(model, problem)

        assert problem.num_rows == 3
        assert problem.row_name(1) == 'upper'
        assert problem.row_bounds(1) == (BoundType.UPPER, -np.inf, 4.0)
        assert problem.row_bounds(2) == (BoundType.LOWER, 1.0, np.inf)
        assert problem.row_bounds(3) == (BoundType.FIXED, 3.0, 3.0)

        assert translation.matrix.entries() == [
            (1, 1, 1.0), (1, 2, 1.0),
            (2, 2, 1.0), (2, 4, 2.0),
            (3, 1, 1.0), (3, 3, -1.0),
        ]

        problem.load_matrix(*translation.matrix.build())
        assert problem.num_nonzeros == 6
        expected = np.array([
            [1.0, 1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 2.0],
            [1.0, 0.0, -1.0, 0.0],
        ])
        np.testing.assert_array_equal(problem.get_matrix().toarray(), expected)


def test_row_constant_is_folded():
    model = Model()
    x = model.add_variable('x')
    model.add_constraint(Constraint(x - 2, name='shifted', upper_bound=5))
    with Problem.create() as problem:
        translate(model, problem)
        assert problem.row_bounds(1) == (BoundType.UPPER, -np.inf, 7.0)
    assert model.constraints[0].upper_bound == 5.0


def test_unnamed_rows_get_default_names():
    model = Model()
    x = model.add_variable('x')
    constraint = Constraint(x, upper_bound=3)
    model.constraints.append(constraint)
    with Problem.create() as problem:
        translate(model, problem)
        assert problem.row_name(1) == 'r1'


def test_index_map_is_a_bijection():
    model = build_model()
    with Problem.create(model.name) as problem:
        index_map = translate(model, problem).index_map

    assert index_map.columns_count == model.variables_count
    assert index_map.rows_count == model.constraints_count
    for j, var in enumerate(model.variables, start=1):
        assert index_map.column_of(var) == j
        assert index_map.variable_at(j) is var
    for i, constraint in enumerate(model.constraints, start=1):
        assert index_map.row_of(constraint) == i
        assert index_map.constraint_at(i) is constraint


def test_index_map_rejects_zero_index():
    index_map = IndexMap()
    index_map.add_variable(Variable('x'))
    with pytest.raises(IndexError):
        index_map.variable_at(0)
    with pytest.raises(ValueError):
        index_map.add_variable(index_map.variable_at(1))


def test_variable_outside_model_is_rejected():
    model = Model()
    x = model.add_variable('x')
    stranger = Variable('s')
    model.add_constraint(x + stranger <= 1)
    with Problem.create() as problem:
        with pytest.raises(ValueError, match="not part of the model"):
            translate(model, problem)


def test_fixed_variables_are_restored():
    model = build_model()
    x = model.get_variable('x')
    with Problem.create(model.name) as problem:
        translate(model, problem, {'x': 2.5})
        assert problem.column_bounds(1) == (BoundType.FIXED, 2.5, 2.5)
    assert (x.lower_bound, x.upper_bound) == (0.0, 10.0)


def test_fixed_variables_restore_on_error():
    model = build_model()
    x = model.get_variable('x')
    with pytest.raises(RuntimeError):
        with fixed_variables(model, {'x': 1.0}):
            assert x.lower_bound == x.upper_bound == 1.0
            raise RuntimeError("boom")
    assert (x.lower_bound, x.upper_bound) == (0.0, 10.0)


def test_fixed_variables_ignore_unknown_names(caplog):
    model = build_model()
    with fixed_variables(model, {'nope': 1.0}):
        pass
    assert "nope" in caplog.text


def test_column_kind():
    assert column_kind(Variable('c')) == glpk.GLP_CV
    assert column_kind(Variable('b', 0, 1, VariableType.INTEGER)) == glpk.GLP_BV
    assert column_kind(Variable('i', 0, 2, VariableType.INTEGER)) == glpk.GLP_IV
    assert column_kind(Variable('f', 1, 1, VariableType.INTEGER)) == glpk.GLP_IV


def test_check_model_rejects_multiple_objectives():
    model = build_model()
    model.add_objective(model.get_variable('x'), name='second')
    with pytest.raises(ValueError, match="Only one objective supported"):
        check_model(model)


def test_check_model_rejects_non_linear_terms():
    model = Model()
    x = model.add_variable('x')
    model.add_objective(x**2)
    with pytest.raises(ValueError):
        check_model(model)

    model = Model()
    x = model.add_variable('x')
    model.add_objective(x)
    model.add_constraint(x**2 + x <= 4)
    with pytest.raises(ValueError):
        check_model(model)
