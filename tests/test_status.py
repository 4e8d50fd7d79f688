"""Tests for the GLPK status table"""

import pytest
import swiglpk as glpk

from optiglpk import EngineStatus, ModelStatus, SolutionStatus, map_status


@pytest.mark.parametrize("raw, expected", [
    (glpk.GLP_OPT, (ModelStatus.FEASIBLE, SolutionStatus.OPTIMAL)),
    (glpk.GLP_FEAS, (ModelStatus.FEASIBLE, SolutionStatus.OPTIMAL)),
    (glpk.GLP_NOFEAS, (ModelStatus.INFEASIBLE, SolutionStatus.NO_SOLUTION_VALUES)),
    (glpk.GLP_INFEAS, (ModelStatus.INFEASIBLE, SolutionStatus.NO_SOLUTION_VALUES)),
    (glpk.GLP_UNBND, (ModelStatus.UNBOUNDED, SolutionStatus.NO_SOLUTION_VALUES)),
    (glpk.GLP_UNDEF, (ModelStatus.UNKNOWN, SolutionStatus.NO_SOLUTION_VALUES)),
])
def test_known_statuses(raw, expected):
    assert map_status(raw) == expected


@pytest.mark.parametrize("raw", [0, 7, -1, 1000])
def test_unrecognised_statuses(raw):
    assert map_status(raw) == (ModelStatus.UNKNOWN, SolutionStatus.NO_SOLUTION_VALUES)


def test_every_engine_status_is_mapped():
    for status in EngineStatus:
        model_status, solution_status = map_status(status)
        assert isinstance(model_status, ModelStatus)
        assert isinstance(solution_status, SolutionStatus)
