"""
Translation of GLPK solution statuses into model-level statuses
"""
from enum import Enum, IntEnum
from typing import Tuple

from ._native import glpk


class EngineStatus(IntEnum):
    """Solution status as reported by glp_get_status / glp_mip_status"""
    UNDEFINED = glpk.GLP_UNDEF
    FEASIBLE = glpk.GLP_FEAS
    INFEASIBLE = glpk.GLP_INFEAS
    NO_FEASIBLE = glpk.GLP_NOFEAS
    OPTIMAL = glpk.GLP_OPT
    UNBOUNDED = glpk.GLP_UNBND


class ModelStatus(Enum):
    """What is known about the model after a solve"""
    FEASIBLE = 'FEASIBLE'
    INFEASIBLE = 'INFEASIBLE'
    UNBOUNDED = 'UNBOUNDED'
    UNKNOWN = 'UNKNOWN'


class SolutionStatus(Enum):
    """Whether the solve produced variable values"""
    OPTIMAL = 'OPTIMAL'
    NO_SOLUTION_VALUES = 'NO_SOLUTION_VALUES'


_STATUS_MAP = {
    EngineStatus.NO_FEASIBLE: (ModelStatus.INFEASIBLE, SolutionStatus.NO_SOLUTION_VALUES),
    EngineStatus.INFEASIBLE: (ModelStatus.INFEASIBLE, SolutionStatus.NO_SOLUTION_VALUES),
    EngineStatus.UNBOUNDED: (ModelStatus.UNBOUNDED, SolutionStatus.NO_SOLUTION_VALUES),
    EngineStatus.FEASIBLE: (ModelStatus.FEASIBLE, SolutionStatus.OPTIMAL),
    EngineStatus.OPTIMAL: (ModelStatus.FEASIBLE, SolutionStatus.OPTIMAL),
}

_UNKNOWN = (ModelStatus.UNKNOWN, SolutionStatus.NO_SOLUTION_VALUES)


def map_status(raw_status: int) -> Tuple[ModelStatus, SolutionStatus]:
    """
    Map a raw GLPK status code to (ModelStatus, SolutionStatus).

    Undefined and unrecognised codes map to (UNKNOWN, NO_SOLUTION_VALUES).
    """
    return _STATUS_MAP.get(raw_status, _UNKNOWN)
