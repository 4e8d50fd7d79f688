"""
optiglpk Python Package

Solves linear and mixed-integer optimization models with the GNU Linear
Programming Kit (GLPK), and loads GLPK MathProg models.
"""

from .solver import GLPKSolver, solve
from .parameters import Parameters
from .results import Solution
from .status import EngineStatus, ModelStatus, SolutionStatus, map_status
from .bounds import BoundType, classify_bounds
from .matrix import SparseMatrixBuilder
from .model import Problem
from .loader import load
from .modeling import (
    Model, Variable, VariableType, Term, Expression, Constraint, Objective,
    Sense, between
)

__version__ = "0.1.0"

__all__ = [
    'GLPKSolver',
    'Problem',
    'solve',
    'load',
    'Parameters',
    'Solution',
    'EngineStatus',
    'ModelStatus',
    'SolutionStatus',
    'map_status',
    'BoundType',
    'classify_bounds',
    'SparseMatrixBuilder',
    '__version__',
    # Modeling interface
    'Model',
    'Variable',
    'VariableType',
    'Term',
    'Expression',
    'Constraint',
    'Objective',
    'Sense',
    'between',
]
