"""
High-level solver interface for GLPK
"""
import logging
import os
import tempfile
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Mapping, Optional, Tuple

from ._native import glpk, redirect_engine_output
from .model import Problem
from .modeling import Model, VariableType
from .parameters import Parameters
from .results import Solution
from .status import SolutionStatus, map_status
from .translator import IndexMap, Translation, check_model, translate

logger = logging.getLogger(__name__)

_RETURN_CODES = {
    glpk.GLP_EBADB: "invalid initial basis",
    glpk.GLP_ESING: "singular initial basis matrix",
    glpk.GLP_ECOND: "ill-conditioned initial basis matrix",
    glpk.GLP_EBOUND: "incorrect bounds on a double-bounded variable or row",
    glpk.GLP_EFAIL: "solver failure",
    glpk.GLP_EOBJLL: "objective lower limit reached",
    glpk.GLP_EOBJUL: "objective upper limit reached",
    glpk.GLP_EITLIM: "iteration limit exceeded",
    glpk.GLP_ETMLIM: "time limit exceeded",
    glpk.GLP_ENOPFS: "no primal feasible solution",
    glpk.GLP_ENODFS: "no dual feasible solution",
    glpk.GLP_EROOT: "optimal basis for the LP relaxation not provided",
    glpk.GLP_ESTOP: "search terminated by application",
    glpk.GLP_EMIPGAP: "relative MIP gap tolerance reached",
}


def describe_return_code(code: int) -> str:
    """Human-readable meaning of a glp_simplex / glp_intopt return code"""
    if code == 0:
        return "success"
    return _RETURN_CODES.get(code, f"unknown return code {code}")


def extract_values(problem: Problem, model: Model, index_map: IndexMap,
                   is_mixed_integer: bool) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    Read objective and variable values from a solved problem.

    Values are read for every variable in the index map, so the returned
    keys are exactly the model's variable names.

    Returns
    -------
    objective_values : dict
        Objective name to value (empty if the model has no objective)
    variable_values : dict
        Variable name to primal value
    """
    objective_values = {}
    if model.objectives_count:
        value = problem.mip_objective_value() if is_mixed_integer else problem.objective_value()
        objective_values[model.objectives[0].name] = value

    variable_values = {}
    for j, var in enumerate(index_map.variables, start=1):
        if is_mixed_integer:
            variable_values[var.name] = problem.mip_column_value(j)
        else:
            variable_values[var.name] = problem.column_primal(j)

    return objective_values, variable_values


class GLPKSolver:
    """
    Solves optimization models with GLPK.

    Continuous models are solved with the simplex method. Models with
    integer variables are solved with the simplex method first, and the
    resulting relaxation is handed to GLPK's branch-and-bound.

    One solver instance runs one solve at a time; a call made while a solve
    is in progress raises RuntimeError instead of waiting.

    Parameters
    ----------
    parameters : Parameters, optional
        Solver parameters. If None, default parameters are used.
    log : callable, optional
        Receives progress lines and GLPK terminal output during a solve

    Examples
    --------
    >>> from optiglpk import GLPKSolver, Model, Sense
    >>>
    >>> model = Model('example')
    >>> x = model.add_variable('x', lower_bound=0, upper_bound=10)
    >>> model.add_objective(x, name='obj', sense=Sense.MAXIMIZE)
    >>> model.add_constraint(x <= 7, name='limit')
    >>>
    >>> solver = GLPKSolver()
    >>> solution = solver.solve(model)
    >>> print(solution.variable_values['x'])
    7.0
    """

    def __init__(self, parameters: Optional[Parameters] = None,
                 log: Optional[Callable[[str], None]] = None):
        self._parameters = parameters if parameters is not None else Parameters()
        self._log = log
        self._busy = threading.Lock()
        self.is_mixed_integer_model = False

    @property
    def is_busy(self) -> bool:
        """True while a solve is in progress"""
        return self._busy.locked()

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @parameters.setter
    def parameters(self, value):
        if self.is_busy:
            raise RuntimeError("solver is busy")
        raise NotImplementedError("Changing parameters of an existing solver is not supported")

    def abort(self):
        """
        Abort request.

        Only acknowledged while the solver is idle; GLPK calls cannot be
        interrupted once started.
        """
        if self.is_busy:
            raise NotImplementedError("Aborting a running solve is not supported")
        logger.debug("Abort requested while idle; nothing to do")

    def _write_log(self, line: str):
        logger.debug(line.strip())
        if self._log is not None:
            self._log(line)

    @contextmanager
    def _engine_output(self):
        """Send GLPK terminal output to the log sink instead of stdout, if there is a sink"""
        if self._log is None:
            yield
            return

        fd, path = tempfile.mkstemp(prefix='glpk_', suffix='.log')
        os.close(fd)
        try:
            with redirect_engine_output(path):
                yield
            with open(path, encoding='utf-8', errors='replace') as f:
                for line in f:
                    line = line.rstrip()
                    if line:
                        self._log(line)
        finally:
            os.remove(path)

    def solve(self, model: Model,
              variable_values: Optional[Mapping[str, float]] = None) -> Optional[Solution]:
        """
        Solve a model.

        Parameters
        ----------
        model : Model
            Model to solve
        variable_values : dict, optional
            Values to fix variables to for this solve only, by variable name

        Returns
        -------
        Solution or None
            None if GLPK failed to solve the problem

        Raises
        ------
        ValueError
            If model is None, has several objectives or non-linear terms,
            or references variables it does not contain
        RuntimeError
            If the solver is busy
        """
        if model is None:
            raise ValueError("model must not be None")
        if not self._busy.acquire(blocking=False):
            raise RuntimeError("solver is busy")
        try:
            return self._solve(model, variable_values or {})
        finally:
            self._busy.release()

    def _solve(self, model: Model, variable_values: Mapping[str, float]) -> Optional[Solution]:
        start = time.perf_counter()

        check_model(model)
        self.is_mixed_integer_model = model.is_mixed_integer

        self._write_log(" - Creating GLPK model")
        with Problem.create(model.name) as problem:
            translation = translate(model, problem, variable_values)
            self._log_summary(model, translation)

            self._write_log(" - Solving GLPK model")
            if not self._solve_problem(problem, translation):
                return None

            if self.is_mixed_integer_model:
                raw_status = problem.mip_status()
            else:
                raw_status = problem.status()
            model_status, solution_status = map_status(raw_status)

            objective_values = None
            variable_results = None
            if solution_status != SolutionStatus.NO_SOLUTION_VALUES:
                objective_values, variable_results = extract_values(
                    problem, model, translation.index_map, self.is_mixed_integer_model
                )

        wall_time = time.perf_counter() - start
        logger.info("Solved model %r in %.3fs: %s / %s", model.name, wall_time,
                    model_status.value, solution_status.value)

        return Solution(model.name, wall_time, model_status, solution_status,
                        variable_results, None, objective_values)

    def _log_summary(self, model: Model, translation: Translation):
        integer_count = sum(1 for var in model.variables if var.type == VariableType.INTEGER)
        lines = [
            f" - Model has {model.variables_count} variables",
            f" - Model has {integer_count} integer variables",
            f" - Model has {model.constraints_count} constraints",
            f" - Model has {len(translation.matrix)} non zero elements",
        ]
        for line in lines:
            self._write_log(line)
        logger.info("Model %r: %d variables (%d integer), %d constraints, %d non-zeros",
                    model.name, model.variables_count, integer_count,
                    model.constraints_count, len(translation.matrix))

    def _solve_problem(self, problem: Problem, translation: Translation) -> bool:
        """
        Load the matrix and run GLPK.

        Returns
        -------
        bool
            True if every GLPK call returned success
        """
        problem.load_matrix(*translation.matrix.build())

        with self._engine_output():
            code = problem.simplex(self._parameters.to_smcp())
        if code != 0:
            logger.error("GLPK simplex failed: %s", describe_return_code(code))
            self._write_log(f"ERROR: simplex failed: {describe_return_code(code)}")
            return False

        if not translation.is_mixed_integer:
            return True

        with self._engine_output():
            code = problem.intopt(self._parameters.to_iocp())
        if code != 0:
            logger.error("GLPK branch-and-bound failed: %s", describe_return_code(code))
            self._write_log(f"ERROR: branch-and-bound failed: {describe_return_code(code)}")
            return False
        return True


def solve(model: Model, variable_values: Optional[Mapping[str, float]] = None,
          parameters: Optional[Parameters] = None) -> Optional[Solution]:
    """
    Convenience function to solve a model without creating a solver object.

    Parameters
    ----------
    model : Model
        Model to solve
    variable_values : dict, optional
        Values to fix variables to for this solve only
    parameters : Parameters, optional
        Solver parameters. If None, default parameters are used.

    Returns
    -------
    Solution or None

    Examples
    --------
    >>> from optiglpk import solve
    >>> solution = solve(model)
    >>> print(solution)
    """
    solver = GLPKSolver(parameters=parameters)
    return solver.solve(model, variable_values)
