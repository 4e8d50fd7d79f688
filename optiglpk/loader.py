"""
Loading GLPK MathProg models into a Model
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ._native import glpk, ensure_initialized, redirect_engine_output
from .bounds import BoundType
from .model import Problem
from .modeling import Constraint, Expression, Model, Sense, Variable, VariableType

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_output(output_path: str, remove: bool) -> str:
    """Read the GLPK output file; remove it afterwards if it is temporary"""
    try:
        with open(output_path, encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        return f"Could not read output from GLPK MathProg. {e}"
    finally:
        if remove:
            try:
                os.remove(output_path)
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", output_path, e)


def _translate_mathprog(model_path: str, data_path: Optional[str],
                        output_path: str) -> Optional[Problem]:
    """Run the MathProg translator with GLPK terminal output sent to output_path"""
    with redirect_engine_output(output_path):
        return Problem.from_mathprog(model_path, data_path)


def _reconstruct(model: Model, problem: Problem):
    """
    Add the problem's columns, objective and rows to the model.

    Nothing is added if a column name is already used by the model.
    """
    is_mip = problem.is_mip
    n_cols = problem.num_cols
    n_rows = problem.num_rows

    columns: Dict[int, Variable] = {}
    for j in range(1, n_cols + 1):
        _, lower, upper = problem.column_bounds(j)

        if not is_mip or problem.column_kind(j) == glpk.GLP_CV:
            var_type = VariableType.CONTINUOUS
        else:
            var_type = VariableType.INTEGER

        name = problem.column_name(j) or f"x{j}"
        columns[j] = Variable(name, lower, upper, var_type)

    existing = {var.name for var in model.variables}
    clashes = [var.name for var in columns.values() if var.name in existing]
    if clashes:
        raise ValueError(f"Model already contains variables named {', '.join(clashes)}")

    objective_terms = []
    for j, var in columns.items():
        model.add_variable(var)
        objective_terms.append((var, problem.objective_coefficient(j)))

    sense = Sense.MAXIMIZE if problem.maximize else Sense.MINIMIZE
    model.add_objective(
        Expression.from_terms(objective_terms, problem.objective_coefficient(0)),
        name=problem.objective_name,
        sense=sense,
    )

    # The first free row is the objective row
    objective_row = 0
    for i in range(1, n_rows + 1):
        bound_type, lower, upper = problem.row_bounds(i)
        if bound_type == BoundType.FREE and objective_row == 0:
            objective_row = i
            continue

        terms = [(columns[j], value) for j, value in problem.matrix_row(i)]
        constraint = Constraint(Expression.from_terms(terms), name=problem.row_name(i),
                                lower_bound=lower, upper_bound=upper)
        model.add_constraint(constraint)

    logger.info("Loaded %d variables (%s) and %d constraints into model %r",
                n_cols, "MIP" if is_mip else "LP", model.constraints_count, model.name)


def load(model: Model, model_path: PathLike, data_path: Optional[PathLike] = None,
         output_path: Optional[PathLike] = None) -> Model:
    """
    Read a GLPK MathProg model into a Model.

    Variables, one objective and the constraints of the MathProg model are
    appended to ``model``.

    Parameters
    ----------
    model : Model
        Model to fill
    model_path : str or Path
        Path to the .mod file
    data_path : str or Path, optional
        Path to a .dat file
    output_path : str or Path, optional
        File receiving the MathProg translator's output; a temporary file
        is used and removed if not given

    Returns
    -------
    Model
        The model passed in

    Raises
    ------
    FileNotFoundError
        If the model file or a given data file does not exist
    ValueError
        If output_path is an empty string, or a loaded variable name is
        already used by the model; the model is then left unchanged
    RuntimeError
        If GLPK could not translate the model; the message is the
        translator's output

    Examples
    --------
    >>> model = load(Model('diet'), 'diet.mod', 'diet.dat')
    """
    if not Path(model_path).is_file():
        raise FileNotFoundError(f"MOD-File '{model_path}' does not exist.")
    if data_path and not Path(data_path).is_file():
        raise FileNotFoundError(f"DAT-File '{data_path}' does not exist.")
    if output_path is not None and str(output_path) == "":
        raise ValueError("Output file name may not be an empty string")

    ensure_initialized()

    use_temp_output = output_path is None
    if use_temp_output:
        fd, output_path = tempfile.mkstemp(prefix='mathprog_', suffix='.out')
        os.close(fd)

    try:
        problem = _translate_mathprog(str(model_path),
                                      str(data_path) if data_path else None,
                                      str(output_path))
    except BaseException:
        if use_temp_output:
            os.remove(output_path)
        raise

    message = _read_output(str(output_path), remove=use_temp_output)
    logger.debug("MathProg translator output:\n%s", message)

    if problem is None:
        raise RuntimeError(message)

    with problem:
        _reconstruct(model, problem)
    return model
