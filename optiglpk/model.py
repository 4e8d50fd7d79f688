"""
Problem class wrapping a GLPK problem object
"""
import numpy as np
from scipy import sparse
from typing import List, Optional, Tuple, Union
from pathlib import Path

from ._native import glpk, ensure_initialized
from .bounds import BoundType, bounds_from_type

MAX_NAME_LENGTH = 255


def _check_name(name: str) -> str:
    name = str(name)
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"GLPK names are limited to {MAX_NAME_LENGTH} characters: {name[:32]}...")
    return name


class Problem:
    """
    GLPK problem object (``glp_prob``) with an explicit lifetime.

    The native object is released by :meth:`free`, which is idempotent.
    Use the problem as a context manager so it is released on every exit
    path; nothing relies on garbage collection to free it.

    Rows and columns are addressed from 1, as in GLPK.

    Examples
    --------
    >>> with Problem.create('demo') as problem:
    ...     first = problem.add_columns(2)
    ...     problem.set_column(first, 'x', BoundType.LOWER, 0.0, np.inf)
    """

    def __init__(self, lp):
        """
        Initialize Problem from a GLPK problem pointer.

        Parameters
        ----------
        lp : swiglpk glp_prob pointer
            Problem object created by glp_create_prob
        """
        self._lp = lp
        self._freed = False

    @classmethod
    def create(cls, name: Optional[str] = None) -> 'Problem':
        """Create an empty problem"""
        ensure_initialized()
        problem = cls(glpk.glp_create_prob())
        if name:
            glpk.glp_set_prob_name(problem._lp, _check_name(name))
        return problem

    @staticmethod
    def from_mathprog(model_path: Union[str, Path],
                      data_path: Optional[Union[str, Path]] = None) -> Optional['Problem']:
        """
        Translate a GLPK MathProg model into a problem.

        Diagnostics are printed to the GLPK terminal; callers that need the
        text capture it with ``glp_open_tee``.

        Parameters
        ----------
        model_path : str or Path
            Path to the .mod file
        data_path : str or Path, optional
            Path to a .dat file; the model file's own data section is then skipped

        Returns
        -------
        Problem or None
            None if the model could not be read, the data could not be read,
            or the model could not be generated
        """
        ensure_initialized()

        model_path = str(model_path)
        if not Path(model_path).exists():
            raise FileNotFoundError(f"MathProg model file not found: {model_path}")

        tran = glpk.glp_mpl_alloc_wksp()
        try:
            skip_data = 1 if data_path else 0
            if glpk.glp_mpl_read_model(tran, model_path, skip_data) != 0:
                return None
            if data_path and glpk.glp_mpl_read_data(tran, str(data_path)) != 0:
                return None
            if glpk.glp_mpl_generate(tran, None) != 0:
                return None

            problem = Problem(glpk.glp_create_prob())
            try:
                glpk.glp_mpl_build_prob(tran, problem._lp)
            except BaseException:
                problem.free()
                raise
            return problem
        finally:
            glpk.glp_mpl_free_wksp(tran)

    def _handle(self):
        if self._freed:
            raise RuntimeError("Problem has been freed")
        return self._lp

    @property
    def name(self) -> Optional[str]:
        """Problem name"""
        return glpk.glp_get_prob_name(self._handle())

    @property
    def num_rows(self) -> int:
        """Number of rows (constraints)"""
        return glpk.glp_get_num_rows(self._handle())

    @property
    def num_cols(self) -> int:
        """Number of columns (variables)"""
        return glpk.glp_get_num_cols(self._handle())

    @property
    def num_nonzeros(self) -> int:
        """Number of constraint matrix entries"""
        return glpk.glp_get_num_nz(self._handle())

    @property
    def is_mip(self) -> bool:
        """True if the problem has integer columns"""
        return glpk.glp_get_num_int(self._handle()) > 0

    def is_valid(self) -> bool:
        """Check if problem is valid (not freed)"""
        return not self._freed

    # Columns

    def add_columns(self, count: int) -> int:
        """Append columns and return the index of the first new one"""
        if count <= 0:
            return self.num_cols + 1
        return glpk.glp_add_cols(self._handle(), count)

    def set_column(self, j: int, name: str, bound_type: BoundType,
                   lower: float, upper: float, kind: int = glpk.GLP_CV):
        """Set name, bounds and kind (GLP_CV, GLP_IV or GLP_BV) of column j"""
        lp = self._handle()
        glpk.glp_set_col_name(lp, j, _check_name(name))
        glpk.glp_set_col_bnds(lp, j, int(bound_type), float(lower), float(upper))
        glpk.glp_set_col_kind(lp, j, kind)

    def column_name(self, j: int) -> Optional[str]:
        return glpk.glp_get_col_name(self._handle(), j)

    def column_bounds(self, j: int) -> Tuple[BoundType, float, float]:
        """Bound type and bounds of column j; missing bounds are reported as -inf/+inf"""
        lp = self._handle()
        bound_type = BoundType(glpk.glp_get_col_type(lp, j))
        lower, upper = bounds_from_type(bound_type, glpk.glp_get_col_lb(lp, j),
                                        glpk.glp_get_col_ub(lp, j))
        return bound_type, lower, upper

    def column_kind(self, j: int) -> int:
        """GLP_CV, GLP_IV or GLP_BV"""
        return glpk.glp_get_col_kind(self._handle(), j)

    # Objective

    def set_objective(self, name: str, maximize: bool):
        lp = self._handle()
        glpk.glp_set_obj_name(lp, _check_name(name))
        glpk.glp_set_obj_dir(lp, glpk.GLP_MAX if maximize else glpk.GLP_MIN)

    def set_objective_coefficient(self, j: int, coefficient: float):
        """Set objective coefficient of column j; j = 0 sets the constant term"""
        glpk.glp_set_obj_coef(self._handle(), j, float(coefficient))

    def objective_coefficient(self, j: int) -> float:
        return glpk.glp_get_obj_coef(self._handle(), j)

    @property
    def objective_name(self) -> Optional[str]:
        return glpk.glp_get_obj_name(self._handle())

    @property
    def maximize(self) -> bool:
        return glpk.glp_get_obj_dir(self._handle()) == glpk.GLP_MAX

    # Rows

    def add_rows(self, count: int) -> int:
        """Append rows and return the index of the first new one"""
        if count <= 0:
            return self.num_rows + 1
        return glpk.glp_add_rows(self._handle(), count)

    def set_row(self, i: int, name: str, bound_type: BoundType, lower: float, upper: float):
        lp = self._handle()
        glpk.glp_set_row_name(lp, i, _check_name(name))
        glpk.glp_set_row_bnds(lp, i, int(bound_type), float(lower), float(upper))

    def row_name(self, i: int) -> Optional[str]:
        return glpk.glp_get_row_name(self._handle(), i)

    def row_bounds(self, i: int) -> Tuple[BoundType, float, float]:
        """Bound type and bounds of row i; missing bounds are reported as -inf/+inf"""
        lp = self._handle()
        bound_type = BoundType(glpk.glp_get_row_type(lp, i))
        lower, upper = bounds_from_type(bound_type, glpk.glp_get_row_lb(lp, i),
                                        glpk.glp_get_row_ub(lp, i))
        return bound_type, lower, upper

    def matrix_row(self, i: int) -> List[Tuple[int, float]]:
        """Non-zeros of row i as (column index, coefficient) pairs"""
        lp = self._handle()
        size = self.num_cols + 1
        ind = glpk.intArray(size)
        val = glpk.doubleArray(size)
        length = glpk.glp_get_mat_row(lp, i, ind, val)
        return [(ind[t], val[t]) for t in range(1, length + 1)]

    # Matrix

    def load_matrix(self, ia: np.ndarray, ja: np.ndarray, ar: np.ndarray):
        """
        Replace the constraint matrix.

        Parameters
        ----------
        ia, ja, ar : np.ndarray
            Row indices, column indices and coefficients; element 0 is unused
        """
        lp = self._handle()
        size = len(ar)
        if not len(ia) == len(ja) == size:
            raise ValueError("ia, ja and ar must have the same length")

        # GLPK arrays live only for this call
        ia_arr = glpk.intArray(size)
        ja_arr = glpk.intArray(size)
        ar_arr = glpk.doubleArray(size)
        for k, (i, j, a) in enumerate(zip(ia.tolist(), ja.tolist(), ar.tolist())):
            ia_arr[k] = i
            ja_arr[k] = j
            ar_arr[k] = a
        try:
            glpk.glp_load_matrix(lp, size - 1, ia_arr, ja_arr, ar_arr)
        finally:
            del ia_arr, ja_arr, ar_arr

    def get_matrix(self) -> sparse.csr_matrix:
        """0-based copy of the constraint matrix"""
        rows, cols, data = [], [], []
        for i in range(1, self.num_rows + 1):
            for j, value in self.matrix_row(i):
                rows.append(i - 1)
                cols.append(j - 1)
                data.append(value)
        return sparse.coo_matrix((data, (rows, cols)),
                                 shape=(self.num_rows, self.num_cols)).tocsr()

    # Solving

    def simplex(self, smcp=None) -> int:
        """Run the simplex method; returns GLPK's return code"""
        return glpk.glp_simplex(self._handle(), smcp)

    def intopt(self, iocp=None) -> int:
        """Run branch-and-bound; returns GLPK's return code"""
        return glpk.glp_intopt(self._handle(), iocp)

    def status(self) -> int:
        return glpk.glp_get_status(self._handle())

    def mip_status(self) -> int:
        return glpk.glp_mip_status(self._handle())

    def objective_value(self) -> float:
        return glpk.glp_get_obj_val(self._handle())

    def mip_objective_value(self) -> float:
        return glpk.glp_mip_obj_val(self._handle())

    def column_primal(self, j: int) -> float:
        return glpk.glp_get_col_prim(self._handle(), j)

    def mip_column_value(self, j: int) -> float:
        return glpk.glp_mip_col_val(self._handle(), j)

    # Lifetime

    def free(self):
        """
        Free the problem and release memory.

        After calling this method, the problem cannot be used anymore.
        """
        if not self._freed:
            glpk.glp_delete_prob(self._lp)
            self._lp = None
            self._freed = True

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - free the problem"""
        self.free()
        return False

    def __repr__(self):
        if self._freed:
            return "<optiglpk.Problem (freed)>"
        else:
            return f"<optiglpk.Problem rows={self.num_rows} cols={self.num_cols}>"
