"""
Modeling Interface for optiglpk

This module provides the abstract optimization model that the GLPK adapter
consumes: named variables with bounds and a type, linear expressions,
constraints bounded from both sides, and a single objective.

Example
-------
>>> from optiglpk import Model, VariableType, Sense
>>>
>>> # Create model
>>> model = Model(name='production')
>>>
>>> # Add variables
>>> x = model.add_variable('x', lower_bound=0, upper_bound=10)
>>> y = model.add_variable('y', lower_bound=0, type=VariableType.INTEGER)
>>>
>>> # Set objective
>>> model.add_objective(3*x + 2*y, name='profit', sense=Sense.MAXIMIZE)
>>>
>>> # Add constraints
>>> model.add_constraint(x + y <= 4, name='capacity')
>>> model.add_constraint(x + 3*y <= 6, name='labour')
"""

import numpy as np
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union


class Sense(Enum):
    """Optimization sense"""
    MINIMIZE = 'minimize'
    MAXIMIZE = 'maximize'


class VariableType(Enum):
    """Domain of a decision variable"""
    CONTINUOUS = 'continuous'
    INTEGER = 'integer'


_SCALARS = (int, float, np.number)


class Variable:
    """
    Represents a decision variable in the optimization model.

    Variables can be combined with arithmetic operators to form expressions.
    Bounds are plain attributes and may be changed between solves; the name
    and the type are fixed.

    Parameters
    ----------
    name : str
        Unique name of the variable within its model
    lower_bound : float, optional
        Lower bound (default: 0), -inf for none
    upper_bound : float, optional
        Upper bound (default: inf)
    type : VariableType, optional
        Continuous (default) or integer

    Examples
    --------
    >>> x = Variable('x', lower_bound=0, upper_bound=10)
    >>> expr = 3*x + 5  # Create linear expression
    """

    def __init__(self, name: str, lower_bound: float = 0.0,
                 upper_bound: float = np.inf,
                 type: VariableType = VariableType.CONTINUOUS):
        if not name:
            raise ValueError("Variable name must be a non-empty string")
        lower_bound = float(lower_bound)
        upper_bound = float(upper_bound)
        if lower_bound > upper_bound:
            raise ValueError(
                f"Lower bound ({lower_bound}) must be <= upper bound ({upper_bound}) "
                f"for variable {name!r}"
            )
        self._name = name
        self._type = VariableType(type)
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> VariableType:
        return self._type

    def __repr__(self):
        return f"Variable({self.name})"

    # Comparison operators build constraints, so hashing stays identity based
    __hash__ = object.__hash__

    # Arithmetic operations
    def __add__(self, other):
        return Expression.from_variable(self) + other

    def __radd__(self, other):
        return Expression.from_variable(self) + other

    def __sub__(self, other):
        return Expression.from_variable(self) - other

    def __rsub__(self, other):
        return (-1) * Expression.from_variable(self) + other

    def __mul__(self, other):
        return Expression.from_variable(self) * other

    def __rmul__(self, other):
        return Expression.from_variable(self) * other

    def __neg__(self):
        return -1 * self

    def __truediv__(self, other):
        if not isinstance(other, _SCALARS):
            raise TypeError("Can only divide variable by scalar")
        return self * (1.0 / other)

    def __pow__(self, exponent):
        if not isinstance(exponent, int) or exponent < 1:
            raise TypeError("Variables can only be raised to a positive integer power")
        return Expression({(self, exponent): 1.0})

    # Comparison operators for constraints
    def __le__(self, other):
        return Expression.from_variable(self) <= other

    def __ge__(self, other):
        return Expression.from_variable(self) >= other

    def __eq__(self, other):
        return Expression.from_variable(self) == other


class Term:
    """One summand ``factor * variable ** exponent`` of an expression"""

    __slots__ = ('variable', 'factor', 'exponent')

    def __init__(self, variable: Variable, factor: float, exponent: int = 1):
        self.variable = variable
        self.factor = factor
        self.exponent = exponent

    @property
    def is_linear(self) -> bool:
        return self.exponent == 1

    def __repr__(self):
        power = f"^{self.exponent}" if self.exponent != 1 else ""
        return f"{self.factor}*{self.variable.name}{power}"


class Expression:
    """
    Represents a sum of terms plus a constant.

    Internally stores factors in an insertion-ordered dictionary keyed by
    (variable, exponent). Terms appear in the order their variables were
    first added, which is the order the GLPK matrix entries are emitted in.

    Parameters
    ----------
    coefficients : dict, optional
        Dictionary mapping (variable, exponent) pairs to factors
    constant : float, optional
        Constant term

    Examples
    --------
    >>> x = Variable('x')
    >>> y = Variable('y')
    >>> expr = 3*x + 2*y - 5
    >>> print(expr)
    3.0*x + 2.0*y - 5.0
    """

    def __init__(self, coefficients: Optional[Dict[Tuple[Variable, int], float]] = None,
                 constant: float = 0.0):
        self.coefficients = coefficients or {}
        self.constant = float(constant)
        self._simplify()

    def _simplify(self):
        """Remove zero coefficients"""
        self.coefficients = {k: v for k, v in self.coefficients.items() if abs(v) > 1e-15}

    @staticmethod
    def from_variable(var: Variable) -> 'Expression':
        """Create expression from a single variable"""
        return Expression({(var, 1): 1.0}, 0.0)

    @staticmethod
    def from_constant(value: float) -> 'Expression':
        """Create expression from a constant"""
        return Expression({}, value)

    @staticmethod
    def from_terms(terms, constant: float = 0.0) -> 'Expression':
        """Create expression from (variable, factor) pairs, merging repeats"""
        result = Expression({}, constant)
        for var, factor in terms:
            key = (var, 1)
            result.coefficients[key] = result.coefficients.get(key, 0.0) + float(factor)
        result._simplify()
        return result

    @property
    def terms(self) -> Iterator[Term]:
        """Terms in insertion order"""
        return (Term(var, factor, exponent)
                for (var, exponent), factor in self.coefficients.items())

    @property
    def is_linear(self) -> bool:
        return all(exponent == 1 for _, exponent in self.coefficients)

    def copy(self) -> 'Expression':
        """Create a copy of this expression"""
        return Expression(self.coefficients.copy(), self.constant)

    def get_coefficient(self, var: Variable) -> float:
        """Get the linear coefficient of a variable"""
        return self.coefficients.get((var, 1), 0.0)

    def __len__(self):
        return len(self.coefficients)

    def __repr__(self):
        terms = [repr(term) for term in self.terms]

        if abs(self.constant) > 1e-15 or not terms:
            terms.append(f"{self.constant}")

        result = terms[0]
        for term in terms[1:]:
            if term.startswith('-'):
                result += f" - {term[1:]}"
            else:
                result += f" + {term}"
        return result

    # Arithmetic operations
    def _combined(self, other, sign: float):
        if isinstance(other, _SCALARS):
            result = self.copy()
            result.constant += sign * float(other)
            return result
        elif isinstance(other, Variable):
            other = Expression.from_variable(other)
        elif not isinstance(other, Expression):
            return NotImplemented

        result = self.copy()
        for key, coef in other.coefficients.items():
            result.coefficients[key] = result.coefficients.get(key, 0.0) + sign * coef
        result.constant += sign * other.constant
        result._simplify()
        return result

    def __add__(self, other):
        return self._combined(other, 1.0)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return self._combined(other, -1.0)

    def __rsub__(self, other):
        return (-1 * self) + other

    def __mul__(self, other):
        if isinstance(other, _SCALARS):
            scalar = float(other)
            return Expression(
                {k: v * scalar for k, v in self.coefficients.items()},
                self.constant * scalar
            )
        else:
            raise TypeError("Can only multiply expression by scalar (no products of variables)")

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return self * (-1)

    def __truediv__(self, other):
        if not isinstance(other, _SCALARS):
            raise TypeError("Can only divide expression by scalar")
        return self * (1.0 / float(other))

    # Comparison operators for constraints
    def __le__(self, other):
        return Constraint.from_comparison(self, other, '<=')

    def __ge__(self, other):
        return Constraint.from_comparison(self, other, '>=')

    def __eq__(self, other):
        return Constraint.from_comparison(self, other, '==')

    __hash__ = None


def _as_expression(value) -> Expression:
    if isinstance(value, Expression):
        return value
    if isinstance(value, Variable):
        return Expression.from_variable(value)
    if isinstance(value, _SCALARS):
        return Expression.from_constant(float(value))
    raise TypeError("Expected a Variable, scalar, or Expression")


def between(lower: Union[float, int], expr: Union[Expression, Variable],
            upper: Union[float, int]) -> 'Constraint':
    """
    Create a two-sided constraint: lower <= expr <= upper.

    Python's comparison chaining doesn't work for custom objects, so use this helper.

    Parameters
    ----------
    lower : float or int
        Lower bound
    expr : Expression or Variable
        Expression to bound
    upper : float or int
        Upper bound

    Returns
    -------
    Constraint

    Examples
    --------
    >>> x = Variable('x')
    >>> c = between(5, 2*x, 10)  # 5 <= 2*x <= 10
    """
    expr = _as_expression(expr)
    lower_val = float(lower)
    upper_val = float(upper)

    if lower_val > upper_val:
        raise ValueError(f"Lower bound ({lower_val}) must be <= upper bound ({upper_val})")

    # L <= a'x + C <= U  is stored as  L - C <= a'x <= U - C
    clean_expr = Expression(expr.coefficients.copy(), 0.0)
    return Constraint(clean_expr, lower_bound=lower_val - expr.constant,
                      upper_bound=upper_val - expr.constant)


class Constraint:
    """
    Represents a constraint ``lower_bound <= expression <= upper_bound``.

    Constraints created with ``<=``, ``>=``, ``==`` or :func:`between` keep
    a constant-free expression; the constant is moved into the bounds.

    A constraint built directly from an expression with a non-zero constant
    treats the constant as a bound offset when it is handed to GLPK: a
    negative constant is subtracted from the upper bound, a positive one is
    added to the lower bound.

    Parameters
    ----------
    expression : Expression or Variable
        Constrained expression
    name : str, optional
        Name of the constraint
    lower_bound : float, optional
        Lower bound (default: -inf)
    upper_bound : float, optional
        Upper bound (default: inf)

    Examples
    --------
    >>> x = Variable('x')
    >>> y = Variable('y')
    >>> # Single-sided constraint
    >>> constraint1 = 2*x + 3*y <= 10
    >>> # Two-sided constraint
    >>> constraint2 = between(5, 2*x + 3*y, 10)
    >>> # Equality constraint
    >>> constraint3 = x + y == 7
    """

    def __init__(self, expression: Union[Expression, Variable],
                 name: Optional[str] = None,
                 lower_bound: float = -np.inf,
                 upper_bound: float = np.inf):
        self.expression = _as_expression(expression)
        self.name = name
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)

    @classmethod
    def from_comparison(cls, lhs, rhs, sense: str) -> 'Constraint':
        """Normalize ``lhs <sense> rhs`` to ``lower <= a'x <= upper``"""
        expr = _as_expression(lhs) - _as_expression(rhs)
        rhs_value = -expr.constant
        clean_expr = Expression(expr.coefficients.copy(), 0.0)

        if sense == '<=':
            return cls(clean_expr, lower_bound=-np.inf, upper_bound=rhs_value)
        if sense == '>=':
            return cls(clean_expr, lower_bound=rhs_value, upper_bound=np.inf)
        if sense == '==':
            return cls(clean_expr, lower_bound=rhs_value, upper_bound=rhs_value)
        raise ValueError(f"Unknown constraint sense: {sense!r}")

    def __repr__(self):
        return (f"Constraint({self.lower_bound} <= {self.expression} <= "
                f"{self.upper_bound}, name={self.name})")


class Objective:
    """
    Represents the objective function of a model.

    Parameters
    ----------
    expression : Expression or Variable or float
        Expression to minimize or maximize
    name : str, optional
        Name of the objective (default: 'obj')
    sense : Sense or str, optional
        'minimize' (default) or 'maximize'
    """

    def __init__(self, expression: Union[Expression, Variable, float],
                 name: Optional[str] = None,
                 sense: Union[str, Sense] = Sense.MINIMIZE):
        if isinstance(sense, str):
            sense = Sense(sense.lower())
        self.expression = _as_expression(expression)
        self.name = name or "obj"
        self.sense = sense

    def __repr__(self):
        return f"Objective({self.sense.value} {self.expression}, name={self.name})"


class Model:
    """
    Container for variables, constraints and objectives.

    This is the model handed to :class:`optiglpk.GLPKSolver` and filled by
    :func:`optiglpk.load`. Variables, constraints and objectives keep the
    order they were added in.

    Parameters
    ----------
    name : str, optional
        Name of the model

    Examples
    --------
    >>> model = Model('example')
    >>> x = model.add_variable('x', lower_bound=0, upper_bound=10)
    >>> model.add_objective(x, sense='maximize')
    >>> model.add_constraint(x <= 7, name='limit')
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or "Model"

        self.variables: List[Variable] = []
        self.constraints: List[Constraint] = []
        self.objectives: List[Objective] = []
        self._variables_by_name: Dict[str, Variable] = {}

    @property
    def variables_count(self) -> int:
        return len(self.variables)

    @property
    def constraints_count(self) -> int:
        return len(self.constraints)

    @property
    def objectives_count(self) -> int:
        return len(self.objectives)

    @property
    def is_mixed_integer(self) -> bool:
        """True if any variable is not continuous"""
        return any(var.type != VariableType.CONTINUOUS for var in self.variables)

    def add_variable(self, name: Union[str, Variable],
                     lower_bound: float = 0.0,
                     upper_bound: float = np.inf,
                     type: VariableType = VariableType.CONTINUOUS) -> Variable:
        """
        Add a decision variable to the model.

        Parameters
        ----------
        name : str or Variable
            Name of the new variable, or an existing Variable object
        lower_bound : float, optional
            Lower bound (default: 0)
        upper_bound : float, optional
            Upper bound (default: inf)
        type : VariableType, optional
            Continuous (default) or integer

        Returns
        -------
        Variable
            The added variable object

        Examples
        --------
        >>> x = model.add_variable('x', lower_bound=0, upper_bound=10)
        >>> y = model.add_variable('y', type=VariableType.INTEGER)
        """
        if isinstance(name, Variable):
            var = name
        else:
            var = Variable(name, lower_bound, upper_bound, type)

        if var.name in self._variables_by_name:
            raise ValueError(f"Model already contains a variable named {var.name!r}")

        self._variables_by_name[var.name] = var
        self.variables.append(var)
        return var

    def get_variable(self, name: str) -> Variable:
        """Look up a variable by name (KeyError if missing)"""
        return self._variables_by_name[name]

    def add_constraint(self, constraint: Constraint,
                       name: Optional[str] = None) -> Constraint:
        """
        Add a constraint to the model.

        Parameters
        ----------
        constraint : Constraint
            Constraint object (created using <=, >=, == or between())
        name : str, optional
            Name for the constraint

        Returns
        -------
        Constraint
            The added constraint
        """
        if not isinstance(constraint, Constraint):
            raise TypeError("Must provide a Constraint object (use <=, >=, == or between())")

        if name:
            constraint.name = name
        elif constraint.name is None:
            constraint.name = f"c{len(self.constraints)}"

        self.constraints.append(constraint)
        return constraint

    def add_objective(self, expression: Union[Expression, Variable, float, Objective],
                      name: Optional[str] = None,
                      sense: Union[str, Sense] = Sense.MINIMIZE) -> Objective:
        """
        Add an objective to the model.

        Only one objective can be solved; a second one is accepted here but
        rejected by the solver.

        Examples
        --------
        >>> model.add_objective(-3*x - 5*y, name='cost')
        """
        if isinstance(expression, Objective):
            objective = expression
        else:
            objective = Objective(expression, name, sense)
        self.objectives.append(objective)
        return objective

    def load(self, model_path, data_path=None, output_path=None) -> 'Model':
        """
        Fill this model from a GLPK MathProg file.

        See :func:`optiglpk.loader.load`.
        """
        from .loader import load
        load(self, model_path, data_path, output_path)
        return self

    def __repr__(self):
        return (f"Model(name='{self.name}', variables={self.variables_count}, "
                f"constraints={self.constraints_count}, objectives={self.objectives_count})")
