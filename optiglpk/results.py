"""
Solution class for GLPK solver output
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .status import ModelStatus, SolutionStatus


def _frozen(values: Optional[Mapping[str, float]]) -> Optional[Mapping[str, float]]:
    if values is None:
        return None
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class Solution:
    """
    Result of one solve call.

    Attributes
    ----------
    model_name : str
        Name of the solved model
    wall_time : float
        Elapsed wall time of the solve call in seconds
    model_status : ModelStatus
        FEASIBLE, INFEASIBLE, UNBOUNDED or UNKNOWN
    solution_status : SolutionStatus
        OPTIMAL or NO_SOLUTION_VALUES
    variable_values : Mapping[str, float] or None
        Primal value per variable name; None without solution values
    constraint_values : Mapping[str, float] or None
        Always None; row activities are not extracted
    objective_values : Mapping[str, float] or None
        Objective value per objective name; None without solution values

    Methods
    -------
    is_optimal()
        Check if solution values are available
    to_dict()
        Convert the solution to a dictionary
    """

    model_name: str
    wall_time: float
    model_status: ModelStatus
    solution_status: SolutionStatus
    variable_values: Optional[Mapping[str, float]] = None
    constraint_values: Optional[Mapping[str, float]] = None
    objective_values: Optional[Mapping[str, float]] = None

    def __post_init__(self):
        object.__setattr__(self, 'variable_values', _frozen(self.variable_values))
        object.__setattr__(self, 'constraint_values', _frozen(self.constraint_values))
        object.__setattr__(self, 'objective_values', _frozen(self.objective_values))

    def is_optimal(self) -> bool:
        """Check if the solve produced solution values"""
        return self.solution_status == SolutionStatus.OPTIMAL

    def __str__(self):
        lines = [
            "GLPK Solution",
            "=" * 50,
            f"Model:           {self.model_name}",
            f"Model status:    {self.model_status.value}",
            f"Solution status: {self.solution_status.value}",
            f"Time:            {self.wall_time:.3f} seconds",
        ]

        if self.objective_values:
            for name, value in self.objective_values.items():
                lines.append(f"Objective {name}: {value:.6e}")

        if self.variable_values is not None:
            lines.append(f"Variables:       {len(self.variable_values)}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert solution to dictionary"""
        def plain(values):
            return dict(values) if values is not None else None

        return {
            'model_name': self.model_name,
            'wall_time': self.wall_time,
            'model_status': self.model_status.value,
            'solution_status': self.solution_status.value,
            'variable_values': plain(self.variable_values),
            'constraint_values': plain(self.constraint_values),
            'objective_values': plain(self.objective_values),
        }
