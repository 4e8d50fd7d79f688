"""
Example: Solving a small production model with optiglpk

This example demonstrates how to build a model with the modeling
interface, solve it, and fix a variable for a second solve.

Problem:
    maximize     3*x + 2*y
    subject to     x +   y <= 4
                   x + 3*y <= 6
                   0 <= x <= 10,  y >= 0 integer
"""

from optiglpk import GLPKSolver, Model, Parameters, Sense, VariableType
from optiglpk.logging_config import setup_logging


def main():
    setup_logging("INFO")

    print()
    print("=" * 70)
    print("optiglpk Example: Model built in Python")
    print("=" * 70)
    print()

    # Step 1: Build the model
    model = Model("production")
    x = model.add_variable("x", lower_bound=0, upper_bound=10)
    y = model.add_variable("y", lower_bound=0, type=VariableType.INTEGER)
    model.add_objective(3*x + 2*y, name="profit", sense=Sense.MAXIMIZE)
    model.add_constraint(x + y <= 4, name="capacity")
    model.add_constraint(x + 3*y <= 6, name="labour")
    print(model)
    print()

    # Step 2: Create the solver, forwarding its log to stdout
    param = Parameters()
    solver = GLPKSolver(param, log=print)

    # Step 3: Solve
    solution = solver.solve(model)
    print()
    print(solution)
    if solution is not None and solution.is_optimal():
        for name, value in solution.variable_values.items():
            print(f"  {name} = {value:.6f}")
    print()

    # Step 4: Solve again with y fixed to 2
    fixed = solver.solve(model, {"y": 2})
    print(fixed)
    if fixed is not None and fixed.is_optimal():
        for name, value in fixed.variable_values.items():
            print(f"  {name} = {value:.6f}")
    print()


if __name__ == "__main__":
    try:
        main()
    except ImportError as e:
        print(f"Error: {e}")
        print("\nPlease install optiglpk first:")
        print("  python -m pip install .")
