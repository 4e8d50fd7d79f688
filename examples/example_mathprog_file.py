"""
Example: Loading and solving a GLPK MathProg model

This example reads a MathProg model (and optional data file) into a
Model and solves it with GLPK.
"""

import sys
from pathlib import Path

import optiglpk
from optiglpk.logging_config import setup_logging


def main():
    setup_logging("INFO")

    print()
    print("=" * 70)
    print("optiglpk Example: Solving a MathProg model")
    print("=" * 70)
    print()

    if len(sys.argv) < 2:
        print("Usage:")
        print(f"  python {sys.argv[0]} <model.mod> [data.dat]")
        print()
        return 1

    mod_path = Path(sys.argv[1])
    dat_path = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    print(f"Model file: {mod_path.absolute()}")
    if dat_path is not None:
        print(f"Data file:  {dat_path.absolute()}")
    print()

    # Step 1: Load the model
    model = optiglpk.Model(mod_path.stem)
    try:
        model.load(mod_path, dat_path)
    except (FileNotFoundError, RuntimeError) as e:
        print(f"Could not load model:\n{e}")
        return 1
    print(f"Model loaded: {model}")
    print()

    # Step 2: Solve
    solution = optiglpk.solve(model)
    if solution is None:
        print("GLPK failed to solve the model")
        return 1

    print(solution)
    if solution.is_optimal():
        print()
        for name, value in solution.variable_values.items():
            print(f"  {name} = {value:.6f}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
