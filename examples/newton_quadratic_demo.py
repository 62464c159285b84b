"""
Example: Newton's method on an unconstrained quadratic

Minimizes (x - 5)^2 + (y - 3)^2 starting from the origin. The Hessian is
constant, so a single full Newton step lands on the minimizer. Progress
records are printed through the package logger at INFO level.
"""

import logging

import numpy as np

from nlconduit import CallableEvaluator, ObjectiveSense, configure_logging, create_model


def main() -> None:
    center = np.array([5.0, 3.0])
    evaluator = CallableEvaluator(
        lambda x: float(np.sum((x - center) ** 2)),
        dim=2,
        grad=lambda x: 2.0 * (x - center),
        hess=lambda x: 2.0 * np.eye(2),
    )

    model = create_model()
    configure_logging(level=logging.INFO)
    model.load(
        2,
        0,
        [-np.inf, -np.inf],
        [np.inf, np.inf],
        [],
        [],
        ObjectiveSense.MINIMIZE,
        evaluator,
    )
    model.optimize()

    print("=" * 60)
    print("Newton's method: minimize (x - 5)^2 + (y - 3)^2")
    print("=" * 60)
    for info in model.history.steps:
        print(f"iter {info.iteration}: |g| = {info.grad_norm:.4f}, x = {info.x}")
    print(f"Status: {model.status.value}")
    print(f"Solution: {model.get_solution()}")
    print(f"Objective value: {model.get_objective_value():.3e}")


if __name__ == "__main__":
    main()
