import numpy as np
import pytest
import torch

from nlconduit import AutogradEvaluator, Feature, Status, create_model


def _ready(ev):
    ev.initialize([Feature.GRADIENT, Feature.HESSIAN_OF_LAGRANGIAN])
    return ev


def _exp_objective(x: torch.Tensor) -> torch.Tensor:
    return torch.sum(torch.exp(x) - 2.0 * x) + 0.5 * torch.sum(x**2)


def test_gradient_matches_analytic():
    ev = _ready(AutogradEvaluator(_exp_objective, dim=3))
    x = np.array([0.0, 0.5, -1.0])
    assert np.allclose(ev.eval_gradient(x), np.exp(x) - 2.0 + x)


def test_hessian_matches_analytic():
    ev = _ready(AutogradEvaluator(_exp_objective, dim=2))
    x = np.array([0.2, -0.3])
    rows, cols = ev.hessian_lagrangian_structure()
    values = ev.eval_hessian_lagrangian(x, 1.0, np.zeros(0))
    expected = np.diag(np.exp(x) + 1.0)[rows, cols]
    assert np.allclose(values, expected)


def test_outputs_are_float64_numpy():
    ev = _ready(AutogradEvaluator(lambda x: (x**2).sum(), dim=2, dtype=torch.float32))
    grad = ev.eval_gradient([1.0, 2.0])
    assert isinstance(grad, np.ndarray)
    assert grad.dtype == np.float64
    assert isinstance(ev.eval_objective([1.0, 2.0]), float)


def test_constant_objective_has_zero_gradient():
    ev = _ready(AutogradEvaluator(lambda x: torch.tensor(3.0, dtype=torch.float64), dim=2))
    assert np.array_equal(ev.eval_gradient(np.ones(2)), np.zeros(2))


def test_integer_dtype_rejected():
    with pytest.raises(ValueError, match="floating point"):
        AutogradEvaluator(lambda x: x.sum(), dim=1, dtype=torch.int64)


def test_newton_converges_on_strictly_convex_objective(load_free):
    ev = AutogradEvaluator(_exp_objective, dim=2)
    model = create_model()
    load_free(model, ev, 2)
    model.optimize()
    assert model.status is Status.OPTIMAL
    # Stationary point solves exp(x) + x = 2 in each coordinate.
    x = model.get_solution()
    assert np.allclose(np.exp(x) + x, 2.0, atol=1e-5)
    assert model.get_iteration_count() > 1


def test_torch_quadratic_matches_linear_solve(rng, load_free):
    n = 4
    M = rng.standard_normal((n, n))
    A = M @ M.T + n * np.eye(n)
    b = rng.standard_normal(n)
    A_t = torch.as_tensor(A)
    b_t = torch.as_tensor(b)

    ev = AutogradEvaluator(lambda x: 0.5 * x @ A_t @ x - b_t @ x, dim=n)
    model = create_model()
    load_free(model, ev, n)
    model.optimize()
    assert model.get_iteration_count() == 1
    assert np.allclose(model.get_solution(), np.linalg.solve(A, b))
    assert model.get_objective_value() == pytest.approx(
        -0.5 * b @ np.linalg.solve(A, b)
    )
