import numpy as np
import pytest

from nlconduit import CallableEvaluator, Feature, Status, create_model


def _ready(ev):
    ev.initialize([Feature.GRADIENT, Feature.HESSIAN_OF_LAGRANGIAN])
    return ev


def test_features_available():
    ev = CallableEvaluator(lambda x: 0.0, dim=1)
    assert set(ev.features_available()) == {
        Feature.GRADIENT,
        Feature.HESSIAN_OF_LAGRANGIAN,
    }


def test_initialize_rejects_unavailable_feature():
    class GradientOnly(CallableEvaluator):
        def features_available(self):
            return (Feature.GRADIENT,)

    ev = GradientOnly(lambda x: 0.0, dim=1)
    with pytest.raises(ValueError, match="does not support"):
        ev.initialize([Feature.GRADIENT, Feature.HESSIAN_OF_LAGRANGIAN])


def test_scalar_hessian_for_single_variable():
    ev = _ready(
        CallableEvaluator(
            lambda x: float((x[0] - 3.0) ** 2),
            dim=1,
            grad=lambda x: 2.0 * (x - 3.0),
            hess=lambda x: 2.0,
        )
    )
    assert np.array_equal(ev.eval_hessian_lagrangian(np.zeros(1), 1.0, np.zeros(0)), [2.0])


def test_scalar_hessian_rejected_for_several_variables():
    ev = _ready(CallableEvaluator(lambda x: float(x @ x), dim=2, hess=lambda x: 2.0))
    with pytest.raises(ValueError, match="length 1, expected 3"):
        ev.eval_hessian_lagrangian(np.zeros(2), 1.0, np.zeros(0))


def test_scalar_hessian_model_converges(load_free):
    ev = CallableEvaluator(
        lambda x: float((x[0] - 3.0) ** 2),
        dim=1,
        grad=lambda x: 2.0 * (x - 3.0),
        hess=lambda x: 2.0,
    )
    model = create_model()
    load_free(model, ev, 1)
    model.optimize()
    assert model.status is Status.OPTIMAL
    assert np.allclose(model.get_solution(), [3.0])


def test_evaluation_before_initialize_raises():
    ev = CallableEvaluator(lambda x: float(x @ x), dim=2)
    with pytest.raises(RuntimeError, match="not initialized"):
        ev.eval_gradient(np.zeros(2))
    with pytest.raises(RuntimeError, match="not initialized"):
        ev.hessian_lagrangian_structure()


def test_objective_does_not_need_initialize():
    ev = CallableEvaluator(lambda x: float(x @ x), dim=2)
    assert ev.eval_objective(np.array([1.0, 2.0])) == pytest.approx(5.0)


def test_dense_hessian_sampled_on_lower_triangle():
    H = np.array([[4.0, 1.0, 0.0], [1.0, 5.0, 2.0], [0.0, 2.0, 6.0]])
    ev = _ready(CallableEvaluator(lambda x: 0.5 * x @ H @ x, dim=3, hess=lambda x: H))
    rows, cols = ev.hessian_lagrangian_structure()
    values = ev.eval_hessian_lagrangian(np.zeros(3), 1.0, np.zeros(0))
    assert np.array_equal(values, H[rows, cols])


def test_hessian_scaled_by_objective_weight():
    ev = _ready(CallableEvaluator(lambda x: float(x @ x), dim=2, hess=lambda x: 2 * np.eye(2)))
    values = ev.eval_hessian_lagrangian(np.zeros(2), 0.5, np.zeros(0))
    assert np.allclose(values, [1.0, 0.0, 1.0])


def test_hessian_rejects_multipliers():
    ev = _ready(CallableEvaluator(lambda x: float(x @ x), dim=2))
    with pytest.raises(ValueError, match="multipliers"):
        ev.eval_hessian_lagrangian(np.zeros(2), 1.0, np.ones(1))


def test_structure_values_length_checked():
    ev = _ready(
        CallableEvaluator(
            lambda x: 0.0, dim=2, hess=lambda x: np.ones(3), hess_structure=([0, 1], [0, 1])
        )
    )
    with pytest.raises(ValueError, match="expected 2"):
        ev.eval_hessian_lagrangian(np.zeros(2), 1.0, np.zeros(0))


def test_point_length_checked():
    ev = _ready(CallableEvaluator(lambda x: 0.0, dim=2))
    with pytest.raises(ValueError, match="length 2"):
        ev.eval_gradient(np.zeros(3))


def test_mismatched_structure_raises():
    with pytest.raises(ValueError, match="differ in length"):
        CallableEvaluator(lambda x: 0.0, dim=2, hess_structure=([0, 1], [0]))


def test_finite_difference_fallback_solves_quadratic(load_free):
    ev = CallableEvaluator(lambda x: float((x[0] - 1) ** 2 + (x[1] + 2) ** 2), dim=2)
    model = create_model()
    load_free(model, ev, 2)
    model.optimize()
    assert model.status is Status.OPTIMAL
    assert np.allclose(model.get_solution(), [1.0, -2.0], atol=1e-5)


def test_coupled_quadratic_converges_in_one_step(rng, load_free):
    n = 5
    M = rng.standard_normal((n, n))
    A = M @ M.T + n * np.eye(n)
    b = rng.standard_normal(n)
    ev = CallableEvaluator(
        lambda x: float(0.5 * x @ A @ x - b @ x),
        dim=n,
        grad=lambda x: A @ x - b,
        hess=lambda x: A,
    )
    model = create_model()
    load_free(model, ev, n)
    model.optimize()
    assert model.get_iteration_count() == 1
    assert np.allclose(model.get_solution(), np.linalg.solve(A, b))
