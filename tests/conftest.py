"""Pytest configuration and shared fixtures for Newton Conduit tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Factories for small evaluators and unconstrained problem loading
"""

import os
from typing import Callable

import numpy as np
import pytest
import torch

from nlconduit import CallableEvaluator, ObjectiveSense


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Set global numpy and torch seeds for every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def shifted_quadratic() -> Callable[..., CallableEvaluator]:
    """Factory for ``sum((x - center) ** 2)`` evaluators with exact derivatives."""

    def make(center) -> CallableEvaluator:
        c = np.asarray(center, dtype=float)
        n = c.size
        return CallableEvaluator(
            lambda x: float(np.sum((x - c) ** 2)),
            dim=n,
            grad=lambda x: 2.0 * (x - c),
            hess=lambda x: 2.0 * np.eye(n),
        )

    return make


@pytest.fixture
def load_free() -> Callable[..., None]:
    """Load an evaluator into a model as a free minimization problem."""

    def load(model, evaluator, n: int) -> None:
        model.load(
            n,
            0,
            np.full(n, -np.inf),
            np.full(n, np.inf),
            [],
            [],
            ObjectiveSense.MINIMIZE,
            evaluator,
        )

    return load
