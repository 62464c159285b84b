"""Progress observations emitted by the Newton iteration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

import numpy as np

from ..logging import get_logger


@dataclass(frozen=True, eq=False)
class IterationInfo:
    """
    Snapshot of the solver state after an iteration.

    Iteration 0 describes the starting point, before any Newton step.

    Args:
        iteration: Number of Newton steps taken so far.
        grad_norm: Euclidean norm of the gradient at ``x``.
        x: Copy of the iterate.
    """

    iteration: int
    grad_norm: float
    x: np.ndarray


class ProgressCallback(Protocol):
    """Callable receiving an :class:`IterationInfo` at every observation."""

    def __call__(self, info: IterationInfo) -> None:
        ...


@dataclass
class IterationHistory:
    """Observations recorded during one ``optimize`` call."""

    steps: List[IterationInfo] = field(default_factory=list)

    def __call__(self, info: IterationInfo) -> None:
        self.record(info)

    def record(self, info: IterationInfo) -> None:
        self.steps.append(info)

    def num_iterations(self) -> int:
        """
        Number of Newton steps recorded (the starting observation excluded).
        """
        return max(len(self.steps) - 1, 0)

    def final_grad_norm(self) -> Optional[float]:
        if not self.steps:
            return None
        return self.steps[-1].grad_norm


class LoggingProgress:
    """Report every observation through the package logger at INFO level."""

    def __init__(self, name: str = __name__) -> None:
        self._logger = get_logger(name)

    def __call__(self, info: IterationInfo) -> None:
        self._logger.info(
            "iter %d: |g| = %.6g, x = %s",
            info.iteration,
            info.grad_norm,
            np.array2string(info.x, precision=6),
        )


__all__ = [
    "IterationInfo",
    "ProgressCallback",
    "IterationHistory",
    "LoggingProgress",
]
