"""Solver configuration and the model factory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .model import Model, NewtonModel
from .progress import LoggingProgress


class Solver(Protocol):
    """Capability set of anything able to construct fresh models."""

    def construct(self) -> Model:
        ...


@dataclass(frozen=True)
class SolverConfig:
    """
    Configuration for constructing :class:`NewtonModel` instances.

    The Newton solver has no numerical options: the gradient tolerance is
    fixed and there is no iteration limit.

    Args:
        progress: Attach a :class:`~nlconduit.solver.progress.LoggingProgress`
            callback to each new model. Its records are emitted at INFO
            level, so they only appear once logging is configured
            accordingly (see :func:`nlconduit.logging.set_log_level`).
    """

    progress: bool = True

    def construct(self) -> NewtonModel:
        """Return a new, uninitialized model."""
        callbacks = [LoggingProgress()] if self.progress else []
        return NewtonModel(callbacks=callbacks)


def create_model(config: Optional[SolverConfig] = None) -> NewtonModel:
    """
    Create a new model from a configuration.

    Args:
        config: Solver configuration. Defaults to ``SolverConfig()``.

    Returns:
        A model in the ``UNINITIALIZED`` state.
    """
    if config is None:
        config = SolverConfig()
    return config.construct()


__all__ = ["Solver", "SolverConfig", "create_model"]
