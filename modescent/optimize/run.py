"""Run loop shared by every optimizer."""

from __future__ import annotations

from typing import Callable, List, Optional

from ..logging import get_logger
from .core import Point, RunResult, Status
from .descent import Optimizer

logger = get_logger(__name__)

_MESSAGES = {
    Status.TOLERANCE: "Gradient tolerance satisfied.",
    Status.PARETO_CRITICAL: "Pareto-critical point reached.",
    Status.NON_CONVERGENCE: "Maximum iterations reached.",
}


def run(
    optimizer: Optimizer,
    callback: Optional[Callable[[Point], None]] = None,
) -> RunResult:
    """Advance ``optimizer`` until it reports convergence.

    The loop only records the trajectory; every stopping decision belongs
    to the optimizer. Errors raised while advancing propagate unchanged.

    Parameters
    ----------
    optimizer:
        Optimizer holding the starting point as its current point.
    callback:
        Called with each new point after it is appended.
    """
    trajectory: List[Point] = [optimizer.current]
    while not optimizer.has_converged(len(trajectory) - 1):
        point = optimizer.advance(optimizer.current)
        trajectory.append(point)
        if callback is not None:
            callback(point)

    status = optimizer.status
    if status is None:
        raise RuntimeError(f"{optimizer!r} converged without recording a status")
    nit = len(trajectory) - 1
    message = _MESSAGES[status]
    log = logger.warning if status is Status.NON_CONVERGENCE else logger.info
    log("%s (%d iterations, final inputs %s)", message, nit, optimizer.current.inputs)
    return RunResult(
        trajectory=tuple(trajectory),
        status=status,
        nit=nit,
        message=message,
    )


__all__ = ["run"]
