# Two-body / Kepler's equation

from __future__ import annotations

import logging
import math
from typing import Optional

from orbit_sim.core.constants import KEPLER_ITERATIONS

logger = logging.getLogger(__name__)


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2π)."""
    two_pi = 2.0 * math.pi
    return angle_rad % two_pi


def solve_keplers_equation(M_rad: float, e: float,
                           iterations: int = KEPLER_ITERATIONS,
                           tol: Optional[float] = None) -> float:
    """
    Solve Kepler's equation for elliptic orbits:
        M = E - e sin(E)
    using Newton-Raphson.

    By default runs a fixed number of iterations with no convergence check,
    so the cost is the same for every call. Passing `tol` stops early once
    the Newton step falls below it.

    M is reduced to [0, 2π) before iterating and the removed whole turns are
    added back, so the returned E satisfies the equation for the caller's
    unwrapped M.

    Args:
        M_rad: Mean anomaly (rad), any magnitude
        e: eccentricity (0 <= e < 1)
        iterations: Newton-Raphson iteration count (or cap, with tol)
        tol: optional early-exit step tolerance (rad)

    Returns:
        E_rad: Eccentric anomaly (rad)
    """
    if not (0.0 <= e < 1.0):
        raise ValueError("Elliptic Kepler solver requires 0 <= e < 1.")
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1. Got: {iterations}")

    M = wrap_to_2pi(M_rad)
    turns = M_rad - M

    if e < 0.8:
        E = M
    else:
        # For higher e, start closer to pi to avoid slow convergence near M~0
        E = math.pi

    for i in range(iterations):
        dE = -(E - e * math.sin(E) - M) / (1.0 - e * math.cos(E))
        E += dE
        if tol is not None and abs(dE) < tol:
            logger.debug("Kepler solver converged after %d iterations (e=%.6g)", i + 1, e)
            break

    return E + turns
