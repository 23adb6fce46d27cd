"""
Fixed-step numerical propagator for the two-body problem.

Semi-implicit (symplectic) Euler: velocity is kicked first, then position is
drifted with the new velocity. First order, so energy drift is bounded but
non-zero; angular momentum is conserved to round-off because every kick is
parallel to r. Good for short lookahead curves from a freshly assigned state;
prefer the analytic propagator for long horizons.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, List, Tuple

from orbit_sim.core.constants import TICK_DURATION_S
from orbit_sim.core.frames import Vector3, add, norm, scale
from orbit_sim.objects.central_body import CentralBody
from orbit_sim.physics.orbit import CartesianState

logger = logging.getLogger(__name__)


def two_body_accel(r: Vector3, mu: float) -> Vector3:
    """
    Point-mass gravitational acceleration: a = -mu * r / |r|³.

    Args:
        r: Position vector (m)
        mu: Gravitational parameter (m³/s²)

    Returns:
        Acceleration (m/s²)
    """
    r_mag = norm(r)
    return scale(r, -mu / r_mag**3)


def euler_step(r: Vector3, v: Vector3, dt: float, mu: float) -> Tuple[Vector3, Vector3]:
    """
    Single semi-implicit Euler step.

    Returns:
        (r_new, v_new) at time t + dt
    """
    v_new = add(v, scale(two_body_accel(r, mu), dt))
    r_new = add(r, scale(v_new, dt))
    return (r_new, v_new)


def iter_euler(r0: Vector3, v0: Vector3,
               t_start: float, t_end: float,
               dt: float, mu: float) -> Iterator[Tuple[float, Vector3, Vector3]]:
    """
    Yield (t, r, v) after every step from t_start up to t_end.

    The last step is shortened so the final sample lands on t_end exactly.
    """
    r = r0
    v = v0
    t = t_start

    while t < t_end:
        step_size = min(dt, t_end - t)
        r, v = euler_step(r, v, step_size, mu)
        t = t_end if step_size < dt else t + step_size
        yield (t, r, v)


class NumericalPropagator:
    """
    Two-body propagator stepping a Cartesian state at a fixed timestep.
    """

    def __init__(self, dt: float = TICK_DURATION_S):
        """
        Args:
            dt: Integration time step (seconds)
        """
        if not (math.isfinite(dt) and dt > 0):
            raise ValueError(f"dt must be positive. Got: {dt}")
        self.dt = dt

    def _check_target(self, state: CartesianState, t_s: float) -> None:
        if t_s < state.t_s:
            raise ValueError(f"Cannot integrate backwards: target {t_s} is before state time {state.t_s}.")

    def propagate_to(self, state: CartesianState, t_s: float, body: CentralBody) -> CartesianState:
        """
        Step `state` forward until its as-of time reaches t_s.
        """
        self._check_target(state, t_s)
        r, v = state.r_m, state.v_m_s
        steps = 0
        for _t, r, v in iter_euler(state.r_m, state.v_m_s, state.t_s, t_s, self.dt, body.mu_m3_s2):
            steps += 1
        logger.debug("Euler propagation: %d steps over %.6g s", steps, t_s - state.t_s)
        return CartesianState(r, v, t_s)

    def trajectory(self, state: CartesianState, t_end_s: float, body: CentralBody,
                   record_every: int = 1) -> List[Tuple[float, Vector3, Vector3]]:
        """
        Propagate from `state` to t_end_s.

        Args:
            state: Initial state
            t_end_s: End time (s)
            body: Central body
            record_every: Keep one sample per this many steps (the final
                sample is always kept)

        Returns:
            List of (time, position, velocity) tuples, starting with the
            initial state
        """
        self._check_target(state, t_end_s)
        if record_every < 1:
            raise ValueError(f"record_every must be >= 1. Got: {record_every}")

        trajectory = [(state.t_s, state.r_m, state.v_m_s)]
        last = None
        for k, sample in enumerate(iter_euler(state.r_m, state.v_m_s, state.t_s, t_end_s,
                                              self.dt, body.mu_m3_s2), start=1):
            last = sample
            if k % record_every == 0:
                trajectory.append(sample)
        if last is not None and trajectory[-1] is not last:
            trajectory.append(last)
        return trajectory
