"""
Two-body orbit representations and the analytic (Kepler) propagator.

Cartesian state <-> classical elements, plus O(1) time propagation through
the mean anomaly. The central body is passed into every call rather than
stored, so states stay plain values.

Elliptic orbits only (0 <= e < 1). Unbound states are rejected with
ValueError instead of producing NaN elements.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from orbit_sim.core.constants import DEGENERATE_TOLERANCE, LOOKAHEAD_SAMPLES, LOOKAHEAD_SPACING_S
from orbit_sim.core.frames import (
    Matrix3, Vector3, X_AXIS, Z_AXIS,
    angle_between, cross, dot, norm, perifocal_rotation, perifocal_to_frame, scale, sub,
)
from orbit_sim.objects.central_body import CentralBody
from orbit_sim.physics.gravity import solve_keplers_equation

logger = logging.getLogger(__name__)


def approx_zero(x: float, tol: float = DEGENERATE_TOLERANCE) -> bool:
    return abs(x) < tol


@dataclass(frozen=True)
class CartesianState:
    """
    Position and velocity at time t_s, in the caller's frame.

    Units:
        r_m: position from the central body's center (m)
        v_m_s: velocity (m/s)
        t_s: time at which the state holds (s)
    """
    r_m: Vector3
    v_m_s: Vector3
    t_s: float = 0.0

    def __post_init__(self):
        if norm(self.r_m) == 0:
            raise ValueError("Position must be non-zero (state is undefined at the central body).")
        if not all(math.isfinite(x) for x in (*self.r_m, *self.v_m_s, self.t_s)):
            raise ValueError(f"State must be finite. Got: r={self.r_m}, v={self.v_m_s}, t={self.t_s}")

    @property
    def r_mag(self) -> float:
        return norm(self.r_m)

    @property
    def v_mag(self) -> float:
        return norm(self.v_m_s)

    def angular_momentum(self) -> Vector3:
        """h = r x v (m^2/s)."""
        return cross(self.r_m, self.v_m_s)

    def specific_energy(self, body: CentralBody) -> float:
        """v^2/2 - mu/r (J/kg). Negative for bound orbits."""
        return 0.5 * dot(self.v_m_s, self.v_m_s) - body.mu_m3_s2 / self.r_mag


@dataclass(frozen=True)
class KeplerianElements:
    """
    Classical Orbital Elements for an elliptic orbit.

    Units:
        a_m: semi-major axis in m
        e: eccentricity (0<=e<1)
        inc_rad: inclination in radians
        lan_rad: longitude of ascending node in radians (0 when equatorial)
        argp_rad: argument of periapsis in radians (0 when circular; longitude
                  of periapsis for non-circular equatorial orbits)
        M0_rad: mean anomaly at epoch_s in radians, never wrapped
        n_rad_s: mean motion sqrt(mu / a^3)
        epoch_s: time at which M0_rad holds

    `rotation` caches the perifocal -> body-frame matrix. dataclasses.replace
    carries it over, which is right for phase changes only; pass rotation=None
    when replacing lan/inc/argp.
    """
    a_m: float
    e: float
    inc_rad: float
    lan_rad: float
    argp_rad: float
    M0_rad: float
    n_rad_s: float
    epoch_s: float = 0.0
    rotation: Optional[Matrix3] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.a_m <= 0:
            raise ValueError("Semi-major axis must be positive.")
        if not (0.0 <= self.e < 1.0):
            raise ValueError("Only elliptic orbits are supported (0 <= e < 1).")
        if not (0.0 <= self.inc_rad <= math.pi):
            raise ValueError(f"Inclination must be in range [0, π] radians. Got: {self.inc_rad}")
        if not math.isfinite(self.lan_rad):
            raise ValueError(f"Longitude of ascending node must be finite. Got: {self.lan_rad}")
        if not math.isfinite(self.argp_rad):
            raise ValueError(f"Argument of periapsis must be finite. Got: {self.argp_rad}")
        if not math.isfinite(self.M0_rad):
            raise ValueError(f"Mean anomaly must be finite. Got: {self.M0_rad}")
        if not (math.isfinite(self.n_rad_s) and self.n_rad_s > 0):
            raise ValueError(f"Mean motion must be positive. Got: {self.n_rad_s}")
        if self.rotation is None:
            object.__setattr__(self, "rotation", perifocal_rotation(self.lan_rad, self.inc_rad, self.argp_rad))

    @classmethod
    def from_shape(cls, a_m: float, e: float, inc_rad: float, lan_rad: float, argp_rad: float,
                   M0_rad: float, mu_m3_s2: float, epoch_s: float = 0.0) -> KeplerianElements:
        """Build elements, deriving the mean motion from mu."""
        if a_m <= 0:
            raise ValueError("Semi-major axis must be positive.")
        return cls(a_m, e, inc_rad, lan_rad, argp_rad, M0_rad,
                   mean_motion_rad_s(a_m, mu_m3_s2), epoch_s)

    @property
    def period_s(self) -> float:
        """2π sqrt(a^3 / mu)."""
        return 2.0 * math.pi / self.n_rad_s


def mean_motion_rad_s(a_m: float, mu_m3_s2: float) -> float:
    """n = sqrt(mu / a^3)."""
    return math.sqrt(mu_m3_s2 / (a_m ** 3))


def rv_to_elements(state: CartesianState, body: CentralBody) -> KeplerianElements:
    """
    Convert a Cartesian state to classical elements about `body`.

    Degenerate orbits follow fixed conventions:
        circular            -> argp = 0, phase is the argument of latitude
        equatorial          -> lan = 0, argp is the longitude of periapsis
        circular equatorial -> lan = argp = 0, phase is the true longitude
    "Equatorial" covers both inc ~ 0 and inc ~ π.

    Raises:
        ValueError: if the state is at or above escape velocity.
    """
    mu = body.mu_m3_s2
    r = body.to_body_frame(state.r_m)
    v = body.to_body_frame(state.v_m_s)
    r_mag = norm(r)

    inv_a = 2.0 / r_mag - dot(v, v) / mu
    if inv_a <= 0:
        raise ValueError(
            f"State is at or above escape velocity ({norm(v):.6g} >= {body.escape_speed(r_mag):.6g} m/s); "
            "only elliptic orbits are supported."
        )

    h = cross(r, v)
    # Points towards periapsis, length equals eccentricity
    e_vec = sub(scale(cross(v, h), 1.0 / mu), scale(r, 1.0 / r_mag))
    e = norm(e_vec)
    if e >= 1.0:
        raise ValueError(f"Only elliptic orbits are supported (0 <= e < 1). Got e={e}")

    # Points towards the ascending node
    node = cross(Z_AXIS, h)

    # acos(h_z / |h|), in [0, π]
    inc = math.atan2(norm(node), h[2])

    circular = approx_zero(e)
    equatorial = approx_zero(math.sin(inc))

    lan = 0.0 if equatorial else angle_between(X_AXIS, node, Z_AXIS)

    if circular:
        argp = 0.0
    elif equatorial:
        argp = angle_between(X_AXIS, e_vec, h)
    else:
        argp = angle_between(node, e_vec, h)

    if not circular:
        ta = angle_between(e_vec, r, h)
    elif equatorial:
        ta = angle_between(X_AXIS, r, h)
    else:
        ta = angle_between(node, r, h)

    if circular or equatorial:
        logger.debug("Degenerate orbit: circular=%s equatorial=%s (e=%.3g, inc=%.3g rad)",
                     circular, equatorial, e, inc)

    E = 2.0 * math.atan2(math.sqrt(1.0 - e) * math.sin(ta / 2.0),
                         math.sqrt(1.0 + e) * math.cos(ta / 2.0))
    M0 = E - e * math.sin(E)

    a = 1.0 / inv_a
    return KeplerianElements(
        a_m=a,
        e=e,
        inc_rad=inc,
        lan_rad=lan,
        argp_rad=argp,
        M0_rad=M0,
        n_rad_s=mean_motion_rad_s(a, mu),
        epoch_s=state.t_s,
    )


def elements_to_rv(elements: KeplerianElements, body: CentralBody) -> CartesianState:
    """
    Convert elements to a Cartesian state valid at elements.epoch_s.
    """
    a = elements.a_m
    e = elements.e

    E = solve_keplers_equation(elements.M0_rad, e)

    # True anomaly ν from eccentric anomaly E (half-angle form)
    nu = 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(E / 2.0),
                          math.sqrt(1.0 - e) * math.cos(E / 2.0))

    dist = a * (1.0 - e * math.cos(E))

    r_pqw: Vector3 = (dist * math.cos(nu), dist * math.sin(nu), 0.0)
    speed_scale = math.sqrt(body.mu_m3_s2 * a) / dist
    v_pqw: Vector3 = (
        -speed_scale * math.sin(E),
        speed_scale * math.sqrt(1.0 - e * e) * math.cos(E),
        0.0,
    )

    r, v = perifocal_to_frame(r_pqw, v_pqw, elements.rotation)
    return CartesianState(body.from_body_frame(r), body.from_body_frame(v), elements.epoch_s)


def propagate_elements(elements: KeplerianElements, dt_s: float) -> KeplerianElements:
    """
    Advance elements by dt_s (either sign). Only the phase changes:
    M0 <- M0 + n dt, epoch <- epoch + dt. Shape, orientation and the cached
    rotation are carried over unchanged.
    """
    return replace(
        elements,
        M0_rad=elements.M0_rad + elements.n_rad_s * dt_s,
        epoch_s=elements.epoch_s + dt_s,
    )


def state_at(state: CartesianState, t_s: float, body: CentralBody) -> CartesianState:
    """Cartesian state at t_s of the orbit passing through `state`."""
    elements = rv_to_elements(state, body)
    return elements_to_rv(propagate_elements(elements, t_s - state.t_s), body)


def propagate(elements: KeplerianElements, times_s: List[float], body: CentralBody) -> List[Tuple[float, Vector3, Vector3]]:
    """
    Propagate an orbit across a list of absolute time stamps.
    Returns list of (t, r, v).
    """
    out: List[Tuple[float, Vector3, Vector3]] = []
    for t in times_s:
        csv = elements_to_rv(propagate_elements(elements, t - elements.epoch_s), body)
        out.append((t, csv.r_m, csv.v_m_s))
    return out


def sample_period(elements: KeplerianElements, body: CentralBody, n_samples: int = LOOKAHEAD_SAMPLES) -> List[Vector3]:
    """
    Positions over exactly one revolution starting at the epoch.
    Returns n_samples + 1 points; the last closes the curve on the first.
    """
    if n_samples < 1:
        raise ValueError(f"n_samples must be >= 1. Got: {n_samples}")
    period = elements.period_s
    times = [elements.epoch_s + period * k / n_samples for k in range(n_samples + 1)]
    return [r for (_t, r, _v) in propagate(elements, times, body)]


def lookahead(elements: KeplerianElements, body: CentralBody,
              n_samples: int = LOOKAHEAD_SAMPLES,
              spacing_s: float = LOOKAHEAD_SPACING_S) -> List[Vector3]:
    """Positions at epoch, epoch + spacing, ... (n_samples points)."""
    times = [elements.epoch_s + k * spacing_s for k in range(n_samples)]
    return [r for (_t, r, _v) in propagate(elements, times, body)]
