from __future__ import annotations

import math
from dataclasses import dataclass

from orbit_sim.core.constants import FRAME_TOLERANCE, GRAVITATIONAL_CONSTANT
from orbit_sim.core.frames import Vector3, X_AXIS, Y_AXIS, Z_AXIS, cross, dot, norm, sub


@dataclass(frozen=True)
class CentralBody:
    """
    The dominant attractor an orbit is measured against.

    Units:
        mu_m3_s2: standard gravitational parameter (G * M) in m^3/s^2
        i, j, k: right-handed orthonormal basis of the reference frame.
                 Elements are measured from i (node / longitude reference)
                 and about k (pole).

    Immutable, so one instance can be shared by any number of orbits.
    """
    name: str
    mu_m3_s2: float
    i: Vector3 = X_AXIS
    j: Vector3 = Y_AXIS
    k: Vector3 = Z_AXIS

    def __post_init__(self):
        if not (math.isfinite(self.mu_m3_s2) and self.mu_m3_s2 > 0):
            raise ValueError(f"Gravitational parameter must be positive. Got: {self.mu_m3_s2}")
        for label, axis in (("i", self.i), ("j", self.j), ("k", self.k)):
            if abs(norm(axis) - 1.0) > FRAME_TOLERANCE:
                raise ValueError(f"Basis vector {label} must be unit length. Got: {axis}")
        for label, a, b in (("i.j", self.i, self.j), ("j.k", self.j, self.k), ("k.i", self.k, self.i)):
            if abs(dot(a, b)) > FRAME_TOLERANCE:
                raise ValueError(f"Basis must be orthogonal. {label} = {dot(a, b)}")
        if norm(sub(cross(self.i, self.j), self.k)) > FRAME_TOLERANCE:
            raise ValueError("Basis must be right-handed (i x j == k).")

    @classmethod
    def from_mass(cls, name: str, mass_kg: float, gravitational_constant: float = GRAVITATIONAL_CONSTANT,
                  **basis: Vector3) -> CentralBody:
        """mu = G * M."""
        return cls(name, mass_kg * gravitational_constant, **basis)

    def to_body_frame(self, v: Vector3) -> Vector3:
        """Components of v along (i, j, k)."""
        return (dot(v, self.i), dot(v, self.j), dot(v, self.k))

    def from_body_frame(self, c: Vector3) -> Vector3:
        """Inverse of to_body_frame: c0*i + c1*j + c2*k."""
        return (
            c[0]*self.i[0] + c[1]*self.j[0] + c[2]*self.k[0],
            c[0]*self.i[1] + c[1]*self.j[1] + c[2]*self.k[1],
            c[0]*self.i[2] + c[1]*self.j[2] + c[2]*self.k[2],
        )

    def circular_speed(self, r_m: float) -> float:
        """v = sqrt(mu / r)."""
        return math.sqrt(self.mu_m3_s2 / r_m)

    def escape_speed(self, r_m: float) -> float:
        """v = sqrt(2 mu / r). Orbits at or above this speed are unbound."""
        return math.sqrt(2.0 * self.mu_m3_s2 / r_m)
