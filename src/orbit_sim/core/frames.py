from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]
Matrix3 = Tuple[Vector3, Vector3, Vector3]

X_AXIS: Vector3 = (1.0, 0.0, 0.0)
Y_AXIS: Vector3 = (0.0, 1.0, 0.0)
Z_AXIS: Vector3 = (0.0, 0.0, 1.0)


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])


def scale(a: Vector3, s: float) -> Vector3:
    return (a[0]*s, a[1]*s, a[2]*s)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0],
    )


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def normalize(a: Vector3) -> Vector3:
    n = norm(a)
    if n == 0:
        raise ValueError("Cannot normalize a zero vector.")
    return (a[0]/n, a[1]/n, a[2]/n)


def angle_between(a: Vector3, b: Vector3, normal: Vector3) -> float:
    """
    Angle from a to b in [0, 2π), measured counter-clockwise about `normal`.

    The sign of (a x b)·normal picks between θ and 2π - θ.
    """
    c = cross(a, b)
    s = norm(c)
    if dot(c, normal) < 0:
        s = -s
    theta = math.atan2(s, dot(a, b))
    if theta < 0:
        theta += 2.0 * math.pi
    return theta


def axis_angle_matrix(axis: Vector3, angle_rad: float) -> Matrix3:
    """
    Rotation matrix for a right-handed rotation of `angle_rad` about `axis`
    (Rodrigues' formula). The axis need not be unit length.
    """
    x, y, z = normalize(axis)
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    t = 1.0 - c
    return (
        (t*x*x + c,   t*x*y - s*z, t*x*z + s*y),
        (t*x*y + s*z, t*y*y + c,   t*y*z - s*x),
        (t*x*z - s*y, t*y*z + s*x, t*z*z + c),
    )


def mat_mul(m: Matrix3, n: Matrix3) -> Matrix3:
    cols = tuple(zip(*n))
    return tuple(tuple(dot(row, col) for col in cols) for row in m)


def mat_vec(m: Matrix3, v: Vector3) -> Vector3:
    return (dot(m[0], v), dot(m[1], v), dot(m[2], v))


def perifocal_rotation(lan_rad: float, inc_rad: float, argp_rad: float) -> Matrix3:
    """
    Rotation taking perifocal (PQW) components into the reference frame:
    Rz(lan) * Rx(inc) * Rz(argp).

    Composed unconditionally; for the degenerate zero angles each factor is
    the identity anyway.
    """
    r_lan = axis_angle_matrix(Z_AXIS, lan_rad)
    r_inc = axis_angle_matrix(X_AXIS, inc_rad)
    r_argp = axis_angle_matrix(Z_AXIS, argp_rad)
    return mat_mul(mat_mul(r_lan, r_inc), r_argp)


def perifocal_to_frame(r_pqw: Vector3, v_pqw: Vector3, rotation: Matrix3) -> Tuple[Vector3, Vector3]:
    """
    Rotate perifocal position and velocity with a precomputed rotation.

    Args:
        r_pqw: Position in the perifocal frame (m)
        v_pqw: Velocity in the perifocal frame (m/s)
        rotation: Matrix from `perifocal_rotation`

    Returns:
        (r, v) in the reference frame
    """
    return mat_vec(rotation, r_pqw), mat_vec(rotation, v_pqw)
