from __future__ import annotations

# Universal gravitational constant as used by the demo world (m^3 / (kg s^2))
GRAVITATIONAL_CONSTANT: float = 6.67e-11

# Demo attractor mass (kg) and the resulting mu (m^3/s^2)
BLACK_HOLE_MASS_KG: float = 5.97219e17
MU_BLACK_HOLE_M3_S2: float = BLACK_HOLE_MASS_KG * GRAVITATIONAL_CONSTANT

# Half-extent of the demo world in meters
WORLD_RADIUS_M: float = 1024.0

# Integrator tick (1000 ticks per simulated second)
TICKS_PER_SECOND: int = 1000
TICK_DURATION_S: float = 1.0 / TICKS_PER_SECOND

# Absolute tolerance for "circular" / "equatorial" decisions (rad, dimensionless)
DEGENERATE_TOLERANCE: float = 1e-7

# Newton-Raphson iterations for Kepler's equation (fixed count, no early exit)
KEPLER_ITERATIONS: int = 10

# Allowed deviation of a central-body basis from orthonormal / right-handed
FRAME_TOLERANCE: float = 1e-9

# Lookahead samples drawn ahead of the body, one per LOOKAHEAD_SPACING_S
LOOKAHEAD_SAMPLES: int = 100
LOOKAHEAD_SPACING_S: float = 1.0
