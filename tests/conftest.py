import math

import pytest

from orbit_sim.core.constants import BLACK_HOLE_MASS_KG, WORLD_RADIUS_M
from orbit_sim.objects.central_body import CentralBody
from orbit_sim.physics.orbit import CartesianState


@pytest.fixture
def hole():
    return CentralBody.from_mass("Black hole", BLACK_HOLE_MASS_KG)


@pytest.fixture
def ellipse_state(hole):
    # Periapsis of an equatorial ellipse: 1.2x circular speed at r = world/3
    r = (WORLD_RADIUS_M / 3.0, 0.0, 0.0)
    v = (0.0, math.sqrt(hole.mu_m3_s2 / r[0]) * 1.2, 0.0)
    return CartesianState(r, v, 0.0)
