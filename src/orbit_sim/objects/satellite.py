from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from orbit_sim.core.constants import LOOKAHEAD_SAMPLES, LOOKAHEAD_SPACING_S
from orbit_sim.core.frames import Vector3
from orbit_sim.core.propagator import NumericalPropagator
from orbit_sim.objects.central_body import CentralBody
from orbit_sim.physics import orbit
from orbit_sim.physics.orbit import CartesianState, KeplerianElements

logger = logging.getLogger(__name__)


@dataclass
class Satellite:
    """
    A body in orbit around `body`, anchored to the state it was last known at.

    `state.t_s` is the as-of time. Elements are derived from the state once
    and reused for every query until the state is overridden.
    """
    sat_id: str
    name: str
    body: CentralBody
    state: CartesianState

    _elements: Optional[KeplerianElements] = field(default=None, init=False, repr=False)

    @property
    def as_of_s(self) -> float:
        return self.state.t_s

    @property
    def elements(self) -> KeplerianElements:
        if self._elements is None:
            self._elements = orbit.rv_to_elements(self.state, self.body)
        return self._elements

    def state_at(self, t_s: float) -> CartesianState:
        """
        Cartesian state at t_s (seconds, either side of the as-of time).
        """
        return orbit.elements_to_rv(orbit.propagate_elements(self.elements, t_s - self.as_of_s), self.body)

    def position_at(self, t_s: float) -> Vector3:
        return self.state_at(t_s).r_m

    def lookahead(self, t_s: float, n_samples: int = LOOKAHEAD_SAMPLES,
                  spacing_s: float = LOOKAHEAD_SPACING_S) -> List[Vector3]:
        """Positions at t_s, t_s + spacing, ... for drawing a projected path."""
        start = orbit.propagate_elements(self.elements, t_s - self.as_of_s)
        return orbit.lookahead(start, self.body, n_samples, spacing_s)

    def period_track(self, t_s: float, n_samples: int = LOOKAHEAD_SAMPLES) -> List[Vector3]:
        """Closed curve of one full revolution starting at t_s."""
        start = orbit.propagate_elements(self.elements, t_s - self.as_of_s)
        return orbit.sample_period(start, self.body, n_samples)

    def project_numeric(self, t_s: float, propagator: Optional[NumericalPropagator] = None) -> CartesianState:
        """
        State at t_s by direct integration from the as-of state, without
        going through elements.
        """
        propagator = propagator or NumericalPropagator()
        return propagator.propagate_to(self.state, t_s, self.body)

    def override(self, r_m: Vector3, v_m_s: Vector3, t_s: float) -> None:
        """
        Replace position and velocity at t_s (e.g. a discontinuous jump).
        Later queries propagate from the new state.

        Raises:
            ValueError: if the new state is not a bound orbit. The previous
                state is kept.
        """
        state = CartesianState(r_m, v_m_s, t_s)
        elements = orbit.rv_to_elements(state, self.body)
        self.state = state
        self._elements = elements
        logger.info("Satellite %s state overridden at t=%.6g s: r=%s v=%s", self.sat_id, t_s, r_m, v_m_s)
