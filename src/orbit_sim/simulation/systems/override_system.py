from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from orbit_sim.core.frames import Vector3
from orbit_sim.simulation.scenario import Scenario
from orbit_sim.simulation.engine import SimulationLog

# (t_s, sat_id, r_m, v_m_s)
ScheduledOverride = Tuple[float, str, Vector3, Vector3]


@dataclass
class OverrideSystem:
    """
    Applies scheduled state overrides (discontinuous jumps) during a run.

    Each override fires on the first tick at or after its time and is
    applied as of its own time, so the orbit restarts from exactly the
    requested instant.
    """
    schedule: List[ScheduledOverride] = field(default_factory=list)
    name: str = "override"

    def __post_init__(self):
        self.schedule = sorted(self.schedule, key=lambda item: item[0])
        self._next = 0

    def on_step(self, t_s: float, scenario: Scenario, log: SimulationLog) -> None:
        while self._next < len(self.schedule) and self.schedule[self._next][0] <= t_s:
            t_o, sat_id, r, v = self.schedule[self._next]
            self._next += 1
            if sat_id not in scenario.satellites:
                raise ValueError(f"Override targets unknown satellite: {sat_id}")
            scenario.satellites[sat_id].override(r, v, t_o)
            log.record_event(t_o, "override", sat_id=sat_id, r_m=r, v_m_s=v)
