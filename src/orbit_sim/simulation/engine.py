from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Any, Tuple

from orbit_sim.core.frames import Vector3
from orbit_sim.simulation.scenario import Scenario

logger = logging.getLogger(__name__)


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick and can write to the log.
    """
    name: str

    def on_step(self, t_s: float, scenario: Scenario, log: "SimulationLog") -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run.
    Keep it simple and serializable.
    """
    # Positions: sat_id -> list of (t, r)
    sat_positions_m: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Free-form events (overrides etc.)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def record_position(self, sat_id: str, t_s: float, r: Vector3) -> None:
        self.sat_positions_m.setdefault(sat_id, []).append((t_s, r))

    def record_event(self, t_s: float, kind: str, **details: Any) -> None:
        self.events.append({"t_s": t_s, "kind": kind, **details})


@dataclass
class Engine:
    """
    Fixed-step simulation engine.
    Deterministic replay: given same scenario + dt + start/end => same output.
    """
    dt_s: float
    systems: List[System] = field(default_factory=list)

    def run(self, scenario: Scenario, t_start_s: float, t_end_s: float) -> SimulationLog:
        if self.dt_s <= 0:
            raise ValueError("dt_s must be positive.")
        if t_end_s < t_start_s:
            raise ValueError("t_end_s must be >= t_start_s.")

        log = SimulationLog()
        logger.info("Running scenario %r from t=%.6g to t=%.6g s (dt=%.6g s, %d systems)",
                    scenario.name, t_start_s, t_end_s, self.dt_s, len(self.systems))

        # t is derived from the tick index.
        # Inclusive end if it lands exactly; otherwise last tick < end
        k = 0
        t = t_start_s
        while t <= t_end_s + 1e-9:
            for sys in self.systems:
                sys.on_step(t, scenario, log)

            k += 1
            t = t_start_s + k * self.dt_s

        return log
