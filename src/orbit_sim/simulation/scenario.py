from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from orbit_sim.objects.central_body import CentralBody
from orbit_sim.objects.satellite import Satellite


@dataclass
class Scenario:
    """
    Container for all objects orbiting one central body.
    Keep this pure: just data + lookup, no stepping logic.
    """
    name: str
    body: CentralBody
    satellites: Dict[str, Satellite] = field(default_factory=dict)

    def add_satellite(self, sat: Satellite) -> None:
        if sat.sat_id in self.satellites:
            raise ValueError(f"Duplicate satellite ID: {sat.sat_id}")
        if sat.body is not self.body:
            raise ValueError(f"Satellite {sat.sat_id} orbits {sat.body.name}, not {self.body.name}")
        self.satellites[sat.sat_id] = sat

    def satellite_list(self) -> List[Satellite]:
        return list(self.satellites.values())
