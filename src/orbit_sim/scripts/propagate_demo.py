import logging
import math

from orbit_sim.core.constants import BLACK_HOLE_MASS_KG, WORLD_RADIUS_M
from orbit_sim.core.propagator import NumericalPropagator
from orbit_sim.objects.central_body import CentralBody
from orbit_sim.objects.satellite import Satellite
from orbit_sim.physics.orbit import CartesianState
from orbit_sim.simulation.engine import Engine
from orbit_sim.simulation.scenario import Scenario
from orbit_sim.simulation.systems.override_system import OverrideSystem
from orbit_sim.simulation.systems.state_recorder import StateRecorderSystem
from orbit_sim.visualization.plotly_viewer import render_static_scene

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

hole = CentralBody.from_mass("Black hole", BLACK_HOLE_MASS_KG)

r0 = (WORLD_RADIUS_M / 3.0, 0.0, 0.0)
v0 = (0.0, hole.circular_speed(r0[0]) * 1.2, 0.0)

sat = Satellite(sat_id="SAT-001", name="Player", body=hole, state=CartesianState(r0, v0, 0.0))
period = sat.elements.period_s
print(f"a={sat.elements.a_m:.3f} m  e={sat.elements.e:.4f}  period={period:.3f} s")

for t in [0.0, period / 4, period / 2, period]:
    print(f"{t:8.3f} {sat.position_at(t)}")

numeric = sat.project_numeric(period / 2, NumericalPropagator())
print(f"numeric at T/2: {numeric.r_m}")

# Jump to a corner of the world halfway through the run
corner = (WORLD_RADIUS_M / 2.0, WORLD_RADIUS_M / 2.0, 0.0)
v_corner = (-hole.circular_speed(math.hypot(*corner[:2])) / math.sqrt(2.0),
            hole.circular_speed(math.hypot(*corner[:2])) / math.sqrt(2.0), 0.0)

scenario = Scenario(name="ftl-hole", body=hole)
scenario.add_satellite(sat)
engine = Engine(dt_s=0.1, systems=[
    OverrideSystem(schedule=[(period, "SAT-001", corner, v_corner)]),
    StateRecorderSystem(),
])
log = engine.run(scenario, 0.0, 2.0 * period)

out = render_static_scene(log, hole, curves={"lookahead": sat.lookahead(2.0 * period)})
print(f"wrote {out}")
