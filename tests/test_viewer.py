from orbit_sim.objects.satellite import Satellite
from orbit_sim.simulation.engine import Engine, SimulationLog
from orbit_sim.simulation.scenario import Scenario
from orbit_sim.simulation.systems.override_system import OverrideSystem
from orbit_sim.simulation.systems.state_recorder import StateRecorderSystem
from orbit_sim.visualization.plotly_viewer import build_static_figure, render_static_scene


def run_log(hole, ellipse_state, schedule=()):
    scenario = Scenario(name="Test", body=hole)
    scenario.add_satellite(Satellite(sat_id="SAT-001", name="TestSat", body=hole, state=ellipse_state))
    engine = Engine(dt_s=0.5, systems=[OverrideSystem(schedule=list(schedule)), StateRecorderSystem()])
    return engine.run(scenario, 0.0, 5.0)


def test_figure_traces(hole, ellipse_state):
    log = run_log(hole, ellipse_state)
    fig = build_static_figure(log, hole, curves={"lookahead": [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]})

    names = [trace.name for trace in fig.data]
    assert names == [hole.name, "SAT-001 track", "SAT-001 now", "lookahead"]
    assert len(fig.data[1].x) == 11
    assert fig.data[2].x[0] == fig.data[1].x[-1]


def test_figure_marks_overrides(hole, ellipse_state):
    r_new = (0.0, 400.0, 0.0)
    v_new = (-hole.circular_speed(400.0), 0.0, 0.0)
    log = run_log(hole, ellipse_state, schedule=[(2.0, "SAT-001", r_new, v_new)])

    fig = build_static_figure(log, hole)
    assert fig.data[-1].name == "overrides"
    assert tuple(fig.data[-1].x) == (0.0,)
    assert tuple(fig.data[-1].y) == (400.0,)


def test_empty_log_has_only_body(hole):
    fig = build_static_figure(SimulationLog(), hole)
    assert len(fig.data) == 1


def test_render_writes_html(tmp_path, hole, ellipse_state):
    out = tmp_path / "nested" / "scene.html"
    path = render_static_scene(run_log(hole, ellipse_state), hole, out_html=str(out))
    assert path == str(out)
    assert out.exists()
    assert "plotly" in out.read_text(encoding="utf-8").lower()
