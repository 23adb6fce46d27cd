"""
Tests for simulation engine and scenario components.
"""
import pytest

from orbit_sim.objects.central_body import CentralBody
from orbit_sim.objects.satellite import Satellite
from orbit_sim.simulation.scenario import Scenario
from orbit_sim.simulation.engine import Engine, SimulationLog


@pytest.fixture
def sample_satellite(hole, ellipse_state):
    return Satellite(sat_id="SAT-TEST", name="TestSat", body=hole, state=ellipse_state)


class TestScenario:
    def test_scenario_creation(self, hole):
        scenario = Scenario(name="Test Scenario", body=hole)
        assert scenario.name == "Test Scenario"
        assert scenario.body is hole
        assert len(scenario.satellites) == 0

    def test_add_satellite(self, hole, sample_satellite):
        scenario = Scenario(name="Test", body=hole)
        scenario.add_satellite(sample_satellite)

        assert len(scenario.satellites) == 1
        assert "SAT-TEST" in scenario.satellites
        assert scenario.satellites["SAT-TEST"] == sample_satellite

    def test_duplicate_satellite_rejected(self, hole, sample_satellite):
        scenario = Scenario(name="Test", body=hole)
        scenario.add_satellite(sample_satellite)
        with pytest.raises(ValueError, match="Duplicate satellite ID"):
            scenario.add_satellite(sample_satellite)

    def test_satellite_around_other_body_rejected(self, sample_satellite):
        other = CentralBody("Other", 1.0e6)
        scenario = Scenario(name="Test", body=other)
        with pytest.raises(ValueError, match="not Other"):
            scenario.add_satellite(sample_satellite)

    def test_satellite_list(self, hole, sample_satellite):
        scenario = Scenario(name="Test", body=hole)
        scenario.add_satellite(sample_satellite)

        sat_list = scenario.satellite_list()
        assert len(sat_list) == 1
        assert sat_list[0] == sample_satellite


class TestSimulationLog:
    def test_log_creation(self):
        log = SimulationLog()
        assert len(log.sat_positions_m) == 0
        assert len(log.events) == 0

    def test_record_position(self):
        log = SimulationLog()
        log.record_position("SAT-001", 0.0, (700.0, 0.0, 0.0))
        log.record_position("SAT-001", 10.0, (690.0, 10.0, 0.0))

        assert "SAT-001" in log.sat_positions_m
        assert len(log.sat_positions_m["SAT-001"]) == 2
        assert log.sat_positions_m["SAT-001"][0] == (0.0, (700.0, 0.0, 0.0))
        assert log.sat_positions_m["SAT-001"][1] == (10.0, (690.0, 10.0, 0.0))

    def test_record_event(self):
        log = SimulationLog()
        log.record_event(5.0, "override", sat_id="SAT-001")
        assert log.events == [{"t_s": 5.0, "kind": "override", "sat_id": "SAT-001"}]


class TestEngine:
    def test_engine_creation(self):
        engine = Engine(dt_s=10.0)
        assert engine.dt_s == 10.0
        assert len(engine.systems) == 0

    def test_engine_validation_negative_dt(self, hole):
        engine = Engine(dt_s=-1.0)
        scenario = Scenario(name="Test", body=hole)

        with pytest.raises(ValueError, match="dt_s must be positive"):
            engine.run(scenario, t_start_s=0.0, t_end_s=100.0)

    def test_engine_validation_end_before_start(self, hole):
        engine = Engine(dt_s=10.0)
        scenario = Scenario(name="Test", body=hole)

        with pytest.raises(ValueError, match="t_end_s must be >= t_start_s"):
            engine.run(scenario, t_start_s=100.0, t_end_s=0.0)

    def test_engine_run_empty_scenario(self, hole):
        engine = Engine(dt_s=10.0)
        scenario = Scenario(name="Test", body=hole)

        log = engine.run(scenario, t_start_s=0.0, t_end_s=50.0)
        assert isinstance(log, SimulationLog)

    def test_engine_with_mock_system(self, hole, sample_satellite):
        """Test that engine calls system on_step method at each timestep."""
        from dataclasses import dataclass, field
        from typing import List

        @dataclass
        class MockSystem:
            name: str = "mock"
            call_times: List[float] = field(default_factory=list)

            def on_step(self, t_s: float, scenario, log):
                self.call_times.append(t_s)

        mock_system = MockSystem()
        engine = Engine(dt_s=10.0, systems=[mock_system])
        scenario = Scenario(name="Test", body=hole)
        scenario.add_satellite(sample_satellite)

        engine.run(scenario, t_start_s=0.0, t_end_s=30.0)

        # Should be called at t=0, 10, 20, 30
        assert mock_system.call_times == [0.0, 10.0, 20.0, 30.0]

    def test_tick_times_do_not_drift(self, hole):
        from dataclasses import dataclass, field
        from typing import List

        @dataclass
        class Clock:
            name: str = "clock"
            call_times: List[float] = field(default_factory=list)

            def on_step(self, t_s: float, scenario, log):
                self.call_times.append(t_s)

        clock = Clock()
        Engine(dt_s=0.1, systems=[clock]).run(Scenario(name="Test", body=hole), 0.0, 100.0)
        assert len(clock.call_times) == 1001
        assert clock.call_times[-1] == pytest.approx(100.0, abs=1e-9)
