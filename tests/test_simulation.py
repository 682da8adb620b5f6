"""Tests for the simulation driver."""

import logging
import math

import numpy as np
import pytest

from hitchsim import Simulator, SimulatorConfig
from hitchsim.errors import GeometryError, InvalidTimestep
from hitchsim.vehicle.state import VehicleGeometry, MAX_STEER
from hitchsim.vehicle.controls import ControlConfig, ControlInputs, SteerCommand, ThrottleCommand
from hitchsim.vehicle.geometry import STRAIGHT_LINE_RADIUS


FORWARD = ControlInputs(throttle=ThrottleCommand.FORWARD)


@pytest.fixture
def sim() -> Simulator:
    """Reference car with unit top speed."""
    return Simulator(SimulatorConfig(controls=ControlConfig(max_speed=1.0)))


class TestSimulatorSetup:
    """Test simulator construction."""
    
    def test_defaults(self):
        sim = Simulator()
        
        assert not sim.has_ticked
        assert sim.time == 0.0
        assert sim.trailer_count == 0
        assert sim.car.x == 0.0
        assert sim.car.theta == 0.0
        
    def test_initial_pose(self):
        config = SimulatorConfig(initial_x=1.0, initial_y=2.0, initial_theta=math.pi / 2)
        sim = Simulator(config)
        
        assert (sim.car.x, sim.car.y, sim.car.theta) == (1.0, 2.0, math.pi / 2)
        
    def test_gauge_too_wide_for_lock(self):
        """Vehicles that cannot reach full lock are rejected."""
        config = SimulatorConfig(geometry=VehicleGeometry(wheelbase=3.0, gauge=2.5))
        with pytest.raises(GeometryError):
            Simulator(config)
            
    def test_non_positive_geometry(self):
        with pytest.raises(GeometryError):
            VehicleGeometry(wheelbase=0.0)
        with pytest.raises(GeometryError):
            VehicleGeometry(gauge=-1.0)


class TestTick:
    """Test timestamp-driven ticking."""
    
    def test_first_tick_seeds_clock(self, sim):
        assert sim.tick(10.0, FORWARD) is False
        
        assert sim.has_ticked
        assert sim.car.x == 0.0
        assert sim.car.s == 0.0
        
    def test_straight_scenario(self, sim):
        """One second at unit speed moves one unit along +X."""
        sim.tick(0.0)
        assert sim.tick(1.0, FORWARD) is True
        
        assert sim.car.x == pytest.approx(1.0)
        assert sim.car.y == pytest.approx(0.0)
        assert sim.car.theta == 0.0
        assert sim.time == pytest.approx(1.0)
        assert sim.tick_count == 1
        
    def test_turning_scenario(self, sim):
        sim.car.phi = math.atan(3.0 / 3.0)
        sim.tick(0.0)
        sim.tick(1.0, FORWARD)
        
        assert sim.car.theta == pytest.approx(1.0 / 3.0)
        assert sim.steering().turning_radius == pytest.approx(3.0)
        
    def test_duplicate_timestamp_is_noop(self, sim):
        sim.tick(0.0)
        sim.tick(0.5, FORWARD)
        before = sim.current_state()
        
        assert sim.tick(0.5, ControlInputs(steer=SteerCommand.LEFT, throttle=ThrottleCommand.FORWARD)) is False
        
        assert sim.current_state() == before
        assert sim.tick_count == 1
        
    @pytest.mark.parametrize("bad", [float('nan'), float('inf')])
    def test_non_finite_timestamp_is_noop(self, sim, bad):
        sim.tick(0.0)
        before = sim.current_state()
        
        assert sim.tick(bad, FORWARD) is False
        
        assert sim.current_state() == before
        
    def test_backwards_timestamp_is_noop(self, sim, caplog):
        """Out-of-order frames are skipped and logged."""
        sim.tick(5.0)
        before = sim.current_state()
        
        with caplog.at_level(logging.DEBUG, logger="hitchsim.simulation.simulator"):
            assert sim.tick(4.0, FORWARD) is False
            
        assert sim.current_state() == before
        assert "Invalid timestep" in caplog.text
        
    def test_clock_follows_skipped_ticks(self, sim):
        """A skipped timestamp still becomes the reference for the next tick."""
        sim.tick(5.0)
        sim.tick(4.0, FORWARD)
        sim.tick(4.5, FORWARD)
        
        assert sim.car.x == pytest.approx(0.5)
        
    def test_controls_applied_before_integration(self, sim):
        """Speed from this tick's throttle moves the car on the same tick."""
        sim.tick(0.0)
        sim.tick(0.5, FORWARD)
        
        assert sim.car.s == 1.0
        assert sim.car.x == pytest.approx(0.5)
        
    def test_millisecond_clock(self):
        config = SimulatorConfig(time_scale=0.001, controls=ControlConfig(max_speed=1.0))
        sim = Simulator(config)
        
        sim.tick(1000.0)
        sim.tick(1250.0, FORWARD)
        
        assert sim.car.x == pytest.approx(0.25)
        
    def test_max_dt_caps_long_frames(self):
        config = SimulatorConfig(max_dt=0.1, controls=ControlConfig(max_speed=1.0))
        sim = Simulator(config)
        
        sim.tick(0.0)
        sim.tick(10.0, FORWARD)
        
        assert sim.car.x == pytest.approx(0.1)
        
    def test_steer_clamped_over_many_ticks(self, sim):
        left = ControlInputs(steer=SteerCommand.LEFT)
        for i in range(200):
            sim.tick(i * 0.05, left)
            assert sim.car.phi <= MAX_STEER
            
        assert sim.car.phi == pytest.approx(MAX_STEER)


class TestStep:
    """Test fixed-step advancing."""
    
    def test_step_matches_tick(self):
        ticked = Simulator()
        stepped = Simulator()
        inputs = ControlInputs(steer=SteerCommand.LEFT, throttle=ThrottleCommand.FORWARD)
        
        ticked.tick(0.0)
        for i in range(1, 11):
            ticked.tick(i * 0.1, inputs)
            stepped.step(inputs, 0.1)
            
        assert stepped.car.x == pytest.approx(ticked.car.x)
        assert stepped.car.theta == pytest.approx(ticked.car.theta)
        
    def test_step_rejects_negative_dt(self, sim):
        with pytest.raises(InvalidTimestep):
            sim.step(FORWARD, -0.1)


class TestTrailers:
    """Test trailer hitching and propagation."""
    
    def test_append_trailer(self, sim):
        index = sim.append_trailer(VehicleGeometry(wheelbase=2.0))
        
        assert index == 0
        assert sim.trailer_count == 1
        assert sim.trailers[0].theta == 0.0
        assert sim.trailers[0].geometry.wheelbase == 2.0
        
    def test_chain_order_preserved(self, sim):
        sim.append_trailer(VehicleGeometry(wheelbase=2.0))
        sim.append_trailer(VehicleGeometry(wheelbase=4.0))
        
        assert [t.geometry.wheelbase for t in sim.trailers] == [2.0, 4.0]
        
    def test_trailer_scenario(self, sim):
        """Car turning by 1/3 rad leaves a fresh trailer at -1/3 relative."""
        sim.append_trailer(VehicleGeometry(wheelbase=3.0))
        sim.car.phi = math.pi / 4
        
        sim.tick(0.0)
        sim.tick(1.0, FORWARD)
        
        assert sim.trailers[0].theta == pytest.approx(-1.0 / 3.0)
        
    def test_current_state_is_a_copy(self, sim):
        sim.append_trailer()
        car, trailers = sim.current_state()
        
        car.x = 100.0
        trailers[0].theta = 1.0
        
        assert sim.car.x == 0.0
        assert sim.trailers[0].theta == 0.0


class TestSnapshots:
    """Test renderer-facing outputs."""
    
    def test_snapshot_straight(self, sim):
        snapshot = sim.snapshot()
        
        assert snapshot.steering.turning_radius == STRAIGHT_LINE_RADIUS
        assert snapshot.steering.front_left_angle == 0.0
        assert len(snapshot.poses) == 1
        
    def test_snapshot_poses_follow_chain(self, sim):
        sim.append_trailer(VehicleGeometry(wheelbase=2.0))
        sim.append_trailer(VehicleGeometry(wheelbase=3.0))
        
        poses = sim.snapshot().poses
        
        assert len(poses) == 3
        assert (poses[1].x, poses[1].y) == pytest.approx((-2.0, 0.0))
        assert (poses[2].hitch_x, poses[2].hitch_y) == pytest.approx((-2.0, 0.0))
        assert (poses[2].x, poses[2].y) == pytest.approx((-5.0, 0.0))
        
    def test_snapshot_is_frozen(self, sim):
        snapshot = sim.snapshot()
        with pytest.raises(AttributeError):
            snapshot.time = 1.0
            
    def test_telemetry_dict(self, sim):
        sim.append_trailer()
        sim.step(FORWARD, 0.5)
        
        telemetry = sim.get_telemetry()
        
        assert telemetry["state"]["x"] == pytest.approx(0.5)
        assert telemetry["steering"]["turning_radius"] == STRAIGHT_LINE_RADIUS
        assert len(telemetry["trailers"]) == 1
        assert "pose" in telemetry["trailers"][0]
        
    def test_observation_vector(self, sim):
        sim.append_trailer()
        sim.append_trailer()
        
        obs = sim.get_observation()
        
        assert obs.shape == (8,)
        assert np.allclose(obs[:6], [0.0, 0.0, 1.0, 0.0, 0.0, 0.0])
        


class TestReset:
    """Test simulator reset."""
    
    def test_reset_clears_everything(self, sim):
        sim.append_trailer()
        sim.tick(0.0)
        sim.tick(1.0, FORWARD)
        
        sim.reset()
        
        assert sim.car.x == 0.0
        assert sim.trailer_count == 0
        assert not sim.has_ticked
        assert sim.time == 0.0
        
    def test_reset_keeps_trailers(self, sim):
        sim.append_trailer()
        sim.car.phi = 0.5
        sim.step(FORWARD, 1.0)
        
        sim.reset(keep_trailers=True)
        
        assert sim.trailer_count == 1
        assert sim.trailers[0].theta == 0.0
