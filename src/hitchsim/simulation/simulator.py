"""
Simulator - Owns the vehicle state and advances it from a frame clock.

Provides:
- Timestamp-driven ticking with duplicate/invalid frame protection
- Fixed-step advancing for test harnesses
- Trailer hitching
- Read-only snapshots for rendering and telemetry
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple
import logging
import math
import numpy as np

from hitchsim.errors import GeometryError, InvalidTimestep
from hitchsim.vehicle.state import CarState, TrailerState, VehicleGeometry
from hitchsim.vehicle.controls import ControlConfig, ControlInputs, apply_controls
from hitchsim.vehicle.geometry import SteeringGeometry, steering_geometry, max_gauge_for
from hitchsim.vehicle.chain import UnitPose, compose_chain
from hitchsim.simulation.kinematics import integrate, validate_timestep

logger = logging.getLogger(__name__)


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Vehicle
    geometry: VehicleGeometry = field(default_factory=VehicleGeometry)
    controls: ControlConfig = field(default_factory=ControlConfig)
    
    # Initial pose
    initial_x: float = 0.0
    initial_y: float = 0.0
    initial_theta: float = 0.0
    
    # Time stepping
    time_scale: float = 1.0             # Seconds per timestamp unit (0.001 for ms clocks)
    max_dt: Optional[float] = None      # Cap on a single tick's elapsed time


@dataclass(frozen=True)
class VehicleSnapshot:
    """Immutable view of the simulation for a renderer."""
    time: float
    tick_count: int
    geometry: VehicleGeometry
    car: CarState
    trailers: Tuple[TrailerState, ...]
    steering: SteeringGeometry
    poses: Tuple[UnitPose, ...]


class Simulator:
    """Kinematic car-and-trailer simulator.
    
    Owns one car and its trailer chain. Each tick maps the driver
    commands onto speed and steer angle, then integrates the car pose
    and propagates the heading change down the chain.
    
    Not reentrant: callers must serialise tick/step calls and read
    snapshots between them.
    
    Usage:
        sim = Simulator(SimulatorConfig(time_scale=0.001))
        sim.append_trailer()
        
        for timestamp in frame_clock:
            sim.tick(timestamp, ControlInputs.from_keys(up=True))
            render(sim.snapshot())
    """
    
    def __init__(self, config: SimulatorConfig | None = None):
        """Initialize simulator.
        
        Args:
            config: Simulator configuration. Uses defaults if None.
            
        Raises:
            GeometryError: If the gauge is too wide for the steering lock
        """
        self.config = config or SimulatorConfig()
        
        geometry = self.config.geometry
        max_gauge = max_gauge_for(geometry.wheelbase, self.config.controls.max_steer)
        if geometry.gauge >= max_gauge:
            raise GeometryError(
                f"Gauge {geometry.gauge} too wide for steering lock "
                f"(must be below {max_gauge:.4f})"
            )
        
        self.car = CarState()
        self.trailers: List[TrailerState] = []
        
        # Timing
        self._has_ticked: bool = False
        self._last_timestamp: float = 0.0
        self._time: float = 0.0
        self._tick_count: int = 0
        
        self.reset()
        logger.info(
            "Simulator ready (wheelbase=%.3f, gauge=%.3f)",
            geometry.wheelbase, geometry.gauge,
        )
    
    @property
    def geometry(self) -> VehicleGeometry:
        """Car geometry."""
        return self.config.geometry
    
    @property
    def has_ticked(self) -> bool:
        """Whether a first timestamp has been seen."""
        return self._has_ticked
    
    @property
    def time(self) -> float:
        """Accumulated simulation time in seconds."""
        return self._time
    
    @property
    def tick_count(self) -> int:
        """Number of ticks that advanced the state."""
        return self._tick_count
    
    @property
    def trailer_count(self) -> int:
        """Number of hitched trailers."""
        return len(self.trailers)
    
    def append_trailer(self, geometry: VehicleGeometry | None = None) -> int:
        """Hitch a trailer to the end of the chain.
        
        The trailer starts aligned with the unit ahead of it.
        
        Args:
            geometry: Trailer geometry. Uses defaults if None.
            
        Returns:
            Index of the new trailer
        """
        self.trailers.append(TrailerState(geometry=geometry or VehicleGeometry()))
        index = len(self.trailers) - 1
        logger.info("Hitched trailer %d (wheelbase=%.3f)", index, self.trailers[index].geometry.wheelbase)
        return index
    
    def tick(self, now: float, inputs: ControlInputs | None = None) -> bool:
        """Advance the simulation to a frame timestamp.
        
        The first timestamp only seeds the clock. Repeated, non-finite or
        backwards timestamps leave the state unchanged.
        
        Args:
            now: Frame timestamp in timestamp units
            inputs: Driver commands held during this frame
            
        Returns:
            True if the state advanced
        """
        if not self._has_ticked:
            self._has_ticked = True
            self._last_timestamp = now
            logger.debug("First tick at %r seeds the clock", now)
            return False
        
        previous = self._last_timestamp
        self._last_timestamp = now
        
        if now == previous:
            logger.debug("Duplicate timestamp %r ignored", now)
            return False
        
        dt = (now - previous) * self.config.time_scale
        try:
            validate_timestep(dt)
        except InvalidTimestep as exc:
            logger.debug("Skipping tick: %s", exc)
            return False
        
        if self.config.max_dt is not None:
            dt = min(dt, self.config.max_dt)
        
        self._advance(inputs or ControlInputs(), dt)
        return True
    
    def step(self, inputs: ControlInputs | None = None, dt: float = 0.01) -> CarState:
        """Advance the simulation by a fixed timestep.
        
        Args:
            inputs: Driver commands
            dt: Time step in seconds
            
        Returns:
            Updated car state
            
        Raises:
            InvalidTimestep: If dt is negative or not finite
        """
        validate_timestep(dt)
        self._advance(inputs or ControlInputs(), dt)
        return self.car
    
    def _advance(self, inputs: ControlInputs, dt: float) -> None:
        """Run the control mapper then the integrator."""
        self.car.s, self.car.phi = apply_controls(
            self.car.phi, inputs, dt, self.config.controls
        )
        integrate(self.car, self.geometry, self.trailers, dt)
        
        self._time += dt
        self._tick_count += 1
    
    def current_state(self) -> Tuple[CarState, Tuple[TrailerState, ...]]:
        """Copy of the car state and trailer chain."""
        return self.car.copy(), tuple(t.copy() for t in self.trailers)
    
    def steering(self) -> SteeringGeometry:
        """Steering geometry derived from the current steer angle."""
        return steering_geometry(self.geometry.wheelbase, self.geometry.gauge, self.car.phi)
    
    def poses(self) -> List[UnitPose]:
        """World poses of the car followed by each trailer."""
        return compose_chain(self.car, self.trailers)
    
    def snapshot(self) -> VehicleSnapshot:
        """Immutable snapshot for rendering."""
        car, trailers = self.current_state()
        return VehicleSnapshot(
            time=self._time,
            tick_count=self._tick_count,
            geometry=self.geometry,
            car=car,
            trailers=trailers,
            steering=self.steering(),
            poses=tuple(compose_chain(car, trailers)),
        )
    
    def get_telemetry(self) -> Dict[str, Any]:
        """Get current vehicle telemetry.
        
        Returns:
            Dictionary containing car, steering and trailer data
        """
        steering = self.steering()
        poses = self.poses()
        return {
            "time": self._time,
            "tick": self._tick_count,
            "state": self.car.get_state(),
            "steering": steering.get_state(),
            "trailers": [
                {**trailer.get_state(), "pose": pose.get_state()}
                for trailer, pose in zip(self.trailers, poses[1:])
            ],
        }
    
    def get_observation(self) -> np.ndarray:
        """Get vehicle state as a flat observation vector.
        
        Layout: x, y, cos(theta), sin(theta), speed, phi, then the
        relative angle of each trailer.
        """
        values = [
            self.car.x,
            self.car.y,
            math.cos(self.car.theta),
            math.sin(self.car.theta),
            self.car.s,
            self.car.phi,
        ]
        values.extend(t.theta for t in self.trailers)
        return np.array(values, dtype=np.float64)
    
    def reset(self, keep_trailers: bool = False) -> None:
        """Reset to the initial pose.
        
        Args:
            keep_trailers: Keep hitched trailers, straightened behind the car
        """
        self.car = CarState(
            x=self.config.initial_x,
            y=self.config.initial_y,
            theta=self.config.initial_theta,
        )
        if keep_trailers:
            for trailer in self.trailers:
                trailer.theta = 0.0
        else:
            self.trailers = []
        
        self._has_ticked = False
        self._last_timestamp = 0.0
        self._time = 0.0
        self._tick_count = 0
        logger.debug("Simulator reset (keep_trailers=%s)", keep_trailers)
