"""
HitchSim - Kinematic simulation of a steerable car towing a trailer chain.

This package provides:
- Ackermann steering geometry (per-wheel angles, turning radius)
- Bicycle-model integration of the car pose
- Relative-heading propagation through a chain of passive trailers
- A frame-clock driven simulator with snapshots for rendering
- Telemetry recording and export
"""

__version__ = "0.1.0"

from hitchsim.simulation.simulator import Simulator, SimulatorConfig
from hitchsim.vehicle.state import VehicleGeometry, CarState, TrailerState
from hitchsim.vehicle.controls import ControlInputs, SteerCommand, ThrottleCommand
from hitchsim.errors import GeometryError, InvalidTimestep

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "VehicleGeometry",
    "CarState",
    "TrailerState",
    "ControlInputs",
    "SteerCommand",
    "ThrottleCommand",
    "GeometryError",
    "InvalidTimestep",
    "__version__",
]
