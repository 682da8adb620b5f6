"""
Vehicle module - Car and trailer models.

This module contains:
- State: Geometry and pose data for the car and trailers
- Geometry: Ackermann steering and turning radius
- Controls: Driver command mapping
- Chain: World poses composed from relative trailer headings
"""

from hitchsim.vehicle.state import VehicleGeometry, CarState, TrailerState, MAX_STEER
from hitchsim.vehicle.geometry import (
    STRAIGHT_LINE_RADIUS,
    SteeringGeometry,
    turning_radius,
    ackermann_wheel_angles,
    wheel_steer_angles,
    steering_geometry,
)
from hitchsim.vehicle.controls import (
    ControlConfig,
    ControlInputs,
    SteerCommand,
    ThrottleCommand,
    apply_controls,
)
from hitchsim.vehicle.chain import UnitPose, compose_chain

__all__ = [
    "VehicleGeometry",
    "CarState",
    "TrailerState",
    "MAX_STEER",
    "STRAIGHT_LINE_RADIUS",
    "SteeringGeometry",
    "turning_radius",
    "ackermann_wheel_angles",
    "wheel_steer_angles",
    "steering_geometry",
    "ControlConfig",
    "ControlInputs",
    "SteerCommand",
    "ThrottleCommand",
    "apply_controls",
    "UnitPose",
    "compose_chain",
]
