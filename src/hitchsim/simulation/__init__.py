"""
Simulation module - Kinematic integration and the simulation driver.

This module contains:
- Simulator: Owns the vehicle state and advances it per tick
- Kinematics: Car and trailer chain integration
"""

from hitchsim.simulation.simulator import Simulator, SimulatorConfig, VehicleSnapshot
from hitchsim.simulation.kinematics import integrate, validate_timestep

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "VehicleSnapshot",
    "integrate",
    "validate_timestep",
]
