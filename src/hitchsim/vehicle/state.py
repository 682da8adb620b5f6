"""
Vehicle state - Geometry and pose data for the car and its trailers.

Provides:
- VehicleGeometry: immutable dimensions of a car or trailer
- CarState: pose and control state of the towing car
- TrailerState: one towed unit with its relative heading
"""

from dataclasses import dataclass, field, replace
import numpy as np

from hitchsim.errors import GeometryError


# Steering lock in radians (72 degrees)
MAX_STEER = 0.4 * np.pi


@dataclass(frozen=True)
class VehicleGeometry:
    """Dimensions of a car or trailer.
    
    Default values describe the reference car. Only wheelbase and gauge
    take part in the kinematics; the box and wheel sizes are passed
    through for rendering.
    """
    wheelbase: float = 3.0       # Rear axle to front axle (hitch for trailers)
    gauge: float = 1.5           # Axle width
    
    # Cosmetic dimensions
    box_length: float = 4.0
    box_width: float = 2.0
    wheel_diameter: float = 0.75
    wheel_width: float = 0.25
    
    def __post_init__(self):
        if not self.wheelbase > 0:
            raise GeometryError(f"Wheelbase must be positive, got {self.wheelbase!r}")
        if not self.gauge > 0:
            raise GeometryError(f"Gauge must be positive, got {self.gauge!r}")
    
    def get_state(self) -> dict:
        """Get geometry as a dictionary."""
        return {
            "wheelbase": self.wheelbase,
            "gauge": self.gauge,
            "box_length": self.box_length,
            "box_width": self.box_width,
            "wheel_diameter": self.wheel_diameter,
            "wheel_width": self.wheel_width,
        }


@dataclass
class CarState:
    """Current car state for kinematic integration."""
    # Position of the rear axle centre (world coordinates)
    x: float = 0.0
    y: float = 0.0
    
    # Heading in radians (0 = +X direction)
    theta: float = 0.0
    
    # Controls
    s: float = 0.0             # Signed speed, + forward
    phi: float = 0.0           # Steer angle in radians, + turns left
    
    def copy(self) -> "CarState":
        """Return an independent copy."""
        return replace(self)
    
    def get_state(self) -> dict:
        """Get car pose as a dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "theta_rad": self.theta,
            "theta_deg": float(np.degrees(self.theta)),
            "speed": self.s,
            "phi_rad": self.phi,
            "phi_deg": float(np.degrees(self.phi)),
        }


@dataclass
class TrailerState:
    """A towed unit.
    
    The trailer has no position of its own. It pivots about the rear axle
    of the unit ahead, and theta is its heading relative to that unit.
    """
    geometry: VehicleGeometry = field(default_factory=VehicleGeometry)
    theta: float = 0.0
    
    def copy(self) -> "TrailerState":
        """Return an independent copy (geometry is shared, it is frozen)."""
        return replace(self)
    
    def get_state(self) -> dict:
        """Get trailer state as a dictionary."""
        return {
            "theta_rad": self.theta,
            "theta_deg": float(np.degrees(self.theta)),
            "wheelbase": self.geometry.wheelbase,
            "gauge": self.geometry.gauge,
        }
