"""
Steering geometry - Ackermann steering and turning radius calculations.

Provides:
- Turning radius from wheelbase and steer angle
- Inner/outer Ackermann wheel angles
- Per-wheel (front left / front right) steer angles
- Turning centre in the car frame
"""

from dataclasses import dataclass
import math

import numpy as np

from hitchsim.errors import GeometryError


# Turning radius reported while driving straight.
STRAIGHT_LINE_RADIUS = float('inf')


def is_straight(radius: float) -> bool:
    """Check whether a turning radius denotes straight-line motion."""
    return radius == STRAIGHT_LINE_RADIUS


def _turn_sign(phi: float) -> float:
    # -0.0 and 0.0 both mean "no turn"
    if phi > 0:
        return 1.0
    if phi < 0:
        return -1.0
    return 0.0


def turning_radius(wheelbase: float, phi: float) -> float:
    """Calculate the turning radius of the rear axle centre.
    
    Args:
        wheelbase: Distance from rear axle to front axle
        phi: Steer angle in radians
        
    Returns:
        Turning radius (always positive), or STRAIGHT_LINE_RADIUS when phi is 0
    """
    if phi == 0:
        return STRAIGHT_LINE_RADIUS
    return wheelbase / math.tan(abs(phi))


def ackermann_wheel_angles(
    wheelbase: float,
    gauge: float,
    phi: float,
) -> tuple[float, float]:
    """Calculate Ackermann steer angles for both front wheels.
    
    Both wheels' steer axes meet on the extended rear axle line, so each
    front wheel rolls without slip.
    
    Args:
        wheelbase: Distance from rear axle to front axle
        gauge: Front axle width
        phi: Steer angle of the equivalent bicycle model in radians
        
    Returns:
        Tuple of (inner_angle, outer_angle) in radians
        
    Raises:
        GeometryError: If the turning radius is not larger than half the gauge
    """
    if phi == 0:
        return 0.0, 0.0
    
    radius = turning_radius(wheelbase, phi)
    half_gauge = gauge / 2
    if radius <= half_gauge:
        raise GeometryError(
            f"Turning radius {radius:.4f} must exceed half gauge {half_gauge:.4f}"
        )
    
    sign = _turn_sign(phi)
    outer = sign * math.atan(wheelbase / (radius + half_gauge))
    inner = sign * math.atan(wheelbase / (radius - half_gauge))
    return inner, outer


def wheel_steer_angles(
    wheelbase: float,
    gauge: float,
    phi: float,
) -> tuple[float, float]:
    """Assign Ackermann angles to physical wheels.
    
    Returns:
        Tuple of (front_left, front_right) steer angles in radians
    """
    inner, outer = ackermann_wheel_angles(wheelbase, gauge, phi)
    if phi > 0:
        return inner, outer
    return outer, inner


def turning_center(wheelbase: float, phi: float) -> tuple[float, float] | None:
    """Turning centre in the car frame (origin at rear axle, +x forward).
    
    Returns:
        (x, y) of the instantaneous centre of rotation, None when straight
    """
    radius = turning_radius(wheelbase, phi)
    if is_straight(radius):
        return None
    return 0.0, _turn_sign(phi) * radius


def max_gauge_for(wheelbase: float, max_steer: float) -> float:
    """Widest gauge whose inner wheel stays valid at full lock."""
    return 2 * turning_radius(wheelbase, max_steer)


@dataclass(frozen=True)
class SteeringGeometry:
    """Steering quantities derived from a steer angle.
    
    Never integrated; always recomputed from the current phi.
    """
    phi: float
    turning_radius: float
    curvature: float
    inner_angle: float
    outer_angle: float
    front_left_angle: float
    front_right_angle: float
    
    @property
    def is_straight(self) -> bool:
        """True when driving in a straight line."""
        return is_straight(self.turning_radius)
    
    def get_state(self) -> dict:
        """Get steering geometry as a dictionary."""
        return {
            "phi_rad": self.phi,
            "phi_deg": float(np.degrees(self.phi)),
            "turning_radius": self.turning_radius,
            "curvature": self.curvature,
            "inner_angle": self.inner_angle,
            "outer_angle": self.outer_angle,
            "front_left_angle": self.front_left_angle,
            "front_right_angle": self.front_right_angle,
        }


def steering_geometry(wheelbase: float, gauge: float, phi: float) -> SteeringGeometry:
    """Derive the full steering geometry for a steer angle.
    
    Args:
        wheelbase: Distance from rear axle to front axle
        gauge: Front axle width
        phi: Steer angle in radians
        
    Returns:
        SteeringGeometry snapshot
    """
    inner, outer = ackermann_wheel_angles(wheelbase, gauge, phi)
    front_left, front_right = wheel_steer_angles(wheelbase, gauge, phi)
    return SteeringGeometry(
        phi=phi,
        turning_radius=turning_radius(wheelbase, phi),
        curvature=math.tan(phi) / wheelbase,
        inner_angle=inner,
        outer_angle=outer,
        front_left_angle=front_left,
        front_right_angle=front_right,
    )
