"""
Trailer chain - Composes world poses from relative trailer headings.

Trailers store only their heading relative to the unit ahead. World
poses are rebuilt here, outward from the car, whenever a renderer or
telemetry consumer needs them.
"""

from dataclasses import dataclass
from typing import List, Sequence
import numpy as np

from hitchsim.vehicle.state import CarState, TrailerState


@dataclass(frozen=True)
class UnitPose:
    """World pose of one unit in the chain."""
    x: float            # Rear axle centre
    y: float
    heading: float      # World heading in radians
    hitch_x: float      # Pivot point on the unit ahead
    hitch_y: float
    
    def get_state(self) -> dict:
        """Get pose as a dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "heading_rad": self.heading,
            "heading_deg": float(np.degrees(wrap_angle(self.heading))),
            "hitch_x": self.hitch_x,
            "hitch_y": self.hitch_y,
        }


def wrap_angle(angle: float) -> float:
    """Wrap an angle into [-pi, pi)."""
    return float((angle + np.pi) % (2 * np.pi) - np.pi)


def world_headings(car: CarState, trailers: Sequence[TrailerState]) -> List[float]:
    """World heading of the car followed by each trailer.
    
    Each trailer's heading is the running sum of relative angles from
    the car outward.
    """
    headings = [car.theta]
    for trailer in trailers:
        headings.append(headings[-1] + trailer.theta)
    return headings


def compose_chain(car: CarState, trailers: Sequence[TrailerState]) -> List[UnitPose]:
    """Build world poses for the car and every trailer.
    
    Args:
        car: Car state
        trailers: Trailer chain, index 0 hitched to the car
        
    Returns:
        List of poses, index 0 is the car, index i + 1 is trailer i
    """
    headings = world_headings(car, trailers)
    poses = [UnitPose(car.x, car.y, car.theta, car.x, car.y)]
    
    for trailer, heading in zip(trailers, headings[1:]):
        ahead = poses[-1]
        length = trailer.geometry.wheelbase
        poses.append(UnitPose(
            x=ahead.x - length * np.cos(heading),
            y=ahead.y - length * np.sin(heading),
            heading=heading,
            hitch_x=ahead.x,
            hitch_y=ahead.y,
        ))
    
    return poses
