"""
Kinematics - Discrete-time integration of the car and its trailer chain.

Provides:
- Timestep validation
- Bicycle-model car update (forward Euler)
- Relative-heading propagation through the trailer chain
"""

import math
from typing import Sequence
import numpy as np

from hitchsim.errors import InvalidTimestep
from hitchsim.vehicle.state import CarState, TrailerState, VehicleGeometry


def validate_timestep(dt: float) -> float:
    """Check an elapsed time.
    
    Args:
        dt: Elapsed time in seconds
        
    Returns:
        The timestep, unchanged
        
    Raises:
        InvalidTimestep: If dt is negative or not finite
    """
    if not math.isfinite(dt) or dt < 0:
        raise InvalidTimestep(dt)
    return dt


def advance_car(car: CarState, geometry: VehicleGeometry, dt: float) -> float:
    """Advance the car pose one step with the bicycle model.
    
    Args:
        car: Car state, updated in place
        geometry: Car geometry
        dt: Time step in seconds
        
    Returns:
        Heading increment applied to the car
    """
    distance = dt * car.s
    car.x += float(distance * np.cos(car.theta))
    car.y += float(distance * np.sin(car.theta))
    
    dtheta = float(distance / geometry.wheelbase * np.tan(car.phi))
    car.theta += dtheta
    return dtheta


def advance_trailers(
    trailers: Sequence[TrailerState],
    speed: float,
    dt: float,
    dtheta: float,
) -> None:
    """Propagate the heading update through the trailer chain.
    
    Each trailer's world yaw increment comes from the speed of its hitch
    point, which shrinks by cos(theta_j) at every joint ahead of it. The
    stored relative angle changes by that increment minus the increment
    of the unit ahead. Trailers must be processed front to back.
    
    Args:
        trailers: Trailer chain, updated in place
        speed: Car speed for this step
        dt: Time step in seconds
        dtheta: Heading increment of the car for this step
    """
    cumulative = dtheta
    product = 1.0
    
    for trailer in trailers:
        theta = trailer.theta
        raw = (dt * speed / trailer.geometry.wheelbase) * product * np.sin(-theta)
        increment = raw - cumulative
        cumulative += increment
        trailer.theta = float(theta + increment)
        
        # Pre-update angle feeds the hitch speed of the next trailer
        product *= np.cos(-theta)


def integrate(
    car: CarState,
    geometry: VehicleGeometry,
    trailers: Sequence[TrailerState],
    dt: float,
) -> float:
    """Advance the car and its trailers by one step.
    
    Speed and steer angle must already be set for this step.
    
    Args:
        car: Car state, updated in place
        geometry: Car geometry
        trailers: Trailer chain, updated in place
        dt: Time step in seconds
        
    Returns:
        Heading increment of the car (0.0 for a zero step)
        
    Raises:
        InvalidTimestep: If dt is negative or not finite
    """
    validate_timestep(dt)
    if dt == 0:
        return 0.0
    
    dtheta = advance_car(car, geometry, dt)
    advance_trailers(trailers, car.s, dt, dtheta)
    return dtheta
