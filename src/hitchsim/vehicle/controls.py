"""
Controls - Maps discrete driver commands onto speed and steer angle.

Steering is integrated at a fixed angular rate while a steer command is
held. Speed is set directly from the throttle command, without smoothing.
"""

from dataclasses import dataclass
from enum import Enum
import numpy as np

from hitchsim.vehicle.state import MAX_STEER


class SteerCommand(Enum):
    """Steering command."""
    NONE = 0
    LEFT = 1
    RIGHT = 2


class ThrottleCommand(Enum):
    """Throttle command."""
    NONE = 0
    FORWARD = 1
    REVERSE = 2


@dataclass
class ControlConfig:
    """Control mapping configuration."""
    steer_rate: float = 1.0          # rad/s while a steer command is held
    max_speed: float = 2.5           # units/s for forward/reverse
    max_steer: float = MAX_STEER     # Steering lock in radians


@dataclass
class ControlInputs:
    """Driver commands for a single tick."""
    steer: SteerCommand = SteerCommand.NONE
    throttle: ThrottleCommand = ThrottleCommand.NONE
    
    @classmethod
    def from_keys(
        cls,
        left: bool = False,
        right: bool = False,
        up: bool = False,
        down: bool = False,
    ) -> "ControlInputs":
        """Build inputs from held arrow keys.
        
        Opposite steer keys cancel out. Up takes precedence over down.
        """
        if left and not right:
            steer = SteerCommand.LEFT
        elif right and not left:
            steer = SteerCommand.RIGHT
        else:
            steer = SteerCommand.NONE
        
        if up:
            throttle = ThrottleCommand.FORWARD
        elif down:
            throttle = ThrottleCommand.REVERSE
        else:
            throttle = ThrottleCommand.NONE
        
        return cls(steer=steer, throttle=throttle)
    
    @property
    def is_idle(self) -> bool:
        """True when no command is held."""
        return self.steer is SteerCommand.NONE and self.throttle is ThrottleCommand.NONE


def clamp_steer(phi: float, max_steer: float = MAX_STEER) -> float:
    """Clamp a steer angle to the steering lock."""
    return float(np.clip(phi, -max_steer, max_steer))


def apply_controls(
    phi: float,
    inputs: ControlInputs,
    dt: float,
    config: ControlConfig | None = None,
) -> tuple[float, float]:
    """Compute speed and steer angle for this tick.
    
    Args:
        phi: Steer angle before this tick (radians)
        inputs: Driver commands
        dt: Elapsed time in seconds
        config: Control configuration. Uses defaults if None.
        
    Returns:
        Tuple of (speed, phi)
    """
    config = config or ControlConfig()
    
    if inputs.steer is SteerCommand.LEFT:
        phi += dt * config.steer_rate
    elif inputs.steer is SteerCommand.RIGHT:
        phi -= dt * config.steer_rate
    phi = clamp_steer(phi, config.max_steer)
    
    if inputs.throttle is ThrottleCommand.FORWARD:
        speed = config.max_speed
    elif inputs.throttle is ThrottleCommand.REVERSE:
        speed = -config.max_speed
    else:
        speed = 0.0
    
    return speed, phi
