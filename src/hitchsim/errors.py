"""
Errors - Exception types raised by the simulator core.

Provides:
- GeometryError: invalid vehicle or steering configuration
- InvalidTimestep: negative or non-finite elapsed time
"""


class HitchSimError(Exception):
    """Base class for all simulator errors."""


class GeometryError(HitchSimError, ValueError):
    """Vehicle geometry cannot produce a valid steering configuration.

    Raised for non-positive dimensions and for Ackermann requests whose
    turning radius is not larger than half the track gauge.
    """


class InvalidTimestep(HitchSimError, ValueError):
    """Elapsed time is negative or not finite."""

    def __init__(self, dt: float):
        super().__init__(f"Invalid timestep: {dt!r}")
        self.dt = dt
