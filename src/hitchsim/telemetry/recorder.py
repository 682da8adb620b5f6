"""
Telemetry recorder - Records simulator telemetry over time.

Provides:
- Standard car and steering channels
- Trailer angle channels created as trailers are hitched
- Sample-rate limiting
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Any, Optional
import math

from hitchsim.telemetry.channel import TelemetryChannel, ChannelConfig
from hitchsim.simulation.simulator import Simulator


_STEER_LIMIT_DEG = 90.0

STANDARD_CHANNELS = {
    # Pose
    "x": ChannelConfig("x", "m"),
    "y": ChannelConfig("y", "m"),
    "theta": ChannelConfig("theta", "deg", -1e6, 1e6, 2),
    
    # Controls
    "speed": ChannelConfig("speed", "m/s", -100, 100, 3),
    "phi": ChannelConfig("phi", "deg", -_STEER_LIMIT_DEG, _STEER_LIMIT_DEG, 2),
    
    # Steering geometry
    "curvature": ChannelConfig("curvature", "1/m", -100, 100, 4),
    "front_left_angle": ChannelConfig("front_left_angle", "deg", -_STEER_LIMIT_DEG, _STEER_LIMIT_DEG, 2),
    "front_right_angle": ChannelConfig("front_right_angle", "deg", -_STEER_LIMIT_DEG, _STEER_LIMIT_DEG, 2),
}


def trailer_channel_name(index: int) -> str:
    """Channel name for a trailer's relative angle."""
    return f"trailer_{index}_theta"


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    sample_rate_hz: float = 60.0         # Recording frequency
    channels: List[str] | None = None    # Channels to record (None = all)
    record_trailers: bool = True         # Add a channel per trailer
    buffer_size: int = 100000            # Per-channel buffer size


class TelemetryRecorder:
    """Records simulator telemetry at a fixed sample rate.
    
    Usage:
        recorder = TelemetryRecorder(simulator=sim)
        while driving:
            sim.tick(now, inputs)
            recorder.record(sim.time)
    """
    
    def __init__(
        self,
        config: RecorderConfig | None = None,
        simulator: Simulator | None = None,
    ):
        """Initialize recorder.
        
        Args:
            config: Recorder configuration
            simulator: Simulator to record (can be set later)
        """
        self.config = config or RecorderConfig()
        self._simulator = simulator
        
        self._channels: Dict[str, TelemetryChannel] = {}
        self._setup_channels()
        
        self._last_sample_time: Optional[float] = None
        self._sample_interval: float = 1.0 / self.config.sample_rate_hz
    
    def _setup_channels(self) -> None:
        """Set up the standard channels."""
        channel_names = self.config.channels or list(STANDARD_CHANNELS.keys())
        
        for name in channel_names:
            self._add_channel(name)
    
    def _add_channel(self, name: str) -> TelemetryChannel:
        if name in STANDARD_CHANNELS:
            cfg = replace(STANDARD_CHANNELS[name], buffer_size=self.config.buffer_size)
        else:
            cfg = ChannelConfig(name=name, unit="deg", buffer_size=self.config.buffer_size)
        channel = TelemetryChannel(cfg)
        self._channels[name] = channel
        return channel
    
    def set_simulator(self, simulator: Simulator) -> None:
        """Set the simulator to record."""
        self._simulator = simulator
    
    @property
    def channels(self) -> Dict[str, TelemetryChannel]:
        """Get all channels."""
        return self._channels
    
    def get_channel(self, name: str) -> Optional[TelemetryChannel]:
        """Get channel by name."""
        return self._channels.get(name)
    
    def record(self, time: float, telemetry: Dict[str, Any] | None = None) -> bool:
        """Record telemetry at the given simulation time.
        
        Args:
            time: Current simulation time
            telemetry: Telemetry dict (fetched from the simulator if None)
            
        Returns:
            True if a sample was recorded
        """
        # Time running backwards means the simulator was reset
        if (
            self._last_sample_time is not None
            and 0.0 <= time - self._last_sample_time < self._sample_interval
        ):
            return False
        
        if telemetry is None and self._simulator is not None:
            telemetry = self._simulator.get_telemetry()
        
        if telemetry is None:
            return False
        
        self._last_sample_time = time
        self._record_from_telemetry(time, telemetry)
        return True
    
    def _record_from_telemetry(self, time: float, telemetry: Dict[str, Any]) -> None:
        """Extract values from telemetry and record to channels."""
        state = telemetry.get("state", {})
        steering = telemetry.get("steering", {})
        
        channel_values = {
            "x": state.get("x", 0.0),
            "y": state.get("y", 0.0),
            "theta": state.get("theta_deg", 0.0),
            "speed": state.get("speed", 0.0),
            "phi": state.get("phi_deg", 0.0),
            "curvature": steering.get("curvature", 0.0),
            "front_left_angle": math.degrees(steering.get("front_left_angle", 0.0)),
            "front_right_angle": math.degrees(steering.get("front_right_angle", 0.0)),
        }
        
        if self.config.record_trailers:
            for index, trailer in enumerate(telemetry.get("trailers", [])):
                name = trailer_channel_name(index)
                if name not in self._channels:
                    self._add_channel(name)
                channel_values[name] = trailer.get("theta_deg", 0.0)
        
        for name, value in channel_values.items():
            if name in self._channels:
                self._channels[name].record(time, value)
    
    def get_current_values(self) -> Dict[str, float]:
        """Get most recent value from each channel."""
        return {name: ch.last_value for name, ch in self._channels.items()}
    
    def get_statistics(self) -> Dict[str, Dict[str, Any]]:
        """Get statistics for all channels."""
        return {name: ch.get_state() for name, ch in self._channels.items()}
    
    def clear(self) -> None:
        """Clear all recorded data."""
        for channel in self._channels.values():
            channel.clear()
        self._last_sample_time = None
    
    def get_state(self) -> dict:
        """Get recorder state.
        
        Returns:
            Dictionary containing recorder state
        """
        return {
            "sample_rate_hz": self.config.sample_rate_hz,
            "total_samples": sum(ch.count for ch in self._channels.values()),
            "channels": self.get_statistics(),
        }
