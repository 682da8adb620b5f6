"""
Telemetry channel - Single time series of one recorded quantity.

Provides:
- Buffered data storage
- Running statistics
- Time-range queries
"""

from dataclasses import dataclass
from typing import List
import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a telemetry channel."""
    name: str = "unnamed"
    unit: str = ""
    min_value: float = float('-inf')
    max_value: float = float('inf')
    precision: int = 4
    buffer_size: int = 10000


class TelemetryChannel:
    """Single telemetry data channel.
    
    Stores time-series data for one measurement. Statistics cover the
    samples currently held in the buffer.
    """
    
    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.
        
        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        if config is None:
            config = ChannelConfig(name=name)
        self.config = config
        
        self._times: List[float] = []
        self._values: List[float] = []
    
    @property
    def name(self) -> str:
        """Channel name."""
        return self.config.name
    
    @property
    def count(self) -> int:
        """Number of buffered samples."""
        return len(self._values)
    
    @property
    def min_value(self) -> float:
        """Minimum buffered value."""
        return min(self._values) if self._values else 0.0
    
    @property
    def max_value(self) -> float:
        """Maximum buffered value."""
        return max(self._values) if self._values else 0.0
    
    @property
    def mean(self) -> float:
        """Mean of buffered values."""
        return float(np.mean(self._values)) if self._values else 0.0
    
    @property
    def last_value(self) -> float:
        """Most recent value."""
        return self._values[-1] if self._values else 0.0
    
    def record(self, time: float, value: float) -> None:
        """Record a new value, clamped to the channel range.
        
        Args:
            time: Simulation time in seconds
            value: Value to record
        """
        value = float(np.clip(value, self.config.min_value, self.config.max_value))
        
        self._times.append(time)
        self._values.append(value)
        
        if len(self._values) > self.config.buffer_size:
            self._values.pop(0)
            self._times.pop(0)
    
    def get_values(self) -> np.ndarray:
        """Get all buffered values."""
        return np.array(self._values)
    
    def get_times(self) -> np.ndarray:
        """Get all buffered timestamps."""
        return np.array(self._times)
    
    def get_last_n(self, n: int) -> np.ndarray:
        """Get the last N values."""
        return np.array(self._values[-n:])
    
    def get_range(self, start_time: float, end_time: float) -> tuple[np.ndarray, np.ndarray]:
        """Get values in a time range (inclusive).
        
        Args:
            start_time: Start of range
            end_time: End of range
            
        Returns:
            Tuple of (times, values) arrays
        """
        times = np.array(self._times)
        values = np.array(self._values)
        
        mask = (times >= start_time) & (times <= end_time)
        return times[mask], values[mask]
    
    def clear(self) -> None:
        """Clear all recorded data."""
        self._times.clear()
        self._values.clear()
    
    def get_state(self) -> dict:
        """Get channel summary.
        
        Returns:
            Dictionary with channel statistics, None values when empty
        """
        precision = self.config.precision
        empty = not self._values
        return {
            "name": self.config.name,
            "unit": self.config.unit,
            "count": self.count,
            "min": None if empty else round(self.min_value, precision),
            "max": None if empty else round(self.max_value, precision),
            "mean": None if empty else round(self.mean, precision),
            "last": None if empty else round(self.last_value, precision),
        }
