"""
Telemetry module - Recording and export of simulator data.

This module contains:
- TelemetryRecorder: Records vehicle state over time
- TelemetryChannel: Individual data channel
- TelemetryExporter: Export telemetry to various formats
"""

from hitchsim.telemetry.recorder import TelemetryRecorder, RecorderConfig
from hitchsim.telemetry.channel import TelemetryChannel, ChannelConfig
from hitchsim.telemetry.exporter import TelemetryExporter, ExporterConfig

__all__ = [
    "TelemetryRecorder",
    "RecorderConfig",
    "TelemetryChannel",
    "ChannelConfig",
    "TelemetryExporter",
    "ExporterConfig",
]
