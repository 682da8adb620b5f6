"""
Telemetry exporter - Export recorded telemetry to files.

Provides:
- CSV export on a shared time base
- JSON export
- NumPy compressed export
"""

from dataclasses import dataclass
from typing import List
from pathlib import Path
import json
import csv
import numpy as np

from hitchsim.telemetry.channel import TelemetryChannel
from hitchsim.telemetry.recorder import TelemetryRecorder


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""
    
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@dataclass
class ExporterConfig:
    """Exporter configuration."""
    output_dir: str = "./telemetry_data"
    include_metadata: bool = True
    time_tolerance: float = 1e-6     # Max time offset when aligning CSV rows


class TelemetryExporter:
    """Export telemetry data to files for analysis in external tools."""
    
    def __init__(self, config: ExporterConfig | None = None):
        """Initialize exporter.
        
        Args:
            config: Exporter configuration
        """
        self.config = config or ExporterConfig()
        
        self._output_path = Path(self.config.output_dir)
        self._output_path.mkdir(parents=True, exist_ok=True)
    
    @property
    def output_path(self) -> Path:
        """Directory files are written to."""
        return self._output_path
    
    def export_csv(
        self,
        recorder: TelemetryRecorder,
        filename: str = "telemetry.csv",
        channels: List[str] | None = None,
    ) -> Path:
        """Export telemetry to a CSV file.
        
        Rows are the union of all channel timestamps. A cell is left
        empty when the channel has no sample at that time.
        
        Args:
            recorder: Telemetry recorder with data
            filename: Output filename
            channels: Channels to export (None = all)
            
        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        
        if channels is None:
            channels = list(recorder.channels.keys())
        
        selected = [recorder.get_channel(name) for name in channels]
        
        all_times = set()
        for ch in selected:
            if ch:
                all_times.update(ch.get_times().tolist())
        times = np.array(sorted(all_times))
        
        columns = [self._align(ch, times) for ch in selected]
        
        with open(output_file, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(["time"] + channels)
            
            for i, t in enumerate(times):
                writer.writerow([f"{t:.4f}"] + [column[i] for column in columns])
        
        return output_file
    
    def _align(self, ch: TelemetryChannel | None, times: np.ndarray) -> List[str]:
        """Format a channel's values on a shared time base.
        
        Uses the nearest sample within the time tolerance, else an
        empty cell.
        """
        if ch is None or ch.count == 0:
            return [""] * len(times)
        
        ch_times = ch.get_times()
        order = np.argsort(ch_times, kind="stable")
        ch_times = ch_times[order]
        ch_values = ch.get_values()[order]
        
        right = np.clip(np.searchsorted(ch_times, times), 0, len(ch_times) - 1)
        left = np.clip(right - 1, 0, len(ch_times) - 1)
        nearest = np.where(
            np.abs(ch_times[left] - times) <= np.abs(ch_times[right] - times), left, right
        )
        
        precision = ch.config.precision
        cells = []
        for t, idx in zip(times, nearest):
            if abs(ch_times[idx] - t) > self.config.time_tolerance:
                cells.append("")
            else:
                cells.append(f"{ch_values[idx]:.{precision}f}")
        return cells
    
    def export_json(
        self,
        recorder: TelemetryRecorder,
        filename: str = "telemetry.json",
    ) -> Path:
        """Export telemetry to a JSON file.
        
        Args:
            recorder: Telemetry recorder with data
            filename: Output filename
            
        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        
        data = {
            "metadata": recorder.get_state() if self.config.include_metadata else {},
            "channels": {},
        }
        
        for name, channel in recorder.channels.items():
            data["channels"][name] = {
                "unit": channel.config.unit,
                "times": channel.get_times(),
                "values": channel.get_values(),
            }
        
        with open(output_file, 'w') as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)
        
        return output_file
    
    def export_numpy(
        self,
        recorder: TelemetryRecorder,
        filename: str = "telemetry.npz",
    ) -> Path:
        """Export telemetry to a NumPy compressed file.
        
        Args:
            recorder: Telemetry recorder with data
            filename: Output filename
            
        Returns:
            Path to exported file
        """
        output_file = self._output_path / filename
        
        arrays = {}
        for name, channel in recorder.channels.items():
            arrays[f"{name}_times"] = channel.get_times()
            arrays[f"{name}_values"] = channel.get_values()
        
        np.savez_compressed(output_file, **arrays)
        
        return output_file
