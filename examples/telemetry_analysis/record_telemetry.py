#!/usr/bin/env python3
"""
Telemetry Analysis Example

This example demonstrates how to:
1. Record telemetry while reversing a trailer
2. Inspect channel statistics
3. Export telemetry to CSV, JSON and NumPy formats

Run with: python record_telemetry.py
"""

from pathlib import Path

from hitchsim import Simulator, ControlInputs
from hitchsim.telemetry import TelemetryRecorder, TelemetryExporter
from hitchsim.telemetry.exporter import ExporterConfig


def main():
    print("=" * 60)
    print("HitchSim Telemetry Recording Example")
    print("=" * 60)
    
    output_dir = Path(__file__).parent / "output"
    
    # Step 1: Setup simulation
    print("\n1. Setting up simulation...")
    sim = Simulator()
    sim.append_trailer()
    recorder = TelemetryRecorder(simulator=sim)
    print(f"   Recording {len(recorder.channels)} channels")
    print(f"   Sample rate: {recorder.config.sample_rate_hz} Hz")
    
    # Step 2: Pull forward through a bend, then back up
    print("\n2. Running simulation (1000 steps at 100 Hz)...")
    for step in range(1000):
        if step < 300:
            inputs = ControlInputs.from_keys(up=True, left=step < 100)
        elif step < 600:
            inputs = ControlInputs.from_keys(up=True, right=step < 450)
        else:
            inputs = ControlInputs.from_keys(down=True)
        
        sim.step(inputs, 0.01)
        recorder.record(sim.time)
    
    # Step 3: Statistics
    print("\n3. Channel statistics:")
    for name, stats in recorder.get_statistics().items():
        print(f"   {name:<18} min = {stats['min']}, max = {stats['max']}, last = {stats['last']} {stats['unit']}")
    
    # Step 4: Export
    print("\n4. Exporting...")
    exporter = TelemetryExporter(ExporterConfig(output_dir=str(output_dir)))
    print(f"   CSV:   {exporter.export_csv(recorder)}")
    print(f"   JSON:  {exporter.export_json(recorder)}")
    print(f"   NumPy: {exporter.export_numpy(recorder)}")


if __name__ == "__main__":
    main()
