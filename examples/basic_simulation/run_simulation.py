#!/usr/bin/env python3
"""
Basic Simulation Example

This example demonstrates how to:
1. Create a car and hitch two trailers
2. Drive it from a simulated millisecond frame clock
3. Read snapshots the way a renderer would

Run with: python run_simulation.py
"""

import logging
import sys

import numpy as np

from hitchsim import Simulator, SimulatorConfig, VehicleGeometry, ControlInputs


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    
    print("=" * 60)
    print("HitchSim Basic Simulation Example")
    print("=" * 60)
    
    # Step 1: Build the vehicle
    print("\n1. Setting up simulation...")
    sim = Simulator(SimulatorConfig(time_scale=0.001, initial_theta=np.pi / 2))
    sim.append_trailer(VehicleGeometry(wheelbase=2.5, gauge=1.4, box_length=3.0))
    sim.append_trailer(VehicleGeometry(wheelbase=2.0, gauge=1.4, box_length=2.5))
    print(f"   Trailers hitched: {sim.trailer_count}")
    
    # Step 2: Drive from a 60 Hz frame clock (timestamps in ms)
    print("\n2. Driving (600 frames at 60 Hz = 10 seconds)...")
    frame_ms = 1000.0 / 60.0
    for frame in range(600):
        if frame < 120:
            inputs = ControlInputs.from_keys(up=True)
        elif frame < 180:
            inputs = ControlInputs.from_keys(up=True, left=True)
        elif frame < 420:
            inputs = ControlInputs.from_keys(up=True)
        else:
            inputs = ControlInputs.from_keys(up=True, right=True)
        
        sim.tick(frame * frame_ms, inputs)
        
        if (frame + 1) % 120 == 0:
            steering = sim.steering()
            radius = "straight" if steering.is_straight else f"{steering.turning_radius:.2f}"
            print(f"   Frame {frame + 1}: pos = ({sim.car.x:.2f}, {sim.car.y:.2f}), "
                  f"phi = {np.degrees(sim.car.phi):.1f} deg, radius = {radius}")
    
    # Step 3: Snapshot for rendering
    print("\n3. Final snapshot:")
    snapshot = sim.snapshot()
    for index, pose in enumerate(snapshot.poses):
        name = "car" if index == 0 else f"trailer {index - 1}"
        print(f"   {name:<10} axle = ({pose.x:.2f}, {pose.y:.2f}), "
              f"heading = {np.degrees(pose.heading):.1f} deg")
    print(f"   Front wheels: left = {np.degrees(snapshot.steering.front_left_angle):.1f} deg, "
          f"right = {np.degrees(snapshot.steering.front_right_angle):.1f} deg")
    print(f"   Simulation time: {snapshot.time:.2f} seconds")
    
    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
