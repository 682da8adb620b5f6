"""Tests for world-pose composition of the trailer chain."""

import math

import pytest

from hitchsim.vehicle.state import CarState, TrailerState, VehicleGeometry
from hitchsim.vehicle.chain import compose_chain, world_headings, wrap_angle


def _trailer(length: float, theta: float) -> TrailerState:
    return TrailerState(geometry=VehicleGeometry(wheelbase=length), theta=theta)


class TestWorldHeadings:
    """Test heading composition."""
    
    def test_car_only(self):
        assert world_headings(CarState(theta=0.4), []) == [0.4]
        
    def test_relative_angles_accumulate(self):
        car = CarState(theta=1.0)
        trailers = [_trailer(3.0, -0.25), _trailer(2.0, 0.5)]
        
        headings = world_headings(car, trailers)
        
        assert headings == pytest.approx([1.0, 0.75, 1.25])


class TestComposeChain:
    """Test world pose reconstruction."""
    
    def test_car_pose(self):
        poses = compose_chain(CarState(x=1.0, y=2.0, theta=0.3), [])
        
        assert len(poses) == 1
        assert (poses[0].x, poses[0].y, poses[0].heading) == (1.0, 2.0, 0.3)
        
    def test_trailer_pivots_on_unit_ahead(self):
        """A trailer at a right angle hangs off to the side of the car."""
        car = CarState(x=0.0, y=0.0, theta=0.0)
        poses = compose_chain(car, [_trailer(2.0, -math.pi / 2)])
        
        trailer = poses[1]
        assert (trailer.hitch_x, trailer.hitch_y) == (0.0, 0.0)
        assert trailer.heading == pytest.approx(-math.pi / 2)
        assert (trailer.x, trailer.y) == pytest.approx((0.0, 2.0))
        
    def test_hitch_distances_match_wheelbases(self):
        car = CarState(x=5.0, y=-3.0, theta=2.0)
        trailers = [_trailer(3.0, 0.4), _trailer(1.5, -0.7), _trailer(2.0, 0.1)]
        
        poses = compose_chain(car, trailers)
        
        for trailer, pose, ahead in zip(trailers, poses[1:], poses):
            assert (pose.hitch_x, pose.hitch_y) == (ahead.x, ahead.y)
            distance = math.hypot(pose.x - ahead.x, pose.y - ahead.y)
            assert distance == pytest.approx(trailer.geometry.wheelbase)


class TestWrapAngle:
    """Test angle wrapping for display."""
    
    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0),
        (math.pi / 2, math.pi / 2),
        (3 * math.pi / 2, -math.pi / 2),
        (-5 * math.pi / 2, -math.pi / 2),
    ])
    def test_wrap(self, angle, expected):
        assert wrap_angle(angle) == pytest.approx(expected)
