"""Shared fixtures for the tracker test suite."""

from collections import deque

import pytest

from config import TrackerConfig
from engine.geometry import get_centroid, get_height
from engine.kalman import MotionFilter
from engine.state import Track
from engine.tracker import TrafficTracker
from engine.vehicle import VehicleClass


@pytest.fixture
def config():
    return TrackerConfig()


@pytest.fixture
def tracker(config):
    return TrafficTracker(config)


@pytest.fixture
def make_track():
    """Factory for tracks with a chosen filter velocity and displayed speed."""

    def _make(track_id=1, label="car", box=(400, 400, 500, 500), velocity=0.0, speed=0, signed=None):
        box = list(box)
        centroid = get_centroid(box)
        motion = MotionFilter(centroid[1])
        motion.state[1] = velocity
        return Track(
            track_id=track_id,
            label=label,
            vehicle_class=VehicleClass.from_label(label),
            created_at=0.0,
            updated_at=0.0,
            box=box,
            centroid=centroid,
            avg_height=get_height(box),
            motion=motion,
            speed=speed,
            velocity=float(speed) if signed is None else signed,
            lane_history=deque([centroid[0]], maxlen=10),
        )

    return _make
