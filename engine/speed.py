"""Calibrated speed estimation from filtered image-space velocity."""

import math

import numpy as np

from config import TrackerConfig
from .state import Track
from .vehicle import VehicleClass

MPS_TO_KMH = 3.6


class SpeedEstimator:
    """
    Converts a track's vertical velocity into real-world speed.

    Velocity (normalized units/s) divided by the object's apparent height
    gives speed in "object lengths per second". Multiplying by an assumed
    real-world length for the class gives meters per second:

        speed_mps = (|v| / height) * reference_length * perspective

    Vertical motion near the top of the frame (further away) is more
    foreshortened, so the perspective factor grows from the bottom of the
    frame to the top.
    """

    def __init__(self, config: TrackerConfig):
        self.config = config

    def reference_length(self, vehicle_class: VehicleClass) -> float:
        """Assumed real-world length in meters for a vehicle class."""
        return self.config.reference_lengths.get(
            vehicle_class.value, self.config.default_reference_length
        )

    def perspective_correction(self, centroid_y: float) -> float:
        """1.2x at the bottom of the frame, up to 2.0x at the top."""
        return self.config.perspective_base + (1.0 - centroid_y) * self.config.perspective_gain

    def instantaneous_speed(self, track: Track) -> float:
        """
        Speed in km/h from the track's current filter state.

        Returns 0 below the stationary noise floor.
        """
        safe_height = max(track.avg_height, self.config.min_height)
        speed_mps = (
            (abs(track.motion.velocity) / safe_height)
            * self.reference_length(track.vehicle_class)
            * self.perspective_correction(track.centroid[1])
        )
        if speed_mps < self.config.noise_floor_mps:
            return 0.0
        return speed_mps * MPS_TO_KMH

    def update(self, track: Track) -> None:
        """Record a new speed sample and refresh displayed speed and velocity."""
        track.speed_history.append(self.instantaneous_speed(track))

        window = self.config.speed_window
        recent = list(track.speed_history)[-window:]
        track.speed = int(math.floor(sum(recent) / len(recent)))
        track.velocity = float(track.speed * np.sign(track.motion.velocity)) if track.speed else 0.0
