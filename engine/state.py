"""State held by the engine for each tracked object."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Tuple

from constants import LANE_STABLE, LANE_CHANGE, LANE_MERGING
from .geometry import Box
from .kalman import MotionFilter
from .vehicle import VehicleClass


class LaneStatus(str, Enum):
    """Lane discipline of a tracked vehicle."""

    STABLE = LANE_STABLE
    LANE_CHANGE = LANE_CHANGE
    # Reserved for future inputs; never assigned from lateral history
    MERGING = LANE_MERGING


@dataclass
class Track:
    """
    The engine's belief about one physical object across frames.

    Owned exclusively by the tracker; the motion filter and histories
    belong to this track alone.
    """
    # Core identification
    track_id: int
    label: str
    vehicle_class: VehicleClass
    created_at: float  # ms
    updated_at: float  # ms

    # Geometry (current frame)
    box: Box
    centroid: Tuple[float, float]  # (x, y) normalized 0-1
    avg_height: float  # smoothed normalized height, depth proxy

    motion: MotionFilter
    frames_missing: int = 0

    # Speed
    speed: int = 0  # displayed km/h, non-negative
    velocity: float = 0.0  # signed km/h
    speed_history: Deque[float] = field(default_factory=lambda: deque([0.0], maxlen=20))

    # Lane discipline
    lane_history: Deque[float] = field(default_factory=lambda: deque(maxlen=10))
    lane_status: LaneStatus = LaneStatus.STABLE

    # Violation hysteresis counters
    speeding_frames: int = 0
    wrong_way_frames: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "track_id": self.track_id,
            "label": self.label,
            "vehicle_class": self.vehicle_class.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "box": list(self.box),
            "centroid": list(self.centroid),
            "frames_missing": self.frames_missing,
            "speed": self.speed,
            "velocity": self.velocity,
            "lane_status": self.lane_status.value,
            "speeding_frames": self.speeding_frames,
            "wrong_way_frames": self.wrong_way_frames,
        }
