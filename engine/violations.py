"""Traffic rule violation checks with hysteresis."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np

from config import TrackerConfig
from .detection import Detection
from .state import Track
from .vehicle import SpeedCategory, VehicleClass

logger = logging.getLogger(__name__)


@dataclass
class Violation:
    """A violation raised for one tracked vehicle in one frame."""
    type: str  # "Speeding" | "Wrong Way"
    track_id: int
    description: str
    severity: str = "High"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "track_id": self.track_id,
            "description": self.description,
            "severity": self.severity,
        }


class ViolationChecker:
    """
    Speeding and wrong-way detection over tracked vehicles.

    Both checks use persistence counters so a single noisy frame cannot
    raise a flag. The speeding counter decays by one per compliant frame;
    the wrong-way counter resets as soon as the vehicle moves with the flow.
    """

    def __init__(self, config: TrackerConfig):
        self.config = config

    def dominant_flow(self, tracks: Iterable[Track]) -> float:
        """
        Average signed velocity (km/h) of moving tracks.

        Returns 0 when nothing moves faster than the flow threshold.
        """
        moving = [t.velocity for t in tracks if t.speed > self.config.flow_min_speed]
        if not moving:
            return 0.0
        return float(np.mean(moving))

    def speed_limit(self, vehicle_class: VehicleClass) -> float:
        """Speed limit in km/h for a vehicle class."""
        category = vehicle_class.speed_category
        if category == SpeedCategory.HEAVY:
            return self.config.speed_limit_heavy
        if category == SpeedCategory.LIGHT:
            return self.config.speed_limit_light
        return self.config.speed_limit_default

    def check(self, track: Track, flow: float) -> Tuple[bool, bool]:
        """
        Advance the track's counters for this frame.

        Args:
            track: Track matched or created this frame
            flow: Dominant flow direction from `dominant_flow`

        Returns:
            (is_speeding, is_wrong_way)
        """
        if track.speed > self.speed_limit(track.vehicle_class):
            track.speeding_frames += 1
            if track.speeding_frames == self.config.speeding_frames:
                logger.info(f"Track {track.track_id} ({track.label}) speeding at {track.speed} km/h")
        else:
            track.speeding_frames = max(0, track.speeding_frames - 1)

        # Needs significant flow and vehicle speed to be confident
        if abs(flow) > self.config.wrong_way_min_speed and track.speed > self.config.wrong_way_min_speed:
            if np.sign(track.velocity) != np.sign(flow):
                track.wrong_way_frames += 1
                if track.wrong_way_frames == self.config.wrong_way_frames:
                    logger.info(f"Track {track.track_id} ({track.label}) moving against traffic")
            else:
                track.wrong_way_frames = 0

        is_speeding = track.speeding_frames >= self.config.speeding_frames
        is_wrong_way = track.wrong_way_frames >= self.config.wrong_way_frames

        return is_speeding, is_wrong_way


def collect_violations(detections: Iterable[Detection]) -> List[Violation]:
    """Turn flagged detections into violation records for this frame."""
    violations: List[Violation] = []
    for det in detections:
        if det.track_id is None:
            continue
        if det.is_speeding:
            violations.append(Violation(
                type="Speeding",
                track_id=det.track_id,
                description=f"Vehicle #{det.track_id} speeding",
            ))
        if det.is_wrong_way:
            violations.append(Violation(
                type="Wrong Way",
                track_id=det.track_id,
                description=f"Vehicle #{det.track_id} wrong way",
            ))
    return violations
