"""Per-frame detections exchanged with the vision oracle."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import CATEGORY_VEHICLE
from .geometry import Box, normalize_box
from .vehicle import VehicleClass

logger = logging.getLogger(__name__)


@dataclass
class Detection:
    """
    One object reported in one frame.

    Input fields come from the oracle. The tracking fields stay at their
    defaults until the tracker matches or creates a track for the detection.
    """
    label: str
    box: Optional[Box] = None  # [ymin, xmin, ymax, xmax], 0-1000
    confidence: Optional[float] = None
    category: Optional[str] = None  # "vehicle", "pedestrian", "infrastructure", "other"

    # Tracking annotations
    track_id: Optional[int] = None
    smoothed_box: Optional[Box] = None
    estimated_speed: Optional[int] = None  # km/h
    velocity: Optional[float] = None  # signed km/h
    lane_event: Optional[str] = None
    is_speeding: bool = False
    is_wrong_way: bool = False
    speed_history: List[float] = field(default_factory=list)

    @property
    def is_trackable(self) -> bool:
        """Whether this detection takes part in association."""
        if normalize_box(self.box) is None:
            return False
        if self.category is not None:
            return str(self.category).lower() == CATEGORY_VEHICLE
        return VehicleClass.from_label(self.label).is_vehicle

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the oracle's JSON shape, including any annotations."""
        data: Dict[str, Any] = {"object": self.label, "box_2d": self.box}
        if self.confidence is not None:
            data["confidence"] = self.confidence
        if self.category is not None:
            data["type"] = self.category
        if self.track_id is not None:
            data.update({
                "trackId": self.track_id,
                "smoothedBox": self.smoothed_box,
                "estimatedSpeed": self.estimated_speed,
                "velocity": self.velocity,
                "laneEvent": self.lane_event,
                "isSpeeding": self.is_speeding,
                "isWrongWay": self.is_wrong_way,
                "speedHistory": list(self.speed_history),
            })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Detection":
        """Build from an oracle JSON record; malformed boxes become None."""
        box = normalize_box(data.get("box_2d"))
        if box is None and data.get("box_2d") is not None:
            logger.debug(f"Ignoring malformed box for '{data.get('object')}': {data.get('box_2d')}")

        confidence = data.get("confidence")
        return cls(
            label=str(data.get("object") or ""),
            box=box,
            confidence=float(confidence) if isinstance(confidence, (int, float)) else None,
            category=data.get("type"),
        )
