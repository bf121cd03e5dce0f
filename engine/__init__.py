"""Traffic tracking and analysis engine components."""

from .adapters import from_supervision, to_supervision
from .detection import Detection
from .geometry import calculate_iou, get_centroid
from .kalman import MotionFilter
from .speed import SpeedEstimator
from .state import LaneStatus, Track
from .tracker import TrafficTracker
from .vehicle import SpeedCategory, VehicleClass
from .violations import Violation, ViolationChecker, collect_violations

__all__ = [
    "from_supervision",
    "to_supervision",
    "Detection",
    "calculate_iou",
    "get_centroid",
    "MotionFilter",
    "SpeedEstimator",
    "LaneStatus",
    "Track",
    "TrafficTracker",
    "SpeedCategory",
    "VehicleClass",
    "Violation",
    "ViolationChecker",
    "collect_violations",
]
