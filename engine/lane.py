"""Lane discipline analysis from recent lateral positions."""

from typing import Sequence

from .state import LaneStatus


def classify_lane_status(
    lane_history: Sequence[float],
    current: LaneStatus,
    window: int = 5,
    threshold: float = 0.05,
) -> LaneStatus:
    """
    Classify lane behavior from recent normalized x-centroids.

    A lateral spread above the threshold (0.05 is 5% of frame width) within
    the last `window` samples is a lane change. With fewer samples the
    current status is kept.
    """
    if len(lane_history) < window:
        return current

    recent = list(lane_history)[-window:]
    if max(recent) - min(recent) > threshold:
        return LaneStatus.LANE_CHANGE
    return LaneStatus.STABLE
