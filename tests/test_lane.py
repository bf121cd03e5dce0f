"""Tests for lane status classification."""

from engine.lane import classify_lane_status
from engine.state import LaneStatus


def test_short_history_keeps_current_status():
    assert classify_lane_status([0.1, 0.5, 0.9], LaneStatus.STABLE) is LaneStatus.STABLE
    assert classify_lane_status([0.1, 0.1], LaneStatus.LANE_CHANGE) is LaneStatus.LANE_CHANGE


def test_lateral_spread_above_threshold_is_lane_change():
    history = [0.40, 0.42, 0.43, 0.45, 0.46]
    assert classify_lane_status(history, LaneStatus.STABLE) is LaneStatus.LANE_CHANGE


def test_small_spread_is_stable():
    history = [0.40, 0.41, 0.42, 0.43, 0.44]
    assert classify_lane_status(history, LaneStatus.LANE_CHANGE) is LaneStatus.STABLE


def test_only_recent_window_counts():
    history = [0.1, 0.5, 0.5, 0.51, 0.5, 0.52]
    assert classify_lane_status(history, LaneStatus.STABLE) is LaneStatus.STABLE


def test_merging_is_never_assigned():
    histories = [[0.5] * 5, [0.1, 0.2, 0.3, 0.4, 0.5], [0.5, 0.5]]
    for history in histories:
        assert classify_lane_status(history, LaneStatus.STABLE) is not LaneStatus.MERGING
