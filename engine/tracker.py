"""Multi-object tracker turning per-frame detections into stable vehicle tracks."""

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from config import TrackerConfig
from .detection import Detection
from .geometry import (
    Box,
    calculate_iou,
    centroid_distance,
    get_centroid,
    get_height,
    normalize_box,
)
from .kalman import MotionFilter
from .lane import classify_lane_status
from .speed import SpeedEstimator
from .state import LaneStatus, Track
from .vehicle import VehicleClass
from .violations import ViolationChecker

logger = logging.getLogger(__name__)


class TrafficTracker:
    """
    Greedy IoU tracker with per-track motion filtering.

    Each call to `update` runs, in order:
    1. Age every track by one missing frame
    2. Associate tracks with detections, in track creation order
    3. Update matched tracks (filter, geometry, speed, lane status)
    4. Create tracks for unclaimed vehicle detections
    5. Check violations for every track seen this frame
    6. Evict tracks missing for too long

    Association is greedy: a track earlier in the list claims its best
    detection first and later tracks cannot take it. IoU matches always
    win over the centroid-distance fallback.

    Not thread-safe; frames for one instance must be fed sequentially.
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        """
        Initialize the tracker.

        Args:
            config: Tunable parameters (defaults when omitted)
        """
        self.config = config or TrackerConfig()
        self.speed_estimator = SpeedEstimator(self.config)
        self.violation_checker = ViolationChecker(self.config)

        self._tracks: List[Track] = []
        self._next_id = 1

        logger.info("TrafficTracker initialized.")

    @property
    def tracks(self) -> List[Track]:
        """Live tracks in creation order."""
        return list(self._tracks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def get_track(self, track_id: int) -> Optional[Track]:
        """
        Get a live track by identifier.

        Returns:
            Track if still live, None otherwise
        """
        for track in self._tracks:
            if track.track_id == track_id:
                return track
        return None

    def update(self, detections: List[Detection], timestamp: float) -> List[Detection]:
        """
        Process one frame.

        Args:
            detections: Every detection in the frame; only vehicle detections
                with a usable box are tracked, the rest pass through untouched
            timestamp: Frame time in milliseconds, non-decreasing

        Returns:
            The same list, with tracked detections annotated in place
        """
        candidates: List[Tuple[Detection, Box]] = []
        for det in detections:
            if det.is_trackable:
                candidates.append((det, normalize_box(det.box)))

        # 1. Prediction step (age tracks)
        for track in self._tracks:
            track.frames_missing += 1

        # 2. Matching step (greedy association)
        unclaimed = list(range(len(candidates)))
        seen: List[Tuple[Detection, Track]] = []

        for track in self._tracks:
            index = self._find_match(track, candidates, unclaimed)
            if index is None:
                continue
            unclaimed.remove(index)
            det, box = candidates[index]

            # 3. Update matched track
            self._update_track(track, box, timestamp)
            self._annotate(det, track)
            seen.append((det, track))

        # 4. Creation step (new tracks)
        for index in unclaimed:
            det, box = candidates[index]
            track = self._create_track(det, box, timestamp)
            self._annotate(det, track)
            seen.append((det, track))

        # 5. Analysis step (violations)
        flow = self.violation_checker.dominant_flow(self._tracks)
        for det, track in seen:
            det.is_speeding, det.is_wrong_way = self.violation_checker.check(track, flow)

        # 6. Cleanup step
        self._cleanup_stale()

        return detections

    def reset(self) -> None:
        """Drop all tracks and restart identifiers at 1."""
        self._tracks = []
        self._next_id = 1
        logger.info("TrafficTracker reset")

    def _find_match(
        self,
        track: Track,
        candidates: List[Tuple[Detection, Box]],
        unclaimed: List[int],
    ) -> Optional[int]:
        """
        Pick the best unclaimed detection for a track.

        Returns:
            Index into candidates, or None when nothing is close enough
        """
        best_iou_index: Optional[int] = None
        best_iou = -1.0
        best_dist_index: Optional[int] = None
        best_dist_score = -1.0

        for index in unclaimed:
            box = candidates[index][1]

            # Priority 1: IoU
            iou = calculate_iou(track.box, box)
            if iou > self.config.iou_threshold and iou > best_iou:
                best_iou = iou
                best_iou_index = index

            # Priority 2: centroid distance (backup for fast moving objects)
            if best_iou_index is None:
                dist = centroid_distance(get_centroid(box), track.centroid)
                if dist < self.config.centroid_distance_threshold:
                    score = (1 - dist) * self.config.distance_score_weight
                    if score > best_dist_score:
                        best_dist_score = score
                        best_dist_index = index

        if best_iou_index is not None:
            return best_iou_index
        return best_dist_index

    def _update_track(self, track: Track, box: Box, timestamp: float) -> None:
        """Fold a matched detection into the track state."""
        track.frames_missing = 0

        dt = (timestamp - track.updated_at) / 1000
        track.updated_at = timestamp

        centroid = get_centroid(box)
        height = get_height(box)

        # Duplicate-timestamp frames only move the position
        if dt > self.config.min_dt:
            track.motion.update(centroid[1], dt)
        else:
            track.motion.snap(centroid[1])

        track.box = list(box)
        track.centroid = centroid
        smoothing = self.config.height_smoothing
        track.avg_height = track.avg_height * smoothing + height * (1 - smoothing)

        self.speed_estimator.update(track)

        track.lane_history.append(centroid[0])
        track.lane_status = classify_lane_status(
            track.lane_history,
            track.lane_status,
            window=self.config.lane_window,
            threshold=self.config.lane_change_threshold,
        )

    def _create_track(self, det: Detection, box: Box, timestamp: float) -> Track:
        centroid = get_centroid(box)
        track = Track(
            track_id=self._next_id,
            label=det.label,
            vehicle_class=VehicleClass.from_label(det.label),
            created_at=timestamp,
            updated_at=timestamp,
            box=list(box),
            centroid=centroid,
            avg_height=get_height(box),
            motion=MotionFilter(
                centroid[1],
                measurement_noise=self.config.measurement_noise,
                process_noise_position=self.config.process_noise_position,
                process_noise_velocity=self.config.process_noise_velocity,
            ),
            speed_history=deque([0.0], maxlen=self.config.speed_history_size),
            lane_history=deque([centroid[0]], maxlen=self.config.lane_history_size),
        )
        self._next_id += 1
        self._tracks.append(track)
        logger.debug(f"New track {track.track_id} ({track.label})")
        return track

    @staticmethod
    def _annotate(det: Detection, track: Track) -> None:
        """Sync track data to the detection."""
        det.track_id = track.track_id
        det.smoothed_box = list(track.box)
        det.estimated_speed = track.speed
        det.velocity = track.velocity
        det.lane_event = track.lane_status.value
        det.speed_history = list(track.speed_history)

    def _cleanup_stale(self) -> None:
        """Remove tracks unmatched for more than the allowed number of frames."""
        live: List[Track] = []
        for track in self._tracks:
            if track.frames_missing > self.config.max_missing_frames:
                logger.debug(f"Track {track.track_id} evicted after {track.frames_missing} missing frames")
            else:
                live.append(track)
        self._tracks = live

    def summary(self) -> Dict[int, Dict]:
        """Serializable snapshot of every live track, keyed by identifier."""
        return {t.track_id: t.to_dict() for t in self._tracks}
