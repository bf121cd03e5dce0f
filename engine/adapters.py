"""Conversion between supervision detections and tracker detections."""

from typing import Dict, List, Optional, Tuple

import numpy as np
import supervision as sv

from constants import COCO_CLASSES, COORDINATE_SCALE
from .detection import Detection


def from_supervision(
    detections: sv.Detections,
    frame_shape: Tuple[int, ...],
    class_names: Optional[Dict[int, str]] = None,
) -> List[Detection]:
    """
    Convert pixel-space supervision detections into tracker detections.

    Args:
        detections: Detector output with xyxy pixel boxes
        frame_shape: Shape of the frame (height, width, channels)
        class_names: Class ID to label mapping (defaults to COCO_CLASSES)

    Returns:
        Detections with [ymin, xmin, ymax, xmax] boxes in 0-1000 space

    Raises:
        ValueError: If the frame height or width is not positive
    """
    class_names = class_names or COCO_CLASSES
    h, w = frame_shape[:2]
    if h <= 0 or w <= 0:
        raise ValueError(f"Invalid frame shape: {tuple(frame_shape)}")
    labels = detections.data.get("class_name") if detections.data else None

    result: List[Detection] = []
    for i, (x1, y1, x2, y2) in enumerate(detections.xyxy):
        if labels is not None:
            label = str(labels[i])
        elif detections.class_id is not None:
            class_id = int(detections.class_id[i])
            label = class_names.get(class_id, f"class_{class_id}")
        else:
            label = ""

        confidence = None
        if detections.confidence is not None:
            confidence = float(detections.confidence[i])

        box = [
            float(y1) / h * COORDINATE_SCALE,
            float(x1) / w * COORDINATE_SCALE,
            float(y2) / h * COORDINATE_SCALE,
            float(x2) / w * COORDINATE_SCALE,
        ]
        result.append(Detection(label=label, box=box, confidence=confidence))

    return result


def to_supervision(
    detections: List[Detection],
    frame_shape: Tuple[int, ...],
) -> sv.Detections:
    """
    Convert tracked detections back to pixel-space supervision detections.

    Only detections carrying a track ID are kept. Speed, lane event and
    violation flags travel in `data` so annotators can build labels.
    """
    tracked = [d for d in detections if d.track_id is not None and d.smoothed_box is not None]
    if not tracked:
        return sv.Detections.empty()

    h, w = frame_shape[:2]
    xyxy = np.array(
        [
            [
                d.smoothed_box[1] / COORDINATE_SCALE * w,
                d.smoothed_box[0] / COORDINATE_SCALE * h,
                d.smoothed_box[3] / COORDINATE_SCALE * w,
                d.smoothed_box[2] / COORDINATE_SCALE * h,
            ]
            for d in tracked
        ],
        dtype=np.float32,
    )
    confidence = None
    if all(d.confidence is not None for d in tracked):
        confidence = np.array([d.confidence for d in tracked], dtype=np.float32)

    return sv.Detections(
        xyxy=xyxy,
        confidence=confidence,
        tracker_id=np.array([d.track_id for d in tracked], dtype=int),
        data={
            "class_name": np.array([d.label for d in tracked]),
            "speed_kmh": np.array([d.estimated_speed or 0 for d in tracked], dtype=int),
            "lane_event": np.array([d.lane_event or "" for d in tracked]),
            "is_speeding": np.array([d.is_speeding for d in tracked], dtype=bool),
            "is_wrong_way": np.array([d.is_wrong_way for d in tracked], dtype=bool),
        },
    )
