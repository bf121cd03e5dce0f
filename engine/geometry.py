"""Bounding box primitives for [ymin, xmin, ymax, xmax] boxes in 0-1000 space."""

import math
from typing import Any, List, Optional, Sequence, Tuple

from constants import COORDINATE_SCALE

Box = List[float]


def normalize_box(box: Any) -> Optional[Box]:
    """
    Validate a raw box and return it as a list of four floats.

    Returns:
        The box, or None when it is missing, the wrong length, or non-numeric
    """
    if box is None or isinstance(box, (str, bytes)):
        return None
    try:
        values = [float(v) for v in box]
    except (TypeError, ValueError):
        return None
    if len(values) != 4 or not all(math.isfinite(v) for v in values):
        return None
    return values


def get_centroid(box: Sequence[float]) -> Tuple[float, float]:
    """Get (x, y) center of a box in 0-1 normalized units."""
    y = (box[0] + box[2]) / 2 / COORDINATE_SCALE
    x = (box[1] + box[3]) / 2 / COORDINATE_SCALE
    return (x, y)


def get_height(box: Sequence[float]) -> float:
    """Get box height in 0-1 normalized units."""
    return (box[2] - box[0]) / COORDINATE_SCALE


def box_area(box: Sequence[float]) -> float:
    return (box[2] - box[0]) * (box[3] - box[1])


def calculate_iou(box_a: Sequence[float], box_b: Sequence[float]) -> float:
    """
    Intersection over Union of two boxes.

    Returns 0 when the union is empty (degenerate boxes).
    """
    y_a = max(box_a[0], box_b[0])
    x_a = max(box_a[1], box_b[1])
    y_b = min(box_a[2], box_b[2])
    x_b = min(box_a[3], box_b[3])

    inter_area = max(0.0, x_b - x_a) * max(0.0, y_b - y_a)
    union = box_area(box_a) + box_area(box_b) - inter_area

    if union <= 0:
        return 0.0
    return inter_area / union


def centroid_distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Euclidean distance between two normalized centroids."""
    return math.hypot(a[0] - b[0], a[1] - b[1])
