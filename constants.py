"""Constants used across the traffic tracking engine."""

# Boxes arrive as [ymin, xmin, ymax, xmax] in a 0-1000 normalized space
COORDINATE_SCALE = 1000.0

# Detection categories reported by the vision oracle
CATEGORY_VEHICLE = "vehicle"
CATEGORY_PEDESTRIAN = "pedestrian"
CATEGORY_INFRASTRUCTURE = "infrastructure"
CATEGORY_OTHER = "other"

# Label keywords per vehicle class, checked in this order.
# Heavy vehicles come first so "pickup truck" resolves to a truck.
VEHICLE_KEYWORDS = (
    ("truck", ("truck", "lorry")),
    ("bus", ("bus",)),
    ("rickshaw", ("rickshaw", "auto")),
    ("car", ("car", "taxi")),
    ("suv", ("suv",)),
    ("van", ("van", "pickup")),
    ("motorcycle", ("motorcycle",)),
    ("bicycle", ("bicycle",)),
    ("bike", ("bike",)),
    ("pedestrian", ("person", "pedestrian", "human")),
)

# Typical lengths in meters used for auto-calibration
REFERENCE_LENGTHS_METERS = {
    "car": 4.5,
    "suv": 4.8,
    "van": 5.2,
    "truck": 12.0,
    "bus": 12.0,
    "motorcycle": 2.2,
    "bike": 1.8,
    "bicycle": 1.8,
    "pedestrian": 0.5,
}
DEFAULT_REFERENCE_LENGTH = 4.5

# Traffic-relevant subset of the RF-DETR class map (1-based, matching model output)
COCO_CLASSES = {
    1: 'person', 2: 'bicycle', 3: 'car', 4: 'motorcycle',
    6: 'bus', 8: 'truck', 10: 'traffic light', 13: 'stop sign',
}

# Lane event tags as emitted on detections
LANE_STABLE = "Stable"
LANE_CHANGE = "Lane Change"
LANE_MERGING = "Merging"
