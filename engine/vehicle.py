"""Vehicle classes resolved from free-text detection labels."""

from enum import Enum
from typing import Optional

from constants import VEHICLE_KEYWORDS


class SpeedCategory(str, Enum):
    """Which speed limit applies to a vehicle class."""

    DEFAULT = "default"
    HEAVY = "heavy"
    LIGHT = "light"


class VehicleClass(str, Enum):
    """Closed set of object classes the calibration tables know about."""

    CAR = "car"
    SUV = "suv"
    VAN = "van"
    TRUCK = "truck"
    BUS = "bus"
    MOTORCYCLE = "motorcycle"
    BIKE = "bike"
    BICYCLE = "bicycle"
    RICKSHAW = "rickshaw"
    PEDESTRIAN = "pedestrian"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "VehicleClass":
        """
        Resolve an oracle label such as "Police Car" or "pickup truck".

        Keywords are matched as substrings of the lower-cased label in a
        fixed order. Labels matching nothing resolve to UNKNOWN.
        """
        text = (label or "").lower()
        for name, keywords in VEHICLE_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                return cls(name)
        return cls.UNKNOWN

    @property
    def speed_category(self) -> SpeedCategory:
        if self in (VehicleClass.TRUCK, VehicleClass.BUS):
            return SpeedCategory.HEAVY
        if self in (VehicleClass.RICKSHAW, VehicleClass.BIKE):
            return SpeedCategory.LIGHT
        return SpeedCategory.DEFAULT

    @property
    def is_vehicle(self) -> bool:
        return self not in (VehicleClass.PEDESTRIAN, VehicleClass.UNKNOWN)
