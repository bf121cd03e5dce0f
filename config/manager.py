"""Configuration management for the traffic tracking engine."""

import json
import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, fields, asdict

from constants import REFERENCE_LENGTHS_METERS, DEFAULT_REFERENCE_LENGTH

logger = logging.getLogger(__name__)


@dataclass
class TrackerConfig:
    """Tunable parameters of the tracker engine."""

    # Association
    max_missing_frames: int = 5
    iou_threshold: float = 0.25
    centroid_distance_threshold: float = 0.15
    distance_score_weight: float = 0.5

    # Kalman filter tuning
    measurement_noise: float = 0.005  # R, approx 0.5% screen height jitter
    process_noise_position: float = 0.001  # Q_pos
    process_noise_velocity: float = 0.8  # Q_vel, high to catch braking/acceleration
    min_dt: float = 0.001  # seconds; below this the filter snaps to the measurement

    # Speed calibration
    height_smoothing: float = 0.9
    min_height: float = 0.02
    perspective_base: float = 1.2
    perspective_gain: float = 0.8
    noise_floor_mps: float = 0.8
    speed_history_size: int = 20
    speed_window: int = 5
    reference_lengths: Dict[str, float] = field(
        default_factory=lambda: dict(REFERENCE_LENGTHS_METERS)
    )
    default_reference_length: float = DEFAULT_REFERENCE_LENGTH

    # Lane discipline
    lane_history_size: int = 10
    lane_window: int = 5
    lane_change_threshold: float = 0.05

    # Violations (km/h, frames)
    speed_limit_default: float = 80.0
    speed_limit_heavy: float = 60.0
    speed_limit_light: float = 50.0
    flow_min_speed: float = 5.0
    wrong_way_min_speed: float = 10.0
    speeding_frames: int = 3
    wrong_way_frames: int = 4

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackerConfig":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "reference_lengths" in values:
            # Partial tables extend the defaults rather than replacing them
            values["reference_lengths"] = {
                **REFERENCE_LENGTHS_METERS,
                **values["reference_lengths"],
            }
        return cls(**values)


class ConfigManager:
    """Manages tracker configuration with persistence."""

    def __init__(self, config_path: str):
        self.config_path = config_path
        self._config: Optional[TrackerConfig] = None

    @property
    def config(self) -> TrackerConfig:
        """Get current configuration, loading from disk if needed."""
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> TrackerConfig:
        """Load configuration from disk."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {self.config_path}")
                return TrackerConfig.from_dict(data)
            except (OSError, ValueError, TypeError) as e:
                logger.error(f"Failed to load config: {e}")
        return TrackerConfig()

    def save(self) -> None:
        """Save current configuration to disk."""
        try:
            with open(self.config_path, "w") as f:
                json.dump(self.config.to_dict(), f, indent=2)
            logger.info(f"Saved config to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config: {e}")

    def update(self, **overrides: Any) -> TrackerConfig:
        """
        Change individual tunables and persist them.

        Raises:
            ValueError: If an override does not name a known tunable
        """
        known = {f.name for f in fields(TrackerConfig)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown tracker settings: {sorted(unknown)}")

        for name, value in overrides.items():
            if name == "reference_lengths":
                value = {**REFERENCE_LENGTHS_METERS, **value}
            setattr(self.config, name, value)
        self.save()
        logger.info(f"Updated tracker settings: {sorted(overrides)}")
        return self.config

    def reload(self) -> None:
        """Force reload configuration from disk."""
        self._config = self._load()
