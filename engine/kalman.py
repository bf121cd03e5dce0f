"""Constant-velocity Kalman filter for a track's vertical centroid."""

import numpy as np


class MotionFilter:
    """
    Two-state (position, velocity) linear Kalman filter over a scalar.

    Tracks the normalized vertical centroid of an object across frames
    arriving at irregular intervals. Only the position is observed.

    Velocity process noise is much larger than position noise so the
    filter follows braking and acceleration instead of smoothing it away.
    """

    H = np.array([[1.0, 0.0]])

    def __init__(
        self,
        position: float,
        measurement_noise: float = 0.005,
        process_noise_position: float = 0.001,
        process_noise_velocity: float = 0.8,
    ):
        """
        Initialize the filter at rest.

        Args:
            position: Initial normalized vertical centroid (0-1)
            measurement_noise: Measurement noise R
            process_noise_position: Position noise rate Q_pos, scaled by dt
            process_noise_velocity: Velocity noise rate Q_vel, scaled by dt
        """
        self.state = np.array([float(position), 0.0])
        self.covariance = np.eye(2)
        self.measurement_noise = measurement_noise
        self.process_noise_position = process_noise_position
        self.process_noise_velocity = process_noise_velocity

    @property
    def position(self) -> float:
        return float(self.state[0])

    @property
    def velocity(self) -> float:
        """Estimated velocity in normalized units per second."""
        return float(self.state[1])

    def update(self, measurement: float, dt: float) -> None:
        """
        Run one predict/update cycle.

        Args:
            measurement: Observed normalized vertical centroid
            dt: Seconds elapsed since the previous update
        """
        # Predict
        transition = np.array([[1.0, dt], [0.0, 1.0]])
        noise = np.diag([self.process_noise_position * dt, self.process_noise_velocity * dt])
        predicted = transition @ self.state
        p_pred = transition @ self.covariance @ transition.T + noise

        # Update
        innovation = measurement - predicted[0]
        s = p_pred[0, 0] + self.measurement_noise
        gain = p_pred[:, 0] / s

        self.state = predicted + gain * innovation
        self.covariance = (np.eye(2) - np.outer(gain, self.H)) @ p_pred

    def snap(self, measurement: float) -> None:
        """Set the position directly, used for duplicate-timestamp frames."""
        self.state[0] = float(measurement)
