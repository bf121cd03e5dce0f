"""Tests for calibrated speed estimation."""

import math

import pytest

from config import TrackerConfig
from engine.speed import SpeedEstimator
from engine.vehicle import VehicleClass


@pytest.fixture
def estimator(config):
    return SpeedEstimator(config)


class TestCalibration:

    @pytest.mark.parametrize("vehicle_class,length", [
        (VehicleClass.CAR, 4.5),
        (VehicleClass.SUV, 4.8),
        (VehicleClass.VAN, 5.2),
        (VehicleClass.TRUCK, 12.0),
        (VehicleClass.BUS, 12.0),
        (VehicleClass.MOTORCYCLE, 2.2),
        (VehicleClass.BIKE, 1.8),
        (VehicleClass.BICYCLE, 1.8),
        (VehicleClass.PEDESTRIAN, 0.5),
        (VehicleClass.RICKSHAW, 4.5),
        (VehicleClass.UNKNOWN, 4.5),
    ])
    def test_reference_length(self, estimator, vehicle_class, length):
        assert estimator.reference_length(vehicle_class) == length

    def test_reference_length_override(self):
        config = TrackerConfig.from_dict({"reference_lengths": {"rickshaw": 3.0}})
        estimator = SpeedEstimator(config)

        assert estimator.reference_length(VehicleClass.RICKSHAW) == 3.0
        assert estimator.reference_length(VehicleClass.CAR) == 4.5

    def test_perspective_correction_range(self, estimator):
        assert estimator.perspective_correction(1.0) == pytest.approx(1.2)
        assert estimator.perspective_correction(0.0) == pytest.approx(2.0)
        assert estimator.perspective_correction(0.5) == pytest.approx(1.6)


class TestInstantaneousSpeed:

    def test_calibrated_speed(self, estimator, make_track):
        # Height 0.1 centred at y=0.5: (0.1 / 0.1) * 4.5 m * 1.6 = 7.2 m/s
        track = make_track(box=(450, 400, 550, 500), velocity=0.1)
        assert estimator.instantaneous_speed(track) == pytest.approx(7.2 * 3.6)

    def test_direction_does_not_change_magnitude(self, estimator, make_track):
        up = make_track(box=(450, 400, 550, 500), velocity=-0.1)
        down = make_track(box=(450, 400, 550, 500), velocity=0.1)
        assert estimator.instantaneous_speed(up) == pytest.approx(estimator.instantaneous_speed(down))

    def test_below_noise_floor_is_zero(self, estimator, make_track):
        # 0.01 / 0.1 * 4.5 * 1.6 = 0.72 m/s
        track = make_track(box=(450, 400, 550, 500), velocity=0.01)
        assert estimator.instantaneous_speed(track) == 0.0

    def test_tiny_boxes_use_minimum_height(self, estimator, make_track):
        track = make_track(box=(499, 400, 501, 500), velocity=0.01)
        track.avg_height = 0.001
        # 0.01 / 0.02 * 4.5 * 1.6 = 3.6 m/s
        assert estimator.instantaneous_speed(track) == pytest.approx(3.6 * 3.6)


class TestDisplayedSpeed:

    def test_mean_of_recent_samples_is_floored(self, estimator, make_track):
        track = make_track(box=(450, 400, 550, 500), velocity=0.1)
        estimator.update(track)

        # History [0, 25.92] averages to 12.96
        assert list(track.speed_history) == pytest.approx([0.0, 25.92])
        assert track.speed == 12
        assert track.velocity == 12.0

    def test_signed_velocity_follows_filter(self, estimator, make_track):
        track = make_track(box=(450, 400, 550, 500), velocity=-0.1)
        estimator.update(track)

        assert track.speed == 12
        assert track.velocity == -12.0

    def test_window_uses_last_five_samples(self, estimator, make_track):
        track = make_track(box=(450, 400, 550, 500), velocity=0.1)
        for _ in range(6):
            estimator.update(track)

        assert track.speed == 25

    def test_history_is_bounded(self, estimator, make_track):
        track = make_track(box=(450, 400, 550, 500), velocity=0.1)
        for _ in range(50):
            estimator.update(track)

        assert len(track.speed_history) == 20

    def test_stationary_track_reports_zero(self, estimator, make_track):
        track = make_track(box=(450, 400, 550, 500), velocity=0.0)
        estimator.update(track)

        assert track.speed == 0
        assert track.velocity == 0.0

    def test_stationary_drift_upward_is_unsigned_zero(self, estimator, make_track):
        track = make_track(box=(450, 400, 550, 500), velocity=-0.0001)
        estimator.update(track)

        assert track.speed == 0
        assert math.copysign(1.0, track.velocity) == 1.0
