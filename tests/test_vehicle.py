"""Tests for label to vehicle class resolution."""

import pytest

from engine.vehicle import SpeedCategory, VehicleClass


@pytest.mark.parametrize("label,expected", [
    ("car", VehicleClass.CAR),
    ("Police Car", VehicleClass.CAR),
    ("Taxi", VehicleClass.CAR),
    ("SUV", VehicleClass.SUV),
    ("van", VehicleClass.VAN),
    ("Pickup", VehicleClass.VAN),
    ("pickup truck", VehicleClass.TRUCK),
    ("Lorry", VehicleClass.TRUCK),
    ("minibus", VehicleClass.BUS),
    ("Motorcycle", VehicleClass.MOTORCYCLE),
    ("motorbike", VehicleClass.BIKE),
    ("Bicycle", VehicleClass.BICYCLE),
    ("auto rickshaw", VehicleClass.RICKSHAW),
    ("person", VehicleClass.PEDESTRIAN),
    ("Human", VehicleClass.PEDESTRIAN),
    ("traffic light", VehicleClass.UNKNOWN),
    ("", VehicleClass.UNKNOWN),
    (None, VehicleClass.UNKNOWN),
])
def test_from_label(label, expected):
    assert VehicleClass.from_label(label) is expected


@pytest.mark.parametrize("vehicle_class,category", [
    (VehicleClass.TRUCK, SpeedCategory.HEAVY),
    (VehicleClass.BUS, SpeedCategory.HEAVY),
    (VehicleClass.RICKSHAW, SpeedCategory.LIGHT),
    (VehicleClass.BIKE, SpeedCategory.LIGHT),
    (VehicleClass.BICYCLE, SpeedCategory.DEFAULT),
    (VehicleClass.CAR, SpeedCategory.DEFAULT),
    (VehicleClass.UNKNOWN, SpeedCategory.DEFAULT),
])
def test_speed_category(vehicle_class, category):
    assert vehicle_class.speed_category is category


def test_pedestrians_and_unknown_are_not_vehicles():
    assert VehicleClass.CAR.is_vehicle
    assert VehicleClass.RICKSHAW.is_vehicle
    assert not VehicleClass.PEDESTRIAN.is_vehicle
    assert not VehicleClass.UNKNOWN.is_vehicle
