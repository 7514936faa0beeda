"""
Domain module initialization.
"""
from .entities import (
    TrafficSignal,
    TrafficLight,
    SpeedSign,
    Route,
    Intersection
)
from .protocols import Sensor, TimedItem
from .sensors import (
    DemoSensor,
    PressurePad,
    SpeedCamera,
    VehicleCount,
    SENSOR_KINDS,
    create_sensor
)
from .congestion import AveragingCongestionCalculator
from .repositories import NetworkRepository
