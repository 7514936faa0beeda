"""
Congestion calculation from route sensors.
"""
import math
from fractions import Fraction
from numbers import Rational
from typing import Sequence
from .protocols import Sensor

CONGESTION_LOWER_BOUND = 0
CONGESTION_UPPER_BOUND = 100

def round_half_up(value: Rational) -> int:
    # Exact for Fractions, unlike round() which rounds half to even
    return math.floor(value + Fraction(1, 2))

def clamp_congestion(value: int) -> int:
    return max(CONGESTION_LOWER_BOUND, min(CONGESTION_UPPER_BOUND, value))

def percentage(part: int, whole: int) -> Fraction:
    return Fraction(part * 100, whole)

class AveragingCongestionCalculator:
    """
    Averages the congestion reported by every sensor on a route.
    """
    def __init__(self, sensors: Sequence[Sensor]):
        self.sensors = list(sensors)

    def calculate_congestion(self) -> int:
        """
        Mean sensor congestion rounded to the nearest integer, 0 without sensors.
        """
        if not self.sensors:
            return 0
        total = sum(sensor.congestion() for sensor in self.sensors)
        return clamp_congestion(round_half_up(Fraction(total, len(self.sensors))))
