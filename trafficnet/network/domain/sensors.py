"""
Demo congestion sensors that replay a fixed list of readings.
"""
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Sequence, Tuple, Type

from .congestion import clamp_congestion, percentage, round_half_up
from ...common.exceptions import InvalidArgumentError
from ...common.schemas.network_file import FIELD_SEPARATOR, LIST_SEPARATOR

class DemoSensor(ABC):
    """
    Base class for sensors backed by a looping data list.
    One datum is consumed per simulated second.
    """
    kind: ClassVar[str]

    def __init__(self, data: Sequence[int], threshold: int):
        if threshold <= 0:
            raise InvalidArgumentError(f"Sensor threshold must be positive, got {threshold}")
        if not data:
            raise InvalidArgumentError("Sensor data must not be empty")
        if any(datum < 0 for datum in data):
            raise InvalidArgumentError("Sensor data must not be negative")
        self._data: Tuple[int, ...] = tuple(data)
        self._threshold = threshold
        self._index = 0

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def data(self) -> Tuple[int, ...]:
        return self._data

    def reading(self) -> int:
        return self._data[self._index]

    def one_second(self) -> None:
        self._index = (self._index + 1) % len(self._data)

    @abstractmethod
    def congestion(self) -> int:
        pass

    def __str__(self) -> str:
        data = LIST_SEPARATOR.join(str(datum) for datum in self._data)
        return f"{self.kind}{FIELD_SEPARATOR}{self._threshold}{FIELD_SEPARATOR}{data}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(data={list(self._data)}, threshold={self._threshold})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, DemoSensor):
            return NotImplemented
        return (self.kind == other.kind
                and self._threshold == other._threshold
                and self._data == other._data)

    def __hash__(self) -> int:
        return hash((self.kind, self._threshold, self._data))


class PressurePad(DemoSensor):
    """Counts vehicles standing on the pad."""
    kind = "PP"

    def count_traffic(self) -> int:
        return self.reading()

    def congestion(self) -> int:
        return clamp_congestion(round_half_up(percentage(self.reading(), self.threshold)))


class SpeedCamera(DemoSensor):
    """Reports the average speed of passing vehicles."""
    kind = "SC"

    def average_speed(self) -> int:
        return self.reading()

    def congestion(self) -> int:
        speed = self.reading()
        if speed >= self.threshold:
            return 0
        return clamp_congestion(round_half_up(100 - percentage(speed, self.threshold)))


class VehicleCount(DemoSensor):
    """Reports passing vehicles per minute."""
    kind = "VC"

    def count_traffic(self) -> int:
        return self.reading()

    def congestion(self) -> int:
        return clamp_congestion(round_half_up(100 - percentage(self.reading(), self.threshold)))


SENSOR_TYPES: Dict[str, Type[DemoSensor]] = {
    cls.kind: cls for cls in (PressurePad, SpeedCamera, VehicleCount)
}

SENSOR_KINDS = frozenset(SENSOR_TYPES)

def create_sensor(kind: str, threshold: int, data: Sequence[int]) -> DemoSensor:
    """
    Builds a sensor from its kind code as used in network files.
    """
    try:
        sensor_cls = SENSOR_TYPES[kind]
    except KeyError:
        raise InvalidArgumentError(f"Unknown sensor kind: {kind!r}") from None
    return sensor_cls(data, threshold)
