"""
Domain entities for the traffic network module.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from .congestion import AveragingCongestionCalculator
from .protocols import Sensor
from ...common.exceptions import (
    DuplicateSensorError,
    InvalidArgumentError,
    NoSpeedSignError,
    RouteExistsError,
    RouteNotFoundError,
)
from ...common.schemas.network_file import FIELD_SEPARATOR

if TYPE_CHECKING:
    from ..application.lights import IntersectionLights

SPEED_REDUCTION_AMOUNT = 10
SPEED_REDUCTION_CUTOFF = 50

class TrafficSignal(Enum):
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"

@dataclass
class TrafficLight:
    """
    The signal shown to vehicles entering an intersection along one route.
    """
    signal: TrafficSignal = TrafficSignal.RED

@dataclass
class SpeedSign:
    """
    Electronic sign whose displayed speed overrides a route's default speed.
    """
    current_speed: int


class Route:
    """
    Directed connection from an origin intersection into the intersection
    that holds it. Both ends are referenced by id only.
    """

    def __init__(self, origin_id: str, destination_id: str, default_speed: int):
        if default_speed < 0:
            raise InvalidArgumentError(f"Default speed must not be negative, got {default_speed}")
        self.origin_id = origin_id
        self.destination_id = destination_id
        self.default_speed = default_speed
        self._speed_sign: Optional[SpeedSign] = None
        self._traffic_light: Optional[TrafficLight] = None
        self._sensors: Dict[str, Sensor] = {}

    @property
    def id(self) -> str:
        return f"{self.origin_id}{FIELD_SEPARATOR}{self.destination_id}"

    @property
    def speed(self) -> int:
        if self._speed_sign is None:
            return self.default_speed
        return self._speed_sign.current_speed

    @property
    def speed_sign(self) -> Optional[SpeedSign]:
        return self._speed_sign

    def has_speed_sign(self) -> bool:
        return self._speed_sign is not None

    def add_speed_sign(self, initial_speed: int):
        if initial_speed < 0:
            raise InvalidArgumentError(f"Speed sign speed must not be negative, got {initial_speed}")
        self._speed_sign = SpeedSign(initial_speed)

    def set_speed_limit(self, new_speed: int):
        if self._speed_sign is None:
            raise NoSpeedSignError(f"Route {self.id} has no speed sign")
        if new_speed < 0:
            raise InvalidArgumentError(f"Speed sign speed must not be negative, got {new_speed}")
        self._speed_sign.current_speed = new_speed

    @property
    def traffic_light(self) -> Optional[TrafficLight]:
        return self._traffic_light

    def has_traffic_light(self) -> bool:
        return self._traffic_light is not None

    def add_traffic_light(self):
        self._traffic_light = TrafficLight()

    @property
    def signal(self) -> Optional[TrafficSignal]:
        return self._traffic_light.signal if self._traffic_light else None

    def set_signal(self, signal: TrafficSignal):
        # Routes without a light have nothing to show
        if self._traffic_light is not None:
            self._traffic_light.signal = signal

    @property
    def sensors(self) -> List[Sensor]:
        """Sensors sorted by kind code."""
        return [self._sensors[kind] for kind in sorted(self._sensors)]

    def add_sensor(self, sensor: Sensor):
        if sensor.kind in self._sensors:
            raise DuplicateSensorError(
                f"Route {self.id} already has a sensor of kind {sensor.kind}"
            )
        self._sensors[sensor.kind] = sensor

    def congestion(self) -> int:
        return AveragingCongestionCalculator(self.sensors).calculate_congestion()

    def to_line(self) -> str:
        """
        The route line of the network file format, without sensor lines.
        """
        fields = [self.id, str(self.default_speed), str(len(self._sensors))]
        if self._speed_sign is not None:
            fields.append(str(self._speed_sign.current_speed))
        return FIELD_SEPARATOR.join(fields)

    def __str__(self) -> str:
        return "\n".join([self.to_line()] + [str(sensor) for sensor in self.sensors])

    def __repr__(self) -> str:
        return f"Route({self.id!r}, speed={self.speed})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return (self.id == other.id
                and self.default_speed == other.default_speed
                and self._speed_sign == other._speed_sign
                and self.signal == other.signal
                and self._sensors == other._sensors)

    def __hash__(self) -> int:
        return hash(self.id)


class Intersection:
    """
    Named node of the network. Holds its incoming routes and, optionally,
    the traffic lights cycling over them.
    """

    def __init__(self, intersection_id: str):
        self.id = intersection_id
        self._incoming: List[Route] = []
        self._lights: Optional['IntersectionLights'] = None

    @property
    def connections(self) -> List[Route]:
        return list(self._incoming)

    @property
    def connected_intersection_ids(self) -> List[str]:
        return [route.origin_id for route in self._incoming]

    def add_connection(self, origin_id: str, default_speed: int) -> Route:
        """
        Creates the route origin_id -> this intersection.
        A route added under existing lights joins the end of their cycle.
        """
        if origin_id in self.connected_intersection_ids:
            raise RouteExistsError(f"Route {origin_id}{FIELD_SEPARATOR}{self.id} already exists")
        route = Route(origin_id, self.id, default_speed)
        self._incoming.append(route)
        if self._lights is not None:
            self._lights.add_route(route)
        return route

    def get_connection(self, origin_id: str) -> Route:
        for route in self._incoming:
            if route.origin_id == origin_id:
                return route
        raise RouteNotFoundError(f"No route from {origin_id!r} to {self.id!r}")

    @property
    def lights(self) -> Optional['IntersectionLights']:
        return self._lights

    def has_traffic_lights(self) -> bool:
        return self._lights is not None

    def set_lights(self, order: List[Route], lights: 'IntersectionLights'):
        """
        Installs lights; the incoming routes take the light order.
        """
        self._incoming = list(order)
        self._lights = lights

    def reduce_incoming_speed_signs(self):
        """
        Lowers every incoming speed sign showing at least 50 by 10, never below 50.
        """
        for route in self._incoming:
            if not route.has_speed_sign():
                continue
            current_speed = route.speed
            if current_speed >= SPEED_REDUCTION_CUTOFF:
                route.set_speed_limit(max(SPEED_REDUCTION_CUTOFF,
                                          current_speed - SPEED_REDUCTION_AMOUNT))

    def __str__(self) -> str:
        if self._lights is None:
            return self.id
        return f"{self.id}{FIELD_SEPARATOR}{self._lights}"

    def __repr__(self) -> str:
        return f"Intersection({self.id!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
