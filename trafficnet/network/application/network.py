"""
The road network: intersections, the routes between them and their lights.
"""
from collections import Counter
from typing import Dict, Iterator, List, Optional, Sequence

from .clock import Clock
from .lights import IntersectionLights
from ..domain.entities import Intersection, Route
from ..domain.protocols import Sensor
from ...common.exceptions import (
    DuplicateIdError,
    IntersectionNotFoundError,
    InvalidArgumentError,
    InvalidIdError,
    InvalidOrderError,
    NoTrafficLightsError,
    RouteExistsError,
    RouteNotFoundError,
)
from ...common.schemas.network_file import FIELD_SEPARATOR

DEFAULT_YELLOW_TIME = 1

def is_route_permutation(first: Sequence[Route], second: Sequence[Route]) -> bool:
    """
    True if both sequences hold the same routes (by id), in any order.
    """
    if not first or not second:
        return False
    return Counter(route.id for route in first) == Counter(route.id for route in second)


class Network:
    """
    Owns every intersection and route. All mutators validate their
    arguments before changing anything.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._intersections: Dict[str, Intersection] = {}
        self._routes: List[Route] = []
        self._yellow_time = DEFAULT_YELLOW_TIME
        self.clock = clock if clock is not None else Clock()

    # --- Yellow time ---

    @property
    def yellow_time(self) -> int:
        return self._yellow_time

    def set_yellow_time(self, yellow_time: int):
        """
        Sets the yellow time used by lights added from now on.
        Existing lights keep the yellow time they were created with.
        """
        if yellow_time < 1:
            raise InvalidArgumentError(f"Yellow time must be at least 1, got {yellow_time}")
        self._yellow_time = yellow_time

    # --- Lookup ---

    @property
    def intersections(self) -> List[Intersection]:
        return list(self._intersections.values())

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def sorted_intersections(self) -> List[Intersection]:
        return [self._intersections[i] for i in sorted(self._intersections)]

    def find_intersection(self, intersection_id: str) -> Intersection:
        try:
            return self._intersections[intersection_id]
        except KeyError:
            raise IntersectionNotFoundError(
                f"Intersection {intersection_id!r} could not be found"
            ) from None

    def get_connection(self, from_id: str, to_id: str) -> Route:
        self.find_intersection(from_id)
        return self.find_intersection(to_id).get_connection(from_id)

    def has_connection(self, from_id: str, to_id: str) -> bool:
        try:
            self.get_connection(from_id, to_id)
        except RouteNotFoundError:
            return False
        return True

    def sensors(self) -> Iterator[Sensor]:
        for route in self._routes:
            yield from route.sensors

    # --- Topology ---

    def create_intersection(self, intersection_id: str) -> Intersection:
        """
        Only ':' and blank ids are rejected. Ids starting with ';' or
        containing ',' or a line break are accepted here but cannot be
        written to a network file and read back.
        """
        if FIELD_SEPARATOR in intersection_id:
            raise InvalidIdError(
                f"Intersection id {intersection_id!r} contains {FIELD_SEPARATOR!r}"
            )
        if not intersection_id.strip():
            raise InvalidIdError("Intersection id must not be empty or whitespace")
        if intersection_id in self._intersections:
            raise DuplicateIdError(f"Intersection {intersection_id!r} already exists")

        intersection = Intersection(intersection_id)
        self._intersections[intersection_id] = intersection
        return intersection

    def connect(self, from_id: str, to_id: str, default_speed: int) -> Route:
        """
        Creates the one-way route from_id -> to_id. Self-loops are allowed.
        """
        self.find_intersection(from_id)
        target = self.find_intersection(to_id)
        if default_speed < 0:
            raise InvalidArgumentError(f"Default speed must not be negative, got {default_speed}")
        if from_id in target.connected_intersection_ids:
            raise RouteExistsError(f"Route {from_id}{FIELD_SEPARATOR}{to_id} already exists")

        route = target.add_connection(from_id, default_speed)
        self._routes.append(route)
        return route

    def make_two_way(self, from_id: str, to_id: str) -> Route:
        """
        Adds the reverse of an existing route, copying its current speed
        and, if present, its speed sign.
        """
        forward = self.get_connection(from_id, to_id)
        if self.has_connection(to_id, from_id):
            raise RouteExistsError(f"Route {to_id}{FIELD_SEPARATOR}{from_id} already exists")

        speed = forward.speed
        reverse = self.connect(to_id, from_id, speed)
        if forward.has_speed_sign():
            reverse.add_speed_sign(speed)
        return reverse

    # --- Speed signs and sensors ---

    def add_speed_sign(self, from_id: str, to_id: str, initial_speed: int):
        route = self.get_connection(from_id, to_id)
        route.add_speed_sign(initial_speed)

    def set_speed_limit(self, from_id: str, to_id: str, new_limit: int):
        if new_limit < 0:
            raise InvalidArgumentError(f"Speed limit must not be negative, got {new_limit}")
        route = self.get_connection(from_id, to_id)
        route.set_speed_limit(new_limit)

    def add_sensor(self, from_id: str, to_id: str, sensor: Sensor):
        route = self.get_connection(from_id, to_id)
        route.add_sensor(sensor)

    def get_congestion(self, from_id: str, to_id: str) -> int:
        return self.get_connection(from_id, to_id).congestion()

    def reduce_incoming_speed_signs(self, intersection_id: str):
        self.find_intersection(intersection_id).reduce_incoming_speed_signs()

    # --- Traffic lights ---

    def add_lights(self, intersection_id: str, duration: int, order: List[str]) -> IntersectionLights:
        """
        Installs traffic lights cycling over the routes from the given
        origins, in that order. Replaces any lights already there.
        """
        target = self.find_intersection(intersection_id)
        if not order:
            raise InvalidOrderError(f"Light order for {intersection_id!r} is empty")

        routes = []
        for origin_id in order:
            try:
                routes.append(target.get_connection(origin_id))
            except RouteNotFoundError as e:
                raise InvalidOrderError(
                    f"{origin_id!r} has no route into {intersection_id!r}"
                ) from e

        if not is_route_permutation(routes, target.connections):
            raise InvalidOrderError(
                f"Order {order} is not a permutation of the routes into {intersection_id!r}: "
                f"{target.connected_intersection_ids}"
            )
        if duration < self._yellow_time + 1:
            raise InvalidArgumentError(
                f"Duration {duration} must be at least yellow time + 1 ({self._yellow_time + 1})"
            )

        for route in routes:
            if not route.has_traffic_light():
                route.add_traffic_light()

        lights = IntersectionLights(routes, self._yellow_time, duration)
        if target.lights is not None:
            self.clock.unregister(target.lights)
        target.set_lights(routes, lights)
        self.clock.register(lights)
        return lights

    def change_light_duration(self, intersection_id: str, duration: int):
        target = self.find_intersection(intersection_id)
        if not target.has_traffic_lights():
            raise NoTrafficLightsError(f"Intersection {intersection_id!r} has no traffic lights")
        if duration < self._yellow_time + 1:
            raise InvalidArgumentError(
                f"Duration {duration} must be at least yellow time + 1 ({self._yellow_time + 1})"
            )
        target.lights.set_duration(duration)

    # --- Comparison and output ---

    def content_equals(self, other: 'Network') -> bool:
        """
        Equality including yellow time, routes, signals, sensors and lights.
        """
        if self != other or self._yellow_time != other._yellow_time:
            return False
        if {r.id: r for r in self._routes} != {r.id: r for r in other._routes}:
            return False
        for intersection_id, intersection in self._intersections.items():
            mine = intersection.lights
            theirs = other._intersections[intersection_id].lights
            if (mine is None) != (theirs is None):
                return False
            if mine is not None and (str(mine) != str(theirs)
                                     or mine.yellow_time != theirs.yellow_time):
                return False
        return True

    def serialize(self) -> str:
        from ..infrastructure.codec import NetworkCodec
        return NetworkCodec.serialize(self)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"Network(intersections={len(self._intersections)}, routes={len(self._routes)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return set(self._intersections) == set(other._intersections)

    def __hash__(self) -> int:
        return hash(frozenset(self._intersections))
