"""
Traffic lights cycling green -> yellow -> red over an intersection's incoming routes.
"""
from typing import List, Optional

from ..domain.entities import Route, TrafficSignal
from ...common.exceptions import InvalidArgumentError
from ...common.schemas.network_file import FIELD_SEPARATOR, LIST_SEPARATOR

class IntersectionLights:
    """
    Time-driven state machine over a fixed route order.

    Exactly one route is non-red at a time: green for the first
    duration - yellow_time seconds of its turn, yellow for the last
    yellow_time seconds. A full cycle takes duration * len(routes) seconds.
    """

    def __init__(self, routes: List[Route], yellow_time: int, duration: int):
        if yellow_time < 1:
            raise InvalidArgumentError(f"Yellow time must be at least 1, got {yellow_time}")
        if duration <= yellow_time:
            raise InvalidArgumentError(
                f"Duration {duration} must be greater than yellow time {yellow_time}"
            )
        self._routes = list(routes)
        self._yellow_time = yellow_time
        self._duration = duration
        self._active_index = 0
        self._elapsed = 0
        self._reset()

    @property
    def yellow_time(self) -> int:
        return self._yellow_time

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def active_route(self) -> Optional[Route]:
        if not self._routes:
            return None
        return self._routes[self._active_index]

    def set_duration(self, duration: int):
        """
        Changes the duration and restarts the cycle from the first route.
        """
        if duration <= self._yellow_time:
            raise InvalidArgumentError(
                f"Duration {duration} must be greater than yellow time {self._yellow_time}"
            )
        self._duration = duration
        self._reset()

    def add_route(self, route: Route):
        """
        Appends a route to the cycle. It stays red until its turn comes round.
        """
        if not route.has_traffic_light():
            route.add_traffic_light()
        route.set_signal(TrafficSignal.RED)
        self._routes.append(route)

    def _reset(self):
        self._elapsed = 0
        self._active_index = 0
        for i, route in enumerate(self._routes):
            route.set_signal(TrafficSignal.GREEN if i == 0 else TrafficSignal.RED)

    def _show(self, signal: TrafficSignal):
        for i, route in enumerate(self._routes):
            route.set_signal(signal if i == self._active_index else TrafficSignal.RED)

    def one_second(self):
        if not self._routes:
            return

        second_of_turn = self._elapsed % self._duration
        if second_of_turn < self._duration - self._yellow_time:
            self._show(TrafficSignal.GREEN)
        else:
            self._show(TrafficSignal.YELLOW)

        # Last yellow second: the next route takes over on the following tick
        if second_of_turn == self._duration - 1:
            self._active_index = (self._active_index + 1) % len(self._routes)

        self._elapsed += 1

    def __str__(self) -> str:
        order = LIST_SEPARATOR.join(route.origin_id for route in self._routes)
        return f"{self._duration}{FIELD_SEPARATOR}{order}"

    def __repr__(self) -> str:
        return f"IntersectionLights({self})"
