"""
Reads and writes the line-oriented network file format.

    ; comment lines start with a semicolon
    numIntersections
    numRoutes
    yellowTime
    intersectionId[:duration:originId,originId,...]         (numIntersections lines)
    fromId:toId:defaultSpeed:numSensors[:speedSignSpeed]     (numRoutes lines, each followed by)
    SENSORKIND:threshold:datum,datum,...                     (numSensors lines)
"""
import re
from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..application.clock import Clock
from ..application.network import Network
from ..domain.entities import Route
from ..domain.sensors import SENSOR_KINDS, create_sensor
from ...common.exceptions import InvalidNetworkFormatError, TrafficNetworkError
from ...common.schemas.network_file import (
    FIELD_SEPARATOR,
    LIST_SEPARATOR,
    IntersectionRecord,
    NetworkHeader,
    RouteRecord,
    SensorRecord,
)

COMMENT_PREFIX = ";"
MAX_TRAILING_BLANK_LINES = 2

_INTEGER = re.compile(r"[+-]?\d+")

RecordT = TypeVar("RecordT", bound=BaseModel)


class _NetworkParser:
    """
    Single forward pass over the file. Any problem aborts the whole parse.
    """

    def __init__(self, text: str, clock: Optional[Clock] = None):
        self._lines = self._read_lines(text)
        self._position = 0
        self._network = Network(clock)

    @staticmethod
    def _read_lines(text: str) -> List[Tuple[int, str]]:
        raw = text.replace("\r\n", "\n").split("\n")
        if raw and raw[-1] == "":
            raw.pop()  # terminator of the last line

        lines = [
            (number, line)
            for number, line in enumerate(raw, start=1)
            if not line.startswith(COMMENT_PREFIX)
        ]

        trailing_blank = 0
        while lines and lines[-1][1] == "":
            lines.pop()
            trailing_blank += 1
        if trailing_blank > MAX_TRAILING_BLANK_LINES:
            raise InvalidNetworkFormatError(
                f"Too many blank lines at the end of the file: {trailing_blank}"
            )
        return lines

    # --- Line helpers ---

    def _has_more(self) -> bool:
        return self._position < len(self._lines)

    def _next_line(self, expected: str) -> Tuple[int, str]:
        if not self._has_more():
            raise InvalidNetworkFormatError(f"Unexpected end of file, expected {expected}")
        number, line = self._lines[self._position]
        self._position += 1
        if line == "":
            raise InvalidNetworkFormatError(f"Blank line where {expected} was expected", number)
        return number, line

    @staticmethod
    def _split_fields(number: int, line: str, counts: Sequence[int], kind: str) -> List[str]:
        fields = line.split(FIELD_SEPARATOR)
        if any(field == "" for field in fields):
            raise InvalidNetworkFormatError(f"Empty field in {kind} line {line!r}", number)
        if len(fields) not in counts:
            expected = " or ".join(str(c) for c in counts)
            raise InvalidNetworkFormatError(
                f"Expected {expected} fields in {kind} line, found {len(fields)}: {line!r}",
                number,
            )
        return fields

    @staticmethod
    def _split_list(number: int, text: str) -> List[str]:
        items = text.split(LIST_SEPARATOR)
        if any(item == "" for item in items):
            raise InvalidNetworkFormatError(f"Empty element in list {text!r}", number)
        return items

    @staticmethod
    def _parse_int(number: int, text: str, what: str) -> int:
        if not _INTEGER.fullmatch(text):
            raise InvalidNetworkFormatError(f"{what} is not an integer: {text!r}", number)
        return int(text)

    @staticmethod
    def _record(model: Type[RecordT], number: Optional[int], **values) -> RecordT:
        try:
            return model(**values)
        except ValidationError as e:
            errors = "; ".join(error["msg"] for error in e.errors())
            raise InvalidNetworkFormatError(errors, number) from e

    @contextmanager
    def _at_line(self, number: int):
        """Reports network errors as format errors at the given line."""
        try:
            yield
        except InvalidNetworkFormatError:
            raise
        except TrafficNetworkError as e:
            raise InvalidNetworkFormatError(str(e), number) from e

    # --- Sections ---

    def parse(self) -> Network:
        header = self._parse_header()
        self._network.set_yellow_time(header.yellow_time)

        light_records = []
        for _ in range(header.num_intersections):
            number, record = self._parse_intersection()
            if record.has_lights:
                light_records.append((number, record))

        routes_read = 0
        while self._has_more():
            if routes_read == header.num_routes:
                number, line = self._lines[self._position]
                raise InvalidNetworkFormatError(
                    f"More routes than the {header.num_routes} declared: {line!r}", number
                )
            self._parse_route()
            routes_read += 1
        if routes_read != header.num_routes:
            raise InvalidNetworkFormatError(
                f"Declared {header.num_routes} routes but found {routes_read}"
            )

        # Light orders refer to incoming routes, so they go in last
        for number, record in light_records:
            with self._at_line(number):
                self._network.add_lights(record.intersection_id, record.duration, record.order)

        return self._network

    def _parse_header(self) -> NetworkHeader:
        values = []
        first_number = None
        for what in ("number of intersections", "number of routes", "yellow time"):
            number, line = self._next_line(f"the {what}")
            first_number = first_number or number
            values.append(self._parse_int(number, line, what.capitalize()))
        num_intersections, num_routes, yellow_time = values
        return self._record(
            NetworkHeader,
            first_number,
            num_intersections=num_intersections,
            num_routes=num_routes,
            yellow_time=yellow_time,
        )

    def _parse_intersection(self) -> Tuple[int, IntersectionRecord]:
        number, line = self._next_line("an intersection line")
        fields = self._split_fields(number, line, (1, 3), "intersection")

        intersection_id = fields[0]
        if intersection_id in SENSOR_KINDS:
            raise InvalidNetworkFormatError(
                f"Intersection id {intersection_id!r} is reserved for a sensor kind", number
            )

        duration = None
        order: List[str] = []
        if len(fields) == 3:
            duration = self._parse_int(number, fields[1], "Light duration")
            order = self._split_list(number, fields[2])

        record = self._record(
            IntersectionRecord,
            number,
            intersection_id=intersection_id,
            duration=duration,
            order=order,
        )
        with self._at_line(number):
            self._network.create_intersection(record.intersection_id)
        return number, record

    def _parse_route(self) -> Route:
        number, line = self._next_line("a route line")
        fields = self._split_fields(number, line, (4, 5), "route")

        speed_sign_speed = None
        if len(fields) == 5:
            speed_sign_speed = self._parse_int(number, fields[4], "Speed sign speed")
        record = self._record(
            RouteRecord,
            number,
            from_id=fields[0],
            to_id=fields[1],
            default_speed=self._parse_int(number, fields[2], "Default speed"),
            num_sensors=self._parse_int(number, fields[3], "Number of sensors"),
            speed_sign_speed=speed_sign_speed,
        )

        with self._at_line(number):
            route = self._network.connect(record.from_id, record.to_id, record.default_speed)
            if record.speed_sign_speed is not None:
                route.add_speed_sign(record.speed_sign_speed)

        for _ in range(record.num_sensors):
            self._parse_sensor(route)
        return route

    def _parse_sensor(self, route: Route):
        number, line = self._next_line(f"a sensor line for route {route.id}")
        fields = self._split_fields(number, line, (3,), "sensor")

        kind = fields[0]
        if kind not in SENSOR_KINDS:
            raise InvalidNetworkFormatError(f"Unknown sensor kind {kind!r}", number)

        record = self._record(
            SensorRecord,
            number,
            kind=kind,
            threshold=self._parse_int(number, fields[1], "Sensor threshold"),
            data=[
                self._parse_int(number, datum, "Sensor datum")
                for datum in self._split_list(number, fields[2])
            ],
        )
        with self._at_line(number):
            route.add_sensor(create_sensor(record.kind, record.threshold, record.data))


class NetworkCodec:
    """
    Bidirectional mapping between a Network and its text representation.
    """

    @staticmethod
    def parse(text: str, clock: Optional[Clock] = None) -> Network:
        """
        Builds a network from file text. Lights register with the given clock,
        or with a fresh one owned by the network.

        Raises InvalidNetworkFormatError on any problem; no partial network
        is returned.
        """
        return _NetworkParser(text, clock).parse()

    @staticmethod
    def serialize(network: Network) -> str:
        """
        Canonical text: intersections sorted by id, routes in insertion
        order each followed by its sensors sorted by kind.
        """
        lines = [
            str(len(network.intersections)),
            str(len(network.routes)),
            str(network.yellow_time),
        ]
        lines.extend(str(intersection) for intersection in network.sorted_intersections())
        lines.extend(str(route) for route in network.routes)
        return "\n".join(lines) + "\n"
