import pytest
from trafficnet.common.exceptions import (
    DuplicateIdError,
    DuplicateSensorError,
    IntersectionNotFoundError,
    InvalidArgumentError,
    InvalidIdError,
    InvalidOrderError,
    NoSpeedSignError,
    NoTrafficLightsError,
    RouteExistsError,
    RouteNotFoundError,
)
from trafficnet.network.application import Network, is_route_permutation
from trafficnet.network.domain import PressurePad, Route, SpeedCamera, TrafficSignal, VehicleCount

# --- Yellow time ---

def test_default_yellow_time(network):
    assert network.yellow_time == 1

def test_set_yellow_time(network):
    network.set_yellow_time(5)
    assert network.yellow_time == 5

@pytest.mark.parametrize("yellow_time", [0, -1])
def test_set_yellow_time_rejects_below_one(network, yellow_time):
    with pytest.raises(InvalidArgumentError):
        network.set_yellow_time(yellow_time)
    assert network.yellow_time == 1

def test_existing_lights_keep_their_yellow_time(crossroads):
    lights = crossroads.add_lights("C", 5, ["N", "E", "S", "W"])
    crossroads.set_yellow_time(3)
    assert lights.yellow_time == 1

# --- Intersections ---

def test_create_intersection(network):
    intersection = network.create_intersection("A")
    assert network.find_intersection("A") is intersection
    assert network.intersections == [intersection]
    assert intersection.connections == []

def test_create_duplicate_intersection(network):
    network.create_intersection("A")
    with pytest.raises(DuplicateIdError):
        network.create_intersection("A")
    assert len(network.intersections) == 1

@pytest.mark.parametrize("bad_id", ["", " ", "\t", "\n", "  \t ", "A:B", ":"])
def test_create_intersection_invalid_id(network, bad_id):
    with pytest.raises(InvalidIdError):
        network.create_intersection(bad_id)
    assert network.intersections == []

def test_ids_with_inner_spaces_are_valid(network):
    network.create_intersection("Main St")
    assert network.find_intersection("Main St").id == "Main St"

def test_find_missing_intersection(network):
    with pytest.raises(IntersectionNotFoundError):
        network.find_intersection("nowhere")

# --- Connections ---

def test_connect(network):
    network.create_intersection("A")
    network.create_intersection("B")

    route = network.connect("A", "B", 40)

    assert route.id == "A:B"
    assert network.routes == [route]
    assert network.find_intersection("B").connections == [route]
    assert network.find_intersection("A").connections == []
    assert network.get_connection("A", "B") is route

def test_connect_missing_intersection(network):
    network.create_intersection("A")
    with pytest.raises(IntersectionNotFoundError):
        network.connect("A", "B", 40)
    with pytest.raises(IntersectionNotFoundError):
        network.connect("B", "A", 40)
    assert network.routes == []

def test_connect_negative_speed(network):
    network.create_intersection("A")
    network.create_intersection("B")
    with pytest.raises(InvalidArgumentError):
        network.connect("A", "B", -1)
    assert network.routes == []

def test_connect_twice(network):
    network.create_intersection("A")
    network.create_intersection("B")
    network.connect("A", "B", 40)
    with pytest.raises(RouteExistsError):
        network.connect("A", "B", 60)
    assert len(network.routes) == 1

def test_reverse_route_is_independent(network):
    network.create_intersection("A")
    network.create_intersection("B")
    network.connect("A", "B", 40)
    network.connect("B", "A", 70)
    assert network.get_connection("B", "A").speed == 70

def test_self_loop(network):
    network.create_intersection("A")
    route = network.connect("A", "A", 10)
    assert route.id == "A:A"
    assert network.find_intersection("A").connections == [route]

def test_get_connection_missing(network):
    network.create_intersection("A")
    network.create_intersection("B")
    with pytest.raises(RouteNotFoundError):
        network.get_connection("A", "B")
    with pytest.raises(IntersectionNotFoundError):
        network.get_connection("A", "Z")

def test_connect_into_lit_intersection_joins_cycle(crossroads):
    crossroads.create_intersection("X")
    lights = crossroads.add_lights("C", 3, ["N", "E", "S", "W"])

    route = crossroads.connect("X", "C", 30)

    assert route.has_traffic_light()
    assert route.signal == TrafficSignal.RED
    assert [r.origin_id for r in lights.routes] == ["N", "E", "S", "W", "X"]
    assert str(crossroads.find_intersection("C")) == "C:3:N,E,S,W,X"

# --- Speed signs ---

def test_add_speed_sign(network):
    network.create_intersection("A")
    network.create_intersection("B")
    network.connect("A", "B", 40)

    network.add_speed_sign("A", "B", 60)

    route = network.get_connection("A", "B")
    assert route.has_speed_sign()
    assert route.speed == 60

def test_add_speed_sign_errors(network):
    network.create_intersection("A")
    network.create_intersection("B")
    with pytest.raises(RouteNotFoundError):
        network.add_speed_sign("A", "B", 60)
    network.connect("A", "B", 40)
    with pytest.raises(InvalidArgumentError):
        network.add_speed_sign("A", "B", -60)

def test_set_speed_limit(network):
    network.create_intersection("A")
    network.create_intersection("B")
    network.connect("A", "B", 40)
    with pytest.raises(NoSpeedSignError):
        network.set_speed_limit("A", "B", 20)
    # The limit is checked before the route is looked up
    with pytest.raises(InvalidArgumentError):
        network.set_speed_limit("B", "A", -1)

    network.add_speed_sign("A", "B", 60)
    network.set_speed_limit("A", "B", 20)
    assert network.get_connection("A", "B").speed == 20

    with pytest.raises(InvalidArgumentError):
        network.set_speed_limit("A", "B", -20)

def test_reduce_incoming_speed_signs(crossroads):
    crossroads.add_speed_sign("N", "C", 80)
    crossroads.add_speed_sign("E", "C", 45)

    crossroads.reduce_incoming_speed_signs("C")

    assert crossroads.get_connection("N", "C").speed == 70
    assert crossroads.get_connection("E", "C").speed == 45
    assert crossroads.get_connection("S", "C").speed == 60

# --- Sensors ---

def test_add_sensor_and_congestion(crossroads):
    crossroads.add_sensor("N", "C", PressurePad([5], 5))
    crossroads.add_sensor("N", "C", SpeedCamera([20], 40))

    assert crossroads.get_congestion("N", "C") == 75
    assert crossroads.get_congestion("E", "C") == 0
    assert len(list(crossroads.sensors())) == 2

def test_add_duplicate_sensor(crossroads):
    crossroads.add_sensor("N", "C", VehicleCount([1], 5))
    with pytest.raises(DuplicateSensorError):
        crossroads.add_sensor("N", "C", VehicleCount([9], 9))
    # Same kind on another route is fine
    crossroads.add_sensor("E", "C", VehicleCount([1], 5))

def test_add_sensor_missing_route(crossroads):
    with pytest.raises(RouteNotFoundError):
        crossroads.add_sensor("C", "N", PressurePad([1], 1))

# --- Lights ---

def test_add_lights(crossroads, clock):
    lights = crossroads.add_lights("C", 5, ["W", "S", "E", "N"])
    intersection = crossroads.find_intersection("C")

    assert intersection.has_traffic_lights()
    assert intersection.lights is lights
    assert intersection.connected_intersection_ids == ["W", "S", "E", "N"]
    assert lights.yellow_time == 1
    assert lights.duration == 5
    assert lights in clock
    assert crossroads.get_connection("W", "C").signal == TrafficSignal.GREEN
    for origin_id in ("S", "E", "N"):
        assert crossroads.get_connection(origin_id, "C").signal == TrafficSignal.RED

@pytest.mark.parametrize("order", [
    [],
    ["N", "E", "S"],
    ["N", "E", "S", "W", "W"],
    ["N", "E", "S", "S"],
    ["N", "E", "S", "C"],
    ["N", "E", "S", "W", "Q"],
])
def test_add_lights_rejects_non_permutations(crossroads, order):
    with pytest.raises(InvalidOrderError):
        crossroads.add_lights("C", 5, order)
    assert not crossroads.find_intersection("C").has_traffic_lights()
    assert crossroads.get_connection("N", "C").signal is None

def test_add_lights_on_intersection_without_routes(crossroads):
    with pytest.raises(InvalidOrderError):
        crossroads.add_lights("N", 5, [])
    with pytest.raises(InvalidOrderError):
        crossroads.add_lights("N", 5, ["C"])

def test_add_lights_missing_intersection(crossroads):
    with pytest.raises(IntersectionNotFoundError):
        crossroads.add_lights("Z", 5, ["N"])

def test_add_lights_duration_must_exceed_yellow_time(crossroads):
    crossroads.set_yellow_time(10)
    with pytest.raises(InvalidArgumentError):
        crossroads.add_lights("C", 10, ["N", "E", "S", "W"])
    assert not crossroads.find_intersection("C").has_traffic_lights()

    crossroads.add_lights("C", 11, ["N", "E", "S", "W"])

def test_add_lights_replaces_existing(crossroads, clock):
    old = crossroads.add_lights("C", 5, ["N", "E", "S", "W"])
    clock.tick()
    clock.tick()

    new = crossroads.add_lights("C", 7, ["S", "W", "N", "E"])

    assert crossroads.find_intersection("C").lights is new
    assert old not in clock
    assert new in clock
    assert new.elapsed == 0
    assert crossroads.get_connection("S", "C").signal == TrafficSignal.GREEN
    assert crossroads.get_connection("N", "C").signal == TrafficSignal.RED

def test_lights_advance_with_clock(crossroads, clock):
    crossroads.set_yellow_time(2)
    crossroads.add_lights("C", 4, ["N", "E", "S", "W"])

    for _ in range(2):
        clock.tick()
    assert crossroads.get_connection("N", "C").signal == TrafficSignal.GREEN
    for _ in range(2):
        clock.tick()
    assert crossroads.get_connection("N", "C").signal == TrafficSignal.YELLOW
    clock.tick()
    assert crossroads.get_connection("N", "C").signal == TrafficSignal.RED
    assert crossroads.get_connection("E", "C").signal == TrafficSignal.GREEN

def test_change_light_duration(crossroads, clock):
    lights = crossroads.add_lights("C", 5, ["N", "E", "S", "W"])
    for _ in range(7):
        clock.tick()
    assert crossroads.get_connection("E", "C").signal == TrafficSignal.GREEN

    crossroads.change_light_duration("C", 9)

    assert lights.duration == 9
    assert crossroads.get_connection("N", "C").signal == TrafficSignal.GREEN
    assert crossroads.get_connection("E", "C").signal == TrafficSignal.RED

def test_change_light_duration_errors(crossroads):
    with pytest.raises(NoTrafficLightsError):
        crossroads.change_light_duration("C", 5)
    with pytest.raises(IntersectionNotFoundError):
        crossroads.change_light_duration("Z", 5)

    crossroads.set_yellow_time(3)
    lights = crossroads.add_lights("C", 5, ["N", "E", "S", "W"])
    with pytest.raises(InvalidArgumentError):
        crossroads.change_light_duration("C", 3)
    assert lights.duration == 5

def test_is_route_permutation():
    a, b, c = Route("A", "X", 1), Route("B", "X", 1), Route("C", "X", 1)
    assert is_route_permutation([a, b, c], [c, a, b])
    assert not is_route_permutation([a, b], [a, b, c])
    assert not is_route_permutation([a, a, b], [a, b, b])
    assert not is_route_permutation([], [])

# --- Two-way ---

def test_make_two_way(network):
    network.create_intersection("A")
    network.create_intersection("B")
    network.connect("A", "B", 40)

    reverse = network.make_two_way("A", "B")

    assert reverse.id == "B:A"
    assert reverse.speed == 40
    assert not reverse.has_speed_sign()
    assert network.get_connection("B", "A") is reverse

def test_make_two_way_copies_current_sign_speed(network):
    network.create_intersection("A")
    network.create_intersection("B")
    network.connect("A", "B", 40)
    network.add_speed_sign("A", "B", 80)

    reverse = network.make_two_way("A", "B")

    assert reverse.default_speed == 80
    assert reverse.has_speed_sign()
    assert reverse.speed == 80

def test_make_two_way_errors(network):
    network.create_intersection("A")
    network.create_intersection("B")
    with pytest.raises(RouteNotFoundError):
        network.make_two_way("A", "B")

    network.connect("A", "B", 40)
    network.connect("B", "A", 40)
    with pytest.raises(RouteExistsError):
        network.make_two_way("A", "B")
    assert len(network.routes) == 2

# --- Equality and output ---

def test_equality_by_intersection_ids():
    first, second = Network(), Network()
    assert first == second

    for intersection_id in ("A", "B"):
        first.create_intersection(intersection_id)
    for intersection_id in ("B", "A"):
        second.create_intersection(intersection_id)
    first.connect("A", "B", 40)

    assert first == second
    assert hash(first) == hash(second)
    assert not first.content_equals(second)

    second.create_intersection("C")
    assert first != second

def test_content_equals(crossroads):
    other = Network()
    for intersection_id in ("W", "S", "E", "N", "C"):
        other.create_intersection(intersection_id)
    for origin_id in ("W", "S", "E", "N"):
        other.connect(origin_id, "C", 60)
    assert crossroads.content_equals(other)

    crossroads.add_lights("C", 4, ["N", "E", "S", "W"])
    assert not crossroads.content_equals(other)

    other.add_lights("C", 4, ["N", "E", "S", "W"])
    assert crossroads.content_equals(other)

    other.set_yellow_time(2)
    assert not crossroads.content_equals(other)

def test_serialize_two_intersections(network):
    network.create_intersection("B")
    network.create_intersection("A")
    network.connect("A", "B", 40)

    assert network.serialize() == "2\n1\n1\nA\nB\nA:B:40:0\n"
    assert str(network) == network.serialize()

def test_serialize_empty_network(network):
    assert network.serialize() == "0\n0\n1\n"
