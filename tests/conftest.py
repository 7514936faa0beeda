import pytest
from pathlib import Path
from trafficnet.network.application import Clock, Network

PROJECT_ROOT = Path(__file__).parent.parent
DEMO_NETWORK = PROJECT_ROOT / "conf" / "networks" / "demo.txt"

@pytest.fixture
def clock():
    return Clock()

@pytest.fixture
def network(clock):
    return Network(clock)

@pytest.fixture
def crossroads(network):
    """
    Intersection C fed by N, E, S and W, each at 60.
    """
    for intersection_id in ("C", "N", "E", "S", "W"):
        network.create_intersection(intersection_id)
    for origin_id in ("N", "E", "S", "W"):
        network.connect(origin_id, "C", 60)
    return network

@pytest.fixture
def demo_network_text():
    return DEMO_NETWORK.read_text(encoding="utf-8")

@pytest.fixture
def demo_network_path():
    return DEMO_NETWORK
