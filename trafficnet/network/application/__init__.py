from .clock import Clock
from .lights import IntersectionLights
from .network import Network, is_route_permutation
from .simulation import Simulation, SimulationSnapshot

__all__ = [
    "Clock",
    "IntersectionLights",
    "Network",
    "is_route_permutation",
    "Simulation",
    "SimulationSnapshot",
]
