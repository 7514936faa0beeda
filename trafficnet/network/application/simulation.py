"""
Drives a network second by second: traffic lights through the clock,
sensors alongside it.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Union

from .clock import Clock
from .network import Network
from ..domain.entities import TrafficSignal
from ...common.exceptions import InvalidArgumentError
from ...common.logging import setup_logger

if TYPE_CHECKING:
    from ..domain.repositories import NetworkRepository

logger = setup_logger("trafficnet.simulation")

@dataclass
class SimulationSnapshot:
    """
    State of the network after one simulated second.
    """
    second: int
    signals: Dict[str, TrafficSignal] = field(default_factory=dict) # Route ID -> signal, lit routes only
    congestion: Dict[str, int] = field(default_factory=dict) # Route ID -> 0..100, routes with sensors only


class Simulation:
    """
    Owns the clock of one network and advances it together with the
    network's sensors.
    """

    def __init__(self, network: Network):
        self.network = network
        self.elapsed = 0

    @property
    def clock(self) -> Clock:
        return self.network.clock

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  repository: Optional['NetworkRepository'] = None) -> 'Simulation':
        if repository is None:
            from ..infrastructure.repositories import FileNetworkRepository
            repository = FileNetworkRepository()
        return cls(repository.load(path, Clock()))

    def snapshot(self) -> SimulationSnapshot:
        routes = self.network.routes
        return SimulationSnapshot(
            second=self.elapsed,
            signals={r.id: r.signal for r in routes if r.has_traffic_light()},
            congestion={r.id: r.congestion() for r in routes if r.sensors},
        )

    def step(self) -> SimulationSnapshot:
        """
        Runs one second: lights change, the snapshot is taken, then every
        sensor moves on to its next reading.
        """
        self.clock.tick()
        snapshot = self.snapshot()
        for sensor in self.network.sensors():
            sensor.one_second()
        self.elapsed += 1
        return snapshot

    def run(self, seconds: int) -> Iterator[SimulationSnapshot]:
        if seconds < 0:
            raise InvalidArgumentError(f"Cannot run for a negative number of seconds: {seconds}")
        logger.debug(f"Running {seconds}s from t={self.elapsed}")
        for _ in range(seconds):
            yield self.step()

    def save(self, path: Union[str, Path], repository: Optional['NetworkRepository'] = None):
        if repository is None:
            from ..infrastructure.repositories import FileNetworkRepository
            repository = FileNetworkRepository()
        repository.save(self.network, path)
