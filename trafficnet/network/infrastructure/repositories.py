from pathlib import Path
from typing import Optional, Union

from .codec import NetworkCodec
from ..application.clock import Clock
from ..application.network import Network
from ..domain.repositories import NetworkRepository
from ...common.logging import log_execution_time, setup_logger

logger = setup_logger("trafficnet.repository")

class FileNetworkRepository(NetworkRepository):
    """
    Loads and saves networks as text files in the network file format.
    """
    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    @log_execution_time(logger)
    def load(self, path: Union[str, Path], clock: Optional[Clock] = None) -> Network:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Network file not found: {path}")

        with open(path, mode='r', encoding=self.encoding, newline='') as f:
            text = f.read()

        network = NetworkCodec.parse(text, clock)
        logger.info(
            f"Loaded network from {path}: {len(network.intersections)} intersections, "
            f"{len(network.routes)} routes"
        )
        return network

    @log_execution_time(logger)
    def save(self, network: Network, path: Union[str, Path]):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, mode='w', encoding=self.encoding, newline='') as f:
            f.write(network.serialize())
        logger.info(f"Saved network to {path}")


def load(path: Union[str, Path], clock: Optional[Clock] = None) -> Network:
    return FileNetworkRepository().load(path, clock)

def save(network: Network, path: Union[str, Path]):
    FileNetworkRepository().save(network, path)
