"""
Domain repositories for the traffic network module.
"""
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, Union

if TYPE_CHECKING:
    from ..application.clock import Clock
    from ..application.network import Network

class NetworkRepository(Protocol):
    """
    Abstract base class for loading and saving networks.
    """
    def load(self, path: Union[str, Path], clock: Optional['Clock'] = None) -> 'Network':
        ...

    def save(self, network: 'Network', path: Union[str, Path]):
        ...
