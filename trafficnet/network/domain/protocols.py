"""
Domain protocols for the traffic network module.
"""
from typing import Protocol

class TimedItem(Protocol):
    """
    Anything advanced by the clock once per simulated second.
    """
    def one_second(self) -> None:
        ...

class Sensor(Protocol):
    """
    Protocol for congestion sensors attached to routes.
    """
    @property
    def kind(self) -> str:
        ...

    @property
    def threshold(self) -> int:
        ...

    def reading(self) -> int:
        ...

    def congestion(self) -> int:
        ...

    def one_second(self) -> None:
        ...
