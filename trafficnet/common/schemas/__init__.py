from .network_file import NetworkHeader, IntersectionRecord, RouteRecord, SensorRecord

__all__ = [
    "NetworkHeader",
    "IntersectionRecord",
    "RouteRecord",
    "SensorRecord",
]
