from .codec import NetworkCodec
from .repositories import FileNetworkRepository, load, save

__all__ = ["NetworkCodec", "FileNetworkRepository", "load", "save"]
