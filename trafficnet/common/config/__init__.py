from .manager import ConfigManager, SimulationSettings

__all__ = ["ConfigManager", "SimulationSettings"]
