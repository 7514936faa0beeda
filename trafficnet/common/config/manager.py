from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

from .models import SimulationConfig
from ..exceptions import ConfigurationError

class SimulationSettings(BaseModel):
    """Validated settings for a simulation run"""
    network_file: Path = Field(..., description="Network file to load")
    seconds: int = Field(60, ge=0, description="Number of one-second ticks to run")
    yellow_time: Optional[int] = Field(None, ge=1, description="Yellow time for newly added lights")
    report_every: int = Field(10, ge=1, description="Log signal states every N seconds")
    output_file: Optional[Path] = Field(None, description="Where to save the network afterwards")
    log_level: str = Field("INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f'Unknown log level: {v}')
        return v

    @classmethod
    def from_config(cls, cfg: DictConfig) -> 'SimulationSettings':
        try:
            return cls(
                network_file=cfg.network_file,
                seconds=cfg.seconds,
                yellow_time=cfg.get('yellow_time'),
                report_every=cfg.get('report_every', 10),
                output_file=cfg.get('output_file'),
                log_level=cfg.get('logging', {}).get('level', 'INFO'),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid simulation config: {e}") from e


class ConfigManager:
    """Centralizes loading and validation of configuration"""

    REQUIRED_KEYS = ('network_file', 'seconds')

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = Path(config_dir)

    def load_simulation_config(self, profile: str = "default") -> DictConfig:
        """Loads a simulation profile merged onto the structured schema"""
        config_path = self.config_dir / "simulation" / f"{profile}.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        cfg = OmegaConf.load(config_path)
        for key in self.REQUIRED_KEYS:
            if key not in cfg:
                raise ConfigurationError(f"Missing required config key: {key}")

        try:
            return OmegaConf.merge(OmegaConf.structured(SimulationConfig), cfg)
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid config {config_path}: {e}") from e

    def load_settings(self, profile: str = "default") -> SimulationSettings:
        return SimulationSettings.from_config(self.load_simulation_config(profile))
