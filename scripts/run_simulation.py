import os
import sys
import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from trafficnet.common.config import SimulationSettings
from trafficnet.common.exceptions import TrafficNetworkError
from trafficnet.common.logging import setup_logger
from trafficnet.network.application import Simulation

def format_signals(signals: dict) -> str:
    return ", ".join(f"{route_id}={signal.value}" for route_id, signal in signals.items())

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    settings = SimulationSettings.from_config(cfg.simulation)
    logger = setup_logger("trafficnet.runner", settings.log_level)
    logger.debug(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")

    try:
        simulation = Simulation.from_file(to_absolute_path(str(settings.network_file)))
    except (FileNotFoundError, TrafficNetworkError) as e:
        logger.error(f"Could not load network: {e}")
        sys.exit(1)

    if settings.yellow_time is not None:
        simulation.network.set_yellow_time(settings.yellow_time)

    logger.info(f"Running {settings.seconds}s on {simulation.network!r}")
    for snapshot in simulation.run(settings.seconds):
        if snapshot.second % settings.report_every == 0:
            logger.info(f"t={snapshot.second}s {format_signals(snapshot.signals)}")
            for route_id, congestion in snapshot.congestion.items():
                logger.debug(f"t={snapshot.second}s congestion {route_id}={congestion}")

    if settings.output_file is not None:
        simulation.save(to_absolute_path(str(settings.output_file)))

if __name__ == "__main__":
    main()
