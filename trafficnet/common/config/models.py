from dataclasses import dataclass, field
from typing import Optional

@dataclass
class LoggingConfig:
    level: str = "INFO"

@dataclass
class SimulationConfig:
    network_file: str = "conf/networks/demo.txt"
    seconds: int = 60
    yellow_time: Optional[int] = None # Overrides the file's yellow time for lights added later
    report_every: int = 10
    output_file: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
