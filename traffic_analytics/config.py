import re
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List, Optional

from traffic_analytics.strategies import Strategy, METRICS
from traffic_analytics.scenario import Scenario, get_preset

INTERSECTION_ID = re.compile(r"intersection_(\d+)_(\d+)")


@dataclass
class AnalysisConfig:
    samples: int = 100
    confidence_level: float = 0.95
    alpha: float = 0.05
    seed: Optional[int] = 42
    metrics: List[str] = field(default_factory=lambda: list(METRICS))

    def __post_init__(self):
        if self.samples < 2:
            raise ValueError(f"samples must be at least 2, got {self.samples}")
        if not 0.0 < self.alpha < 1.0:
            raise ValueError(f"alpha must be within (0, 1), got {self.alpha}")


@dataclass
class NetworkConfig:
    grid_size: int = 3
    simulation_time: int = 100
    strategy: Strategy = Strategy.RL_BASED
    traffic_intensity: float = 0.5
    incident_enabled: bool = False
    incident_location: Optional[str] = None
    seed: Optional[int] = 42

    def __post_init__(self):
        self.strategy = Strategy.parse(self.strategy)
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be at least 1, got {self.grid_size}")
        if self.simulation_time < 0:
            raise ValueError(f"simulation_time must be non-negative, got {self.simulation_time}")
        if not 0.0 <= self.traffic_intensity <= 1.0:
            raise ValueError(f"traffic_intensity must be within [0, 1], got {self.traffic_intensity}")
        if self.incident_location is not None:
            match = INTERSECTION_ID.fullmatch(str(self.incident_location))
            if not match or max(int(match.group(1)), int(match.group(2))) >= self.grid_size:
                raise ValueError(
                    f"incident_location must name an intersection of the {self.grid_size}x{self.grid_size} grid "
                    f"(intersection_<x>_<y>), got {self.incident_location!r}"
                )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["strategy"] = self.strategy.value
        return data


@dataclass
class ScenarioConfig:
    preset: str = "default"
    overrides: Dict[str, Any] = field(default_factory=dict)

    def build(self) -> Scenario:
        scenario = get_preset(self.preset)
        if self.overrides:
            scenario = scenario.update(**self.overrides)
        return scenario


@dataclass
class AppConfig:
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)

    @classmethod
    def load(cls, path: str) -> "AppConfig":
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        # Missing sections fall back to defaults
        return cls(
            analysis=AnalysisConfig(**(data.get('analysis') or {})),
            network=NetworkConfig(**(data.get('network') or {})),
            scenario=ScenarioConfig(**(data.get('scenario') or {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['network'] = self.network.to_dict()
        return data
