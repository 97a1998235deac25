"""Terminal operating parameters."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.errors import ConfigurationError


@dataclass
class SimulationParameters:
    """Rates, capacities and run limits of the terminal.

    Times are in hours, quantities in tonnes.
    """

    # Ship arrivals (exponential inter-arrival mean)
    arrival_mean: float = 0.125

    # Pumping ship -> tank
    pump_startup_time: float = 0.5
    pumping_rate: float = 10000.0

    # Discharge tank -> refinery
    discharge_rate: float = 4000.0

    # Ships and tanks
    ship_loads: Tuple[float, float, float] = (15000.0, 20000.0, 25000.0)
    tank_capacity: float = 70000.0
    number_of_tanks: int = 5

    # Run control
    simulation_time: float = 1000.0
    number_of_runs: int = 1
    max_events: Optional[int] = None

    def __post_init__(self):
        """Normalize and validate parameters."""
        self.ship_loads = tuple(float(load) for load in self.ship_loads)
        self.validate()

    def validate(self) -> None:
        """Check parameter ranges.

        Raises:
            ConfigurationError: If any parameter is out of range
        """
        for name in ("arrival_mean", "pumping_rate", "discharge_rate", "tank_capacity"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.pump_startup_time < 0:
            raise ConfigurationError("pump_startup_time cannot be negative")
        if self.simulation_time < 0:
            raise ConfigurationError("simulation_time cannot be negative")

        if len(self.ship_loads) != 3:
            raise ConfigurationError(f"Exactly three ship loads are required, got {len(self.ship_loads)}")
        if any(load <= 0 for load in self.ship_loads):
            raise ConfigurationError("Ship loads must be positive")
        if list(self.ship_loads) != sorted(self.ship_loads):
            raise ConfigurationError("Ship loads must be given smallest first")

        if self.number_of_tanks < 1:
            raise ConfigurationError("number_of_tanks must be at least 1")
        if self.number_of_runs < 1:
            raise ConfigurationError("number_of_runs must be at least 1")
        if self.max_events is not None and self.max_events < 1:
            raise ConfigurationError("max_events must be at least 1 when set")

    @classmethod
    def from_config(cls, config: Dict) -> "SimulationParameters":
        """Build parameters from a configuration dictionary.

        Reads the ``parameters`` and ``simulation`` sections; missing keys
        keep their defaults.

        Args:
            config: Full configuration dictionary

        Returns:
            SimulationParameters instance
        """
        params = dict(config.get('parameters') or {})
        simulation = config.get('simulation') or {}
        for key in ('simulation_time', 'number_of_runs', 'max_events'):
            if key in simulation:
                params[key] = simulation[key]

        unknown = set(params) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown parameters: {', '.join(sorted(unknown))}")
        return cls(**params)

    def load_for_draw(self, r: float) -> float:
        """Ship load for a load draw.

        [0, 1) splits into three equal bins, each closed on its upper edge.
        """
        small, medium, large = self.ship_loads
        if r <= 1 / 3:
            return small
        if r <= 2 / 3:
            return medium
        return large
