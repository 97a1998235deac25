"""Exception hierarchy for the tanker terminal simulation."""


class SimulationError(Exception):
    """Base class for all simulation failures."""


class ConfigurationError(SimulationError, ValueError):
    """Invalid parameters, draws or initial conditions."""


class InvalidInitialStateError(ConfigurationError):
    """A tank was configured in a state the engine cannot start from."""


class ExhaustedStreamError(SimulationError):
    """A draw was requested from an empty random stream."""


class EmptyQueueError(SimulationError, IndexError):
    """No pending events remain; the run has reached exhaustion."""


class UnknownTankError(SimulationError, KeyError):
    """An event referenced a tank id that does not exist."""

    def __init__(self, tank_id):
        self.tank_id = tank_id
        super().__init__(f"Unknown tank id: {tank_id}")

    def __str__(self) -> str:
        return self.args[0]


class DomainError(SimulationError, ValueError):
    """A distribution was evaluated outside of its domain."""
