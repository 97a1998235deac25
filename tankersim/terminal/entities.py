"""Ships and coastal tanks of the fuel terminal."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ShipState(Enum):
    """States of a tanker ship."""
    LOADING = "loading"
    QUEUED = "queued"
    DISCHARGED = "discharged"


class TankState(Enum):
    """States of a coastal tank."""
    FREE = "free"
    LOADING = "loading"
    DISCHARGING = "discharging"


@dataclass
class Ship:
    """A tanker ship.

    ``current_load`` is fixed at creation; the cargo is copied into the
    tank that receives the ship.
    """
    ship_id: int
    state: ShipState
    initial_load: float
    current_load: float

    def __repr__(self) -> str:
        return f"Ship(id={self.ship_id}, state={self.state.value}, load={self.current_load})"


@dataclass
class Tank:
    """A coastal holding tank.

    A ship is attached exactly while the tank is LOADING.
    """
    tank_id: int
    capacity: float
    state: TankState = TankState.FREE
    current_load: float = 0.0
    loading_ship: Optional[Ship] = field(default=None, repr=False)

    def is_free(self) -> bool:
        return self.state == TankState.FREE

    def assign(self, ship: Ship) -> None:
        """Start pumping a ship's cargo into this tank.

        Args:
            ship: Ship to take; becomes LOADING
        """
        self.state = TankState.LOADING
        self.current_load = ship.current_load
        self.loading_ship = ship
        ship.state = ShipState.LOADING

    def finish_pumping(self) -> Optional[Ship]:
        """Retire the attached ship and start discharging to the refinery.

        Returns:
            The ship that was being pumped, now DISCHARGED
        """
        ship = self.loading_ship
        if ship is not None:
            ship.state = ShipState.DISCHARGED
        self.loading_ship = None
        self.state = TankState.DISCHARGING
        return ship

    def release(self) -> None:
        """Empty the tank after discharge."""
        self.state = TankState.FREE
        self.current_load = 0.0
        self.loading_ship = None
