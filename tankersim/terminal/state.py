"""Aggregate mutable state owned by a single simulator instance."""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List

from ..core.event_queue import EventQueue
from ..workload.random_stream import RandomStreams
from .entities import Ship, ShipState, Tank


@dataclass
class SimulationStatistics:
    """Running statistics of a run."""
    event_count: int = 0
    total_discharged_tonnage: float = 0.0
    max_queue_length: int = 0


@dataclass
class TransientValues:
    """Values computed while dispatching events, kept for reporting.

    Each field keeps the value from the last event that computed it.
    """
    # Ship arrival
    arrival_draw: float = 0.0
    inter_arrival_time: float = 0.0
    next_arrival_time: float = 0.0
    load_draw: float = 0.0
    load_tonnage: float = 0.0

    # Pump start (arrival onto a free tank, or queued ship taking a tank)
    pump_duration: float = 0.0
    pump_duration_with_startup: float = 0.0
    pump_completion_time: float = 0.0
    tank_load_at_pump_start: float = 0.0
    pump_start_completion_time: float = 0.0

    # Discharge start
    discharge_load_at_start: float = 0.0
    discharge_completion_time: float = 0.0


@dataclass
class SimulationState:
    """Everything a run mutates.

    Tanks are keyed by id in ascending order. Waiting ships sit in a FIFO
    queue; ships only become queued when they are created, so queue order
    is creation order.
    """
    streams: RandomStreams = field(default_factory=RandomStreams)
    clock: float = 0.0
    events: EventQueue = field(default_factory=EventQueue)
    ships: List[Ship] = field(default_factory=list)
    tanks: Dict[int, Tank] = field(default_factory=dict)
    waiting_ships: Deque[Ship] = field(default_factory=deque)
    statistics: SimulationStatistics = field(default_factory=SimulationStatistics)
    transient: TransientValues = field(default_factory=TransientValues)

    def create_ship(self, load: float, state: ShipState) -> Ship:
        """Create a ship with the next sequential id and record it."""
        ship = Ship(
            ship_id=len(self.ships) + 1,
            state=state,
            initial_load=load,
            current_load=load,
        )
        self.ships.append(ship)
        return ship

    def first_free_tank(self):
        """Lowest-id FREE tank, or None."""
        for tank_id in sorted(self.tanks):
            if self.tanks[tank_id].is_free():
                return self.tanks[tank_id]
        return None

    def queued_count(self) -> int:
        return len(self.waiting_ships)
