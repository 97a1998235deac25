"""Main simulator class orchestrating the discrete event simulation."""

from dataclasses import asdict
from typing import Dict, Iterable, List, Optional

from .errors import ConfigurationError, EmptyQueueError, ExhaustedStreamError, InvalidInitialStateError, UnknownTankError
from .event_queue import Event, EventType
from .snapshot import SnapshotRow, TankCompletionInfo, TankStatusInfo
from ..models.initial_conditions import InitialConditions, TankCondition
from ..models.parameters import SimulationParameters
from ..terminal.entities import Ship, ShipState, Tank, TankState
from ..terminal.state import SimulationState
from ..workload.distributions import exponential
from ..workload.random_stream import RandomStreams, StreamId, draws_from_digits
from ..utils.logger import setup_logger


class Simulator:
    """Discrete event simulator of a tanker fuel terminal.

    Ships arrive, are pumped into coastal tanks, and the tanks discharge to
    the refinery. The simulator owns one ``SimulationState``; it is mutated
    only by ``initialize``, ``set_random_streams`` and ``step``. Run one
    instance per independent run.
    """

    def __init__(self, parameters: Optional[SimulationParameters] = None):
        """Initialize simulator.

        Args:
            parameters: Terminal parameters, defaults when omitted
        """
        self.parameters = parameters or SimulationParameters()
        self.logger = setup_logger(self.__class__.__name__)
        self.state = SimulationState()

    @classmethod
    def from_config(cls, config: Dict, run_index: int = 0) -> "Simulator":
        """Build an initialized simulator from a configuration dictionary.

        Args:
            config: Configuration with ``parameters``, ``simulation``,
                ``initial_conditions`` and ``random_numbers`` sections
            run_index: Which run the draws are picked for when
                ``random_numbers`` lists one entry per run

        Returns:
            Simulator ready to step
        """
        parameters = SimulationParameters.from_config(config)
        simulator = cls(parameters)

        random_numbers = config.get('random_numbers') or {}
        if isinstance(random_numbers, list):
            if not random_numbers:
                raise ConfigurationError("random_numbers list is empty")
            random_numbers = random_numbers[run_index % len(random_numbers)]
        simulator.set_random_streams(
            draws_from_digits(random_numbers.get('arrival', [])),
            draws_from_digits(random_numbers.get('load', [])),
        )
        simulator.initialize(
            parameters.number_of_tanks,
            InitialConditions.from_config(config),
        )
        return simulator

    @property
    def clock(self) -> float:
        return self.state.clock

    @property
    def statistics(self):
        return self.state.statistics

    @property
    def ships(self) -> List[Ship]:
        return self.state.ships

    @property
    def tanks(self) -> List[Tank]:
        """Tanks in ascending id order."""
        return [self.state.tanks[tank_id] for tank_id in sorted(self.state.tanks)]

    def get_tank(self, tank_id: int) -> Tank:
        """Look up a tank by id.

        Raises:
            UnknownTankError: If no tank has that id
        """
        try:
            return self.state.tanks[tank_id]
        except KeyError:
            raise UnknownTankError(tank_id) from None

    def next_event_time(self) -> Optional[float]:
        """Time of the next pending event, or None when none remain."""
        event = self.state.events.peek()
        return event.time if event else None

    def set_random_streams(self, arrival_draws: Iterable[float], load_draws: Iterable[float]) -> None:
        """Install the draw sequences used for arrivals and ship loads.

        Args:
            arrival_draws: Draws in [0, 1) for inter-arrival times
            load_draws: Draws in [0, 1) for load selection
        """
        self.state.streams = RandomStreams(arrival_draws, load_draws)
        self.logger.debug(f"Random streams set: {self.state.streams}")

    def initialize(
        self,
        number_of_tanks: Optional[int] = None,
        initial_conditions: Optional[InitialConditions] = None,
    ) -> None:
        """Reset the run and build the starting tanks and events.

        The configured random streams are kept and rewound to their
        supplied order.

        Args:
            number_of_tanks: Tanks to create when no per-tank conditions
                are given; defaults to the parameters' value
            initial_conditions: Optional per-tank conditions and first
                arrival time

        Raises:
            ConfigurationError: If the tank count is below one
            InvalidInitialStateError: If a tank condition is inconsistent
        """
        if number_of_tanks is None:
            number_of_tanks = self.parameters.number_of_tanks
        conditions = initial_conditions or InitialConditions()

        streams = self.state.streams
        state = SimulationState(streams=streams)

        if conditions.tanks:
            if number_of_tanks != len(conditions.tanks):
                self.logger.warning(
                    f"{len(conditions.tanks)} tank conditions given, "
                    f"ignoring number_of_tanks={number_of_tanks}"
                )
            for tank_id, condition in enumerate(conditions.tanks, start=1):
                self._add_initial_tank(state, tank_id, condition)
        else:
            if number_of_tanks < 1:
                raise ConfigurationError(f"number_of_tanks must be at least 1, got {number_of_tanks}")
            for tank_id in range(1, number_of_tanks + 1):
                state.tanks[tank_id] = Tank(tank_id=tank_id, capacity=self.parameters.tank_capacity)

        state.events.push(Event(time=conditions.first_arrival, event_type=EventType.SHIP_ARRIVAL))
        streams.reset()
        self.state = state

        self.logger.info(
            f"Simulation initialized with {len(state.tanks)} tanks, "
            f"first arrival at {conditions.first_arrival}"
        )

    def _add_initial_tank(self, state: SimulationState, tank_id: int, condition: TankCondition) -> None:
        """Create a tank from its starting condition and schedule its completion."""
        load = condition.current_load
        if load < 0:
            raise InvalidInitialStateError(f"Tank {tank_id}: load cannot be negative")
        if load > self.parameters.tank_capacity:
            raise InvalidInitialStateError(
                f"Tank {tank_id}: load {load} exceeds capacity {self.parameters.tank_capacity}"
            )

        tank = Tank(
            tank_id=tank_id,
            capacity=self.parameters.tank_capacity,
            state=condition.state,
            current_load=load,
        )

        if condition.state == TankState.FREE:
            if load > 0:
                raise InvalidInitialStateError(f"Tank {tank_id}: a free tank cannot hold {load}")
            state.tanks[tank_id] = tank
            return

        if condition.completion_time is None:
            raise InvalidInitialStateError(
                f"Tank {tank_id}: {condition.state.value} tank needs a completion time"
            )
        if condition.completion_time < 0:
            raise InvalidInitialStateError(f"Tank {tank_id}: completion time cannot be negative")

        if condition.state == TankState.LOADING:
            tank.loading_ship = state.create_ship(load, ShipState.LOADING)
            event_type = EventType.PUMPING_COMPLETE
        else:
            event_type = EventType.DISCHARGE_COMPLETE

        state.events.push(Event(time=condition.completion_time, event_type=event_type, tank_id=tank_id))
        state.tanks[tank_id] = tank

    def run_until(self, horizon: Optional[float] = None, max_events: Optional[int] = None) -> List[SnapshotRow]:
        """Step while the next event falls within the horizon.

        Args:
            horizon: Last simulated time to process; defaults to the
                parameters' simulation time
            max_events: Optional cap on the number of rows produced

        Returns:
            Snapshot rows in processing order
        """
        if horizon is None:
            horizon = self.parameters.simulation_time
        if max_events is None:
            max_events = self.parameters.max_events

        rows = []
        while max_events is None or len(rows) < max_events:
            next_time = self.next_event_time()
            if next_time is None or next_time > horizon:
                break
            rows.append(self.step())

        self.logger.info(
            f"Run stopped at clock {self.clock:.4f} after {len(rows)} events "
            f"(discharged {self.statistics.total_discharged_tonnage:.0f} t, "
            f"max queue {self.statistics.max_queue_length})"
        )
        return rows

    def step(self) -> SnapshotRow:
        """Process the earliest pending event.

        Returns:
            Snapshot of the state after the event

        Raises:
            EmptyQueueError: If no events are pending
            ExhaustedStreamError: If an arrival needs a draw from an empty stream
            UnknownTankError: If the event references a missing tank
        """
        event = self.state.events.peek()
        if event is None:
            raise EmptyQueueError("No pending events: the simulation has run to exhaustion")
        # Fail before popping so a failed step leaves the state untouched
        self._check_event(event)

        self.state.events.pop()
        self.state.statistics.event_count += 1
        self.state.clock = event.time

        self._process_event(event)

        self.logger.debug(
            f"Event {self.state.statistics.event_count}: {event.event_type.value} "
            f"at {event.time:.4f}" + (f" (tank {event.tank_id})" if event.tank_id else "")
        )
        return self._snapshot(event)

    def _check_event(self, event: Event) -> None:
        """Raise the error processing ``event`` would raise."""
        if event.event_type.targets_tank:
            self.get_tank(event.tank_id)
            return
        for stream_id in StreamId:
            if not self.state.streams.has_draws(stream_id):
                raise ExhaustedStreamError(f"No draws available in the {stream_id.value} stream")

    def _process_event(self, event: Event) -> None:
        """Process a single event.

        Args:
            event: Event to process
        """
        handler = {
            EventType.SHIP_ARRIVAL: self._handle_ship_arrival,
            EventType.PUMPING_COMPLETE: self._handle_pumping_complete,
            EventType.DISCHARGE_COMPLETE: self._handle_discharge_complete,
        }[event.event_type]
        handler(event)

    def _handle_ship_arrival(self, event: Event) -> None:
        """Handle ship arrival."""
        state = self.state
        transient = state.transient

        arrival_draw = state.streams.next(StreamId.ARRIVAL)
        load_draw = state.streams.next(StreamId.LOAD)

        inter_arrival = exponential(arrival_draw, self.parameters.arrival_mean)
        next_arrival = state.clock + inter_arrival
        state.events.push(Event(time=next_arrival, event_type=EventType.SHIP_ARRIVAL))

        load = self.parameters.load_for_draw(load_draw)

        transient.arrival_draw = arrival_draw
        transient.inter_arrival_time = inter_arrival
        transient.next_arrival_time = next_arrival
        transient.load_draw = load_draw
        transient.load_tonnage = load

        tank = state.first_free_tank()
        if tank is not None:
            ship = state.create_ship(load, ShipState.LOADING)
            self._start_pumping(tank, ship)
        else:
            queued_before = state.queued_count()
            ship = state.create_ship(load, ShipState.QUEUED)
            state.waiting_ships.append(ship)
            state.statistics.max_queue_length = max(
                state.statistics.max_queue_length, queued_before + 1
            )
            self.logger.debug(f"Ship {ship.ship_id} queued, no free tank ({queued_before + 1} waiting)")

    def _handle_pumping_complete(self, event: Event) -> None:
        """Handle the end of pumping a ship into a tank."""
        state = self.state
        tank = self.get_tank(event.tank_id)

        # Tonnage is counted when the tank is committed to discharge
        state.statistics.total_discharged_tonnage += tank.current_load

        ship = tank.finish_pumping()
        if ship is not None:
            self.logger.debug(f"Ship {ship.ship_id} discharged into tank {tank.tank_id}")

        discharge_duration = tank.current_load / self.parameters.discharge_rate
        completion_time = state.clock + discharge_duration
        state.events.push(Event(
            time=completion_time,
            event_type=EventType.DISCHARGE_COMPLETE,
            tank_id=tank.tank_id,
        ))

        state.transient.discharge_load_at_start = tank.current_load
        state.transient.discharge_completion_time = completion_time

    def _handle_discharge_complete(self, event: Event) -> None:
        """Handle a tank finishing its discharge to the refinery."""
        state = self.state
        tank = self.get_tank(event.tank_id)
        tank.release()

        if state.waiting_ships:
            ship = state.waiting_ships.popleft()
            self._start_pumping(tank, ship)
        else:
            self.logger.debug(f"Tank {tank.tank_id} is free, no ships waiting")

    def _start_pumping(self, tank: Tank, ship: Ship) -> None:
        """Attach a ship to a tank and schedule the end of pumping."""
        state = self.state
        tank.assign(ship)

        pump_duration = ship.current_load / self.parameters.pumping_rate
        pump_duration_with_startup = pump_duration + self.parameters.pump_startup_time
        completion_time = state.clock + pump_duration_with_startup
        state.events.push(Event(
            time=completion_time,
            event_type=EventType.PUMPING_COMPLETE,
            tank_id=tank.tank_id,
        ))

        transient = state.transient
        transient.pump_duration = pump_duration
        transient.pump_duration_with_startup = pump_duration_with_startup
        transient.pump_completion_time = completion_time
        transient.tank_load_at_pump_start = tank.current_load
        transient.pump_start_completion_time = completion_time

        self.logger.debug(
            f"Ship {ship.ship_id} assigned to tank {tank.tank_id}, "
            f"pumping ends at {completion_time:.4f}"
        )

    def _next_completion_time(self, tank_id: int) -> float:
        event = self.state.events.next_for_tank(tank_id)
        return event.time if event else self.state.clock

    def _snapshot(self, event: Event) -> SnapshotRow:
        """Assemble the state vector after an event."""
        state = self.state
        tanks = self.tanks
        return SnapshotRow(
            event_number=state.statistics.event_count,
            clock_time=state.clock,
            event_type=event.event_type,
            event_label=event.event_type.label,
            **asdict(state.transient),
            per_tank_completion_info=[
                TankCompletionInfo(
                    tank_id=tank.tank_id,
                    remaining_load=tank.current_load,
                    next_completion_time=self._next_completion_time(tank.tank_id),
                )
                for tank in tanks
            ],
            total_discharged_tonnage=state.statistics.total_discharged_tonnage,
            max_queue_length=state.statistics.max_queue_length,
            per_tank_status=[
                TankStatusInfo(
                    tank_id=tank.tank_id,
                    status=tank.state,
                    remaining_load=tank.current_load,
                    loading_ship_id=tank.loading_ship.ship_id if tank.loading_ship else None,
                )
                for tank in tanks
            ],
        )
