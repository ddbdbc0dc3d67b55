"""Trip progress engine: direction, nearest station, ETA and one-shot alerts."""

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Callable

from .alerts import AlertEvent, AlertSequencer, LegAlerts
from .config import Config
from .errors import TripError
from .models import (
    Coordinate, Direction, Station, TripPhase,
    as_coordinate, distance_meters, infer_direction,
)
from .notifications import NotificationGateway
from .progress import compute_remaining, compute_upcoming, station_reached
from .stations import StationTable

logger = logging.getLogger(__name__)

# Status keys surfaced to the presentation layer (localized there)
STATUS_ARRIVED = "alert.arrived"
STATUS_ALREADY_AT_DESTINATION = "trip.status.alreadyAtDestination"
STATUS_CHOOSE_DESTINATION = "sheet.status.chooseDestination"
STATUS_END_TRIP_FIRST = "sheet.status.endTripFirst"


@dataclass
class TripState:
    """Everything the engine knows about the current trip. Owned by the engine."""
    selected_destination: Station | None = None
    start_station: Station | None = None
    last_passed_station: Station | None = None
    current_nearest_station: Station | None = None
    next_station: Station | None = None
    direction: Direction = Direction.UNDETERMINED
    stations_remaining: int = 0
    eta_minutes: int = 0
    upcoming_stations: tuple[Station, ...] = ()
    is_tracking: bool = False
    leg: LegAlerts = field(default_factory=LegAlerts)
    is_changing_destination: bool = False
    phase: TripPhase = TripPhase.IDLE
    status_text: str = ""
    status_args: tuple[str, ...] = ()
    show_arrival_sheet: bool = False
    active_alert: AlertEvent | None = None

    @property
    def fired_approaching(self) -> bool:
        return self.leg.fired_approaching

    @property
    def fired_arrival(self) -> bool:
        return self.leg.fired_arrival


Listener = Callable[[TripState], None]


def reference_station(state: TripState) -> Station | None:
    """Station the rider is known to have reached most recently."""
    return state.last_passed_station or state.current_nearest_station or state.start_station


class TripProgressEngine:
    """
    Single-rider, single-line trip tracker.

    Every public operation runs under one re-entrant lock, so position fixes
    from a location thread and user actions from a UI thread are applied one
    at a time in arrival order. After each mutation, subscribers receive a
    snapshot of the TripState.

    Notification scheduling is delegated to the gateway and never waited on.
    """

    def __init__(
        self,
        table: StationTable,
        gateway: NotificationGateway,
        config: Config | None = None,
        sequencer: AlertSequencer | None = None,
    ):
        self.table = table
        self.gateway = gateway
        self.config = config or Config()
        self.sequencer = sequencer or AlertSequencer()
        self._state = TripState()
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> TripState:
        """The live state. Threads other than the caller's should use snapshot()."""
        return self._state

    @property
    def phase(self) -> TripPhase:
        return self._state.phase

    def snapshot(self) -> TripState:
        with self._lock:
            return replace(self._state, leg=replace(self._state.leg))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Trip control
    # ------------------------------------------------------------------

    def select_destination(self, station: Station) -> None:
        with self._lock:
            state = self._state
            if station not in self.table:
                logger.warning(f"Ignoring destination not on this line: {station.name}")
                self._set_status(STATUS_CHOOSE_DESTINATION)
            elif state.is_tracking:
                logger.warning("Destination change requested while tracking; cancel the trip first")
                self._set_status(STATUS_END_TRIP_FIRST)
            else:
                state.selected_destination = station
                state.phase = TripPhase.AWAITING_START
                self._set_status("")
                logger.info(f"Destination selected: {station.name} (order {station.order})")
            self._publish()

    def start_trip(self, position: Coordinate | tuple[float, float] | None = None) -> TripError | None:
        """
        Start a leg towards the selected destination.

        A fresh start needs a fix within near_station_distance of the line.
        After cancel_and_choose_again the last passed station is used as the
        origin instead, so no fix is needed.

        Returns the TripError that prevented the start, or None.
        """
        with self._lock:
            error = self._start_trip(as_coordinate(position))
            if error is not None:
                logger.warning(f"Cannot start trip: {error.name}")
                self._set_status(error.status_key)
            self._publish()
            return error

    def update_progress(self, position: Coordinate | tuple[float, float] | None) -> None:
        """Apply a position fix. Ignored without a fix or when no leg is being tracked."""
        position = as_coordinate(position)
        with self._lock:
            if position is None or not self._state.is_tracking:
                return
            self._refresh(position)
            self._publish()

    # Entry point for location providers
    location_updated = update_progress

    def end_trip(self) -> None:
        with self._lock:
            logger.info("Trip ended")
            self._state = TripState()
            self.gateway.cancel_all()
            self.sequencer.dismiss()
            self._publish()

    def cancel_and_choose_again(self) -> None:
        """Abandon the current leg but remember where the rider is."""
        with self._lock:
            state = self._state
            state.is_tracking = False
            if state.current_nearest_station is not None:
                state.last_passed_station = state.current_nearest_station

            state.selected_destination = None
            state.next_station = None
            state.stations_remaining = 0
            state.eta_minutes = 0
            state.upcoming_stations = ()
            state.show_arrival_sheet = False
            state.direction = Direction.UNDETERMINED
            state.leg.reset()
            state.active_alert = None
            state.is_changing_destination = True
            state.phase = TripPhase.IDLE
            self._set_status("")

            self.gateway.cancel_all()
            self.sequencer.dismiss()
            logger.info("Leg cancelled; waiting for a new destination")
            self._publish()

    def clear_active_alert(self) -> None:
        with self._lock:
            self._state.active_alert = None
            self._publish()

    def dismiss_arrival_sheet(self) -> None:
        with self._lock:
            self._state.show_arrival_sheet = False
            self._publish()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_station_reached(self, station: Station) -> bool:
        """Whether station is on the already-passed side of the rider's position."""
        with self._lock:
            return station_reached(station, self._state.direction, reference_station(self._state))

    @property
    def middle_stations(self) -> tuple[Station, ...]:
        """Stations strictly between the start station and the destination."""
        with self._lock:
            start = self._state.start_station
            destination = self._state.selected_destination
            if start is None or destination is None:
                return ()
            return self.table.stations_between(
                start.order, destination.order, infer_direction(start, destination)
            )

    # ------------------------------------------------------------------
    # Internals (lock held)
    # ------------------------------------------------------------------

    def _start_trip(self, position: Coordinate | None) -> TripError | None:
        state = self._state
        destination = state.selected_destination
        if destination is None:
            return TripError.NO_DESTINATION_SELECTED

        if state.is_changing_destination:
            origin = state.last_passed_station or state.start_station
            if origin is None:
                return TripError.UNKNOWN_ORIGIN_STATE
            state.start_station = origin
            origin_position = origin.coordinate
            same_station_status = STATUS_ARRIVED
        else:
            if position is None:
                return TripError.NO_LOCATION_FIX
            if not self.table.is_within_range(position, self.config.near_station_distance):
                return TripError.NOT_NEAR_ANY_STATION
            origin = self.table.nearest(position)
            state.start_station = origin
            state.last_passed_station = origin
            origin_position = position
            same_station_status = STATUS_ALREADY_AT_DESTINATION

        if destination.order == origin.order:
            self._arrive_at_origin(destination, same_station_status)
            return None

        state.direction = infer_direction(origin, destination)
        state.is_tracking = True
        state.phase = TripPhase.TRACKING
        state.show_arrival_sheet = False
        state.active_alert = None
        state.leg.reset()
        state.is_changing_destination = False
        self._set_status("")
        logger.info(
            f"Trip started: {origin.name} -> {destination.name} ({state.direction.value})"
        )

        self._refresh(origin_position)
        if state.is_tracking:
            self._schedule_leg_notifications(destination)
        return None

    def _arrive_at_origin(self, destination: Station, status_key: str) -> None:
        state = self._state
        state.current_nearest_station = destination
        state.stations_remaining = 0
        state.eta_minutes = 0
        state.next_station = None
        state.upcoming_stations = ()
        state.direction = Direction.UNDETERMINED
        state.show_arrival_sheet = True
        state.is_tracking = False
        state.phase = TripPhase.ARRIVED
        self._set_status(status_key, destination.name)

        state.leg.reset()
        state.active_alert = self.sequencer.arrival(state.leg, destination)
        self.gateway.cancel_all()
        logger.info(f"Already at destination {destination.name}")

    def _schedule_leg_notifications(self, destination: Station) -> None:
        eta = self._state.eta_minutes
        lead = self.config.approaching_lead_minutes
        if eta > lead:
            self.gateway.schedule_approaching(max(eta - lead, 1), destination.name)
        if eta > 0:
            self.gateway.schedule_arrival(eta, destination.name)

    def _refresh(self, position: Coordinate) -> None:
        state = self._state
        destination = state.selected_destination
        if destination is None:
            return

        nearest = self.table.nearest(position)
        # TODO: ignore nearest-station changes against the direction of travel (GPS jitter)
        if state.current_nearest_station is None or state.current_nearest_station.order != nearest.order:
            state.last_passed_station = nearest
        state.current_nearest_station = nearest

        remaining = compute_remaining(self.table, nearest, destination, state.direction)
        state.stations_remaining = remaining.stations
        state.eta_minutes = remaining.minutes
        state.next_station = remaining.next
        state.upcoming_stations = compute_upcoming(self.table, nearest, destination, state.direction)
        logger.debug(
            f"Nearest {nearest.name}: {remaining.stations} stations, {remaining.minutes} min left"
        )

        if distance_meters(position, destination.coordinate) <= self.config.arrival_distance:
            self._arrive(destination)
            return

        self._set_status("")

        approach_from = self.table.neighbor(destination, state.direction.opposite)
        if approach_from is not None and nearest.order == approach_from.order:
            event = self.sequencer.approaching(state.leg, destination, state.eta_minutes)
            if event is not None:
                state.active_alert = event
                self.gateway.schedule_approaching(0, destination.name)

    def _arrive(self, destination: Station) -> None:
        state = self._state
        state.stations_remaining = 0
        state.eta_minutes = 0
        state.next_station = None
        state.upcoming_stations = ()
        state.is_tracking = False
        state.show_arrival_sheet = True
        state.phase = TripPhase.ARRIVED
        self._set_status(STATUS_ARRIVED, destination.name)

        event = self.sequencer.arrival(state.leg, destination)
        if event is not None:
            state.active_alert = event
            self.gateway.cancel_all()
            self.gateway.schedule_arrival(0, destination.name)
            logger.info(f"Arrived at {destination.name}")

    def _set_status(self, key: str, *args: str) -> None:
        self._state.status_text = key
        self._state.status_args = tuple(args)

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = replace(self._state, leg=replace(self._state.leg))
        for listener in list(self._listeners):
            listener(snapshot)
