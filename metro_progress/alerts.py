"""Alert-once sequencing: approaching and arrival events per trip leg."""

import logging
from dataclasses import dataclass
from typing import Protocol

from .config import AlertTiming
from .models import Station

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApproachingAlert:
    station_name: str
    eta_minutes: int

    @property
    def kind(self) -> str:
        return "approaching"


@dataclass(frozen=True)
class ArrivalAlert:
    station_name: str

    @property
    def kind(self) -> str:
        return "arrival"


AlertEvent = ApproachingAlert | ArrivalAlert


@dataclass
class LegAlerts:
    """One-shot flags for the current leg."""
    fired_approaching: bool = False
    fired_arrival: bool = False

    def reset(self) -> None:
        self.fired_approaching = False
        self.fired_arrival = False


class AlertPresenter(Protocol):
    """Host capability that turns an alert into something the rider notices."""

    def present(self, event: AlertEvent) -> None:
        ...

    def dismiss(self) -> None:
        ...


class AlertSequencer:
    """
    Turns engine edge-triggers into discrete alert events.

    At most one approaching and one arrival event is produced per leg; the
    flags live in the LegAlerts record passed in, which the engine resets
    whenever a leg starts or is abandoned.
    """

    def __init__(self, presenters: list[AlertPresenter] | None = None):
        self.presenters: list[AlertPresenter] = list(presenters or [])

    def add_presenter(self, presenter: AlertPresenter) -> None:
        self.presenters.append(presenter)

    def approaching(self, leg: LegAlerts, station: Station, eta_minutes: int) -> ApproachingAlert | None:
        if leg.fired_approaching:
            return None
        leg.fired_approaching = True
        event = ApproachingAlert(station.name, eta_minutes)
        self._emit(event)
        return event

    def arrival(self, leg: LegAlerts, station: Station) -> ArrivalAlert | None:
        if leg.fired_arrival:
            return None
        leg.fired_arrival = True
        event = ArrivalAlert(station.name)
        self._emit(event)
        return event

    def dismiss(self) -> None:
        for presenter in self.presenters:
            presenter.dismiss()

    def _emit(self, event: AlertEvent) -> None:
        logger.info(f"Alert: {event.kind} at {event.station_name}")
        for presenter in self.presenters:
            presenter.present(event)


def pulse_schedule(timing: AlertTiming) -> list[float]:
    """
    Offsets (seconds from the alert) at which haptics/torch should pulse.

    Pulses repeat every pulse_interval_seconds, starting immediately and
    stopping once pattern_duration_seconds has elapsed.
    """
    interval = timing.pulse_interval_seconds
    if interval <= 0 or timing.pattern_duration_seconds <= 0:
        return []

    count = int(timing.pattern_duration_seconds / interval + 1e-9)
    return [round(i * interval, 6) for i in range(count + 1)]
