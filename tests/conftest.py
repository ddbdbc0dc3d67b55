"""Shared test fixtures and helpers for metro-progress tests."""

import json

import pytest
from rich.console import Console

from metro_progress.alerts import AlertSequencer
from metro_progress.config import Config
from metro_progress.engine import TripProgressEngine
from metro_progress.lines import yellow_line
from metro_progress.models import Coordinate, Station
from metro_progress.stations import StationTable


# =============================================================================
# Constants
# =============================================================================


# Per-station minutes_to_next of the built-in line, order 0 upward
YELLOW_MINUTES = [3, 3, 11, 3, 6, 3, 4, 5, None]

# A point in the Atlantic, thousands of km from the line
FAR_AWAY = Coordinate(0.0, 0.0)


# =============================================================================
# Test doubles
# =============================================================================


class RecordingGateway:
    """NotificationGateway that records every call, with replace semantics for pending."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.pending: dict[str, tuple[int, str]] = {}

    def schedule_approaching(self, minutes, station_name):
        self.calls.append(("approaching", minutes, station_name))
        self.pending["approaching"] = (minutes, station_name)

    def schedule_arrival(self, minutes, station_name):
        self.calls.append(("arrival", minutes, station_name))
        self.pending["arrival"] = (minutes, station_name)

    def cancel_all(self):
        self.calls.append(("cancel_all",))
        self.pending.clear()

    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]


class RecordingPresenter:
    def __init__(self):
        self.presented = []
        self.dismissed = 0

    def present(self, event):
        self.presented.append(event)

    def dismiss(self):
        self.dismissed += 1


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def table() -> StationTable:
    return yellow_line()


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def engine(table, gateway, presenter) -> TripProgressEngine:
    return TripProgressEngine(table, gateway, Config(), AlertSequencer([presenter]))


# =============================================================================
# Test data helpers
# =============================================================================


def make_station(name="Test Station", order=0, latitude=24.0, longitude=46.0, minutes_to_next=3):
    """Build a Station with sensible defaults."""
    return Station(
        name=name,
        order=order,
        coordinate=Coordinate(latitude, longitude),
        minutes_to_next=minutes_to_next,
    )


def straight_line(count=5, minutes=None, spacing=0.01):
    """A line of `count` stations due north of each other, roughly 1.1 km apart."""
    minutes = minutes or [2] * (count - 1) + [None]
    return StationTable(
        make_station(f"S{i}", i, 24.0 + i * spacing, 46.0, minutes[i])
        for i in range(count)
    )


def at(station: Station) -> Coordinate:
    """Position exactly on a station."""
    return station.coordinate


def near(station: Station, meters_north: float = 50.0) -> Coordinate:
    """Position a short distance north of a station (1 degree latitude ~ 111 km)."""
    return Coordinate(station.coordinate.latitude + meters_north / 111_000, station.coordinate.longitude)


def write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def render_to_text(renderable, width=120) -> str:
    """Capture a Rich renderable as plain text for assertion."""
    console = Console(record=True, width=width, force_terminal=False)
    console.print(renderable)
    return console.export_text()
