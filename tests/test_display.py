"""Tests for the Rich display components."""

from rich.console import Console

from metro_progress.alerts import ApproachingAlert, ArrivalAlert
from metro_progress.config import AlertTiming
from metro_progress.display import (
    ConsoleAlertPresenter, build_alert_banner, build_compact_display, build_error_panel,
    build_header, build_not_found_panel, build_progress_bar, build_stations_table, localize,
)
from metro_progress.display.stations import get_station_style
from metro_progress.engine import TripState
from metro_progress.errors import TripError
from metro_progress.models import Direction, TripPhase

from conftest import at, render_to_text


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


def tracking_state(table, engine, origin, destination, current=None):
    engine.select_destination(table.by_order(destination))
    engine.start_trip(at(table.by_order(origin)))
    if current is not None:
        engine.update_progress(at(table.by_order(current)))
    return engine.snapshot()


# =============================================================================
# TestLocalize
# =============================================================================


class TestLocalize:
    def test_formats_args(self):
        assert localize("alert.arrived", "KAFD") == "You have arrived at KAFD"

    def test_empty(self):
        assert localize("") == ""

    def test_unknown_key_passes_through(self):
        assert localize("some.other.key") == "some.other.key"

    def test_every_error_has_a_message(self):
        for error in TripError:
            assert localize(error.status_key) != error.status_key


# =============================================================================
# TestHeader
# =============================================================================


class TestHeader:
    def test_idle(self):
        text = render_to_text(build_header(TripState()))
        assert "Metro Trip" in text
        assert "From" in text
        assert "—" in text

    def test_tracking(self, table, engine):
        state = tracking_state(table, engine, 1, 4)
        text = render_to_text(build_header(state))
        assert "Airport T3-T4" in text
        assert "PNU 1" in text
        assert "17 min" in text
        assert "forward" in text

    def test_arrived_shows_status(self, table, engine):
        state = tracking_state(table, engine, 1, 4, current=4)
        text = render_to_text(build_header(state))
        assert "Arrived" in text
        assert "You have arrived at PNU 1" in text

    def test_error_status(self, engine):
        engine.start_trip(None)
        text = render_to_text(build_header(engine.snapshot()))
        assert "Choose a destination first" in text


# =============================================================================
# TestStationsTable
# =============================================================================


class TestStationsTable:
    def test_lists_every_station(self, table):
        text = render_to_text(build_stations_table(table, TripState()))
        for station in table:
            assert station.name in text

    def test_forward_order(self, table, engine):
        state = tracking_state(table, engine, 1, 4)
        text = render_to_text(build_stations_table(table, state))
        assert text.index("Airport T1-T2") < text.index("KAFD")
        assert "3 to go" in text

    def test_backward_is_reversed(self, table, engine):
        state = tracking_state(table, engine, 8, 5)
        text = render_to_text(build_stations_table(table, state))
        assert text.index("KAFD") < text.index("Airport T1-T2")

    def test_station_styles(self, table, engine):
        state = tracking_state(table, engine, 0, 6, current=3)
        assert get_station_style(table.by_order(6), state)[1] == "◎"
        assert get_station_style(table.by_order(3), state)[1] == "●"
        assert get_station_style(table.by_order(4), state)[1] == "→"
        assert get_station_style(table.by_order(1), state)[1] == "✓"
        assert get_station_style(table.by_order(5), state)[1] == "○"
        assert get_station_style(table.by_order(8), state)[1] == "·"

    def test_destination_reached_style(self, table, engine):
        state = tracking_state(table, engine, 1, 4, current=4)
        assert get_station_style(table.by_order(4), state)[1] == "◉"


# =============================================================================
# TestProgressBar
# =============================================================================


class TestProgressBar:
    def test_no_trip(self, table):
        text = render_to_text(build_progress_bar(table, TripState()))
        assert "No trip in progress" in text

    def test_mid_trip(self, table, engine):
        state = tracking_state(table, engine, 0, 4, current=2)
        text = render_to_text(build_progress_bar(table, state))
        assert "Trip Progress" in text
        assert "Airport T1-T2" in text
        assert "50%" in text

    def test_arrived(self, table, engine):
        state = tracking_state(table, engine, 1, 4, current=4)
        text = render_to_text(build_progress_bar(table, state))
        assert "100%" in text


# =============================================================================
# TestCompactDisplay
# =============================================================================


class TestCompactDisplay:
    def test_no_destination(self):
        assert "No destination" in build_compact_display(TripState()).plain

    def test_tracking(self, table, engine):
        state = tracking_state(table, engine, 1, 4, current=2)
        plain = build_compact_display(state).plain
        assert "Airport T3-T4 → PNU 1" in plain
        assert "At Airport T5" in plain
        assert "Next: PNU 2" in plain
        assert "2 stops" in plain
        assert "14m" in plain

    def test_alert_marker(self, table, engine):
        state = tracking_state(table, engine, 1, 4, current=3)
        assert "🔔 approaching" in build_compact_display(state).plain

    def test_arrived(self, table, engine):
        state = tracking_state(table, engine, 1, 4, current=4)
        plain = build_compact_display(state).plain
        assert "Arrived" in plain
        assert "stops" not in plain

    def test_status_shown(self):
        state = TripState(status_text="sheet.status.noLocation")
        assert "Waiting for your location" in build_compact_display(state).plain


# =============================================================================
# TestAlertBanner
# =============================================================================


class TestAlertBanner:
    def test_approaching(self):
        text = render_to_text(build_alert_banner(ApproachingAlert("KAFD", 3)))
        assert "Next Stop" in text
        assert "Approaching KAFD" in text
        assert "~3 min" in text

    def test_approaching_without_eta(self):
        text = render_to_text(build_alert_banner(ApproachingAlert("KAFD", 0)))
        assert "min" not in text

    def test_arrival(self):
        text = render_to_text(build_alert_banner(ArrivalAlert("KAFD")))
        assert "Arrived" in text
        assert "You have arrived at KAFD" in text


class TestConsoleAlertPresenter:
    def test_banner_auto_dismisses(self):
        clock = FakeClock()
        presenter = ConsoleAlertPresenter(timing=AlertTiming(banner_auto_dismiss_seconds=5.0), clock=clock)

        presenter.present(ArrivalAlert("KAFD"))
        assert presenter.is_showing
        assert presenter.banner() is not None

        clock.now += 5.0
        assert not presenter.is_showing
        assert presenter.banner() is None
        assert presenter.event is None

    def test_dismiss(self):
        presenter = ConsoleAlertPresenter(clock=FakeClock())
        presenter.present(ApproachingAlert("KAFD", 3))
        presenter.dismiss()
        assert not presenter.is_showing
        assert presenter.pulses_due() == 0

    def test_pulses_due(self):
        clock = FakeClock()
        timing = AlertTiming(pattern_duration_seconds=1.0, pulse_interval_seconds=0.5)
        presenter = ConsoleAlertPresenter(timing=timing, clock=clock)

        presenter.present(ArrivalAlert("KAFD"))
        assert presenter.pulses_due() == 1
        clock.now += 0.6
        assert presenter.pulses_due() == 1
        clock.now += 10
        assert presenter.pulses_due() == 1
        assert presenter.pulses_due() == 0

    def test_rings_console_bell(self):
        console = Console(record=True, force_terminal=False)
        calls = []
        console.bell = lambda: calls.append("bell")
        presenter = ConsoleAlertPresenter(console=console, clock=FakeClock())
        presenter.present(ArrivalAlert("KAFD"))
        assert calls == ["bell"]


# =============================================================================
# TestErrorPanels
# =============================================================================


class TestErrorPanels:
    def test_not_near_any_station(self):
        text = render_to_text(build_error_panel(TripError.NOT_NEAR_ANY_STATION))
        assert "Cannot Start Trip" in text
        assert "too far from the metro line" in text
        assert "--near-distance" in text

    def test_every_error_renders(self):
        for error in TripError:
            assert "Cannot Start Trip" in render_to_text(build_error_panel(error))

    def test_not_found(self):
        text = render_to_text(build_not_found_panel("Olaya"))
        assert "Station Not Found" in text
        assert "Olaya" in text


def test_state_defaults_are_idle():
    state = TripState()
    assert state.phase == TripPhase.IDLE
    assert state.direction is Direction.UNDETERMINED
