#!/usr/bin/env python3
"""
metro-progress — Metro trip progress tracker TUI

Tracks a ride along a metro line from a stream of positions, showing the
nearest station, stations remaining and ETA, and alerting when the
destination is next and when it is reached.

Usage:
    metro-progress KAFD                        # Simulated ride to KAFD from the far end
    metro-progress KAFD --from "PNU 2"         # Simulated ride from PNU 2
    metro-progress 4 --track ride.json         # Replay a recorded track to order 4
    metro-progress KAFD --compact              # Single-line updates
    metro-progress KAFD --notify               # Desktop notifications
"""

import argparse
import logging
import sys
from time import sleep

from rich.console import Console, Group
from rich.live import Live

from .alerts import AlertSequencer
from .config import (
    Config, ARRIVAL_DISTANCE, NEAR_STATION_DISTANCE, REFRESH_INTERVAL, SIMULATION_STEPS,
)
from .display import (
    ConsoleAlertPresenter, build_compact_display, build_error_panel, build_header,
    build_not_found_panel, build_progress_bar, build_stations_table,
)
from .engine import TripProgressEngine, TripState
from .lines import yellow_line
from .logging_config import setup_logging
from .models import Station
from .notifications import (
    DesktopNotificationGateway, InMemoryNotificationGateway, MIN_DELAY_SECONDS,
)
from .simulate import load_track, simulate_ride
from .stations import StationTable, load_station_table

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="metro-progress",
        description="Track a metro ride and get alerted before your stop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s KAFD                     # Simulated ride to KAFD
    %(prog)s KAFD --from "PNU 2"      # Simulated ride starting at PNU 2
    %(prog)s 4 --track ride.json      # Replay a recorded position track
    %(prog)s KAFD --compact           # Single-line output
    %(prog)s KAFD --notify            # Send desktop notifications

Stations can be given by name (or part of it) or by order number.
A track file is a JSON list of [lat, lon] pairs (null for a missing fix).
        """
    )
    parser.add_argument(
        "destination",
        help="Destination station name or order"
    )
    parser.add_argument(
        "--from",
        dest="from_station",
        metavar="STATION",
        help="Station to start a simulated ride from (default: far end of the line)"
    )
    parser.add_argument(
        "--track",
        metavar="FILE",
        help="Replay positions from a JSON track file instead of simulating"
    )
    parser.add_argument(
        "--stations",
        metavar="FILE",
        help="Load the line from a JSON station file (default: built-in yellow line)"
    )
    parser.add_argument(
        "-r", "--refresh",
        type=float,
        default=REFRESH_INTERVAL,
        help=f"Seconds between position samples (default: {REFRESH_INTERVAL})"
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=SIMULATION_STEPS,
        help=f"Samples per segment when simulating (default: {SIMULATION_STEPS})"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Start the trip, display once and exit"
    )
    parser.add_argument(
        "--compact", "-c",
        action="store_true",
        help="Compact single-line output (for status bars, tmux, etc.)"
    )
    parser.add_argument(
        "--notify",
        action="store_true",
        help="Send desktop notifications for approaching/arrival alerts"
    )
    parser.add_argument(
        "--near-distance",
        type=float,
        default=NEAR_STATION_DISTANCE,
        metavar="METERS",
        help=f"Max distance from a station to start a trip (default: {NEAR_STATION_DISTANCE:.0f})"
    )
    parser.add_argument(
        "--arrival-distance",
        type=float,
        default=ARRIVAL_DISTANCE,
        metavar="METERS",
        help=f"Distance to the destination that counts as arrived (default: {ARRIVAL_DISTANCE:.0f})"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also write logs to a rotating file"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    return Config(
        near_station_distance=args.near_distance,
        arrival_distance=args.arrival_distance,
        refresh_interval=args.refresh,
        simulation_steps=args.steps,
        compact_mode=args.compact,
        notify=args.notify,
        stations_file=args.stations,
        track_file=args.track,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def load_table(config: Config) -> StationTable:
    if config.stations_file:
        return load_station_table(config.stations_file)
    return yellow_line()


def default_origin(table: StationTable, destination: Station) -> Station:
    """End of the line farthest (by order) from the destination."""
    first, last = table.stations[0], table.stations[-1]
    if destination.order - first.order >= last.order - destination.order:
        return first
    return last


def build_display(table: StationTable, state: TripState, presenter: ConsoleAlertPresenter | None = None) -> Group:
    """Full-screen view: header, alert banner, progress bar and station list."""
    parts = [build_header(state)]
    banner = presenter.banner() if presenter else None
    if banner is not None:
        parts.append(banner)
    parts.append(build_progress_bar(table, state))
    parts.append(build_stations_table(table, state))
    return Group(*parts)


def replay(engine: TripProgressEngine, positions, config: Config, on_update) -> None:
    """Feed positions to the engine until the stream ends or the leg stops tracking."""
    for position in positions:
        if not engine.snapshot().is_tracking:
            break
        sleep(config.refresh_interval)
        engine.location_updated(position)
        on_update(engine.snapshot())


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = build_config(args)
    setup_logging(config.log_level, config.log_file)

    console = Console()

    try:
        table = load_table(config)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not load stations: {e}[/]")
        return 1

    destination = table.find(args.destination)
    if destination is None:
        console.print(build_not_found_panel(args.destination))
        return 1

    if config.track_file:
        try:
            positions = load_track(config.track_file)
        except (OSError, ValueError, KeyError, TypeError) as e:
            console.print(f"[red]Could not load track: {e}[/]")
            return 1
    else:
        origin = table.find(args.from_station) if args.from_station else default_origin(table, destination)
        if origin is None:
            console.print(build_not_found_panel(args.from_station))
            return 1
        positions = list(simulate_ride(table, origin, destination, config.simulation_steps))

    logger.info(f"Replaying {len(positions)} positions towards {destination.name}")

    if config.notify:
        gateway = DesktopNotificationGateway()
    else:
        gateway = InMemoryNotificationGateway()

    presenter = ConsoleAlertPresenter(console, config.alert_timing)
    engine = TripProgressEngine(table, gateway, config, AlertSequencer([presenter]))

    engine.select_destination(destination)
    first = positions[0] if positions else None
    error = engine.start_trip(first)
    if error is not None:
        console.print(build_error_panel(error))
        return 1

    if args.once:
        console.print(build_compact_display(engine.snapshot()) if config.compact_mode
                      else build_display(table, engine.snapshot(), presenter))
        return 0

    try:
        if config.compact_mode:
            console.print(build_compact_display(engine.snapshot()))
            replay(engine, positions[1:], config,
                   lambda state: console.print(build_compact_display(state)))
        else:
            with Live(
                build_display(table, engine.snapshot(), presenter),
                console=console,
                refresh_per_second=4,
            ) as live:
                replay(engine, positions[1:], config,
                       lambda state: live.update(build_display(table, state, presenter)))
    except KeyboardInterrupt:
        engine.end_trip()
        console.print("\n[dim]Tracking stopped.[/]")
        return 0

    state = engine.snapshot()
    if state.is_tracking:
        console.print("[yellow]Position stream ended before reaching the destination.[/]")
    elif config.notify and isinstance(gateway, DesktopNotificationGateway) and gateway.pending():
        # Let the immediate arrival notification go out before exiting
        sleep(MIN_DELAY_SECONDS + 0.5)
    return 0


if __name__ == "__main__":
    sys.exit(main())
