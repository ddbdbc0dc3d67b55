"""Station list display."""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..engine import TripState, reference_station
from ..models import Direction, Station
from ..progress import station_reached
from ..stations import StationTable


def get_station_style(station: Station, state: TripState) -> tuple[str, str]:
    """Get display style and icon for a station given the trip state."""
    current = state.current_nearest_station
    destination = state.selected_destination

    if destination is not None and station.order == destination.order:
        if current is not None and current.order == destination.order:
            return "green bold", "◉"
        return "magenta bold", "◎"
    if current is not None and station.order == current.order:
        return "cyan bold", "●"
    if state.next_station is not None and station.order == state.next_station.order:
        return "yellow bold", "→"
    if station_reached(station, state.direction, reference_station(state)):
        return "green", "✓"
    if station in state.upcoming_stations:
        return "white", "○"
    return "dim", "·"


def build_stations_table(table: StationTable, state: TripState) -> Panel:
    """Build the line's station list, ordered in the direction of travel."""
    stations = list(table)
    if state.direction is Direction.BACKWARD:
        stations.reverse()

    grid = Table(
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
        expand=True,
    )
    grid.add_column("", width=2, justify="center")
    grid.add_column("Station", min_width=20)
    grid.add_column("#", width=3, justify="right")
    grid.add_column("Min to next", width=12, justify="center")

    for station in stations:
        style, icon = get_station_style(station, state)
        minutes = str(station.minutes_to_next) if station.minutes_to_next else ""
        grid.add_row(
            Text(icon, style=style),
            Text(station.name, style=style),
            Text(str(station.order), style="dim"),
            minutes,
        )

    title_parts = ["[bold]Stations[/]"]
    if state.upcoming_stations:
        title_parts.append(f"[dim]({len(state.upcoming_stations)} to go)[/]")

    return Panel(grid, title=" ".join(title_parts), border_style="magenta")
