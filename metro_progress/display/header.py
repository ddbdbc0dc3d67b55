"""Trip header panel: where the rider is going and how long it will take."""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..engine import TripState
from ..models import Direction, TripPhase
from .messages import localize


def _station_name(station) -> str:
    return station.name if station else "—"


def _format_eta(state: TripState) -> tuple[str, str]:
    """ETA display text and style."""
    if state.phase == TripPhase.ARRIVED:
        return "Arrived", "green bold"
    if not state.is_tracking:
        return "—", "dim"
    if state.eta_minutes <= 0:
        return "< 1 min", "yellow bold"
    if state.eta_minutes <= 3:
        return f"{state.eta_minutes} min", "yellow bold"
    return f"{state.eta_minutes} min", "cyan"


def _direction_label(direction: Direction) -> str:
    if direction is Direction.FORWARD:
        return "▶ forward"
    if direction is Direction.BACKWARD:
        return "◀ backward"
    return "—"


def build_header(state: TripState) -> Panel:
    """Build the header panel for the current trip."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim", justify="right")
    grid.add_column()
    grid.add_column(style="dim", justify="right")
    grid.add_column()

    eta_text, eta_style = _format_eta(state)

    grid.add_row(
        "From", Text(_station_name(state.start_station), style="bold"),
        "To", Text(_station_name(state.selected_destination), style="bold magenta"),
    )
    grid.add_row(
        "Nearest", Text(_station_name(state.current_nearest_station), style="cyan"),
        "Next", Text(_station_name(state.next_station), style="cyan"),
    )
    grid.add_row(
        "Stations left", Text(str(state.stations_remaining), style="bold"),
        "ETA", Text(eta_text, style=eta_style),
    )
    grid.add_row("Direction", _direction_label(state.direction), "", "")

    status = localize(state.status_text, *state.status_args)
    if status:
        grid.add_row("Status", Text(status, style="yellow"), "", "")

    if state.phase == TripPhase.ARRIVED:
        border = "green"
    elif state.is_tracking:
        border = "blue"
    else:
        border = "dim"

    return Panel(grid, title="[bold]🚇 Metro Trip[/]", border_style=border)
