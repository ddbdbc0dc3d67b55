"""Trip progress bar display."""

from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn

from ..engine import TripState
from ..progress import calculate_progress
from ..stations import StationTable


def build_progress_bar(table: StationTable, state: TripState) -> Panel:
    """Build a visual progress bar for the trip."""
    completed, total = calculate_progress(
        table, state.start_station, state.selected_destination, state.stations_remaining
    )

    if total == 0:
        return Panel("No trip in progress", title="Progress")

    progress = Progress(
        TextColumn("[bold blue]{task.fields[origin]}"),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TextColumn("[bold blue]{task.fields[dest]}"),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
    )

    progress.add_task(
        "trip",
        total=total,
        completed=completed,
        origin=state.start_station.name[:15],
        dest=state.selected_destination.name[:15],
    )

    return Panel(progress, title="[bold]Trip Progress[/]", border_style="blue")
