"""Error display panels."""

from rich.panel import Panel
from rich.text import Text

from ..errors import TripError
from .messages import localize

HINTS = {
    TripError.NO_DESTINATION_SELECTED: "Pass a destination station name or order.",
    TripError.NO_LOCATION_FIX: "No position sample was available to start from.",
    TripError.NOT_NEAR_ANY_STATION: "Move closer to a station, or raise --near-distance.",
    TripError.UNKNOWN_ORIGIN_STATE: "End the trip and start again from a station.",
}


def build_error_panel(error: TripError) -> Panel:
    """Build a panel explaining why a trip could not start."""
    content = Text()
    content.append(localize(error.status_key), style="bold red")
    hint = HINTS.get(error)
    if hint:
        content.append(f"\n\n{hint}", style="dim")

    return Panel(
        content,
        title="[bold red]Cannot Start Trip[/]",
        border_style="red"
    )


def build_not_found_panel(query: str) -> Panel:
    """Build a panel for a station that is not on the line."""
    content = Text()
    content.append(f"No station matching '{query}'.\n\n", style="bold yellow")
    content.append("Use a station name (or part of it) or its order number.", style="white")

    return Panel(
        content,
        title="[bold yellow]Station Not Found[/]",
        border_style="yellow"
    )
