"""Single-line compact display mode."""

from rich.text import Text

from ..engine import TripState
from ..models import TripPhase
from .messages import localize


def build_compact_display(state: TripState) -> Text:
    """Build a single-line compact display for the trip status."""
    compact = Text()
    compact.append("🚇 ", style="bold")

    destination = state.selected_destination
    if destination is None:
        compact.append("No destination", style="dim")
    else:
        origin = state.start_station.name if state.start_station else "?"
        compact.append(f"{origin} → {destination.name}", style="bold")

    if state.phase == TripPhase.ARRIVED:
        compact.append(" | Arrived", style="green bold")
    elif state.is_tracking:
        nearest = state.current_nearest_station.name if state.current_nearest_station else "—"
        nxt = state.next_station.name if state.next_station else "—"
        compact.append(" | ")
        compact.append(f"At {nearest}", style="cyan")
        compact.append(f" | Next: {nxt}")
        compact.append(f" | {state.stations_remaining} stops")
        compact.append(f" | {state.eta_minutes}m")

    if state.active_alert is not None:
        compact.append(f" | 🔔 {state.active_alert.kind}", style="yellow bold")

    status = localize(state.status_text, *state.status_args)
    if status and state.phase != TripPhase.ARRIVED:
        compact.append(f" | {status}", style="yellow")

    return compact
