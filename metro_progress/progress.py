"""Pure journey calculations: stations remaining, ETA, upcoming stations."""

from typing import NamedTuple

from .models import Direction, Station
from .stations import StationTable


class Remaining(NamedTuple):
    stations: int
    minutes: int
    next: Station | None


def compute_upcoming(
    table: StationTable, current: Station, destination: Station, direction: Direction,
) -> tuple[Station, ...]:
    """Stations strictly beyond current up to and including destination, in travel order."""
    return table.stations_between(current.order, destination.order, direction, include_to=True)


def segment_minutes(a: Station, b: Station) -> int:
    """Travel time between two adjacent stations, whichever way round they are given."""
    lower = a if a.order < b.order else b
    return lower.minutes_to_next or 0


def compute_remaining(
    table: StationTable, current: Station, destination: Station, direction: Direction,
) -> Remaining:
    """
    Count the stations left and sum the travel time from current to destination.

    Each traversed segment contributes the minutes_to_next of its lower-order
    station, so a forward trip from order 1 to 4 sums orders 1, 2 and 3, and
    the reverse trip sums the same three segments.

    With an undetermined direction only the order difference is known:
    returns (|delta order|, 0, None).
    """
    if direction is Direction.UNDETERMINED:
        return Remaining(abs(destination.order - current.order), 0, None)

    path = compute_upcoming(table, current, destination, direction)
    if not path:
        return Remaining(0, 0, None)

    minutes = 0
    previous = current
    for station in path:
        minutes += segment_minutes(previous, station)
        previous = station

    return Remaining(len(path), minutes, path[0])


def station_reached(station: Station, direction: Direction, reference: Station | None) -> bool:
    """Whether station lies on the already-passed side of reference for this direction."""
    if reference is None or direction is Direction.UNDETERMINED:
        return False
    if direction is Direction.FORWARD:
        return station.order <= reference.order
    return station.order >= reference.order


def calculate_progress(
    table: StationTable, start: Station | None, destination: Station | None, remaining: int,
) -> tuple[int, int]:
    """Journey progress as (completed, total) station steps."""
    if start is None or destination is None:
        return 0, 0

    lo, hi = sorted((start.order, destination.order))
    total = sum(1 for s in table if lo < s.order <= hi)
    completed = max(0, min(total, total - remaining))
    return completed, total
