"""Position streams for replaying or simulating a ride."""

import json
from pathlib import Path
from typing import Iterator

from .models import Coordinate, Station, as_coordinate, infer_direction, interpolate
from .stations import StationTable


def simulate_ride(
    table: StationTable, origin: Station, destination: Station, steps: int = 4,
) -> Iterator[Coordinate]:
    """
    Yield positions for a ride from origin to destination.

    Each segment between adjacent stations is split into `steps` samples
    (linear interpolation), and the ride ends exactly on the destination.
    """
    steps = max(1, steps)
    direction = infer_direction(origin, destination)
    path = [origin, *table.stations_between(origin.order, destination.order, direction, include_to=True)]

    for a, b in zip(path, path[1:]):
        for i in range(steps):
            yield interpolate(a.coordinate, b.coordinate, i / steps)
    yield destination.coordinate


def load_track(path: str | Path) -> list[Coordinate | None]:
    """
    Load a recorded position track.

    The file is a JSON list whose items are [lat, lon] pairs,
    {"latitude": .., "longitude": ..} objects, or null for a missing fix.
    """
    with open(path, encoding="utf-8") as f:
        items = json.load(f)
    if not isinstance(items, list):
        raise ValueError(f"{path}: expected a JSON list of positions")

    track = []
    for item in items:
        if isinstance(item, dict):
            item = (item["latitude"], item["longitude"])
        track.append(as_coordinate(item))
    return track
