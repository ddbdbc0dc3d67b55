"""Static, ordered station table for a single line."""

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator

from .models import Coordinate, Direction, Station, as_coordinate, distance_meters

logger = logging.getLogger(__name__)


class StationTable:
    """
    Read-only, order-sorted list of the stations on one line.

    Provides the geographic and range queries the trip engine relies on:
    - nearest station to a position (ties go to the lowest order)
    - whether a position is close enough to the line at all
    - the stations lying between two orders, in travel direction
    """

    def __init__(self, stations: Iterable[Station]):
        ordered = sorted(stations, key=lambda s: s.order)
        if not ordered:
            raise ValueError("A station table needs at least one station")

        self._by_order: dict[int, Station] = {}
        for station in ordered:
            if station.order in self._by_order:
                raise ValueError(
                    f"Duplicate station order {station.order}: "
                    f"{self._by_order[station.order].name!r} and {station.name!r}"
                )
            self._by_order[station.order] = station

        self._stations: tuple[Station, ...] = tuple(ordered)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "StationTable":
        """Build a table from seed records (name, order, latitude, longitude, minutes_to_next)."""
        stations = []
        for record in records:
            try:
                stations.append(Station(
                    name=str(record["name"]),
                    order=int(record["order"]),
                    coordinate=Coordinate(float(record["latitude"]), float(record["longitude"])),
                    minutes_to_next=(
                        int(record["minutes_to_next"])
                        if record.get("minutes_to_next") is not None else None
                    ),
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid station record {record!r}: {e}") from e
        return cls(stations)

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    def __contains__(self, station: object) -> bool:
        return isinstance(station, Station) and self._by_order.get(station.order) == station

    @property
    def stations(self) -> tuple[Station, ...]:
        return self._stations

    def by_order(self, order: int) -> Station | None:
        return self._by_order.get(order)

    def find(self, query: str | int) -> Station | None:
        """Look up a station by order or by (case-insensitive, partial) name."""
        if isinstance(query, int) or str(query).lstrip("-").isdigit():
            return self.by_order(int(query))

        needle = str(query).strip().lower()
        if not needle:
            return None
        for station in self._stations:
            if station.name.lower() == needle:
                return station
        for station in self._stations:
            if needle in station.name.lower():
                return station
        return None

    def nearest(self, position) -> Station:
        """Station closest to position by great-circle distance."""
        position = as_coordinate(position)
        # min() keeps the first of equal keys, so ties resolve to the lowest order
        return min(self._stations, key=lambda s: distance_meters(s.coordinate, position))

    def is_within_range(self, position, radius_meters: float) -> bool:
        position = as_coordinate(position)
        return any(
            distance_meters(s.coordinate, position) <= radius_meters
            for s in self._stations
        )

    def stations_between(
        self,
        from_order: int,
        to_order: int,
        direction: Direction,
        include_to: bool = False,
    ) -> tuple[Station, ...]:
        """
        Stations strictly between two orders, sorted in direction of travel.

        `from_order` is always excluded; `to_order` only when include_to is False.
        An undetermined direction, or one that points away from to_order,
        yields an empty tuple.
        """
        if direction is Direction.FORWARD and from_order < to_order:
            return tuple(
                s for s in self._stations
                if from_order < s.order < to_order or (include_to and s.order == to_order)
            )
        if direction is Direction.BACKWARD and from_order > to_order:
            return tuple(
                s for s in reversed(self._stations)
                if to_order < s.order < from_order or (include_to and s.order == to_order)
            )
        return ()

    def neighbor(self, station: Station, direction: Direction) -> Station | None:
        """Adjacent station one step from `station` in `direction`."""
        if direction is Direction.FORWARD:
            candidates = [s for s in self._stations if s.order > station.order]
            return candidates[0] if candidates else None
        if direction is Direction.BACKWARD:
            candidates = [s for s in self._stations if s.order < station.order]
            return candidates[-1] if candidates else None
        return None


def load_station_table(path: str | Path) -> StationTable:
    """Load a station table from a JSON list of seed records."""
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON list of station records")

    table = StationTable.from_records(records)
    logger.info(f"Loaded {len(table)} stations from {path}")
    return table
