"""Value types and pure geographic helpers."""

import math
from dataclasses import dataclass
from enum import Enum

EARTH_RADIUS_METERS = 6_371_008.8


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Station:
    """A stop on the line. Names arrive already localized."""
    name: str
    order: int  # position along the line, unique per line
    coordinate: Coordinate
    minutes_to_next: int | None = None  # travel time to order + 1, None at the terminus


class Direction(Enum):
    FORWARD = "forward"        # towards higher orders
    BACKWARD = "backward"      # towards lower orders
    UNDETERMINED = "undetermined"

    @property
    def opposite(self) -> "Direction":
        if self is Direction.FORWARD:
            return Direction.BACKWARD
        if self is Direction.BACKWARD:
            return Direction.FORWARD
        return Direction.UNDETERMINED


class TripPhase(Enum):
    IDLE = "idle"
    AWAITING_START = "awaiting_start"
    TRACKING = "tracking"
    ARRIVED = "arrived"


def as_coordinate(position) -> Coordinate | None:
    """Accept a Coordinate, a (lat, lon) pair, or None."""
    if position is None or isinstance(position, Coordinate):
        return position
    latitude, longitude = position
    return Coordinate(float(latitude), float(longitude))


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance between two coordinates."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def infer_direction(origin: Station, destination: Station) -> Direction:
    """Direction of travel from origin to destination by order."""
    if destination.order > origin.order:
        return Direction.FORWARD
    if destination.order < origin.order:
        return Direction.BACKWARD
    return Direction.UNDETERMINED


def interpolate(a: Coordinate, b: Coordinate, fraction: float) -> Coordinate:
    """Linear interpolation between two coordinates (fraction clamped to 0..1)."""
    fraction = max(0.0, min(1.0, fraction))
    return Coordinate(
        a.latitude + (b.latitude - a.latitude) * fraction,
        a.longitude + (b.longitude - a.longitude) * fraction,
    )
