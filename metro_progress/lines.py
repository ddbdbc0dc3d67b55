"""Seed data for the built-in line."""

from .models import Coordinate, Station
from .stations import StationTable

# Airport to KAFD, order 0 at the airport end.
YELLOW_LINE: tuple[Station, ...] = (
    Station("Airport T1-T2", 0, Coordinate(24.9609970, 46.6989819), minutes_to_next=3),
    Station("Airport T3-T4", 1, Coordinate(24.9560402, 46.7021429), minutes_to_next=3),
    Station("Airport T5", 2, Coordinate(24.9407856, 46.7102385), minutes_to_next=11),
    Station("PNU 2", 3, Coordinate(24.8596218, 46.7045103), minutes_to_next=3),
    Station("PNU 1", 4, Coordinate(24.8414744, 46.7174164), minutes_to_next=6),
    Station("SABIC", 5, Coordinate(24.8070691, 46.7095294), minutes_to_next=3),
    Station("Uthman Bin Affan", 6, Coordinate(24.8013955, 46.6961421), minutes_to_next=4),
    Station("Ar Rabi", 7, Coordinate(24.7862360, 46.6601248), minutes_to_next=5),
    Station("KAFD", 8, Coordinate(24.7671553, 46.6432711), minutes_to_next=None),
)


def yellow_line() -> StationTable:
    return StationTable(YELLOW_LINE)
