"""Recoverable trip errors and the status keys they surface as."""

from enum import Enum


class TripError(Enum):
    NO_DESTINATION_SELECTED = "sheet.status.chooseDestination"
    NO_LOCATION_FIX = "sheet.status.noLocation"
    NOT_NEAR_ANY_STATION = "sheet.status.notNearMetro"
    UNKNOWN_ORIGIN_STATE = "error.unknown"

    @property
    def status_key(self) -> str:
        return self.value
