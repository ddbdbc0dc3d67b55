"""English strings for the status keys published by the engine."""

MESSAGES = {
    "alert.arrived": "You have arrived at {0}",
    "alert.approaching": "Approaching {0}",
    "trip.status.alreadyAtDestination": "You are already at {0}",
    "sheet.status.chooseDestination": "Choose a destination first",
    "sheet.status.endTripFirst": "End or cancel the current trip before choosing a new destination",
    "sheet.status.noLocation": "Waiting for your location",
    "sheet.status.notNearMetro": "You are too far from the metro line to start a trip",
    "error.unknown": "Something went wrong, please pick your destination again",
}


def localize(key: str, *args: str) -> str:
    """Render a status key; unknown keys are shown as-is."""
    if not key:
        return ""
    template = MESSAGES.get(key, key)
    return template.format(*args)
