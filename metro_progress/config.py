"""Configuration constants and dataclass for metro-progress."""

from dataclasses import dataclass, field

# Distance thresholds (in meters)
NEAR_STATION_DISTANCE = 1000.0  # max distance from the line to start a trip
ARRIVAL_DISTANCE = 10.0         # raw distance to destination that counts as arrived

# Alert timing
APPROACHING_LEAD_MINUTES = 3       # approaching notification fires this long before ETA
PATTERN_DURATION_SECONDS = 5.0     # haptic/torch pattern length
BANNER_AUTO_DISMISS_SECONDS = 5.0  # in-app banner lifetime
PULSE_INTERVAL_SECONDS = 0.35      # gap between haptic/torch pulses

# Replay options
REFRESH_INTERVAL = 2  # seconds between position samples
SIMULATION_STEPS = 4  # samples per segment when simulating a ride

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass
class AlertTiming:
    """Presentation timing policy handed to alert presenters."""
    pattern_duration_seconds: float = PATTERN_DURATION_SECONDS
    banner_auto_dismiss_seconds: float = BANNER_AUTO_DISMISS_SECONDS
    pulse_interval_seconds: float = PULSE_INTERVAL_SECONDS


@dataclass
class Config:
    """Runtime configuration built from CLI arguments."""
    near_station_distance: float = NEAR_STATION_DISTANCE
    arrival_distance: float = ARRIVAL_DISTANCE
    approaching_lead_minutes: int = APPROACHING_LEAD_MINUTES
    alert_timing: AlertTiming = field(default_factory=AlertTiming)
    refresh_interval: float = REFRESH_INTERVAL
    simulation_steps: int = SIMULATION_STEPS
    compact_mode: bool = False
    notify: bool = False
    stations_file: str | None = None
    track_file: str | None = None
    log_level: str = "WARNING"
    log_file: str | None = None
