"""Display rendering components for metro-progress."""

from .header import build_header
from .stations import build_stations_table
from .progress import build_progress_bar
from .compact import build_compact_display
from .alerts import build_alert_banner, ConsoleAlertPresenter
from .errors import build_error_panel, build_not_found_panel
from .messages import localize

__all__ = [
    "build_header",
    "build_stations_table",
    "build_progress_bar",
    "build_compact_display",
    "build_alert_banner",
    "ConsoleAlertPresenter",
    "build_error_panel",
    "build_not_found_panel",
    "localize",
]
