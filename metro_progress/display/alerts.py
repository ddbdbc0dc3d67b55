"""In-terminal alert banner and the console alert presenter."""

import time
from typing import Callable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..alerts import AlertEvent, ApproachingAlert, pulse_schedule
from ..config import AlertTiming
from .messages import localize


def build_alert_banner(event: AlertEvent) -> Panel:
    """Build the banner shown when an alert fires."""
    if isinstance(event, ApproachingAlert):
        content = Text()
        content.append(localize("alert.approaching", event.station_name), style="bold yellow")
        if event.eta_minutes > 0:
            content.append(f"  (~{event.eta_minutes} min)", style="yellow")
        content.append("\nGet ready to leave the train.", style="white")
        return Panel(content, title="[bold yellow]🔔 Next Stop[/]", border_style="yellow")

    content = Text(localize("alert.arrived", event.station_name), style="bold green")
    return Panel(content, title="[bold green]✅ Arrived[/]", border_style="green")


class ConsoleAlertPresenter:
    """
    Shows alerts as a terminal banner with a bell pulse pattern.

    The banner stays up for banner_auto_dismiss_seconds; hosts that drive
    haptics or a torch can poll pulses_due() for the configured pattern.
    """

    def __init__(
        self,
        console: Console | None = None,
        timing: AlertTiming | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.console = console
        self.timing = timing or AlertTiming()
        self.clock = clock
        self.event: AlertEvent | None = None
        self.shown_at: float | None = None
        self._pulses: list[float] = []

    @property
    def is_showing(self) -> bool:
        if self.event is None or self.shown_at is None:
            return False
        return self.clock() - self.shown_at < self.timing.banner_auto_dismiss_seconds

    def present(self, event: AlertEvent) -> None:
        self.event = event
        self.shown_at = self.clock()
        self._pulses = pulse_schedule(self.timing)
        if self.console is not None:
            self.console.bell()

    def dismiss(self) -> None:
        self.event = None
        self.shown_at = None
        self._pulses = []

    def pulses_due(self) -> int:
        """Number of pattern pulses that have come due since the last call."""
        if self.shown_at is None:
            return 0
        elapsed = self.clock() - self.shown_at
        due = [offset for offset in self._pulses if offset <= elapsed]
        self._pulses = self._pulses[len(due):]
        return len(due)

    def banner(self) -> Panel | None:
        """Current banner, or None once it has auto-dismissed."""
        if not self.is_showing:
            if self.event is not None:
                self.dismiss()
            return None
        return build_alert_banner(self.event)
