"""Notification gateway: delayed trip alerts delivered as system notifications."""

import logging
import subprocess
import sys
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

APPROACHING = "approaching"
ARRIVAL = "arrival"

MIN_DELAY_SECONDS = 1.0


class NotificationGateway(Protocol):
    """
    Schedules and cancels delayed local alerts on the host.

    Each schedule call replaces any pending request of the same kind.
    Zero or negative minutes mean "fire as soon as possible".
    """

    def schedule_approaching(self, minutes: int, station_name: str) -> None:
        ...

    def schedule_arrival(self, minutes: int, station_name: str) -> None:
        ...

    def cancel_all(self) -> None:
        ...


def delay_seconds(minutes: int, seconds_per_minute: float = 60.0) -> float:
    """Convert a delay in minutes to seconds, coercing <= 0 to the minimum delay."""
    return max(minutes * seconds_per_minute, MIN_DELAY_SECONDS)


def _applescript_quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _powershell_quote(text: str) -> str:
    return text.replace("`", "``").replace('"', '`"').replace("$", "`$")


def send_notification(title: str, message: str) -> bool:
    """
    Send a system notification with fallback to terminal bell.
    Returns True if system notification was sent, False if fell back to bell.
    """
    try:
        if sys.platform == "darwin":
            script = (
                f'display notification "{_applescript_quote(message)}" '
                f'with title "{_applescript_quote(title)}"'
            )
            subprocess.run(
                ["osascript", "-e", script],
                check=True,
                capture_output=True,
                timeout=5
            )
            return True
        elif sys.platform.startswith("linux"):
            # Linux with libnotify
            subprocess.run(
                ["notify-send", "-a", "Metro Progress", title, message],
                check=True,
                capture_output=True,
                timeout=5
            )
            return True
        elif sys.platform == "win32":
            ps_script = f'''
            Add-Type -AssemblyName System.Windows.Forms
            $balloon = New-Object System.Windows.Forms.NotifyIcon
            $balloon.Icon = [System.Drawing.SystemIcons]::Information
            $balloon.BalloonTipTitle = "{_powershell_quote(title)}"
            $balloon.BalloonTipText = "{_powershell_quote(message)}"
            $balloon.Visible = $true
            $balloon.ShowBalloonTip(5000)
            '''
            subprocess.run(
                ["powershell", "-Command", ps_script],
                check=True,
                capture_output=True,
                timeout=5
            )
            return True
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug(f"System notification failed, using bell: {e}")

    # Fallback: terminal bell
    print("\a", end="", flush=True)
    return False


def approaching_message(station_name: str) -> tuple[str, str]:
    return "🚇 Approaching your stop", f"Next stop: {station_name}. Get ready to leave the train."


def arrival_message(station_name: str) -> tuple[str, str]:
    return "🚇 You have arrived", f"You have arrived at {station_name}."


class InMemoryNotificationGateway:
    """Keeps pending requests in a dict instead of delivering them."""

    def __init__(self, seconds_per_minute: float = 60.0):
        self.seconds_per_minute = seconds_per_minute
        self.pending: dict[str, tuple[float, str]] = {}  # kind -> (delay seconds, station name)

    def schedule_approaching(self, minutes: int, station_name: str) -> None:
        self.pending[APPROACHING] = (delay_seconds(minutes, self.seconds_per_minute), station_name)

    def schedule_arrival(self, minutes: int, station_name: str) -> None:
        self.pending[ARRIVAL] = (delay_seconds(minutes, self.seconds_per_minute), station_name)

    def cancel_all(self) -> None:
        self.pending.clear()


class DesktopNotificationGateway:
    """
    Gateway backed by one timer per alert kind.

    Timers run as daemon threads so scheduling never blocks the caller;
    a new request of a kind cancels the pending timer of that kind.
    """

    def __init__(
        self,
        seconds_per_minute: float = 60.0,
        notifier: Callable[[str, str], bool] = send_notification,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self.seconds_per_minute = seconds_per_minute
        self.notifier = notifier
        self.timer_factory = timer_factory
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def schedule_approaching(self, minutes: int, station_name: str) -> None:
        self._schedule(APPROACHING, minutes, *approaching_message(station_name))

    def schedule_arrival(self, minutes: int, station_name: str) -> None:
        self._schedule(ARRIVAL, minutes, *arrival_message(station_name))

    def cancel_all(self) -> None:
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
        logger.debug("Cancelled pending trip notifications")

    def pending(self) -> list[str]:
        """Kinds that currently have a timer waiting to fire."""
        with self._lock:
            return sorted(self._timers)

    def _schedule(self, kind: str, minutes: int, title: str, message: str) -> None:
        seconds = delay_seconds(minutes, self.seconds_per_minute)
        timer = self.timer_factory(seconds, self._fire, args=(kind, title, message))
        timer.daemon = True

        with self._lock:
            previous = self._timers.pop(kind, None)
            if previous is not None:
                previous.cancel()
            self._timers[kind] = timer
        timer.start()
        logger.info(f"Scheduled {kind} notification in {seconds:.0f}s")

    def _fire(self, kind: str, title: str, message: str) -> None:
        with self._lock:
            # Leave a replacement scheduled while this timer was firing in place
            if self._timers.get(kind) is threading.current_thread():
                del self._timers[kind]
        self.notifier(title, message)
