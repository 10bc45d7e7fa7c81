"""Inactivity monitor: lock the screen when no focus is set during the active window"""

import logging
import threading
from datetime import datetime, time
from typing import Callable, List, Optional

from .clock import DconfClock, clock as default_clock, has_focus_marker
from .config import config
from .desktop import lock_screen
from .errors import DisplayError


logger = logging.getLogger(__name__)


def in_active_window(hour: int, start: time, end: time) -> bool:
    """
    Check whether an hour falls inside the monitoring window

    A window whose start is later than its end wraps past midnight
    (19:00 - 09:00 covers hours 19..23 and 0..8). Equal bounds mean
    always active.
    """
    if start.hour == end.hour:
        return True
    if start.hour > end.hour:
        return hour >= start.hour or hour < end.hour
    return start.hour <= hour < end.hour


class FocusMonitor:
    """Polls the panel clock and locks the screen after prolonged unfocused time"""

    def __init__(
        self,
        clock: Optional[DconfClock] = None,
        lock_action: Optional[Callable[[], bool]] = None,
        threshold_seconds: Optional[int] = None,
        interval_seconds: Optional[int] = None,
        window_start: Optional[time] = None,
        window_end: Optional[time] = None,
        lock_command: Optional[List[str]] = None
    ):
        self.clock = clock or default_clock
        self.lock_command = lock_command or config.lock_command
        self.lock_action = lock_action or (lambda: lock_screen(self.lock_command))
        self.threshold_seconds = (
            threshold_seconds if threshold_seconds is not None else config.lock_threshold_seconds
        )
        self.interval_seconds = (
            interval_seconds if interval_seconds is not None else config.check_interval_seconds
        )
        self.window_start = window_start or config.window_start
        self.window_end = window_end or config.window_end

        # Unix timestamp when the unfocused state began; 0 while focused
        self.unfocused_since = 0
        self._stop = threading.Event()

    def describe_window(self) -> str:
        return f"{self.window_start.strftime('%H:%M')} - {self.window_end.strftime('%H:%M')}"

    def read_format(self) -> str:
        """Read the clock format; a failed read counts as no focus"""
        try:
            return self.clock.read()
        except DisplayError as e:
            logger.warning("Could not read clock format, treating as unfocused: %s", e)
            return ''

    def poll(self, now: Optional[datetime] = None) -> Optional[str]:
        """
        Run one check

        Returns:
            Name of the transition that happened ('countdown_started',
            'countdown_cancelled', 'locked', 'window_closed'), or None
        """
        now = now or datetime.now()
        timestamp = int(now.timestamp())

        if not in_active_window(now.hour, self.window_start, self.window_end):
            if self.unfocused_since != 0:
                logger.info("Outside of %s window. Deactivating countdown.", self.describe_window())
                self.unfocused_since = 0
                return 'window_closed'
            return None

        if has_focus_marker(self.read_format()):
            if self.unfocused_since != 0:
                logger.info("Focus has been set. Countdown cancelled.")
                self.unfocused_since = 0
                return 'countdown_cancelled'
            return None

        if self.unfocused_since == 0:
            self.unfocused_since = timestamp
            logger.info("No focus set. Starting %d-second lock countdown.", self.threshold_seconds)
            return 'countdown_started'

        elapsed = timestamp - self.unfocused_since
        if elapsed > self.threshold_seconds:
            logger.warning("Unfocused for %d seconds. Locking screen!", elapsed)
            if not self.lock_action():
                logger.error("Screen lock command did not succeed")
            # A fresh full countdown is required before the next lock
            self.unfocused_since = 0
            return 'locked'

        logger.debug("Unfocused. Time to lock: %d seconds.", self.threshold_seconds - elapsed)
        return None

    def run(self):
        """Poll until stop() is called"""
        logger.info(
            "Focus Monitor starting. Will lock screen after %d seconds of no focus between %s.",
            self.threshold_seconds, self.describe_window()
        )
        self._stop.clear()
        while not self._stop.is_set():
            self.poll()
            self._stop.wait(self.interval_seconds)
        logger.info("Focus Monitor stopped.")

    def stop(self):
        self._stop.set()
