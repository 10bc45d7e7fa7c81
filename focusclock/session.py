"""Focus session management: set, clear and inspect the panel clock label"""

import logging
from datetime import datetime
from typing import Callable, Optional

from .clock import DconfClock, clock as default_clock, extract_label
from .desktop import is_process_running, terminate_process
from .errors import InvalidInput
from .models import FocusResult, FocusStatus, TimerRecord
from .timer import TimerStore, duration_looks_valid, parse_duration, spawn_timer


logger = logging.getLogger(__name__)


class SessionManager:
    """Manages the focus label and its optional auto-clear timer"""

    def __init__(
        self,
        clock: Optional[DconfClock] = None,
        store: Optional[TimerStore] = None,
        launcher: Callable[[str, str], int] = spawn_timer,
        now: Callable[[], float] = lambda: datetime.now().timestamp()
    ):
        self.clock = clock or default_clock
        self.store = store or TimerStore()
        self.launcher = launcher
        self.now = now

    def kill_existing_timer(self) -> Optional[TimerRecord]:
        """
        Stop the timer named in the record file, if any, and remove the file

        Returns:
            The record that was removed, or None
        """
        if not self.store.exists():
            return None

        record = self.store.read()
        if record and is_process_running(record.pid):
            terminate_process(record.pid)
            logger.info("Stopped timer process %d", record.pid)

        self.store.delete()
        return record

    def set_focus(self, label: str, duration: Optional[str] = None) -> FocusResult:
        """
        Show a focus label in the panel clock

        Args:
            label: Focus text (surrounding whitespace is trimmed)
            duration: Optional sleep-style duration after which the label clears

        Returns:
            FocusResult describing the new session

        Raises:
            InvalidInput: if the label is empty after trimming
        """
        label = label.strip()
        if not label:
            raise InvalidInput("Focus text cannot be empty when setting focus. Use -c to clear.")

        self.kill_existing_timer()
        self.clock.set_label(label)
        result = FocusResult(label=label)

        if duration:
            result.duration = duration
            result.duration_warning = not duration_looks_valid(duration)

            pid = self.launcher(duration, label)
            seconds = parse_duration(duration) or 0
            expiry = int(self.now() + seconds)

            self.store.write(TimerRecord(pid=pid, expiry=expiry, label=label))
            result.timer_pid = pid
            result.expiry = expiry

        return result

    def clear_focus(self):
        """Stop any timer and restore the default clock format"""
        self.kill_existing_timer()
        self.clock.reset()

    def status(self) -> FocusStatus:
        """Inspect the timer record and clock format"""
        if self.store.exists():
            record = self.store.read()

            if record and is_process_running(record.pid):
                remaining = record.remaining_seconds(self.now())
                if remaining <= 0:
                    return FocusStatus(state='ended', label=record.label, remaining_seconds=0)
                return FocusStatus(state='timed', label=record.label, remaining_seconds=remaining)

            # Stale record: the timer process is gone
            self.store.delete()
            raw = self.clock.read()
            label = None if self.clock.is_default(raw) else extract_label(raw)
            if label is not None:
                return FocusStatus(state='untimed', label=label, raw_format=raw, stale=True)
            return FocusStatus(state='none', raw_format=raw, stale=True)

        raw = self.clock.read()
        if self.clock.is_default(raw):
            return FocusStatus(state='none', raw_format=raw)

        label = extract_label(raw)
        if label is not None:
            return FocusStatus(state='untimed', label=label, raw_format=raw)

        return FocusStatus(state='custom', raw_format=raw)


# Global session manager instance
session_manager = SessionManager()
