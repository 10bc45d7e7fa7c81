"""Data models for timer records and focus status"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class TimerRecord:
    """Represents one pending auto-clear timer (pid;expiry;label on disk)"""
    pid: int
    expiry: int  # Unix timestamp
    label: str

    @classmethod
    def from_line(cls, line: str) -> 'TimerRecord':
        """
        Parse a record line

        The label is the remainder after the second separator, so it may
        contain ';' itself.

        Raises:
            ValueError: if the pid or expiry fields are not integers
        """
        parts = line.rstrip('\n').split(';', 2)
        if len(parts) < 2:
            raise ValueError(f"Malformed timer record: {line!r}")
        label = parts[2] if len(parts) == 3 else ''
        return cls(pid=int(parts[0]), expiry=int(parts[1]), label=label)

    def to_line(self) -> str:
        """Serialize to the on-disk format"""
        return f"{self.pid};{self.expiry};{self.label}"

    def remaining_seconds(self, now: Optional[float] = None) -> int:
        """Seconds until expiry (negative once passed)"""
        if now is None:
            now = datetime.now().timestamp()
        return int(self.expiry - now)


@dataclass
class FocusStatus:
    """Result of inspecting the current focus session"""
    state: str  # 'timed', 'ended', 'untimed', 'none', 'custom'
    label: Optional[str] = None
    remaining_seconds: Optional[int] = None
    raw_format: Optional[str] = None
    stale: bool = False  # a dead timer record was found and removed


@dataclass
class FocusResult:
    """Outcome of setting a focus label"""
    label: str
    duration: Optional[str] = None
    timer_pid: Optional[int] = None
    expiry: Optional[int] = None
    duration_warning: bool = False  # duration did not look like a sleep argument
