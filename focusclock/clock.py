"""GNOME panel clock format access through dconf"""

import re
import shutil
import subprocess
from typing import Optional

from .config import config
from .errors import DependencyMissing, DisplayError


FOCUS_MARKER = 'Focus:'
_FOCUS_PATTERN = re.compile(r"Focus: (.*)'$")


def compose_format(label: str, base_format: Optional[str] = None) -> str:
    """Build the quoted clock format showing a focus label"""
    base = base_format if base_format is not None else config.base_format
    escaped = label.replace('\\', '\\\\').replace("'", "\\'")
    return f"'{base}  {FOCUS_MARKER} {escaped}'"


def extract_label(raw_format: str) -> Optional[str]:
    """Return the focus label embedded in a clock format, or None"""
    match = _FOCUS_PATTERN.search(raw_format.strip())
    if not match:
        return None
    return re.sub(r"\\(.)", r"\1", match.group(1))


def has_focus_marker(raw_format: str) -> bool:
    """Check whether the clock format carries a focus label at all"""
    return FOCUS_MARKER in raw_format


class DconfClock:
    """Reads and writes the panel clock format key"""

    def __init__(self, key: Optional[str] = None, default_format: Optional[str] = None):
        self.key = key or config.dconf_key
        self.default_format = default_format or config.default_format

    def _dconf(self, *args: str) -> str:
        if shutil.which('dconf') is None:
            raise DependencyMissing('dconf')

        try:
            result = subprocess.run(
                ['dconf', *args],
                capture_output=True,
                text=True,
                timeout=10
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise DisplayError(f"dconf {args[0]} failed: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise DisplayError(f"dconf {args[0]} {self.key} failed: {detail}")

        return result.stdout

    def read(self) -> str:
        """Read the raw (quoted) clock format; empty string when unset"""
        return self._dconf('read', self.key).strip()

    def write(self, value: str):
        """Write a raw (quoted) clock format"""
        self._dconf('write', self.key, value)

    def set_label(self, label: str):
        """Show a focus label in the clock"""
        self.write(compose_format(label))

    def reset(self):
        """Restore the default clock format"""
        self.write(self.default_format)

    def is_default(self, raw_format: str) -> bool:
        return raw_format == self.default_format


# Global clock instance
clock = DconfClock()
