"""Single-instance guard based on a PID file"""

import logging
import os
from pathlib import Path
from typing import Optional

from .desktop import is_process_running
from .errors import AlreadyRunning


logger = logging.getLogger(__name__)


class PidLock:
    """
    PID file guard; a file naming a dead process is treated as stale

    Usable as a context manager:

        with PidLock(path):
            run()
    """

    def __init__(self, path: Path, pid: Optional[int] = None):
        self.path = Path(path)
        self.pid = pid if pid is not None else os.getpid()
        self.acquired = False

    def read_pid(self) -> Optional[int]:
        try:
            return int(self.path.read_text(encoding='utf-8').strip())
        except (FileNotFoundError, ValueError):
            return None

    def _create(self) -> bool:
        """Create the guard file atomically; False if it already exists"""
        try:
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            return False

        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(f"{self.pid}\n")
        return True

    def _remove_stale(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def acquire(self):
        """
        Take the guard

        Raises:
            AlreadyRunning: if another live process holds it
        """
        if not self._create():
            holder = self.read_pid()
            if holder is not None and holder != self.pid and is_process_running(holder):
                raise AlreadyRunning(holder)

            if holder != self.pid:
                logger.info("Removing stale lock file %s", self.path)
            self._remove_stale()

            # Another instance may have replaced the stale file first
            if not self._create():
                raise AlreadyRunning(self.read_pid() or 0)

        self.acquired = True

    def release(self):
        """Remove the guard file if it is still ours"""
        if not self.acquired:
            return

        if self.read_pid() == self.pid:
            try:
                self.path.unlink()
            except FileNotFoundError:
                pass
        self.acquired = False

    def __enter__(self) -> 'PidLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
