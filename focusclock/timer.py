"""Auto-clear timer: record file, detached background task and its entry point"""

import logging
import os
import re
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .clock import clock as default_clock
from .config import config
from .desktop import notify
from .errors import FocusError
from .logging_ import setup_logging
from .models import TimerRecord


logger = logging.getLogger(__name__)

_DURATION_TOKEN = re.compile(r'^(\d+(?:\.\d+)?)([smhd]?)$')
_UNIT_SECONDS = {'': 1, 's': 1, 'm': 60, 'h': 3600, 'd': 86400}

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def duration_tokens(duration: str) -> List[str]:
    """Split a duration into the arguments handed to sleep"""
    return duration.split()


def duration_looks_valid(duration: str) -> bool:
    """Loose format check; sleep gets the final say"""
    tokens = duration_tokens(duration)
    return bool(tokens) and all(_DURATION_TOKEN.match(token) for token in tokens)


def parse_duration(duration: str) -> Optional[float]:
    """
    Convert a sleep-style duration to seconds

    Accepts what coreutils sleep accepts in its common form: one or more
    NUMBER[smhd] tokens, which are summed.

    Returns:
        Seconds, or None if the duration can't be interpreted
    """
    tokens = duration_tokens(duration)
    if not tokens:
        return None

    total = 0.0
    for token in tokens:
        match = _DURATION_TOKEN.match(token)
        if not match:
            return None
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
    return total


class TimerStore:
    """The timer record file shared between the setter and its timer task"""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else config.timer_file

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[TimerRecord]:
        """
        Load the current record

        Returns:
            TimerRecord, or None when the file is missing or unparseable
        """
        try:
            content = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None

        try:
            return TimerRecord.from_line(content)
        except ValueError:
            logger.warning("Ignoring malformed timer record in %s", self.path)
            return None

    def write(self, record: TimerRecord):
        self.path.write_text(record.to_line() + '\n', encoding='utf-8')

    def delete(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def owned_by(self, pid: int) -> bool:
        """Check whether the record still names this PID"""
        record = self.read()
        return record is not None and record.pid == pid


def spawn_timer(duration: str, label: str) -> int:
    """
    Start the detached auto-clear task

    The child runs in its own session so it outlives the invoking shell.

    Returns:
        PID of the background process
    """
    # The child must import focusclock whatever the caller's working directory
    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(
        p for p in (str(PROJECT_ROOT), env.get('PYTHONPATH')) if p
    )

    process = subprocess.Popen(
        [sys.executable, '-m', 'focusclock.timer', duration, label],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        cwd=str(PROJECT_ROOT),
        env=env,
        start_new_session=True,
        close_fds=True
    )
    return process.pid


def os_sleep(duration: str):
    """Sleep using the OS sleep command, leaving parsing to it"""
    result = subprocess.run(['sleep', *duration_tokens(duration)], capture_output=True)
    if result.returncode != 0:
        logger.warning("sleep rejected duration %r", duration)


def run_timer(
    duration: str,
    label: str,
    store: Optional[TimerStore] = None,
    clock=None,
    notifier: Optional[Callable[[str, str], bool]] = None,
    sleeper: Callable[[str], None] = os_sleep,
    pid: Optional[int] = None
) -> bool:
    """
    Body of the background task: wait, then clear the focus if still current

    Args:
        duration: Sleep duration, passed to the sleeper as given
        label: Focus label this timer was started for
        store: Timer record file
        clock: Panel clock to reset
        notifier: Callable(title, message) used when the session ends
        sleeper: Callable blocking for the duration
        pid: PID to compare against the record (defaults to this process)

    Returns:
        True if the focus was cleared, False if this timer was superseded
    """
    store = store or TimerStore()
    clock = clock or default_clock
    notifier = notifier or notify
    pid = pid if pid is not None else os.getpid()

    sleeper(duration)

    if not store.owned_by(pid):
        logger.info("Timer %d for '%s' was superseded, leaving clock untouched", pid, label)
        return False

    clock.reset()
    logger.info("Focus session for '%s' ended. Clock format reset.", label)
    notifier("Focus Timer Ended", f"Session for '{label}' is complete.")
    store.delete()
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for `python -m focusclock.timer DURATION LABEL`"""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("usage: python -m focusclock.timer DURATION LABEL", file=sys.stderr)
        return 1

    setup_logging(console=False)
    try:
        run_timer(args[0], args[1])
    except FocusError as e:
        logger.error("Timer could not clear focus: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
