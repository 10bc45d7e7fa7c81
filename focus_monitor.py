#!/usr/bin/env python3
"""Focus Monitor - lock the screen when no focus is set during the evening window"""

import logging
import signal
import sys

from focusclock.clock import clock
from focusclock.config import config
from focusclock.desktop import require_command
from focusclock.errors import FocusError
from focusclock.logging_ import setup_logging
from focusclock.monitor import FocusMonitor
from focusclock.pidlock import PidLock


logger = logging.getLogger('focus_monitor')


def check_dependencies():
    """Fail fast when dconf, the lock command or the clock key are unusable"""
    require_command(['dconf'])
    require_command(config.lock_command)
    clock.read()


def main() -> int:
    setup_logging()

    try:
        check_dependencies()
    except FocusError as e:
        logger.error("%s", e)
        return 1

    monitor = FocusMonitor(clock=clock)

    def handle_signal(signum, frame):
        logger.info("Received %s, shutting down.", signal.Signals(signum).name)
        monitor.stop()

    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)

    try:
        with PidLock(config.monitor_lock_file):
            monitor.run()
    except FocusError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
