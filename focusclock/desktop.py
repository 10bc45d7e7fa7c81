"""Desktop integration: notifications, screen lock and process control"""

import logging
import shutil
import subprocess
from typing import List, Optional

import psutil

from .config import config
from .errors import DependencyMissing


logger = logging.getLogger(__name__)


def notify(title: str, message: str) -> bool:
    """
    Send a desktop notification (best-effort)

    Returns:
        True if notify-send ran successfully
    """
    if shutil.which('notify-send') is None:
        logger.debug("notify-send not available, skipping notification")
        return False

    try:
        result = subprocess.run(
            ['notify-send', title, message],
            capture_output=True,
            timeout=5
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not send notification: %s", e)
        return False

    return result.returncode == 0


def require_command(command: List[str]):
    """Raise DependencyMissing if the command's executable is not installed"""
    if not command or shutil.which(command[0]) is None:
        raise DependencyMissing(command[0] if command else '<empty command>')


def lock_screen(command: Optional[List[str]] = None) -> bool:
    """Run the screen lock command; returns True on success"""
    command = command or config.lock_command
    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=30)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error("Lock command %s failed: %s", command, e)
        return False

    if result.returncode != 0:
        logger.error("Lock command %s exited with %d: %s",
                     command, result.returncode, result.stderr.strip())
        return False

    return True


def is_process_running(pid: int) -> bool:
    """Check whether a process with this PID exists and is not a zombie"""
    if pid <= 0:
        return False

    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return psutil.pid_exists(pid)


def terminate_process(pid: int) -> bool:
    """
    Terminate a process by PID (best-effort)

    Returns:
        True if a signal was delivered, False if the process was already gone
    """
    if pid <= 0:
        return False

    try:
        psutil.Process(pid).terminate()
        return True
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        logger.warning("Not permitted to stop process %d", pid)
        return False
