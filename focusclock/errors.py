"""Exceptions raised by Focus Clock"""


class FocusError(Exception):
    """Base class for all Focus Clock errors"""


class UsageError(FocusError):
    """Bad or missing command-line arguments"""


class InvalidInput(FocusError):
    """A value passed to an operation is not acceptable"""


class DependencyMissing(FocusError):
    """A required external tool is not installed"""

    def __init__(self, tool: str):
        super().__init__(f"Required command not found: {tool}")
        self.tool = tool


class DisplayError(FocusError):
    """Reading or writing the panel clock format failed"""


class AlreadyRunning(FocusError):
    """Another monitor instance holds the single-instance guard"""

    def __init__(self, pid: int):
        super().__init__(f"Focus monitor is already running (PID {pid})")
        self.pid = pid
