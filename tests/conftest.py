"""Shared fixtures: in-memory panel clock and real placeholder processes"""

import subprocess

import pytest

from focusclock.clock import DconfClock
from focusclock.session import SessionManager
from focusclock.timer import TimerStore


DEFAULT = "'%b %d  %H:%M'"


class FakeClock(DconfClock):
    """DconfClock backed by a string instead of dconf"""

    def __init__(self, value: str = DEFAULT):
        super().__init__(key='/test/format', default_format=DEFAULT)
        self.value = value
        self.writes = []

    def read(self) -> str:
        return self.value

    def write(self, value: str):
        self.writes.append(value)
        self.value = value


class SleepLauncher:
    """Timer launcher that starts a harmless `sleep` instead of the real task"""

    def __init__(self):
        self.processes = []
        self.calls = []

    def __call__(self, duration: str, label: str) -> int:
        self.calls.append((duration, label))
        process = subprocess.Popen(['sleep', '300'])
        self.processes.append(process)
        return process.pid

    def cleanup(self):
        for process in self.processes:
            if process.poll() is None:
                process.kill()
            process.wait()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def timer_store(tmp_path):
    return TimerStore(tmp_path / 'focus_timer.pid')


@pytest.fixture
def launcher():
    launcher = SleepLauncher()
    yield launcher
    launcher.cleanup()


@pytest.fixture
def manager(fake_clock, timer_store, launcher):
    return SessionManager(clock=fake_clock, store=timer_store, launcher=launcher)
