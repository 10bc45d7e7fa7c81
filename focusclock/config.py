"""Configuration management for Focus Clock"""

import os
import shlex
from pathlib import Path
from datetime import time
from dotenv import load_dotenv


class Config:
    """Application configuration loaded from .env and environment variables"""

    def __init__(self):
        # Load .env file from project root
        env_path = Path(__file__).parent.parent / '.env'
        load_dotenv(env_path)

        # GNOME panel clock (needs a panel date format extension reading this key)
        self.dconf_key = os.getenv(
            'FOCUS_DCONF_KEY',
            '/org/gnome/shell/extensions/panel-date-format/format'
        )
        self.base_format = os.getenv('FOCUS_BASE_FORMAT', '%b %d  %H:%M')

        # Shared state files
        self.timer_file = Path(os.getenv('FOCUS_TIMER_FILE', '/tmp/gnome_focus_timer.pid'))
        self.monitor_lock_file = Path(
            os.getenv('FOCUS_MONITOR_LOCK_FILE', '/tmp/gnome_focus_monitor.pid')
        )

        # Monitor behaviour
        self.lock_threshold_seconds = self._parse_int('FOCUS_LOCK_THRESHOLD_SECONDS', '600')
        self.check_interval_seconds = self._parse_int('FOCUS_CHECK_INTERVAL_SECONDS', '60')
        self.window_start = self._parse_time(os.getenv('FOCUS_WINDOW_START', '19:00'))
        self.window_end = self._parse_time(os.getenv('FOCUS_WINDOW_END', '09:00'))
        self.lock_command = shlex.split(os.getenv('FOCUS_LOCK_COMMAND', 'xdg-screensaver lock'))

        # Logging
        self.log_file = Path(os.getenv('FOCUS_LOG_FILE', str(self._default_log_file())))

    def _default_log_file(self) -> Path:
        """Log under $XDG_STATE_HOME, falling back to ~/.local/state"""
        state_home = os.getenv('XDG_STATE_HOME')
        base = Path(state_home) if state_home else Path.home() / '.local' / 'state'
        return base / 'focusclock' / 'focus.log'

    def _parse_int(self, name: str, default: str) -> int:
        """Parse a non-negative integer environment variable"""
        value = os.getenv(name, default)
        try:
            parsed = int(value)
        except ValueError:
            raise ValueError(f"Invalid value for {name}: {value}. Expected an integer")
        if parsed < 0:
            raise ValueError(f"Invalid value for {name}: {value}. Must not be negative")
        return parsed

    def _parse_time(self, time_str: str) -> time:
        """Parse time string in HH:MM format"""
        try:
            hour, minute = time_str.split(':')
            return time(int(hour), int(minute))
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid time format: {time_str}. Expected HH:MM")

    @property
    def default_format(self) -> str:
        """Clock format value meaning "no focus session", quoted for dconf"""
        return f"'{self.base_format}'"


# Global config instance
config = Config()
