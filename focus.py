#!/usr/bin/env python3
"""Focus Clock - show a focus message in the GNOME panel clock"""

import sys
import argparse
from typing import List, Optional

from focusclock.errors import FocusError, UsageError
from focusclock.session import SessionManager, session_manager
from focusclock import ui


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting"""

    def error(self, message):
        raise UsageError(message)


class FocusCLI:
    """Main CLI application"""

    def __init__(self, manager: Optional[SessionManager] = None, prog: str = 'focus'):
        self.manager = manager or session_manager
        self.prog = prog

    def run(self, args: List[str]) -> int:
        """
        Main entry point

        Returns:
            Process exit code (0 success, 1 usage or runtime error)
        """
        try:
            parsed_args = self.create_parser().parse_args(args)
            return self.dispatch(parsed_args)
        except UsageError as e:
            ui.display_help(self.prog, error=str(e))
            return 1
        except FocusError as e:
            ui.print_error(str(e))
            return 1

    def create_parser(self):
        """Create argument parser"""
        parser = _ArgumentParser(prog=self.prog, add_help=False)
        parser.add_argument('-m', dest='message', metavar='MESSAGE')
        parser.add_argument('-t', dest='duration', metavar='DURATION')
        parser.add_argument('-s', dest='status', action='store_true')
        parser.add_argument('-c', dest='clear', action='store_true')
        parser.add_argument('-h', dest='help', action='store_true')
        parser.add_argument('positional', nargs='*')
        return parser

    def dispatch(self, args) -> int:
        """Pick the action: help, clear, status, then set"""
        if args.help:
            ui.display_help(self.prog)
            return 0

        if args.clear:
            return self.cmd_clear()

        if args.status:
            return self.cmd_status()

        if len(args.positional) > 2:
            raise UsageError(f"Unexpected arguments: {' '.join(args.positional[2:])}")

        # Flags take precedence over positional arguments
        message = args.message or (args.positional[0] if args.positional else None)
        duration = args.duration or (args.positional[1] if len(args.positional) > 1 else None)

        if message:
            if not message.strip():
                ui.print_info("Focus message is empty. Clearing focus.")
                return self.cmd_clear()
            return self.cmd_set(message, duration)

        if duration:
            raise UsageError("Timer specified without a focus message (-m or positional).")

        return self.interactive_mode()

    # Command implementations

    def cmd_set(self, message: str, duration: Optional[str] = None) -> int:
        """Set the focus message, optionally with a timer"""
        result = self.manager.set_focus(message, duration)
        ui.display_set_result(result)
        return 0

    def cmd_clear(self) -> int:
        """Clear focus message and timer"""
        self.manager.clear_focus()
        ui.print_success("Focus cleared. Clock format reset to default.")
        return 0

    def cmd_status(self) -> int:
        """Show current focus status"""
        ui.display_status(self.manager.status())
        return 0

    def interactive_mode(self) -> int:
        """Prompt once for a focus message (no timer)"""
        try:
            text = ui.prompt_focus_text().strip()
        except (EOFError, KeyboardInterrupt):
            # No answer (Ctrl-D, Ctrl-C, closed stdin) counts as blank
            ui.console.print()
            text = ''

        if not text:
            return self.cmd_clear()

        return self.cmd_set(text)


def main():
    sys.exit(FocusCLI().run(sys.argv[1:]))


if __name__ == '__main__':
    main()
