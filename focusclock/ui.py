"""Rich UI components for terminal interface"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich import box
from rich.markup import escape

from .models import FocusResult, FocusStatus


console = Console()
err_console = Console(stderr=True)


def print_error(message: str):
    """Print error message"""
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str):
    """Print success message"""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str):
    """Print info message"""
    console.print(f"[cyan]ℹ[/cyan] {message}")


def print_warning(message: str):
    """Print warning message"""
    console.print(f"[yellow]⚠[/yellow] {message}")


def format_remaining(seconds: int) -> str:
    """Format remaining time as 'M minutes and S seconds'"""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins} minutes and {secs} seconds"


def prompt_focus_text() -> str:
    """Ask once for the current focus (blank means clear)"""
    console.print("What's your current focus? [dim](Leave blank to clear focus)[/dim]")
    return Prompt.ask("[bold]focus[/bold]", default="", show_default=False)


def display_set_result(result: FocusResult):
    """Report a newly set focus"""
    print_success(f"Focus set to: {escape(result.label)}")

    if result.duration:
        if result.duration_warning:
            print_warning(
                f"Timer duration '{escape(result.duration)}' format might be unusual. "
                "`sleep` will attempt to parse it."
            )
        print_info(f"Timer active for {escape(result.duration)}. Focus will be cleared automatically.")
        console.print(f"[dim](Timer PID: {result.timer_pid})[/dim]")


def create_status_display(status: FocusStatus) -> Panel:
    """Create status panel for a focus session"""
    if status.state == 'timed':
        lines = [
            f"[bold cyan]{escape(status.label)}[/bold cyan]",
            "",
            "[green]⏱️  Active[/green]",
            f"Time remaining: {format_remaining(status.remaining_seconds)}"
        ]
        border = "cyan"
    else:
        lines = [
            f"[bold cyan]{escape(status.label)}[/bold cyan]",
            "",
            "[green]Active[/green] [dim](no timer)[/dim]"
        ]
        border = "green"

    return Panel(
        "\n".join(lines),
        box=box.ROUNDED,
        border_style=border,
        title="Current Focus",
        title_align="left"
    )


def display_status(status: FocusStatus):
    """Print a focus status"""
    if status.stale:
        print_warning("Stale focus session found. Clearing...")

    if status.state in ('timed', 'untimed'):
        console.print(create_status_display(status))
    elif status.state == 'ended':
        print_info(f"Focus session for '{escape(status.label)}' has just ended or is stale.")
    elif status.state == 'custom':
        print_warning("A custom clock format is set, but it may not be a focus session.")
        console.print(f"Current format: {escape(status.raw_format)}")
    else:
        print_info("No active focus session.")


def display_help(prog: str, error: Optional[str] = None):
    """Show help message"""
    if error:
        print_error(error)

    console.print(f"""
[bold]Usage:[/bold] {prog} [OPTIONS] [FOCUS_MESSAGE] [TIMER_DURATION]

Shows a focus message in the GNOME panel clock, optionally with a timer.

[bold]Options:[/bold]
  -m MESSAGE     Set the focus message
  -t DURATION    Set a timer (e.g. 25m, 1h). Requires a focus message
  -s             Check status of the current focus session
  -c             Clear current focus message and timer
  -h             Display this help message

[bold]Positional arguments[/bold] (used when -m / -t are absent):
  FOCUS_MESSAGE  The text for your focus
  TIMER_DURATION Optional duration for the focus (e.g. 25m, 1h)

[bold]Examples:[/bold]
  {prog} -m "Deep Work" -t 1h
  {prog} "Client Project" 45m
  {prog} -s
  {prog} -c
  {prog}             (interactive mode)
""", highlight=False)
