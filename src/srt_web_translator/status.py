"""
Console rendering of pipeline progress events.
"""
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .events import EventKind, PipelineEvent

STYLES = {
    EventKind.START: "yellow",
    EventKind.UPDATE: "yellow",
    EventKind.COMPLETE: "green",
    EventKind.ERROR: "red",
}

LABELS = {
    EventKind.START: "Working",
    EventKind.UPDATE: "Working",
    EventKind.COMPLETE: "✓ Done",
    EventKind.ERROR: "✗ Error",
}


class ConsoleReporter:
    """Prints one status line per event with rich markup"""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self._last_progress = {}

    def __call__(self, event: PipelineEvent) -> None:
        style = STYLES[event.kind]
        label = LABELS[event.kind]
        phase = event.phase.value.capitalize()

        if event.progress is not None:
            # Only print whole 25% steps unless verbose
            step = int(event.progress // 25)
            if not self.verbose and self._last_progress.get(event.phase) == step:
                return
            self._last_progress[event.phase] = step
            label = f"{event.progress:>3.0f}%"

        if event.kind is EventKind.UPDATE and event.progress is None and not self.verbose:
            style = "dim"

        message = f" {escape(event.message)}" if event.message else ""
        self.console.print(f"[bold]{phase}[/bold]{message} [{style}]{label}[/{style}]")
