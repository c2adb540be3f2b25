"""Per-invocation state shared by the dispatcher and the runners."""

from dataclasses import dataclass, field
from typing import Optional, Set

from rich.console import Console
from rich.markup import escape

from .progress import ProgressTracker


@dataclass
class VirtualIntent:
    """Parsed flags of one ``virtual`` command."""

    contest: str
    start: bool = False
    end: bool = False
    myrank: bool = False
    view: bool = False
    filename: str = ""
    testcase: str = ""
    submit: bool = False
    question: int = -1
    editor: Optional[str] = None
    gen: bool = False
    outdir: str = "."
    extra: bool = False
    lang: str = "cpp"


@dataclass
class VirtualSession:
    """Context passed by reference through one invocation."""

    intent: VirtualIntent
    tracker: ProgressTracker
    console: Console = field(default_factory=Console)
    debug: bool = False
    accepted: int = 0
    accepted_ids: Set[str] = field(default_factory=set)

    def update_stat(self, name: str, value) -> None:
        """Update the in-memory counters and persist them."""
        if name == "ac":
            self.accepted += value
        elif name == "ac.set":
            self.accepted_ids.add(value)
        self.tracker.update_stat(name, value)

    def log_debug(self, message: str) -> None:
        if self.debug:
            self.console.print(f"[cyan]DEBUG: {escape(message)}[/cyan]")
