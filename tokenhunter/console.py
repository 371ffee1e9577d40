from __future__ import annotations

import threading
from typing import Optional

from rich.console import Console
from rich.text import Text

LEVEL_STYLES = {
    "INFO": "bold green",
    "WARN": "bold yellow",
    "ERROR": "bold red",
    "FIX": "bold magenta",
    "DEBUG": "bold blue",
    "DONE": "bold cyan",
}


class RichLogger:
    """Levelled, thread-safe log lines on a rich console (stderr by default).

    ``quiet`` drops everything; library entry points fall back to a quiet
    logger when the caller passes none.
    """

    def __init__(self, console: Optional[Console] = None, verbose: bool = False, quiet: bool = False):
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        self.quiet = quiet
        self._lock = threading.Lock()

    @classmethod
    def silent(cls) -> "RichLogger":
        return cls(quiet=True)

    def _emit(self, level: str, msg: str, location: Optional[str] = None) -> None:
        if self.quiet or (level == "DEBUG" and not self.verbose):
            return
        parts = [Text(level.ljust(5), style=LEVEL_STYLES[level])]
        if location:
            parts.append(Text(location, style="cyan"))
        with self._lock:
            self.console.log(*parts, msg)

    def info(self, msg: str) -> None:
        self._emit("INFO", msg)

    def warn(self, msg: str) -> None:
        self._emit("WARN", msg)

    def error(self, msg: str) -> None:
        self._emit("ERROR", msg)

    def fixed(self, msg: str, location: Optional[str] = None) -> None:
        self._emit("FIX", msg, location)

    def debug(self, msg: str, location: Optional[str] = None) -> None:
        self._emit("DEBUG", msg, location)

    def done(self, msg: str) -> None:
        self._emit("DONE", msg)
