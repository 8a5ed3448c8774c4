from __future__ import annotations

import json
import os
import sys
import threading
from datetime import datetime
from typing import IO, Any, Dict

from rich.console import Console
from rich.markup import escape

from .base import TelemetrySink


_LOCK = threading.Lock()

_REASON_STYLES = {
    "length": "yellow",
    "duplicate": "magenta",
    "validator": "cyan",
}


class ConsoleTelemetrySink(TelemetrySink):
    """Colourised, human-readable event lines for interactive runs.

    Controlled by env vars:
      - MEMORABLE_IDS_CONSOLE_TIMESTAMPS: '1' to show timestamps (default 1)
      - MEMORABLE_IDS_CONSOLE_REJECTIONS: '1' to show every rejected attempt (default 1)
    """

    def __init__(self, file: IO[str] | None = None) -> None:
        # stderr by default so generated ids on stdout stay pipeable
        self._console = Console(file=file or sys.stderr, highlight=False, soft_wrap=True)
        self._show_ts = os.getenv("MEMORABLE_IDS_CONSOLE_TIMESTAMPS", "1") != "0"
        self._show_rejections = os.getenv("MEMORABLE_IDS_CONSOLE_REJECTIONS", "1") != "0"

    def emit(self, event: str, payload: dict | None = None) -> None:
        data: Dict[str, Any] = payload or {}
        prefix = f"[dim]{datetime.now().isoformat(timespec='seconds')}[/dim] " if self._show_ts else ""

        if event == "id.generated":
            value = escape(str(data.get("value", "")))
            line = f"{prefix}[bold green]✔ {value}[/bold green] [dim](attempt {data.get('attempts', '?')})[/dim]"
        elif event == "id.rejected":
            if not self._show_rejections:
                return
            reason = str(data.get("reason", "?"))
            style = _REASON_STYLES.get(reason, "white")
            candidate = escape(str(data.get("candidate", "")))
            line = f"{prefix}[{style}]· {reason}[/{style}] {candidate} [dim]#{data.get('attempt', '?')}[/dim]"
        elif event == "id.exhausted":
            suffix = " with validator" if data.get("validated") else ""
            line = f"{prefix}[bold red]✘ exhausted after {data.get('attempts', '?')} attempts{suffix}[/bold red]"
        else:
            line = f"{prefix}{escape(event)} {escape(json.dumps(data, ensure_ascii=False))}"

        with _LOCK:
            self._console.print(line)


__all__ = ["ConsoleTelemetrySink"]
