import sys
from datetime import datetime
from typing import List, Optional, TextIO


class RunLog:
    """Timestamped diagnostic messages for a run, echoed to stderr when verbose."""

    def __init__(self, echo: bool = False, stream: Optional[TextIO] = None):
        self.echo = echo
        self.stream = stream
        self.entries: List[str] = []

    def log(self, message: str) -> None:
        """Add a message to the run log."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {message}"
        self.entries.append(log_entry)
        if self.echo:
            print(log_entry, file=self.stream or sys.stderr)
