"""
Workspace console - the append-only list of user facing messages
("Created file: ...", "Saved ...", errors) shown under the editor.
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from promptide.core.logging_config import logger
from promptide.workspace.models import ConsoleLogEntry, LogSeverity

ConsoleListener = Callable[[ConsoleLogEntry], None]

_LOG_LEVELS = {
    LogSeverity.SUCCESS: logging.INFO,
    LogSeverity.INFO: logging.INFO,
    LogSeverity.ERROR: logging.WARNING,
}


class ConsoleLog:
    """Ordered, growing sequence of ConsoleLogEntry for one session"""

    def __init__(self, workspace_id: str = ""):
        self.workspace_id = workspace_id
        self._entries: List[ConsoleLogEntry] = []
        self._listeners: List[ConsoleListener] = []

    def append(self, message: str, severity: LogSeverity = LogSeverity.INFO) -> ConsoleLogEntry:
        entry = ConsoleLogEntry(message=message, severity=LogSeverity(severity))
        self._entries.append(entry)
        logger.log(
            _LOG_LEVELS[entry.severity],
            f"[Console] {message}",
            extra={"console_severity": entry.severity.value, "workspace": self.workspace_id},
        )
        for listener in list(self._listeners):
            listener(entry)
        return entry

    def success(self, message: str) -> ConsoleLogEntry:
        return self.append(message, LogSeverity.SUCCESS)

    def error(self, message: str) -> ConsoleLogEntry:
        return self.append(message, LogSeverity.ERROR)

    def info(self, message: str) -> ConsoleLogEntry:
        return self.append(message, LogSeverity.INFO)

    def subscribe(self, listener: ConsoleListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it"""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @property
    def entries(self) -> Tuple[ConsoleLogEntry, ...]:
        return tuple(self._entries)

    def by_severity(self, severity: LogSeverity) -> List[ConsoleLogEntry]:
        return [e for e in self._entries if e.severity == severity]

    def last(self) -> Optional[ConsoleLogEntry]:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConsoleLogEntry]:
        return iter(tuple(self._entries))
