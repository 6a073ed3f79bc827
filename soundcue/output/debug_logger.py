"""
Debug logging for SoundCue.

Hooks run inside the host application, so nothing is printed unless an
output stream is attached. Entries are always kept in memory (capped) so
tests and the CLI's --verbose mode can inspect what the engine decided.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, TextIO
import json
import sys
import time


class LogLevel(Enum):
    """Severity of a log entry, lowest first."""
    TRACE = 0    # Every decision step
    DEBUG = 1    # Pipeline decisions and skips
    INFO = 2     # Cues played, commands run
    WARNING = 3  # Recovered problems (corrupt files, missing packs)
    ERROR = 4    # Unexpected failures swallowed by the pipeline
    NONE = 5     # Record nothing


@dataclass
class LogEntry:
    """One recorded message plus its structured fields."""
    timestamp: float
    level: LogLevel
    category: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def format(self) -> str:
        """Render as ``HH:MM:SS LEVEL [category] message key=value ...``."""
        clock = datetime.fromtimestamp(self.timestamp).strftime("%H:%M:%S")
        text = f"{clock} {self.level.name:<7} [{self.category}] {self.message}"
        if self.data:
            text += " " + " ".join(f"{key}={value}" for key, value in self.data.items())
        return text

    def to_dict(self) -> Dict[str, Any]:
        record = {
            'timestamp': self.timestamp,
            'level': self.level.name,
            'category': self.category,
            'message': self.message,
        }
        if self.data:
            record['data'] = dict(self.data)
        return record


class DebugLogger:
    """
    Structured logger for SoundCue.

    Categories in use: engine, config, state, pack, sound, sink.

    Example:
        >>> logger = DebugLogger(level=LogLevel.DEBUG)
        >>> _ = logger.info("sound", "Playing", pack="peon", file="PeonYes1.wav")
        >>> logger.get_by_category("sound")[0].data["pack"]
        'peon'
    """

    def __init__(self,
                 level: LogLevel = LogLevel.INFO,
                 output: Optional[TextIO] = None,
                 max_entries: int = 1000):
        """
        Args:
            level: Entries below this level are dropped
            output: Stream to echo entries to (None keeps them in memory only)
            max_entries: Oldest entries are discarded past this many
        """
        self.level = level
        self.output = output
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)

    def log(self, level: LogLevel, category: str, message: str, /,
            **data) -> Optional[LogEntry]:
        """
        Record a message if its level passes the threshold.

        Returns:
            The stored entry, or None if it was below the threshold
        """
        if level.value < self.level.value:
            return None

        entry = LogEntry(time.time(), level, category, message, data)
        self._entries.append(entry)

        if self.output is not None:
            print(entry.format(), file=self.output, flush=True)
        return entry

    def debug(self, category: str, message: str, /, **data) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, category, message, **data)

    def info(self, category: str, message: str, /, **data) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, category, message, **data)

    def warning(self, category: str, message: str, /, **data) -> Optional[LogEntry]:
        return self.log(LogLevel.WARNING, category, message, **data)

    def error(self, category: str, message: str, /, **data) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, category, message, **data)

    # =========================================================================
    # Pipeline messages
    # =========================================================================

    def log_event(self, event_type: str, category: Optional[str],
                  session_id: str) -> None:
        """An incoming host event after classification."""
        self.debug("engine", f"EVENT {event_type}",
                   cue=category or "-", session=session_id or "-")

    def log_cue(self, pack: str, category: str, file: str, volume: float) -> None:
        """A cue handed to the audio sink."""
        self.info("sound", f"PLAY {pack}/{file}",
                  cue=category, volume=f"{volume:.2f}")

    def log_skip(self, reason: str, **data) -> None:
        """A pipeline short-circuit."""
        self.debug("engine", f"SKIP {reason}", **data)

    # =========================================================================
    # Inspection
    # =========================================================================

    def get_entries(self, level: Optional[LogLevel] = None,
                    category: Optional[str] = None) -> List[LogEntry]:
        """Stored entries, oldest first, filtered by exact level and category."""
        return [
            e for e in self._entries
            if (level is None or e.level is level)
            and (category is None or e.category == category)
        ]

    def get_errors(self) -> List[LogEntry]:
        return self.get_entries(level=LogLevel.ERROR)

    def get_warnings(self) -> List[LogEntry]:
        return self.get_entries(level=LogLevel.WARNING)

    def get_by_category(self, category: str) -> List[LogEntry]:
        return self.get_entries(category=category)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps([e.to_dict() for e in self._entries], indent=indent)

    @property
    def count(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __repr__(self) -> str:
        return f"DebugLogger(entries={len(self._entries)}, level={self.level.name})"


def create_null_logger() -> DebugLogger:
    """Logger that records warnings and errors in memory and prints nothing."""
    return DebugLogger(level=LogLevel.WARNING)


def create_console_logger(level: LogLevel = LogLevel.DEBUG) -> DebugLogger:
    """Logger that echoes to stderr (stdout belongs to the host)."""
    return DebugLogger(level=level, output=sys.stderr)
