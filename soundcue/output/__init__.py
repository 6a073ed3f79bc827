"""
Output and logging for SoundCue.

- AudioPlayer: Launches platform audio players for cues
- DesktopNotifier: Foreground-app checks and desktop notifications
- DebugLogger: In-memory, optionally streamed, structured logging
"""

from .debug_logger import (
    DebugLogger,
    LogLevel,
    LogEntry,
    create_console_logger,
    create_null_logger,
)
from .sinks import AudioPlayer, DesktopNotifier, detect_platform

__all__ = [
    'DebugLogger',
    'LogLevel',
    'LogEntry',
    'create_console_logger',
    'create_null_logger',
    'AudioPlayer',
    'DesktopNotifier',
    'detect_platform',
]
