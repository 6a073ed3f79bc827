"""
Persistent session state for SoundCue.

The state file is shared by every hook invocation, including overlapping
ones for different sessions. All read-modify-write cycles go through
StateStore.transaction(), which holds an in-process lock and an exclusive
file lock for the whole cycle.

Entries for ended sessions are never pruned, so prompt_timestamps and
session_packs grow with the number of sessions seen.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional
import fcntl
import threading

from ..config.loader import ConfigError, read_json_object, write_json_atomic


def _string_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): v for k, v in value.items() if isinstance(v, str)}


def _timestamp_map(value: Any) -> Dict[str, List[float]]:
    if not isinstance(value, dict):
        return {}
    result = {}
    for session_id, stamps in value.items():
        if not isinstance(stamps, list):
            continue
        result[str(session_id)] = [
            float(t) for t in stamps
            if isinstance(t, (int, float)) and not isinstance(t, bool)
        ]
    return result


@dataclass
class SessionState:
    """
    Mutable state carried between host events.

    Attributes:
        last_played: Category -> file of the sound played last. Shared by
            all sessions.
        prompt_timestamps: Session id -> recent user-prompt times (epoch
            seconds, oldest first)
        session_packs: Session id -> pack stickily assigned under rotation
    """
    last_played: Dict[str, str] = field(default_factory=dict)
    prompt_timestamps: Dict[str, List[float]] = field(default_factory=dict)
    session_packs: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionState':
        """Build from a persisted document; bad or missing maps become empty."""
        return cls(
            last_played=_string_map(data.get("last_played")),
            prompt_timestamps=_timestamp_map(data.get("prompt_timestamps")),
            session_packs=_string_map(data.get("session_packs")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'last_played': dict(self.last_played),
            'prompt_timestamps': {k: list(v) for k, v in self.prompt_timestamps.items()},
            'session_packs': dict(self.session_packs),
        }


class StateStore:
    """
    Loads, saves and serialises access to state.json.

    Example:
        >>> store = StateStore(Path("/tmp/soundcue/state.json"))
        >>> with store.transaction() as state:
        ...     state.session_packs["ses_1"] = "peon"
        >>> store.load().session_packs["ses_1"]
        'peon'
    """

    # One lock per state file path within this process
    _locks: Dict[str, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, path: Path, logger: Optional[Any] = None):
        """
        Args:
            path: Location of state.json
            logger: DebugLogger for recovered problems
        """
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.logger = logger

    # =========================================================================
    # Load / Save
    # =========================================================================

    def load(self) -> SessionState:
        """
        Read the state file.

        Missing or corrupt files yield an empty state; errors are never
        propagated.
        """
        if not self.path.exists():
            return SessionState()

        try:
            data = read_json_object(self.path)
        except ConfigError as e:
            self._log_warning("Discarding unreadable state", error=str(e))
            return SessionState()

        return SessionState.from_dict(data)

    def save(self, state: SessionState) -> bool:
        """
        Write the whole state record.

        Returns:
            True if written, False if the write failed (logged, not raised)
        """
        try:
            write_json_atomic(self.path, state.to_dict())
            return True
        except OSError as e:
            self._log_warning("Could not save state", error=str(e))
            return False

    # =========================================================================
    # Transactions
    # =========================================================================

    @contextmanager
    def transaction(self) -> Iterator[SessionState]:
        """
        Load the state, hand it to the caller, and save it if it changed.

        Concurrent transactions on the same file (threads or processes)
        run one after another. If the block raises, nothing is saved.
        """
        with self._thread_lock():
            with self._file_lock():
                state = self.load()
                before = state.to_dict()
                yield state
                if state.to_dict() != before:
                    self.save(state)

    def _thread_lock(self) -> threading.Lock:
        key = str(self.path.resolve())
        with StateStore._locks_guard:
            lock = StateStore._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                StateStore._locks[key] = lock
        return lock

    @contextmanager
    def _file_lock(self) -> Iterator[None]:
        handle = None
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(self.lock_path, 'a')
        except OSError as e:
            self._log_warning("Could not open state lock", error=str(e))

        if handle is None:
            # Only the in-process lock protects the cycle
            yield
            return

        with handle:
            fcntl.flock(handle, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle, fcntl.LOCK_UN)

    def _log_warning(self, message: str, **data) -> None:
        if self.logger is not None:
            self.logger.warning("state", message, **data)
