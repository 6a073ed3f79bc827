"""
Time sources for SoundCue.

The rapid-prompt window measures wall-clock seconds. The engine asks a
clock for "now" instead of calling time.time() directly, so tests can
step time by hand.
"""

from dataclasses import dataclass
import time


class SystemClock:
    """Wall-clock time in epoch seconds."""

    def now(self) -> float:
        return time.time()


@dataclass
class ManualClock:
    """
    A clock that only moves when told to.

    Attributes:
        current_time: Epoch seconds returned by now()

    Example:
        >>> clock = ManualClock(current_time=100.0)
        >>> clock.advance(2.5)
        102.5
        >>> clock.now()
        102.5
    """

    current_time: float = 0.0

    def now(self) -> float:
        return self.current_time

    def advance(self, seconds: float) -> float:
        """
        Move the clock forward.

        Args:
            seconds: Number of seconds to advance (must not be negative)

        Returns:
            The new time
        """
        if seconds < 0:
            raise ValueError(f"Cannot move a clock backwards ({seconds}s)")
        self.current_time += seconds
        return self.current_time

    def set(self, timestamp: float) -> None:
        """Jump to an absolute time."""
        self.current_time = timestamp
