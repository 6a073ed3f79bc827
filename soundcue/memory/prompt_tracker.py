"""
Rapid-prompt tracking for SoundCue.

Keeps a sliding window of user-prompt timestamps per session and reports
when the user is firing prompts faster than the configured rate. The
window slides on every observation: entries expire continuously as time
advances, never in fixed buckets.
"""

from typing import Any, List

from ..core.state import SessionState


class RapidPromptDetector:
    """
    Detects bursts of user prompts within a session.

    A prompt triggers when, counting itself, at least ``threshold`` prompts
    fall strictly inside the last ``window_seconds``.

    Example:
        >>> detector = RapidPromptDetector(threshold=3, window_seconds=10)
        >>> state = SessionState()
        >>> [detector.observe(state, "ses_1", t) for t in (0.0, 1.0, 2.0)]
        [False, False, True]
        >>> detector.observe(state, "ses_1", 13.0)
        False
    """

    def __init__(self, threshold: int = 3, window_seconds: float = 10.0):
        """
        Args:
            threshold: Prompts within the window that count as rapid (>= 1)
            window_seconds: Length of the sliding window (> 0)
        """
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1, got {threshold}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")

        self.threshold = threshold
        self.window_seconds = window_seconds

    @classmethod
    def from_config(cls, config: Any) -> 'RapidPromptDetector':
        """Build a detector from a CueConfig's annoyed_* settings."""
        return cls(
            threshold=config.annoyed_threshold,
            window_seconds=config.annoyed_window_seconds,
        )

    def window(self, state: SessionState, session_id: str, now: float) -> List[float]:
        """Timestamps for a session still inside the window at ``now``."""
        stored = state.prompt_timestamps.get(session_id, [])
        return [t for t in stored if now - t < self.window_seconds]

    def observe(self, state: SessionState, session_id: str, now: float) -> bool:
        """
        Record a prompt and report whether the burst threshold is reached.

        The pruned and extended sequence is always written back to the
        state, whether or not it triggers, so the next observation sees
        an accurate window.

        Args:
            state: Session state to update in place
            session_id: Session the prompt belongs to
            now: Prompt time in epoch seconds

        Returns:
            True if the prompt completes a rapid burst
        """
        timestamps = self.window(state, session_id, now)
        timestamps.append(now)
        state.prompt_timestamps[session_id] = timestamps
        return len(timestamps) >= self.threshold

    def __repr__(self) -> str:
        return (f"RapidPromptDetector(threshold={self.threshold}, "
                f"window_seconds={self.window_seconds})")
