"""
Core engine components for SoundCue.
"""

from .state import SessionState, StateStore
from .clock import SystemClock, ManualClock
from .events import ClassifiedEvent, EventClassifier

__all__ = [
    'SessionState',
    'StateStore',
    'SystemClock',
    'ManualClock',
    'ClassifiedEvent',
    'EventClassifier',
]
