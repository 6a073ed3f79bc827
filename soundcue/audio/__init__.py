"""
Pack resolution and sound selection for SoundCue.

This module handles:
- Choosing the pack that speaks for a session (fixed or rotated)
- Choosing the next sound in a category without back-to-back repeats
"""

from .pack_resolver import PackResolver
from .sound_selector import SoundSelector, SelectionResult

__all__ = [
    'PackResolver',
    'SoundSelector',
    'SelectionResult',
]
