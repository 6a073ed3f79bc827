"""
Memory systems for SoundCue.

These modules track what the user has been doing across events so cues
can react to it.
"""

from .prompt_tracker import RapidPromptDetector

__all__ = [
    'RapidPromptDetector',
]
