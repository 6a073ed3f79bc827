"""
Utility functions for SoundCue.
"""

from .rng import SeededRNG, RNGManager
from .validators import (
    ValidationError,
    validate_range,
    validate_volume,
    validate_choice,
    clamp,
)

__all__ = [
    'SeededRNG',
    'RNGManager',
    'ValidationError',
    'validate_range',
    'validate_volume',
    'validate_choice',
    'clamp',
]
