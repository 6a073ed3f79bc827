"""
Configuration loading and data models for SoundCue.
"""

from .loader import (
    ConfigError,
    ConfigStore,
    ManifestProvider,
    read_json_object,
    write_json_atomic,
)
from .models import (
    CATEGORY_NAMES,
    CueCategory,
    CueConfig,
    PackInfo,
    PackManifest,
    SoundCategoryConfig,
    SoundEntry,
)

__all__ = [
    'ConfigError',
    'ConfigStore',
    'ManifestProvider',
    'read_json_object',
    'write_json_atomic',
    'CATEGORY_NAMES',
    'CueCategory',
    'CueConfig',
    'PackInfo',
    'PackManifest',
    'SoundCategoryConfig',
    'SoundEntry',
]
