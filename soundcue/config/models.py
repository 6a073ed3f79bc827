"""
Configuration data models for SoundCue.

These dataclasses represent the persisted user settings and the read-only
pack manifests. Every field carries its own default, and parsing merges a
loaded document into those defaults field by field.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
import math

from ..utils.validators import clamp


# =============================================================================
# Sound Categories
# =============================================================================

class CueCategory(Enum):
    """Semantic buckets of sounds, one per kind of host event."""
    GREETING = "greeting"      # Session created
    COMPLETE = "complete"      # Session went idle
    ERROR = "error"            # Session error
    PERMISSION = "permission"  # Permission requested
    ANNOYED = "annoyed"        # Rapid-fire user prompts


CATEGORY_NAMES = tuple(c.value for c in CueCategory)


def _default_categories() -> Dict[str, bool]:
    return {name: True for name in CATEGORY_NAMES}


def _is_number(value: Any) -> bool:
    """Finite int or float; bools, NaN and infinities do not count."""
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


# =============================================================================
# User Configuration
# =============================================================================

@dataclass
class CueConfig:
    """
    User-tunable settings, loaded fresh for every host event.

    Attributes:
        active_pack: Pack used when rotation is disabled
        volume: Playback volume (0.0-1.0)
        paused: Global mute switch
        categories: Per-category opt-out; a missing key means enabled
        annoyed_threshold: Prompts within the window that trigger "annoyed"
        annoyed_window_seconds: Length of the rapid-prompt sliding window
        pack_rotation: Packs a session may be randomly assigned to;
            empty disables rotation
    """
    active_pack: str = "peon"
    volume: float = 0.5
    paused: bool = False
    categories: Dict[str, bool] = field(default_factory=_default_categories)
    annoyed_threshold: int = 3
    annoyed_window_seconds: float = 10
    pack_rotation: List[str] = field(default_factory=list)

    def is_enabled(self, category: str) -> bool:
        """Only an explicit False disables a category."""
        return self.categories.get(category) is not False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CueConfig':
        """
        Merge a persisted document into the defaults, field by field.

        Missing or ill-typed fields keep their default; unknown keys are
        ignored. ``categories`` and ``pack_rotation`` replace the default
        wholesale when present.

        Args:
            data: Decoded JSON object

        Returns:
            A fully populated CueConfig
        """
        config = cls()

        active_pack = data.get("active_pack")
        if isinstance(active_pack, str) and active_pack:
            config.active_pack = active_pack

        volume = data.get("volume")
        if _is_number(volume):
            config.volume = clamp(float(volume), 0.0, 1.0)

        paused = data.get("paused")
        if isinstance(paused, bool):
            config.paused = paused

        categories = data.get("categories")
        if isinstance(categories, dict):
            config.categories = {
                str(name): flag for name, flag in categories.items()
                if isinstance(flag, bool)
            }

        threshold = data.get("annoyed_threshold")
        if _is_number(threshold) and threshold >= 1:
            config.annoyed_threshold = int(threshold)

        window = data.get("annoyed_window_seconds")
        if _is_number(window) and window > 0:
            config.annoyed_window_seconds = window

        rotation = data.get("pack_rotation")
        if isinstance(rotation, list):
            config.pack_rotation = [name for name in rotation if isinstance(name, str) and name]

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON document."""
        return {
            'active_pack': self.active_pack,
            'volume': self.volume,
            'paused': self.paused,
            'categories': dict(self.categories),
            'annoyed_threshold': self.annoyed_threshold,
            'annoyed_window_seconds': self.annoyed_window_seconds,
            'pack_rotation': list(self.pack_rotation),
        }


# =============================================================================
# Pack Manifests
# =============================================================================

@dataclass
class SoundEntry:
    """A single sound in a pack: its file name and the quote it speaks."""
    file: str
    line: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {'file': self.file, 'line': self.line}


@dataclass
class SoundCategoryConfig:
    """The sounds a pack declares for one category."""
    sounds: List[SoundEntry] = field(default_factory=list)


@dataclass
class PackManifest:
    """
    Read-only description of a sound pack.

    Attributes:
        name: Pack directory name
        display_name: Human-readable name shown in pack listings
        categories: Category name -> declared sounds
    """
    name: str
    display_name: str
    categories: Dict[str, SoundCategoryConfig] = field(default_factory=dict)

    def sounds_for(self, category: str) -> List[SoundEntry]:
        """Sounds for a category; absent and empty categories look the same."""
        entry: Optional[SoundCategoryConfig] = self.categories.get(category)
        if entry is None:
            return []
        return entry.sounds

    def has_sounds(self, category: str) -> bool:
        return bool(self.sounds_for(category))


@dataclass
class PackInfo:
    """Summary of an installed pack for listings."""
    name: str
    display_name: str
