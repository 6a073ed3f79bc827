"""
Sound selection for SoundCue.

Picks which line of a category plays next, steering away from the line
that played last so cues don't repeat back to back.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from ..config.models import CueCategory, PackManifest, SoundEntry
from ..core.state import SessionState
from ..utils.rng import SeededRNG


@dataclass
class SelectionResult:
    """
    Result of a sound selection attempt.

    Attributes:
        selected: Whether a sound was selected
        sound: The selected sound (if any)
        category: Category that was asked for
        candidates_considered: Size of the pool the pick was drawn from
        reason: Why this sound was selected (or why none was)
    """
    selected: bool = False
    sound: Optional[SoundEntry] = None
    category: str = ""
    candidates_considered: int = 0
    reason: str = ""

    @property
    def file(self) -> Optional[str]:
        return self.sound.file if self.sound else None


class SoundSelector:
    """
    Selects a sound from a pack category.

    The selector:
    1. Looks up the category's sounds (absent or empty: nothing plays)
    2. Drops the sound recorded in ``last_played`` for the category,
       unless the category has a single sound
    3. Picks uniformly from what remains
    4. Records the pick in ``last_played``

    ``last_played`` is keyed by category only, so every session drawing
    on the same category shares one memory.

    Example:
        >>> selector = SoundSelector(SeededRNG(seed=1))
        >>> result = selector.select(manifest, "complete", state)
        >>> if result.selected:
        ...     print(f"Play {result.file}")
    """

    def __init__(self, rng: Optional[Any] = None):
        """
        Args:
            rng: Source of randomness with a ``choice`` method
        """
        self.rng = rng or SeededRNG(name="sounds")

    def get_candidates(self, sounds: List[SoundEntry], last_file: Optional[str]) -> List[SoundEntry]:
        """Sounds eligible for the next pick."""
        if len(sounds) <= 1:
            return list(sounds)
        candidates = [s for s in sounds if s.file != last_file]
        # Every entry shares the last file name; repeating is unavoidable
        return candidates or list(sounds)

    def select(self, manifest: PackManifest, category: Any,
               state: SessionState) -> SelectionResult:
        """
        Select the next sound for a category.

        Args:
            manifest: Pack to draw from
            category: CueCategory or category name
            state: Session state; ``last_played`` is updated on success

        Returns:
            SelectionResult with the picked sound or the reason for none
        """
        name = category.value if isinstance(category, CueCategory) else str(category)
        result = SelectionResult(category=name)

        sounds = manifest.sounds_for(name)
        if not sounds:
            result.reason = f"Pack {manifest.name} has no sounds for {name}"
            return result

        last_file = state.last_played.get(name)
        candidates = self.get_candidates(sounds, last_file)
        result.candidates_considered = len(candidates)

        picked = self.rng.choice(candidates)
        state.last_played[name] = picked.file

        result.selected = True
        result.sound = picked
        result.reason = f"Picked from {len(candidates)} of {len(sounds)} sounds"
        return result
