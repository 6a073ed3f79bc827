"""
Seeded random number generation for SoundCue.

Every random decision the engine makes (which pack a session rotates to,
which line of a category plays next) goes through a SeededRNG so tests
can pin the sequence with a fixed seed.
"""

import random
from typing import Any, Dict, Optional, Sequence, TypeVar

T = TypeVar('T')

SEED_SPACE = 2**32


class SeededRNG:
    """
    An independent, reproducible stream of random draws.

    Attributes:
        seed: Seed the stream started from
        name: Stream label shown in repr and saved state

    Example:
        >>> rng = SeededRNG(seed=42, name="sounds")
        >>> first = rng.choice(["a.mp3", "b.mp3"])
        >>> SeededRNG(seed=42).choice(["a.mp3", "b.mp3"]) == first
        True
    """

    def __init__(self, seed: Optional[int] = None, name: str = "default"):
        """
        Args:
            seed: Fixed seed; None draws a fresh one
            name: Stream label
        """
        self.name = name
        self.seed = random.randrange(SEED_SPACE) if seed is None else seed
        self._gen = random.Random(self.seed)
        self._draws = 0

    @property
    def call_count(self) -> int:
        """Draws made since construction or the last reset."""
        return self._draws

    def randint(self, a: int, b: int) -> int:
        self._draws += 1
        return self._gen.randint(a, b)

    def choice(self, sequence: Sequence[T]) -> T:
        """
        Uniform pick from a non-empty sequence.

        Raises:
            IndexError: If sequence is empty
        """
        self._draws += 1
        return self._gen.choice(sequence)

    def reset(self, seed: Optional[int] = None) -> None:
        """Rewind to the start of the stream, optionally under a new seed."""
        if seed is not None:
            self.seed = seed
        self._gen.seed(self.seed)
        self._draws = 0

    def get_state(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'seed': self.seed,
            'draws': self._draws,
            'generator': self._gen.getstate(),
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        """Resume from a get_state() snapshot."""
        self.name = state['name']
        self.seed = state['seed']
        self._draws = state['draws']
        self._gen.setstate(state['generator'])

    def __repr__(self) -> str:
        return f"SeededRNG(name={self.name!r}, seed={self.seed}, draws={self._draws})"


class RNGManager:
    """
    Hands out named streams whose seeds derive from one master seed.

    The engine draws pack rotation and sound selection from separate
    streams so adding a draw to one never shifts the other's sequence.

    Example:
        >>> manager = RNGManager(master_seed=42)
        >>> manager.get('packs').seed != manager.get('sounds').seed
        True
    """

    def __init__(self, master_seed: Optional[int] = None):
        self._master = SeededRNG(seed=master_seed, name="master")
        self.master_seed = self._master.seed
        self._streams: Dict[str, SeededRNG] = {}

    def get(self, name: str) -> SeededRNG:
        """The stream for ``name``, created on first use."""
        stream = self._streams.get(name)
        if stream is None:
            stream = SeededRNG(seed=self._master.randint(0, SEED_SPACE - 1), name=name)
            self._streams[name] = stream
        return stream

    def __repr__(self) -> str:
        return f"RNGManager(master_seed={self.master_seed}, streams={sorted(self._streams)})"
