"""
Pack resolution for SoundCue.

Decides which sound pack speaks for a session: the configured active pack,
or, when a rotation is configured, a randomly chosen member of it that
sticks to the session.
"""

from typing import Any, Optional

from ..core.state import SessionState
from ..utils.rng import SeededRNG


class PackResolver:
    """
    Resolves the effective pack for a session.

    Rules:
    1. Empty rotation: the active pack, ignoring any stale assignment
    2. A stored assignment still in the rotation: that pack (sticky)
    3. Otherwise: a uniform pick from the rotation, stored for the session

    Empty session ids are ordinary keys, so anonymous events share one
    assignment. Names in the rotation are not checked against installed
    packs; a bad name resolves normally and its manifest then fails to
    load.

    Example:
        >>> resolver = PackResolver(SeededRNG(seed=7))
        >>> config = CueConfig(pack_rotation=["peon", "glados"])
        >>> state = SessionState()
        >>> first = resolver.resolve(config, state, "ses_1")
        >>> resolver.resolve(config, state, "ses_1") == first
        True
    """

    def __init__(self, rng: Optional[Any] = None):
        """
        Args:
            rng: Source of randomness with a ``choice`` method
        """
        self.rng = rng or SeededRNG(name="packs")

    def resolve(self, config: Any, state: SessionState, session_id: str) -> str:
        """
        Resolve the pack for a session, recording new assignments.

        Args:
            config: CueConfig
            state: Session state; ``session_packs`` may be updated
            session_id: Originating session

        Returns:
            Pack name
        """
        rotation = config.pack_rotation
        if not rotation:
            return config.active_pack

        existing = state.session_packs.get(session_id)
        if existing and existing in rotation:
            return existing

        picked = self.rng.choice(rotation)
        state.session_packs[session_id] = picked
        return picked
