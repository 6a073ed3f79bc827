"""
Main SoundCue engine.

The CueEngine is the single entry point for host events. It integrates:
- Config loading (fresh for every event)
- Event classification
- Rapid-prompt detection
- Pack resolution and sound selection
- Playback and notification sinks

Every public call completes without raising; failures are logged and
turned into a no-op outcome.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .audio import PackResolver, SoundSelector
from .config import ConfigStore, CueCategory, ManifestProvider, SoundEntry
from .config import paths
from .core import EventClassifier, StateStore, SystemClock
from .memory import RapidPromptDetector
from .output import AudioPlayer, DesktopNotifier, create_null_logger
from .utils.rng import RNGManager


@dataclass
class CueOutcome:
    """
    What the engine did with one host event.

    Attributes:
        event_type: Host event type
        session_id: Originating session
        category: Category of the cue (if one was reached)
        pack: Pack that was resolved (if any)
        sound: Sound that was selected (if any)
        rapid: True when a user prompt completed a rapid burst
        played: Whether playback was launched
        notified: Whether a desktop notification was launched
        reason: Why the pipeline stopped, or "played"
    """
    event_type: str = ""
    session_id: str = ""
    category: Optional[str] = None
    pack: Optional[str] = None
    sound: Optional[SoundEntry] = None
    rapid: bool = False
    played: bool = False
    notified: bool = False
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_type': self.event_type,
            'session_id': self.session_id,
            'category': self.category,
            'pack': self.pack,
            'sound': self.sound.to_dict() if self.sound else None,
            'rapid': self.rapid,
            'played': self.played,
            'notified': self.notified,
            'reason': self.reason,
        }


@dataclass
class EngineStats:
    """Engine runtime statistics."""
    events_seen: int = 0
    cues_played: int = 0
    notifications_sent: int = 0
    rapid_bursts: int = 0
    errors: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'events_seen': self.events_seen,
            'cues_played': self.cues_played,
            'notifications_sent': self.notifications_sent,
            'rapid_bursts': self.rapid_bursts,
            'errors': self.errors,
        }


class CueEngine:
    """
    Turns host events into audio cues.

    Example:
        >>> engine = CueEngine.from_paths()
        >>> outcome = engine.handle_event(
        ...     {"type": "session.idle", "properties": {"sessionID": "ses_1"}})
        >>> outcome.reason
        'played'
    """

    def __init__(self,
                 config_store: ConfigStore,
                 state_store: StateStore,
                 manifests: ManifestProvider,
                 player: Optional[Any] = None,
                 notifier: Optional[Any] = None,
                 rng: Optional[Any] = None,
                 clock: Optional[Any] = None,
                 logger: Optional[Any] = None,
                 seed: Optional[int] = None,
                 notification_title: str = "OpenCode"):
        """
        Initialize the engine.

        Args:
            config_store: Loads config.json
            state_store: Loads/saves state.json under a lock
            manifests: Read-only pack access
            player: Object with ``play(path, volume)``
            notifier: Object with ``terminal_focused()`` and ``notify(title, message)``
            rng: One source of randomness for both packs and sounds;
                if None, separate streams are derived from ``seed``
            clock: Object with ``now()`` returning epoch seconds
            logger: DebugLogger
            seed: Random seed for reproducibility (None = random)
            notification_title: Title of desktop notifications
        """
        self.logger = logger if logger is not None else create_null_logger()
        self.config_store = config_store
        self.state_store = state_store
        self.manifests = manifests
        self.player = player or AudioPlayer(logger=self.logger)
        self.notifier = notifier or DesktopNotifier(logger=self.logger)
        self.clock = clock or SystemClock()
        self.notification_title = notification_title

        if rng is not None:
            pack_rng = sound_rng = rng
        else:
            self.rng_manager = RNGManager(master_seed=seed)
            pack_rng = self.rng_manager.get('packs')
            sound_rng = self.rng_manager.get('sounds')

        self.classifier = EventClassifier()
        self.resolver = PackResolver(pack_rng)
        self.selector = SoundSelector(sound_rng)

        self.stats = EngineStats()
        self._cue_callbacks: List[Callable] = []

    @classmethod
    def from_paths(cls,
                   runtime_dir: Optional[Path] = None,
                   packs_dir: Optional[Path] = None,
                   **kwargs) -> 'CueEngine':
        """
        Build an engine over the standard file locations.

        Args:
            runtime_dir: Directory for config.json/state.json
            packs_dir: Directory of sound packs
            **kwargs: Passed through to the constructor
        """
        logger = kwargs.pop('logger', None)
        if logger is None:
            logger = create_null_logger()
        base = Path(runtime_dir) if runtime_dir else paths.runtime_dir()
        return cls(
            config_store=ConfigStore(paths.config_path(base), logger=logger),
            state_store=StateStore(paths.state_path(base), logger=logger),
            manifests=ManifestProvider(Path(packs_dir) if packs_dir else paths.packs_dir(),
                                       logger=logger),
            logger=logger,
            **kwargs,
        )

    # =========================================================================
    # Callbacks
    # =========================================================================

    def on_cue(self, callback: Callable) -> None:
        """
        Register a callback invoked with each CueOutcome that played.

        Args:
            callback: Function that takes a CueOutcome
        """
        self._cue_callbacks.append(callback)

    def remove_callback(self, callback: Callable) -> None:
        """Remove a cue callback."""
        if callback in self._cue_callbacks:
            self._cue_callbacks.remove(callback)

    # =========================================================================
    # Event Handling
    # =========================================================================

    def handle_event(self, event: Any) -> CueOutcome:
        """
        Process one host event.

        Args:
            event: Decoded host event ``{"type": ..., "properties": ...}``

        Returns:
            CueOutcome describing what happened; never raises
        """
        self.stats.events_seen += 1
        try:
            outcome = self._process(event)
        except Exception as e:
            self.stats.errors += 1
            self.logger.error("engine", "Event handling failed",
                              error=f"{type(e).__name__}: {e}")
            return CueOutcome(reason=f"error: {e}")

        if outcome.played:
            self.stats.cues_played += 1
            for callback in self._cue_callbacks:
                try:
                    callback(outcome)
                except Exception as e:
                    self.stats.errors += 1
                    self.logger.error("engine", "Cue callback failed",
                                      error=f"{type(e).__name__}: {e}")
        return outcome

    def _process(self, event: Any) -> CueOutcome:
        config = self.config_store.load()
        classified = self.classifier.classify(event)
        outcome = CueOutcome(event_type=classified.event_type,
                             session_id=classified.session_id)

        if config.paused:
            return self._stop(outcome, "paused")

        if classified.ignored:
            return self._stop(outcome, "ignored event")

        self.logger.log_event(classified.event_type,
                              classified.category.value if classified.category else None,
                              classified.session_id)

        category = classified.category
        if category is not None and not config.is_enabled(category.value):
            outcome.category = category.value
            return self._stop(outcome, "category disabled")

        with self.state_store.transaction() as state:
            if classified.is_prompt:
                detector = RapidPromptDetector.from_config(config)
                outcome.rapid = detector.observe(state, classified.session_id,
                                                 self.clock.now())
                if outcome.rapid:
                    self.stats.rapid_bursts += 1
                    if config.is_enabled(CueCategory.ANNOYED.value):
                        category = CueCategory.ANNOYED

            if category is None:
                return self._stop(outcome, "no cue")
            outcome.category = category.value

            pack = self.resolver.resolve(config, state, classified.session_id)
            outcome.pack = pack

            manifest = self.manifests.load(pack)
            if manifest is None:
                return self._stop(outcome, "pack not found", pack=pack)

            selection = self.selector.select(manifest, category, state)
            if not selection.selected:
                return self._stop(outcome, "no sounds", detail=selection.reason)
            outcome.sound = selection.sound

        sound_path = self.manifests.sound_path(pack, outcome.sound.file)
        if sound_path is None or not sound_path.exists():
            return self._stop(outcome, "sound file missing", file=outcome.sound.file)

        self.logger.log_cue(pack, outcome.category, outcome.sound.file, config.volume)
        outcome.played = self.player.play(sound_path, config.volume)
        outcome.reason = "played" if outcome.played else "playback failed"

        if classified.notify and not self.notifier.terminal_focused():
            outcome.notified = self.notifier.notify(self.notification_title,
                                                    classified.notify_message)
            if outcome.notified:
                self.stats.notifications_sent += 1

        return outcome

    def _stop(self, outcome: CueOutcome, reason: str, **data) -> CueOutcome:
        outcome.reason = reason
        self.logger.log_skip(reason, **data)
        return outcome

    def __repr__(self) -> str:
        return (f"CueEngine(events={self.stats.events_seen}, "
                f"played={self.stats.cues_played})")
