"""
SoundCue

Plays audio cues from swappable sound packs when a coding assistant's
sessions start, finish, fail, ask for permission, or get spammed with
prompts. Per-session state keeps the cues varied: no back-to-back
repeats, sticky random pack rotation, and an "annoyed" cue for bursts.

Main entry points:
- CueEngine: Turns host events into cues
- ConfigStore / StateStore: Persistent config and session state
- ManifestProvider: Installed sound packs

Example:
    >>> from soundcue import CueEngine
    >>> engine = CueEngine.from_paths()
    >>> outcome = engine.handle_event({"type": "session.created",
    ...                                "properties": {"info": {"id": "ses_1"}}})
"""

__version__ = "0.3.0"


# Lazy imports so the CLI and hooks only load what they use
def __getattr__(name):
    if name == 'CueEngine':
        from .engine import CueEngine
        return CueEngine
    elif name == 'CueOutcome':
        from .engine import CueOutcome
        return CueOutcome
    elif name == 'ConfigStore':
        from .config import ConfigStore
        return ConfigStore
    elif name == 'CueConfig':
        from .config import CueConfig
        return CueConfig
    elif name == 'ManifestProvider':
        from .config import ManifestProvider
        return ManifestProvider
    elif name == 'StateStore':
        from .core import StateStore
        return StateStore
    elif name == 'SessionState':
        from .core import SessionState
        return SessionState
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'CueEngine',
    'CueOutcome',
    'ConfigStore',
    'CueConfig',
    'ManifestProvider',
    'StateStore',
    'SessionState',
]
