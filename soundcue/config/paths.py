"""
Filesystem locations for SoundCue.
All paths live here; each can be overridden through the environment.
"""

import os
from pathlib import Path

# === RUNTIME FILES ===
HOME_ENV = "SOUNDCUE_HOME"
DEFAULT_RUNTIME_DIR = Path.home() / ".config" / "opencode" / "soundcue"
CONFIG_FILENAME = "config.json"
STATE_FILENAME = "state.json"

# === SOUND PACKS ===
PACKS_ENV = "SOUNDCUE_PACKS_DIR"
DEFAULT_PACKS_DIR = Path(__file__).resolve().parent.parent / "packs"
MANIFEST_FILENAME = "manifest.json"
SOUNDS_DIRNAME = "sounds"


def runtime_dir() -> Path:
    """Directory holding config.json and state.json."""
    override = os.environ.get(HOME_ENV)
    return Path(override).expanduser() if override else DEFAULT_RUNTIME_DIR


def packs_dir() -> Path:
    """Directory holding one sub-directory per sound pack."""
    override = os.environ.get(PACKS_ENV)
    return Path(override).expanduser() if override else DEFAULT_PACKS_DIR


def config_path(base: Path = None) -> Path:
    return (base or runtime_dir()) / CONFIG_FILENAME


def state_path(base: Path = None) -> Path:
    return (base or runtime_dir()) / STATE_FILENAME
