"""
Configuration and manifest loading for SoundCue.

Reads JSON documents from disk and converts them to typed dataclass
objects. Reads never fail the event pipeline: a missing or corrupt file
yields the defaults and a warning in the log.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import (
    CueConfig,
    PackInfo,
    PackManifest,
    SoundCategoryConfig,
    SoundEntry,
)
from .paths import MANIFEST_FILENAME, SOUNDS_DIRNAME


class ConfigError(Exception):
    """Raised when a configuration or manifest file cannot be used."""

    def __init__(self, message: str, file: Optional[str] = None,
                 path: Optional[str] = None):
        self.message = message
        self.file = file
        self.path = path

        full_msg = message
        if file:
            full_msg = f"[{file}] {full_msg}"
        if path:
            full_msg = f"{full_msg} (at {path})"

        super().__init__(full_msg)


# =============================================================================
# JSON helpers
# =============================================================================

def read_json_object(filepath: Path) -> Dict[str, Any]:
    """
    Load a JSON file that must hold an object.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or
            not a JSON object
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError("File not found", file=filepath.name)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Invalid JSON: {e}", file=filepath.name)

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a JSON object, got {type(data).__name__}",
            file=filepath.name
        )
    return data


def write_json_atomic(filepath: Path, data: Dict[str, Any]) -> None:
    """
    Write a whole JSON document, replacing the old file in one step.

    Raises:
        OSError: If the directory or file cannot be written
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(filepath.parent), prefix=filepath.name, suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, filepath)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


# =============================================================================
# User config
# =============================================================================

class ConfigStore:
    """
    Loads and saves the user's config.json.

    Usage:
        store = ConfigStore(Path("~/.config/opencode/soundcue/config.json"))
        config = store.load()
        config.volume = 0.8
        store.save(config)
    """

    def __init__(self, path: Path, logger: Optional[Any] = None):
        """
        Args:
            path: Location of config.json
            logger: DebugLogger for recovered problems
        """
        self.path = Path(path)
        self.logger = logger

    def load(self) -> CueConfig:
        """
        Load the config, merged over the defaults.

        A missing file is created with the defaults. A corrupt file is left
        alone and the exact default record is returned.
        """
        if not self.path.exists():
            config = CueConfig()
            try:
                write_json_atomic(self.path, config.to_dict())
            except OSError as e:
                self._warn("Could not write default config", error=str(e))
            return config

        try:
            data = read_json_object(self.path)
        except ConfigError as e:
            self._warn("Falling back to default config", error=str(e))
            return CueConfig()

        return CueConfig.from_dict(data)

    def save(self, config: CueConfig) -> None:
        """
        Persist the whole config record.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            write_json_atomic(self.path, config.to_dict())
        except OSError as e:
            raise ConfigError(f"Could not write config: {e}", file=self.path.name)

    def _warn(self, message: str, **data) -> None:
        if self.logger is not None:
            self.logger.warning("config", message, **data)


# =============================================================================
# Pack manifests
# =============================================================================

class ManifestProvider:
    """
    Read-only access to installed sound packs.

    Each pack is a directory under ``packs_dir`` holding ``manifest.json``
    and a ``sounds/`` directory.

    Example:
        >>> provider = ManifestProvider(Path("packs"))
        >>> manifest = provider.load("peon")
        >>> files = [s.file for s in manifest.sounds_for("greeting")]
        >>> provider.load("no_such_pack") is None
        True
    """

    def __init__(self, packs_dir: Path, logger: Optional[Any] = None):
        self.packs_dir = Path(packs_dir)
        self.logger = logger

    def load(self, pack_name: str) -> Optional[PackManifest]:
        """
        Load a pack's manifest.

        Returns:
            The manifest, or None if the pack is missing or corrupt
        """
        if not self._is_safe_name(pack_name):
            return None

        manifest_path = self.packs_dir / pack_name / MANIFEST_FILENAME
        if not manifest_path.exists():
            return None

        try:
            data = read_json_object(manifest_path)
            return self._parse_manifest(pack_name, data)
        except ConfigError as e:
            if self.logger is not None:
                self.logger.warning("pack", f"Unusable manifest for {pack_name}", error=str(e))
            return None

    def _parse_manifest(self, pack_name: str, data: dict) -> PackManifest:
        """Parse a manifest document."""
        raw_categories = data.get("categories", {})
        if not isinstance(raw_categories, dict):
            raise ConfigError("'categories' must be an object",
                              file=MANIFEST_FILENAME, path=pack_name)

        categories = {}
        for category, category_data in raw_categories.items():
            if not isinstance(category_data, dict):
                continue
            raw_sounds = category_data.get("sounds")
            if not isinstance(raw_sounds, list):
                continue
            sounds = []
            for sound in raw_sounds:
                if not isinstance(sound, dict):
                    continue
                file = sound.get("file")
                if not isinstance(file, str) or not file:
                    continue
                line = sound.get("line")
                sounds.append(SoundEntry(file=file, line=line if isinstance(line, str) else ""))
            categories[category] = SoundCategoryConfig(sounds=sounds)

        name = data.get("name") or pack_name
        return PackManifest(
            name=name,
            display_name=data.get("display_name") or name,
            categories=categories,
        )

    def list_packs(self) -> List[PackInfo]:
        """All packs with a loadable manifest, sorted by directory name."""
        if not self.packs_dir.is_dir():
            return []

        packs = []
        for entry in sorted(self.packs_dir.iterdir(), key=lambda p: p.name):
            if not entry.is_dir():
                continue
            manifest = self.load(entry.name)
            if manifest is None:
                continue
            packs.append(PackInfo(name=entry.name, display_name=manifest.display_name))
        return packs

    def pack_names(self) -> List[str]:
        return [p.name for p in self.list_packs()]

    def sound_path(self, pack_name: str, file: str) -> Optional[Path]:
        """
        Path of a sound file inside a pack.

        Returns:
            The path, or None if the name would escape the pack's
            sounds directory
        """
        if not self._is_safe_name(pack_name) or not self._is_safe_name(file):
            return None
        return self.packs_dir / pack_name / SOUNDS_DIRNAME / file

    @staticmethod
    def _is_safe_name(name: str) -> bool:
        if not isinstance(name, str) or not name or name in (".", ".."):
            return False
        return "/" not in name and "\\" not in name
