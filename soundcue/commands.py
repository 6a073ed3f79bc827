"""
User commands for SoundCue.

Each command is a read-modify-write over config.json and returns the
message to show the user. Invalid input raises ValidationError.
"""

from typing import List, Optional, Sequence

from .config import ConfigStore, ManifestProvider
from .utils.validators import ValidationError, validate_choice, validate_volume

TOGGLE_ACTIONS = ("toggle", "pause", "resume", "status")


def pack_command(store: ConfigStore, manifests: ManifestProvider,
                 name: Optional[str] = None) -> str:
    """
    List installed packs, or switch the active pack.

    Args:
        store: Config store
        manifests: Installed packs
        name: Pack to switch to; None lists packs

    Returns:
        Message for the user
    """
    packs = manifests.list_packs()
    config = store.load()

    if not name:
        lines = [
            f"  {p.name}{' *' if p.name == config.active_pack else ''} - {p.display_name}"
            for p in packs
        ]
        return "Available sound packs (* = active):\n" + "\n".join(lines)

    target = next((p for p in packs if p.name == name), None)
    if target is None:
        names = ", ".join(p.name for p in packs)
        return f'Pack "{name}" not found. Available: {names}'

    config.active_pack = target.name
    store.save(config)
    return f"Switched to {target.name} ({target.display_name})"


def toggle_command(store: ConfigStore, action: str = "toggle") -> str:
    """
    Toggle, pause, resume, or report on sounds.

    Raises:
        ValidationError: If action is not one of TOGGLE_ACTIONS
    """
    validate_choice(action, TOGGLE_ACTIONS, field="action")
    config = store.load()

    if action == "status":
        if config.paused:
            return "soundcue: paused"
        return f"soundcue: active (pack: {config.active_pack}, volume: {config.volume})"

    if action == "toggle":
        config.paused = not config.paused
    else:
        config.paused = (action == "pause")

    store.save(config)
    return "soundcue: sounds paused" if config.paused else "soundcue: sounds resumed"


def volume_command(store: ConfigStore, level) -> str:
    """
    Set the playback volume.

    Args:
        level: Number (or numeric string) between 0.0 and 1.0

    Raises:
        ValidationError: If level is not a number in range
    """
    volume = validate_volume(level)
    config = store.load()
    config.volume = volume
    store.save(config)
    return f"soundcue: volume set to {volume}"


def rotation_command(store: ConfigStore, manifests: ManifestProvider,
                     names: Sequence[str] = ()) -> str:
    """
    Set the pack rotation, or clear it when no names are given.

    Raises:
        ValidationError: If a name is not an installed pack
    """
    installed = manifests.pack_names()
    rotation: List[str] = []
    for name in names:
        if name not in installed:
            raise ValidationError(
                f"unknown pack {name!r}, installed: {', '.join(installed)}",
                "pack_rotation"
            )
        if name not in rotation:
            rotation.append(name)

    config = store.load()
    config.pack_rotation = rotation
    store.save(config)

    if not rotation:
        return f"soundcue: rotation off (pack: {config.active_pack})"
    return f"soundcue: rotating between {', '.join(rotation)}"
