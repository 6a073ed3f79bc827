"""
Side-effect sinks for SoundCue: audio playback and desktop notifications.

Both shell out to platform tools and never wait on playback. Launch
failures are logged and swallowed; nothing here may disturb the host.
"""

from pathlib import Path
from typing import Any, List, Optional
import os
import platform
import shutil
import subprocess


def detect_platform() -> str:
    """One of 'mac', 'linux', 'windows' or 'unknown'."""
    system = platform.system()
    if system == "Darwin":
        return "mac"
    if system == "Linux":
        return "linux"
    if system == "Windows":
        return "windows"
    return "unknown"


# Linux players in order of preference
LINUX_PLAYERS = ("pw-play", "paplay", "ffplay", "mpv", "play", "aplay")


class AudioPlayer:
    """
    Fire-and-forget sound playback.

    Example:
        >>> player = AudioPlayer()
        >>> player.play(Path("packs/peon/sounds/PeonYes1.wav"), volume=0.5)
        True
    """

    def __init__(self, platform_name: Optional[str] = None,
                 logger: Optional[Any] = None):
        """
        Args:
            platform_name: Override for detect_platform()
            logger: DebugLogger for launch failures
        """
        self.platform_name = platform_name or detect_platform()
        self.logger = logger

    def detect_linux_player(self) -> Optional[str]:
        for cmd in LINUX_PLAYERS:
            if shutil.which(cmd):
                return cmd
        return None

    def build_command(self, path: Path, volume: float) -> Optional[List[str]]:
        """
        Command line that plays ``path`` at ``volume`` (0.0-1.0).

        Returns:
            argv list, or None when no player is available
        """
        file_str = str(path)

        if self.platform_name == "mac":
            return ["afplay", "-v", str(volume), file_str]

        if self.platform_name != "linux":
            return None

        player = self.detect_linux_player()
        if player == "pw-play":
            return ["pw-play", "--volume", str(volume), file_str]
        if player == "paplay":
            pa_vol = max(0, min(65536, int(volume * 65536)))
            return ["paplay", f"--volume={pa_vol}", file_str]
        if player == "ffplay":
            ff_vol = max(0, min(100, int(volume * 100)))
            return ["ffplay", "-nodisp", "-autoexit", "-volume", str(ff_vol), file_str]
        if player == "mpv":
            mpv_vol = max(0, min(100, int(volume * 100)))
            return ["mpv", "--no-video", f"--volume={mpv_vol}", file_str]
        if player == "play":
            return ["play", "-q", "-v", str(volume), file_str]
        if player == "aplay":
            return ["aplay", "-q", file_str]
        return None

    def play(self, path: Path, volume: float) -> bool:
        """
        Start playback without waiting for it.

        Returns:
            True if a player process was launched
        """
        cmd = self.build_command(path, volume)
        if cmd is None:
            self._log("No audio player available", platform=self.platform_name)
            return False

        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            self._log("Playback failed to launch", cmd=cmd[0], error=str(e))
            return False
        return True

    def _log(self, message: str, **data) -> None:
        if self.logger is not None:
            self.logger.warning("sink", message, **data)


class DesktopNotifier:
    """
    Desktop notifications, suppressed while a terminal has focus.

    Example:
        >>> notifier = DesktopNotifier()
        >>> if not notifier.terminal_focused():
        ...     notifier.notify("OpenCode", "Task complete")
    """

    TERMINAL_APPS = frozenset({
        # macOS application names
        "terminal", "iterm2", "warp", "alacritty", "kitty", "wezterm", "ghostty",
        # X11 window classes
        "gnome-terminal", "gnome-terminal-server", "konsole", "xterm",
        "xfce4-terminal", "tilix", "terminator", "foot", "urxvt",
        "org.wezfurlong.wezterm", "com.mitchellh.ghostty",
    })

    FRONTMOST_SCRIPT = (
        'tell application "System Events" to get name of first '
        'process whose frontmost is true'
    )

    NOTIFY_SCRIPT = (
        'on run argv\n'
        '  display notification (item 1 of argv) with title (item 2 of argv)\n'
        'end run'
    )

    def __init__(self, platform_name: Optional[str] = None,
                 logger: Optional[Any] = None,
                 timeout: float = 2.0):
        """
        Args:
            platform_name: Override for detect_platform()
            logger: DebugLogger for failures
            timeout: Seconds to wait for the foreground-app query
        """
        self.platform_name = platform_name or detect_platform()
        self.logger = logger
        self.timeout = timeout

    def _foreground_command(self) -> Optional[List[str]]:
        if self.platform_name == "mac":
            return ["osascript", "-e", self.FRONTMOST_SCRIPT]
        if self.platform_name == "linux":
            if os.environ.get("XDG_SESSION_TYPE") != "x11" or not shutil.which("xdotool"):
                return None
            return ["xdotool", "getactivewindow", "getwindowclassname"]
        return None

    def foreground_app(self) -> str:
        """
        Name of the focused application.

        Returns:
            The name, or "" if it cannot be determined
        """
        cmd = self._foreground_command()
        if cmd is None:
            return ""

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            self._log("Foreground query failed", error=str(e))
            return ""

        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def is_terminal(self, app_name: str) -> bool:
        return bool(app_name) and app_name.strip().lower() in self.TERMINAL_APPS

    def terminal_focused(self) -> bool:
        """An unknown foreground app counts as not a terminal."""
        return self.is_terminal(self.foreground_app())

    def build_command(self, title: str, message: str) -> Optional[List[str]]:
        if self.platform_name == "mac":
            return ["osascript", "-e", self.NOTIFY_SCRIPT, message, title]
        if self.platform_name == "linux" and shutil.which("notify-send"):
            return ["notify-send", title, message]
        return None

    def notify(self, title: str, message: str) -> bool:
        """
        Show a desktop notification without waiting for it.

        Returns:
            True if the notification helper was launched
        """
        cmd = self.build_command(title, message)
        if cmd is None:
            return False

        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            self._log("Notification failed to launch", error=str(e))
            return False
        return True

    def _log(self, message: str, **data) -> None:
        if self.logger is not None:
            self.logger.warning("sink", message, **data)
