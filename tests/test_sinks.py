"""
Sink Tests

Tests:
- Player command lines per platform
- Fire-and-forget launching and launch failures
- Foreground-app detection and notification commands
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from soundcue.output import AudioPlayer, DebugLogger, DesktopNotifier, LogLevel


def which_only(*available):
    return lambda cmd: f"/usr/bin/{cmd}" if cmd in available else None


class TestAudioPlayer(unittest.TestCase):
    """Test playback command building and launching."""

    def test_mac_uses_afplay(self):
        player = AudioPlayer(platform_name="mac")
        cmd = player.build_command(Path("/p/a.wav"), 0.5)
        self.assertEqual(cmd, ["afplay", "-v", "0.5", "/p/a.wav"])

    def test_linux_prefers_pw_play(self):
        player = AudioPlayer(platform_name="linux")
        with mock.patch("shutil.which", which_only("pw-play", "paplay")):
            cmd = player.build_command(Path("/p/a.wav"), 0.5)
        self.assertEqual(cmd, ["pw-play", "--volume", "0.5", "/p/a.wav"])

    def test_linux_paplay_volume_scale(self):
        player = AudioPlayer(platform_name="linux")
        with mock.patch("shutil.which", which_only("paplay")):
            cmd = player.build_command(Path("/p/a.wav"), 0.5)
        self.assertEqual(cmd, ["paplay", "--volume=32768", "/p/a.wav"])

    def test_linux_without_player(self):
        player = AudioPlayer(platform_name="linux")
        with mock.patch("shutil.which", which_only()):
            self.assertIsNone(player.build_command(Path("/p/a.wav"), 0.5))

    def test_unsupported_platform(self):
        player = AudioPlayer(platform_name="windows")
        self.assertIsNone(player.build_command(Path("/p/a.wav"), 0.5))
        self.assertFalse(player.play(Path("/p/a.wav"), 0.5))

    def test_play_launches_without_waiting(self):
        player = AudioPlayer(platform_name="mac")
        with mock.patch("subprocess.Popen") as popen:
            self.assertTrue(player.play(Path("/p/a.wav"), 0.7))
        args, kwargs = popen.call_args
        self.assertEqual(args[0], ["afplay", "-v", "0.7", "/p/a.wav"])
        self.assertEqual(kwargs["stdout"], subprocess.DEVNULL)
        popen.return_value.wait.assert_not_called()

    def test_launch_failure_is_logged(self):
        logger = DebugLogger(level=LogLevel.DEBUG)
        player = AudioPlayer(platform_name="mac", logger=logger)
        with mock.patch("subprocess.Popen", side_effect=FileNotFoundError("afplay")):
            self.assertFalse(player.play(Path("/p/a.wav"), 0.5))
        self.assertEqual(len(logger.get_warnings()), 1)


class TestDesktopNotifier(unittest.TestCase):
    """Test focus detection and notifications."""

    def test_terminal_names(self):
        notifier = DesktopNotifier(platform_name="mac")
        self.assertTrue(notifier.is_terminal("iTerm2"))
        self.assertTrue(notifier.is_terminal("Terminal"))
        self.assertTrue(notifier.is_terminal("gnome-terminal-server"))
        self.assertFalse(notifier.is_terminal("Safari"))
        self.assertFalse(notifier.is_terminal(""))

    def test_mac_foreground_app(self):
        notifier = DesktopNotifier(platform_name="mac")
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="iTerm2\n")
        with mock.patch("subprocess.run", return_value=done) as run:
            self.assertEqual(notifier.foreground_app(), "iTerm2")
            self.assertTrue(notifier.terminal_focused())
        self.assertEqual(run.call_args[0][0][0], "osascript")

    def test_failed_query_is_not_terminal(self):
        notifier = DesktopNotifier(platform_name="mac")
        with mock.patch("subprocess.run",
                        side_effect=subprocess.TimeoutExpired(cmd="osascript", timeout=2)):
            self.assertEqual(notifier.foreground_app(), "")
            self.assertFalse(notifier.terminal_focused())

        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="Terminal")
        with mock.patch("subprocess.run", return_value=failed):
            self.assertFalse(notifier.terminal_focused())

    def test_linux_needs_x11_and_xdotool(self):
        notifier = DesktopNotifier(platform_name="linux")
        with mock.patch.dict(os.environ, {"XDG_SESSION_TYPE": "wayland"}):
            with mock.patch("subprocess.run") as run:
                self.assertEqual(notifier.foreground_app(), "")
            run.assert_not_called()

        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="kitty\n")
        with mock.patch.dict(os.environ, {"XDG_SESSION_TYPE": "x11"}), \
                mock.patch("shutil.which", which_only("xdotool")), \
                mock.patch("subprocess.run", return_value=done):
            self.assertTrue(notifier.terminal_focused())

    def test_mac_notification_passes_text_as_arguments(self):
        notifier = DesktopNotifier(platform_name="mac")
        cmd = notifier.build_command("OpenCode", 'Say "hi"')
        self.assertEqual(cmd[:2], ["osascript", "-e"])
        self.assertEqual(cmd[3:], ['Say "hi"', "OpenCode"])

    def test_linux_notify_send(self):
        notifier = DesktopNotifier(platform_name="linux")
        with mock.patch("shutil.which", which_only("notify-send")), \
                mock.patch("subprocess.Popen") as popen:
            self.assertTrue(notifier.notify("OpenCode", "Task complete"))
        self.assertEqual(popen.call_args[0][0], ["notify-send", "OpenCode", "Task complete"])

    def test_no_notifier_available(self):
        notifier = DesktopNotifier(platform_name="linux")
        with mock.patch("shutil.which", which_only()):
            self.assertFalse(notifier.notify("OpenCode", "Task complete"))


def run_tests():
    """Run all sink tests."""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestAudioPlayer))
    suite.addTests(loader.loadTestsFromTestCase(TestDesktopNotifier))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


if __name__ == '__main__':
    success = run_tests()
    sys.exit(0 if success else 1)
