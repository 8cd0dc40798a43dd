import curses
import os
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from pomoclock import ui
from pomoclock.app import App
from pomoclock.config import Settings

LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"


def _fake_curses(getch_effect) -> MagicMock:
    fake = MagicMock()
    fake.error = curses.error
    fake.COLORS = 256
    stdscr = fake.initscr.return_value
    stdscr.getmaxyx.return_value = (24, 80)
    stdscr.getch.side_effect = getch_effect
    return fake


class RunRestoresTerminalTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = App(Settings(), config_path=Path("/tmp/pomoclock-test/config.json"), save=MagicMock())

    def _run(self, getch_effect) -> None:
        self.fake = _fake_curses(getch_effect)
        with patch.object(ui, "curses", self.fake), patch.object(ui, "sys") as fake_sys, patch.dict(os.environ):
            self.fake_sys = fake_sys
            ui.run(self.app)

    def _assert_restored(self) -> None:
        self.fake.initscr.return_value.keypad.assert_called_with(False)
        self.fake.nocbreak.assert_called_once_with()
        self.fake.echo.assert_called_once_with()
        self.fake.endwin.assert_called_once_with()
        self.fake_sys.stdout.write.assert_any_call(LEAVE_ALTERNATE_SCREEN)

    def test_quit_key_restores_terminal(self) -> None:
        self._run([ord("q")])

        self._assert_restored()
        self.assertTrue(self.fake.initscr.return_value.addstr.called)

    def test_keyboard_interrupt_restores_terminal(self) -> None:
        with self.assertRaises(KeyboardInterrupt):
            self._run(KeyboardInterrupt)

        self._assert_restored()

    def test_unexpected_error_restores_terminal(self) -> None:
        with self.assertRaises(RuntimeError):
            self._run(RuntimeError("boom"))

        self._assert_restored()

    def test_screen_is_left_after_curses_shuts_down(self) -> None:
        calls = []
        fake = _fake_curses([ord("q")])
        fake.endwin.side_effect = lambda: calls.append("endwin")
        with patch.object(ui, "curses", fake), patch.object(ui, "sys") as fake_sys, patch.dict(os.environ):
            fake_sys.stdout.write.side_effect = calls.append
            ui.run(self.app)

        self.assertEqual(["\x1b[?1049h", "endwin", LEAVE_ALTERNATE_SCREEN], calls)


if __name__ == "__main__":
    unittest.main()
