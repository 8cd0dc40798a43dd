import curses
import unittest

from pomoclock.keys import Command, Mode, map_key


class TimerModeKeyTests(unittest.TestCase):
    def test_timer_keys(self) -> None:
        expected = {
            " ": Command.START_PAUSE,
            "r": Command.RESET,
            "R": Command.RESTART,
            "s": Command.SKIP,
            "S": Command.SKIP,
            "c": Command.OPEN_CONFIG,
            "q": Command.QUIT,
            "Q": Command.QUIT,
        }
        for ch, command in expected.items():
            with self.subTest(key=ch):
                self.assertIs(command, map_key(Mode.TIMER, ord(ch)))

    def test_config_keys_do_nothing_in_timer_mode(self) -> None:
        for key in (ord("j"), ord("k"), ord("h"), ord("l"), 27, curses.KEY_UP, 10):
            with self.subTest(key=key):
                self.assertIs(Command.NOOP, map_key(Mode.TIMER, key))


class ConfigModeKeyTests(unittest.TestCase):
    def test_config_keys(self) -> None:
        expected = {
            ord("k"): Command.NAV_UP,
            ord("j"): Command.NAV_DOWN,
            ord("h"): Command.VALUE_DOWN,
            ord("l"): Command.VALUE_UP,
            curses.KEY_UP: Command.NAV_UP,
            curses.KEY_DOWN: Command.NAV_DOWN,
            curses.KEY_LEFT: Command.VALUE_DOWN,
            curses.KEY_RIGHT: Command.VALUE_UP,
            ord("q"): Command.CONFIRM,
            10: Command.CONFIRM,
            curses.KEY_ENTER: Command.CONFIRM,
            27: Command.CANCEL,
        }
        for key, command in expected.items():
            with self.subTest(key=key):
                self.assertIs(command, map_key(Mode.CONFIG, key))

    def test_timer_keys_do_nothing_in_config_mode(self) -> None:
        for ch in " rRsc":
            with self.subTest(key=ch):
                self.assertIs(Command.NOOP, map_key(Mode.CONFIG, ord(ch)))


class UnknownKeyTests(unittest.TestCase):
    def test_unknown_keys_are_noops(self) -> None:
        for mode in Mode:
            for key in (-1, None, ord("x"), 0, 0x1FFFF, curses.KEY_RESIZE, "xy", "z", 3.5):
                with self.subTest(mode=mode, key=key):
                    self.assertIs(Command.NOOP, map_key(mode, key))

    def test_string_keys_from_get_wch_are_understood(self) -> None:
        self.assertIs(Command.START_PAUSE, map_key(Mode.TIMER, " "))
        self.assertIs(Command.CANCEL, map_key(Mode.CONFIG, "\x1b"))


if __name__ == "__main__":
    unittest.main()
