"""Session state and command dispatch, independent of the terminal."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .clock import PhaseClock
from .config import ConfigSaveError, Settings, get_config_path, save_settings
from .editor import ConfigEditor
from .keys import Command, Key, Mode, map_key
from .render import Frame, render_config, render_timer


class App:
    """The single running session: owns the clock, editor and mode."""

    def __init__(
        self,
        settings: Settings,
        *,
        config_path: Optional[Path] = None,
        auto_continue: bool = True,
        bell: bool = True,
        save: Callable[[Settings, Path], None] = save_settings,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self.config_path = config_path or get_config_path()
        self.clock = PhaseClock(settings, auto_continue=auto_continue)
        self.editor = ConfigEditor()
        self.mode = Mode.TIMER
        self.message = ""
        self.bell_enabled = bell
        self.pending_bell = False
        self._save = save
        self._logger = logger or logging.getLogger("pomoclock.app")

    def handle_key(self, key: Key) -> bool:
        """Dispatch one key; False means the session should end."""
        return self.dispatch(map_key(self.mode, key))

    def dispatch(self, command: Command) -> bool:
        if command is Command.NOOP:
            return True
        if self.mode is Mode.TIMER:
            return self._dispatch_timer(command)
        self._dispatch_config(command)
        return True

    def _dispatch_timer(self, command: Command) -> bool:
        clock = self.clock
        if command is Command.QUIT:
            self._logger.info("Quit requested")
            return False
        self.message = ""
        if command is Command.START_PAUSE:
            clock.toggle_running()
        elif command is Command.RESET:
            clock.reset()
        elif command is Command.RESTART:
            clock.restart()
        elif command is Command.SKIP:
            clock.skip()
        elif command is Command.OPEN_CONFIG:
            self.editor.enter(self.settings)
            self.mode = Mode.CONFIG
        return True

    def _dispatch_config(self, command: Command) -> None:
        editor = self.editor
        if command is Command.NAV_UP:
            editor.nav(-1)
        elif command is Command.NAV_DOWN:
            editor.nav(1)
        elif command is Command.VALUE_DOWN:
            editor.adjust(-1)
        elif command is Command.VALUE_UP:
            editor.adjust(1)
        elif command is Command.CONFIRM:
            self._commit(editor.commit())
            self.mode = Mode.TIMER
        elif command is Command.CANCEL:
            editor.cancel()
            self.mode = Mode.TIMER
            self.message = ""

    def _commit(self, settings: Settings) -> None:
        self.settings = settings
        self.clock.apply_settings(settings)
        try:
            self._save(settings, self.config_path)
        except ConfigSaveError as exc:
            self._logger.error("Settings not saved: %s", exc)
            self.message = f"settings not saved: {exc}"
        else:
            self.message = "settings saved"

    def tick(self, now: Optional[float] = None) -> bool:
        # The clock keeps running underneath the config screen.
        advanced = self.clock.tick(now)
        if advanced and self.bell_enabled:
            self.pending_bell = True
        return advanced

    def take_bell(self) -> bool:
        ring = self.pending_bell
        self.pending_bell = False
        return ring

    def poll_timeout(self, now: Optional[float] = None) -> float:
        return self.clock.next_tick_in(now)

    def frame(self, rows: int, cols: int) -> Frame:
        if self.mode is Mode.CONFIG:
            return render_config(self.editor, rows, cols, self.message)
        return render_timer(self.clock.snapshot(), self.settings.theme, rows, cols, self.message)
