from typing import Iterator, Tuple

from .config import DEFAULT_SETTINGS, THEMES, Settings, Theme, clamp, with_field

FIELDS = (
    "theme",
    "work_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "cycles_before_long_break",
)

LABELS = {
    "theme": "theme",
    "work_minutes": "work (min)",
    "short_break_minutes": "short break (min)",
    "long_break_minutes": "long break (min)",
    "cycles_before_long_break": "cycles before long break",
}


class EditorStateError(Exception):
    """Raised when the editor is used without an active draft."""


class ConfigEditor:
    """Working copy of the settings while the config screen is open."""

    def __init__(self) -> None:
        self.draft: Settings = DEFAULT_SETTINGS
        self.selected_field = 0
        self.active = False

    @property
    def field(self) -> str:
        return FIELDS[self.selected_field]

    def enter(self, current: Settings) -> None:
        self.draft = current
        self.selected_field = 0
        self.active = True

    def nav(self, direction: int) -> None:
        self._require_active()
        step = 1 if direction > 0 else -1
        self.selected_field = (self.selected_field + step) % len(FIELDS)

    def adjust(self, direction: int) -> None:
        self._require_active()
        step = 1 if direction > 0 else -1
        field = self.field
        if field == "theme":
            idx = THEMES.index(self.draft.theme) if self.draft.theme in THEMES else 0
            value = THEMES[(idx + step) % len(THEMES)]
        else:
            value = clamp(field, getattr(self.draft, field) + step)
        self.draft = with_field(self.draft, field, value)

    def commit(self) -> Settings:
        self._require_active()
        self.active = False
        return self.draft

    def cancel(self) -> None:
        self._require_active()
        self.active = False

    def rows(self) -> Iterator[Tuple[str, str, bool]]:
        for idx, field in enumerate(FIELDS):
            value = getattr(self.draft, field)
            shown = value.value if isinstance(value, Theme) else str(value)
            yield LABELS[field], shown, idx == self.selected_field

    def _require_active(self) -> None:
        if not self.active:
            raise EditorStateError("config editor is not active")
