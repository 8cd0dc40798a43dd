import random
import unittest

from pomoclock.config import BOUNDS, THEMES, Settings
from pomoclock.editor import FIELDS, ConfigEditor, EditorStateError


def _editor(settings: Settings = Settings()) -> ConfigEditor:
    editor = ConfigEditor()
    editor.enter(settings)
    return editor


class ConfigEditorNavigationTests(unittest.TestCase):
    def test_enter_snapshots_current_settings(self) -> None:
        current = Settings(theme="red", work_minutes=40)
        editor = _editor(current)

        self.assertEqual(current, editor.draft)
        self.assertEqual(0, editor.selected_field)
        self.assertTrue(editor.active)

    def test_nav_wraps_in_both_directions(self) -> None:
        editor = _editor()
        editor.nav(-1)
        self.assertEqual("cycles_before_long_break", editor.field)
        editor.nav(1)
        self.assertEqual("theme", editor.field)

        for _ in range(len(FIELDS)):
            editor.nav(1)
        self.assertEqual(0, editor.selected_field)


class ConfigEditorAdjustTests(unittest.TestCase):
    def test_theme_cycles_through_all_themes(self) -> None:
        editor = _editor()
        seen = []
        for _ in range(len(THEMES)):
            editor.adjust(1)
            seen.append(editor.draft.theme)

        self.assertEqual(list(THEMES[1:]) + [THEMES[0]], seen)
        editor.adjust(-1)
        self.assertEqual("cyan", editor.draft.theme)

    def test_numeric_fields_clamp_without_wrapping(self) -> None:
        editor = _editor(Settings(short_break_minutes=1, cycles_before_long_break=10))
        editor.nav(1)
        editor.nav(1)
        editor.adjust(-1)
        self.assertEqual(1, editor.draft.short_break_minutes)

        editor.nav(-1)
        editor.nav(-1)
        editor.nav(-1)
        editor.adjust(1)
        self.assertEqual(10, editor.draft.cycles_before_long_break)

    def test_random_adjustments_stay_in_bounds(self) -> None:
        rng = random.Random(1234)
        editor = _editor()
        for _ in range(2000):
            if rng.random() < 0.3:
                editor.nav(rng.choice((-1, 1)))
            else:
                editor.adjust(rng.choice((-1, 1)))
            draft = editor.draft
            self.assertIn(draft.theme, THEMES)
            for field, (low, high) in BOUNDS.items():
                value = getattr(draft, field)
                self.assertGreaterEqual(value, low, field)
                self.assertLessEqual(value, high, field)


class ConfigEditorLifecycleTests(unittest.TestCase):
    def test_commit_returns_draft_and_deactivates(self) -> None:
        editor = _editor()
        editor.nav(1)
        editor.adjust(1)

        committed = editor.commit()

        self.assertEqual(26, committed.work_minutes)
        self.assertFalse(editor.active)

    def test_cancel_leaves_original_untouched(self) -> None:
        original = Settings()
        editor = _editor(original)
        editor.adjust(1)
        editor.cancel()

        self.assertFalse(editor.active)
        self.assertEqual("blue", original.theme)

    def test_use_without_enter_raises(self) -> None:
        editor = ConfigEditor()
        with self.assertRaises(EditorStateError):
            editor.adjust(1)
        with self.assertRaises(EditorStateError):
            editor.commit()

    def test_rows_mark_the_selected_field(self) -> None:
        editor = _editor()
        editor.nav(1)
        rows = list(editor.rows())

        self.assertEqual(len(FIELDS), len(rows))
        self.assertEqual(("work (min)", "25", True), rows[1])
        self.assertFalse(rows[0][2])

    def test_rows_show_theme_by_name(self) -> None:
        rows = list(_editor(Settings(theme="purple")).rows())

        self.assertEqual(("theme", "purple", True), rows[0])


if __name__ == "__main__":
    unittest.main()
