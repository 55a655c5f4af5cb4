import unittest

from pomodoro import PomodoroTimer
from pomodoro.settings import (
    DEFAULT_SETTINGS,
    SETTING_FIELDS,
    TimerSettings,
    apply_setting_changes,
    coerce_bool,
    coerce_setting,
    coerce_volume,
    parse_int_prefix,
)
from runtime.scheduler import Scheduler


class ParseIntPrefixTests(unittest.TestCase):
    def test_reads_leading_digits_like_a_lenient_form_field(self) -> None:
        self.assertEqual(12, parse_int_prefix("12"))
        self.assertEqual(12, parse_int_prefix("  12abc"))
        self.assertEqual(-3, parse_int_prefix("-3"))
        self.assertEqual(7, parse_int_prefix(7))
        self.assertEqual(7, parse_int_prefix(7.9))

    def test_returns_none_for_unparseable_input(self) -> None:
        for value in ("", "abc", None, True, float("nan"), float("inf"), [1]):
            with self.subTest(value=value):
                self.assertIsNone(parse_int_prefix(value))


class SettingCoercionTests(unittest.TestCase):
    def test_minutes_fall_back_to_literal_default_not_previous_value(self) -> None:
        self.assertEqual(25, coerce_setting("focus_minutes", ""))
        self.assertEqual(25, coerce_setting("focus_minutes", "0"))
        self.assertEqual(5, coerce_setting("break_minutes", "abc"))
        self.assertEqual(15, coerce_setting("long_break_minutes", -10))

    def test_minutes_are_clamped_to_input_maxima(self) -> None:
        self.assertEqual(120, coerce_setting("focus_minutes", "500"))
        self.assertEqual(60, coerce_setting("break_minutes", 61))
        self.assertEqual(120, coerce_setting("long_break_minutes", 999))

    def test_long_break_interval_requires_at_least_two(self) -> None:
        self.assertEqual(4, coerce_setting("long_break_interval", 1))
        self.assertEqual(2, coerce_setting("long_break_interval", "2"))
        self.assertEqual(10, coerce_setting("long_break_interval", 50))

    def test_volume_is_clamped_and_defaults_to_fifty(self) -> None:
        self.assertEqual(0, coerce_volume(-5))
        self.assertEqual(100, coerce_volume("150"))
        self.assertEqual(50, coerce_volume("loud"))
        self.assertEqual(35, coerce_volume(35))

    def test_flags_accept_common_spellings(self) -> None:
        self.assertTrue(coerce_bool("yes", default=False))
        self.assertFalse(coerce_bool("off", default=True))
        self.assertTrue(coerce_bool(1, default=False))
        self.assertTrue(coerce_bool("maybe", default=True))

    def test_unknown_field_raises_key_error(self) -> None:
        with self.assertRaises(KeyError):
            coerce_setting("colour", "red")


class TimerSettingsValidationTests(unittest.TestCase):
    def test_rejects_values_below_minimums(self) -> None:
        cases = {
            "focus_minutes": 0,
            "break_minutes": 0,
            "long_break_minutes": -1,
            "long_break_interval": 1,
            "sound_volume": 101,
        }
        for name, value in cases.items():
            with self.subTest(field=name):
                with self.assertRaises(ValueError) as context:
                    TimerSettings(**{name: value})
                self.assertIn(name, str(context.exception))

    def test_timer_refuses_unusable_interval_settings(self) -> None:
        with self.assertRaises(ValueError):
            PomodoroTimer(
                scheduler=Scheduler(clock=lambda: 0.0),
                settings=TimerSettings(focus_minutes=1, long_break_interval=0),
            )

    def test_accepts_smallest_allowed_values(self) -> None:
        settings = TimerSettings(
            focus_minutes=1,
            break_minutes=1,
            long_break_minutes=1,
            long_break_interval=2,
            sound_volume=0,
        )
        self.assertEqual(2, settings.long_break_interval)


class ApplySettingChangesTests(unittest.TestCase):
    def test_applies_known_fields_and_reports_unknown(self) -> None:
        updated, ignored = apply_setting_changes(
            DEFAULT_SETTINGS,
            {"focus_minutes": "50", "sound_volume": 80, "theme": "dark"},
        )

        self.assertEqual(50, updated.focus_minutes)
        self.assertEqual(80, updated.sound_volume)
        self.assertEqual(5, updated.break_minutes)
        self.assertEqual(["theme"], ignored)

    def test_returns_same_instance_when_nothing_applies(self) -> None:
        updated, ignored = apply_setting_changes(DEFAULT_SETTINGS, {"theme": "dark"})
        self.assertIs(DEFAULT_SETTINGS, updated)
        self.assertEqual(["theme"], ignored)

    def test_payload_lists_every_field(self) -> None:
        payload = TimerSettings().to_payload()
        self.assertEqual(set(SETTING_FIELDS), set(payload))
        self.assertEqual(25, payload["focus_minutes"])
        self.assertFalse(payload["auto_start"])
        self.assertTrue(payload["sound_enabled"])
        self.assertTrue(payload["notifications_enabled"])


if __name__ == "__main__":
    unittest.main()
