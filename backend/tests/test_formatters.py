"""
Unit tests for the display formatters.
Run: python -m pytest backend/tests/test_formatters.py -v
"""
import unittest
from datetime import datetime, timedelta, timezone

from ironlog.services.formatters import (
    format_clock,
    format_duration,
    format_relative_time,
    format_set_clock,
    format_volume,
)


# --- format_volume ---
class TestFormatVolume(unittest.TestCase):
    def test_below_thousand(self):
        self.assertEqual(format_volume(950), "950 kg")

    def test_rounds_fractional_kilos(self):
        self.assertEqual(format_volume(512.6), "513 kg")

    def test_thousands_use_k_suffix(self):
        self.assertEqual(format_volume(14800), "14.8k kg")
        self.assertEqual(format_volume(1000), "1.0k kg")


# --- format_duration ---
class TestFormatDuration(unittest.TestCase):
    def test_minutes_and_padded_seconds(self):
        self.assertEqual(format_duration(247), "4m 07s")

    def test_zero(self):
        self.assertEqual(format_duration(0), "0m 00s")

    def test_hours_drop_seconds(self):
        self.assertEqual(format_duration(3840), "1h 4m")


# --- clocks ---
class TestClocks(unittest.TestCase):
    def test_workout_clock_is_zero_padded(self):
        self.assertEqual(format_clock(425), "07:05")

    def test_set_clock(self):
        self.assertEqual(format_set_clock(65), "1:05")
        self.assertEqual(format_set_clock(0), "0:00")


# --- format_relative_time ---
class TestRelativeTime(unittest.TestCase):
    now = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    def test_just_now(self):
        self.assertEqual(format_relative_time(self.now - timedelta(seconds=30), self.now), "just now")

    def test_minutes_hours_days(self):
        self.assertEqual(format_relative_time(self.now - timedelta(minutes=5), self.now), "5m ago")
        self.assertEqual(format_relative_time(self.now - timedelta(hours=3), self.now), "3h ago")
        self.assertEqual(format_relative_time(self.now - timedelta(days=2), self.now), "2d ago")

    def test_older_falls_back_to_date(self):
        ts = datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc)
        out = format_relative_time(ts, self.now)
        self.assertIn("Sep", out)

    def test_naive_timestamps_are_utc(self):
        naive = datetime(2026, 10, 18, 11, 0)
        self.assertEqual(format_relative_time(naive, self.now), "1h ago")
