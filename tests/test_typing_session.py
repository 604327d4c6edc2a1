"""Test active-typing time accounting."""

import datetime
import unittest
from unittest.mock import Mock

from river.typing_session import TypingSessionTracker

DAY = datetime.date(2026, 10, 19)
TIMEOUT = 180


def make_tracker(**kwargs):
    kwargs.setdefault('today', lambda: DAY)
    kwargs.setdefault('clock', lambda: 0.0)
    return TypingSessionTracker(TIMEOUT, **kwargs)


class TestTypingSessions(unittest.TestCase):

    def test_gap_closes_first_session(self):
        tracker = make_tracker()
        for t in (0, 2, 4):
            tracker.record_edit(t)
        tracker.checkpoint(4 + TIMEOUT + 1)
        self.assertEqual(tracker.accumulated, 4)
        self.assertFalse(tracker.is_open)

        tracker.record_edit(TIMEOUT + 10)
        self.assertTrue(tracker.is_open)
        self.assertEqual(tracker.session_start, TIMEOUT + 10)
        self.assertEqual(tracker.accumulated, 4)

    def test_edit_after_gap_without_checkpoint(self):
        tracker = make_tracker()
        for t in (0, 2, 4):
            tracker.record_edit(t)
        tracker.record_edit(TIMEOUT + 10)
        self.assertEqual(tracker.accumulated, 4)
        self.assertEqual(tracker.session_start, TIMEOUT + 10)

    def test_checkpoint_folds_each_span_once(self):
        tracker = make_tracker()
        tracker.record_edit(0)
        tracker.record_edit(4)
        tracker.checkpoint(5)
        tracker.checkpoint(6)
        self.assertEqual(tracker.accumulated, 4)
        tracker.record_edit(10)
        tracker.checkpoint(11)
        self.assertEqual(tracker.accumulated, 10)

    def test_idle_time_within_timeout_is_not_counted(self):
        tracker = make_tracker()
        tracker.record_edit(0)
        tracker.record_edit(1)
        tracker.checkpoint(100)
        self.assertEqual(tracker.total_seconds(), 1)
        self.assertTrue(tracker.is_open)

    def test_total_includes_open_span(self):
        tracker = make_tracker()
        tracker.record_edit(0)
        tracker.record_edit(3)
        self.assertEqual(tracker.accumulated, 0)
        self.assertEqual(tracker.total_seconds(), 3)

    def test_close_folds_final_span(self):
        tracker = make_tracker()
        tracker.record_edit(0)
        tracker.record_edit(3)
        tracker.close(4)
        self.assertEqual(tracker.accumulated, 3)
        self.assertFalse(tracker.is_open)

    def test_resumes_from_saved_total(self):
        tracker = make_tracker(accumulated=100)
        self.assertEqual(tracker.total_seconds(), 100)
        tracker.record_edit(0)
        tracker.record_edit(20)
        self.assertEqual(tracker.total_seconds(), 120)

    def test_uses_injected_clock(self):
        now = [50.0]
        tracker = make_tracker(clock=lambda: now[0])
        tracker.record_edit()
        now[0] = 60.0
        tracker.record_edit()
        tracker.checkpoint()
        self.assertEqual(tracker.accumulated, 10)


class TestRollover(unittest.TestCase):

    def test_midnight_resets_and_reports_previous_day(self):
        today = [DAY]
        on_rollover = Mock()
        tracker = make_tracker(today=lambda: today[0], on_rollover=on_rollover)
        tracker.record_edit(0)
        tracker.record_edit(5)

        today[0] = DAY + datetime.timedelta(days=1)
        tracker.checkpoint(6)

        on_rollover.assert_called_once_with(DAY, 5.0)
        self.assertEqual(tracker.day, DAY + datetime.timedelta(days=1))
        self.assertEqual(tracker.accumulated, 0)
        self.assertFalse(tracker.is_open)

    def test_rollover_detected_before_edit(self):
        today = [DAY]
        tracker = make_tracker(today=lambda: today[0], accumulated=30)
        today[0] = DAY + datetime.timedelta(days=1)
        tracker.record_edit(100)
        tracker.record_edit(102)
        self.assertEqual(tracker.total_seconds(), 2)

    def test_same_day_is_not_a_rollover(self):
        tracker = make_tracker()
        self.assertFalse(tracker.check_rollover())


if __name__ == '__main__':
    unittest.main()
