import logging
import unittest

from runtime.scheduler import Scheduler


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class SchedulerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _Clock()
        self.scheduler = Scheduler(clock=self.clock, logger=logging.getLogger("test"))
        self.calls: list[str] = []

    def test_runs_due_callbacks_in_deadline_order(self) -> None:
        self.scheduler.call_later(2.0, lambda: self.calls.append("late"))
        self.scheduler.call_later(1.0, lambda: self.calls.append("early"))

        self.clock.now = 0.5
        self.assertEqual(0, self.scheduler.run_due())
        self.clock.now = 2.0
        self.assertEqual(2, self.scheduler.run_due())
        self.assertEqual(["early", "late"], self.calls)

    def test_same_deadline_keeps_submission_order(self) -> None:
        self.scheduler.call_later(1.0, lambda: self.calls.append("first"))
        self.scheduler.call_later(1.0, lambda: self.calls.append("second"))

        self.clock.now = 1.0
        self.scheduler.run_due()
        self.assertEqual(["first", "second"], self.calls)

    def test_cancelled_call_never_runs(self) -> None:
        call = self.scheduler.call_later(1.0, lambda: self.calls.append("cancelled"))
        call.cancel()

        self.clock.now = 5.0
        self.scheduler.run_due()
        self.assertEqual([], self.calls)
        self.assertEqual(0, self.scheduler.pending_count)
        self.assertIsNone(self.scheduler.next_deadline())

    def test_call_rearmed_during_run_waits_for_its_own_deadline(self) -> None:
        def rearm() -> None:
            self.calls.append("tick")
            self.scheduler.call_later(1.0, rearm)

        self.scheduler.call_later(1.0, rearm)
        self.clock.now = 1.0
        self.scheduler.run_due()

        self.assertEqual(["tick"], self.calls)
        self.assertEqual(2.0, self.scheduler.next_deadline())

    def test_seconds_until_next_is_capped_by_default(self) -> None:
        self.assertEqual(0.25, self.scheduler.seconds_until_next(0.25))
        self.scheduler.call_later(0.1, lambda: None)
        self.assertAlmostEqual(0.1, self.scheduler.seconds_until_next(0.25))
        self.clock.now = 1.0
        self.assertEqual(0.0, self.scheduler.seconds_until_next(0.25))

    def test_failing_callback_is_logged_and_does_not_stop_others(self) -> None:
        def boom() -> None:
            raise RuntimeError("boom")

        self.scheduler.call_later(1.0, boom)
        self.scheduler.call_later(1.0, lambda: self.calls.append("after"))

        self.clock.now = 1.0
        with self.assertLogs("test", level="ERROR"):
            self.scheduler.run_due()
        self.assertEqual(["after"], self.calls)

    def test_negative_delay_is_due_immediately(self) -> None:
        self.scheduler.call_later(-3.0, lambda: self.calls.append("now"))
        self.scheduler.run_due()
        self.assertEqual(["now"], self.calls)


if __name__ == "__main__":
    unittest.main()
