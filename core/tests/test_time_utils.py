import unittest
from datetime import datetime, timedelta, timezone

from django.test import override_settings

from core.records import EmployeeRecord
from core.time_utils import elapsed_hours, employee_hours, parse_timestamp, to_number


def at(hour, minute=0, day=15):
    return datetime(2024, 3, day, hour, minute, tzinfo=timezone.utc)


class ElapsedHoursTests(unittest.TestCase):
    def test_open_shift_runs_to_now_minus_break(self):
        # 09:00 -> now 11:00 with a 30 minute break
        self.assertAlmostEqual(elapsed_hours(at(9), None, 30, at(11)), 1.5)

    def test_closed_shift_with_hour_break(self):
        self.assertAlmostEqual(elapsed_hours(at(9), at(17), 60, at(20)), 7.0)

    def test_overnight_clock_times_are_corrected(self):
        # 23:00 -> 01:00 recorded on the same date reads as past midnight
        self.assertAlmostEqual(elapsed_hours(at(23), at(1), 0, at(12)), 2.0)
        self.assertAlmostEqual(elapsed_hours(at(23), at(1), 30, at(12)), 1.5)

    def test_overnight_correction_can_be_disabled(self):
        self.assertEqual(elapsed_hours(at(23), at(1), 0, at(12), overnight_correction=False), 0.0)

    def test_overnight_days_are_compared_in_the_labor_timezone(self):
        # 23:00 -> 01:00 on Mar 15 in New York: the UTC dates differ (16th vs 15th)
        start = datetime(2024, 3, 16, 3, 0, tzinfo=timezone.utc)
        end = datetime(2024, 3, 15, 5, 0, tzinfo=timezone.utc)
        self.assertAlmostEqual(elapsed_hours(start, end, 0, at(12), tz_str='America/New_York'), 2.0)
        self.assertEqual(elapsed_hours(start, end, 0, at(12), tz_str='UTC'), 0.0)

    @override_settings(LABOR_TIMEZONE='America/New_York')
    def test_labor_timezone_setting_drives_overnight_check(self):
        start = datetime(2024, 3, 16, 3, 0, tzinfo=timezone.utc)
        end = datetime(2024, 3, 15, 5, 0, tzinfo=timezone.utc)
        self.assertAlmostEqual(elapsed_hours(start, end, 30, at(12)), 1.5)

    def test_no_correction_across_calendar_days(self):
        # End genuinely a day earlier is not a wall-clock wraparound
        self.assertEqual(elapsed_hours(at(9, day=16), at(8, day=15), 0, at(12)), 0.0)

    def test_no_correction_when_now_is_before_start(self):
        # A shift scheduled to start later than "now" has 0 hours, not ~24
        self.assertEqual(elapsed_hours(at(14), None, 0, at(13)), 0.0)

    def test_multi_day_open_shift_counts_real_elapsed_time(self):
        self.assertAlmostEqual(elapsed_hours(at(22, day=14), None, 0, at(2, day=15)), 4.0)

    def test_break_cannot_make_hours_negative(self):
        self.assertEqual(elapsed_hours(at(9), at(9, 30), 60, at(12)), 0.0)

    def test_invalid_inputs_degrade_to_zero(self):
        self.assertEqual(elapsed_hours('not a date', at(10), 0, at(12)), 0.0)
        self.assertEqual(elapsed_hours(at(9), 'garbage', 0, at(12)), 0.0)
        self.assertEqual(elapsed_hours(None, None, 0, at(12)), 0.0)
        self.assertEqual(elapsed_hours(at(9), None, 0, None), 0.0)
        self.assertEqual(elapsed_hours('2024-13-45T99:00:00', at(10), 0, at(12)), 0.0)

    def test_invalid_break_minutes_count_as_zero(self):
        self.assertAlmostEqual(elapsed_hours(at(9), at(11), 'abc', at(12)), 2.0)
        self.assertAlmostEqual(elapsed_hours(at(9), at(11), None, at(12)), 2.0)
        self.assertAlmostEqual(elapsed_hours(at(9), at(11), float('nan'), at(12)), 2.0)
        self.assertAlmostEqual(elapsed_hours(at(9), at(11), -30, at(12)), 2.0)

    def test_accepts_iso_strings(self):
        self.assertAlmostEqual(
            elapsed_hours('2024-03-15T09:00:00Z', '2024-03-15T12:30:00+00:00', 0, at(20)),
            3.5,
        )

    def test_never_negative(self):
        start = at(12)
        for offset in range(-48, 49, 3):
            end = start + timedelta(hours=offset)
            for breaks in (0, 15, 90, 600):
                self.assertGreaterEqual(elapsed_hours(start, end, breaks, at(12)), 0.0)
                self.assertGreaterEqual(elapsed_hours(start, None, breaks, end), 0.0)

    def test_non_decreasing_as_end_moves_later(self):
        start = at(6)
        previous = 0.0
        for minutes in range(0, 18 * 60, 20):
            hours = elapsed_hours(start, start + timedelta(minutes=minutes), 30, at(23))
            self.assertGreaterEqual(hours, previous)
            previous = hours

    def test_non_decreasing_as_now_moves_later(self):
        start = at(12)
        previous = 0.0
        for minutes in range(-120, 24 * 60, 45):
            hours = elapsed_hours(start, None, 15, start + timedelta(minutes=minutes))
            self.assertGreaterEqual(hours, previous)
            previous = hours

    def test_larger_break_never_yields_more_hours(self):
        for b1, b2 in ((0, 30), (30, 60), (45, 600)):
            self.assertGreaterEqual(
                elapsed_hours(at(9), at(17), b1, at(20)),
                elapsed_hours(at(9), at(17), b2, at(20)),
            )


class EmployeeHoursTests(unittest.TestCase):
    def make(self, **kwargs):
        defaults = dict(id='e1', name='Ana', start_time=at(9), revenue_center='dining')
        defaults.update(kwargs)
        return EmployeeRecord(**defaults)

    def test_active_shift_uses_now(self):
        self.assertAlmostEqual(employee_hours(self.make(unpaid_break_minutes=30), at(11)), 1.5)

    def test_active_flag_wins_over_stale_end_time(self):
        employee = self.make(end_time=at(10), is_active=True)
        self.assertAlmostEqual(employee_hours(employee, at(13)), 4.0)

    def test_checked_out_shift_uses_end_time(self):
        employee = self.make(end_time=at(17), unpaid_break_minutes=60, is_active=False)
        self.assertAlmostEqual(employee_hours(employee, at(22)), 7.0)

    def test_checked_out_without_end_time_counts_nothing(self):
        employee = self.make(end_time=None, is_active=False)
        with self.assertLogs('core.time_utils', level='WARNING'):
            self.assertEqual(employee_hours(employee, at(13)), 0.0)

    def test_string_flags_are_understood(self):
        closed = self.make(end_time=at(10), is_active='false')
        self.assertAlmostEqual(employee_hours(closed, at(13)), 1.0)


class HelperTests(unittest.TestCase):
    def test_to_number(self):
        self.assertEqual(to_number('12.5'), 12.5)
        self.assertEqual(to_number(None), 0.0)
        self.assertEqual(to_number('x', default=-1), -1)
        self.assertEqual(to_number(float('inf')), 0.0)

    def test_parse_timestamp_makes_naive_values_utc(self):
        parsed = parse_timestamp(datetime(2024, 3, 15, 9, 0))
        self.assertEqual(parsed.tzinfo, timezone.utc)
        self.assertIsNone(parse_timestamp(12345))
        self.assertIsNone(parse_timestamp(''))


if __name__ == '__main__':
    unittest.main()
