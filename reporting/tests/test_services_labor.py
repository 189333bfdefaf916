import unittest
from datetime import datetime, timezone

from django.core.exceptions import ImproperlyConfigured

from core.records import EmployeeRecord, RevenueCenterRecord
from reporting.centers import FALLBACK_DISPLAY, center_display, validate_center_display
from reporting.services_labor import (
    OVER_STAFFED, UNDER_STAFFED, dollars_per_hour, hours_as_of, perfect_hours,
    reconstruct_at, revenue_target_status, staffing_status, summarize,
)


def at(hour, minute=0):
    return datetime(2024, 3, 15, hour, minute, tzinfo=timezone.utc)


def employee(id, center, start, end=None, breaks=0, active=None, name=None):
    if active is None:
        active = end is None
    return EmployeeRecord(
        id=id, name=name or id, start_time=start, revenue_center=center,
        end_time=end, unpaid_break_minutes=breaks, is_active=active,
    )


def center(name, sales, divisor):
    return RevenueCenterRecord(id=name, name=name, sales=sales, divisor=divisor)


class RatioTests(unittest.TestCase):
    def test_perfect_hours(self):
        self.assertAlmostEqual(perfect_hours(1000, 35.5), 28.169, places=3)
        self.assertEqual(perfect_hours(0, 35), 0.0)
        self.assertEqual(perfect_hours(1000, 0), 0.0)
        self.assertEqual(perfect_hours(-50, 35), 0.0)
        self.assertEqual(perfect_hours('abc', 35), 0.0)

    def test_dollars_per_hour(self):
        self.assertAlmostEqual(dollars_per_hour(800, 10), 80.0)
        self.assertEqual(dollars_per_hour(500, 0), 0.0)
        self.assertEqual(dollars_per_hour(500, None), 0.0)

    def test_dining_ratios_from_literal_figures(self):
        self.assertEqual(perfect_hours(1000, 200), 5.0)
        self.assertEqual(dollars_per_hour(1000, 4.0), 250.0)
        row = summarize(
            [employee('a', 'dining', at(9), at(13))], [center('dining', 1000, 200)], now=at(18),
        )['centers'][0]
        self.assertEqual(row['perfect_hours'], 5.0)
        self.assertEqual(row['labor_hours'], 4.0)
        self.assertEqual(row['dollars_per_hour'], 250.0)

    def test_staffing_messages_for_ten_and_five_hours_against_seven(self):
        over = staffing_status(10, 7)
        self.assertEqual((over['status'], over['hours']), (OVER_STAFFED, 3.0))
        self.assertEqual(over['message'], '3.0 excess hours')
        under = staffing_status(5, 7)
        self.assertEqual((under['status'], under['hours']), (UNDER_STAFFED, 2.0))
        self.assertEqual(under['message'], 'Need 2.0 more hours for optimal staffing')

    def test_staffing_status(self):
        over = staffing_status(12.5, 10)
        self.assertEqual(over['status'], OVER_STAFFED)
        self.assertEqual(over['message'], '2.5 excess hours')

        under = staffing_status(7, 10)
        self.assertEqual(under['status'], UNDER_STAFFED)
        self.assertAlmostEqual(under['hours'], 3.0)
        self.assertEqual(under['message'], 'Need 3.0 more hours for optimal staffing')

        # A perfect match is reported as under-staffed by 0
        self.assertEqual(staffing_status(10, 10)['status'], UNDER_STAFFED)

    def test_revenue_target_status(self):
        self.assertTrue(revenue_target_status(90, 85)['above_target'])
        below = revenue_target_status(85, 85)
        self.assertFalse(below['above_target'])
        self.assertEqual(below['label'], 'Below Target')


class SummarizeTests(unittest.TestCase):
    def test_two_center_rollup(self):
        employees = [
            employee('a', 'dining', at(9), at(14)),
            employee('b', 'dining', at(10), at(15)),
            employee('c', 'lounge', at(12), at(16)),
        ]
        centers = [center('dining', 800, 35.5), center('lounge', 400, 42.0)]
        summary = summarize(employees, centers, now=at(20))

        dining, lounge = summary['centers']
        self.assertAlmostEqual(dining['labor_hours'], 10.0)
        self.assertAlmostEqual(dining['dollars_per_hour'], 80.0)
        self.assertAlmostEqual(lounge['labor_hours'], 4.0)
        self.assertAlmostEqual(lounge['dollars_per_hour'], 100.0)
        self.assertAlmostEqual(summary['total_labor_hours'], 14.0)
        self.assertAlmostEqual(summary['total_sales'], 1200.0)
        self.assertAlmostEqual(summary['overall_dollars_per_hour'], 1200.0 / 14.0)
        self.assertEqual(summary['as_of'], at(20))

    def test_total_hours_equal_sum_of_center_hours(self):
        employees = [
            employee('a', 'dining', at(8), None, breaks=15),
            employee('b', 'patio', at(11, 30), at(13, 45)),
            employee('c', 'lounge', at(23), at(1)),
        ]
        centers = [center('dining', 0, 35.5), center('lounge', 0, 42), center('patio', 0, 38.5)]
        summary = summarize(employees, centers, now=at(18))
        self.assertAlmostEqual(
            summary['total_labor_hours'],
            sum(row['labor_hours'] for row in summary['centers']),
        )
        self.assertAlmostEqual(summary['centers'][1]['labor_hours'], 2.0)

    def test_zero_labor_and_zero_divisor(self):
        summary = summarize([], [center('patio', 500, 0)], now=at(12))
        row = summary['centers'][0]
        self.assertEqual(row['dollars_per_hour'], 0.0)
        self.assertEqual(row['perfect_hours'], 0.0)
        self.assertEqual(summary['overall_dollars_per_hour'], 0.0)

    def test_empty_inputs(self):
        summary = summarize([], [], now=at(12))
        self.assertEqual(summary['centers'], [])
        self.assertEqual(summary['total_labor_hours'], 0.0)
        self.assertEqual(summary['overall_dollars_per_hour'], 0.0)
        self.assertEqual(summary['staffing']['status'], UNDER_STAFFED)

    def test_efficiency_delta(self):
        employees = [employee('a', 'dining', at(9), at(19))]
        summary = summarize(employees, [center('dining', 700, 35)], now=at(20))
        self.assertAlmostEqual(summary['total_perfect_hours'], 20.0)
        self.assertAlmostEqual(summary['labor_efficiency_delta'], -10.0)
        self.assertEqual(summary['staffing']['status'], UNDER_STAFFED)

    def test_employee_counts(self):
        employees = [
            employee('a', 'dining', at(9)),
            employee('b', 'dining', at(9), at(11)),
        ]
        row = summarize(employees, [center('dining', 0, 35)], now=at(12))['centers'][0]
        self.assertEqual(row['employee_count'], 2)
        self.assertEqual(row['active_employee_count'], 1)

    def test_unknown_centers_are_left_out(self):
        employees = [employee('a', 'dining', at(9), at(10)), employee('x', 'rooftop', at(9), at(17))]
        summary = summarize(employees, [center('dining', 100, 35)], now=at(18))
        self.assertAlmostEqual(summary['total_labor_hours'], 1.0)
        self.assertEqual(summary['unassigned_employees'], 1)

    def test_malformed_records_count_zero(self):
        employees = [employee('a', 'dining', 'not a time'), employee('b', 'dining', at(9), at(10))]
        summary = summarize(employees, [center('dining', 'n/a', 35)], now=at(12))
        self.assertAlmostEqual(summary['total_labor_hours'], 1.0)
        self.assertEqual(summary['total_sales'], 0.0)


class HistoryTests(unittest.TestCase):
    def test_hours_as_of(self):
        shift = employee('a', 'dining', at(9), at(17), breaks=30)
        self.assertAlmostEqual(hours_as_of(shift, at(12)), 2.5)
        self.assertAlmostEqual(hours_as_of(shift, at(20)), 7.5)
        self.assertEqual(hours_as_of(shift, at(8)), 0.0)
        open_shift = employee('b', 'dining', at(9))
        self.assertAlmostEqual(hours_as_of(open_shift, at(11)), 2.0)
        self.assertEqual(hours_as_of(open_shift, 'garbage'), 0.0)

    def test_ten_to_two_shift_at_noon_nine_and_four(self):
        shift = employee('a', 'dining', at(10), at(14))
        self.assertEqual(hours_as_of(shift, at(12)), 2.0)
        self.assertEqual(hours_as_of(shift, at(9)), 0.0)
        self.assertEqual(hours_as_of(shift, at(16)), 4.0)

    def test_reconstruct_lists_contributing_employees(self):
        employees = [
            employee('a', 'dining', at(9), at(17), name='Ana'),
            employee('b', 'dining', at(13), name='Ben'),
            employee('c', 'patio', at(10), at(11)),
        ]
        centers = [center('dining', 700, 35), center('patio', 100, 38.5)]
        history = reconstruct_at(employees, centers, at(12))

        dining, patio = history['centers']
        self.assertEqual([e['name'] for e in dining['employees']], ['Ana'])
        self.assertAlmostEqual(dining['labor_hours'], 3.0)
        self.assertAlmostEqual(dining['dollars_per_hour'], 700 / 3.0)
        self.assertAlmostEqual(patio['labor_hours'], 1.0)
        self.assertAlmostEqual(history['total_labor_hours'], 4.0)
        self.assertEqual(history['target_time'], at(12))

    def test_reconstruct_before_anyone_started(self):
        employees = [employee('a', 'dining', at(9))]
        history = reconstruct_at(employees, [center('dining', 100, 35)], at(8))
        self.assertEqual(history['centers'][0]['employees'], [])
        self.assertEqual(history['total_labor_hours'], 0.0)


class CenterDisplayTests(unittest.TestCase):
    def test_known_and_unknown_centers(self):
        self.assertEqual(center_display('dining')['color'], 'emerald')
        self.assertTrue(center_display('Lounge')['known'])
        unknown = center_display('rooftop')
        self.assertEqual(unknown['color'], FALLBACK_DISPLAY['color'])
        self.assertFalse(unknown['known'])
        self.assertEqual(unknown['label'], 'Rooftop')

    def test_validation(self):
        validate_center_display()
        with self.assertRaises(ImproperlyConfigured):
            validate_center_display({'dining': {'color': 'emerald', 'icon': 'x'}})
        incomplete = {
            'dining': {'color': 'emerald', 'icon': 'x'},
            'lounge': {'color': 'purple'},
            'patio': {'color': 'orange', 'icon': 'y'},
        }
        with self.assertRaises(ImproperlyConfigured):
            validate_center_display(incomplete)


if __name__ == '__main__':
    unittest.main()
