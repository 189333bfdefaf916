"""
Labor analytics: perfect hours, dollars per hour, center/organization rollups
and point-in-time reconstruction of labor hours.

Every function takes its records and the current time as arguments and reads
nothing else, so one dashboard pass works from a single consistent snapshot.
None of them raise on bad data; unreadable figures count as zero.
"""
import logging

from core.records import to_active_flag
from core.time_utils import employee_hours, net_hours, parse_timestamp, to_number

logger = logging.getLogger(__name__)

OVER_STAFFED = 'over_staffed'
UNDER_STAFFED = 'under_staffed'


def perfect_hours(sales, divisor):
    """Ideal labor hours for a sales level: sales / divisor, or 0 when either is not positive."""
    sales = to_number(sales)
    divisor = to_number(divisor)
    if sales > 0 and divisor > 0:
        return sales / divisor
    return 0.0


def dollars_per_hour(sales, labor_hours):
    """Sales per labor hour, or 0 with no hours worked."""
    labor_hours = to_number(labor_hours)
    if labor_hours > 0:
        return to_number(sales) / labor_hours
    return 0.0


def staffing_status(total_labor_hours, total_perfect_hours):
    """
    Compare actual to ideal hours. A positive difference is over-staffing
    (excess hours); anything else is under-staffing by the absolute deficit.
    """
    delta = to_number(total_labor_hours) - to_number(total_perfect_hours)
    if delta > 0:
        return {
            'status': OVER_STAFFED,
            'label': 'Over-staffed',
            'hours': delta,
            'message': f"{delta:.1f} excess hours",
        }
    return {
        'status': UNDER_STAFFED,
        'label': 'Under-staffed',
        'hours': abs(delta),
        'message': f"Need {abs(delta):.1f} more hours for optimal staffing",
    }


def revenue_target_status(overall_dollars_per_hour, target_dollars_per_hour):
    overall = to_number(overall_dollars_per_hour)
    target = to_number(target_dollars_per_hour)
    above = overall > target
    return {
        'target': target,
        'above_target': above,
        'label': 'Above Target' if above else 'Below Target',
        'message': f"${overall:.2f}/hr vs ${target:.2f} target",
    }


def hours_as_of(employee, target_time):
    """
    Hours an employee had worked at ``target_time``.

    Zero if the shift hadn't started yet; otherwise the shift is clipped to
    whichever comes first of its recorded end and the target.
    """
    start = parse_timestamp(getattr(employee, 'start_time', None))
    target = parse_timestamp(target_time)
    if start is None or target is None:
        return 0.0
    if start > target:
        return 0.0
    end = parse_timestamp(getattr(employee, 'end_time', None))
    effective_end = end if end is not None and end < target else target
    return net_hours(effective_end - start, getattr(employee, 'unpaid_break_minutes', 0))


def _rollup(employees, centers, hours_for):
    """Shared per-center and organization aggregation."""
    employees = list(employees or [])
    centers = list(centers or [])
    known = {getattr(c, 'name', None) for c in centers}

    center_rows = []
    for center in centers:
        name = getattr(center, 'name', '')
        sales = to_number(getattr(center, 'sales', 0))
        divisor = to_number(getattr(center, 'divisor', 0))
        members = [(e, hours_for(e)) for e in employees if getattr(e, 'revenue_center', None) == name]
        labor_hours = sum((hours for _, hours in members), 0.0)
        center_rows.append({
            'name': name,
            'sales': sales,
            'divisor': divisor,
            'labor_hours': labor_hours,
            'perfect_hours': perfect_hours(sales, divisor),
            'dollars_per_hour': dollars_per_hour(sales, labor_hours),
            'members': members,
        })

    orphans = [e for e in employees if getattr(e, 'revenue_center', None) not in known]
    if orphans:
        logger.debug("%d employee(s) reference unknown revenue centers and are left out", len(orphans))

    total_labor_hours = sum((row['labor_hours'] for row in center_rows), 0.0)
    total_sales = sum((row['sales'] for row in center_rows), 0.0)
    total_perfect_hours = sum((row['perfect_hours'] for row in center_rows), 0.0)
    totals = {
        'total_labor_hours': total_labor_hours,
        'total_sales': total_sales,
        'overall_dollars_per_hour': dollars_per_hour(total_sales, total_labor_hours),
        'total_perfect_hours': total_perfect_hours,
        'labor_efficiency_delta': total_labor_hours - total_perfect_hours,
        'staffing': staffing_status(total_labor_hours, total_perfect_hours),
        'unassigned_employees': len(orphans),
    }
    return center_rows, totals


def summarize(employees, centers, now, overnight_correction=True):
    """
    Live labor figures per revenue center and for the whole house.

    Rebuilt from the inputs on every call; nothing is cached between calls.
    """
    def hours_for(employee):
        return employee_hours(employee, now, overnight_correction)

    center_rows, totals = _rollup(employees, centers, hours_for)
    summary_centers = []
    for row in center_rows:
        members = row.pop('members')
        row['employee_count'] = len(members)
        row['active_employee_count'] = sum(
            1 for e, _ in members if to_active_flag(getattr(e, 'is_active', True))
        )
        summary_centers.append(row)

    return {
        'as_of': parse_timestamp(now),
        'centers': summary_centers,
        **totals,
    }


def reconstruct_at(employees, centers, target_time):
    """
    Labor figures as they would have read at ``target_time``, built from the
    current employee records only. Each center lists the employees who had
    worked more than zero hours by then.
    """
    def hours_for(employee):
        return hours_as_of(employee, target_time)

    center_rows, totals = _rollup(employees, centers, hours_for)
    history_centers = []
    for row in center_rows:
        members = row.pop('members')
        row['employees'] = [
            {'id': str(getattr(e, 'id', '')), 'name': getattr(e, 'name', ''), 'hours': hours}
            for e, hours in members
            if hours > 0
        ]
        history_centers.append(row)

    return {
        'target_time': parse_timestamp(target_time),
        'centers': history_centers,
        **totals,
    }