"""
Record-store collaborator for employees and revenue centers.

The labor engine only ever reads snapshots handed out by a store; the store
owns all writes. ``get_store`` builds the backend named by the
LABOR_STORE_BACKEND setting.
"""
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone as dt_timezone
from typing import Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from .records import EmployeeRecord, RevenueCenterRecord, to_active_flag
from .time_utils import parse_timestamp

logger = logging.getLogger(__name__)

EMPLOYEE_UPDATE_FIELDS = ('name', 'start_time', 'end_time', 'unpaid_break_minutes', 'is_active')
CENTER_UPDATE_FIELDS = ('sales', 'divisor')

EARLIEST = datetime.min.replace(tzinfo=dt_timezone.utc)

_stores = {}


def default_revenue_centers():
    return list(getattr(settings, 'DEFAULT_REVENUE_CENTERS', []))


def default_divisor():
    return float(getattr(settings, 'LABOR_DEFAULT_DIVISOR', 35.0))


class LaborStore:
    """
    Basic CRUD over Employee and RevenueCenter records.

    Subclasses implement the primitive operations; the filtered employee
    listings are derived from ``list_employees`` unless a backend can do
    better.
    """

    # Employees
    def list_employees(self) -> List[EmployeeRecord]:
        raise NotImplementedError

    def get_employee(self, employee_id) -> Optional[EmployeeRecord]:
        raise NotImplementedError

    def list_active_employees(self) -> List[EmployeeRecord]:
        return [e for e in self.list_employees() if to_active_flag(e.is_active)]

    def list_employees_by_center(self, center_name) -> List[EmployeeRecord]:
        """Active employees checked in to ``center_name``."""
        return [e for e in self.list_active_employees() if e.revenue_center == center_name]

    def list_all_employees_by_center(self, center_name) -> List[EmployeeRecord]:
        return [e for e in self.list_employees() if e.revenue_center == center_name]

    def create_employee(self, name, start_time, revenue_center) -> EmployeeRecord:
        raise NotImplementedError

    def update_employee(self, employee_id, **updates) -> Optional[EmployeeRecord]:
        raise NotImplementedError

    def checkout_employee(self, employee_id, end_time) -> Optional[EmployeeRecord]:
        return self.update_employee(employee_id, is_active=False, end_time=end_time)

    def delete_employee(self, employee_id) -> bool:
        raise NotImplementedError

    # Revenue centers
    def list_revenue_centers(self) -> List[RevenueCenterRecord]:
        raise NotImplementedError

    def get_revenue_center(self, name) -> Optional[RevenueCenterRecord]:
        for center in self.list_revenue_centers():
            if center.name == name:
                return center
        return None

    def find_revenue_center(self, name) -> Optional[RevenueCenterRecord]:
        """Like ``get_revenue_center`` but never seeds the default centers."""
        raise NotImplementedError

    def create_revenue_center(self, name, sales=0, divisor=None) -> RevenueCenterRecord:
        raise NotImplementedError

    def update_revenue_center(self, name, **updates) -> Optional[RevenueCenterRecord]:
        raise NotImplementedError

    # Bulk
    def load_records(self, employees, centers):
        """
        Load an exported data set, keeping existing rows it doesn't mention.
        A center without a usable divisor keeps its current one (or gets the
        default when it is new).
        """
        for center in centers:
            if self.get_revenue_center(center.name) is None:
                self.create_revenue_center(center.name, center.sales, center.divisor)
                continue
            updates = {'sales': center.sales}
            if center.divisor is not None:
                updates['divisor'] = center.divisor
            self.update_revenue_center(center.name, **updates)
        for employee in employees:
            self.put_employee(employee)

    def put_employee(self, record: EmployeeRecord) -> EmployeeRecord:
        raise NotImplementedError


class InMemoryLaborStore(LaborStore):
    """Dictionary-backed store; seeds the default centers on first use."""

    def __init__(self, employees=None, centers=None):
        self._employees: Dict[str, EmployeeRecord] = {}
        self._centers: Dict[str, RevenueCenterRecord] = {}
        for record in employees or []:
            self._employees[record.id] = record
        for record in centers or []:
            self._centers[record.name] = record

    def _seed_centers(self):
        if self._centers:
            return
        for center in default_revenue_centers():
            self.create_revenue_center(center['name'], center.get('sales', 0), center.get('divisor'))

    def list_employees(self):
        return sorted(
            self._employees.values(),
            key=lambda e: parse_timestamp(e.start_time) or EARLIEST,
        )

    def get_employee(self, employee_id):
        return self._employees.get(str(employee_id))

    def create_employee(self, name, start_time, revenue_center):
        record = EmployeeRecord(
            id=str(uuid.uuid4()),
            name=name,
            start_time=start_time,
            revenue_center=revenue_center,
            end_time=None,
            unpaid_break_minutes=0,
            is_active=True,
        )
        self._employees[record.id] = record
        return record

    def update_employee(self, employee_id, **updates):
        record = self._employees.get(str(employee_id))
        if record is None:
            return None
        changes = {k: v for k, v in updates.items() if k in EMPLOYEE_UPDATE_FIELDS}
        if 'is_active' in changes:
            changes['is_active'] = to_active_flag(changes['is_active'])
        record = replace(record, **changes)
        self._employees[record.id] = record
        return record

    def delete_employee(self, employee_id):
        return self._employees.pop(str(employee_id), None) is not None

    def put_employee(self, record):
        if not record.id:
            record = replace(record, id=str(uuid.uuid4()))
        self._employees[record.id] = record
        return record

    def list_revenue_centers(self):
        self._seed_centers()
        return list(self._centers.values())

    def find_revenue_center(self, name):
        return self._centers.get(name)

    def create_revenue_center(self, name, sales=0, divisor=None):
        record = RevenueCenterRecord(
            id=str(uuid.uuid4()),
            name=name,
            sales=sales or 0,
            divisor=default_divisor() if divisor is None else divisor,
        )
        self._centers[name] = record
        return record

    def update_revenue_center(self, name, **updates):
        self._seed_centers()
        record = self._centers.get(name)
        if record is None:
            return None
        changes = {k: v for k, v in updates.items() if k in CENTER_UPDATE_FIELDS}
        record = replace(record, **changes)
        self._centers[name] = record
        return record


class DjangoLaborStore(LaborStore):
    """ORM-backed store over timeclock.Employee and reporting.RevenueCenter."""

    def _employees(self):
        from timeclock.models import Employee
        return Employee.objects

    def _centers(self):
        from reporting.models import RevenueCenter
        return RevenueCenter.objects

    def list_employees(self):
        return [EmployeeRecord.from_model(e) for e in self._employees().order_by('start_time')]

    def list_active_employees(self):
        return [
            EmployeeRecord.from_model(e)
            for e in self._employees().filter(is_active=True).order_by('start_time')
        ]

    def list_employees_by_center(self, center_name):
        qs = self._employees().filter(revenue_center=center_name, is_active=True)
        return [EmployeeRecord.from_model(e) for e in qs.order_by('start_time')]

    def list_all_employees_by_center(self, center_name):
        qs = self._employees().filter(revenue_center=center_name)
        return [EmployeeRecord.from_model(e) for e in qs.order_by('start_time')]

    def get_employee(self, employee_id):
        try:
            employee = self._employees().filter(id=employee_id).first()
        except (ValidationError, ValueError):
            # Malformed UUIDs
            return None
        return EmployeeRecord.from_model(employee) if employee else None

    def create_employee(self, name, start_time, revenue_center):
        employee = self._employees().create(
            name=name,
            start_time=start_time,
            revenue_center=revenue_center,
        )
        logger.debug("Stored check-in %s", employee.id)
        return EmployeeRecord.from_model(employee)

    def update_employee(self, employee_id, **updates):
        from timeclock.models import Employee
        try:
            employee = Employee.objects.get(id=employee_id)
        except (Employee.DoesNotExist, ValidationError, ValueError):
            return None
        changes = {k: v for k, v in updates.items() if k in EMPLOYEE_UPDATE_FIELDS}
        if 'is_active' in changes:
            changes['is_active'] = to_active_flag(changes['is_active'])
        for field, value in changes.items():
            setattr(employee, field, value)
        employee.save(update_fields=[*changes, 'updated_at'] if changes else None)
        return EmployeeRecord.from_model(employee)

    def delete_employee(self, employee_id):
        try:
            deleted, _ = self._employees().filter(id=employee_id).delete()
        except (ValidationError, ValueError):
            return False
        return deleted > 0

    def put_employee(self, record):
        from timeclock.models import Employee
        defaults = {
            'name': record.name,
            'start_time': record.start_time,
            'end_time': record.end_time,
            'revenue_center': record.revenue_center,
            'unpaid_break_minutes': record.unpaid_break_minutes or 0,
            'is_active': to_active_flag(record.is_active),
        }
        if record.id:
            try:
                employee, _ = Employee.objects.update_or_create(id=uuid.UUID(record.id), defaults=defaults)
                return EmployeeRecord.from_model(employee)
            except ValueError:
                pass
        employee = Employee.objects.create(**defaults)
        return EmployeeRecord.from_model(employee)

    def list_revenue_centers(self):
        centers = self._centers()
        centers.ensure_defaults()
        return [RevenueCenterRecord.from_model(c) for c in centers.order_by('name')]

    def get_revenue_center(self, name):
        centers = self._centers()
        centers.ensure_defaults()
        center = centers.filter(name=name).first()
        return RevenueCenterRecord.from_model(center) if center else None

    def find_revenue_center(self, name):
        center = self._centers().filter(name=name).first()
        return RevenueCenterRecord.from_model(center) if center else None

    def create_revenue_center(self, name, sales=0, divisor=None):
        center = self._centers().create(
            name=name,
            sales=sales or 0,
            divisor=default_divisor() if divisor is None else divisor,
        )
        return RevenueCenterRecord.from_model(center)

    def update_revenue_center(self, name, **updates):
        centers = self._centers()
        centers.ensure_defaults()
        center = centers.filter(name=name).first()
        if center is None:
            return None
        changes = {k: v for k, v in updates.items() if k in CENTER_UPDATE_FIELDS}
        for field, value in changes.items():
            setattr(center, field, value)
        center.save()
        logger.info("Updated revenue center %s: %s", name, changes)
        return RevenueCenterRecord.from_model(center)


def get_store() -> LaborStore:
    """The process-wide instance of the configured store backend."""
    path = getattr(settings, 'LABOR_STORE_BACKEND', 'core.store.DjangoLaborStore')
    if path not in _stores:
        _stores[path] = import_string(path)()
    return _stores[path]


@receiver(setting_changed)
def reset_stores(setting, **kwargs):
    if setting in ('LABOR_STORE_BACKEND', 'DEFAULT_REVENUE_CENTERS'):
        _stores.clear()
