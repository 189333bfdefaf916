"""
Immutable snapshots of the two record types the labor engine reads.

The engine never sees ORM rows directly; stores hand out these records so a
computation pass works over a fixed view of the data.
"""
from dataclasses import dataclass
from typing import Any, Optional

from .time_utils import parse_timestamp, to_number


def to_active_flag(value) -> bool:
    """Accept a bool or the persisted "true"/"false" strings."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == 'true'


def active_flag_string(value) -> str:
    return 'true' if to_active_flag(value) else 'false'


def _isoformat(value) -> Optional[str]:
    parsed = parse_timestamp(value)
    return parsed.isoformat() if parsed else None


@dataclass(frozen=True)
class EmployeeRecord:
    id: str
    name: str
    start_time: Any
    revenue_center: str
    end_time: Any = None
    unpaid_break_minutes: Any = 0
    is_active: bool = True

    @classmethod
    def from_model(cls, obj) -> 'EmployeeRecord':
        return cls(
            id=str(obj.id),
            name=obj.name,
            start_time=obj.start_time,
            revenue_center=obj.revenue_center,
            end_time=obj.end_time,
            unpaid_break_minutes=obj.unpaid_break_minutes,
            is_active=to_active_flag(obj.is_active),
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'EmployeeRecord':
        """Build from an export payload; camelCase and snake_case keys both work."""
        def pick(snake, camel, default=None):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        end_time = pick('end_time', 'endTime')
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            start_time=parse_timestamp(pick('start_time', 'startTime')),
            revenue_center=str(pick('revenue_center', 'revenueCenter', '')),
            end_time=parse_timestamp(end_time) if end_time else None,
            unpaid_break_minutes=max(0.0, to_number(pick('unpaid_break_minutes', 'unpaidBreakMinutes', 0))),
            is_active=to_active_flag(pick('is_active', 'isActive', 'true')),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'startTime': _isoformat(self.start_time),
            'endTime': _isoformat(self.end_time),
            'revenueCenter': self.revenue_center,
            'unpaidBreakMinutes': to_number(self.unpaid_break_minutes),
            'isActive': active_flag_string(self.is_active),
        }


@dataclass(frozen=True)
class RevenueCenterRecord:
    id: str
    name: str
    sales: Any = 0
    divisor: Any = 35

    @classmethod
    def from_model(cls, obj) -> 'RevenueCenterRecord':
        return cls(
            id=str(obj.id),
            name=obj.name,
            sales=float(obj.sales),
            divisor=float(obj.divisor),
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'RevenueCenterRecord':
        """Missing or non-positive divisors come back as None so stores keep their own."""
        divisor = to_number(data.get('divisor'))
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            sales=max(0.0, to_number(data.get('sales'))),
            divisor=divisor if divisor > 0 else None,
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'sales': to_number(self.sales),
            'divisor': to_number(self.divisor),
        }
