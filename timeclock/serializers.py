from django.conf import settings
from django.utils import timezone
from rest_framework import serializers

from core.records import active_flag_string, to_active_flag
from core.time_utils import employee_hours
from core.timezone_utils import parse_time_of_day, resolve_wall_clock

ACTIVE_CHOICES = ('true', 'false')


class ActiveFlagField(serializers.Field):
    """Booleans travel as the strings "true"/"false"."""

    def to_representation(self, value):
        return active_flag_string(value)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return data
        if str(data).strip().lower() not in ACTIVE_CHOICES:
            raise serializers.ValidationError('Must be "true" or "false".')
        return to_active_flag(data)


class WallClockDateTimeField(serializers.DateTimeField):
    """Accepts an ISO timestamp or a bare HH:MM meaning today in the labor timezone."""

    def to_internal_value(self, value):
        if isinstance(value, str) and parse_time_of_day(value) is not None:
            now = self.context.get('now') or timezone.now()
            return resolve_wall_clock(value, now)
        return super().to_internal_value(value)


class EmployeeSerializer(serializers.Serializer):
    """Read-only view of an employee record with live hours."""
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    start_time = serializers.DateTimeField(read_only=True)
    end_time = serializers.DateTimeField(read_only=True, allow_null=True)
    revenue_center = serializers.CharField(read_only=True)
    unpaid_break_minutes = serializers.FloatField(read_only=True)
    is_active = ActiveFlagField(read_only=True)
    hours_worked = serializers.SerializerMethodField()

    def get_hours_worked(self, obj) -> float:
        now = self.context.get('now') or timezone.now()
        return round(employee_hours(obj, now, settings.LABOR_OVERNIGHT_CORRECTION), 2)


class EmployeeQuerySerializer(serializers.Serializer):
    is_active = serializers.ChoiceField(choices=ACTIVE_CHOICES, required=False)
    revenue_center = serializers.CharField(required=False)
    name = serializers.CharField(required=False, help_text='Case-insensitive substring')


class CheckInSerializer(serializers.Serializer):
    """Check-in only takes who, when and where; everything else is system-assigned."""
    name = serializers.CharField(max_length=255, allow_blank=False, trim_whitespace=True)
    start_time = WallClockDateTimeField()
    revenue_center = serializers.CharField(max_length=100, allow_blank=False, trim_whitespace=True)


class EmployeeUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=False)
    start_time = WallClockDateTimeField(required=False)
    end_time = WallClockDateTimeField(required=False, allow_null=True)
    unpaid_break_minutes = serializers.FloatField(required=False, min_value=0)

    def validate(self, attrs):
        record = self.instance
        if record is not None and not to_active_flag(record.is_active):
            if 'end_time' in attrs and attrs['end_time'] is None:
                raise serializers.ValidationError({
                    'end_time': 'A checked-out shift needs an end time; check the employee in again instead.'
                })
        return attrs


class CheckoutSerializer(serializers.Serializer):
    end_time = WallClockDateTimeField(required=False, allow_null=True)
