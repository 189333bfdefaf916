from django.core.validators import MinValueValidator
from django.db import models
import uuid


class Employee(models.Model):
    """
    One shift for one staff member, checked in against a revenue center.

    ``end_time``, ``unpaid_break_minutes`` and ``is_active`` are assigned by
    the system at check-in and only change through edit/checkout.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    # Soft reference to RevenueCenter.name
    revenue_center = models.CharField(max_length=100, db_index=True)
    unpaid_break_minutes = models.FloatField(default=0, validators=[MinValueValidator(0)])
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'employees'
        ordering = ['start_time']

    def __str__(self):
        state = 'active' if self.is_active else 'checked out'
        return f"{self.name} - {self.revenue_center} ({state})"

    def check_out(self, end_time):
        self.end_time = end_time
        self.is_active = False
        self.save(update_fields=['end_time', 'is_active', 'updated_at'])
