from django.contrib import admin
from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ["name", "revenue_center", "start_time", "end_time", "unpaid_break_minutes", "is_active"]
    list_filter = ["revenue_center", "is_active"]
    search_fields = ["name"]
