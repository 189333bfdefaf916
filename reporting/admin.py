from django.contrib import admin
from .models import RevenueCenter


@admin.register(RevenueCenter)
class RevenueCenterAdmin(admin.ModelAdmin):
    list_display = ["name", "sales", "divisor", "updated_at"]
    search_fields = ["name"]
