"""
URL configuration for the laborboard project.

Employee check-in/out lives under /api/employees/, revenue centers under
/api/revenue-centers/ and the computed labor metrics under /api/dashboard/.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('timeclock.urls')),            # Check-in / checkout
    path('api/', include('reporting.urls')),            # Sales and divisors
    path('api/dashboard/', include('dashboard.urls')),  # Labor metrics
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
]
